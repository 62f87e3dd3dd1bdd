from __future__ import annotations

from dataclasses import dataclass

from ..common.validators import PayloadChecker
from ..core.exceptions import ValidationError

_REQUIRED = {
    "brigade": "Brigade is required",
    "unitName": "Unit name is required",
    "financialYear": "Financial year is required",
    "brigadeName": "Brigade group is required",
    "letterNo": "Letter number is required",
    "date": "Date is required",
}


@dataclass(frozen=True)
class DocumentFields:
    brigade: str
    unit_name: str
    financial_year: str
    brigade_name: str
    letter_no: str
    date: str
    remarks: str = ""


def parse_document_fields(payload: dict) -> DocumentFields:
    if not payload:
        raise ValidationError("No data provided. Please send document form data in request body.")
    c = PayloadChecker(payload)
    values = {key: c.string(key, min_len=1, message=message) for key, message in _REQUIRED.items()}
    remarks = c.string("remarks", required=False, strip=False)
    c.raise_if_errors()
    return DocumentFields(
        brigade=values["brigade"],
        unit_name=values["unitName"],
        financial_year=values["financialYear"],
        brigade_name=values["brigadeName"],
        letter_no=values["letterNo"],
        date=values["date"],
        remarks=remarks or "",
    )
