"""Literal ``{{key}}`` substitution for the works document template."""
from __future__ import annotations

import html

from ..common.datetime_utils import format_day_month_year, to_calendar_day
from .schemas import DocumentFields


def format_document_date(value: str) -> str:
    """DD/MM/YYYY, or "" when the value is not a date."""
    try:
        return format_day_month_year(to_calendar_day(value))
    except ValueError:
        return ""


def placeholder_values(fields: DocumentFields) -> dict[str, str]:
    return {
        "brigade": fields.brigade,
        "unitName": fields.unit_name,
        "unit_name": fields.unit_name,
        "financialYear": fields.financial_year,
        "brigadeName": fields.brigade_name,
        "letterNo": fields.letter_no,
        "date": format_document_date(fields.date),
        "remarks": fields.remarks,
    }


def fill_template(template: str, fields: DocumentFields) -> str:
    # Values are HTML-escaped.
    out = template
    for key, value in placeholder_values(fields).items():
        out = out.replace("{{" + key + "}}", html.escape(value or ""))
    return out
