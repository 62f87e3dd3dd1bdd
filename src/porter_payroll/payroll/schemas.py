from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..common.datetime_utils import parse_month
from ..common.validators import PayloadChecker
from ..core.constants import MIN_PAYMENT_YEAR
from ..core.exceptions import FieldError, ValidationError


@dataclass(frozen=True)
class PaymentUpdate:
    month: str
    amount: Optional[float] = None
    increment: Optional[float] = None
    notes: str = ""

    @property
    def year_month(self) -> tuple[int, int]:
        return parse_month(self.month)


@dataclass(frozen=True)
class MonthRange:
    start: tuple[int, int]
    end: tuple[int, int]


def parse_payment_update(payload: dict) -> PaymentUpdate:
    """``amount`` is the new cumulative total; ``increment`` is added to the stored one."""
    c = PayloadChecker(payload)
    month = c.month("month", message="Month parameter is required (YYYY-MM)")
    amount = c.number("amount", required=False, minimum=0)
    increment = c.number("increment", required=False, minimum=0)
    notes = c.string("notes", required=False)
    if c.has("amount") and c.has("increment"):
        c.errors.append(FieldError("increment", "Send either amount or increment, not both"))
    if month and parse_month(month)[0] < MIN_PAYMENT_YEAR:
        c.errors.append(FieldError("month", f"Year must be {MIN_PAYMENT_YEAR} or later"))
    c.raise_if_errors()

    if increment is None and amount is None:
        amount = 0.0
    return PaymentUpdate(month=month, amount=amount, increment=increment, notes=notes or "")


def parse_month_range(args: Mapping[str, Any]) -> MonthRange:
    if not args.get("startMonth") or not args.get("endMonth"):
        raise ValidationError("Start and end month parameters are required (YYYY-MM)")
    c = PayloadChecker(args)
    start = c.month("startMonth", message="Invalid start month format")
    end = c.month("endMonth", message="Invalid end month format")
    c.raise_if_errors()
    return MonthRange(start=parse_month(start), end=parse_month(end))
