from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping, Optional

from ..common.datetime_utils import month_bounds, parse_month
from ..common.validators import PayloadChecker, parse_id
from ..core.exceptions import FieldError, ValidationError
from .repository import AttendanceFilter

# Payload key -> column for the three fields that decide the route cost.
ROUTE_FIELDS = {
    "carrier": "carrier_id",
    "locationFrom": "location_from_id",
    "locationTo": "location_to_id",
}


@dataclass(frozen=True)
class NewAttendance:
    work_date: date
    porter_id: int
    carrier_id: int
    location_from_id: int
    location_to_id: int
    task: str = ""


def parse_new_attendance(payload: dict) -> NewAttendance:
    c = PayloadChecker(payload)
    work_date = c.calendar_day("date")
    carrier_id = c.identifier("carrier", message="Invalid carrier ID")
    porter_id = c.identifier("porter", message="Invalid porter ID")
    from_id = c.identifier("locationFrom", message="Invalid from location ID")
    to_id = c.identifier("locationTo", message="Invalid to location ID")
    task = c.string("task", required=False)
    c.raise_if_errors()
    return NewAttendance(
        work_date=work_date,
        porter_id=porter_id,
        carrier_id=carrier_id,
        location_from_id=from_id,
        location_to_id=to_id,
        task=task or "",
    )


def parse_attendance_changes(payload: dict) -> dict[str, Any]:
    """Only the fields present in the payload end up in the result."""
    c = PayloadChecker(payload)
    changes: dict[str, Any] = {}
    if c.has("date"):
        changes["work_date"] = c.calendar_day("date")
    if c.has("porter"):
        changes["porter_id"] = c.identifier("porter", message="Invalid porter ID")
    for key, column in ROUTE_FIELDS.items():
        if c.has(key):
            changes[column] = c.identifier(key)
    if c.has("task"):
        changes["task"] = c.string("task")
    c.raise_if_errors()
    return changes


def _day(args: Mapping[str, Any], name: str) -> date:
    c = PayloadChecker(args)
    value = c.calendar_day(name)
    c.raise_if_errors()
    return value


def parse_attendance_filter(args: Mapping[str, Any]) -> AttendanceFilter:
    """``date`` wins over ``month``, which wins over ``startDate``+``endDate``."""
    start: Optional[date] = None
    end: Optional[date] = None

    if args.get("date"):
        start = end = _day(args, "date")
    elif args.get("month"):
        c = PayloadChecker(args)
        month = c.month("month")
        c.raise_if_errors()
        start, end = month_bounds(*parse_month(month))
    elif args.get("startDate") and args.get("endDate"):
        start, end = _day(args, "startDate"), _day(args, "endDate")

    porter_id = None
    if args.get("porterId"):
        porter_id = parse_id(args.get("porterId"))
        if porter_id is None:
            raise ValidationError("Validation failed", [FieldError("porterId", "Invalid ID")])

    return AttendanceFilter(start=start, end=end, porter_id=porter_id)
