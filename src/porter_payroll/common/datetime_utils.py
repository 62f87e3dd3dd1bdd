from __future__ import annotations

import calendar
import re
from datetime import date, datetime

_MONTH_RE = re.compile(r"^(\d{4})-(0[1-9]|1[0-2])$")
_DATE_PREFIX_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})")


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def to_calendar_day(value: str | date | datetime) -> date:
    """Normalize a trip date to a timezone-free calendar day.

    A leading ``YYYY-MM-DD`` is taken literally, with or without a time part,
    so "2025-03-05T23:30:00Z" stays the 5th whatever the server timezone.
    Only strings without that prefix are parsed as ISO timestamps and, if they
    carry an offset, converted to server local time.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = str(value).strip()
    m = _DATE_PREFIX_RE.match(text)
    if m:
        return date(int(m.group(1)), int(m.group(2)), int(m.group(3)))

    parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone()
    return parsed.date()


def is_month(value: str) -> bool:
    return bool(_MONTH_RE.match(value or ""))


def parse_month(value: str) -> tuple[int, int]:
    """Split YYYY-MM into (year, month). Caller validates the format first."""
    m = _MONTH_RE.match(value or "")
    if not m:
        raise ValueError(f"Invalid month: {value!r}")
    return int(m.group(1)), int(m.group(2))


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last calendar day of a month (inclusive)."""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def month_label(year: int, month: int) -> str:
    return f"{year:04d}-{month:02d}"


def month_name(year: int, month: int) -> str:
    """e.g. 'June 2025'."""
    return f"{calendar.month_name[month]} {year}"


def format_day_month_year(value: date | None) -> str:
    """DD/MM/YYYY as printed on generated documents."""
    if value is None:
        return ""
    return value.strftime("%d/%m/%Y")
