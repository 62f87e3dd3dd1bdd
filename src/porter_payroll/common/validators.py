"""Pure input validation.

Validators turn raw request payloads into typed parameters or raise a single
``ValidationError`` listing every offending field. Nothing here touches storage.
"""
from __future__ import annotations

import math
import re
from datetime import date
from typing import Any, Iterable, Mapping, Optional

from ..core.exceptions import FieldError, ValidationError
from .datetime_utils import is_month, to_calendar_day

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}(T\d{2}:\d{2}(:\d{2}(\.\d{1,6})?)?(Z|[+-]\d{2}:?\d{2})?)?$")

_MISSING = object()


def parse_id(value: Any) -> Optional[int]:
    """Return a positive integer id, or None when the value is not one."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    if isinstance(value, str) and value.strip().isdigit():
        parsed = int(value.strip())
        return parsed if parsed > 0 else None
    return None


class PayloadChecker:
    """Collects field errors while reading values out of a payload."""

    def __init__(self, payload: Optional[Mapping[str, Any]]):
        self._payload = payload if isinstance(payload, Mapping) else {}
        self.errors: list[FieldError] = []

    def has(self, name: str) -> bool:
        return self._payload.get(name) is not None

    def _get(self, name: str, required: bool):
        value = self._payload.get(name, _MISSING)
        if value is _MISSING or value is None:
            if required:
                self.errors.append(FieldError(name, "Required"))
            return _MISSING
        return value

    def identifier(self, name: str, *, required: bool = True, message: str = "Invalid ID") -> Optional[int]:
        value = self._get(name, required)
        if value is _MISSING:
            return None
        parsed = parse_id(value)
        if parsed is None:
            self.errors.append(FieldError(name, message))
        return parsed

    def string(
        self,
        name: str,
        *,
        required: bool = True,
        min_len: int = 0,
        strip: bool = True,
        message: Optional[str] = None,
    ) -> Optional[str]:
        value = self._get(name, required)
        if value is _MISSING:
            return None
        if not isinstance(value, str):
            self.errors.append(FieldError(name, "Expected string"))
            return None
        if strip:
            value = value.strip()
        if len(value) < min_len:
            self.errors.append(FieldError(name, message or f"Must be at least {min_len} characters"))
            return None
        return value

    def number(self, name: str, *, required: bool = True, minimum: Optional[float] = None) -> Optional[float]:
        value = self._get(name, required)
        if value is _MISSING:
            return None
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            self.errors.append(FieldError(name, "Expected number"))
            return None
        try:
            number = float(value)
        except OverflowError:
            number = math.inf
        if not math.isfinite(number):
            self.errors.append(FieldError(name, "Must be a finite number"))
            return None
        if minimum is not None and number < minimum:
            self.errors.append(FieldError(name, f"Must be at least {minimum:g}"))
            return None
        return number

    def boolean(self, name: str, *, required: bool = False) -> Optional[bool]:
        value = self._get(name, required)
        if value is _MISSING:
            return None
        if not isinstance(value, bool):
            self.errors.append(FieldError(name, "Expected boolean"))
            return None
        return value

    def choice(self, name: str, choices: Iterable[str], *, required: bool = True) -> Optional[str]:
        allowed = list(choices)
        value = self._get(name, required)
        if value is _MISSING:
            return None
        if value not in allowed:
            self.errors.append(FieldError(name, f"{value!r} is not one of: {', '.join(allowed)}"))
            return None
        return value

    def month(self, name: str, *, required: bool = True, message: str = "Invalid month format (use YYYY-MM)") -> Optional[str]:
        value = self._get(name, required)
        if value is _MISSING:
            return None
        if not isinstance(value, str) or not is_month(value):
            self.errors.append(FieldError(name, message))
            return None
        return value

    def calendar_day(self, name: str, *, required: bool = True) -> Optional[date]:
        value = self._get(name, required)
        if value is _MISSING:
            return None
        if not isinstance(value, str) or not _DATE_RE.match(value):
            self.errors.append(FieldError(name, "Invalid date format (expected YYYY-MM-DD or ISO datetime)"))
            return None
        try:
            return to_calendar_day(value)
        except ValueError:
            self.errors.append(FieldError(name, "Invalid date"))
            return None

    def email(self, name: str, *, required: bool = True) -> Optional[str]:
        value = self.string(name, required=required)
        if value is None:
            return None
        if not _EMAIL_RE.match(value):
            self.errors.append(FieldError(name, "Invalid email address"))
            return None
        return value.lower()

    def raise_if_errors(self, message: str = "Validation failed") -> None:
        if self.errors:
            raise ValidationError(message, self.errors)


def require_month(value: Optional[str], field_name: str = "month") -> str:
    checker = PayloadChecker({field_name: value})
    month = checker.month(field_name, message="Month parameter is required (YYYY-MM)")
    checker.raise_if_errors()
    return month  # type: ignore[return-value]


def require_id(value: Any, field_name: str = "id") -> int:
    parsed = parse_id(value)
    if parsed is None:
        raise ValidationError("Validation failed", [FieldError(field_name, "Invalid ID")])
    return parsed
