from __future__ import annotations

from typing import Sequence

from ...attendance.model import AttendanceEntry
from .base import PayrollCalculator


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: pay is the sum of the cost snapshots; one trip row counts as one day."""

    def total_salary(self, entries: Sequence[AttendanceEntry]) -> float:
        return float(sum(e.computed_cost for e in entries))

    def per_day_rate(self, total: float, days: int) -> float:
        # round() is half-to-even.
        return round(total / days) if days > 0 else 0
