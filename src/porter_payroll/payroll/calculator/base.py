from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from ...attendance.model import AttendanceEntry


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def total_salary(self, entries: Sequence[AttendanceEntry]) -> float:
        raise NotImplementedError

    @abstractmethod
    def per_day_rate(self, total: float, days: int) -> float:
        raise NotImplementedError
