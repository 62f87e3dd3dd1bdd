from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Optional, Protocol, Sequence

from ..common.pagination import Page, PageRequest
from .model import AttendanceEntry, DaySummary


@dataclass(frozen=True)
class AttendanceFilter:
    start: Optional[date] = None
    end: Optional[date] = None
    porter_id: Optional[int] = None


@dataclass(frozen=True)
class PeriodStats:
    entry_count: int
    total_cost: float
    porter_count: int


class AttendanceRepository(Protocol):
    def get_by_id(self, attendance_id: int) -> Optional[AttendanceEntry]:
        raise NotImplementedError

    def list(self, *, filters: AttendanceFilter, page: PageRequest) -> Page[AttendanceEntry]:
        """Newest work date first."""

        raise NotImplementedError

    def list_between(self, start: date, end: date, *, porter_id: Optional[int] = None) -> Sequence[AttendanceEntry]:
        """Every entry with start <= work_date <= end, oldest first."""

        raise NotImplementedError

    def create(
        self,
        *,
        work_date: date,
        porter_id: int,
        carrier_id: int,
        location_from_id: int,
        location_to_id: int,
        task: str,
        commute_cost_id: int,
        computed_cost: float,
        created_by: Optional[int],
    ) -> int:
        raise NotImplementedError

    def update(self, attendance_id: int, changes: dict[str, Any]) -> bool:
        raise NotImplementedError

    def delete(self, attendance_id: int) -> bool:
        raise NotImplementedError

    def daily_summary(self, start: date, end: date) -> Sequence[DaySummary]:
        raise NotImplementedError

    def period_stats(self, start: date, end: date) -> PeriodStats:
        raise NotImplementedError

    def distinct_porter_count(self) -> int:
        raise NotImplementedError

    def recent(self, limit: int) -> Sequence[AttendanceEntry]:
        """Most recently created entries."""

        raise NotImplementedError
