from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Optional, Sequence

from ..activity.service import ActivityLogger
from ..attendance.model import AttendanceEntry
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import month_bounds, month_label, now_local
from ..core.enums import ActivityType
from ..core.exceptions import NotFoundError
from ..core.refs import PorterRef
from ..porters.model import Porter
from ..porters.repository import PorterRepository
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import MonthlyPayroll, MonthSummary, Payment, PorterPayroll
from .repository import PaymentRepository
from .schemas import MonthRange, PaymentUpdate


@dataclass(frozen=True)
class PorterMonth:
    porter: Porter
    month: str
    payroll: PorterPayroll
    payment: Optional[Payment]


class PayrollService:
    """Monthly payroll computed on demand from the attendance cost snapshots."""

    def __init__(
        self,
        entries: AttendanceRepository,
        porters: PorterRepository,
        payments: PaymentRepository,
        activity: ActivityLogger,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._entries = entries
        self._porters = porters
        self._payments = payments
        self._activity = activity
        self._calculator = calculator or StandardPayrollCalculator()

    @property
    def calculator(self) -> PayrollCalculator:
        return self._calculator

    def monthly(self, year: int, month: int) -> MonthlyPayroll:
        """One row per porter with trips in the month, sorted by porter name."""
        entries = self._entries.list_between(*month_bounds(year, month))
        return MonthlyPayroll(month=month_label(year, month), rows=self.group_by_porter(entries))

    def group_by_porter(self, entries: Sequence[AttendanceEntry]) -> list[PorterPayroll]:
        grouped: dict[int, list[AttendanceEntry]] = defaultdict(list)
        refs: dict[int, PorterRef] = {}
        for e in entries:
            grouped[e.porter.porter_id].append(e)
            refs[e.porter.porter_id] = e.porter

        rows = [
            PorterPayroll(
                porter=refs[porter_id],
                total_salary=self._calculator.total_salary(trips),
                total_trips=len(trips),
                trips=tuple(trips),
            )
            for porter_id, trips in grouped.items()
        ]
        rows.sort(key=lambda r: r.porter.name)
        return rows

    def for_porter(self, porter_id: int, year: int, month: int) -> PorterMonth:
        porter = self._require_porter(porter_id)
        trips = self._entries.list_between(*month_bounds(year, month), porter_id=porter_id)
        payroll = PorterPayroll(
            porter=PorterRef(porter.porter_id, porter.uid, porter.name, porter.designation),
            total_salary=self._calculator.total_salary(trips),
            total_trips=len(trips),
            trips=tuple(trips),
        )
        return PorterMonth(
            porter=porter,
            month=month_label(year, month),
            payroll=payroll,
            payment=self._payments.get(porter_id, year, month),
        )

    def update_payment(self, porter_id: int, params: PaymentUpdate, *, user_id: Optional[int] = None) -> Payment:
        """Upsert the month's payment; paid_at is stamped on every call."""
        porter = self._require_porter(porter_id)
        year, month = params.year_month
        paid_at = now_local()

        if params.increment is not None:
            payment = self._payments.add_amount(
                porter_id=porter_id,
                year=year,
                month=month,
                increment=params.increment,
                notes=params.notes,
                paid_at=paid_at,
                updated_by=user_id,
            )
        else:
            payment = self._payments.set_amount(
                porter_id=porter_id,
                year=year,
                month=month,
                amount=params.amount or 0.0,
                notes=params.notes,
                paid_at=paid_at,
                updated_by=user_id,
            )

        self._activity.log(
            ActivityType.PAYROLL_PAID if payment.is_paid else ActivityType.PAYROLL_UNPAID,
            f"Payment updated for {porter.name} for {params.month}: Total paid {payment.amount:g}",
            user_id,
            {"porterId": porter_id, "month": params.month, "totalPaid": payment.amount},
        )
        return payment

    def summary(self, months: MonthRange) -> list[MonthSummary]:
        """Totals per calendar month in [start, end], ascending by "YYYY-MM"."""
        start = month_bounds(*months.start)[0]
        end = month_bounds(*months.end)[1]
        if start > end:
            return []

        buckets: dict[str, list[AttendanceEntry]] = defaultdict(list)
        for e in self._entries.list_between(start, end):
            buckets[month_label(e.work_date.year, e.work_date.month)].append(e)

        return [
            MonthSummary(
                month=label,
                total_cost=self._calculator.total_salary(trips),
                total_trips=len(trips),
                unique_porters=len({e.porter.porter_id for e in trips}),
            )
            for label, trips in sorted(buckets.items())
        ]

    def _require_porter(self, porter_id: int) -> Porter:
        porter = self._porters.get_by_id(porter_id)
        if not porter:
            raise NotFoundError("Porter not found")
        return porter

