from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Sequence

from ..attendance.model import AttendanceEntry
from ..core.refs import PorterRef, carrier_ref_to_dict, location_ref_to_dict


@dataclass(frozen=True)
class Payment:
    """Cumulative amount paid to one porter for one month."""

    porter_id: int
    year: int
    month: int
    amount: float = 0.0
    is_paid: bool = False
    paid_at: Optional[datetime] = None
    notes: str = ""
    updated_by: Optional[int] = None


@dataclass(frozen=True)
class PorterPayroll:
    porter: PorterRef
    total_salary: float
    total_trips: int
    trips: Sequence[AttendanceEntry] = field(default_factory=tuple)


@dataclass(frozen=True)
class MonthlyPayroll:
    month: str
    rows: Sequence[PorterPayroll]

    @property
    def total_payroll(self) -> float:
        return float(sum(r.total_salary for r in self.rows))

    @property
    def total_trips(self) -> int:
        return sum(r.total_trips for r in self.rows)


@dataclass(frozen=True)
class MonthSummary:
    month: str
    total_cost: float
    total_trips: int
    unique_porters: int


def payment_to_dict(p: Optional[Payment]) -> dict:
    if p is None:
        return {"isPaid": False, "amount": 0, "paidAt": None, "notes": ""}
    return {
        "isPaid": p.is_paid,
        "amount": p.amount,
        "paidAt": p.paid_at.isoformat() if p.paid_at else None,
        "notes": p.notes,
    }


def trip_to_dict(e: AttendanceEntry) -> dict:
    return {
        "id": e.attendance_id,
        "date": e.work_date.isoformat(),
        "cost": e.computed_cost,
        "carrier": carrier_ref_to_dict(e.carrier),
        "from": location_ref_to_dict(e.location_from),
        "to": location_ref_to_dict(e.location_to),
        "task": e.task,
    }


def payroll_row_to_dict(row: PorterPayroll) -> dict:
    return {
        "porterId": row.porter.porter_id,
        "porterUid": row.porter.uid,
        "porterName": row.porter.name,
        "designation": row.porter.designation,
        "totalSalary": row.total_salary,
        "totalTrips": row.total_trips,
    }


def monthly_payroll_to_dict(mp: MonthlyPayroll) -> dict:
    return {
        "month": mp.month,
        "payroll": [payroll_row_to_dict(r) for r in mp.rows],
        "summary": {
            "totalPorters": len(mp.rows),
            "totalPayroll": mp.total_payroll,
            "totalTrips": mp.total_trips,
        },
    }


def month_summary_to_dict(s: MonthSummary) -> dict:
    return {
        "month": s.month,
        "totalCost": s.total_cost,
        "totalTrips": s.total_trips,
        "uniquePorters": s.unique_porters,
    }
