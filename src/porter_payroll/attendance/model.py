from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.refs import (
    CarrierRef,
    LocationRef,
    PorterRef,
    UserRef,
    carrier_ref_to_dict,
    location_ref_to_dict,
    porter_ref_to_dict,
    user_ref_to_dict,
)


@dataclass(frozen=True)
class AttendanceEntry:
    """One trip by one porter on one calendar day, with its references resolved.

    ``computed_cost`` is the route cost copied at creation (or at the last
    route change). It is never recomputed from the commute-cost table.
    """

    attendance_id: int
    work_date: date
    porter: PorterRef
    carrier: CarrierRef
    location_from: LocationRef
    location_to: LocationRef
    computed_cost: float
    task: str = ""
    commute_cost_id: Optional[int] = None
    created_by: Optional[UserRef] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class DaySummary:
    day: date
    count: int
    porter_count: int
    total_cost: float


def attendance_to_dict(e: AttendanceEntry) -> dict:
    return {
        "id": e.attendance_id,
        "date": e.work_date.isoformat(),
        "porter": porter_ref_to_dict(e.porter),
        "carrier": carrier_ref_to_dict(e.carrier),
        "locationFrom": location_ref_to_dict(e.location_from),
        "locationTo": location_ref_to_dict(e.location_to),
        "task": e.task,
        "commuteCostId": e.commute_cost_id,
        "computedCost": e.computed_cost,
        "createdBy": user_ref_to_dict(e.created_by),
        "createdAt": e.created_at.isoformat() if e.created_at else None,
        "updatedAt": e.updated_at.isoformat() if e.updated_at else None,
    }
