from __future__ import annotations

from typing import Any, Optional, Sequence

from ..activity.service import ActivityLogger
from ..common.datetime_utils import month_bounds
from ..common.pagination import Page, PageRequest
from ..commute_costs.service import CommuteCostService
from ..core.enums import ActivityType
from ..core.exceptions import NotFoundError
from ..porters.repository import PorterRepository
from .model import AttendanceEntry, DaySummary
from .repository import AttendanceFilter, AttendanceRepository
from .schemas import ROUTE_FIELDS, NewAttendance


class AttendanceService:
    """Records trips and snapshots the route cost onto each entry."""

    def __init__(
        self,
        entries: AttendanceRepository,
        porters: PorterRepository,
        commute_costs: CommuteCostService,
        activity: ActivityLogger,
    ):
        self._entries = entries
        self._porters = porters
        self._commute_costs = commute_costs
        self._activity = activity

    def list(self, *, filters: AttendanceFilter, page: PageRequest) -> Page[AttendanceEntry]:
        return self._entries.list(filters=filters, page=page)

    def get(self, attendance_id: int) -> AttendanceEntry:
        entry = self._entries.get_by_id(attendance_id)
        if not entry:
            raise NotFoundError("Attendance record not found")
        return entry

    def create(self, params: NewAttendance, *, user_id: Optional[int] = None) -> AttendanceEntry:
        self._require_porter(params.porter_id)
        # Resolve before writing: a missing route leaves nothing behind.
        cost = self._commute_costs.resolve(
            carrier_id=params.carrier_id,
            from_location_id=params.location_from_id,
            to_location_id=params.location_to_id,
        )
        attendance_id = self._entries.create(
            work_date=params.work_date,
            porter_id=params.porter_id,
            carrier_id=params.carrier_id,
            location_from_id=params.location_from_id,
            location_to_id=params.location_to_id,
            task=params.task,
            commute_cost_id=cost.commute_cost_id,
            computed_cost=cost.cost,
            created_by=user_id,
        )
        entry = self.get(attendance_id)
        self._log(ActivityType.ATTENDANCE_CREATED, f"New attendance entry for {entry.porter.name}", entry, user_id)
        return entry

    def update(self, attendance_id: int, changes: dict[str, Any], *, user_id: Optional[int] = None) -> AttendanceEntry:
        """Re-snapshot the cost only when carrier, origin or destination is in ``changes``."""
        existing = self.get(attendance_id)
        changes = dict(changes)

        if "porter_id" in changes:
            self._require_porter(changes["porter_id"])

        if any(column in changes for column in ROUTE_FIELDS.values()):
            carrier_id = changes.get("carrier_id") or existing.carrier.carrier_id
            from_id = changes.get("location_from_id") or existing.location_from.location_id
            to_id = changes.get("location_to_id") or existing.location_to.location_id
            cost = self._commute_costs.resolve(
                carrier_id=carrier_id, from_location_id=from_id, to_location_id=to_id
            )
            changes.update(
                carrier_id=carrier_id,
                location_from_id=from_id,
                location_to_id=to_id,
                commute_cost_id=cost.commute_cost_id,
                computed_cost=cost.cost,
            )

        if not self._entries.update(attendance_id, changes):
            raise NotFoundError("Attendance record not found")
        entry = self.get(attendance_id)
        self._log(ActivityType.ATTENDANCE_UPDATED, f"Attendance entry updated for {entry.porter.name}", entry, user_id)
        return entry

    def delete(self, attendance_id: int, *, user_id: Optional[int] = None) -> None:
        entry = self.get(attendance_id)
        if not self._entries.delete(attendance_id):
            raise NotFoundError("Attendance record not found")
        self._log(ActivityType.ATTENDANCE_DELETED, f"Attendance entry deleted for {entry.porter.name}", entry, user_id)

    def calendar(self, year: int, month: int) -> Sequence[DaySummary]:
        return self._entries.daily_summary(*month_bounds(year, month))

    def _require_porter(self, porter_id: int) -> None:
        if not self._porters.get_by_id(porter_id):
            raise NotFoundError("Porter not found")

    def _log(self, activity_type: ActivityType, description: str, entry: AttendanceEntry, user_id: Optional[int]) -> None:
        self._activity.log(
            activity_type,
            description,
            user_id,
            {
                "attendanceId": entry.attendance_id,
                "porterName": entry.porter.name,
                "carrierName": entry.carrier.name,
                "fromLocation": entry.location_from.name,
                "toLocation": entry.location_to.name,
                "cost": entry.computed_cost,
            },
        )
