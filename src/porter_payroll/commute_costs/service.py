from __future__ import annotations

import csv
import io
import logging
import math
from dataclasses import dataclass, field
from typing import Any, Optional

from ..activity.service import ActivityLogger
from ..carriers.repository import CarrierRepository
from ..common.pagination import Page, PageRequest
from ..core.constants import CSV_ERROR_REPORT_LIMIT
from ..core.enums import ActivityType, CarrierType
from ..core.exceptions import DomainError, NotFoundError
from ..locations.repository import LocationRepository
from .model import CommuteCost
from .repository import CommuteCostFilter, CommuteCostRepository
from .schemas import NewCommuteCost

logger = logging.getLogger(__name__)

CSV_COLUMNS = ("fromLocationCode", "toLocationCode", "carrierName", "cost")


@dataclass
class ImportReport:
    success_count: int = 0
    error_count: int = 0
    errors: list[dict] = field(default_factory=list)

    def fail(self, row: dict, message: str) -> None:
        self.error_count += 1
        self.errors.append({"row": row, "error": message})

    def to_dict(self) -> dict:
        return {
            "successCount": self.success_count,
            "errorCount": self.error_count,
            "errors": self.errors[:CSV_ERROR_REPORT_LIMIT],
        }


class CommuteCostService:
    def __init__(
        self,
        costs: CommuteCostRepository,
        locations: LocationRepository,
        carriers: CarrierRepository,
        activity: ActivityLogger,
    ):
        self._costs = costs
        self._locations = locations
        self._carriers = carriers
        self._activity = activity

    def list(self, *, filters: CommuteCostFilter, page: PageRequest) -> Page[CommuteCost]:
        return self._costs.list(filters=filters, page=page)

    def get(self, commute_cost_id: int) -> CommuteCost:
        cc = self._costs.get_by_id(commute_cost_id)
        if not cc:
            raise NotFoundError("Commute cost not found")
        return cc

    def find(self, *, carrier_id: int, from_location_id: int, to_location_id: int) -> Optional[CommuteCost]:
        return self._costs.find_active(
            carrier_id=carrier_id, from_location_id=from_location_id, to_location_id=to_location_id
        )

    def resolve(self, *, carrier_id: int, from_location_id: int, to_location_id: int) -> CommuteCost:
        """The active cost for exactly this directional route and carrier."""
        cc = self.find(carrier_id=carrier_id, from_location_id=from_location_id, to_location_id=to_location_id)
        if not cc:
            raise NotFoundError("Commute cost not found for this route and carrier")
        return cc

    def create(self, params: NewCommuteCost, *, user_id: Optional[int] = None) -> CommuteCost:
        cc = self.get(
            self._costs.create(
                from_location_id=params.from_location_id,
                to_location_id=params.to_location_id,
                carrier_id=params.carrier_id,
                cost=params.cost,
                is_active=params.is_active,
            )
        )
        self._log(ActivityType.COMMUTE_COST_CREATED, cc, "created", user_id)
        return cc

    def update(self, commute_cost_id: int, changes: dict[str, Any], *, user_id: Optional[int] = None) -> CommuteCost:
        if not self._costs.update(commute_cost_id, changes):
            raise NotFoundError("Commute cost not found")
        cc = self.get(commute_cost_id)
        self._log(ActivityType.COMMUTE_COST_UPDATED, cc, "updated", user_id)
        return cc

    def delete(self, commute_cost_id: int, *, user_id: Optional[int] = None) -> None:
        """Hard delete. Attendance entries keep their cost snapshot."""
        cc = self.get(commute_cost_id)
        if not self._costs.delete(commute_cost_id):
            raise NotFoundError("Commute cost not found")
        self._log(ActivityType.COMMUTE_COST_DELETED, cc, "deleted", user_id)

    def import_csv(self, text: str) -> ImportReport:
        """Upsert one route per CSV row; bad rows are reported, not fatal."""
        report = ImportReport()
        for row in csv.DictReader(io.StringIO(text)):
            try:
                self._import_row(row)
            except (DomainError, ValueError) as exc:
                report.fail(row, getattr(exc, "message", None) or str(exc))
                continue
            report.success_count += 1

        logger.info("Commute cost CSV import: %d ok, %d failed", report.success_count, report.error_count)
        return report

    def _import_row(self, row: dict) -> None:
        from_loc = self._locations.get_by_code((row.get("fromLocationCode") or "").strip().upper())
        to_loc = self._locations.get_by_code((row.get("toLocationCode") or "").strip().upper())
        try:
            carrier = self._carriers.get_by_name(CarrierType((row.get("carrierName") or "").strip().lower()))
        except ValueError:
            carrier = None
        if not from_loc or not to_loc or not carrier:
            raise NotFoundError("Location or carrier not found")

        try:
            cost = float((row.get("cost") or "").strip())
        except ValueError:
            cost = math.nan
        if not math.isfinite(cost):
            raise ValueError(f"Invalid cost: {row.get('cost')!r}")
        if cost < 0:
            raise ValueError("Cost cannot be negative")

        self._costs.upsert(
            from_location_id=from_loc.location_id,
            to_location_id=to_loc.location_id,
            carrier_id=carrier.carrier_id,
            cost=cost,
        )

    def _log(self, activity_type: ActivityType, cc: CommuteCost, verb: str, user_id: Optional[int]) -> None:
        self._activity.log(
            activity_type,
            f"Commute cost {cc.from_location.code} -> {cc.to_location.code} ({cc.carrier.name}) {verb}",
            user_id,
            {"commuteCostId": cc.commute_cost_id, "cost": cc.cost},
        )
