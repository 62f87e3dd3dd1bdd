from __future__ import annotations

from typing import Any, Optional, Sequence

from ..activity.service import ActivityLogger
from ..core.enums import ActivityType
from ..core.exceptions import NotFoundError
from .model import Carrier
from .repository import CarrierRepository
from .schemas import NewCarrier


class CarrierService:
    def __init__(self, carriers: CarrierRepository, activity: ActivityLogger):
        self._carriers = carriers
        self._activity = activity

    def list(self, *, active: Optional[bool] = None) -> Sequence[Carrier]:
        return self._carriers.list(active=active)

    def get(self, carrier_id: int) -> Carrier:
        carrier = self._carriers.get_by_id(carrier_id)
        if not carrier:
            raise NotFoundError("Carrier not found")
        return carrier

    def create(self, params: NewCarrier, *, user_id: Optional[int] = None) -> Carrier:
        carrier_id = self._carriers.create(name=params.name, capacity_kg=params.capacity_kg, is_active=params.is_active)
        carrier = self.get(carrier_id)
        self._log(ActivityType.CARRIER_CREATED, carrier, "was created", user_id)
        return carrier

    def update(self, carrier_id: int, changes: dict[str, Any], *, user_id: Optional[int] = None) -> Carrier:
        if not self._carriers.update(carrier_id, changes):
            raise NotFoundError("Carrier not found")
        carrier = self.get(carrier_id)
        self._log(ActivityType.CARRIER_UPDATED, carrier, "was updated", user_id)
        return carrier

    def deactivate(self, carrier_id: int, *, user_id: Optional[int] = None) -> Carrier:
        if not self._carriers.update(carrier_id, {"is_active": False}):
            raise NotFoundError("Carrier not found")
        carrier = self.get(carrier_id)
        self._log(ActivityType.CARRIER_DELETED, carrier, "was deactivated", user_id)
        return carrier

    def _log(self, activity_type: ActivityType, carrier: Carrier, verb: str, user_id: Optional[int]) -> None:
        self._activity.log(
            activity_type,
            f"Carrier {carrier.name.value} {verb}",
            user_id,
            {"carrierId": carrier.carrier_id, "carrierName": carrier.name.value},
        )
