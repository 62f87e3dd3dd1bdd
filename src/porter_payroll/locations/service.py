from __future__ import annotations

from typing import Any, Optional, Sequence

from ..activity.service import ActivityLogger
from ..core.enums import ActivityType
from ..core.exceptions import NotFoundError
from .model import Location
from .repository import LocationRepository
from .schemas import NewLocation


class LocationService:
    def __init__(self, locations: LocationRepository, activity: ActivityLogger):
        self._locations = locations
        self._activity = activity

    def list(self, *, active: Optional[bool] = None, search: Optional[str] = None) -> Sequence[Location]:
        return self._locations.list(active=active, search=search)

    def get(self, location_id: int) -> Location:
        location = self._locations.get_by_id(location_id)
        if not location:
            raise NotFoundError("Location not found")
        return location

    def create(self, params: NewLocation, *, user_id: Optional[int] = None) -> Location:
        location = self.get(self._locations.create(code=params.code, name=params.name, is_active=params.is_active))
        self._log(ActivityType.LOCATION_CREATED, location, "was created", user_id)
        return location

    def update(self, location_id: int, changes: dict[str, Any], *, user_id: Optional[int] = None) -> Location:
        if not self._locations.update(location_id, changes):
            raise NotFoundError("Location not found")
        location = self.get(location_id)
        self._log(ActivityType.LOCATION_UPDATED, location, "was updated", user_id)
        return location

    def deactivate(self, location_id: int, *, user_id: Optional[int] = None) -> Location:
        if not self._locations.update(location_id, {"is_active": False}):
            raise NotFoundError("Location not found")
        location = self.get(location_id)
        self._log(ActivityType.LOCATION_DELETED, location, "was deactivated", user_id)
        return location

    def _log(self, activity_type: ActivityType, loc: Location, verb: str, user_id: Optional[int]) -> None:
        self._activity.log(
            activity_type,
            f"Location {loc.code} ({loc.name}) {verb}",
            user_id,
            {"locationId": loc.location_id, "locationCode": loc.code},
        )
