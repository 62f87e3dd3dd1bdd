from __future__ import annotations

from typing import Any, Optional

from ..activity.service import ActivityLogger
from ..common.pagination import Page, PageRequest
from ..core.enums import ActivityType
from ..core.exceptions import NotFoundError
from .model import Porter
from .repository import PorterFilter, PorterRepository
from .schemas import NewPorter


class PorterService:
    def __init__(self, porters: PorterRepository, activity: ActivityLogger):
        self._porters = porters
        self._activity = activity

    def list(self, *, filters: PorterFilter, page: PageRequest) -> Page[Porter]:
        return self._porters.list(filters=filters, page=page)

    def get(self, porter_id: int) -> Porter:
        porter = self._porters.get_by_id(porter_id)
        if not porter:
            raise NotFoundError("Porter not found")
        return porter

    def create(self, params: NewPorter, *, user_id: Optional[int] = None) -> Porter:
        porter_id = self._porters.create(
            uid=params.uid,
            name=params.name,
            designation=params.designation,
            account_no=params.account_no,
            father_name=params.father_name,
            is_active=params.is_active,
        )
        porter = self.get(porter_id)
        self._log(ActivityType.PORTER_CREATED, porter, "was created", user_id)
        return porter

    def update(self, porter_id: int, changes: dict[str, Any], *, user_id: Optional[int] = None) -> Porter:
        if not self._porters.update(porter_id, changes):
            raise NotFoundError("Porter not found")
        porter = self.get(porter_id)
        self._log(ActivityType.PORTER_UPDATED, porter, "was updated", user_id)
        return porter

    def deactivate(self, porter_id: int, *, user_id: Optional[int] = None) -> Porter:
        """Soft delete: attendance history and past payroll stay intact."""
        if not self._porters.update(porter_id, {"is_active": False}):
            raise NotFoundError("Porter not found")
        porter = self.get(porter_id)
        self._log(ActivityType.PORTER_DELETED, porter, "was deactivated", user_id)
        return porter

    def _log(self, activity_type: ActivityType, porter: Porter, verb: str, user_id: Optional[int]) -> None:
        self._activity.log(
            activity_type,
            f"Porter {porter.name} ({porter.uid}) {verb}",
            user_id,
            {"porterId": porter.porter_id, "porterUid": porter.uid, "porterName": porter.name},
        )
