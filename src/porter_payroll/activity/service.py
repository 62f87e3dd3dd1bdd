from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from ..core.constants import DEFAULT_ACTIVITY_LIMIT
from ..core.enums import ActivityType
from .model import Activity
from .repository import ActivityRepository

logger = logging.getLogger(__name__)


class ActivityLogger:
    """Best-effort audit trail.

    A failed write is logged and dropped; it never fails the operation that
    triggered it.
    """

    def __init__(self, activities: ActivityRepository):
        self._activities = activities

    def log(
        self,
        activity_type: ActivityType,
        description: str,
        user_id: Optional[int] = None,
        metadata: Optional[dict[str, Any]] = None,
    ) -> None:
        try:
            self._activities.append(
                activity_type=activity_type,
                description=description,
                user_id=user_id,
                metadata=dict(metadata or {}),
            )
        except Exception:
            logger.warning("Failed to log activity %s", activity_type.value, exc_info=True)

    def recent(self, limit: int = DEFAULT_ACTIVITY_LIMIT) -> Sequence[Activity]:
        return self._activities.list_recent(limit=max(int(limit), 1))


def activity_to_dict(a: Activity) -> dict:
    return {
        "id": a.activity_id,
        "type": a.activity_type.value,
        "description": a.description,
        "user": {"id": a.user_id, "name": a.user_name, "email": a.user_email} if a.user_id else None,
        "metadata": a.metadata,
        "createdAt": a.created_at.isoformat(),
    }
