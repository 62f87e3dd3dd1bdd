from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence

from ..core.enums import ActivityType
from .model import Activity


class ActivityRepository(Protocol):
    def append(
        self,
        *,
        activity_type: ActivityType,
        description: str,
        user_id: Optional[int],
        metadata: dict[str, Any],
    ) -> int:
        raise NotImplementedError

    def list_recent(self, *, limit: int) -> Sequence[Activity]:
        """Newest first, joined with the acting user's name/email."""

        raise NotImplementedError
