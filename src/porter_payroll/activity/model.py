from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from ..core.enums import ActivityType


@dataclass(frozen=True)
class Activity:
    """Append-only audit entry for a domain mutation."""

    activity_id: int
    activity_type: ActivityType
    description: str
    user_id: Optional[int]
    created_at: datetime
    metadata: dict[str, Any] = field(default_factory=dict)
    user_name: Optional[str] = None
    user_email: Optional[str] = None
