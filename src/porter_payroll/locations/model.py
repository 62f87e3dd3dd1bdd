from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Location:
    location_id: int
    code: str
    name: str
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


def location_to_dict(loc: Location) -> dict:
    return {
        "id": loc.location_id,
        "code": loc.code,
        "name": loc.name,
        "active": loc.is_active,
        "createdAt": loc.created_at.isoformat() if loc.created_at else None,
        "updatedAt": loc.updated_at.isoformat() if loc.updated_at else None,
    }
