from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import CarrierType


@dataclass(frozen=True)
class Carrier:
    carrier_id: int
    name: CarrierType
    capacity_kg: float = 0.0
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


def carrier_to_dict(c: Carrier) -> dict:
    return {
        "id": c.carrier_id,
        "name": c.name.value,
        "capacityKg": c.capacity_kg,
        "active": c.is_active,
        "createdAt": c.created_at.isoformat() if c.created_at else None,
        "updatedAt": c.updated_at.isoformat() if c.updated_at else None,
    }
