from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.refs import CarrierRef, LocationRef, carrier_ref_to_dict, location_ref_to_dict


@dataclass(frozen=True)
class CommuteCost:
    """Price of one directional route for one carrier.

    At most one row exists per (from, to, carrier); (A, B) and (B, A) are
    independent routes.
    """

    commute_cost_id: int
    from_location: LocationRef
    to_location: LocationRef
    carrier: CarrierRef
    cost: float
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


def commute_cost_to_dict(cc: CommuteCost) -> dict:
    return {
        "id": cc.commute_cost_id,
        "fromLocation": location_ref_to_dict(cc.from_location),
        "toLocation": location_ref_to_dict(cc.to_location),
        "carrier": carrier_ref_to_dict(cc.carrier),
        "cost": cc.cost,
        "active": cc.is_active,
        "createdAt": cc.created_at.isoformat() if cc.created_at else None,
        "updatedAt": cc.updated_at.isoformat() if cc.updated_at else None,
    }
