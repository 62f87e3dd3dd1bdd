from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ..common.validators import PayloadChecker, parse_id
from ..core.exceptions import ValidationError
from .repository import CommuteCostFilter


@dataclass(frozen=True)
class NewCommuteCost:
    from_location_id: int
    to_location_id: int
    carrier_id: int
    cost: float
    is_active: bool = True


@dataclass(frozen=True)
class RouteKey:
    carrier_id: int
    from_location_id: int
    to_location_id: int


def parse_new_commute_cost(payload: dict) -> NewCommuteCost:
    c = PayloadChecker(payload)
    from_id = c.identifier("fromLocation", message="Invalid from location ID")
    to_id = c.identifier("toLocation", message="Invalid to location ID")
    carrier_id = c.identifier("carrier", message="Invalid carrier ID")
    cost = c.number("cost", minimum=0)
    active = c.boolean("active")
    c.raise_if_errors()
    return NewCommuteCost(
        from_location_id=from_id,
        to_location_id=to_id,
        carrier_id=carrier_id,
        cost=cost,
        is_active=True if active is None else active,
    )


def parse_commute_cost_changes(payload: dict) -> dict[str, Any]:
    c = PayloadChecker(payload)
    changes: dict[str, Any] = {}
    if c.has("fromLocation"):
        changes["from_location_id"] = c.identifier("fromLocation", message="Invalid from location ID")
    if c.has("toLocation"):
        changes["to_location_id"] = c.identifier("toLocation", message="Invalid to location ID")
    if c.has("carrier"):
        changes["carrier_id"] = c.identifier("carrier", message="Invalid carrier ID")
    if c.has("cost"):
        changes["cost"] = c.number("cost", minimum=0)
    if c.has("active"):
        changes["is_active"] = c.boolean("active")
    c.raise_if_errors()
    return changes


def parse_route_key(args: Mapping[str, Any]) -> RouteKey:
    if not args.get("fromLocationId") or not args.get("toLocationId") or not args.get("carrierId"):
        raise ValidationError("All parameters are required")
    c = PayloadChecker(args)
    from_id = c.identifier("fromLocationId")
    to_id = c.identifier("toLocationId")
    carrier_id = c.identifier("carrierId")
    c.raise_if_errors()
    return RouteKey(carrier_id=carrier_id, from_location_id=from_id, to_location_id=to_id)


def parse_commute_cost_filter(args: Mapping[str, Any]) -> CommuteCostFilter:
    return CommuteCostFilter(
        from_location_id=parse_id(args.get("from")),
        to_location_id=parse_id(args.get("to")),
        carrier_id=parse_id(args.get("carrier")),
    )
