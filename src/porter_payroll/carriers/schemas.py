from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..common.validators import PayloadChecker
from ..core.enums import CarrierType

CARRIER_NAMES = [c.value for c in CarrierType]


@dataclass(frozen=True)
class NewCarrier:
    name: CarrierType
    capacity_kg: float
    is_active: bool = True


def parse_new_carrier(payload: dict) -> NewCarrier:
    c = PayloadChecker(payload)
    name = c.choice("name", CARRIER_NAMES)
    capacity = c.number("capacityKg", minimum=0)
    active = c.boolean("active")
    c.raise_if_errors()
    return NewCarrier(name=CarrierType(name), capacity_kg=capacity, is_active=True if active is None else active)


def parse_carrier_changes(payload: dict) -> dict[str, Any]:
    c = PayloadChecker(payload)
    changes: dict[str, Any] = {}
    if c.has("name"):
        name = c.choice("name", CARRIER_NAMES)
        changes["name"] = CarrierType(name) if name else None
    if c.has("capacityKg"):
        changes["capacity_kg"] = c.number("capacityKg", minimum=0)
    if c.has("active"):
        changes["is_active"] = c.boolean("active")
    c.raise_if_errors()
    return changes
