"""Lightweight references embedded in read models (joined identity fields)."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class PorterRef:
    porter_id: int
    uid: str
    name: str
    designation: str = ""


@dataclass(frozen=True)
class LocationRef:
    location_id: int
    code: str
    name: str


@dataclass(frozen=True)
class CarrierRef:
    carrier_id: int
    name: str
    capacity_kg: float = 0.0


def porter_ref_to_dict(ref: Optional[PorterRef]) -> Optional[dict]:
    if ref is None:
        return None
    return {"id": ref.porter_id, "uid": ref.uid, "name": ref.name, "designation": ref.designation}


def location_ref_to_dict(ref: Optional[LocationRef]) -> Optional[dict]:
    if ref is None:
        return None
    return {"id": ref.location_id, "code": ref.code, "name": ref.name}


def carrier_ref_to_dict(ref: Optional[CarrierRef]) -> Optional[dict]:
    if ref is None:
        return None
    return {"id": ref.carrier_id, "name": ref.name, "capacityKg": ref.capacity_kg}


@dataclass(frozen=True)
class UserRef:
    user_id: int
    name: str
    email: str


def user_ref_to_dict(ref: Optional[UserRef]) -> Optional[dict]:
    if ref is None:
        return None
    return {"id": ref.user_id, "name": ref.name, "email": ref.email}
