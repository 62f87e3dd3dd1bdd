from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..common.validators import PayloadChecker


@dataclass(frozen=True)
class NewLocation:
    code: str
    name: str
    is_active: bool = True


def parse_new_location(payload: dict) -> NewLocation:
    c = PayloadChecker(payload)
    code = c.string("code", min_len=1, message="Code is required")
    name = c.string("name", min_len=1, message="Name is required")
    active = c.boolean("active")
    c.raise_if_errors()
    return NewLocation(code=code.upper(), name=name, is_active=True if active is None else active)


def parse_location_changes(payload: dict) -> dict[str, Any]:
    c = PayloadChecker(payload)
    changes: dict[str, Any] = {}
    if c.has("code"):
        code = c.string("code", min_len=1, message="Code is required")
        changes["code"] = code.upper() if code else code
    if c.has("name"):
        changes["name"] = c.string("name", min_len=1, message="Name is required")
    if c.has("active"):
        changes["is_active"] = c.boolean("active")
    c.raise_if_errors()
    return changes
