from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: an account that can sign in to the API.

    Plain data, no DB access.
    """

    user_id: int
    name: str
    email: str
    password_hash: str
    role: Role
    is_active: bool = True
    created_at: Optional[datetime] = None


def user_to_dict(user: User, *, with_created: bool = False) -> dict:
    out = {"id": user.user_id, "name": user.name, "email": user.email, "role": user.role.value}
    if with_created and user.created_at:
        out["createdAt"] = user.created_at.isoformat()
    return out
