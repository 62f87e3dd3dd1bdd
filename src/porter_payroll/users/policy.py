"""Role-based authorization policy.

One table maps every Action to the roles allowed to perform it; handlers ask
``authorize(role, action)`` once, before doing any work.
"""
from __future__ import annotations

from ..core.enums import Action, Role
from ..core.exceptions import AuthorizationError

_ANY = frozenset(Role)
_EDITORS = frozenset({Role.ADMIN, Role.SUPERVISOR})
_ADMINS = frozenset({Role.ADMIN})

POLICY: dict[Action, frozenset[Role]] = {
    Action.READ: _ANY,
    Action.GENERATE_DOCUMENT: _ANY,
    Action.MANAGE_PORTERS: _EDITORS,
    Action.MANAGE_LOCATIONS: _EDITORS,
    Action.MANAGE_COMMUTE_COSTS: _EDITORS,
    Action.RECORD_ATTENDANCE: _EDITORS,
    Action.UPDATE_PAYMENT: _EDITORS,
    Action.MANAGE_CARRIERS: _ADMINS,
    Action.DELETE_PORTER: _ADMINS,
    Action.DELETE_LOCATION: _ADMINS,
    Action.DELETE_COMMUTE_COST: _ADMINS,
    Action.DELETE_ATTENDANCE: _ADMINS,
}


def is_allowed(role: Role, action: Action) -> bool:
    return role in POLICY.get(action, frozenset())


def authorize(role: Role, action: Action) -> None:
    if not is_allowed(role, action):
        raise AuthorizationError("Insufficient permissions")
