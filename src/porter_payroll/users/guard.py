from __future__ import annotations

from functools import wraps
from typing import Callable

from flask import g, request

from ..core.enums import Action
from .model import User
from .policy import authorize
from .service import AuthService


def bearer_token() -> str:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer":
        return ""
    return token.strip()


def current_user() -> User:
    return g.current_user


def make_guard(auth_service: AuthService) -> Callable[[Action], Callable]:
    """Build the ``require(action)`` decorator used by every protected route."""

    def require(action: Action = Action.READ):
        def decorator(view):
            @wraps(view)
            def wrapper(*args, **kwargs):
                user = auth_service.resolve_access_token(bearer_token())
                authorize(user.role, action)
                g.current_user = user
                return view(*args, **kwargs)

            return wrapper

        return decorator

    return require
