from __future__ import annotations

import logging

from flask import Flask

from ..common.http import json_body, ok
from ..container import Container
from ..core.enums import Action
from .guard import current_user
from .model import user_to_dict
from .schemas import parse_login, parse_refresh, parse_register

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    require = container.require

    @app.route("/api/auth/register", methods=["POST"], endpoint="auth_register")
    def auth_register():
        result = container.auth_service.register(parse_register(json_body()))
        return ok(
            {"user": user_to_dict(result.user), **result.tokens.to_dict()},
            message="User registered successfully",
            status=201,
        )

    @app.route("/api/auth/login", methods=["POST"], endpoint="auth_login")
    def auth_login():
        result = container.auth_service.login(parse_login(json_body()))
        return ok({"user": user_to_dict(result.user), **result.tokens.to_dict()}, message="Login successful")

    @app.route("/api/auth/refresh", methods=["POST"], endpoint="auth_refresh")
    def auth_refresh():
        tokens = container.auth_service.refresh(parse_refresh(json_body()))
        return ok(tokens.to_dict(), message="Token refreshed successfully")

    @app.route("/api/auth/logout", methods=["POST"], endpoint="auth_logout")
    @require(Action.READ)
    def auth_logout():
        # Tokens are stateless; the client drops them.
        logger.info("User logged out: %s", current_user().email)
        return ok(message="Logout successful")

    @app.route("/api/auth/profile", methods=["GET"], endpoint="auth_profile")
    @require(Action.READ)
    def auth_profile():
        user = container.auth_service.profile(current_user().user_id)
        return ok({"user": user_to_dict(user, with_created=True)})
