from __future__ import annotations

from flask import Flask, request

from ..common.http import ok
from ..container import Container
from ..core.constants import DEFAULT_ACTIVITY_LIMIT
from ..core.enums import Action
from .service import activity_to_dict


def register(app: Flask, container: Container) -> None:
    require = container.require

    @app.route("/api/activities", methods=["GET"], endpoint="activities_recent")
    @require(Action.READ)
    def activities_recent():
        limit = request.args.get("limit", DEFAULT_ACTIVITY_LIMIT, type=int) or DEFAULT_ACTIVITY_LIMIT
        activities = container.activity_logger.recent(limit)
        return ok({"activities": [activity_to_dict(a) for a in activities]})
