from __future__ import annotations

from flask import Flask, request

from ..common.http import json_body, ok
from ..common.pagination import page_request
from ..common.validators import require_id
from ..container import Container
from ..core.constants import DEFAULT_PAGE_SIZE
from ..core.enums import Action
from ..users.guard import current_user
from .model import porter_to_dict
from .schemas import parse_new_porter, parse_porter_changes, parse_porter_filter


def register(app: Flask, container: Container) -> None:
    require = container.require
    porters = container.porter_service

    @app.route("/api/porters", methods=["GET"], endpoint="porters_list")
    @require(Action.READ)
    def porters_list():
        page = porters.list(
            filters=parse_porter_filter(request.args),
            page=page_request(request.args, default_limit=DEFAULT_PAGE_SIZE),
        )
        return ok(
            {
                "porters": [porter_to_dict(p) for p in page.items],
                "totalPages": page.total_pages,
                "currentPage": page.page,
                "total": page.total,
            }
        )

    @app.route("/api/porters/<porter_id>", methods=["GET"], endpoint="porters_get")
    @require(Action.READ)
    def porters_get(porter_id: str):
        porter = porters.get(require_id(porter_id))
        return ok({"porter": porter_to_dict(porter)})

    @app.route("/api/porters", methods=["POST"], endpoint="porters_create")
    @require(Action.MANAGE_PORTERS)
    def porters_create():
        porter = porters.create(parse_new_porter(json_body()), user_id=current_user().user_id)
        return ok({"porter": porter_to_dict(porter)}, message="Porter created successfully", status=201)

    @app.route("/api/porters/<porter_id>", methods=["PUT"], endpoint="porters_update")
    @require(Action.MANAGE_PORTERS)
    def porters_update(porter_id: str):
        pid = require_id(porter_id)
        porter = porters.update(pid, parse_porter_changes(json_body()), user_id=current_user().user_id)
        return ok({"porter": porter_to_dict(porter)}, message="Porter updated successfully")

    @app.route("/api/porters/<porter_id>", methods=["DELETE"], endpoint="porters_delete")
    @require(Action.DELETE_PORTER)
    def porters_delete(porter_id: str):
        porter = porters.deactivate(require_id(porter_id), user_id=current_user().user_id)
        return ok({"porter": porter_to_dict(porter)}, message="Porter deactivated successfully")
