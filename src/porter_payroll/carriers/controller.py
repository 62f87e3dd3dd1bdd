from __future__ import annotations

from flask import Flask, request

from ..common.http import json_body, ok
from ..common.validators import require_id
from ..container import Container
from ..core.enums import Action
from ..users.guard import current_user
from .model import carrier_to_dict
from .schemas import parse_carrier_changes, parse_new_carrier


def register(app: Flask, container: Container) -> None:
    require = container.require
    carriers = container.carrier_service

    @app.route("/api/carriers", methods=["GET"], endpoint="carriers_list")
    @require(Action.READ)
    def carriers_list():
        active = request.args.get("active")
        items = carriers.list(active=None if active is None else active == "true")
        return ok({"carriers": [carrier_to_dict(c) for c in items]})

    @app.route("/api/carriers/<carrier_id>", methods=["GET"], endpoint="carriers_get")
    @require(Action.READ)
    def carriers_get(carrier_id: str):
        return ok({"carrier": carrier_to_dict(carriers.get(require_id(carrier_id)))})

    @app.route("/api/carriers", methods=["POST"], endpoint="carriers_create")
    @require(Action.MANAGE_CARRIERS)
    def carriers_create():
        carrier = carriers.create(parse_new_carrier(json_body()), user_id=current_user().user_id)
        return ok({"carrier": carrier_to_dict(carrier)}, message="Carrier created successfully", status=201)

    @app.route("/api/carriers/<carrier_id>", methods=["PUT"], endpoint="carriers_update")
    @require(Action.MANAGE_CARRIERS)
    def carriers_update(carrier_id: str):
        carrier = carriers.update(
            require_id(carrier_id), parse_carrier_changes(json_body()), user_id=current_user().user_id
        )
        return ok({"carrier": carrier_to_dict(carrier)}, message="Carrier updated successfully")

    @app.route("/api/carriers/<carrier_id>", methods=["DELETE"], endpoint="carriers_delete")
    @require(Action.MANAGE_CARRIERS)
    def carriers_delete(carrier_id: str):
        carrier = carriers.deactivate(require_id(carrier_id), user_id=current_user().user_id)
        return ok({"carrier": carrier_to_dict(carrier)}, message="Carrier deactivated successfully")
