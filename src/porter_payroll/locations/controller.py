from __future__ import annotations

from flask import Flask, request

from ..common.http import json_body, ok
from ..common.validators import require_id
from ..container import Container
from ..core.enums import Action
from ..users.guard import current_user
from .model import location_to_dict
from .schemas import parse_location_changes, parse_new_location


def register(app: Flask, container: Container) -> None:
    require = container.require
    locations = container.location_service

    @app.route("/api/locations", methods=["GET"], endpoint="locations_list")
    @require(Action.READ)
    def locations_list():
        active = request.args.get("active")
        items = locations.list(
            active=None if active is None else active == "true",
            search=(request.args.get("search") or "").strip() or None,
        )
        return ok({"locations": [location_to_dict(loc) for loc in items]})

    @app.route("/api/locations/<location_id>", methods=["GET"], endpoint="locations_get")
    @require(Action.READ)
    def locations_get(location_id: str):
        return ok({"location": location_to_dict(locations.get(require_id(location_id)))})

    @app.route("/api/locations", methods=["POST"], endpoint="locations_create")
    @require(Action.MANAGE_LOCATIONS)
    def locations_create():
        location = locations.create(parse_new_location(json_body()), user_id=current_user().user_id)
        return ok({"location": location_to_dict(location)}, message="Location created successfully", status=201)

    @app.route("/api/locations/<location_id>", methods=["PUT"], endpoint="locations_update")
    @require(Action.MANAGE_LOCATIONS)
    def locations_update(location_id: str):
        location = locations.update(
            require_id(location_id), parse_location_changes(json_body()), user_id=current_user().user_id
        )
        return ok({"location": location_to_dict(location)}, message="Location updated successfully")

    @app.route("/api/locations/<location_id>", methods=["DELETE"], endpoint="locations_delete")
    @require(Action.DELETE_LOCATION)
    def locations_delete(location_id: str):
        location = locations.deactivate(require_id(location_id), user_id=current_user().user_id)
        return ok({"location": location_to_dict(location)}, message="Location deactivated successfully")
