from __future__ import annotations

from flask import Flask, request

from ..common.http import json_body, ok
from ..common.pagination import page_request
from ..common.validators import require_id
from ..container import Container
from ..core.constants import DEFAULT_PAGE_SIZE
from ..core.enums import Action
from ..core.exceptions import FieldError, ValidationError
from ..users.guard import current_user
from .model import commute_cost_to_dict
from .schemas import parse_commute_cost_changes, parse_commute_cost_filter, parse_new_commute_cost, parse_route_key


def register(app: Flask, container: Container) -> None:
    require = container.require
    costs = container.commute_cost_service

    @app.route("/api/commute-costs", methods=["GET"], endpoint="commute_costs_list")
    @require(Action.READ)
    def commute_costs_list():
        page = costs.list(
            filters=parse_commute_cost_filter(request.args),
            page=page_request(request.args, default_limit=DEFAULT_PAGE_SIZE),
        )
        return ok(
            {
                "commuteCosts": [commute_cost_to_dict(cc) for cc in page.items],
                "totalPages": page.total_pages,
                "currentPage": page.page,
                "total": page.total,
            }
        )

    # Registered before /<commute_cost_id> so "find" is never taken as an id.
    @app.route("/api/commute-costs/find", methods=["GET"], endpoint="commute_costs_find")
    @require(Action.READ)
    def commute_costs_find():
        key = parse_route_key(request.args)
        cc = costs.find(
            carrier_id=key.carrier_id, from_location_id=key.from_location_id, to_location_id=key.to_location_id
        )
        return ok({"commuteCost": commute_cost_to_dict(cc) if cc else None})

    @app.route("/api/commute-costs/<commute_cost_id>", methods=["GET"], endpoint="commute_costs_get")
    @require(Action.READ)
    def commute_costs_get(commute_cost_id: str):
        return ok({"commuteCost": commute_cost_to_dict(costs.get(require_id(commute_cost_id)))})

    @app.route("/api/commute-costs", methods=["POST"], endpoint="commute_costs_create")
    @require(Action.MANAGE_COMMUTE_COSTS)
    def commute_costs_create():
        cc = costs.create(parse_new_commute_cost(json_body()), user_id=current_user().user_id)
        return ok({"commuteCost": commute_cost_to_dict(cc)}, message="Commute cost created successfully", status=201)

    @app.route("/api/commute-costs/upload", methods=["POST"], endpoint="commute_costs_upload")
    @require(Action.MANAGE_COMMUTE_COSTS)
    def commute_costs_upload():
        upload = request.files.get("file")
        if upload is None or not upload.filename:
            raise ValidationError("CSV file is required", [FieldError("file", "Required")])
        try:
            text = upload.read().decode("utf-8-sig")
        except UnicodeDecodeError:
            raise ValidationError("CSV file must be UTF-8 encoded", [FieldError("file", "Invalid encoding")])
        report = costs.import_csv(text)
        return ok(report.to_dict(), message="CSV upload completed")

    @app.route("/api/commute-costs/<commute_cost_id>", methods=["PUT"], endpoint="commute_costs_update")
    @require(Action.MANAGE_COMMUTE_COSTS)
    def commute_costs_update(commute_cost_id: str):
        cc = costs.update(
            require_id(commute_cost_id), parse_commute_cost_changes(json_body()), user_id=current_user().user_id
        )
        return ok({"commuteCost": commute_cost_to_dict(cc)}, message="Commute cost updated successfully")

    @app.route("/api/commute-costs/<commute_cost_id>", methods=["DELETE"], endpoint="commute_costs_delete")
    @require(Action.DELETE_COMMUTE_COST)
    def commute_costs_delete(commute_cost_id: str):
        costs.delete(require_id(commute_cost_id), user_id=current_user().user_id)
        return ok(message="Commute cost deleted successfully")
