from __future__ import annotations

from flask import Flask, request

from ..attendance.model import attendance_to_dict
from ..common.datetime_utils import parse_month
from ..common.http import json_body, ok
from ..common.validators import require_id, require_month
from ..container import Container
from ..core.enums import Action
from ..users.guard import current_user
from .model import month_summary_to_dict, monthly_payroll_to_dict, payment_to_dict
from .schemas import parse_month_range, parse_payment_update


def register(app: Flask, container: Container) -> None:
    require = container.require
    payroll = container.payroll_service

    @app.route("/api/payroll", methods=["GET"], endpoint="payroll_monthly")
    @require(Action.READ)
    def payroll_monthly():
        year, month = parse_month(require_month(request.args.get("month")))
        return ok(monthly_payroll_to_dict(payroll.monthly(year, month)))

    @app.route("/api/payroll/summary", methods=["GET"], endpoint="payroll_summary")
    @require(Action.READ)
    def payroll_summary():
        months = parse_month_range(request.args)
        return ok({"summary": [month_summary_to_dict(s) for s in payroll.summary(months)]})

    @app.route("/api/payroll/<porter_id>", methods=["GET"], endpoint="payroll_porter")
    @require(Action.READ)
    def payroll_porter(porter_id: str):
        pid = require_id(porter_id, "porterId")
        year, month = parse_month(require_month(request.args.get("month")))
        view = payroll.for_porter(pid, year, month)
        return ok(
            {
                "porter": {
                    "id": view.porter.porter_id,
                    "uid": view.porter.uid,
                    "name": view.porter.name,
                    "designation": view.porter.designation,
                },
                "month": view.month,
                "totalSalary": view.payroll.total_salary,
                "totalTrips": view.payroll.total_trips,
                "trips": [attendance_to_dict(e) for e in view.payroll.trips],
                "payment": payment_to_dict(view.payment),
            }
        )

    @app.route("/api/payroll/<porter_id>/payment", methods=["PATCH"], endpoint="payroll_payment")
    @require(Action.UPDATE_PAYMENT)
    def payroll_payment(porter_id: str):
        pid = require_id(porter_id, "porterId")
        payment = payroll.update_payment(pid, parse_payment_update(json_body()), user_id=current_user().user_id)
        return ok({"payment": payment_to_dict(payment)}, message="Payment status updated")
