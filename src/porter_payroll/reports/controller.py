from __future__ import annotations

import io

from flask import Flask, request, send_file

from ..attendance.model import attendance_to_dict
from ..common.datetime_utils import parse_month
from ..common.http import ok
from ..common.validators import require_month
from ..container import Container
from ..core.enums import Action
from ..users.guard import current_user
from .service import monthly_report_to_dict

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def register(app: Flask, container: Container) -> None:
    require = container.require
    reports = container.report_service

    @app.route("/api/reports/generate", methods=["GET"], endpoint="reports_generate")
    @require(Action.READ)
    def reports_generate():
        year, month = parse_month(require_month(request.args.get("month")))
        report = reports.monthly_report(year, month, user_id=current_user().user_id)
        return ok(monthly_report_to_dict(report))

    @app.route("/api/reports/dashboard", methods=["GET"], endpoint="reports_dashboard")
    @require(Action.READ)
    def reports_dashboard():
        stats = reports.dashboard()
        return ok(
            {
                "currentMonth": {
                    "month": stats.month,
                    "totalEntries": stats.current.entry_count,
                    "totalCost": stats.current.total_cost,
                    "activePorters": stats.current.porter_count,
                },
                "totalPorters": stats.total_porters,
                "recentEntries": [attendance_to_dict(e) for e in stats.recent_entries],
            }
        )

    @app.route("/api/reports/porter-nominal-roll", methods=["GET"], endpoint="reports_nominal_roll")
    @require(Action.READ)
    def reports_nominal_roll():
        year, month = parse_month(require_month(request.args.get("month")))
        sheet = reports.nominal_roll(year, month)
        return send_file(
            io.BytesIO(sheet.content),
            mimetype=XLSX_MIMETYPE,
            as_attachment=True,
            download_name=sheet.filename,
        )
