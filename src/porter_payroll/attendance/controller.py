from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import parse_month
from ..common.http import json_body, ok
from ..common.pagination import page_request
from ..common.validators import require_id, require_month
from ..container import Container
from ..core.constants import DEFAULT_ATTENDANCE_PAGE_SIZE
from ..core.enums import Action
from ..users.guard import current_user
from .model import attendance_to_dict
from .schemas import parse_attendance_changes, parse_attendance_filter, parse_new_attendance


def register(app: Flask, container: Container) -> None:
    require = container.require
    attendance = container.attendance_service

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_list")
    @require(Action.READ)
    def attendance_list():
        page = attendance.list(
            filters=parse_attendance_filter(request.args),
            page=page_request(request.args, default_limit=DEFAULT_ATTENDANCE_PAGE_SIZE),
        )
        return ok(
            {
                "attendance": [attendance_to_dict(e) for e in page.items],
                "totalPages": page.total_pages,
                "currentPage": page.page,
                "total": page.total,
            }
        )

    @app.route("/api/attendance/calendar", methods=["GET"], endpoint="attendance_calendar")
    @require(Action.READ)
    def attendance_calendar():
        year, month = parse_month(require_month(request.args.get("month")))
        days = attendance.calendar(year, month)
        return ok(
            {
                "calendar": {
                    d.day.isoformat(): {"count": d.count, "porterCount": d.porter_count, "totalCost": d.total_cost}
                    for d in days
                }
            }
        )

    @app.route("/api/attendance/<attendance_id>", methods=["GET"], endpoint="attendance_get")
    @require(Action.READ)
    def attendance_get(attendance_id: str):
        return ok({"attendance": attendance_to_dict(attendance.get(require_id(attendance_id)))})

    @app.route("/api/attendance", methods=["POST"], endpoint="attendance_create")
    @require(Action.RECORD_ATTENDANCE)
    def attendance_create():
        entry = attendance.create(parse_new_attendance(json_body()), user_id=current_user().user_id)
        return ok(
            {"attendance": attendance_to_dict(entry)}, message="Attendance record created successfully", status=201
        )

    @app.route("/api/attendance/<attendance_id>", methods=["PUT"], endpoint="attendance_update")
    @require(Action.RECORD_ATTENDANCE)
    def attendance_update(attendance_id: str):
        entry = attendance.update(
            require_id(attendance_id), parse_attendance_changes(json_body()), user_id=current_user().user_id
        )
        return ok({"attendance": attendance_to_dict(entry)}, message="Attendance record updated successfully")

    @app.route("/api/attendance/<attendance_id>", methods=["DELETE"], endpoint="attendance_delete")
    @require(Action.DELETE_ATTENDANCE)
    def attendance_delete(attendance_id: str):
        attendance.delete(require_id(attendance_id), user_id=current_user().user_id)
        return ok(message="Attendance record deleted successfully")
