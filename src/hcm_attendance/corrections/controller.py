from __future__ import annotations

from flask import Flask, jsonify, request

from ..attendance.serializers import record_json
from ..common.datetime_utils import parse_iso_date
from ..common.http import admin_required, current_user_id, iso, json_body, login_required
from ..common.validators import require_int
from ..core.constants import DEFAULT_PAGE_SIZE
from ..core.enums import RequestState
from ..core.exceptions import ValidationError
from .model import AttendanceCorrection


def correction_json(c: AttendanceCorrection):
    return {
        "id": c.correction_id,
        "employeeId": c.employee_id,
        "date": iso(c.work_date),
        "issue": c.issue.value,
        "requestedCheckIn": iso(c.requested_check_in),
        "requestedCheckOut": iso(c.requested_check_out),
        "note": c.note,
        "state": c.state.value,
        "createdAt": iso(c.created_at),
        "decidedBy": c.decided_by,
        "decidedAt": iso(c.decided_at),
    }


def _state_arg(value):
    if not value:
        return None
    try:
        return RequestState.parse(value)
    except ValueError:
        raise ValidationError("state must be pending, approved or rejected")


def register(app: Flask, container) -> None:
    service = container.correction_service

    @app.route("/api/attendance/corrections", methods=["POST"], endpoint="corrections_submit")
    @login_required
    def corrections_submit():
        body = json_body()
        if not body.get("date"):
            raise ValidationError("date is required")
        correction = service.submit(
            employee_id=current_user_id(),
            work_date=parse_iso_date(body.get("date")),
            issue=body.get("issue"),
            requested_check_in=body.get("requestedCheckIn"),
            requested_check_out=body.get("requestedCheckOut"),
            note=body.get("note"),
        )
        return jsonify({"id": correction.correction_id, "state": correction.state.value}), 201

    @app.route("/api/attendance/corrections", methods=["GET"], endpoint="corrections_mine")
    @login_required
    def corrections_mine():
        items = service.list_for_employee(current_user_id())
        return jsonify({"corrections": [correction_json(c) for c in items]})

    @app.route("/api/attendance/admin/corrections", methods=["GET"], endpoint="corrections_admin_list")
    @admin_required
    def corrections_admin_list():
        args = request.args
        page = require_int(args.get("page") or 1, "page", minimum=1)
        size = require_int(args.get("size") or DEFAULT_PAGE_SIZE, "size", minimum=1)
        items, total = service.list_admin(
            state=_state_arg(args.get("state")),
            work_date=parse_iso_date(args["date"]) if args.get("date") else None,
            employee_id=require_int(args["employeeId"], "employeeId") if args.get("employeeId") else None,
            page=page,
            size=size,
        )
        return jsonify(
            {"corrections": [correction_json(c) for c in items], "page": page, "size": size, "total": total}
        )

    @app.route(
        "/api/attendance/admin/corrections/<int:correction_id>",
        methods=["PATCH"],
        endpoint="corrections_resolve",
    )
    @admin_required
    def corrections_resolve(correction_id: int):
        body = json_body()
        resolution = service.resolve(
            correction_id=correction_id,
            action=body.get("action"),
            admin_id=current_user_id(),
        )
        return jsonify(
            {
                "correction": correction_json(resolution.correction),
                "record": record_json(resolution.record),
            }
        )
