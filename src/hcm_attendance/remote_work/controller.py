from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import admin_required, current_user_id, iso, json_body, login_required
from ..core.enums import RequestState
from ..core.exceptions import ValidationError
from .model import RemoteWorkRequest


def remote_json(r: RemoteWorkRequest):
    return {
        "id": r.request_id,
        "employeeId": r.employee_id,
        "startDate": iso(r.start_date),
        "endDate": iso(r.end_date),
        "reason": r.reason,
        "state": r.state.value,
        "createdAt": iso(r.created_at),
        "approvedBy": r.approved_by,
        "approvedAt": iso(r.approved_at),
    }


def register(app: Flask, container) -> None:
    service = container.remote_work_service

    @app.route("/api/attendance/remote", methods=["POST"], endpoint="remote_create")
    @login_required
    def remote_create():
        body = json_body()
        if not body.get("startDate") or not body.get("endDate"):
            raise ValidationError("startDate and endDate are required")
        req = service.create(
            employee_id=current_user_id(),
            start_date=parse_iso_date(body.get("startDate")),
            end_date=parse_iso_date(body.get("endDate")),
            reason=body.get("reason") or "",
        )
        return jsonify({"id": req.request_id, "state": req.state.value}), 201

    @app.route("/api/attendance/remote", methods=["GET"], endpoint="remote_mine")
    @login_required
    def remote_mine():
        return jsonify({"requests": [remote_json(r) for r in service.list_for_employee(employee_id=current_user_id())]})

    @app.route("/api/attendance/admin/remote", methods=["GET"], endpoint="remote_admin_list")
    @admin_required
    def remote_admin_list():
        raw = request.args.get("state")
        try:
            state = RequestState.parse(raw) if raw else None
        except ValueError:
            raise ValidationError("state must be pending, approved or rejected")
        return jsonify({"requests": [remote_json(r) for r in service.list_all(state=state)]})

    @app.route("/api/attendance/admin/remote/<int:request_id>", methods=["PATCH"], endpoint="remote_decide")
    @admin_required
    def remote_decide(request_id: int):
        body = json_body()
        req = service.decide(request_id=request_id, action=body.get("action"), admin_id=current_user_id())
        return jsonify({"request": remote_json(req)})
