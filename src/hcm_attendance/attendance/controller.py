from __future__ import annotations

from datetime import datetime

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import admin_required, current_user_id, iso, json_body, login_required
from ..common.validators import require_int
from ..core.exceptions import ValidationError
from ..corrections.controller import correction_json
from ..geofence.evaluator import LocationFix
from .serializers import day_row_json, record_json, summary_json


def _parse_captured_at(value):
    if value in (None, ""):
        return None
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        raise ValidationError("capturedAt must be an ISO-8601 timestamp")


def register(app: Flask, container) -> None:
    service = container.attendance_service

    @app.route("/api/attendance/employee", methods=["POST"], endpoint="attendance_punch")
    @login_required
    def attendance_punch():
        body = json_body()
        action = str(body.get("action") or "").strip().lower()
        fix = LocationFix.parse(
            body.get("latitude"),
            body.get("longitude"),
            captured_at=_parse_captured_at(body.get("capturedAt")),
        )

        if action == "checkin":
            result = service.check_in(current_user_id(), fix)
            data = {"status": result.record.status.value, "checkIn": iso(result.record.check_in)}
            message = "Checked in successfully"
        elif action == "checkout":
            result = service.check_out(current_user_id(), fix)
            data = {
                "status": result.record.status.value,
                "checkOut": iso(result.record.check_out),
                "totalHours": result.total_hours,
            }
            message = "Checked out successfully"
        else:
            raise ValidationError("action must be checkIn or checkOut")

        return jsonify(
            {
                "success": True,
                "message": message,
                "data": data,
                "location": {"verified": True, "remote": result.remote, "distance": round(result.distance_meters)},
            }
        )

    @app.route("/api/attendance/employee", methods=["GET"], endpoint="attendance_month")
    @login_required
    def attendance_month():
        today = container.clock.today()
        year = require_int(request.args.get("year") or today.year, "year")
        month = require_int(request.args.get("month") or today.month, "month")

        view = service.list_month(current_user_id(), year, month)
        return jsonify(
            {
                "today": record_json(view.today),
                "summary": summary_json(view.summary),
                "records": [day_row_json(r) for r in view.records],
                "corrections": [correction_json(c) for c in view.corrections],
                "month": {"year": view.year, "month": view.month},
            }
        )

    @app.route("/api/attendance/admin/day", methods=["GET"], endpoint="attendance_admin_day")
    @admin_required
    def attendance_admin_day():
        raw = request.args.get("date")
        work_date = parse_iso_date(raw) if raw else container.clock.today()
        rows = service.day_view(work_date)
        return jsonify({"date": iso(work_date), "records": [day_row_json(r) for r in rows]})
