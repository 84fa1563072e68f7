from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import admin_required, current_user_id, iso, json_body


def register(app: Flask, container) -> None:
    service = container.leave_service

    @app.route("/api/leave/admin/<int:leave_id>", methods=["PATCH"], endpoint="leave_decide")
    @admin_required
    def leave_decide(leave_id: int):
        body = json_body()
        leave = service.decide(leave_id=leave_id, status=body.get("status"), actor_id=current_user_id())
        return jsonify(
            {
                "id": leave.leave_id,
                "employeeId": leave.employee_id,
                "leaveType": leave.leave_type.value,
                "startDate": iso(leave.start_date),
                "endDate": iso(leave.end_date),
                "days": leave.days,
                "status": leave.status.value,
                "isPaid": leave.is_paid,
            }
        )
