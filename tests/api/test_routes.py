from __future__ import annotations

from datetime import date

from hcm_attendance.core.enums import LeaveStatus

from fakes import ADMIN_ID, fix_at


def punch(client, action, meters):
    fix = fix_at(meters)
    return client.post(
        "/api/attendance/employee",
        json={"action": action, "latitude": fix.latitude, "longitude": fix.longitude},
    )


def test_requires_login(client):
    resp = client.get("/api/attendance/employee")
    assert resp.status_code == 401
    assert resp.get_json()["error"] == "UNAUTHORIZED"


def test_check_in_inside_fence(login):
    client = login(1)

    resp = punch(client, "checkIn", 550)

    body = resp.get_json()
    assert resp.status_code == 200
    assert body["success"] is True
    assert body["data"]["status"] == "present"
    assert body["location"] == {"verified": True, "remote": False, "distance": 550}


def test_check_in_outside_fence_reports_distance(login):
    client = login(1)

    resp = punch(client, "checkIn", 700)

    body = resp.get_json()
    assert resp.status_code == 403
    assert body["error"] == "LOCATION_OUT_OF_RANGE"
    assert (body["distance"], body["required"]) == (700, 600)


def test_check_out_before_check_in_conflicts(login):
    resp = punch(login(1), "checkOut", 0)
    assert resp.status_code == 409
    assert resp.get_json()["error"] == "NOT_CHECKED_IN"


def test_bad_punch_payloads(login):
    client = login(1)
    assert punch(client, "teleport", 0).status_code == 400
    resp = client.post("/api/attendance/employee", json={"action": "checkIn", "latitude": 33.6})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "VALIDATION_ERROR"


def test_monthly_view(login):
    client = login(1)
    punch(client, "checkIn", 0)

    resp = client.get("/api/attendance/employee?year=2026&month=3")

    body = resp.get_json()
    assert resp.status_code == 200
    assert body["month"] == {"year": 2026, "month": 3}
    assert body["today"]["status"] == "present"
    assert body["summary"]["absentDays"] == 6
    assert body["records"][0]["date"] == "2026-03-10"


def test_admin_routes_require_admin_role(login):
    assert login(1).get("/api/attendance/admin/day").status_code == 403


def test_admin_day_view(login):
    client = login(ADMIN_ID, "admin")

    resp = client.get("/api/attendance/admin/day?date=2026-03-10")

    records = resp.get_json()["records"]
    assert [(r["employeeId"], r["status"]) for r in records] == [(1, "absent"), (2, "absent")]


def test_correction_round_trip(login):
    client = login(1)
    resp = client.post(
        "/api/attendance/corrections",
        json={"date": "2026-03-09", "issue": "Forgot to check in", "requestedCheckIn": "09:00"},
    )
    assert resp.status_code == 201
    assert resp.get_json()["state"] == "pending"
    correction_id = resp.get_json()["id"]

    admin = login(ADMIN_ID, "admin")
    resp = admin.patch(f"/api/attendance/admin/corrections/{correction_id}", json={"action": "approved"})
    body = resp.get_json()
    assert resp.status_code == 200
    assert body["correction"]["state"] == "approved"
    assert body["record"]["checkIn"] == "2026-03-09T09:00:00"
    assert body["record"]["status"] == "present"

    again = admin.patch(f"/api/attendance/admin/corrections/{correction_id}", json={"action": "rejected"})
    assert again.status_code == 409
    assert again.get_json()["error"] == "ALREADY_PROCESSED"

    listing = admin.get("/api/attendance/admin/corrections?state=approved").get_json()
    assert listing["total"] == 1


def test_remote_overlap_conflict(login, remote_work):
    remote_work.add(1, date(2026, 3, 12), date(2026, 3, 20))
    client = login(1)

    resp = client.post(
        "/api/attendance/remote",
        json={"startDate": "2026-03-10", "endDate": "2026-03-15", "reason": "Renovation"},
    )

    assert resp.status_code == 409
    assert resp.get_json()["error"] == "OVERLAPPING_REQUEST"


def test_remote_request_and_decision(login):
    resp = login(2).post(
        "/api/attendance/remote",
        json={"startDate": "2026-03-11", "endDate": "2026-03-12", "reason": "Renovation"},
    )
    assert resp.status_code == 201
    request_id = resp.get_json()["id"]

    admin = login(ADMIN_ID, "admin")
    resp = admin.patch(f"/api/attendance/admin/remote/{request_id}", json={"action": "approved"})
    assert resp.get_json()["request"]["approvedBy"] == ADMIN_ID


def test_leave_decision(login, leaves, employees):
    leave = leaves.add(2, date(2026, 3, 16), date(2026, 3, 17), status=LeaveStatus.PENDING)

    resp = login(ADMIN_ID, "admin").patch(f"/api/leave/admin/{leave.leave_id}", json={"status": "Approved"})

    assert resp.status_code == 200
    assert resp.get_json()["days"] == 2
    assert employees.get_by_id(2).leave_balance == 8


def test_payroll_run_and_patch(login, leaves):
    leaves.add(1, date(2026, 1, 13), date(2026, 1, 15), is_paid=False)
    admin = login(ADMIN_ID, "admin")

    resp = admin.post("/api/payroll/runs", json={"year": 2026, "month": 1})

    body = resp.get_json()
    assert resp.status_code == 201
    assert body["status"] == "processed"
    assert body["workingDays"] == 22
    record = next(r for r in body["records"] if r["employeeId"] == 1)
    assert record["netPay"] == 51818

    resp = admin.patch(f"/api/payroll/records/{record['id']}", json={"bonus": 2000, "payDate": "2026-02-01"})
    patched = resp.get_json()
    assert patched["bonus"] == 2000
    assert patched["netPay"] == 60000 + 2000 - 8182
    assert patched["payDate"] == "2026-02-01"

    assert admin.get("/api/payroll/runs/2026/1").status_code == 200
    assert admin.get("/api/payroll/runs/2026/2").status_code == 404


def test_unknown_route_is_json(client):
    resp = client.get("/api/nope")
    assert resp.status_code == 404
    assert resp.get_json()["error"] == "NOT_FOUND"
