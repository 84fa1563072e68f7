from __future__ import annotations

from flask import Flask, jsonify

from ..common.datetime_utils import parse_iso_date
from ..common.http import admin_required, current_user_id, iso, json_body, money
from ..common.validators import require_int
from .model import PayrollRecord, PayrollRunResult


def payroll_record_json(r: PayrollRecord):
    return {
        "id": r.record_id,
        "runId": r.run_id,
        "employeeId": r.employee_id,
        "baseSalary": money(r.base_salary),
        "bonus": money(r.bonus),
        "otherDeductions": money(r.other_deductions),
        "leaveDeduction": money(r.leave_deduction),
        "deductions": money(r.deductions),
        "netPay": money(r.net_pay),
        "unpaidLeaveDays": r.unpaid_leave_days,
        "workingDays": r.working_days,
        "overtimeHours": money(r.overtime_hours),
        "status": r.status.value,
        "payDate": iso(r.pay_date),
    }


def payroll_run_json(result: PayrollRunResult):
    run = result.run
    return {
        "runId": run.run_id,
        "year": run.period_year,
        "month": run.period_month,
        "status": run.status.value,
        "workingDays": run.working_days,
        "startedAt": iso(run.started_at),
        "processedAt": iso(run.processed_at),
        "records": [payroll_record_json(r) for r in result.records],
    }


def register(app: Flask, container) -> None:
    service = container.payroll_service

    @app.route("/api/payroll/runs", methods=["POST"], endpoint="payroll_run")
    @admin_required
    def payroll_run():
        body = json_body()
        result = service.run(
            year=require_int(body.get("year"), "year"),
            month=require_int(body.get("month"), "month"),
            actor_id=current_user_id(),
        )
        return jsonify(payroll_run_json(result)), 201

    @app.route("/api/payroll/runs/<int:year>/<int:month>", methods=["GET"], endpoint="payroll_run_get")
    @admin_required
    def payroll_run_get(year: int, month: int):
        return jsonify(payroll_run_json(service.get_run(year=year, month=month)))

    @app.route("/api/payroll/records/<int:record_id>", methods=["PATCH"], endpoint="payroll_record_update")
    @admin_required
    def payroll_record_update(record_id: int):
        body = json_body()
        record = service.update_record(
            record_id=record_id,
            base_salary=body.get("baseSalary"),
            bonus=body.get("bonus"),
            deductions=body.get("deductions"),
            status=body.get("status"),
            pay_date=parse_iso_date(body["payDate"]) if body.get("payDate") else None,
        )
        return jsonify(payroll_record_json(record))
