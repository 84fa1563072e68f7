from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import ContextManager, Optional, Sequence

from ..core.enums import PayrollRecordStatus, PayrollRunStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, named_lock
from .model import PayLine, PayrollRecord, PayrollRun
from .repository import PayrollRepository

_RUN_COLUMNS = "run_id, period_year, period_month, status, working_days, started_at, processed_at"
_RECORD_COLUMNS = (
    "record_id, run_id, employee_id, base_salary, bonus, other_deductions, leave_deduction, "
    "deductions, net_pay, unpaid_leave_days, working_days, overtime_hours, status, pay_date"
)


def _to_run(r: dict) -> PayrollRun:
    return PayrollRun(
        run_id=int(r["run_id"]),
        period_year=int(r["period_year"]),
        period_month=int(r["period_month"]),
        status=PayrollRunStatus.parse(r["status"]),
        working_days=int(r["working_days"]),
        started_at=r["started_at"],
        processed_at=r.get("processed_at"),
    )


def _to_record(r: dict) -> PayrollRecord:
    return PayrollRecord(
        record_id=int(r["record_id"]),
        run_id=int(r["run_id"]),
        employee_id=int(r["employee_id"]),
        base_salary=Decimal(r["base_salary"]),
        bonus=Decimal(r["bonus"]),
        other_deductions=Decimal(r["other_deductions"]),
        leave_deduction=Decimal(r["leave_deduction"]),
        deductions=Decimal(r["deductions"]),
        net_pay=Decimal(r["net_pay"]),
        unpaid_leave_days=int(r["unpaid_leave_days"]),
        working_days=int(r["working_days"]),
        overtime_hours=Decimal(r["overtime_hours"]),
        status=PayrollRecordStatus.parse(r["status"]),
        pay_date=r.get("pay_date"),
    )


class MySQLPayrollRepository(PayrollRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def upsert_run(self, *, year: int, month: int, working_days: int, started_at: datetime) -> PayrollRun:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO payroll_runs(period_year, period_month, status, working_days, started_at)
                VALUES(%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    status = VALUES(status),
                    working_days = VALUES(working_days),
                    started_at = VALUES(started_at),
                    processed_at = NULL
                """,
                (int(year), int(month), PayrollRunStatus.PROCESSING.value, int(working_days), started_at),
            )
            cur.execute(
                f"SELECT {_RUN_COLUMNS} FROM payroll_runs WHERE period_year=%s AND period_month=%s",
                (int(year), int(month)),
            )
            return _to_run(fetchone(cur))

    def get_run(self, *, year: int, month: int) -> Optional[PayrollRun]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_RUN_COLUMNS} FROM payroll_runs WHERE period_year=%s AND period_month=%s",
                (int(year), int(month)),
            )
            r = fetchone(cur)
            return _to_run(r) if r else None

    def delete_records(self, *, run_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM payroll_records WHERE run_id=%s", (int(run_id),))
            return int(cur.rowcount)

    def create_record(
        self,
        *,
        run_id: int,
        line: PayLine,
        status: PayrollRecordStatus,
        pay_date: Optional[date],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO payroll_records(
                    run_id, employee_id, base_salary, bonus, other_deductions, leave_deduction,
                    deductions, net_pay, unpaid_leave_days, working_days, overtime_hours, status, pay_date
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(run_id),
                    line.employee_id,
                    line.base_salary,
                    line.bonus,
                    line.other_deductions,
                    line.leave_deduction,
                    line.deductions,
                    line.net_pay,
                    line.unpaid_leave_days,
                    line.working_days,
                    line.overtime_hours,
                    status.value,
                    pay_date,
                ),
            )
            return int(cur.lastrowid)

    def mark_processed(self, *, run_id: int, processed_at: datetime) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE payroll_runs SET status=%s, processed_at=%s WHERE run_id=%s",
                (PayrollRunStatus.PROCESSED.value, processed_at, int(run_id)),
            )

    def list_records(self, *, run_id: int) -> Sequence[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_RECORD_COLUMNS} FROM payroll_records WHERE run_id=%s ORDER BY employee_id",
                (int(run_id),),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def get_record(self, *, record_id: int) -> Optional[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_RECORD_COLUMNS} FROM payroll_records WHERE record_id=%s", (int(record_id),))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def update_record(
        self,
        *,
        record_id: int,
        base_salary: Decimal,
        bonus: Decimal,
        deductions: Decimal,
        net_pay: Decimal,
        status: PayrollRecordStatus,
        pay_date: Optional[date],
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE payroll_records
                SET base_salary=%s, bonus=%s, deductions=%s, net_pay=%s, status=%s, pay_date=%s
                WHERE record_id=%s
                """,
                (base_salary, bonus, deductions, net_pay, status.value, pay_date, int(record_id)),
            )
            return cur.rowcount > 0

    def period_lock(self, *, year: int, month: int, timeout: int) -> ContextManager[bool]:
        return named_lock(self._conn_factory, f"hcm_payroll_{int(year):04d}_{int(month):02d}", timeout=timeout)
