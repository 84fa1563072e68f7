from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = "attendance_id, employee_id, work_date, check_in, check_out, status, note"


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        employee_id=int(r["employee_id"]),
        work_date=r["work_date"],
        check_in=r.get("check_in"),
        check_out=r.get("check_out"),
        status=AttendanceStatus.parse(r["status"]),
        note=r.get("note"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE employee_id=%s AND work_date=%s",
                (int(employee_id), work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def claim_check_in(
        self,
        *,
        employee_id: int,
        work_date: date,
        check_in: datetime,
        status: AttendanceStatus,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            # Assignments run left to right: status must read the old check_in.
            # rowcount: 1 inserted, 2 updated, 0 untouched (already checked in,
            # or an earlier check-out is on the row).
            cur.execute(
                """
                INSERT INTO attendance_records(employee_id, work_date, check_in, status)
                VALUES(%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    status = IF(check_in IS NULL AND (check_out IS NULL OR check_out >= VALUES(check_in)),
                                VALUES(status), status),
                    check_in = IF(check_in IS NULL AND (check_out IS NULL OR check_out >= VALUES(check_in)),
                                  VALUES(check_in), check_in)
                """,
                (int(employee_id), work_date, check_in, status.value),
            )
            return cur.rowcount in (1, 2)

    def record_check_out(
        self,
        *,
        employee_id: int,
        work_date: date,
        check_out: datetime,
        status: AttendanceStatus,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET check_out=%s, status=%s
                WHERE employee_id=%s AND work_date=%s
                  AND check_in IS NOT NULL AND check_out IS NULL
                """,
                (check_out, status.value, int(employee_id), work_date),
            )
            return cur.rowcount > 0

    def apply_correction(
        self,
        *,
        employee_id: int,
        work_date: date,
        check_in: Optional[datetime],
        check_out: Optional[datetime],
        status: AttendanceStatus,
    ) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(employee_id, work_date, check_in, check_out, status)
                VALUES(%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    check_in = VALUES(check_in),
                    check_out = VALUES(check_out),
                    status = VALUES(status)
                """,
                (int(employee_id), work_date, check_in, check_out, status.value),
            )
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE employee_id=%s AND work_date=%s",
                (int(employee_id), work_date),
            )
            return _to_record(fetchone(cur))

    def list_for_employee(self, employee_id: int, start: date, end: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE employee_id=%s AND work_date BETWEEN %s AND %s
                ORDER BY work_date DESC
                """,
                (int(employee_id), start, end),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_for_range(self, start: date, end: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE work_date BETWEEN %s AND %s
                ORDER BY work_date, employee_id
                """,
                (start, end),
            )
            return [_to_record(r) for r in fetchall(cur)]
