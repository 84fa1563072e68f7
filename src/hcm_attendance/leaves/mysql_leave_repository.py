from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import LeaveStatus, LeaveType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Leave
from .repository import LeaveRepository

_COLUMNS = "leave_id, employee_id, leave_type, start_date, end_date, status, is_paid"


def _to_leave(r: dict) -> Leave:
    return Leave(
        leave_id=int(r["leave_id"]),
        employee_id=int(r["employee_id"]),
        leave_type=LeaveType.parse(r["leave_type"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        status=LeaveStatus.parse(r["status"]),
        is_paid=bool(r["is_paid"]),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, *, leave_id: int) -> Optional[Leave]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM leaves WHERE leave_id=%s", (int(leave_id),))
            r = fetchone(cur)
            return _to_leave(r) if r else None

    def list_approved_overlapping(self, *, start: date, end: date) -> Sequence[Leave]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leaves
                WHERE status=%s AND start_date <= %s AND end_date >= %s
                ORDER BY employee_id, start_date
                """,
                (LeaveStatus.APPROVED.value, end, start),
            )
            return [_to_leave(r) for r in fetchall(cur)]

    def update_status(self, *, leave_id: int, status: LeaveStatus, expected: LeaveStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE leaves SET status=%s WHERE leave_id=%s AND status=%s",
                (status.value, int(leave_id), expected.value),
            )
            return cur.rowcount > 0
