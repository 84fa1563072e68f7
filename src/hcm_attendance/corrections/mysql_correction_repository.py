from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence, Tuple

from ..core.enums import CorrectionIssue, RequestState
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceCorrection
from .repository import CorrectionRepository

_COLUMNS = (
    "correction_id, employee_id, work_date, issue, requested_check_in, requested_check_out, "
    "note, state, created_at, decided_by, decided_at"
)


def _to_correction(r: dict) -> AttendanceCorrection:
    return AttendanceCorrection(
        correction_id=int(r["correction_id"]),
        employee_id=int(r["employee_id"]),
        work_date=r["work_date"],
        issue=CorrectionIssue.parse(r["issue"]),
        requested_check_in=r.get("requested_check_in"),
        requested_check_out=r.get("requested_check_out"),
        note=r.get("note"),
        state=RequestState.parse(r["state"]),
        created_at=r["created_at"],
        decided_by=r.get("decided_by"),
        decided_at=r.get("decided_at"),
    )


def _where(
    *,
    employee_id: Optional[int],
    state: Optional[RequestState],
    start: Optional[date],
    end: Optional[date],
) -> Tuple[str, list]:
    clauses = ["1=1"]
    params: list[object] = []

    if employee_id is not None:
        clauses.append("employee_id=%s")
        params.append(int(employee_id))
    if state is not None:
        clauses.append("state=%s")
        params.append(state.value)
    if start is not None:
        clauses.append("work_date >= %s")
        params.append(start)
    if end is not None:
        clauses.append("work_date <= %s")
        params.append(end)

    return " AND ".join(clauses), params


class MySQLCorrectionRepository(CorrectionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        employee_id: int,
        work_date: date,
        issue: CorrectionIssue,
        requested_check_in: Optional[datetime],
        requested_check_out: Optional[datetime],
        note: Optional[str],
        created_at: datetime,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_corrections(
                    employee_id, work_date, issue, requested_check_in, requested_check_out, note, state, created_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(employee_id),
                    work_date,
                    issue.value,
                    requested_check_in,
                    requested_check_out,
                    note,
                    RequestState.PENDING.value,
                    created_at,
                ),
            )
            return int(cur.lastrowid)

    def get(self, *, correction_id: int) -> Optional[AttendanceCorrection]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_corrections WHERE correction_id=%s",
                (int(correction_id),),
            )
            r = fetchone(cur)
            return _to_correction(r) if r else None

    def list_corrections(
        self,
        *,
        employee_id: Optional[int] = None,
        state: Optional[RequestState] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
        offset: int = 0,
        limit: int = 200,
    ) -> Sequence[AttendanceCorrection]:
        where, params = _where(employee_id=employee_id, state=state, start=start, end=end)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_corrections
                WHERE {where}
                ORDER BY created_at DESC, correction_id DESC
                LIMIT %s OFFSET %s
                """,
                tuple(params + [int(limit), int(offset)]),
            )
            return [_to_correction(r) for r in fetchall(cur)]

    def count_corrections(
        self,
        *,
        employee_id: Optional[int] = None,
        state: Optional[RequestState] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> int:
        where, params = _where(employee_id=employee_id, state=state, start=start, end=end)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS n FROM attendance_corrections WHERE {where}", tuple(params))
            r = fetchone(cur)
            return int(r["n"]) if r else 0

    def decide(self, *, correction_id: int, state: RequestState, decided_by: int, decided_at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_corrections
                SET state=%s, decided_by=%s, decided_at=%s
                WHERE correction_id=%s AND state=%s
                """,
                (state.value, int(decided_by), decided_at, int(correction_id), RequestState.PENDING.value),
            )
            return cur.rowcount > 0
