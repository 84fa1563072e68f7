from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import RequestState
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import RemoteWorkRequest
from .repository import RemoteWorkRepository

_COLUMNS = "request_id, employee_id, start_date, end_date, reason, state, created_at, approved_by, approved_at"


def _to_request(r: dict) -> RemoteWorkRequest:
    return RemoteWorkRequest(
        request_id=int(r["request_id"]),
        employee_id=int(r["employee_id"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        reason=r["reason"],
        state=RequestState.parse(r["state"]),
        created_at=r["created_at"],
        approved_by=r.get("approved_by"),
        approved_at=r.get("approved_at"),
    )


class MySQLRemoteWorkRepository(RemoteWorkRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, employee_id: int, start_date: date, end_date: date, reason: str, created_at: datetime) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO remote_work_requests(employee_id, start_date, end_date, reason, state, created_at)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (int(employee_id), start_date, end_date, reason, RequestState.PENDING.value, created_at),
            )
            return int(cur.lastrowid)

    def get(self, *, request_id: int) -> Optional[RemoteWorkRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM remote_work_requests WHERE request_id=%s", (int(request_id),))
            r = fetchone(cur)
            return _to_request(r) if r else None

    def find_overlapping(
        self,
        *,
        employee_id: int,
        start_date: date,
        end_date: date,
        states: Sequence[RequestState],
    ) -> Optional[RemoteWorkRequest]:
        placeholders = ",".join(["%s"] * len(states))
        with db_cursor(self._conn_factory) as (_, cur):
            # FOR UPDATE serializes concurrent creations for the same employee inside a transaction.
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM remote_work_requests
                WHERE employee_id=%s
                  AND state IN ({placeholders})
                  AND start_date <= %s AND end_date >= %s
                ORDER BY start_date
                LIMIT 1
                FOR UPDATE
                """,
                (int(employee_id), *[s.value for s in states], end_date, start_date),
            )
            r = fetchone(cur)
            return _to_request(r) if r else None

    def list_requests(
        self,
        *,
        employee_id: Optional[int] = None,
        state: Optional[RequestState] = None,
        limit: int = 200,
    ) -> Sequence[RemoteWorkRequest]:
        clauses = ["1=1"]
        params: list[object] = []

        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(int(employee_id))
        if state is not None:
            clauses.append("state=%s")
            params.append(state.value)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM remote_work_requests
                WHERE {where}
                ORDER BY (state='pending') DESC, created_at DESC
                LIMIT %s
                """,
                tuple(params + [int(limit)]),
            )
            return [_to_request(r) for r in fetchall(cur)]

    def decide(self, *, request_id: int, state: RequestState, decided_by: int, decided_at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE remote_work_requests
                SET state=%s, approved_by=%s, approved_at=%s
                WHERE request_id=%s AND state=%s
                """,
                (state.value, int(decided_by), decided_at, int(request_id), RequestState.PENDING.value),
            )
            return cur.rowcount > 0
