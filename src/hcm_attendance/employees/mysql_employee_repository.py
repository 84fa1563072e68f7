from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

from ..core.enums import EmployeeStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = "employee_id, full_name, department, status, salary, leave_balance"


def _to_employee(r: dict) -> Employee:
    return Employee(
        employee_id=int(r["employee_id"]),
        full_name=r["full_name"],
        status=EmployeeStatus.parse(r["status"]),
        salary=Decimal(r["salary"] or 0),
        leave_balance=int(r["leave_balance"] or 0),
        department=r.get("department"),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id=%s", (int(employee_id),))
            r = fetchone(cur)
            return _to_employee(r) if r else None

    def list_active(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM employees WHERE status=%s ORDER BY employee_id",
                (EmployeeStatus.ACTIVE.value,),
            )
            return [_to_employee(r) for r in fetchall(cur)]

    def adjust_leave_balance(self, *, employee_id: int, delta: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE employees SET leave_balance = leave_balance + %s WHERE employee_id=%s",
                (int(delta), int(employee_id)),
            )
            return cur.rowcount > 0
