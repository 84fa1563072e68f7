from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from ..core.enums import EmployeeStatus


@dataclass(frozen=True)
class Employee:
    """Directory entry as seen by the attendance/payroll core."""

    employee_id: int
    full_name: str
    status: EmployeeStatus
    salary: Decimal
    leave_balance: int
    department: Optional[str] = None

    @property
    def is_active(self) -> bool:
        return self.status is EmployeeStatus.ACTIVE
