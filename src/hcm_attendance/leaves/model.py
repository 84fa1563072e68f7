from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..core.enums import LeaveStatus, LeaveType


@dataclass(frozen=True)
class Leave:
    leave_id: int
    employee_id: int
    leave_type: LeaveType
    start_date: date
    end_date: date
    status: LeaveStatus
    is_paid: bool

    @property
    def days(self) -> int:
        return (self.end_date - self.start_date).days + 1
