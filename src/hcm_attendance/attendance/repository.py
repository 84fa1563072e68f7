from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def claim_check_in(
        self,
        *,
        employee_id: int,
        work_date: date,
        check_in: datetime,
        status: AttendanceStatus,
    ) -> bool:
        """Create the day's row, or fill its empty check-in, in one statement.

        Returns False when the day already has a check-in (the caller lost the race).
        """

        raise NotImplementedError

    def record_check_out(
        self,
        *,
        employee_id: int,
        work_date: date,
        check_out: datetime,
        status: AttendanceStatus,
    ) -> bool:
        """Set check-out only if checked in and not yet checked out."""

        raise NotImplementedError

    def apply_correction(
        self,
        *,
        employee_id: int,
        work_date: date,
        check_in: Optional[datetime],
        check_out: Optional[datetime],
        status: AttendanceStatus,
    ) -> AttendanceRecord:
        """Upsert used after an approved correction."""

        raise NotImplementedError

    def list_for_employee(self, employee_id: int, start: date, end: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_range(self, start: date, end: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError
