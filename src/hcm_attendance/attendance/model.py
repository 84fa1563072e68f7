from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance row per (employee, calendar date)."""

    attendance_id: int
    employee_id: int
    work_date: date
    check_in: Optional[datetime]
    check_out: Optional[datetime]
    status: AttendanceStatus
    note: Optional[str] = None


@dataclass(frozen=True)
class DayRow:
    """Read-model for one employee-day, recorded or synthesized as absent."""

    employee_id: int
    work_date: date
    status: AttendanceStatus
    check_in: Optional[datetime] = None
    check_out: Optional[datetime] = None
    total_minutes: int = 0
    overtime_minutes: int = 0
    attendance_id: Optional[int] = None
    employee_name: Optional[str] = None

    @property
    def recorded(self) -> bool:
        return self.attendance_id is not None

    @property
    def total_hours(self) -> float:
        return round(self.total_minutes / 60, 2)

    @property
    def overtime_hours(self) -> float:
        return round(self.overtime_minutes / 60, 2)


@dataclass(frozen=True)
class MonthlySummary:
    present_days: int = 0
    late_days: int = 0
    absent_days: int = 0
    half_days: int = 0
    total_hours: float = 0.0
    avg_hours: float = 0.0
    attendance_rate: float = 0.0
    overtime_hours: float = 0.0


@dataclass(frozen=True)
class MonthlyAttendance:
    employee_id: int
    year: int
    month: int
    today: Optional[AttendanceRecord]
    summary: MonthlySummary
    records: Sequence[DayRow] = field(default_factory=list)
    corrections: Sequence = field(default_factory=list)


@dataclass(frozen=True)
class PunchResult:
    """Outcome of a successful check-in or check-out."""

    record: AttendanceRecord
    distance_meters: float
    remote: bool
    total_hours: Optional[float] = None
