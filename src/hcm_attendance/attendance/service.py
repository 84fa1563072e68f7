from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime
from typing import List, Optional, Tuple

from ..audit.sink import AuditEvent, AuditSink
from ..common.datetime_utils import BusinessClock, business_days, month_bounds
from ..core.constants import DEFAULT_LOCATION_MAX_AGE_SECONDS
from ..core.enums import AttendanceStatus
from ..core.exceptions import (
    AlreadyCheckedIn,
    AlreadyCheckedOut,
    CheckOutPrecedesCheckIn,
    LocationOutOfRange,
    NotCheckedIn,
    NotFoundError,
    ValidationError,
)
from ..corrections.repository import CorrectionRepository
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..geofence.evaluator import GeoFence, LocationFix
from ..remote_work.service import RemoteWorkService
from .absence import join_expected, summarize
from .model import AttendanceRecord, DayRow, MonthlyAttendance, PunchResult
from .repository import AttendanceRepository
from .shift_clock import ShiftClock

logger = logging.getLogger(__name__)


class AttendanceService:
    """Attendance ledger: check-in/out and monthly/day read views."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        remote_work: RemoteWorkService,
        corrections: CorrectionRepository,
        *,
        shift_clock: ShiftClock,
        geofence: GeoFence,
        clock: BusinessClock,
        audit: AuditSink,
        location_max_age_seconds: int = DEFAULT_LOCATION_MAX_AGE_SECONDS,
    ):
        self._attendance = attendance
        self._employees = employees
        self._remote_work = remote_work
        self._corrections = corrections
        self._shift_clock = shift_clock
        self._geofence = geofence
        self._clock = clock
        self._audit = audit
        self._max_fix_age = int(location_max_age_seconds)

    def _require_employee(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Employee record not found")
        return employee

    def _check_location(self, *, employee_id: int, now: datetime, fix: LocationFix) -> Tuple[float, bool]:
        """Return (distance, remote); raise when the fix is stale or outside the fence."""
        if fix.captured_at is not None:
            age = (now - self._clock.localize(fix.captured_at)).total_seconds()
            if abs(age) > self._max_fix_age:
                raise ValidationError(
                    "Location fix is too old, please retry",
                    details={"ageSeconds": int(age), "maxAgeSeconds": self._max_fix_age},
                )

        check = self._geofence.evaluate(fix)
        if self._remote_work.covering(employee_id=employee_id, day=now.date()):
            return check.distance, True

        if not check.inside:
            logger.warning(
                "employee %s outside geofence: %.0fm > %.0fm", employee_id, check.distance, check.required
            )
            raise LocationOutOfRange(distance=check.distance, required=check.required)
        return check.distance, False

    def _now(self, now: Optional[datetime]) -> datetime:
        return self._clock.localize(now) if now is not None else self._clock.now()

    def check_in(self, employee_id: int, fix: LocationFix, *, now: Optional[datetime] = None) -> PunchResult:
        now = self._now(now)
        today = now.date()
        employee = self._require_employee(employee_id)

        existing = self._attendance.get_for_employee_and_date(employee.employee_id, today)
        if existing and existing.check_in is not None:
            raise AlreadyCheckedIn(
                "Already checked in today",
                details={"checkIn": existing.check_in.isoformat(timespec="minutes")},
            )
        if existing and existing.check_out is not None and existing.check_out < now:
            raise CheckOutPrecedesCheckIn(
                "A check-out earlier than now is already recorded for today",
                details={"checkOut": existing.check_out.isoformat(timespec="minutes")},
            )

        distance, remote = self._check_location(employee_id=employee.employee_id, now=now, fix=fix)
        status = self._shift_clock.determine_status(now)

        claimed = self._attendance.claim_check_in(
            employee_id=employee.employee_id,
            work_date=today,
            check_in=now,
            status=status,
        )
        if not claimed:
            raise AlreadyCheckedIn("Already checked in today")

        record = self._attendance.get_for_employee_and_date(employee.employee_id, today)
        logger.info("employee %s checked in at %s (%s)", employee.employee_id, now.isoformat(), status.value)
        self._audit.emit(
            AuditEvent(
                action="attendance.check_in",
                actor=employee.employee_id,
                at=now,
                subject=f"attendance:{record.attendance_id}",
                details={"status": status.value, "distance": round(distance), "remote": remote},
            )
        )
        return PunchResult(record=record, distance_meters=distance, remote=remote)

    def check_out(self, employee_id: int, fix: LocationFix, *, now: Optional[datetime] = None) -> PunchResult:
        now = self._now(now)
        today = now.date()
        employee = self._require_employee(employee_id)

        existing = self._attendance.get_for_employee_and_date(employee.employee_id, today)
        if not existing or existing.check_in is None:
            raise NotCheckedIn("Must check in before checking out")
        if existing.check_out is not None:
            raise AlreadyCheckedOut(
                "Already checked out today",
                details={"checkOut": existing.check_out.isoformat(timespec="minutes")},
            )

        distance, remote = self._check_location(employee_id=employee.employee_id, now=now, fix=fix)

        status = existing.status
        if self._shift_clock.is_short_day(existing.check_in, now):
            status = AttendanceStatus.HALF_DAY

        updated = self._attendance.record_check_out(
            employee_id=employee.employee_id,
            work_date=today,
            check_out=now,
            status=status,
        )
        if not updated:
            raise AlreadyCheckedOut("Already checked out today")

        record = self._attendance.get_for_employee_and_date(employee.employee_id, today)
        total_hours = self._shift_clock.worked_minutes(record.check_in, record.check_out) / 60
        logger.info("employee %s checked out at %s (%s)", employee.employee_id, now.isoformat(), status.value)
        self._audit.emit(
            AuditEvent(
                action="attendance.check_out",
                actor=employee.employee_id,
                at=now,
                subject=f"attendance:{record.attendance_id}",
                details={"status": status.value, "distance": round(distance), "remote": remote},
            )
        )
        return PunchResult(record=record, distance_meters=distance, remote=remote, total_hours=round(total_hours, 2))

    def get_today_record(self, employee_id: int) -> Optional[AttendanceRecord]:
        return self._attendance.get_for_employee_and_date(int(employee_id), self._clock.today())

    def list_month(self, employee_id: int, year: int, month: int) -> MonthlyAttendance:
        employee = self._require_employee(employee_id)
        start, end = month_bounds(year, month)
        until = min(end, self._clock.today())

        expected = [(employee.employee_id, d) for d in business_days(start, until)]
        records = self._attendance.list_for_employee(employee.employee_id, start, end)
        rows = join_expected(expected, records, self._shift_clock)

        corrections = self._corrections.list_corrections(employee_id=employee.employee_id, start=start, end=end)

        return MonthlyAttendance(
            employee_id=employee.employee_id,
            year=int(year),
            month=int(month),
            today=self.get_today_record(employee.employee_id),
            summary=summarize(rows),
            records=list(reversed(rows)),
            corrections=list(corrections),
        )

    def day_view(self, work_date: date) -> List[DayRow]:
        """Manager view of one date: every active employee, absent when unrecorded."""
        roster = self._employees.list_active()
        names = {e.employee_id: e.full_name for e in roster}
        expected = [(e.employee_id, work_date) for e in roster] if work_date.weekday() < 5 else []
        records = self._attendance.list_for_range(work_date, work_date)
        rows = join_expected(expected, records, self._shift_clock)
        return [replace(r, employee_name=names.get(r.employee_id)) for r in rows]
