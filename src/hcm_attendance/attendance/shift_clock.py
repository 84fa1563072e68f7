from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time
from typing import Optional, Union

from ..common.datetime_utils import BusinessClock, minutes_of_day, parse_hhmm
from ..core.constants import DEFAULT_LATE_GRACE_MINUTES, HALF_DAY_HOURS, STANDARD_DAY_MINUTES
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from .model import AttendanceRecord


@dataclass(frozen=True)
class ShiftDeltas:
    late_minutes: int
    early_minutes: int
    overtime_minutes: int
    total_minutes: int

    @property
    def total_hours(self) -> float:
        return self.total_minutes / 60


class ShiftClock:
    """Shift-boundary arithmetic on wall-clock minutes.

    Boundaries and timestamps are compared as hour/minute components in the business
    timezone. Overtime is measured against the standard day length from total worked
    minutes, independently of whether the check-out crossed ``shift_end``.
    """

    def __init__(
        self,
        shift_start: Union[str, time],
        shift_end: Union[str, time],
        *,
        grace_minutes: int = DEFAULT_LATE_GRACE_MINUTES,
        standard_minutes: int = STANDARD_DAY_MINUTES,
        half_day_hours: int = HALF_DAY_HOURS,
        clock: Optional[BusinessClock] = None,
    ):
        self._start = self._as_time(shift_start, "shift_start")
        self._end = self._as_time(shift_end, "shift_end")
        self._grace = int(grace_minutes)
        self._standard = int(standard_minutes)
        self._half_day_minutes = int(half_day_hours) * 60
        self._clock = clock

    @staticmethod
    def _as_time(value: Union[str, time], name: str) -> time:
        if isinstance(value, time):
            return value
        parsed = parse_hhmm(value)
        if parsed is None:
            raise ValidationError(f"{name} is required")
        return parsed

    @property
    def shift_start(self) -> time:
        return self._start

    @property
    def shift_end(self) -> time:
        return self._end

    def _minutes(self, value: datetime) -> int:
        if self._clock is not None:
            value = self._clock.localize(value)
        elif value.tzinfo is not None:
            raise ValidationError("aware datetime needs a business clock")
        return minutes_of_day(value)

    def is_late(self, check_in: datetime) -> bool:
        return self._minutes(check_in) > minutes_of_day(self._start) + self._grace

    def determine_status(self, check_in: datetime) -> AttendanceStatus:
        return AttendanceStatus.LATE if self.is_late(check_in) else AttendanceStatus.PRESENT

    def compute_deltas(self, check_in: datetime, check_out: datetime) -> ShiftDeltas:
        in_m = self._minutes(check_in)
        out_m = self._minutes(check_out)
        total = max(0, out_m - in_m)
        return ShiftDeltas(
            late_minutes=max(0, in_m - minutes_of_day(self._start)),
            early_minutes=max(0, minutes_of_day(self._end) - out_m),
            overtime_minutes=max(0, total - self._standard),
            total_minutes=total,
        )

    def worked_minutes(self, check_in: Optional[datetime], check_out: Optional[datetime]) -> int:
        if check_in is None or check_out is None:
            return 0
        return self.compute_deltas(check_in, check_out).total_minutes

    def is_half_day(self, check_in: Optional[datetime], check_out: Optional[datetime]) -> bool:
        total = self.worked_minutes(check_in, check_out)
        return 0 < total < self._half_day_minutes

    def is_short_day(self, check_in: datetime, check_out: datetime) -> bool:
        """Check-out rule: any stay under the half-day threshold, zero minutes included."""
        return self.worked_minutes(check_in, check_out) < self._half_day_minutes

    def effective_status(self, record: AttendanceRecord) -> AttendanceStatus:
        """Read-time status: short worked days surface as half-day whatever was stored."""
        if self.is_half_day(record.check_in, record.check_out):
            return AttendanceStatus.HALF_DAY
        return record.status
