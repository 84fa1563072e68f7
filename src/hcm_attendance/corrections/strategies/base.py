from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ...attendance.shift_clock import ShiftClock
from ...core.enums import AttendanceStatus


@dataclass(frozen=True)
class CorrectionContext:
    """Times after the correction is merged onto the existing record."""

    work_date: date
    check_in: Optional[datetime]
    check_out: Optional[datetime]
    requested_check_in: Optional[datetime]
    requested_check_out: Optional[datetime]
    existing_status: Optional[AttendanceStatus] = None

    @property
    def fallback_status(self) -> AttendanceStatus:
        return self.existing_status or AttendanceStatus.PRESENT


class CorrectionStrategy(ABC):
    """Strategy Pattern: how an approved correction re-derives the day's status."""

    @abstractmethod
    def decide_status(self, ctx: CorrectionContext, clock: ShiftClock) -> AttendanceStatus:
        raise NotImplementedError
