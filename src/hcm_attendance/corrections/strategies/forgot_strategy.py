from __future__ import annotations

from ...attendance.shift_clock import ShiftClock
from ...core.enums import AttendanceStatus
from .base import CorrectionContext, CorrectionStrategy


class ForgotCheckInStrategy(CorrectionStrategy):
    """Missing check-in supplied by the employee."""

    def decide_status(self, ctx: CorrectionContext, clock: ShiftClock) -> AttendanceStatus:
        if ctx.requested_check_in is not None:
            return AttendanceStatus.PRESENT
        return ctx.fallback_status


class ForgotCheckOutStrategy(CorrectionStrategy):
    """Missing check-out supplied by the employee."""

    def decide_status(self, ctx: CorrectionContext, clock: ShiftClock) -> AttendanceStatus:
        if ctx.requested_check_out is not None:
            return AttendanceStatus.PRESENT
        return ctx.fallback_status
