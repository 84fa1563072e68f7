from __future__ import annotations

from ...attendance.shift_clock import ShiftClock
from ...core.enums import AttendanceStatus
from .base import CorrectionContext, CorrectionStrategy


class WrongTimeStrategy(CorrectionStrategy):
    """Recorded time was wrong: lateness is recomputed from the corrected check-in."""

    def decide_status(self, ctx: CorrectionContext, clock: ShiftClock) -> AttendanceStatus:
        if ctx.requested_check_in is not None:
            return clock.determine_status(ctx.requested_check_in)
        return ctx.fallback_status
