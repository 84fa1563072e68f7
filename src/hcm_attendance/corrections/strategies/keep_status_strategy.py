from __future__ import annotations

from ...attendance.shift_clock import ShiftClock
from ...core.enums import AttendanceStatus
from .base import CorrectionContext, CorrectionStrategy


class KeepStatusStrategy(CorrectionStrategy):
    """Times change, status stays; a newly created day counts as present."""

    def decide_status(self, ctx: CorrectionContext, clock: ShiftClock) -> AttendanceStatus:
        return ctx.fallback_status
