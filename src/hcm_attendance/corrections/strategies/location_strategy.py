from __future__ import annotations

from ...attendance.shift_clock import ShiftClock
from ...core.enums import AttendanceStatus
from .base import CorrectionContext, CorrectionStrategy


class LocationIssueStrategy(CorrectionStrategy):
    """Geofence rejected a genuine punch; approval overrides it retroactively."""

    def decide_status(self, ctx: CorrectionContext, clock: ShiftClock) -> AttendanceStatus:
        return AttendanceStatus.PRESENT
