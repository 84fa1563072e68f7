from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveStatus
from .model import Leave


class LeaveRepository(Protocol):
    def get(self, *, leave_id: int) -> Optional[Leave]:
        raise NotImplementedError

    def list_approved_overlapping(self, *, start: date, end: date) -> Sequence[Leave]:
        """Approved leaves of any employee intersecting [start, end]."""

        raise NotImplementedError

    def update_status(self, *, leave_id: int, status: LeaveStatus, expected: LeaveStatus) -> bool:
        """Compare-and-set on the current status."""

        raise NotImplementedError
