from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import CorrectionIssue, RequestState
from .model import AttendanceCorrection


class CorrectionRepository(Protocol):
    def create(
        self,
        *,
        employee_id: int,
        work_date: date,
        issue: CorrectionIssue,
        requested_check_in: Optional[datetime],
        requested_check_out: Optional[datetime],
        note: Optional[str],
        created_at: datetime,
    ) -> int:
        raise NotImplementedError

    def get(self, *, correction_id: int) -> Optional[AttendanceCorrection]:
        raise NotImplementedError

    def list_corrections(
        self,
        *,
        employee_id: Optional[int] = None,
        state: Optional[RequestState] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
        offset: int = 0,
        limit: int = 200,
    ) -> Sequence[AttendanceCorrection]:
        raise NotImplementedError

    def count_corrections(
        self,
        *,
        employee_id: Optional[int] = None,
        state: Optional[RequestState] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> int:
        raise NotImplementedError

    def decide(self, *, correction_id: int, state: RequestState, decided_by: int, decided_at: datetime) -> bool:
        """Transition a pending correction; False when it is no longer pending."""

        raise NotImplementedError
