from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import RequestState
from .model import RemoteWorkRequest


class RemoteWorkRepository(Protocol):
    def create(self, *, employee_id: int, start_date: date, end_date: date, reason: str, created_at: datetime) -> int:
        raise NotImplementedError

    def get(self, *, request_id: int) -> Optional[RemoteWorkRequest]:
        raise NotImplementedError

    def find_overlapping(
        self,
        *,
        employee_id: int,
        start_date: date,
        end_date: date,
        states: Sequence[RequestState],
    ) -> Optional[RemoteWorkRequest]:
        raise NotImplementedError

    def list_requests(
        self,
        *,
        employee_id: Optional[int] = None,
        state: Optional[RequestState] = None,
        limit: int = 200,
    ) -> Sequence[RemoteWorkRequest]:
        raise NotImplementedError

    def decide(self, *, request_id: int, state: RequestState, decided_by: int, decided_at: datetime) -> bool:
        """Transition a pending request; False when it is no longer pending."""

        raise NotImplementedError
