from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import RequestState


@dataclass(frozen=True)
class RemoteWorkRequest:
    request_id: int
    employee_id: int
    start_date: date
    end_date: date
    reason: str
    state: RequestState
    created_at: datetime
    approved_by: Optional[int] = None
    approved_at: Optional[datetime] = None

    def covers(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date
