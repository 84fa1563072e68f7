from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..attendance.model import AttendanceRecord
from ..core.enums import CorrectionIssue, RequestState


@dataclass(frozen=True)
class AttendanceCorrection:
    correction_id: int
    employee_id: int
    work_date: date
    issue: CorrectionIssue
    requested_check_in: Optional[datetime]
    requested_check_out: Optional[datetime]
    note: Optional[str]
    state: RequestState
    created_at: datetime
    decided_by: Optional[int] = None
    decided_at: Optional[datetime] = None


@dataclass(frozen=True)
class CorrectionResolution:
    correction: AttendanceCorrection
    record: Optional[AttendanceRecord] = None
