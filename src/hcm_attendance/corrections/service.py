from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Sequence, Tuple

from ..attendance.repository import AttendanceRepository
from ..attendance.shift_clock import ShiftClock
from ..audit.sink import AuditEvent, AuditSink
from ..common.datetime_utils import BusinessClock, parse_hhmm
from ..core.constants import DEFAULT_HISTORY_LIMIT, DEFAULT_PAGE_SIZE
from ..core.enums import CorrectionIssue, RequestState
from ..core.exceptions import AlreadyProcessed, NotFoundError, ValidationError
from ..database.transaction import TransactionManager
from ..employees.repository import EmployeeRepository
from ..remote_work.service import parse_decision
from .factory import CorrectionStrategyFactory
from .model import AttendanceCorrection, CorrectionResolution
from .repository import CorrectionRepository
from .strategies.base import CorrectionContext

logger = logging.getLogger(__name__)


def _at(work_date: date, value: Optional[str]) -> Optional[datetime]:
    t = parse_hhmm(value)
    return datetime.combine(work_date, t) if t is not None else None


class CorrectionService:
    """Correction requests: pending -> approved | rejected, exactly once.

    Approval rewrites the day's attendance record in the same transaction as the
    state transition; rejection touches the request only.
    """

    def __init__(
        self,
        corrections: CorrectionRepository,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        *,
        tx: TransactionManager,
        clock: BusinessClock,
        shift_clock: ShiftClock,
        audit: AuditSink,
        factory: Optional[CorrectionStrategyFactory] = None,
    ):
        self._corrections = corrections
        self._attendance = attendance
        self._employees = employees
        self._tx = tx
        self._clock = clock
        self._shift_clock = shift_clock
        self._audit = audit
        self._factory = factory or CorrectionStrategyFactory()

    def submit(
        self,
        *,
        employee_id: int,
        work_date: date,
        issue,
        requested_check_in: Optional[str] = None,
        requested_check_out: Optional[str] = None,
        note: Optional[str] = None,
    ) -> AttendanceCorrection:
        if not self._employees.get_by_id(int(employee_id)):
            raise NotFoundError("Employee record not found")
        try:
            issue = CorrectionIssue.parse(issue)
        except ValueError:
            raise ValidationError("Invalid issue", details={"allowed": [i.value for i in CorrectionIssue]})
        if work_date > self._clock.today():
            raise ValidationError("Cannot request a correction for a future date")

        check_in = _at(work_date, requested_check_in)
        check_out = _at(work_date, requested_check_out)
        if check_in and check_out and check_out < check_in:
            raise ValidationError("Requested check-out cannot be before check-in")

        correction_id = self._corrections.create(
            employee_id=int(employee_id),
            work_date=work_date,
            issue=issue,
            requested_check_in=check_in,
            requested_check_out=check_out,
            note=(note or "").strip() or None,
            created_at=self._clock.now(),
        )
        logger.info("correction %s submitted by employee %s for %s", correction_id, employee_id, work_date)
        return self._corrections.get(correction_id=correction_id)

    def resolve(self, *, correction_id: int, action, admin_id: int) -> CorrectionResolution:
        state = parse_decision(action)
        now = self._clock.now()

        with self._tx.atomic():
            correction = self._corrections.get(correction_id=int(correction_id))
            if not correction:
                raise NotFoundError("Correction request not found")
            if correction.state is not RequestState.PENDING:
                raise AlreadyProcessed("Request already processed")

            decided = self._corrections.decide(
                correction_id=correction.correction_id,
                state=state,
                decided_by=int(admin_id),
                decided_at=now,
            )
            if not decided:
                raise AlreadyProcessed("Request already processed")

            record = None
            if state is RequestState.APPROVED:
                record = self._apply(correction)

        logger.info("correction %s %s by %s", correction.correction_id, state.value, admin_id)
        self._audit.emit(
            AuditEvent(
                action=f"correction.{state.value}",
                actor=int(admin_id),
                at=now,
                subject=f"correction:{correction.correction_id}",
                details={"employee_id": correction.employee_id, "date": correction.work_date.isoformat()},
            )
        )
        return CorrectionResolution(
            correction=self._corrections.get(correction_id=correction.correction_id),
            record=record,
        )

    def _apply(self, correction: AttendanceCorrection):
        existing = self._attendance.get_for_employee_and_date(correction.employee_id, correction.work_date)
        check_in = correction.requested_check_in or (existing.check_in if existing else None)
        check_out = correction.requested_check_out or (existing.check_out if existing else None)
        if check_in and check_out and check_out < check_in:
            raise ValidationError("Corrected check-out would precede check-in")

        ctx = CorrectionContext(
            work_date=correction.work_date,
            check_in=check_in,
            check_out=check_out,
            requested_check_in=correction.requested_check_in,
            requested_check_out=correction.requested_check_out,
            existing_status=existing.status if existing else None,
        )
        status = self._factory.for_issue(correction.issue).decide_status(ctx, self._shift_clock)

        return self._attendance.apply_correction(
            employee_id=correction.employee_id,
            work_date=correction.work_date,
            check_in=check_in,
            check_out=check_out,
            status=status,
        )

    def list_for_employee(
        self, employee_id: int, start: Optional[date] = None, end: Optional[date] = None
    ) -> Sequence[AttendanceCorrection]:
        return self._corrections.list_corrections(
            employee_id=int(employee_id), start=start, end=end, limit=DEFAULT_HISTORY_LIMIT
        )

    def list_admin(
        self,
        *,
        state: Optional[RequestState] = None,
        work_date: Optional[date] = None,
        employee_id: Optional[int] = None,
        page: int = 1,
        size: int = DEFAULT_PAGE_SIZE,
    ) -> Tuple[Sequence[AttendanceCorrection], int]:
        page = max(1, int(page))
        size = max(1, min(int(size), 200))
        filters = dict(employee_id=employee_id, state=state, start=work_date, end=work_date)
        items = self._corrections.list_corrections(**filters, offset=(page - 1) * size, limit=size)
        return items, self._corrections.count_corrections(**filters)
