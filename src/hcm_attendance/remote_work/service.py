from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..audit.sink import AuditEvent, AuditSink
from ..common.datetime_utils import BusinessClock
from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.enums import RequestState
from ..core.exceptions import AlreadyProcessed, NotFoundError, OverlappingRequest, ValidationError
from ..database.transaction import TransactionManager
from ..employees.repository import EmployeeRepository
from .model import RemoteWorkRequest
from .repository import RemoteWorkRepository

logger = logging.getLogger(__name__)

_BLOCKING_STATES = (RequestState.PENDING, RequestState.APPROVED)


def parse_decision(action) -> RequestState:
    try:
        state = RequestState.parse(action)
    except ValueError:
        raise ValidationError("action must be 'approved' or 'rejected'")
    if state is RequestState.PENDING:
        raise ValidationError("action must be 'approved' or 'rejected'")
    return state


class RemoteWorkService:
    """Remote-work approvals; an approved request lifts the geofence for its dates."""

    def __init__(
        self,
        requests: RemoteWorkRepository,
        employees: EmployeeRepository,
        *,
        tx: TransactionManager,
        clock: BusinessClock,
        audit: AuditSink,
    ):
        self._requests = requests
        self._employees = employees
        self._tx = tx
        self._clock = clock
        self._audit = audit

    def create(self, *, employee_id: int, start_date: date, end_date: date, reason: str) -> RemoteWorkRequest:
        if not self._employees.get_by_id(int(employee_id)):
            raise NotFoundError("Employee record not found")
        reason = require_non_empty(reason, "reason")
        if end_date < start_date:
            raise ValidationError("End date must be on or after start date")
        if start_date < self._clock.today():
            raise ValidationError("Start date cannot be in the past")

        with self._tx.atomic():
            existing = self._requests.find_overlapping(
                employee_id=int(employee_id),
                start_date=start_date,
                end_date=end_date,
                states=_BLOCKING_STATES,
            )
            if existing:
                raise OverlappingRequest(
                    "You already have a remote work request for overlapping dates",
                    details={
                        "existingId": existing.request_id,
                        "existingStartDate": existing.start_date.isoformat(),
                        "existingEndDate": existing.end_date.isoformat(),
                    },
                )
            request_id = self._requests.create(
                employee_id=int(employee_id),
                start_date=start_date,
                end_date=end_date,
                reason=reason,
                created_at=self._clock.now(),
            )

        logger.info("remote work request %s created for employee %s", request_id, employee_id)
        return self._requests.get(request_id=request_id)

    def decide(self, *, request_id: int, action, admin_id: int) -> RemoteWorkRequest:
        state = parse_decision(action)
        req = self._requests.get(request_id=int(request_id))
        if not req:
            raise NotFoundError("Remote work request not found")
        if req.state is not RequestState.PENDING:
            raise AlreadyProcessed("Request already processed")

        now = self._clock.now()
        if not self._requests.decide(request_id=req.request_id, state=state, decided_by=int(admin_id), decided_at=now):
            raise AlreadyProcessed("Request already processed")

        logger.info("remote work request %s %s by %s", req.request_id, state.value, admin_id)
        self._audit.emit(
            AuditEvent(
                action=f"remote_work.{state.value}",
                actor=int(admin_id),
                at=now,
                subject=f"remote_work:{req.request_id}",
                details={"employee_id": req.employee_id},
            )
        )
        return self._requests.get(request_id=req.request_id)

    def covering(self, *, employee_id: int, day: date) -> Optional[RemoteWorkRequest]:
        """Approved request whose inclusive range contains ``day``."""
        return self._requests.find_overlapping(
            employee_id=int(employee_id),
            start_date=day,
            end_date=day,
            states=(RequestState.APPROVED,),
        )

    def list_for_employee(self, *, employee_id: int) -> Sequence[RemoteWorkRequest]:
        return self._requests.list_requests(employee_id=int(employee_id), limit=DEFAULT_HISTORY_LIMIT)

    def list_all(self, *, state: Optional[RequestState] = None) -> Sequence[RemoteWorkRequest]:
        return self._requests.list_requests(state=state, limit=500)
