from __future__ import annotations

import logging

from ..audit.sink import AuditEvent, AuditSink
from ..common.datetime_utils import BusinessClock
from ..core.enums import LeaveStatus
from ..core.exceptions import AlreadyProcessed, NotFoundError, ValidationError
from ..database.transaction import TransactionManager
from ..employees.repository import EmployeeRepository
from .model import Leave
from .repository import LeaveRepository

logger = logging.getLogger(__name__)


class LeaveService:
    """Leave decisions with their leave-balance bookkeeping.

    Approval deducts ``days`` from the employee's balance; rejecting a previously
    approved leave gives them back.
    """

    def __init__(
        self,
        leaves: LeaveRepository,
        employees: EmployeeRepository,
        *,
        tx: TransactionManager,
        clock: BusinessClock,
        audit: AuditSink,
    ):
        self._leaves = leaves
        self._employees = employees
        self._tx = tx
        self._clock = clock
        self._audit = audit

    def decide(self, *, leave_id: int, status: str | LeaveStatus, actor_id: int) -> Leave:
        try:
            target = LeaveStatus.parse(status)
        except ValueError:
            raise ValidationError("status must be Approved or Rejected")
        if target is LeaveStatus.PENDING:
            raise ValidationError("status must be Approved or Rejected")

        with self._tx.atomic():
            leave = self._leaves.get(leave_id=int(leave_id))
            if not leave:
                raise NotFoundError("Leave not found")
            if leave.status is target:
                raise AlreadyProcessed(f"Leave is already {target.value}")

            if not self._leaves.update_status(leave_id=leave.leave_id, status=target, expected=leave.status):
                raise AlreadyProcessed("Leave was changed concurrently")

            delta = 0
            if target is LeaveStatus.APPROVED:
                delta = -leave.days
            elif leave.status is LeaveStatus.APPROVED:
                delta = leave.days
            if delta and not self._employees.adjust_leave_balance(employee_id=leave.employee_id, delta=delta):
                raise NotFoundError("Employee not found")

        logger.info("leave %s %s -> %s (balance %+d)", leave.leave_id, leave.status.value, target.value, delta)
        self._audit.emit(
            AuditEvent(
                action=f"leave.{target.value.lower()}",
                actor=int(actor_id),
                at=self._clock.now(),
                subject=f"leave:{leave.leave_id}",
                details={"employee_id": leave.employee_id, "balance_delta": delta},
            )
        )
        return self._leaves.get(leave_id=leave.leave_id) or leave
