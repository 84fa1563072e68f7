from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional, Sequence

from ..attendance.repository import AttendanceRepository
from ..attendance.shift_clock import ShiftClock
from ..audit.sink import AuditEvent, AuditSink
from ..common.datetime_utils import BusinessClock, business_days, month_bounds, overlap_days
from ..common.validators import require_money
from ..core.constants import DEFAULT_PAYROLL_LOCK_TIMEOUT_SECONDS, FALLBACK_WORKING_DAYS
from ..core.enums import PayrollRecordStatus
from ..core.exceptions import NotFoundError, PayrollRunInProgress, ValidationError
from ..database.transaction import TransactionManager
from ..employees.repository import EmployeeRepository
from ..leaves.repository import LeaveRepository
from .calculator.base import PayInputs, PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import PayLine, PayrollRecord, PayrollRunResult
from .repository import PayrollRepository

logger = logging.getLogger(__name__)


def working_days_in(start: date, end: date) -> int:
    return len(business_days(start, end)) or FALLBACK_WORKING_DAYS


class PayrollRunService:
    """Monthly payroll generation.

    A run fully replaces the period's records. Manual edits made through
    :meth:`update_record` are lost when the period is run again.
    """

    def __init__(
        self,
        payroll: PayrollRepository,
        employees: EmployeeRepository,
        leaves: LeaveRepository,
        attendance: AttendanceRepository,
        *,
        tx: TransactionManager,
        clock: BusinessClock,
        shift_clock: ShiftClock,
        audit: AuditSink,
        calculator: Optional[PayrollCalculator] = None,
        lock_timeout_seconds: int = DEFAULT_PAYROLL_LOCK_TIMEOUT_SECONDS,
    ):
        self._payroll = payroll
        self._employees = employees
        self._leaves = leaves
        self._attendance = attendance
        self._tx = tx
        self._clock = clock
        self._shift_clock = shift_clock
        self._audit = audit
        self._calculator = calculator or StandardPayrollCalculator()
        self._lock_timeout = int(lock_timeout_seconds)

    def _unpaid_days(self, start: date, end: date) -> Dict[int, int]:
        unpaid: Dict[int, int] = defaultdict(int)
        for leave in self._leaves.list_approved_overlapping(start=start, end=end):
            if not leave.is_paid:
                unpaid[leave.employee_id] += overlap_days(leave.start_date, leave.end_date, start, end)
        return unpaid

    def _overtime_hours(self, start: date, end: date) -> Dict[int, Decimal]:
        minutes: Dict[int, int] = defaultdict(int)
        for record in self._attendance.list_for_range(start, end):
            if record.check_in is None or record.check_out is None:
                continue
            minutes[record.employee_id] += self._shift_clock.compute_deltas(
                record.check_in, record.check_out
            ).overtime_minutes
        return {k: (Decimal(v) / 60).quantize(Decimal("0.01")) for k, v in minutes.items()}

    def compute_lines(self, *, start: date, end: date, working_days: int) -> List[PayLine]:
        unpaid = self._unpaid_days(start, end)
        overtime = self._overtime_hours(start, end)

        lines = []
        for employee in sorted(self._employees.list_active(), key=lambda e: e.employee_id):
            lines.append(
                self._calculator.compute(
                    PayInputs(
                        employee=employee,
                        working_days=working_days,
                        unpaid_leave_days=unpaid.get(employee.employee_id, 0),
                        overtime_hours=overtime.get(employee.employee_id, Decimal("0")),
                    )
                )
            )
        return lines

    def run(self, *, year: int, month: int, actor_id: int) -> PayrollRunResult:
        start, end = month_bounds(year, month)
        working_days = working_days_in(start, end)

        with self._payroll.period_lock(year=year, month=month, timeout=self._lock_timeout) as acquired:
            if not acquired:
                raise PayrollRunInProgress(
                    f"Payroll for {int(year):04d}-{int(month):02d} is already running",
                    details={"year": int(year), "month": int(month)},
                )

            # Committed on its own so a failed run stays visible as processing.
            run = self._payroll.upsert_run(
                year=year, month=month, working_days=working_days, started_at=self._clock.now()
            )
            logger.info("payroll run %s started for %04d-%02d", run.run_id, int(year), int(month))

            try:
                lines = self.compute_lines(start=start, end=end, working_days=working_days)
                with self._tx.atomic():
                    self._payroll.delete_records(run_id=run.run_id)
                    for line in lines:
                        self._payroll.create_record(
                            run_id=run.run_id,
                            line=line,
                            status=PayrollRecordStatus.PENDING,
                            pay_date=end,
                        )
                    self._payroll.mark_processed(run_id=run.run_id, processed_at=self._clock.now())
            except Exception:
                logger.exception("payroll run %s failed, left in processing", run.run_id)
                raise

        logger.info("payroll run %s processed: %d records", run.run_id, len(lines))
        self._audit.emit(
            AuditEvent(
                action="payroll.run",
                actor=int(actor_id),
                at=self._clock.now(),
                subject=f"payroll_run:{run.run_id}",
                details={"year": int(year), "month": int(month), "records": len(lines)},
            )
        )
        return self.get_run(year=year, month=month)

    def get_run(self, *, year: int, month: int) -> PayrollRunResult:
        month_bounds(year, month)
        run = self._payroll.get_run(year=year, month=month)
        if not run:
            raise NotFoundError("Payroll run not found")
        return PayrollRunResult(run=run, records=self._payroll.list_records(run_id=run.run_id))

    def list_records(self, *, run_id: int) -> Sequence[PayrollRecord]:
        return self._payroll.list_records(run_id=int(run_id))

    def update_record(
        self,
        *,
        record_id: int,
        base_salary=None,
        bonus=None,
        deductions=None,
        status=None,
        pay_date: Optional[date] = None,
    ) -> PayrollRecord:
        record = self._payroll.get_record(record_id=int(record_id))
        if not record:
            raise NotFoundError("Payroll record not found")

        base = require_money(base_salary, "baseSalary") if base_salary is not None else record.base_salary
        bonus_ = require_money(bonus, "bonus") if bonus is not None else record.bonus
        deductions_ = require_money(deductions, "deductions") if deductions is not None else record.deductions
        if status is not None:
            try:
                status = PayrollRecordStatus.parse(status)
            except ValueError:
                raise ValidationError("status must be Pending or Processed")
        else:
            status = record.status

        net_pay = max(Decimal("0"), base + bonus_ - deductions_)
        self._payroll.update_record(
            record_id=record.record_id,
            base_salary=base,
            bonus=bonus_,
            deductions=deductions_,
            net_pay=net_pay,
            status=status,
            pay_date=pay_date if pay_date is not None else record.pay_date,
        )
        logger.info("payroll record %s updated: net %s", record.record_id, net_pay)
        return self._payroll.get_record(record_id=record.record_id)
