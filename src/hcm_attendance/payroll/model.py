from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Sequence

from ..core.enums import PayrollRecordStatus, PayrollRunStatus


@dataclass(frozen=True)
class PayrollRun:
    """One run per (year, month); re-running replaces its records."""

    run_id: int
    period_year: int
    period_month: int
    status: PayrollRunStatus
    working_days: int
    started_at: datetime
    processed_at: Optional[datetime] = None


@dataclass(frozen=True)
class PayLine:
    """Calculator output for one employee, before it is stored."""

    employee_id: int
    base_salary: Decimal
    bonus: Decimal
    other_deductions: Decimal
    leave_deduction: Decimal
    net_pay: Decimal
    unpaid_leave_days: int
    working_days: int
    overtime_hours: Decimal

    @property
    def deductions(self) -> Decimal:
        return self.other_deductions + self.leave_deduction


@dataclass(frozen=True)
class PayrollRecord:
    record_id: int
    run_id: int
    employee_id: int
    base_salary: Decimal
    bonus: Decimal
    other_deductions: Decimal
    leave_deduction: Decimal
    deductions: Decimal
    net_pay: Decimal
    unpaid_leave_days: int
    working_days: int
    overtime_hours: Decimal
    status: PayrollRecordStatus
    pay_date: Optional[date] = None


@dataclass(frozen=True)
class PayrollRunResult:
    run: PayrollRun
    records: Sequence[PayrollRecord] = field(default_factory=list)
