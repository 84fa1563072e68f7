from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import ContextManager, Optional, Protocol, Sequence

from ..core.enums import PayrollRecordStatus
from .model import PayLine, PayrollRecord, PayrollRun


class PayrollRepository(Protocol):
    def upsert_run(self, *, year: int, month: int, working_days: int, started_at: datetime) -> PayrollRun:
        """Create or reset the period's run to ``processing``."""

        raise NotImplementedError

    def get_run(self, *, year: int, month: int) -> Optional[PayrollRun]:
        raise NotImplementedError

    def delete_records(self, *, run_id: int) -> int:
        raise NotImplementedError

    def create_record(
        self,
        *,
        run_id: int,
        line: PayLine,
        status: PayrollRecordStatus,
        pay_date: Optional[date],
    ) -> int:
        raise NotImplementedError

    def mark_processed(self, *, run_id: int, processed_at: datetime) -> None:
        raise NotImplementedError

    def list_records(self, *, run_id: int) -> Sequence[PayrollRecord]:
        raise NotImplementedError

    def get_record(self, *, record_id: int) -> Optional[PayrollRecord]:
        raise NotImplementedError

    def update_record(
        self,
        *,
        record_id: int,
        base_salary: Decimal,
        bonus: Decimal,
        deductions: Decimal,
        net_pay: Decimal,
        status: PayrollRecordStatus,
        pay_date: Optional[date],
    ) -> bool:
        raise NotImplementedError

    def period_lock(self, *, year: int, month: int, timeout: int) -> ContextManager[bool]:
        """Exclusive per-period lock; yields False when not acquired in time."""

        raise NotImplementedError
