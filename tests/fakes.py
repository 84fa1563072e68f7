from __future__ import annotations

import math
from contextlib import contextmanager
from dataclasses import dataclass, field, replace
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from hcm_attendance.attendance.model import AttendanceRecord
from hcm_attendance.core.enums import (
    AttendanceStatus,
    EmployeeStatus,
    LeaveStatus,
    LeaveType,
    PayrollRecordStatus,
    PayrollRunStatus,
    RequestState,
)
from hcm_attendance.corrections.model import AttendanceCorrection
from hcm_attendance.employees.model import Employee
from hcm_attendance.geofence.evaluator import LocationFix
from hcm_attendance.leaves.model import Leave
from hcm_attendance.payroll.model import PayrollRecord, PayrollRun
from hcm_attendance.remote_work.model import RemoteWorkRequest

OFFICE_LAT = 33.63
OFFICE_LON = 72.92
ADMIN_ID = 99


def fix_at(meters_north: float, captured_at: Optional[datetime] = None) -> LocationFix:
    """A fix ``meters_north`` due north of the office."""
    return LocationFix(
        latitude=OFFICE_LAT + math.degrees(meters_north / 6_371_000),
        longitude=OFFICE_LON,
        captured_at=captured_at,
    )


class MutableNow:
    def __init__(self, value: datetime):
        self.value = value

    def __call__(self) -> datetime:
        return self.value


class NoopTx:
    def __init__(self):
        self.blocks = 0

    @contextmanager
    def atomic(self):
        self.blocks += 1
        yield


@dataclass
class RecordingAudit:
    events: list = field(default_factory=list)

    def emit(self, event) -> None:
        self.events.append(event)

    def actions(self) -> list[str]:
        return [e.action for e in self.events]


@dataclass
class InMemoryEmployees:
    by_id: dict[int, Employee]

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self.by_id.get(int(employee_id))

    def list_active(self):
        return [e for _, e in sorted(self.by_id.items()) if e.is_active]

    def adjust_leave_balance(self, *, employee_id: int, delta: int) -> bool:
        emp = self.by_id.get(int(employee_id))
        if not emp:
            return False
        self.by_id[emp.employee_id] = replace(emp, leave_balance=emp.leave_balance + delta)
        return True


class InMemoryAttendance:
    def __init__(self):
        self.by_key: dict[tuple[int, date], AttendanceRecord] = {}
        self._id = 0

    def add(self, employee_id, work_date, check_in=None, check_out=None, status=AttendanceStatus.PRESENT):
        self._id += 1
        rec = AttendanceRecord(self._id, employee_id, work_date, check_in, check_out, status)
        self.by_key[(employee_id, work_date)] = rec
        return rec

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        return self.by_key.get((employee_id, work_date))

    def claim_check_in(self, *, employee_id, work_date, check_in, status) -> bool:
        existing = self.by_key.get((employee_id, work_date))
        if existing is None:
            self.add(employee_id, work_date, check_in=check_in, status=status)
            return True
        if existing.check_in is not None:
            return False
        if existing.check_out is not None and existing.check_out < check_in:
            return False
        self.by_key[(employee_id, work_date)] = replace(existing, check_in=check_in, status=status)
        return True

    def record_check_out(self, *, employee_id, work_date, check_out, status) -> bool:
        existing = self.by_key.get((employee_id, work_date))
        if existing is None or existing.check_in is None or existing.check_out is not None:
            return False
        self.by_key[(employee_id, work_date)] = replace(existing, check_out=check_out, status=status)
        return True

    def apply_correction(self, *, employee_id, work_date, check_in, check_out, status) -> AttendanceRecord:
        existing = self.by_key.get((employee_id, work_date))
        if existing is None:
            return self.add(employee_id, work_date, check_in=check_in, check_out=check_out, status=status)
        rec = replace(existing, check_in=check_in, check_out=check_out, status=status)
        self.by_key[(employee_id, work_date)] = rec
        return rec

    def list_for_employee(self, employee_id, start, end):
        return [r for r in self.list_for_range(start, end) if r.employee_id == employee_id]

    def list_for_range(self, start, end):
        rows = [r for r in self.by_key.values() if start <= r.work_date <= end]
        return sorted(rows, key=lambda r: (r.work_date, r.employee_id))


class InMemoryCorrections:
    def __init__(self):
        self.by_id: dict[int, AttendanceCorrection] = {}

    def create(self, *, employee_id, work_date, issue, requested_check_in, requested_check_out, note, created_at):
        cid = len(self.by_id) + 1
        self.by_id[cid] = AttendanceCorrection(
            correction_id=cid,
            employee_id=employee_id,
            work_date=work_date,
            issue=issue,
            requested_check_in=requested_check_in,
            requested_check_out=requested_check_out,
            note=note,
            state=RequestState.PENDING,
            created_at=created_at,
        )
        return cid

    def get(self, *, correction_id):
        return self.by_id.get(int(correction_id))

    def _filtered(self, employee_id, state, start, end):
        items = list(self.by_id.values())
        if employee_id is not None:
            items = [c for c in items if c.employee_id == employee_id]
        if state is not None:
            items = [c for c in items if c.state is state]
        if start is not None:
            items = [c for c in items if c.work_date >= start]
        if end is not None:
            items = [c for c in items if c.work_date <= end]
        return sorted(items, key=lambda c: (c.created_at, c.correction_id), reverse=True)

    def list_corrections(self, *, employee_id=None, state=None, start=None, end=None, offset=0, limit=200):
        return self._filtered(employee_id, state, start, end)[offset : offset + limit]

    def count_corrections(self, *, employee_id=None, state=None, start=None, end=None):
        return len(self._filtered(employee_id, state, start, end))

    def decide(self, *, correction_id, state, decided_by, decided_at) -> bool:
        c = self.by_id.get(int(correction_id))
        if not c or c.state is not RequestState.PENDING:
            return False
        self.by_id[c.correction_id] = replace(c, state=state, decided_by=decided_by, decided_at=decided_at)
        return True


class InMemoryRemoteWork:
    def __init__(self):
        self.by_id: dict[int, RemoteWorkRequest] = {}

    def add(self, employee_id, start_date, end_date, state=RequestState.APPROVED):
        rid = len(self.by_id) + 1
        self.by_id[rid] = RemoteWorkRequest(
            request_id=rid,
            employee_id=employee_id,
            start_date=start_date,
            end_date=end_date,
            reason="seed",
            state=state,
            created_at=datetime(2026, 3, 1, 8, 0),
        )
        return self.by_id[rid]

    def create(self, *, employee_id, start_date, end_date, reason, created_at):
        rid = len(self.by_id) + 1
        self.by_id[rid] = RemoteWorkRequest(
            request_id=rid,
            employee_id=employee_id,
            start_date=start_date,
            end_date=end_date,
            reason=reason,
            state=RequestState.PENDING,
            created_at=created_at,
        )
        return rid

    def get(self, *, request_id):
        return self.by_id.get(int(request_id))

    def find_overlapping(self, *, employee_id, start_date, end_date, states):
        for r in self.by_id.values():
            if r.employee_id == employee_id and r.state in states:
                if r.start_date <= end_date and start_date <= r.end_date:
                    return r
        return None

    def list_requests(self, *, employee_id=None, state=None, limit=200):
        items = [
            r
            for r in self.by_id.values()
            if (employee_id is None or r.employee_id == employee_id) and (state is None or r.state is state)
        ]
        return sorted(items, key=lambda r: r.request_id, reverse=True)[:limit]

    def decide(self, *, request_id, state, decided_by, decided_at) -> bool:
        r = self.by_id.get(int(request_id))
        if not r or r.state is not RequestState.PENDING:
            return False
        self.by_id[r.request_id] = replace(r, state=state, approved_by=decided_by, approved_at=decided_at)
        return True


class InMemoryLeaves:
    def __init__(self):
        self.by_id: dict[int, Leave] = {}

    def add(self, employee_id, start_date, end_date, *, is_paid=False, status=LeaveStatus.APPROVED,
            leave_type=LeaveType.CASUAL):
        lid = len(self.by_id) + 1
        self.by_id[lid] = Leave(lid, employee_id, leave_type, start_date, end_date, status, is_paid)
        return self.by_id[lid]

    def get(self, *, leave_id):
        return self.by_id.get(int(leave_id))

    def list_approved_overlapping(self, *, start, end):
        return [
            lv
            for lv in self.by_id.values()
            if lv.status is LeaveStatus.APPROVED and lv.start_date <= end and start <= lv.end_date
        ]

    def update_status(self, *, leave_id, status, expected) -> bool:
        lv = self.by_id.get(int(leave_id))
        if not lv or lv.status is not expected:
            return False
        self.by_id[lv.leave_id] = replace(lv, status=status)
        return True


class InMemoryPayroll:
    def __init__(self):
        self.runs: dict[tuple[int, int], PayrollRun] = {}
        self.records: dict[int, PayrollRecord] = {}
        self.lock_available = True
        self._record_id = 0

    def upsert_run(self, *, year, month, working_days, started_at):
        existing = self.runs.get((year, month))
        run_id = existing.run_id if existing else len(self.runs) + 1
        self.runs[(year, month)] = PayrollRun(
            run_id, year, month, PayrollRunStatus.PROCESSING, working_days, started_at
        )
        return self.runs[(year, month)]

    def get_run(self, *, year, month):
        return self.runs.get((year, month))

    def delete_records(self, *, run_id):
        doomed = [k for k, r in self.records.items() if r.run_id == run_id]
        for k in doomed:
            del self.records[k]
        return len(doomed)

    def create_record(self, *, run_id, line, status, pay_date):
        self._record_id += 1
        self.records[self._record_id] = PayrollRecord(
            record_id=self._record_id,
            run_id=run_id,
            employee_id=line.employee_id,
            base_salary=line.base_salary,
            bonus=line.bonus,
            other_deductions=line.other_deductions,
            leave_deduction=line.leave_deduction,
            deductions=line.deductions,
            net_pay=line.net_pay,
            unpaid_leave_days=line.unpaid_leave_days,
            working_days=line.working_days,
            overtime_hours=line.overtime_hours,
            status=status,
            pay_date=pay_date,
        )
        return self._record_id

    def mark_processed(self, *, run_id, processed_at):
        for key, run in self.runs.items():
            if run.run_id == run_id:
                self.runs[key] = replace(run, status=PayrollRunStatus.PROCESSED, processed_at=processed_at)

    def list_records(self, *, run_id):
        return sorted((r for r in self.records.values() if r.run_id == run_id), key=lambda r: r.employee_id)

    def get_record(self, *, record_id):
        return self.records.get(int(record_id))

    def update_record(self, *, record_id, base_salary, bonus, deductions, net_pay, status, pay_date) -> bool:
        r = self.records.get(int(record_id))
        if not r:
            return False
        self.records[r.record_id] = replace(
            r, base_salary=base_salary, bonus=bonus, deductions=deductions, net_pay=net_pay,
            status=PayrollRecordStatus.parse(status), pay_date=pay_date,
        )
        return True

    @contextmanager
    def period_lock(self, *, year, month, timeout):
        yield self.lock_available


def make_employee(employee_id, name, salary, *, active=True, leave_balance=10) -> Employee:
    return Employee(
        employee_id=employee_id,
        full_name=name,
        status=EmployeeStatus.ACTIVE if active else EmployeeStatus.INACTIVE,
        salary=Decimal(salary),
        leave_balance=leave_balance,
        department="Operations",
    )


