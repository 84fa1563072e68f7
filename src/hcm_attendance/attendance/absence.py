"""Absence as a query-time join.

No row is ever written for an unrecorded business day; both the per-employee month
view and the manager day view get their ``absent`` rows from :func:`join_expected`.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, List, Sequence, Tuple

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord, DayRow, MonthlySummary
from .shift_clock import ShiftClock


def to_day_row(record: AttendanceRecord, clock: ShiftClock) -> DayRow:
    total = 0
    overtime = 0
    if record.check_in is not None and record.check_out is not None:
        deltas = clock.compute_deltas(record.check_in, record.check_out)
        total = deltas.total_minutes
        overtime = deltas.overtime_minutes
    return DayRow(
        employee_id=record.employee_id,
        work_date=record.work_date,
        status=clock.effective_status(record),
        check_in=record.check_in,
        check_out=record.check_out,
        total_minutes=total,
        overtime_minutes=overtime,
        attendance_id=record.attendance_id,
    )


def join_expected(
    expected: Iterable[Tuple[int, date]],
    records: Sequence[AttendanceRecord],
    clock: ShiftClock,
) -> List[DayRow]:
    """Every expected (employee_id, date) key plus every recorded row.

    Expected keys without a record become ``ABSENT`` rows.
    """
    by_key = {(r.employee_id, r.work_date): r for r in records}
    keys = set(by_key) | set(expected)

    rows: List[DayRow] = []
    for employee_id, work_date in sorted(keys, key=lambda k: (k[1], k[0])):
        record = by_key.get((employee_id, work_date))
        if record is None:
            rows.append(DayRow(employee_id=employee_id, work_date=work_date, status=AttendanceStatus.ABSENT))
        else:
            rows.append(to_day_row(record, clock))
    return rows


def summarize(rows: Sequence[DayRow]) -> MonthlySummary:
    counts = {status: 0 for status in AttendanceStatus}
    total_minutes = 0
    overtime_minutes = 0
    for row in rows:
        counts[row.status] += 1
        total_minutes += row.total_minutes
        overtime_minutes += row.overtime_minutes

    worked_days = counts[AttendanceStatus.PRESENT] + counts[AttendanceStatus.LATE] + counts[AttendanceStatus.HALF_DAY]
    absent_days = counts[AttendanceStatus.ABSENT]
    denominator = worked_days + absent_days
    total_hours = total_minutes / 60

    return MonthlySummary(
        present_days=counts[AttendanceStatus.PRESENT],
        late_days=counts[AttendanceStatus.LATE],
        absent_days=absent_days,
        half_days=counts[AttendanceStatus.HALF_DAY],
        total_hours=round(total_hours, 1),
        avg_hours=round(total_hours / worked_days, 1) if worked_days else 0.0,
        attendance_rate=round(worked_days / denominator * 100, 1) if denominator else 0.0,
        overtime_hours=round(overtime_minutes / 60, 1),
    )
