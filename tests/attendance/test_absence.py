from __future__ import annotations

from datetime import date, datetime

from hcm_attendance.attendance.absence import join_expected, summarize
from hcm_attendance.attendance.model import AttendanceRecord
from hcm_attendance.attendance.shift_clock import ShiftClock
from hcm_attendance.core.enums import AttendanceStatus

MON, TUE, WED = date(2026, 3, 9), date(2026, 3, 10), date(2026, 3, 11)


def rec(rid, employee_id, day, start, end, status=AttendanceStatus.PRESENT):
    check_in = datetime.combine(day, datetime.strptime(start, "%H:%M").time()) if start else None
    check_out = datetime.combine(day, datetime.strptime(end, "%H:%M").time()) if end else None
    return AttendanceRecord(rid, employee_id, day, check_in, check_out, status)


def test_unrecorded_expected_days_become_absent():
    clock = ShiftClock("09:00", "18:00")
    records = [rec(1, 7, MON, "09:00", "18:00")]

    rows = join_expected([(7, MON), (7, TUE), (7, WED)], records, clock)

    assert [(r.work_date, r.status) for r in rows] == [
        (MON, AttendanceStatus.PRESENT),
        (TUE, AttendanceStatus.ABSENT),
        (WED, AttendanceStatus.ABSENT),
    ]
    assert rows[0].recorded and not rows[1].recorded


def test_records_outside_expected_keys_are_kept():
    clock = ShiftClock("09:00", "18:00")
    saturday = date(2026, 3, 14)
    rows = join_expected([(7, MON)], [rec(1, 7, saturday, "10:00", "14:30")], clock)

    assert [r.work_date for r in rows] == [MON, saturday]
    assert rows[1].status is AttendanceStatus.PRESENT


def test_summary_counts_effective_status_and_rates():
    clock = ShiftClock("09:00", "18:00")
    records = [
        rec(1, 7, MON, "09:00", "18:00"),
        rec(2, 7, TUE, "09:00", "12:00", status=AttendanceStatus.LATE),
    ]
    rows = join_expected([(7, MON), (7, TUE), (7, WED)], records, clock)

    s = summarize(rows)

    assert (s.present_days, s.late_days, s.half_days, s.absent_days) == (1, 0, 1, 1)
    assert s.total_hours == 12.0
    assert s.avg_hours == 6.0
    assert s.overtime_hours == 1.0
    assert s.attendance_rate == 66.7


def test_empty_summary_is_zero():
    s = summarize([])
    assert s.attendance_rate == 0.0
    assert s.avg_hours == 0.0
