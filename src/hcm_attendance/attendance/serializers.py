from __future__ import annotations

from typing import Optional

from ..common.http import iso
from .model import AttendanceRecord, DayRow, MonthlySummary


def record_json(record: Optional[AttendanceRecord]):
    if record is None:
        return None
    return {
        "id": record.attendance_id,
        "employeeId": record.employee_id,
        "date": iso(record.work_date),
        "checkIn": iso(record.check_in),
        "checkOut": iso(record.check_out),
        "status": record.status.value,
        "note": record.note,
    }


def day_row_json(row: DayRow):
    return {
        "id": row.attendance_id,
        "employeeId": row.employee_id,
        "employeeName": row.employee_name,
        "date": iso(row.work_date),
        "checkIn": iso(row.check_in),
        "checkOut": iso(row.check_out),
        "status": row.status.value,
        "totalHours": row.total_hours,
        "overtimeHours": row.overtime_hours,
    }


def summary_json(summary: MonthlySummary):
    return {
        "presentDays": summary.present_days,
        "lateDays": summary.late_days,
        "absentDays": summary.absent_days,
        "halfDays": summary.half_days,
        "totalHours": summary.total_hours,
        "avgHours": summary.avg_hours,
        "attendanceRate": summary.attendance_rate,
        "overtimeHours": summary.overtime_hours,
    }
