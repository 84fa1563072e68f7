from __future__ import annotations

import re
from enum import Enum


def _normalize(value) -> str:
    # "Half-Day", "half_day" and "HalfDay" all compare equal
    return re.sub(r"[^a-z0-9]", "", str(value or "").lower())


class _ParsableEnum(str, Enum):
    """Closed enumeration parsed case-insensitively at the system boundary."""

    @classmethod
    def parse(cls, value):
        if isinstance(value, cls):
            return value
        key = _normalize(value)
        for member in cls:
            if key in {_normalize(member.value), _normalize(member.name)}:
                return member
        raise ValueError(f"{value!r} is not a valid {cls.__name__}")


class Role(_ParsableEnum):
    ADMIN = "admin"
    EMPLOYEE = "employee"


class EmployeeStatus(_ParsableEnum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"


class AttendanceStatus(_ParsableEnum):
    """Stored attendance status for one employee-day."""

    PRESENT = "present"
    LATE = "late"
    ABSENT = "absent"
    HALF_DAY = "half-day"


class RequestState(_ParsableEnum):
    """Approval state shared by corrections and remote-work requests."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class CorrectionIssue(_ParsableEnum):
    FORGOT_CHECK_IN = "Forgot to check in"
    FORGOT_CHECK_OUT = "Forgot to check out"
    WRONG_CHECK_IN = "Wrong check-in time"
    WRONG_CHECK_OUT = "Wrong check-out time"
    LOCATION_ISSUE = "Location issue"
    OTHER = "Other"


class LeaveType(_ParsableEnum):
    ANNUAL = "Annual"
    SICK = "Sick"
    CASUAL = "Casual"
    EMERGENCY = "Emergency"


class LeaveStatus(_ParsableEnum):
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class PayrollRunStatus(_ParsableEnum):
    PROCESSING = "processing"
    PROCESSED = "processed"


class PayrollRecordStatus(_ParsableEnum):
    PENDING = "Pending"
    PROCESSED = "Processed"
