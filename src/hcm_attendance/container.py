from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .attendance.shift_clock import ShiftClock
from .audit.sink import AuditSink, LoggingAuditSink
from .common.datetime_utils import BusinessClock
from .core.settings import Settings
from .corrections.factory import CorrectionStrategyFactory
from .corrections.mysql_correction_repository import MySQLCorrectionRepository
from .corrections.repository import CorrectionRepository
from .corrections.service import CorrectionService
from .database.connection import DBConfig, DatabaseConnection
from .database.mysql_base import MySQLTransactionManager
from .database.transaction import TransactionManager
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .geofence.evaluator import GeoFence
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.repository import LeaveRepository
from .leaves.service import LeaveService
from .payroll.calculator.standard_calculator import StandardPayrollCalculator
from .payroll.mysql_payroll_repository import MySQLPayrollRepository
from .payroll.repository import PayrollRepository
from .payroll.service import PayrollRunService
from .remote_work.mysql_remote_work_repository import MySQLRemoteWorkRepository
from .remote_work.repository import RemoteWorkRepository
from .remote_work.service import RemoteWorkService


@dataclass(frozen=True)
class Container:
    clock: BusinessClock
    shift_clock: ShiftClock
    geofence: GeoFence
    tx: TransactionManager
    audit: AuditSink

    employees_repo: EmployeeRepository
    attendance_repo: AttendanceRepository
    corrections_repo: CorrectionRepository
    remote_work_repo: RemoteWorkRepository
    leaves_repo: LeaveRepository
    payroll_repo: PayrollRepository

    attendance_service: AttendanceService
    correction_service: CorrectionService
    remote_work_service: RemoteWorkService
    leave_service: LeaveService
    payroll_service: PayrollRunService

    conn: Optional[DatabaseConnection] = None


def build_services(
    settings: Settings,
    *,
    employees_repo: EmployeeRepository,
    attendance_repo: AttendanceRepository,
    corrections_repo: CorrectionRepository,
    remote_work_repo: RemoteWorkRepository,
    leaves_repo: LeaveRepository,
    payroll_repo: PayrollRepository,
    tx: TransactionManager,
    clock: Optional[BusinessClock] = None,
    audit: Optional[AuditSink] = None,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services over the given repositories."""
    clock = clock or BusinessClock(settings.business_timezone)
    audit = audit or LoggingAuditSink()
    shift_clock = ShiftClock(
        settings.shift_start,
        settings.shift_end,
        grace_minutes=settings.late_grace_minutes,
        clock=clock,
    )
    geofence = GeoFence(
        latitude=settings.office_latitude,
        longitude=settings.office_longitude,
        radius_meters=settings.geofence_radius_meters,
    )

    remote_work_service = RemoteWorkService(remote_work_repo, employees_repo, tx=tx, clock=clock, audit=audit)
    attendance_service = AttendanceService(
        attendance_repo,
        employees_repo,
        remote_work_service,
        corrections_repo,
        shift_clock=shift_clock,
        geofence=geofence,
        clock=clock,
        audit=audit,
        location_max_age_seconds=settings.location_max_age_seconds,
    )
    correction_service = CorrectionService(
        corrections_repo,
        attendance_repo,
        employees_repo,
        tx=tx,
        clock=clock,
        shift_clock=shift_clock,
        audit=audit,
        factory=CorrectionStrategyFactory(),
    )
    leave_service = LeaveService(leaves_repo, employees_repo, tx=tx, clock=clock, audit=audit)
    payroll_service = PayrollRunService(
        payroll_repo,
        employees_repo,
        leaves_repo,
        attendance_repo,
        tx=tx,
        clock=clock,
        shift_clock=shift_clock,
        audit=audit,
        calculator=StandardPayrollCalculator(overtime_multiplier=settings.payroll_overtime_multiplier),
        lock_timeout_seconds=settings.payroll_lock_timeout_seconds,
    )

    return Container(
        clock=clock,
        shift_clock=shift_clock,
        geofence=geofence,
        tx=tx,
        audit=audit,
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        corrections_repo=corrections_repo,
        remote_work_repo=remote_work_repo,
        leaves_repo=leaves_repo,
        payroll_repo=payroll_repo,
        attendance_service=attendance_service,
        correction_service=correction_service,
        remote_work_service=remote_work_service,
        leave_service=leave_service,
        payroll_service=payroll_service,
        conn=conn,
    )


def build_container(settings: Settings) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(settings.db_config))
    return build_services(
        settings,
        employees_repo=MySQLEmployeeRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        corrections_repo=MySQLCorrectionRepository(conn),
        remote_work_repo=MySQLRemoteWorkRepository(conn),
        leaves_repo=MySQLLeaveRepository(conn),
        payroll_repo=MySQLPayrollRepository(conn),
        tx=MySQLTransactionManager(conn),
        conn=conn,
    )
