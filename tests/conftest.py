from __future__ import annotations

from datetime import datetime

import pytest

from hcm_attendance.common.datetime_utils import BusinessClock
from hcm_attendance.container import build_services
from hcm_attendance.core.settings import Settings
from hcm_attendance.main import create_app

from fakes import (
    InMemoryAttendance,
    InMemoryCorrections,
    InMemoryEmployees,
    InMemoryLeaves,
    InMemoryPayroll,
    InMemoryRemoteWork,
    MutableNow,
    NoopTx,
    RecordingAudit,
    make_employee,
)


@pytest.fixture
def now():
    # Tuesday
    return MutableNow(datetime(2026, 3, 10, 9, 5))


@pytest.fixture
def clock(now):
    return BusinessClock("Asia/Karachi", now_fn=now)


@pytest.fixture
def settings():
    return Settings(db_config={})


@pytest.fixture
def employees():
    return InMemoryEmployees(
        {
            1: make_employee(1, "Ayesha Khan", "60000"),
            2: make_employee(2, "Bilal Ahmed", "45000"),
            3: make_employee(3, "Former Staff", "30000", active=False),
        }
    )


@pytest.fixture
def attendance():
    return InMemoryAttendance()


@pytest.fixture
def corrections():
    return InMemoryCorrections()


@pytest.fixture
def remote_work():
    return InMemoryRemoteWork()


@pytest.fixture
def leaves():
    return InMemoryLeaves()


@pytest.fixture
def payroll():
    return InMemoryPayroll()


@pytest.fixture
def tx():
    return NoopTx()


@pytest.fixture
def audit():
    return RecordingAudit()


@pytest.fixture
def container(settings, employees, attendance, corrections, remote_work, leaves, payroll, tx, clock, audit):
    return build_services(
        settings,
        employees_repo=employees,
        attendance_repo=attendance,
        corrections_repo=corrections,
        remote_work_repo=remote_work,
        leaves_repo=leaves,
        payroll_repo=payroll,
        tx=tx,
        clock=clock,
        audit=audit,
    )


@pytest.fixture
def app(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    return create_app(container=container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    def _login(user_id: int, role: str = "employee"):
        with client.session_transaction() as sess:
            sess["user_id"] = user_id
            sess["role"] = role
        return client

    return _login
