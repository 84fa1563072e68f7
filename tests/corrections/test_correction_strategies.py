from __future__ import annotations

from datetime import date, datetime

import pytest

from hcm_attendance.attendance.shift_clock import ShiftClock
from hcm_attendance.core.enums import AttendanceStatus, CorrectionIssue
from hcm_attendance.corrections.factory import CorrectionStrategyFactory
from hcm_attendance.corrections.strategies.base import CorrectionContext
from hcm_attendance.corrections.strategies.forgot_strategy import ForgotCheckInStrategy, ForgotCheckOutStrategy
from hcm_attendance.corrections.strategies.keep_status_strategy import KeepStatusStrategy
from hcm_attendance.corrections.strategies.location_strategy import LocationIssueStrategy
from hcm_attendance.corrections.strategies.wrong_time_strategy import WrongTimeStrategy

DAY = date(2026, 3, 3)
SHIFT = ShiftClock("09:00", "18:00", grace_minutes=15)


def ctx(check_in=None, check_out=None, req_in=None, req_out=None, existing=None):
    def t(hhmm):
        return datetime.combine(DAY, datetime.strptime(hhmm, "%H:%M").time()) if hhmm else None

    return CorrectionContext(
        work_date=DAY,
        check_in=t(check_in),
        check_out=t(check_out),
        requested_check_in=t(req_in),
        requested_check_out=t(req_out),
        existing_status=existing,
    )


@pytest.mark.parametrize(
    "issue, expected",
    [
        (CorrectionIssue.FORGOT_CHECK_IN, ForgotCheckInStrategy),
        (CorrectionIssue.FORGOT_CHECK_OUT, ForgotCheckOutStrategy),
        (CorrectionIssue.WRONG_CHECK_IN, WrongTimeStrategy),
        (CorrectionIssue.WRONG_CHECK_OUT, WrongTimeStrategy),
        (CorrectionIssue.LOCATION_ISSUE, LocationIssueStrategy),
        (CorrectionIssue.OTHER, KeepStatusStrategy),
    ],
)
def test_factory_picks_strategy_per_issue(issue, expected):
    assert isinstance(CorrectionStrategyFactory().for_issue(issue), expected)


def test_forgot_check_in_with_time_is_present_even_if_late():
    c = ctx(check_in="10:30", req_in="10:30", existing=AttendanceStatus.ABSENT)
    assert ForgotCheckInStrategy().decide_status(c, SHIFT) is AttendanceStatus.PRESENT


def test_forgot_check_out_without_time_keeps_existing_status():
    c = ctx(check_in="09:40", existing=AttendanceStatus.LATE)
    assert ForgotCheckOutStrategy().decide_status(c, SHIFT) is AttendanceStatus.LATE


def test_wrong_time_recomputes_lateness_from_corrected_check_in():
    strategy = WrongTimeStrategy()
    assert strategy.decide_status(ctx(req_in="09:10", existing=AttendanceStatus.LATE), SHIFT) is AttendanceStatus.PRESENT
    assert strategy.decide_status(ctx(req_in="09:20", existing=AttendanceStatus.PRESENT), SHIFT) is AttendanceStatus.LATE


def test_wrong_check_out_only_keeps_existing_status():
    c = ctx(check_in="09:40", req_out="18:00", existing=AttendanceStatus.LATE)
    assert WrongTimeStrategy().decide_status(c, SHIFT) is AttendanceStatus.LATE


def test_location_issue_forces_present():
    c = ctx(check_in="11:00", existing=AttendanceStatus.LATE)
    assert LocationIssueStrategy().decide_status(c, SHIFT) is AttendanceStatus.PRESENT


def test_other_keeps_existing_status():
    c = ctx(check_in="09:30", existing=AttendanceStatus.PRESENT)
    assert KeepStatusStrategy().decide_status(c, SHIFT) is AttendanceStatus.PRESENT


def test_other_on_a_new_day_is_present():
    assert KeepStatusStrategy().decide_status(ctx(check_in="09:30"), SHIFT) is AttendanceStatus.PRESENT
