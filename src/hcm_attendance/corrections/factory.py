from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import CorrectionIssue
from .strategies.base import CorrectionStrategy
from .strategies.forgot_strategy import ForgotCheckInStrategy, ForgotCheckOutStrategy
from .strategies.keep_status_strategy import KeepStatusStrategy
from .strategies.location_strategy import LocationIssueStrategy
from .strategies.wrong_time_strategy import WrongTimeStrategy


@dataclass
class CorrectionStrategyFactory:
    """Factory Pattern: choose the status strategy for a correction issue."""

    def for_issue(self, issue: CorrectionIssue) -> CorrectionStrategy:
        if issue is CorrectionIssue.FORGOT_CHECK_IN:
            return ForgotCheckInStrategy()
        if issue is CorrectionIssue.FORGOT_CHECK_OUT:
            return ForgotCheckOutStrategy()
        if issue in {CorrectionIssue.WRONG_CHECK_IN, CorrectionIssue.WRONG_CHECK_OUT}:
            return WrongTimeStrategy()
        if issue is CorrectionIssue.LOCATION_ISSUE:
            return LocationIssueStrategy()
        return KeepStatusStrategy()
