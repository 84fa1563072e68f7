from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal

from ...employees.model import Employee
from ..model import PayLine


@dataclass(frozen=True)
class PayInputs:
    employee: Employee
    working_days: int
    unpaid_leave_days: int = 0
    overtime_hours: Decimal = Decimal("0")
    other_deductions: Decimal = Decimal("0")


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def compute(self, inputs: PayInputs) -> PayLine:
        raise NotImplementedError
