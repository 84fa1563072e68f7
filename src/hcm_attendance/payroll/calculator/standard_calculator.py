from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Union

from ...core.constants import STANDARD_DAY_MINUTES
from ..model import PayLine
from .base import PayInputs, PayrollCalculator

ZERO = Decimal("0")


def round_money(value: Decimal) -> Decimal:
    """Half-up to whole currency units (8181.82 -> 8182)."""
    return value.quantize(Decimal("1"), rounding=ROUND_HALF_UP)


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: salary prorated by working days, unpaid leave deducted.

    dailyRate = base / workingDays
    leaveDeduction = round(dailyRate * unpaidDays)
    netPay = max(0, base + bonus - (otherDeductions + leaveDeduction))

    Overtime pays ``hourly * hours * multiplier`` as bonus; the default multiplier of 0
    leaves the bonus at 0.
    """

    def __init__(self, *, overtime_multiplier: Union[Decimal, float, int] = 0):
        self._multiplier = Decimal(str(overtime_multiplier))

    def compute(self, inputs: PayInputs) -> PayLine:
        base = Decimal(inputs.employee.salary)
        working_days = Decimal(inputs.working_days)

        daily_rate = base / working_days
        leave_deduction = round_money(daily_rate * inputs.unpaid_leave_days)

        bonus = ZERO
        if self._multiplier > 0 and inputs.overtime_hours > 0:
            hourly_rate = base / (working_days * (STANDARD_DAY_MINUTES // 60))
            bonus = round_money(hourly_rate * inputs.overtime_hours * self._multiplier)

        other = Decimal(inputs.other_deductions)
        net_pay = max(ZERO, base + bonus - (other + leave_deduction))

        return PayLine(
            employee_id=inputs.employee.employee_id,
            base_salary=base,
            bonus=bonus,
            other_deductions=other,
            leave_deduction=leave_deduction,
            net_pay=net_pay,
            unpaid_leave_days=inputs.unpaid_leave_days,
            working_days=inputs.working_days,
            overtime_hours=inputs.overtime_hours,
        )
