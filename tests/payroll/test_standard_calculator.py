from __future__ import annotations

from decimal import Decimal

from hcm_attendance.payroll.calculator.base import PayInputs
from hcm_attendance.payroll.calculator.standard_calculator import StandardPayrollCalculator, round_money

from fakes import make_employee


def test_unpaid_leave_scenario():
    calc = StandardPayrollCalculator()
    line = calc.compute(PayInputs(employee=make_employee(1, "A", "60000"), working_days=22, unpaid_leave_days=3))

    assert line.leave_deduction == Decimal("8182")
    assert line.net_pay == Decimal("51818")
    assert line.deductions == Decimal("8182")
    assert line.bonus == 0


def test_round_money_is_half_up():
    assert round_money(Decimal("2.5")) == 3
    assert round_money(Decimal("3.5")) == 4
    assert round_money(Decimal("8181.49")) == 8181


def test_net_pay_never_negative():
    calc = StandardPayrollCalculator()
    line = calc.compute(
        PayInputs(employee=make_employee(1, "A", "1000"), working_days=20, unpaid_leave_days=5,
                  other_deductions=Decimal("900"))
    )
    assert line.net_pay == 0


def test_overtime_bonus_only_with_multiplier():
    emp = make_employee(1, "A", "44000")
    inputs = PayInputs(employee=emp, working_days=22, overtime_hours=Decimal("10"))

    assert StandardPayrollCalculator().compute(inputs).bonus == 0
    # hourly 44000 / (22 * 8) = 250
    line = StandardPayrollCalculator(overtime_multiplier=1.5).compute(inputs)
    assert line.bonus == Decimal("3750")
    assert line.net_pay == Decimal("47750")
