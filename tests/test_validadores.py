"""
Tests de la validación de entradas.

Covers:
- Errores estructurales (se reúnen todos en un ValidationError)
- Avisos no bloqueantes
- Coherencia de días y de la baja
"""

from decimal import Decimal

import pytest

from nominas.calculadora.validadores import (
    collect_input_warnings,
    validate_cross_fields,
    validate_employee,
    validate_input,
    validate_month,
    validate_monthly_variables,
)
from nominas.exceptions import ValidationError
from nominas.models import WorkdayType


def _codes(issues):
    return [issue.code for issue in issues]


class TestEmployeeErrors:

    def test_valid_employee(self, make_employee):
        assert validate_employee(make_employee()) == []

    def test_negative_salary(self, make_employee):
        issues = validate_employee(make_employee(base_salary_monthly=Decimal("-1")))

        assert _codes(issues) == ["INVALID_BASE_SALARY"]

    @pytest.mark.parametrize("group", [0, 12])
    def test_group_out_of_range(self, make_employee, group):
        assert _codes(validate_employee(make_employee(cotization_group=group))) == ["INVALID_COTIZATION_GROUP"]

    def test_missing_group_is_not_an_error(self, make_employee):
        assert validate_employee(make_employee(cotization_group=None)) == []

    def test_irpf_out_of_range(self, make_employee):
        assert _codes(validate_employee(make_employee(irpf_percentage=Decimal("101")))) == ["INVALID_IRPF_PERCENTAGE"]

    def test_number_of_bonuses(self, make_employee):
        assert _codes(validate_employee(make_employee(number_of_bonuses=7))) == ["INVALID_NUMBER_OF_BONUSES"]

    @pytest.mark.parametrize("coefficient", ["0", "1.2"])
    def test_invalid_part_time_coefficient(self, make_employee, coefficient):
        employee = make_employee(workday_type=WorkdayType.PARCIAL, part_time_coefficient=Decimal(coefficient))

        assert _codes(validate_employee(employee)) == ["INVALID_PART_TIME_COEFFICIENT"]

    def test_full_time_with_coefficient(self, make_employee):
        employee = make_employee(part_time_coefficient=Decimal("0.5"))

        assert _codes(validate_employee(employee)) == ["PART_TIME_MISMATCH_FULL"]


class TestMonthlyVariablesErrors:

    def test_valid_variables(self, make_variables):
        assert validate_monthly_variables(make_variables()) == []

    @pytest.mark.parametrize("days", [27, 32])
    def test_calendar_days(self, make_variables, days):
        issues = validate_monthly_variables(make_variables(calendar_days_in_month=days, worked_days=20))

        assert "INVALID_CALENDAR_DAYS" in _codes(issues)

    def test_negative_worked_days(self, make_variables):
        assert _codes(validate_monthly_variables(make_variables(worked_days=-1))) == ["NEGATIVE_WORKED_DAYS"]

    def test_worked_days_above_calendar(self, make_variables):
        assert _codes(validate_monthly_variables(make_variables(worked_days=31))) == ["EXCESSIVE_WORKED_DAYS"]

    def test_negative_amounts(self, make_variables):
        issues = validate_monthly_variables(
            make_variables(commissions=Decimal("-5"), advances=Decimal("-1"))
        )

        assert set(_codes(issues)) == {"NEGATIVE_COMMISSIONS", "NEGATIVE_ADVANCES"}


class TestDisabilityErrors:

    def test_start_after_end(self, make_variables, make_disability):
        disability = make_disability(5, absolute=10, start_day=8)
        issues = validate_monthly_variables(make_variables(worked_days=20, temporary_disability=disability))

        assert "IT_START_AFTER_END" in _codes(issues)

    def test_day_outside_month(self, make_variables, make_disability):
        disability = make_disability(31)
        issues = validate_monthly_variables(make_variables(worked_days=0, temporary_disability=disability))

        assert "INVALID_IT_END_DAY" in _codes(issues)

    def test_absolute_below_period_days(self, make_variables, make_disability):
        disability = make_disability(10, absolute=5)
        issues = validate_monthly_variables(make_variables(worked_days=20, temporary_disability=disability))

        assert _codes(issues) == ["IT_PERIOD_EXCEEDS_ABSOLUTE"]

    def test_inactive_disability_ignored(self, make_variables, make_disability):
        disability = make_disability(10, absolute=5, active=False)

        assert validate_monthly_variables(make_variables(temporary_disability=disability)) == []


class TestCrossFields:

    def test_total_days_above_calendar(self, make_employee, make_variables, make_disability):
        variables = make_variables(worked_days=20, vacation_days=5, temporary_disability=make_disability(10))

        assert _codes(validate_cross_fields(make_employee(), variables)) == ["EXCESSIVE_TOTAL_DAYS"]

    def test_total_days_fit(self, make_employee, make_variables, make_disability):
        variables = make_variables(worked_days=15, vacation_days=5, temporary_disability=make_disability(10))

        assert validate_cross_fields(make_employee(), variables) == []


class TestWarnings:

    def test_no_warnings(self, make_employee, make_variables):
        assert collect_input_warnings(make_employee(), make_variables()) == []

    def test_zero_salary(self, make_employee, make_variables):
        warnings = collect_input_warnings(make_employee(base_salary_monthly=Decimal("0")), make_variables())

        assert any("salario base" in w for w in warnings)

    def test_part_time_with_coefficient_one(self, make_employee, make_variables):
        warnings = collect_input_warnings(make_employee(workday_type=WorkdayType.PARCIAL), make_variables())

        assert len(warnings) == 1

    def test_zero_worked_days_unexplained(self, make_employee, make_variables):
        warnings = collect_input_warnings(make_employee(), make_variables(worked_days=0))

        assert any("0 días trabajados" in w for w in warnings)

    def test_prorated_and_bonus_payment(self, make_employee, make_variables):
        warnings = collect_input_warnings(
            make_employee(prorated_bonuses=Decimal("333.33")),
            make_variables(bonus_payment=Decimal("2000")),
        )

        assert any("prorrata" in w for w in warnings)


class TestValidateInput:

    def test_returns_warnings(self, make_employee, make_variables):
        assert validate_input(make_employee(irpf_percentage=Decimal("0")), make_variables(), 3) != []

    def test_invalid_month(self):
        assert _codes(validate_month(13)) == ["INVALID_MONTH"]

    def test_collects_all_errors(self, make_employee, make_variables):
        """Todos los errores en una sola excepción."""
        with pytest.raises(ValidationError) as exc_info:
            validate_input(
                make_employee(cotization_group=15, irpf_percentage=Decimal("-2")),
                make_variables(worked_days=40),
                0,
            )

        assert set(_codes(exc_info.value.issues)) == {
            "INVALID_MONTH",
            "INVALID_COTIZATION_GROUP",
            "INVALID_IRPF_PERCENTAGE",
            "EXCESSIVE_WORKED_DAYS",
        }
