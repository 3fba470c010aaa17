"""
Tests de las bases de cotización.

Covers:
- Base CC y base CP como totales distintos
- Topes por grupo y parcialidad
- Prorrata de pagas extras
- Días trabajados
"""

from decimal import Decimal

import pytest

from nominas.calculadora.bases import calculate_bases
from nominas.exceptions import ValidationError
from nominas.models import WorkdayType


class TestBaseCC:

    def test_full_month(self, make_employee, make_variables, config):
        bases = calculate_bases(make_employee(), make_variables(), config)

        assert bases.base_cc == Decimal("2000.00")
        assert bases.base_cp == Decimal("2000.00")
        assert bases.warnings == ()

    def test_components_and_prorated_bonuses(self, make_employee, make_variables, config):
        """Complementos, comisiones, incentivos y prorrata entran en la base CC."""
        bases = calculate_bases(
            make_employee(fixed_complements=Decimal("100"), prorated_bonuses=Decimal("333.33")),
            make_variables(commissions=Decimal("50"), incentives=Decimal("25")),
            config,
        )

        assert bases.base_cc == Decimal("2508.33")

    def test_non_salary_complements_excluded(self, make_employee, make_variables, config):
        bases = calculate_bases(
            make_employee(non_salary_complements=Decimal("120")),
            make_variables(other_non_salary_accruals=Decimal("30")),
            config,
        )

        assert bases.base_cc == Decimal("2000.00")

    def test_clamped_to_group_minimum(self, make_employee, make_variables, config):
        """Por debajo de la mínima del grupo se aplica la mínima, con aviso."""
        bases = calculate_bases(make_employee(base_salary_monthly=Decimal("1000")), make_variables(), config)

        assert bases.base_cc == Decimal("1362.00")
        assert any("mínima" in w for w in bases.warnings)

    def test_clamped_to_maximum(self, make_employee, make_variables, config):
        bases = calculate_bases(make_employee(base_salary_monthly=Decimal("6000")), make_variables(), config)

        assert bases.base_cc == Decimal("4720.50")
        assert any("máxima" in w for w in bases.warnings)

    def test_group_one_minimum(self, make_employee, make_variables, config):
        bases = calculate_bases(make_employee(cotization_group=1), make_variables(), config)

        assert bases.base_cc == Decimal("2000.00")

    def test_missing_group_uses_group_seven_limits(self, make_employee, make_variables, config):
        bases = calculate_bases(
            make_employee(cotization_group=None, base_salary_monthly=Decimal("900")),
            make_variables(),
            config,
        )

        assert bases.base_cc == Decimal("1362.00")

    def test_regulatory_base(self, make_employee, make_variables, config):
        bases = calculate_bases(make_employee(base_salary_monthly=Decimal("3000")), make_variables(), config)

        assert bases.base_reguladora_it == Decimal("100.00")


class TestPartTime:

    def test_half_time(self, make_employee, make_variables, config):
        """Coeficiente 0,5: salario y topes a la mitad."""
        employee = make_employee(workday_type=WorkdayType.PARCIAL, part_time_coefficient=Decimal("0.5"))

        bases = calculate_bases(employee, make_variables(), config)

        assert bases.base_cc == Decimal("1000.00")
        assert bases.warnings == ()

    def test_part_time_minimum_scaled(self, make_employee, make_variables, config):
        employee = make_employee(
            base_salary_monthly=Decimal("1000"),
            workday_type=WorkdayType.PARCIAL,
            part_time_coefficient=Decimal("0.5"),
        )

        bases = calculate_bases(employee, make_variables(), config)

        assert bases.base_cc == Decimal("681.00")

    def test_full_time_coefficient_one_matches_no_proration(self, make_employee, make_variables, config):
        """Coeficiente 1 a jornada completa = sin parcialidad."""
        explicit = calculate_bases(make_employee(part_time_coefficient=Decimal("1")), make_variables(), config)
        implicit = calculate_bases(make_employee(), make_variables(), config)

        assert explicit == implicit


class TestBaseCP:

    def test_overtime_only_in_cp(self, make_employee, make_variables, config):
        """Las horas extras suman en la base CP, no en la CC."""
        bases = calculate_bases(
            make_employee(base_salary_monthly=Decimal("3000")),
            make_variables(overtime_hours=Decimal("10")),
            config,
        )

        assert bases.base_cc == Decimal("3000.00")
        assert bases.base_cp == Decimal("3156.25")
        assert bases.base_overtime_normal == Decimal("156.25")

    def test_cp_capped_at_maximum(self, make_employee, make_variables, config):
        bases = calculate_bases(
            make_employee(base_salary_monthly=Decimal("4700")),
            make_variables(overtime_amount=Decimal("500")),
            config,
        )

        assert bases.base_cp == Decimal("4720.50")


class TestWorkedDays:

    def test_worked_days_above_calendar(self, make_employee, make_variables, config):
        with pytest.raises(ValidationError):
            calculate_bases(make_employee(), make_variables(worked_days=31), config)

    def test_unexplained_missing_days_warn(self, make_employee, make_variables, config):
        """Faltan días sin vacaciones ni baja: aviso, sin descuento."""
        bases = calculate_bases(make_employee(), make_variables(worked_days=25), config)

        assert bases.base_cc == Decimal("2000.00")
        assert len(bases.warnings) == 1

    def test_vacation_explains_missing_days(self, make_employee, make_variables, config):
        bases = calculate_bases(make_employee(), make_variables(worked_days=25, vacation_days=5), config)

        assert bases.warnings == ()
