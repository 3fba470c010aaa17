"""Fixtures compartidas por los tests del motor de nóminas."""

from decimal import Decimal

import pytest

from nominas.calculadora import DEFAULT_CONFIG_2025
from nominas.models import (
    ContractType,
    EmployeePayrollInput,
    MonthlyVariablesInput,
    TemporaryDisabilityInput,
    WorkdayType,
)


@pytest.fixture
def config():
    return DEFAULT_CONFIG_2025


@pytest.fixture
def make_employee():
    """Empleado a jornada completa, grupo 7, contrato indefinido, sin prorrata."""

    def _make(**overrides) -> EmployeePayrollInput:
        data = {
            "base_salary_monthly": Decimal("2000.00"),
            "cotization_group": 7,
            "irpf_percentage": Decimal("15"),
            "contract_type": ContractType.INDEFINIDO,
            "workday_type": WorkdayType.COMPLETA,
        }
        data.update(overrides)
        return EmployeePayrollInput(**data)

    return _make


@pytest.fixture
def make_variables():
    """Mes de 30 días, todos trabajados."""

    def _make(**overrides) -> MonthlyVariablesInput:
        data = {"calendar_days_in_month": 30, "worked_days": 30}
        data.update(overrides)
        return MonthlyVariablesInput(**data)

    return _make


@pytest.fixture
def make_disability():
    """Baja por enfermedad común que empieza el día 1 del mes."""

    def _make(days: int, absolute: int | None = None, **overrides) -> TemporaryDisabilityInput:
        data = {
            "start_day": 1,
            "end_day": days,
            "absolute_days_since_start": absolute if absolute is not None else days,
        }
        data.update(overrides)
        return TemporaryDisabilityInput(**data)

    return _make
