"""
Horas extraordinarias.

Si no se informa el importe, se valora cada hora al precio de la hora
ordinaria con un recargo del 25%:

    importe = horas x (salario base / días del mes / 8) x 1,25

El límite legal es de 80 horas extras normales al año. Las de fuerza mayor no
computan. Superar el límite no bloquea la nómina: genera avisos.
"""

from decimal import Decimal

from nominas.calculadora.utils import ZERO, round2, to_decimal
from nominas.models.config import PayrollConfigInput
from nominas.models.nomina import EmployeePayrollInput, MonthlyVariablesInput
from nominas.models.resultado import OvertimeCalculationResult

OVERTIME_PREMIUM = Decimal("1.25")
HOURS_PER_DAY = Decimal("8")

# Proporción del límite anual a partir de la cual se avisa
OVERTIME_WARNING_RATIO = Decimal("0.9")


def calculate_overtime_amount(hours, base_salary_monthly, calendar_days: int) -> Decimal:
    """Importe de unas horas extras a partir del salario base."""
    hours = to_decimal(hours)
    if hours <= 0 or calendar_days <= 0:
        return ZERO
    base = to_decimal(base_salary_monthly)
    return round2(hours * base * OVERTIME_PREMIUM / (calendar_days * HOURS_PER_DAY))


def resolve_overtime_amounts(
    employee: EmployeePayrollInput,
    variables: MonthlyVariablesInput,
) -> tuple[Decimal, Decimal]:
    """(importe normal, importe fuerza mayor): el informado o el derivado de las horas."""
    days = variables.calendar_days_in_month

    if variables.overtime_amount is not None:
        normal = round2(variables.overtime_amount)
    else:
        normal = calculate_overtime_amount(variables.overtime_hours, employee.base_salary_monthly, days)

    if variables.overtime_force_majeure_amount is not None:
        force_majeure = round2(variables.overtime_force_majeure_amount)
    else:
        force_majeure = calculate_overtime_amount(
            variables.overtime_force_majeure_hours, employee.base_salary_monthly, days
        )

    return normal, force_majeure


def get_updated_accumulated_overtime(accumulated_hours_year, overtime_hours) -> Decimal:
    """Acumulado anual de horas normales después de este mes."""
    return to_decimal(accumulated_hours_year) + to_decimal(overtime_hours)


def get_remaining_overtime_hours(accumulated_hours_year, max_hours_year=Decimal("80")) -> Decimal:
    """Horas normales que quedan hasta el límite anual (nunca negativo)."""
    return max(ZERO, to_decimal(max_hours_year) - to_decimal(accumulated_hours_year))


def check_overtime_limit(accumulated_hours_year, overtime_hours, max_hours_year) -> list[str]:
    """Avisos por acercarse o superar el límite anual de horas normales."""
    warnings = []
    max_hours = to_decimal(max_hours_year)
    total = get_updated_accumulated_overtime(accumulated_hours_year, overtime_hours)

    if total > max_hours:
        warnings.append(
            f"Se supera el límite anual de {max_hours} horas extras: acumuladas {total} "
            f"horas (exceso de {total - max_hours})."
        )
    elif to_decimal(overtime_hours) > 0 and total > max_hours * OVERTIME_WARNING_RATIO:
        warnings.append(
            f"Las horas extras acumuladas ({total}) superan el 90% del límite anual "
            f"de {max_hours} horas. Quedan {max_hours - total} horas."
        )
    return warnings


def calculate_overtime(
    employee: EmployeePayrollInput,
    variables: MonthlyVariablesInput,
    config: PayrollConfigInput,
) -> OvertimeCalculationResult:
    """Valora las horas extras del mes y controla el límite anual."""
    normal, force_majeure = resolve_overtime_amounts(employee, variables)
    warnings = []

    if variables.overtime_hours > 0 and normal == 0:
        warnings.append(
            f"Se indican {variables.overtime_hours} horas extras normales con importe 0."
        )
    if variables.overtime_force_majeure_hours > 0 and force_majeure == 0:
        warnings.append(
            f"Se indican {variables.overtime_force_majeure_hours} horas extras de fuerza mayor con importe 0."
        )

    warnings.extend(check_overtime_limit(
        variables.accumulated_overtime_hours_year,
        variables.overtime_hours,
        config.max_overtime_hours_year,
    ))

    accumulated = get_updated_accumulated_overtime(
        variables.accumulated_overtime_hours_year, variables.overtime_hours
    )
    return OvertimeCalculationResult(
        normal_hours=variables.overtime_hours,
        normal_amount=normal,
        force_majeure_hours=variables.overtime_force_majeure_hours,
        force_majeure_amount=force_majeure,
        accumulated_hours_year=accumulated,
        remaining_hours_year=get_remaining_overtime_hours(accumulated, config.max_overtime_hours_year),
        warnings=tuple(warnings),
    )
