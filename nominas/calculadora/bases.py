"""
Bases de cotización del mes.

Base CC (contingencias comunes):
    salario base prorrateado - días de IT
    + complementos fijos + comisiones + incentivos + otros devengos salariales
    + prestación IT a cargo de la empresa + prorrata de pagas extras
    acotada entre la base mínima y máxima del grupo (x coeficiente de parcialidad)

Base CP (contingencias profesionales):
    base CC + horas extras normales + horas extras de fuerza mayor
    acotada solo por la base máxima

Las horas extras cotizan además por separado (bases de horas extras).
"""

import logging
from decimal import Decimal

from nominas.calculadora.configuracion import DEFAULT_COTIZATION_GROUP, get_group_limits
from nominas.calculadora.horas_extra import resolve_overtime_amounts
from nominas.calculadora.utils import ZERO, round2
from nominas.exceptions import ValidationError
from nominas.models.config import CotizationGroupLimits, PayrollConfigInput
from nominas.models.nomina import EmployeePayrollInput, MonthlyVariablesInput
from nominas.models.resultado import BasesCalculationResult, ITDetail, OvertimeCalculationResult

logger = logging.getLogger(__name__)


def scaled_group_limits(limits: CotizationGroupLimits, part_time_coefficient: Decimal) -> tuple[Decimal, Decimal]:
    """Bases mínima y máxima del grupo ajustadas a la parcialidad."""
    return (
        round2(limits.min_base * part_time_coefficient),
        round2(limits.max_base * part_time_coefficient),
    )


def calculate_prorated_base_salary(employee: EmployeePayrollInput) -> Decimal:
    """Salario base mensual ajustado a la parcialidad."""
    return round2(employee.base_salary_monthly * employee.effective_part_time_coefficient)


def calculate_accrued_base_salary(employee: EmployeePayrollInput, it_detail: ITDetail | None = None) -> Decimal:
    """Salario base devengado: el prorrateado menos los días de baja."""
    prorated = calculate_prorated_base_salary(employee)
    if it_detail is None:
        return prorated
    return max(ZERO, prorated - it_detail.salary_deduction)


def _check_days(variables: MonthlyVariablesInput, it_days: int) -> list[str]:
    if variables.worked_days > variables.calendar_days_in_month:
        raise ValidationError.single(
            "worked_days",
            f"Los días trabajados ({variables.worked_days}) no pueden superar "
            f"los días naturales del mes ({variables.calendar_days_in_month}).",
            "EXCESSIVE_WORKED_DAYS",
        )
    warnings = []
    explained = variables.worked_days + variables.vacation_days + it_days
    if explained < variables.calendar_days_in_month:
        warnings.append(
            f"Días trabajados ({variables.worked_days}) + vacaciones ({variables.vacation_days}) "
            f"+ IT ({it_days}) = {explained}, menos que los {variables.calendar_days_in_month} días "
            "del mes. Posible permiso no retribuido: no se ha descontado."
        )
    return warnings


def calculate_bases(
    employee: EmployeePayrollInput,
    variables: MonthlyVariablesInput,
    config: PayrollConfigInput,
    it_result: ITDetail | None = None,
    overtime: OvertimeCalculationResult | None = None,
) -> BasesCalculationResult:
    """
    Calcula las bases de cotización del mes.

    Args:
        employee: Datos del empleado. Sin grupo se usan los topes del grupo 7.
        variables: Variables del mes.
        config: Configuración anual.
        it_result: Detalle de la baja, si la hay.
        overtime: Horas extras ya valoradas. Si falta se valoran aquí.

    Returns:
        BasesCalculationResult con base CC, base CP, bases de horas extras,
        base reguladora diaria de IT y los avisos del cálculo.
    """
    warnings = _check_days(variables, it_result.days_in_period if it_result else 0)

    coefficient = employee.effective_part_time_coefficient
    group = employee.cotization_group if employee.cotization_group is not None else DEFAULT_COTIZATION_GROUP
    min_base, max_base = scaled_group_limits(get_group_limits(config, group), coefficient)

    if overtime is not None:
        overtime_normal, overtime_force_majeure = overtime.normal_amount, overtime.force_majeure_amount
    else:
        overtime_normal, overtime_force_majeure = resolve_overtime_amounts(employee, variables)

    it_company_benefit = it_result.company_benefit_amount if it_result else ZERO

    raw_cc = round2(
        calculate_accrued_base_salary(employee, it_result)
        + employee.fixed_complements
        + variables.commissions
        + variables.incentives
        + variables.other_salary_accruals
        + it_company_benefit
        + employee.prorated_bonuses
    )

    if raw_cc < min_base:
        warnings.append(
            f"La base de contingencias comunes ({raw_cc}) es inferior a la mínima del "
            f"grupo {group} ({min_base}). Se aplica la base mínima."
        )
        base_cc = min_base
    elif raw_cc > max_base:
        warnings.append(
            f"La base de contingencias comunes ({raw_cc}) supera la máxima del "
            f"grupo {group} ({max_base}). Se aplica la base máxima."
        )
        base_cc = max_base
    else:
        base_cc = raw_cc

    base_cp = min(base_cc + overtime_normal + overtime_force_majeure, max_base)

    days = variables.calendar_days_in_month
    logger.debug(
        "Bases calculadas",
        extra={"group": group, "base_cc": base_cc, "base_cp": base_cp, "raw_cc": raw_cc},
    )

    return BasesCalculationResult(
        base_cc=base_cc,
        base_cp=base_cp,
        base_overtime_normal=overtime_normal,
        base_overtime_force_majeure=overtime_force_majeure,
        base_reguladora_it=round2(base_cc / days),
        warnings=tuple(warnings),
    )
