"""
Validación de las entradas antes de calcular.

Dos niveles:
- Errores (ValidationIssue): datos estructuralmente imposibles. Se reúnen todos
  y se lanza un único ValidationError.
- Avisos (str): datos posibles pero sospechosos. No bloquean el cálculo.
"""

from nominas.calculadora.configuracion import COTIZATION_GROUPS
from nominas.calculadora.irpf import validate_irpf_percentage
from nominas.exceptions import ValidationError, ValidationIssue
from nominas.models.enums import WorkdayType
from nominas.models.nomina import EmployeePayrollInput, MonthlyVariablesInput, TemporaryDisabilityInput

MIN_CALENDAR_DAYS = 28
MAX_CALENDAR_DAYS = 31
MAX_BONUS_PAYMENTS = 6

# Importes que nunca pueden ser negativos: (campo, código)
_EMPLOYEE_AMOUNTS = (
    ("base_salary_monthly", "INVALID_BASE_SALARY"),
    ("fixed_complements", "NEGATIVE_FIXED_COMPLEMENTS"),
    ("prorated_bonuses", "NEGATIVE_PRORATED_BONUSES"),
    ("non_salary_complements", "NEGATIVE_NON_SALARY_COMPLEMENTS"),
)

_VARIABLE_AMOUNTS = (
    ("vacation_days", "NEGATIVE_VACATION_DAYS"),
    ("overtime_hours", "NEGATIVE_OVERTIME_HOURS"),
    ("overtime_amount", "NEGATIVE_OVERTIME_AMOUNT"),
    ("overtime_force_majeure_hours", "NEGATIVE_OVERTIME_FM_HOURS"),
    ("overtime_force_majeure_amount", "NEGATIVE_OVERTIME_FM_AMOUNT"),
    ("accumulated_overtime_hours_year", "NEGATIVE_ACCUMULATED_OVERTIME"),
    ("commissions", "NEGATIVE_COMMISSIONS"),
    ("incentives", "NEGATIVE_INCENTIVES"),
    ("bonus_payment", "NEGATIVE_BONUS_PAYMENT"),
    ("advances", "NEGATIVE_ADVANCES"),
    ("other_salary_accruals", "NEGATIVE_OTHER_SALARY_ACCRUALS"),
    ("other_non_salary_accruals", "NEGATIVE_OTHER_NON_SALARY_ACCRUALS"),
    ("other_deductions", "NEGATIVE_OTHER_DEDUCTIONS"),
)


def _negatives(model, fields) -> list[ValidationIssue]:
    issues = []
    for field, code in fields:
        value = getattr(model, field)
        if value is not None and value < 0:
            issues.append(ValidationIssue(field=field, message=f"No puede ser negativo (valor: {value}).", code=code))
    return issues


def validate_month(month: int) -> list[ValidationIssue]:
    if not 1 <= month <= 12:
        return [ValidationIssue(field="month", message=f"Mes inválido: {month}. Debe estar entre 1 y 12.", code="INVALID_MONTH")]
    return []


def validate_employee(employee: EmployeePayrollInput) -> list[ValidationIssue]:
    """Errores estructurales en los datos del empleado."""
    issues = _negatives(employee, _EMPLOYEE_AMOUNTS)

    if employee.cotization_group is not None and employee.cotization_group not in COTIZATION_GROUPS:
        issues.append(ValidationIssue(
            field="cotization_group",
            message=f"Grupo de cotización inválido: {employee.cotization_group}. Debe ser un valor entre 1 y 11.",
            code="INVALID_COTIZATION_GROUP",
        ))

    if not 0 <= employee.irpf_percentage <= 100:
        issues.append(ValidationIssue(
            field="irpf_percentage",
            message=f"Porcentaje de IRPF inválido: {employee.irpf_percentage}%. Debe estar entre 0 y 100.",
            code="INVALID_IRPF_PERCENTAGE",
        ))

    if not 0 <= employee.number_of_bonuses <= MAX_BONUS_PAYMENTS:
        issues.append(ValidationIssue(
            field="number_of_bonuses",
            message=f"El número de pagas extras debe estar entre 0 y {MAX_BONUS_PAYMENTS}.",
            code="INVALID_NUMBER_OF_BONUSES",
        ))

    if not 0 < employee.part_time_coefficient <= 1:
        issues.append(ValidationIssue(
            field="part_time_coefficient",
            message=f"El coeficiente de parcialidad ({employee.part_time_coefficient}) debe cumplir 0 < x <= 1.",
            code="INVALID_PART_TIME_COEFFICIENT",
        ))
    elif employee.workday_type == WorkdayType.COMPLETA and employee.part_time_coefficient != 1:
        issues.append(ValidationIssue(
            field="part_time_coefficient",
            message="Para jornada completa el coeficiente de parcialidad debe ser 1.",
            code="PART_TIME_MISMATCH_FULL",
        ))

    return issues


def validate_temporary_disability(
    disability: TemporaryDisabilityInput,
    variables: MonthlyVariablesInput,
) -> list[ValidationIssue]:
    """Errores en los datos de la baja. Una baja inactiva no se valida."""
    if not disability.active:
        return []

    issues = []
    days = variables.calendar_days_in_month
    for field, value in (("start_day", disability.start_day), ("end_day", disability.end_day)):
        if not 1 <= value <= days:
            issues.append(ValidationIssue(
                field=f"temporary_disability.{field}",
                message=f"El día {value} debe estar entre 1 y {days}.",
                code="INVALID_IT_START_DAY" if field == "start_day" else "INVALID_IT_END_DAY",
            ))

    if disability.start_day > disability.end_day:
        issues.append(ValidationIssue(
            field="temporary_disability.start_day",
            message=f"El inicio de la baja ({disability.start_day}) es posterior al fin ({disability.end_day}).",
            code="IT_START_AFTER_END",
        ))
    elif disability.absolute_days_since_start < disability.days_in_period:
        issues.append(ValidationIssue(
            field="temporary_disability.absolute_days_since_start",
            message=(
                f"Los días absolutos de la baja ({disability.absolute_days_since_start}) no pueden ser "
                f"menos que los días de baja del periodo ({disability.days_in_period})."
            ),
            code="IT_PERIOD_EXCEEDS_ABSOLUTE",
        ))

    if disability.absolute_days_since_start < 1:
        issues.append(ValidationIssue(
            field="temporary_disability.absolute_days_since_start",
            message="El día absoluto de la baja debe ser >= 1.",
            code="INVALID_IT_ABSOLUTE_DAY",
        ))

    return issues


def validate_monthly_variables(variables: MonthlyVariablesInput) -> list[ValidationIssue]:
    """Errores estructurales en las variables del mes."""
    issues = []

    if not MIN_CALENDAR_DAYS <= variables.calendar_days_in_month <= MAX_CALENDAR_DAYS:
        issues.append(ValidationIssue(
            field="calendar_days_in_month",
            message=f"Los días naturales del mes deben estar entre {MIN_CALENDAR_DAYS} y {MAX_CALENDAR_DAYS}.",
            code="INVALID_CALENDAR_DAYS",
        ))

    if variables.worked_days < 0:
        issues.append(ValidationIssue(
            field="worked_days",
            message="Los días trabajados no pueden ser negativos.",
            code="NEGATIVE_WORKED_DAYS",
        ))
    elif variables.worked_days > variables.calendar_days_in_month:
        issues.append(ValidationIssue(
            field="worked_days",
            message=(
                f"Los días trabajados ({variables.worked_days}) no pueden superar "
                f"los días naturales del mes ({variables.calendar_days_in_month})."
            ),
            code="EXCESSIVE_WORKED_DAYS",
        ))

    issues.extend(_negatives(variables, _VARIABLE_AMOUNTS))

    if variables.temporary_disability is not None:
        issues.extend(validate_temporary_disability(variables.temporary_disability, variables))

    return issues


def _it_days(variables: MonthlyVariablesInput) -> int:
    disability = variables.active_disability
    return disability.days_in_period if disability else 0


def validate_cross_fields(employee: EmployeePayrollInput, variables: MonthlyVariablesInput) -> list[ValidationIssue]:
    """Coherencia entre días trabajados, vacaciones y baja."""
    it_days = _it_days(variables)
    total = variables.worked_days + variables.vacation_days + it_days
    if total > variables.calendar_days_in_month:
        return [ValidationIssue(
            field="worked_days",
            message=(
                f"Días trabajados ({variables.worked_days}) + vacaciones ({variables.vacation_days}) "
                f"+ IT ({it_days}) = {total} supera los días del mes ({variables.calendar_days_in_month})."
            ),
            code="EXCESSIVE_TOTAL_DAYS",
        )]
    return []


def collect_input_warnings(employee: EmployeePayrollInput, variables: MonthlyVariablesInput) -> list[str]:
    """Avisos sobre datos posibles pero poco habituales."""
    warnings = []

    if employee.base_salary_monthly == 0:
        warnings.append("El salario base mensual es 0. Verifique que es correcto.")

    if employee.workday_type == WorkdayType.PARCIAL and employee.part_time_coefficient == 1:
        warnings.append("Jornada parcial con coeficiente de parcialidad 1: no se prorratea nada.")

    warnings.extend(validate_irpf_percentage(employee.irpf_percentage))

    if variables.worked_days == 0 and variables.vacation_days == 0 and _it_days(variables) == 0:
        warnings.append("0 días trabajados sin vacaciones ni baja que lo expliquen.")

    if employee.prorated_bonuses > 0 and variables.bonus_payment > 0:
        warnings.append(
            "Se ha indicado prorrata de pagas extras y paga extra en este mes. "
            "Normalmente es una cosa u otra. Verifique que es correcto."
        )

    return warnings


def validate_input(
    employee: EmployeePayrollInput,
    variables: MonthlyVariablesInput,
    month: int,
) -> list[str]:
    """
    Valida todas las entradas.

    Raises:
        ValidationError: con todos los errores estructurales encontrados.

    Returns:
        Los avisos no bloqueantes.
    """
    issues = validate_month(month)
    issues.extend(validate_employee(employee))
    issues.extend(validate_monthly_variables(variables))
    if not issues:
        issues.extend(validate_cross_fields(employee, variables))
    if issues:
        raise ValidationError(issues)
    return collect_input_warnings(employee, variables)
