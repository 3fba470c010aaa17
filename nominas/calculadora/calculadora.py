"""
Cálculo completo de una nómina.

Orden fijo del cálculo:
    1. Validación de la configuración
    2. Validación de las entradas (errores -> ValidationError, resto -> avisos)
    3. Grupo de cotización por defecto (7) si falta
    4. Horas extras
    5. Incapacidad Temporal
    6. Bases de cotización
    7. Devengos
    8. Deducciones del trabajador (SS + IRPF + anticipos)
    9. Cotizaciones de la empresa
    10. Líquido, coste empresa y comprobaciones de coherencia

El cálculo es una función pura: mismas entradas, mismo resultado.
"""

import logging
from collections.abc import Mapping
from decimal import Decimal

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from nominas.calculadora.bases import calculate_bases
from nominas.calculadora.configuracion import DEFAULT_CONFIG_2025, DEFAULT_COTIZATION_GROUP, validate_config
from nominas.calculadora.cotizaciones import calculate_company_deductions, calculate_worker_deductions
from nominas.calculadora.devengos import calculate_accruals
from nominas.calculadora.horas_extra import calculate_overtime
from nominas.calculadora.incapacidad_temporal import (
    calculate_daily_salary,
    calculate_it,
    calculate_it_salary_deduction,
)
from nominas.calculadora.utils import round2
from nominas.calculadora.validadores import validate_input
from nominas.exceptions import ConfigurationError, ValidationError, ValidationIssue
from nominas.models.config import PayrollConfigInput
from nominas.models.enums import ContractType, WorkdayType
from nominas.models.nomina import EmployeePayrollInput, MonthlyVariablesInput
from nominas.models.resultado import ITDetail, OvertimeCalculationResult, PayslipBases, PayslipResult

logger = logging.getLogger(__name__)


def _coerce(model_cls: type[BaseModel], value, field: str):
    """Acepta el modelo o un diccionario (snake_case o camelCase)."""
    if isinstance(value, model_cls):
        return value
    if not isinstance(value, Mapping):
        raise ValidationError.single(field, f"Se esperaba un objeto, recibido {type(value).__name__}.", "INVALID_INPUT")
    try:
        return model_cls.model_validate(value)
    except PydanticValidationError as exc:
        raise ValidationError([
            ValidationIssue(
                field=".".join(str(part) for part in (field, *error["loc"])),
                message=error["msg"],
                code="INVALID_FIELD",
            )
            for error in exc.errors()
        ]) from exc


def _coerce_config(config) -> PayrollConfigInput:
    if isinstance(config, PayrollConfigInput):
        return config
    if not isinstance(config, Mapping):
        raise ConfigurationError("Falta la configuración de la nómina (PayrollConfigInput).")
    try:
        return PayrollConfigInput.model_validate(config)
    except PydanticValidationError as exc:
        raise ConfigurationError(f"Configuración mal formada: {exc}") from exc


def _calculate_it_detail(
    employee: EmployeePayrollInput,
    variables: MonthlyVariablesInput,
    config: PayrollConfigInput,
    overtime: OvertimeCalculationResult,
) -> ITDetail | None:
    disability = variables.active_disability
    if disability is None:
        return None

    # Base reguladora: base CC del mes como si no hubiera baja
    sin_baja = calculate_bases(employee, variables, config, None, overtime)
    daily_salary = calculate_daily_salary(
        employee.base_salary_monthly,
        variables.calendar_days_in_month,
        employee.effective_part_time_coefficient,
    )
    full_daily_salary = calculate_daily_salary(
        employee.base_salary_monthly,
        variables.calendar_days_in_month,
        employee.effective_part_time_coefficient,
        employee.fixed_complements,
    )
    result = calculate_it(
        disability.contingency_type,
        disability.absolute_days_since_start,
        disability.days_in_period,
        sin_baja.base_reguladora_it,
        full_daily_salary,
    )
    return ITDetail(
        **dict(result),
        contingency_type=disability.contingency_type,
        start_day=disability.start_day,
        end_day=disability.end_day,
        days_in_period=disability.days_in_period,
        absolute_days_since_start=disability.absolute_days_since_start,
        daily_salary=daily_salary,
        salary_deduction=calculate_it_salary_deduction(disability.days_in_period, daily_salary),
    )


def _plausibility_warnings(total_accruals: Decimal, net_salary: Decimal, total_cost: Decimal) -> list[str]:
    warnings = []
    if total_cost < total_accruals:
        warnings.append(
            f"El coste empresa ({total_cost}) es inferior al total devengado ({total_accruals}). Revise los tipos."
        )
    if net_salary > total_accruals:
        warnings.append(
            f"El líquido ({net_salary}) supera el total devengado ({total_accruals}). Revise las deducciones."
        )
    if net_salary < 0:
        warnings.append(f"El líquido a percibir es negativo ({net_salary}). Revise anticipos y otras deducciones.")
    return warnings


def calculate_payslip(
    employee: EmployeePayrollInput | Mapping,
    variables: MonthlyVariablesInput | Mapping,
    config: PayrollConfigInput | Mapping,
    month: int,
) -> PayslipResult:
    """
    Calcula la nómina de un empleado para un mes.

    Args:
        employee: Datos del empleado.
        variables: Variables del mes.
        config: Configuración anual ya resuelta (ver `resolve_config`).
        month: Mes de la nómina (1-12).

    Returns:
        PayslipResult con devengos, bases, deducciones, líquido, coste empresa
        y avisos.

    Raises:
        ValidationError: Entradas estructuralmente inválidas.
        ConfigurationError: Configuración incompleta o mal formada.
    """
    config = _coerce_config(config)
    validate_config(config)

    employee = _coerce(EmployeePayrollInput, employee, "employee")
    variables = _coerce(MonthlyVariablesInput, variables, "variables")

    warnings = validate_input(employee, variables, month)

    if employee.cotization_group is None:
        warnings.append(
            f"Grupo de cotización no informado: se aplica el grupo {DEFAULT_COTIZATION_GROUP} por defecto."
        )
        employee = employee.model_copy(update={"cotization_group": DEFAULT_COTIZATION_GROUP})

    overtime = calculate_overtime(employee, variables, config)
    warnings.extend(overtime.warnings)

    it_detail = _calculate_it_detail(employee, variables, config, overtime)

    bases_result = calculate_bases(employee, variables, config, it_detail, overtime)
    warnings.extend(bases_result.warnings)

    accruals = calculate_accruals(employee, variables, it_detail, overtime)

    worker_deductions = calculate_worker_deductions(
        bases_result,
        config.worker_rates,
        employee.irpf_percentage,
        variables.advances,
        contract_type=employee.contract_type,
        irpf_base=accruals.total_salary_accruals,
        other_deductions=variables.other_deductions,
    )
    company_deductions = calculate_company_deductions(
        bases_result,
        config.company_rates,
        contract_type=employee.contract_type,
    )

    bases = PayslipBases(
        base_cc=bases_result.base_cc,
        base_cp=bases_result.base_cp,
        base_overtime_normal=bases_result.base_overtime_normal,
        base_overtime_force_majeure=bases_result.base_overtime_force_majeure,
        base_reguladora_it=bases_result.base_reguladora_it,
        base_irpf=accruals.total_salary_accruals,
    )

    net_salary = accruals.total_accruals - worker_deductions.total_deductions
    total_cost_company = accruals.total_accruals + company_deductions.total_company_ss
    warnings.extend(_plausibility_warnings(accruals.total_accruals, net_salary, total_cost_company))

    has_overtime = overtime.normal_hours > 0 or overtime.normal_amount > 0 or overtime.force_majeure_amount > 0

    logger.debug(
        "Nómina calculada",
        extra={
            "month": month,
            "year": config.year,
            "total_accruals": accruals.total_accruals,
            "net_salary": net_salary,
            "warnings": len(warnings),
        },
    )

    return PayslipResult(
        month=month,
        year=config.year,
        cotization_group=employee.cotization_group,
        accruals=accruals,
        bases=bases,
        worker_deductions=worker_deductions,
        company_deductions=company_deductions,
        net_salary=net_salary,
        total_cost_company=total_cost_company,
        overtime=overtime if has_overtime else None,
        it_detail=it_detail,
        warnings=tuple(warnings),
    )


def calculate_quick_payslip(
    base_salary,
    cotization_group: int,
    irpf_percentage,
    fixed_complements=Decimal("0"),
    *,
    month: int = 1,
    config: PayrollConfigInput = DEFAULT_CONFIG_2025,
) -> PayslipResult:
    """
    Nómina rápida para estimaciones: jornada completa, contrato indefinido,
    mes de 30 días trabajados y dos pagas extras prorrateadas.
    """
    base_salary = Decimal(str(base_salary))
    employee = EmployeePayrollInput(
        base_salary_monthly=base_salary,
        cotization_group=cotization_group,
        irpf_percentage=Decimal(str(irpf_percentage)),
        fixed_complements=Decimal(str(fixed_complements)),
        prorated_bonuses=round2(base_salary * 2 / 12),
        number_of_bonuses=2,
        contract_type=ContractType.INDEFINIDO,
        workday_type=WorkdayType.COMPLETA,
    )
    variables = MonthlyVariablesInput(calendar_days_in_month=30, worked_days=30)
    return calculate_payslip(employee, variables, config, month)


def _fmt(value: Decimal) -> str:
    """1234.5 -> '1.234,50 €'"""
    texto = f"{value:,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{texto:>12} €"


def format_payslip_summary(result: PayslipResult) -> str:
    """Resumen legible de la nómina, para logs y depuración."""
    a = result.accruals
    b = result.bases
    w = result.worker_deductions
    c = result.company_deductions
    sep = "=" * 50

    lines = [
        sep,
        f"  NÓMINA {result.month:02d}/{result.year}  (grupo {result.cotization_group})",
        sep,
        "",
        "-- DEVENGOS --",
        f"  Salario base:          {_fmt(a.base_salary)}",
        f"  Complementos fijos:    {_fmt(a.fixed_complements)}",
        f"  Comisiones:            {_fmt(a.commissions)}",
        f"  Incentivos:            {_fmt(a.incentives)}",
        f"  HE normales:           {_fmt(a.overtime_normal)}",
        f"  HE fuerza mayor:       {_fmt(a.overtime_force_majeure)}",
        f"  Paga extra:            {_fmt(a.bonus_payment)}",
        f"  IT empresa:            {_fmt(a.it_company_benefit)}",
        f"  IT Seg. Social:        {_fmt(a.it_ss_benefit)}",
        f"  Comp. no salariales:   {_fmt(a.non_salary_complements)}",
        f"  Otros salariales:      {_fmt(a.other_salary_accruals)}",
        f"  Otros no salariales:   {_fmt(a.other_non_salary_accruals)}",
        f"  TOTAL DEVENGOS:        {_fmt(a.total_accruals)}",
        "",
        "-- BASES DE COTIZACIÓN --",
        f"  Base CC:               {_fmt(b.base_cc)}",
        f"  Base CP:               {_fmt(b.base_cp)}",
        f"  Base HE normales:      {_fmt(b.base_overtime_normal)}",
        f"  Base HE fuerza mayor:  {_fmt(b.base_overtime_force_majeure)}",
        f"  Base IRPF:             {_fmt(b.base_irpf)}",
        f"  Base reguladora IT:    {_fmt(b.base_reguladora_it)}",
        "",
        "-- DEDUCCIONES TRABAJADOR --",
        f"  Contingencias comunes: {_fmt(w.contingencias_comunes)}",
        f"  Desempleo:             {_fmt(w.desempleo)}",
        f"  Formación profesional: {_fmt(w.formacion_profesional)}",
        f"  MEI:                   {_fmt(w.mei)}",
        f"  HE normales:           {_fmt(w.horas_extras_normales)}",
        f"  HE fuerza mayor:       {_fmt(w.horas_extras_fuerza_mayor)}",
        f"  Total SS trabajador:   {_fmt(w.total_ss)}",
        f"  IRPF:                  {_fmt(w.irpf)}",
        f"  Anticipos:             {_fmt(w.advances)}",
        f"  Otras deducciones:     {_fmt(w.other_deductions)}",
        f"  TOTAL DEDUCCIONES:     {_fmt(w.total_deductions)}",
        "",
        "-- APORTACIONES EMPRESA --",
        f"  Contingencias comunes: {_fmt(c.contingencias_comunes)}",
        f"  AT/EP:                 {_fmt(c.at_ep)}",
        f"  Desempleo:             {_fmt(c.desempleo)}",
        f"  FOGASA:                {_fmt(c.fogasa)}",
        f"  Formación profesional: {_fmt(c.formacion_profesional)}",
        f"  MEI:                   {_fmt(c.mei)}",
        f"  HE normales:           {_fmt(c.horas_extras_normales)}",
        f"  HE fuerza mayor:       {_fmt(c.horas_extras_fuerza_mayor)}",
        f"  TOTAL EMPRESA:         {_fmt(c.total_company_ss)}",
        "",
        sep,
        f"  LÍQUIDO A PERCIBIR:    {_fmt(result.net_salary)}",
        f"  COSTE TOTAL EMPRESA:   {_fmt(result.total_cost_company)}",
        sep,
    ]

    if result.it_detail is not None:
        it = result.it_detail
        lines += [
            "",
            "-- DETALLE IT --",
            f"  Contingencia:          {it.contingency_type.value}",
            f"  Días sin prestación:   {it.unpaid_days}",
            f"  Días empresa:          {it.company_paid_days}",
            f"  Días Seg. Social:      {it.ss_paid_days}",
            f"  Importe empresa:       {_fmt(it.company_benefit_amount)}",
            f"  Importe Seg. Social:   {_fmt(it.ss_benefit_amount)}",
            f"  Base reguladora/día:   {_fmt(it.daily_regulatory_base)}",
            f"  Porcentaje aplicado:   {it.percentage_applied}%",
        ]

    if result.warnings:
        lines += ["", "-- AVISOS --"]
        lines += [f"  * {warning}" for warning in result.warnings]

    return "\n".join(lines)
