"""
Generación de nóminas por lotes: todos los empleados de una empresa en un mes.

Cada empleado se calcula por separado en un pool de hilos acotado. Un error en
un empleado no afecta a los demás: queda registrado en el informe con su
identificador y su mensaje. Los empleados que no terminan antes del tiempo
límite del lote se dan por fallidos y no se guardan.
"""

import calendar
import logging
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor, wait
from datetime import date
from decimal import Decimal
from typing import Any

from nominas.calculadora import DEFAULT_CONFIGS, calculate_payslip, resolve_config
from nominas.calculadora.cotizaciones import select_unemployment_rate
from nominas.calculadora.utils import round2
from nominas.config import batch_settings
from nominas.exceptions import NominaError
from nominas.models.config import CompanyPayrollOverride, PayrollConfigInput
from nominas.models.enums import ContingencyType, WorkdayType, normalize_contract_type
from nominas.models.generacion import (
    EmployeeGenerationInput,
    GenerationReport,
    GenerationRequest,
    GenerationResult,
    GenerationSummary,
    PayslipLineItem,
    PayslipRecord,
)
from nominas.models.nomina import EmployeePayrollInput, MonthlyVariablesInput, TemporaryDisabilityInput
from nominas.models.resultado import PayslipResult

logger = logging.getLogger(__name__)

PersistCallback = Callable[[PayslipRecord], Any]

TIMEOUT_MESSAGE = "Tiempo de espera agotado: la nómina no se ha calculado ni guardado."


def _base_config(year: int) -> PayrollConfigInput:
    """Configuración por defecto del año o, si no existe, la más reciente."""
    if year in DEFAULT_CONFIGS:
        return DEFAULT_CONFIGS[year]
    latest = max(DEFAULT_CONFIGS)
    logger.warning(
        "Sin configuración por defecto para el año, se usa la más reciente",
        extra={"year": year, "config_year": latest},
    )
    return DEFAULT_CONFIGS[latest]


def build_employee_input(emp: EmployeeGenerationInput) -> EmployeePayrollInput:
    """Datos del empleado para el motor."""
    prorated_bonuses = emp.prorated_bonuses
    if prorated_bonuses is None:
        prorated_bonuses = round2(emp.base_salary_monthly * 2 / 12)

    if emp.full_time:
        workday_type, coefficient = WorkdayType.COMPLETA, Decimal("1")
    else:
        workday_type, coefficient = WorkdayType.PARCIAL, emp.workday_percentage / 100

    return EmployeePayrollInput(
        base_salary_monthly=emp.base_salary_monthly,
        cotization_group=emp.cotization_group,
        irpf_percentage=emp.irpf_percentage,
        fixed_complements=emp.fixed_complements,
        prorated_bonuses=prorated_bonuses,
        number_of_bonuses=emp.number_of_bonuses,
        contract_type=normalize_contract_type(emp.contract_type),
        workday_type=workday_type,
        part_time_coefficient=coefficient,
    )


def build_monthly_variables(emp: EmployeeGenerationInput, calendar_days: int) -> MonthlyVariablesInput:
    """
    Variables del mes para el motor. La baja, si la hay, empieza el día 1 del mes.

    Sin días trabajados informados se trabajan todos los días del mes que no
    son de vacaciones ni de baja.
    """
    vars_ = emp.variables
    worked_days = vars_.worked_days
    if worked_days is None:
        worked_days = max(0, calendar_days - vars_.vacation_days - vars_.it_days)

    disability = None
    if vars_.it_days > 0:
        disability = TemporaryDisabilityInput(
            active=True,
            contingency_type=ContingencyType.ENFERMEDAD_COMUN,
            start_day=1,
            end_day=vars_.it_days,
            absolute_days_since_start=vars_.it_absolute_days or vars_.it_days,
        )

    return MonthlyVariablesInput(
        calendar_days_in_month=calendar_days,
        worked_days=worked_days,
        overtime_hours=vars_.overtime_hours,
        vacation_days=vars_.vacation_days,
        commissions=vars_.commissions,
        incentives=vars_.incentives,
        advances=vars_.advances,
        temporary_disability=disability,
    )


def _perceptions(result: PayslipResult) -> list[PayslipLineItem]:
    a = result.accruals
    lines = [PayslipLineItem(concept="Salario Base", amount=a.base_salary)]
    for concept, amount in (
        ("Complementos Salariales", a.fixed_complements),
        ("Comisiones", a.commissions),
        ("Incentivos", a.incentives),
        ("Horas Extraordinarias", a.overtime_normal),
        ("Horas Extraordinarias Fuerza Mayor", a.overtime_force_majeure),
        ("Paga Extra", a.bonus_payment),
        ("IT Empresa", a.it_company_benefit),
        ("Otros Devengos Salariales", a.other_salary_accruals),
        ("Complementos No Salariales", a.non_salary_complements),
        ("IT Seg. Social", a.it_ss_benefit),
        ("Otros Devengos No Salariales", a.other_non_salary_accruals),
    ):
        if amount > 0:
            lines.append(PayslipLineItem(concept=concept, amount=amount))
    return lines


def _deductions(result: PayslipResult, config: PayrollConfigInput, employee: EmployeePayrollInput) -> list[PayslipLineItem]:
    w = result.worker_deductions
    rates = config.worker_rates
    lines = [
        PayslipLineItem(concept="Contingencias Comunes", rate=rates["contingencias_comunes"], amount=w.contingencias_comunes),
        PayslipLineItem(
            concept="Desempleo",
            rate=select_unemployment_rate(rates, employee.contract_type),
            amount=w.desempleo,
        ),
        PayslipLineItem(concept="Formación Profesional", rate=rates["formacion_profesional"], amount=w.formacion_profesional),
        PayslipLineItem(concept="MEI", rate=rates["mei"], amount=w.mei),
    ]
    if w.horas_extras_normales > 0:
        lines.append(PayslipLineItem(
            concept="Horas Extras", rate=rates["horas_extras_normales"], amount=w.horas_extras_normales
        ))
    if w.horas_extras_fuerza_mayor > 0:
        lines.append(PayslipLineItem(
            concept="Horas Extras Fuerza Mayor",
            rate=rates["horas_extras_fuerza_mayor"],
            amount=w.horas_extras_fuerza_mayor,
        ))
    lines.append(PayslipLineItem(concept="IRPF", rate=w.irpf_percentage, amount=w.irpf))
    if w.advances > 0:
        lines.append(PayslipLineItem(concept="Anticipos", amount=w.advances))
    if w.other_deductions > 0:
        lines.append(PayslipLineItem(concept="Otras Deducciones", amount=w.other_deductions))
    return lines


def _contributions(result: PayslipResult, config: PayrollConfigInput, employee: EmployeePayrollInput) -> list[PayslipLineItem]:
    c = result.company_deductions
    b = result.bases
    rates = config.company_rates
    lines = [
        PayslipLineItem(
            concept="Contingencias Comunes", base=b.base_cc, rate=rates["contingencias_comunes"], amount=c.contingencias_comunes
        ),
        PayslipLineItem(concept="AT/EP", base=b.base_cp, rate=rates["at_ep"], amount=c.at_ep),
        PayslipLineItem(
            concept="Desempleo",
            base=b.base_cc,
            rate=select_unemployment_rate(rates, employee.contract_type),
            amount=c.desempleo,
        ),
        PayslipLineItem(concept="FOGASA", base=b.base_cp, rate=rates["fogasa"], amount=c.fogasa),
        PayslipLineItem(
            concept="Formación Profesional", base=b.base_cc, rate=rates["formacion_profesional"], amount=c.formacion_profesional
        ),
        PayslipLineItem(concept="MEI", base=b.base_cc, rate=rates["mei"], amount=c.mei),
    ]
    if c.horas_extras_normales > 0:
        lines.append(PayslipLineItem(
            concept="Horas Extras",
            base=b.base_overtime_normal,
            rate=rates["horas_extras_normales"],
            amount=c.horas_extras_normales,
        ))
    if c.horas_extras_fuerza_mayor > 0:
        lines.append(PayslipLineItem(
            concept="Horas Extras Fuerza Mayor",
            base=b.base_overtime_force_majeure,
            rate=rates["horas_extras_fuerza_mayor"],
            amount=c.horas_extras_fuerza_mayor,
        ))
    return lines


def build_payslip_record(
    request: GenerationRequest,
    emp: EmployeeGenerationInput,
    employee: EmployeePayrollInput,
    result: PayslipResult,
    config: PayrollConfigInput,
) -> PayslipRecord:
    """Nómina lista para guardar, con el desglose completo para auditoría."""
    last_day = calendar.monthrange(request.year, request.month)[1]
    details = result.model_dump(
        mode="json",
        include={"accruals", "bases", "worker_deductions", "company_deductions", "it_detail", "warnings"},
    )
    return PayslipRecord(
        company_id=request.company_id,
        employee_id=emp.employee_id,
        period_start=date(request.year, request.month, 1),
        period_end=date(request.year, request.month, last_day),
        employee={
            "name": emp.employee_name,
            "dni": emp.dni,
            "social_security_number": emp.ss_number,
            "iban": emp.iban,
        },
        company=dict(request.company_data or {}),
        perceptions=_perceptions(result),
        deductions=_deductions(result, config, employee),
        contributions=_contributions(result, config, employee),
        gross_salary=result.accruals.total_accruals,
        net_pay=result.net_salary,
        base_ss=result.bases.base_cc,
        cost_empresa=result.total_cost_company,
        total_contributions=result.company_deductions.total_company_ss,
        calculation_details=details,
        document_name=f"Nomina_{'_'.join(emp.employee_name.split())}_{request.month:02d}_{request.year}",
    )


def _calculate_employee(
    request: GenerationRequest,
    emp: EmployeeGenerationInput,
    config: PayrollConfigInput,
) -> tuple[PayslipResult, PayslipRecord]:
    calendar_days = calendar.monthrange(request.year, request.month)[1]
    employee = build_employee_input(emp)
    variables = build_monthly_variables(emp, calendar_days)
    result = calculate_payslip(employee, variables, config, request.month)
    return result, build_payslip_record(request, emp, employee, result, config)


def _failure(emp: EmployeeGenerationInput, message: str) -> GenerationResult:
    return GenerationResult(
        employee_id=emp.employee_id,
        employee_name=emp.employee_name,
        success=False,
        error=message,
    )


def generate_payslips(
    request: GenerationRequest,
    company_override: CompanyPayrollOverride | dict | None = None,
    *,
    persist: PersistCallback | None = None,
    max_workers: int | None = None,
    timeout: float | None = None,
) -> GenerationReport:
    """
    Calcula (y opcionalmente guarda) las nóminas de un lote de empleados.

    Args:
        request: Empresa, mes, año y empleados.
        company_override: Ajustes guardados de la empresa. Si falta, se usan
            los de la petición (`payroll_config`).
        persist: Función que guarda cada PayslipRecord. Si falla, solo falla ese empleado.
        max_workers: Tamaño del pool. Por defecto, BATCH_MAX_WORKERS.
        timeout: Segundos para todo el lote. Por defecto, BATCH_TIMEOUT_SECONDS.

    Returns:
        GenerationReport con un resultado por empleado, en el orden de la petición.

    Raises:
        ConfigurationError: Si los ajustes de la empresa no producen una configuración válida.
    """
    if company_override is None:
        company_override = request.payroll_config
    config = resolve_config(company_override, base=_base_config(request.year))
    max_workers = max_workers or batch_settings.BATCH_MAX_WORKERS
    timeout = timeout if timeout is not None else batch_settings.BATCH_TIMEOUT_SECONDS

    logger.info(
        "Generación de nóminas iniciada",
        extra={
            "company_id": request.company_id,
            "month": request.month,
            "year": request.year,
            "employees": len(request.employees),
            "max_workers": max_workers,
        },
    )

    executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="nominas")
    try:
        futures: list[Future] = [
            executor.submit(_calculate_employee, request, emp, config) for emp in request.employees
        ]
        done, _ = wait(futures, timeout=timeout)
    finally:
        executor.shutdown(wait=False, cancel_futures=True)

    results: list[GenerationResult] = []
    for emp, future in zip(request.employees, futures):
        if future not in done:
            logger.warning("Nómina fuera de tiempo", extra={"employee_id": emp.employee_id})
            results.append(_failure(emp, TIMEOUT_MESSAGE))
            continue

        error = future.exception()
        if error is not None:
            if isinstance(error, NominaError):
                logger.warning(
                    "Nómina no calculada",
                    extra={"employee_id": emp.employee_id, "code": error.code, "error": error.message},
                )
            else:
                logger.error(
                    "Error inesperado calculando la nómina",
                    extra={"employee_id": emp.employee_id},
                    exc_info=error,
                )
            results.append(_failure(emp, str(error) or type(error).__name__))
            continue

        result, record = future.result()
        if persist is not None:
            try:
                persist(record)
            except Exception as exc:
                logger.error(
                    "Error guardando la nómina",
                    extra={"employee_id": emp.employee_id},
                    exc_info=exc,
                )
                results.append(_failure(emp, f"Error guardando nómina: {exc}"))
                continue

        results.append(GenerationResult(
            employee_id=emp.employee_id,
            employee_name=emp.employee_name,
            success=True,
            record=record,
            result=result,
        ))

    success_count = sum(1 for r in results if r.success)
    error_count = len(results) - success_count
    message = f"{success_count} nómina(s) generada(s) correctamente"
    if error_count:
        message += f", {error_count} error(es)"

    logger.info(
        "Generación de nóminas terminada",
        extra={"company_id": request.company_id, "success": success_count, "errors": error_count},
    )

    return GenerationReport(
        success=error_count == 0,
        message=message,
        results=results,
        summary=GenerationSummary(total=len(results), success=success_count, errors=error_count),
    )
