"""Modelos de la generación de nóminas por lotes (una empresa, un mes)."""

from datetime import date
from decimal import Decimal
from typing import Any

from pydantic import Field

from nominas.models.config import CompanyPayrollOverride
from nominas.models.nomina import NominaModel
from nominas.models.resultado import PayslipResult


class GenerationVariables(NominaModel):
    """Variables del mes de un empleado, tal y como llegan de la aplicación."""

    worked_days: int | None = Field(
        default=None,
        description="Días trabajados. Si falta: días del mes - vacaciones - días de baja",
    )
    overtime_hours: Decimal = Field(default=Decimal("0"), description="Horas extras normales")
    vacation_days: int = Field(default=0, description="Días de vacaciones")
    it_days: int = Field(default=0, description="Días de baja por enfermedad común en el mes")
    it_absolute_days: int | None = Field(
        default=None,
        description="Días absolutos de baja al final del mes. Si falta, la baja empieza el día 1 del mes",
    )
    commissions: Decimal = Field(default=Decimal("0"), description="Comisiones")
    advances: Decimal = Field(default=Decimal("0"), description="Anticipos")
    incentives: Decimal = Field(default=Decimal("0"), description="Incentivos")


class EmployeeGenerationInput(NominaModel):
    """Empleado a incluir en la generación."""

    employee_id: str = Field(..., description="Identificador del empleado")
    employee_name: str = Field(..., description="Nombre completo")
    dni: str | None = Field(default=None, description="DNI / NIE")
    ss_number: str | None = Field(default=None, description="Número de afiliación a la Seguridad Social")
    iban: str | None = Field(default=None, description="IBAN para la transferencia")
    base_salary_monthly: Decimal = Field(..., description="Salario base mensual")
    cotization_group: int | None = Field(default=None, description="Grupo de cotización (1-11)")
    irpf_percentage: Decimal = Field(default=Decimal("0"), description="Retención IRPF (%)")
    fixed_complements: Decimal = Field(default=Decimal("0"), description="Complementos fijos")
    prorated_bonuses: Decimal | None = Field(
        default=None,
        description="Prorrata mensual de pagas extras. Si falta: salario base x 2 / 12",
    )
    number_of_bonuses: int = Field(default=2, description="Número de pagas extras")
    contract_type: str = Field(default="INDEFINIDO", description="Tipo de contrato (texto libre)")
    full_time: bool = Field(default=True, description="Jornada completa")
    workday_percentage: Decimal = Field(default=Decimal("100"), description="Porcentaje de jornada si es parcial")
    variables: GenerationVariables = Field(default_factory=GenerationVariables)


class GenerationRequest(NominaModel):
    """Petición de generación de nóminas de una empresa para un mes."""

    company_id: str = Field(..., description="Identificador de la empresa")
    company_data: dict[str, Any] | None = Field(default=None, description="Datos de la empresa a copiar en la nómina")
    month: int = Field(..., ge=1, le=12, description="Mes (1-12)")
    year: int = Field(..., description="Año")
    employees: list[EmployeeGenerationInput] = Field(..., min_length=1, description="Empleados a procesar")
    payroll_config: CompanyPayrollOverride | None = Field(
        default=None,
        description="Ajustes guardados de la empresa (annual_parameters, at_ep_rate)",
    )


class PayslipLineItem(NominaModel):
    """Línea de percepción, deducción o aportación empresarial."""

    concept: str = Field(..., description="Concepto")
    amount: Decimal = Field(..., description="Importe")
    rate: Decimal | None = Field(default=None, description="Tipo aplicado (%)")
    base: Decimal | None = Field(default=None, description="Base sobre la que se aplica el tipo")


class PayslipRecord(NominaModel):
    """Nómina lista para guardar."""

    company_id: str
    employee_id: str
    period_start: date
    period_end: date
    employee: dict[str, Any] = Field(default_factory=dict, description="Nombre, DNI y número de la Seguridad Social")
    company: dict[str, Any] = Field(default_factory=dict)
    perceptions: list[PayslipLineItem] = Field(default_factory=list)
    deductions: list[PayslipLineItem] = Field(default_factory=list)
    contributions: list[PayslipLineItem] = Field(default_factory=list)
    gross_salary: Decimal = Field(..., description="Total devengado")
    net_pay: Decimal = Field(..., description="Líquido a percibir")
    base_ss: Decimal = Field(..., description="Base de cotización por contingencias comunes")
    cost_empresa: Decimal = Field(..., description="Coste total para la empresa")
    total_contributions: Decimal = Field(..., description="Total de aportaciones empresariales")
    status: str = Field(default="generated")
    calculation_details: dict[str, Any] = Field(default_factory=dict, description="Desglose completo para auditoría")
    document_name: str = Field(..., description="Nombre del documento")


class GenerationResult(NominaModel):
    """Resultado de un empleado dentro del lote."""

    employee_id: str
    employee_name: str
    success: bool
    record: PayslipRecord | None = None
    result: PayslipResult | None = None
    error: str | None = None


class GenerationSummary(NominaModel):
    total: int = 0
    success: int = 0
    errors: int = 0


class GenerationReport(NominaModel):
    """Informe del lote: cada empleado es independiente."""

    success: bool = Field(..., description="True si no ha fallado ningún empleado")
    message: str
    results: list[GenerationResult] = Field(default_factory=list)
    summary: GenerationSummary = Field(default_factory=GenerationSummary)
