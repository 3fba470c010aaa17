"""Modelos de salida del cálculo de nóminas (inmutables)."""

from decimal import Decimal
from enum import Enum

from pydantic import ConfigDict, Field

from nominas.models.enums import ContingencyType
from nominas.models.nomina import NominaModel

ZERO = Decimal("0.00")


class ResultModel(NominaModel):
    """Base de los resultados: valores congelados."""

    model_config = ConfigDict(frozen=True)


class ITPayer(str, Enum):
    """Quién abona un tramo de la baja."""
    NINGUNO = "NINGUNO"  # días de carencia
    EMPRESA = "EMPRESA"
    SEGURIDAD_SOCIAL = "SEGURIDAD_SOCIAL"


class ITSegment(ResultModel):
    """Días del periodo que caen en un mismo tramo de la prestación."""

    payer: ITPayer = Field(..., description="Pagador del tramo")
    from_day: int = Field(..., description="Primer día absoluto de la baja cubierto por el tramo")
    to_day: int = Field(..., description="Último día absoluto de la baja cubierto por el tramo")
    days: int = Field(..., description="Días del tramo dentro del periodo")
    percentage: Decimal = Field(..., description="Porcentaje aplicado sobre la base diaria")
    daily_amount: Decimal = Field(..., description="Importe diario redondeado")
    amount: Decimal = Field(..., description="Importe del tramo (diario x días)")


class ITCalculationResult(ResultModel):
    """Reparto de los días de baja del periodo entre carencia, empresa y Seguridad Social."""

    company_paid_days: int = Field(default=0, description="Días a cargo de la empresa")
    ss_paid_days: int = Field(default=0, description="Días a cargo de la Seguridad Social")
    unpaid_days: int = Field(default=0, description="Días sin prestación")
    company_benefit_amount: Decimal = Field(default=ZERO, description="Prestación abonada por la empresa")
    ss_benefit_amount: Decimal = Field(default=ZERO, description="Prestación a cargo de la Seguridad Social")
    percentage_applied: Decimal = Field(default=ZERO, description="Porcentaje del último tramo del periodo")
    daily_regulatory_base: Decimal = Field(default=ZERO, description="Base reguladora diaria utilizada")
    segments: tuple[ITSegment, ...] = Field(default=(), description="Detalle por tramo")


class ITDetail(ITCalculationResult):
    """Detalle de la baja tal y como se incorpora a la nómina."""

    contingency_type: ContingencyType = Field(..., description="Contingencia de la baja")
    start_day: int = Field(..., description="Día de inicio en el periodo")
    end_day: int = Field(..., description="Día final en el periodo")
    days_in_period: int = Field(..., description="Días de baja en el periodo")
    absolute_days_since_start: int = Field(..., description="Días absolutos de baja al final del periodo")
    daily_salary: Decimal = Field(..., description="Salario diario (salario base prorrateado / días del mes)")
    salary_deduction: Decimal = Field(..., description="Salario base que deja de devengarse por los días de baja")


class OvertimeCalculationResult(ResultModel):
    """Horas extras del mes ya valoradas."""

    normal_hours: Decimal = Field(default=ZERO, description="Horas extras normales")
    normal_amount: Decimal = Field(default=ZERO, description="Importe de las horas extras normales")
    force_majeure_hours: Decimal = Field(default=ZERO, description="Horas extras de fuerza mayor")
    force_majeure_amount: Decimal = Field(default=ZERO, description="Importe de las horas extras de fuerza mayor")
    accumulated_hours_year: Decimal = Field(default=ZERO, description="Horas normales acumuladas incluyendo este mes")
    remaining_hours_year: Decimal = Field(default=ZERO, description="Horas normales que quedan hasta el límite anual")
    warnings: tuple[str, ...] = Field(default=(), description="Avisos sobre el límite anual")


class BasesCalculationResult(ResultModel):
    """Bases de cotización del mes."""

    base_cc: Decimal = Field(..., description="Base de contingencias comunes")
    base_cp: Decimal = Field(..., description="Base de contingencias profesionales")
    base_overtime_normal: Decimal = Field(default=ZERO, description="Base de horas extras normales")
    base_overtime_force_majeure: Decimal = Field(default=ZERO, description="Base de horas extras de fuerza mayor")
    base_reguladora_it: Decimal = Field(default=ZERO, description="Base reguladora diaria de IT (base CC / días)")
    warnings: tuple[str, ...] = Field(default=(), description="Avisos del cálculo de bases")


class PayslipBases(ResultModel):
    """Bases tal y como figuran en la nómina."""

    base_cc: Decimal = Field(..., description="Base de contingencias comunes")
    base_cp: Decimal = Field(..., description="Base de contingencias profesionales")
    base_overtime_normal: Decimal = Field(default=ZERO, description="Base de horas extras normales")
    base_overtime_force_majeure: Decimal = Field(default=ZERO, description="Base de horas extras de fuerza mayor")
    base_reguladora_it: Decimal = Field(default=ZERO, description="Base reguladora diaria de IT")
    base_irpf: Decimal = Field(default=ZERO, description="Base sujeta a retención de IRPF")


class PayslipAccruals(ResultModel):
    """Devengos de la nómina, concepto a concepto."""

    base_salary: Decimal = Field(default=ZERO, description="Salario base devengado")
    fixed_complements: Decimal = Field(default=ZERO, description="Complementos salariales fijos")
    non_salary_complements: Decimal = Field(default=ZERO, description="Complementos no salariales")
    commissions: Decimal = Field(default=ZERO, description="Comisiones")
    incentives: Decimal = Field(default=ZERO, description="Incentivos")
    overtime_normal: Decimal = Field(default=ZERO, description="Horas extras normales")
    overtime_force_majeure: Decimal = Field(default=ZERO, description="Horas extras de fuerza mayor")
    bonus_payment: Decimal = Field(default=ZERO, description="Paga extra abonada en el mes")
    prorated_bonuses: Decimal = Field(
        default=ZERO,
        description="Prorrata de pagas extras (informativa: cotiza en la base CC pero no se abona este mes)",
    )
    it_company_benefit: Decimal = Field(default=ZERO, description="Prestación IT a cargo de la empresa")
    it_ss_benefit: Decimal = Field(default=ZERO, description="Prestación IT a cargo de la Seguridad Social")
    other_salary_accruals: Decimal = Field(default=ZERO, description="Otros devengos salariales")
    other_non_salary_accruals: Decimal = Field(default=ZERO, description="Otros devengos no salariales")
    total_salary_accruals: Decimal = Field(default=ZERO, description="Total de percepciones salariales")
    total_accruals: Decimal = Field(default=ZERO, description="Total devengado (bruto)")


class WorkerDeductions(ResultModel):
    """Deducciones a cargo del trabajador."""

    contingencias_comunes: Decimal = Field(default=ZERO, description="Contingencias comunes sobre base CC")
    desempleo: Decimal = Field(default=ZERO, description="Desempleo sobre base CC")
    formacion_profesional: Decimal = Field(default=ZERO, description="Formación profesional sobre base CC")
    mei: Decimal = Field(default=ZERO, description="Mecanismo de Equidad Intergeneracional sobre base CC")
    horas_extras_normales: Decimal = Field(default=ZERO, description="Cotización de horas extras normales")
    horas_extras_fuerza_mayor: Decimal = Field(default=ZERO, description="Cotización de horas extras de fuerza mayor")
    total_ss: Decimal = Field(default=ZERO, description="Total cotizaciones del trabajador")
    irpf: Decimal = Field(default=ZERO, description="Retención de IRPF")
    irpf_percentage: Decimal = Field(default=ZERO, description="Porcentaje de IRPF aplicado")
    other_deductions: Decimal = Field(default=ZERO, description="Otras deducciones")
    advances: Decimal = Field(default=ZERO, description="Anticipos")
    total_deductions: Decimal = Field(default=ZERO, description="Total a deducir")


class CompanyDeductions(ResultModel):
    """Cotizaciones a cargo de la empresa."""

    contingencias_comunes: Decimal = Field(default=ZERO, description="Contingencias comunes sobre base CC")
    desempleo: Decimal = Field(default=ZERO, description="Desempleo sobre base CC")
    formacion_profesional: Decimal = Field(default=ZERO, description="Formación profesional sobre base CC")
    mei: Decimal = Field(default=ZERO, description="MEI sobre base CC")
    at_ep: Decimal = Field(default=ZERO, description="Accidentes de trabajo y enfermedades profesionales sobre base CP")
    fogasa: Decimal = Field(default=ZERO, description="FOGASA sobre base CP")
    horas_extras_normales: Decimal = Field(default=ZERO, description="Cotización de horas extras normales")
    horas_extras_fuerza_mayor: Decimal = Field(default=ZERO, description="Cotización de horas extras de fuerza mayor")
    total_company_ss: Decimal = Field(default=ZERO, description="Total cotizaciones de la empresa")


class PayslipResult(ResultModel):
    """Nómina calculada. Reproducible a partir de las entradas."""

    month: int = Field(..., description="Mes (1-12)")
    year: int = Field(..., description="Año de la configuración aplicada")
    cotization_group: int = Field(..., description="Grupo de cotización aplicado")
    accruals: PayslipAccruals
    bases: PayslipBases
    worker_deductions: WorkerDeductions
    company_deductions: CompanyDeductions
    net_salary: Decimal = Field(..., description="Líquido a percibir")
    total_cost_company: Decimal = Field(..., description="Coste total para la empresa")
    overtime: OvertimeCalculationResult | None = Field(default=None, description="Detalle de horas extras, si las hay")
    it_detail: ITDetail | None = Field(default=None, description="Detalle de la baja, si la hay")
    warnings: tuple[str, ...] = Field(default=(), description="Avisos no bloqueantes")
