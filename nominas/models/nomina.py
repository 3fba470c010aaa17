"""
Modelos Pydantic de entrada del cálculo de nóminas.

Los importes son Decimal (euros). Los modelos aceptan claves en snake_case y
en camelCase, que es como los envía la aplicación.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from nominas.models.enums import (
    ContingencyType,
    ContractType,
    WorkdayType,
    normalize_contingency_type,
    normalize_contract_type,
    normalize_workday_type,
)


class NominaModel(BaseModel):
    """Base común: alias camelCase y población por nombre."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class EmployeePayrollInput(NominaModel):
    """Datos fijos del empleado (cambian poco)."""

    model_config = ConfigDict(frozen=True)

    base_salary_monthly: Decimal = Field(..., description="Salario base mensual bruto a jornada completa (€)")
    cotization_group: int | None = Field(
        default=None,
        description="Grupo de cotización (1-11). Si falta, se aplica el grupo 7 con aviso",
    )
    irpf_percentage: Decimal = Field(default=Decimal("0"), description="Porcentaje de retención IRPF (ej: 15 para 15%)")
    fixed_complements: Decimal = Field(
        default=Decimal("0"),
        description="Complementos salariales fijos mensuales (antigüedad, plus convenio...). Cotizan",
    )
    prorated_bonuses: Decimal = Field(
        default=Decimal("0"),
        description="Prorrata mensual de las pagas extras (importe anual / 12). Solo entra en la base CC",
    )
    number_of_bonuses: int = Field(default=2, description="Número de pagas extras al año")
    contract_type: ContractType = Field(default=ContractType.INDEFINIDO, description="Tipo de contrato")
    workday_type: WorkdayType = Field(default=WorkdayType.COMPLETA, description="Tipo de jornada")
    part_time_coefficient: Decimal = Field(
        default=Decimal("1"),
        description="Coeficiente de parcialidad (0 < x <= 1). 1 para jornada completa",
    )
    non_salary_complements: Decimal = Field(
        default=Decimal("0"),
        description="Complementos no salariales a tanto alzado (dietas, plus transporte exento). No cotizan ni se prorratean",
    )

    @field_validator("contract_type", mode="before")
    @classmethod
    def _normalizar_contrato(cls, value):
        return normalize_contract_type(value)

    @field_validator("workday_type", mode="before")
    @classmethod
    def _normalizar_jornada(cls, value):
        return normalize_workday_type(value)

    @property
    def effective_part_time_coefficient(self) -> Decimal:
        """Coeficiente aplicado: solo la jornada parcial prorratea."""
        if self.workday_type == WorkdayType.PARCIAL:
            return self.part_time_coefficient
        return Decimal("1")


class TemporaryDisabilityInput(NominaModel):
    """Baja por Incapacidad Temporal dentro del periodo."""

    model_config = ConfigDict(frozen=True)

    active: bool = Field(default=True, description="¿Está de baja este mes?")
    contingency_type: ContingencyType = Field(
        default=ContingencyType.ENFERMEDAD_COMUN,
        description="Tipo de contingencia",
    )
    start_day: int = Field(..., description="Día del mes en que empieza la baja dentro del periodo (1-31)")
    end_day: int = Field(..., description="Último día de baja dentro del periodo. Si continúa, el último día del mes")
    absolute_days_since_start: int = Field(
        ...,
        description=(
            "Días de baja transcurridos desde su inicio hasta end_day, ambos incluidos. "
            "Ej: baja iniciada el día 20 del mes anterior (30 días) que sigue hasta el día 5: 11 + 5 = 16"
        ),
    )

    @field_validator("contingency_type", mode="before")
    @classmethod
    def _normalizar_contingencia(cls, value):
        return normalize_contingency_type(value)

    @property
    def days_in_period(self) -> int:
        """Días naturales de baja dentro del periodo."""
        return self.end_day - self.start_day + 1


class MonthlyVariablesInput(NominaModel):
    """Variables del mes para un empleado."""

    model_config = ConfigDict(frozen=True)

    calendar_days_in_month: int = Field(default=30, description="Días naturales del mes (28-31)")
    worked_days: int = Field(default=30, description="Días efectivamente trabajados")

    overtime_hours: Decimal = Field(default=Decimal("0"), description="Horas extras normales del mes")
    overtime_amount: Decimal | None = Field(
        default=None,
        description="Importe de las horas extras normales. None: se calcula a partir de las horas",
    )
    overtime_force_majeure_hours: Decimal = Field(default=Decimal("0"), description="Horas extras de fuerza mayor")
    overtime_force_majeure_amount: Decimal | None = Field(
        default=None,
        description="Importe de las horas extras de fuerza mayor. None: se calcula a partir de las horas",
    )
    accumulated_overtime_hours_year: Decimal = Field(
        default=Decimal("0"),
        description="Horas extras normales acumuladas en el año antes de este mes",
    )

    vacation_days: int = Field(default=0, description="Días de vacaciones disfrutados en el mes")
    temporary_disability: TemporaryDisabilityInput | None = Field(
        default=None,
        description="Baja por IT en el periodo, si la hay",
    )

    commissions: Decimal = Field(default=Decimal("0"), description="Comisiones del mes")
    incentives: Decimal = Field(default=Decimal("0"), description="Incentivos / primas de producción")
    bonus_payment: Decimal = Field(default=Decimal("0"), description="Paga extra abonada este mes")
    advances: Decimal = Field(default=Decimal("0"), description="Anticipos ya entregados (se restan del líquido)")
    other_salary_accruals: Decimal = Field(default=Decimal("0"), description="Otros devengos salariales")
    other_non_salary_accruals: Decimal = Field(default=Decimal("0"), description="Otros devengos no salariales")
    other_deductions: Decimal = Field(default=Decimal("0"), description="Otras deducciones (préstamos, embargos...)")

    @property
    def active_disability(self) -> TemporaryDisabilityInput | None:
        """La baja solo existe para el cálculo si está activa."""
        if self.temporary_disability is not None and self.temporary_disability.active:
            return self.temporary_disability
        return None


class PayslipRequest(NominaModel):
    """Petición de cálculo de una nómina suelta."""

    employee: EmployeePayrollInput
    variables: MonthlyVariablesInput = Field(default_factory=MonthlyVariablesInput)
    month: int = Field(..., description="Mes de la nómina (1-12)")
    year: int = Field(default=2025, description="Año de la configuración por defecto a aplicar")
    company_override: dict | None = Field(
        default=None,
        description="Ajustes de la empresa: annual_parameters y/o at_ep_rate",
    )
