"""Modelos de la configuración anual: topes de bases y tipos de cotización."""

from decimal import Decimal
from types import MappingProxyType

from pydantic import ConfigDict, Field, field_serializer, field_validator

from nominas.models.nomina import NominaModel


class CotizationGroupLimits(NominaModel):
    """Bases mínima y máxima mensuales de un grupo de cotización."""

    model_config = ConfigDict(frozen=True)

    group: int = Field(..., description="Grupo de cotización (1-11)")
    min_base: Decimal = Field(..., description="Base mínima mensual (€)")
    max_base: Decimal = Field(..., description="Base máxima mensual (€)")


class PayrollConfigInput(NominaModel):
    """
    Parámetros anuales y tipos de cotización.

    Es un valor inmutable: cada año es un objeto nuevo y los ajustes de una
    empresa producen una copia (ver `resolve_config`).
    """

    model_config = ConfigDict(frozen=True)

    year: int = Field(..., description="Año fiscal")
    smi_monthly: Decimal = Field(..., description="SMI mensual (14 pagas)")
    max_cotization_base: Decimal = Field(..., description="Base máxima de cotización mensual")
    group_limits: tuple[CotizationGroupLimits, ...] = Field(..., description="Topes por grupo 1-11")
    worker_rates: dict[str, Decimal] = Field(..., description="Tipos del trabajador (%) por concepto")
    company_rates: dict[str, Decimal] = Field(..., description="Tipos de la empresa (%) por concepto")
    max_overtime_hours_year: Decimal = Field(default=Decimal("80"), description="Límite anual de horas extras normales")

    @field_validator("worker_rates", "company_rates", mode="after")
    @classmethod
    def _solo_lectura(cls, value: dict) -> MappingProxyType:
        """Los tipos no se pueden modificar una vez creada la configuración."""
        return MappingProxyType(dict(value))

    @field_serializer("worker_rates", "company_rates")
    def _serializar_tipos(self, value) -> dict:
        return dict(value)


class CompanyPayrollOverride(NominaModel):
    """
    Ajustes guardados de una empresa sobre la configuración por defecto.

    Ambos campos son opcionales: solo se sustituyen las claves informadas.
    """

    annual_parameters: dict | None = Field(
        default=None,
        description="Campos de PayrollConfigInput a sustituir (snake_case o camelCase)",
    )
    at_ep_rate: Decimal | None = Field(default=None, description="Tipo AT/EP de la empresa según su CNAE (%)")
