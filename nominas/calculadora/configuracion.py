"""
Configuración anual del motor: parámetros, topes por grupo y tipos de cotización.

Cada año es un valor inmutable (`DEFAULT_CONFIG_2025`, ...). Los ajustes de una
empresa se aplican con `resolve_config`, que devuelve una copia y nunca toca el
valor por defecto.
"""

import logging
from collections.abc import Mapping
from decimal import Decimal

from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_snake

from nominas.exceptions import ConfigurationError, ValidationIssue
from nominas.models.config import CompanyPayrollOverride, CotizationGroupLimits, PayrollConfigInput

logger = logging.getLogger(__name__)


# Conceptos de cotización comunes a trabajador y empresa
WORKER_RATE_CONCEPTS: tuple[str, ...] = (
    "contingencias_comunes",
    "desempleo_indefinido",
    "desempleo_temporal",
    "formacion_profesional",
    "mei",
    "horas_extras_normales",
    "horas_extras_fuerza_mayor",
)

# La empresa cotiza además por AT/EP y FOGASA
COMPANY_RATE_CONCEPTS: tuple[str, ...] = WORKER_RATE_CONCEPTS + ("at_ep", "fogasa")

COTIZATION_GROUPS = range(1, 12)

# Grupo aplicado cuando el empleado no tiene grupo informado
DEFAULT_COTIZATION_GROUP = 7

_MAX_BASE_2025 = Decimal("4720.50")

_MIN_BASE_2025 = {
    1: Decimal("1903.50"),  # Ingenieros y licenciados
    2: Decimal("1578.30"),  # Ingenieros técnicos, peritos
    3: Decimal("1373.40"),  # Jefes administrativos y de taller
}
_MIN_BASE_2025_RESTO = Decimal("1362.00")


DEFAULT_CONFIG_2025 = PayrollConfigInput(
    year=2025,
    smi_monthly=Decimal("1184.00"),
    max_cotization_base=_MAX_BASE_2025,
    group_limits=tuple(
        CotizationGroupLimits(
            group=group,
            min_base=_MIN_BASE_2025.get(group, _MIN_BASE_2025_RESTO),
            max_base=_MAX_BASE_2025,
        )
        for group in COTIZATION_GROUPS
    ),
    worker_rates={
        "contingencias_comunes": Decimal("4.70"),
        "desempleo_indefinido": Decimal("1.55"),
        "desempleo_temporal": Decimal("1.60"),
        "formacion_profesional": Decimal("0.10"),
        "mei": Decimal("0.12"),
        "horas_extras_normales": Decimal("4.70"),
        "horas_extras_fuerza_mayor": Decimal("2.00"),
    },
    company_rates={
        "contingencias_comunes": Decimal("23.60"),
        "desempleo_indefinido": Decimal("5.50"),
        "desempleo_temporal": Decimal("6.70"),
        "fogasa": Decimal("0.20"),
        "formacion_profesional": Decimal("0.60"),
        "at_ep": Decimal("1.50"),  # tarifa media, depende del CNAE
        "mei": Decimal("0.58"),
        "horas_extras_normales": Decimal("23.60"),
        "horas_extras_fuerza_mayor": Decimal("12.00"),
    },
    max_overtime_hours_year=Decimal("80"),
)

DEFAULT_CONFIGS: dict[int, PayrollConfigInput] = {
    2025: DEFAULT_CONFIG_2025,
}


def get_default_config(year: int) -> PayrollConfigInput:
    """Configuración por defecto de un año."""
    try:
        return DEFAULT_CONFIGS[year]
    except KeyError:
        disponibles = ", ".join(str(y) for y in sorted(DEFAULT_CONFIGS))
        raise ConfigurationError(
            f"No hay configuración por defecto para el año {year}. Años disponibles: {disponibles}."
        ) from None


def _field_names() -> dict[str, str]:
    """Nombre de campo de PayrollConfigInput por clave aceptada (snake o camel)."""
    names = {}
    for name, info in PayrollConfigInput.model_fields.items():
        names[name] = name
        if info.alias:
            names[info.alias] = name
    return names


def _merge_rates(current: dict, override, field: str, allowed: tuple[str, ...]) -> dict:
    if not isinstance(override, Mapping):
        raise ConfigurationError(f"'{field}' debe ser un objeto concepto -> porcentaje.")
    merged = dict(current)
    for key, value in override.items():
        concept = to_snake(key)
        if concept not in allowed:
            logger.debug("Concepto de cotización desconocido ignorado", extra={"field": field, "key": key})
            continue
        merged[concept] = value
    return merged


def _merge_group_limits(current: list[dict], override) -> list[dict]:
    by_group = {limits["group"]: dict(limits) for limits in current}
    for entry in override:
        if not isinstance(entry, Mapping):
            raise ConfigurationError("Cada elemento de 'group_limits' debe ser un objeto.")
        entry = {to_snake(k): v for k, v in entry.items()}
        group = entry.get("group")
        if group is None:
            raise ConfigurationError("Los topes de grupo necesitan el campo 'group'.")
        by_group.setdefault(group, {"group": group}).update(
            {k: v for k, v in entry.items() if k in CotizationGroupLimits.model_fields}
        )
    return [by_group[group] for group in sorted(by_group)]


def resolve_config(
    company_override: CompanyPayrollOverride | Mapping | None = None,
    base: PayrollConfigInput = DEFAULT_CONFIG_2025,
) -> PayrollConfigInput:
    """
    Aplica los ajustes guardados de una empresa sobre una configuración base.

    - Sin ajustes se devuelve `base` tal cual.
    - `annual_parameters` sustituye solo las claves informadas; los tipos y los
      topes por grupo se combinan clave a clave.
    - `at_ep_rate` sustituye el tipo AT/EP de la empresa.
    - Las claves desconocidas se ignoran.
    """
    if company_override is None:
        return base
    if isinstance(company_override, Mapping):
        try:
            company_override = CompanyPayrollOverride.model_validate(company_override)
        except PydanticValidationError as exc:
            raise ConfigurationError(f"Ajustes de empresa mal formados: {exc}") from exc

    annual = company_override.annual_parameters or {}
    if not annual and company_override.at_ep_rate is None:
        return base

    data = base.model_dump()
    names = _field_names()

    for key, value in annual.items():
        field = names.get(key)
        if field is None:
            logger.debug("Parámetro anual desconocido ignorado", extra={"key": key})
            continue
        if field == "worker_rates":
            data[field] = _merge_rates(data[field], value, field, WORKER_RATE_CONCEPTS)
        elif field == "company_rates":
            data[field] = _merge_rates(data[field], value, field, COMPANY_RATE_CONCEPTS)
        elif field == "group_limits":
            data[field] = _merge_group_limits(data[field], value)
        else:
            data[field] = value

    if company_override.at_ep_rate is not None:
        data["company_rates"] = {**data["company_rates"], "at_ep": company_override.at_ep_rate}

    try:
        return PayrollConfigInput.model_validate(data)
    except PydanticValidationError as exc:
        raise ConfigurationError(f"Configuración resultante mal formada: {exc}") from exc


def validate_config(config: PayrollConfigInput) -> None:
    """Comprueba que la configuración esté completa. Lanza ConfigurationError si no."""
    issues: list[ValidationIssue] = []

    for field, rates, required in (
        ("worker_rates", config.worker_rates, WORKER_RATE_CONCEPTS),
        ("company_rates", config.company_rates, COMPANY_RATE_CONCEPTS),
    ):
        for concept in required:
            if concept not in rates:
                issues.append(ValidationIssue(
                    field=f"{field}.{concept}",
                    message="Falta el tipo de cotización obligatorio.",
                    code="MISSING_RATE",
                ))
        for concept, rate in rates.items():
            if rate < 0:
                issues.append(ValidationIssue(
                    field=f"{field}.{concept}",
                    message=f"Tipo negativo: {rate}.",
                    code="NEGATIVE_RATE",
                ))

    groups = {limits.group: limits for limits in config.group_limits}
    for group in COTIZATION_GROUPS:
        limits = groups.get(group)
        if limits is None:
            issues.append(ValidationIssue(
                field=f"group_limits.{group}",
                message="Faltan las bases mínima y máxima del grupo.",
                code="MISSING_GROUP_LIMITS",
            ))
        elif limits.min_base > limits.max_base:
            issues.append(ValidationIssue(
                field=f"group_limits.{group}",
                message=f"Base mínima {limits.min_base} mayor que la máxima {limits.max_base}.",
                code="INVALID_GROUP_LIMITS",
            ))

    if not 2000 <= config.year <= 2100:
        issues.append(ValidationIssue(
            field="year",
            message=f"Año fiscal fuera de rango: {config.year}.",
            code="INVALID_YEAR",
        ))
    if config.smi_monthly <= 0:
        issues.append(ValidationIssue(
            field="smi_monthly",
            message="El SMI mensual debe ser mayor que 0.",
            code="INVALID_SMI",
        ))
    if config.max_cotization_base <= config.smi_monthly:
        issues.append(ValidationIssue(
            field="max_cotization_base",
            message=f"La base máxima ({config.max_cotization_base}) debe superar el SMI ({config.smi_monthly}).",
            code="MAX_BASE_BELOW_SMI",
        ))
    if config.max_overtime_hours_year <= 0:
        issues.append(ValidationIssue(
            field="max_overtime_hours_year",
            message="El límite anual de horas extras debe ser mayor que 0.",
            code="INVALID_MAX_OVERTIME_HOURS",
        ))

    if issues:
        detalle = "; ".join(str(issue) for issue in issues)
        raise ConfigurationError(f"Configuración {config.year} incompleta: {detalle}", issues)


def get_rate(rates: Mapping[str, Decimal], concept: str) -> Decimal:
    """Tipo de un concepto. Un tipo ausente es un error, nunca un cero."""
    try:
        return rates[concept]
    except KeyError:
        raise ConfigurationError(f"Falta el tipo de cotización '{concept}' en la configuración.") from None


def get_group_limits(config: PayrollConfigInput, group: int) -> CotizationGroupLimits:
    for limits in config.group_limits:
        if limits.group == group:
            return limits
    raise ConfigurationError(f"La configuración {config.year} no define topes para el grupo {group}.")
