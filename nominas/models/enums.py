"""
Variantes cerradas (contrato, jornada, contingencia IT) y su normalización.

Los datos llegan de la aplicación con grafías libres ("permanent",
"indefinido", "INDEFINIDO"...). La traducción a la variante canónica se hace
aquí, una sola vez, y el cálculo trabaja siempre con el enum.
"""

import unicodedata
from enum import Enum

from nominas.exceptions import ValidationError


class ContractType(str, Enum):
    """Tipo de contrato laboral."""
    INDEFINIDO = "INDEFINIDO"  # incluye fijos-discontinuos
    TEMPORAL = "TEMPORAL"
    FORMACION = "FORMACION"  # formación en alternancia
    PRACTICAS = "PRACTICAS"


class WorkdayType(str, Enum):
    """Tipo de jornada."""
    COMPLETA = "COMPLETA"
    PARCIAL = "PARCIAL"


class ContingencyType(str, Enum):
    """Contingencia que causa la Incapacidad Temporal."""
    ENFERMEDAD_COMUN = "ENFERMEDAD_COMUN"  # y accidente no laboral
    ACCIDENTE_TRABAJO = "ACCIDENTE_TRABAJO"  # y enfermedad profesional


CONTRACT_TYPE_ALIASES: dict[str, ContractType] = {
    "permanent": ContractType.INDEFINIDO,
    "indefinido": ContractType.INDEFINIDO,
    "fijo": ContractType.INDEFINIDO,
    "fijo_discontinuo": ContractType.INDEFINIDO,
    "temporary": ContractType.TEMPORAL,
    "temporal": ContractType.TEMPORAL,
    "duracion_determinada": ContractType.TEMPORAL,
    "training": ContractType.FORMACION,
    "formacion": ContractType.FORMACION,
    "internship": ContractType.PRACTICAS,
    "practicas": ContractType.PRACTICAS,
}

WORKDAY_TYPE_ALIASES: dict[str, WorkdayType] = {
    "full_time": WorkdayType.COMPLETA,
    "fulltime": WorkdayType.COMPLETA,
    "completa": WorkdayType.COMPLETA,
    "jornada_completa": WorkdayType.COMPLETA,
    "part_time": WorkdayType.PARCIAL,
    "parttime": WorkdayType.PARCIAL,
    "parcial": WorkdayType.PARCIAL,
    "jornada_parcial": WorkdayType.PARCIAL,
}

CONTINGENCY_TYPE_ALIASES: dict[str, ContingencyType] = {
    "common_illness": ContingencyType.ENFERMEDAD_COMUN,
    "enfermedad_comun": ContingencyType.ENFERMEDAD_COMUN,
    "accidente_no_laboral": ContingencyType.ENFERMEDAD_COMUN,
    "work_accident": ContingencyType.ACCIDENTE_TRABAJO,
    "accidente_trabajo": ContingencyType.ACCIDENTE_TRABAJO,
    "accidente_laboral": ContingencyType.ACCIDENTE_TRABAJO,
    "enfermedad_profesional": ContingencyType.ACCIDENTE_TRABAJO,
}


def _clave(value: str) -> str:
    """'Part-Time' -> 'part_time', 'Formación' -> 'formacion'."""
    sin_acentos = unicodedata.normalize("NFKD", value).encode("ascii", "ignore").decode("ascii")
    return sin_acentos.strip().lower().replace("-", "_").replace(" ", "_")


def _normalize(value, enum_cls, aliases: dict, field: str, code: str):
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        clave = _clave(value)
        if clave in aliases:
            return aliases[clave]
        for member in enum_cls:
            if clave == member.value.lower():
                return member
    validos = ", ".join(m.value for m in enum_cls)
    raise ValidationError.single(
        field,
        f"Valor no reconocido: {value!r}. Valores válidos: {validos}.",
        code,
    )


def normalize_contract_type(value: str | ContractType, field: str = "contract_type") -> ContractType:
    """Traduce un tipo de contrato libre a `ContractType`."""
    return _normalize(value, ContractType, CONTRACT_TYPE_ALIASES, field, "INVALID_CONTRACT_TYPE")


def normalize_workday_type(value: str | WorkdayType, field: str = "workday_type") -> WorkdayType:
    """Traduce un tipo de jornada libre a `WorkdayType`."""
    return _normalize(value, WorkdayType, WORKDAY_TYPE_ALIASES, field, "INVALID_WORKDAY_TYPE")


def normalize_contingency_type(
    value: str | ContingencyType,
    field: str = "temporary_disability.contingency_type",
) -> ContingencyType:
    """Traduce un tipo de contingencia libre a `ContingencyType`."""
    return _normalize(value, ContingencyType, CONTINGENCY_TYPE_ALIASES, field, "INVALID_IT_CONTINGENCY_TYPE")
