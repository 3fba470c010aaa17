"""
Jerarquía de excepciones del motor de nóminas.

    NominaError (base)
    |
    +-- ValidationError      datos de entrada estructuralmente inválidos
    +-- ConfigurationError   configuración incompleta o mal formada

Cada excepción lleva un `code` legible por máquina. Los avisos no bloqueantes
NO son excepciones: se acumulan en `PayslipResult.warnings`.
"""

from pydantic import BaseModel, Field


class ValidationIssue(BaseModel):
    """Un error de validación sobre un campo concreto."""

    field: str = Field(..., description="Campo afectado (ruta con puntos)")
    message: str = Field(..., description="Explicación del error")
    code: str = Field(..., description="Código del error (ej: INVALID_COTIZATION_GROUP)")

    def __str__(self) -> str:
        return f"[{self.code}] {self.field}: {self.message}"


class NominaError(Exception):
    """Base de todas las excepciones del motor."""

    code: str = "NOMINA_ERROR"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(NominaError):
    """Datos de entrada estructuralmente inválidos. Nunca se corrigen en silencio."""

    code: str = "VALIDATION_ERROR"

    def __init__(self, issues: list[ValidationIssue]):
        self.issues = list(issues)
        detalle = "\n".join(str(issue) for issue in self.issues)
        super().__init__(f"Errores de validación en los datos de la nómina:\n{detalle}")

    @classmethod
    def single(cls, field: str, message: str, code: str) -> "ValidationError":
        return cls([ValidationIssue(field=field, message=message, code=code)])


class ConfigurationError(NominaError):
    """Falta un tipo de cotización obligatorio o la configuración está mal formada."""

    code: str = "CONFIGURATION_ERROR"

    def __init__(self, message: str, issues: list[ValidationIssue] | None = None):
        self.issues = list(issues or [])
        super().__init__(message)
