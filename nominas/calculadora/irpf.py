"""
Retención de IRPF.

El porcentaje lo fija la empresa con las tablas de Hacienda (situación
familiar, retribución anual...). Aquí solo se aplica:

    Retención = Base IRPF x porcentaje / 100

Base IRPF = total de percepciones salariales del mes. Quedan fuera los
complementos no salariales exentos y la prestación IT de la Seguridad Social.
"""

from decimal import Decimal

from nominas.calculadora.utils import ZERO, round2, to_decimal
from nominas.exceptions import ValidationError

# Tipos de referencia 2025. El porcentaje real lo introduce el usuario.
IRPF_MINIMUM_RATES: dict[str, Decimal] = {
    "temporal_corto": Decimal("2.0"),  # contratos temporales < 1 año
    "practicas": Decimal("2.0"),
    "general_minimo": Decimal("0.0"),
    "maximo": Decimal("47.0"),
}


def calculate_irpf(irpf_base, irpf_percentage) -> Decimal:
    """Importe de la retención del mes."""
    percentage = to_decimal(irpf_percentage)
    if percentage < 0 or percentage > 100:
        raise ValidationError.single(
            "irpf_percentage",
            f"Porcentaje de IRPF inválido: {percentage}%. Debe estar entre 0 y 100.",
            "INVALID_IRPF_PERCENTAGE",
        )
    base = to_decimal(irpf_base)
    if base <= 0:
        return ZERO
    return round2(base * percentage / 100)


def validate_irpf_percentage(irpf_percentage) -> list[str]:
    """Avisos sobre porcentajes poco habituales (0% o por encima del máximo)."""
    percentage = to_decimal(irpf_percentage)
    warnings = []
    if percentage == 0:
        warnings.append("El porcentaje de IRPF es 0%. Verifique que el trabajador está exento de retención.")
    if percentage > IRPF_MINIMUM_RATES["maximo"]:
        warnings.append(
            f"El porcentaje de IRPF ({percentage}%) supera el máximo habitual "
            f"({IRPF_MINIMUM_RATES['maximo']}%). Verifique el cálculo."
        )
    return warnings
