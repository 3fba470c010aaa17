"""Utilidades numéricas compartidas por el motor."""

from decimal import ROUND_HALF_UP, Decimal

CENTIMOS = Decimal("0.01")
ZERO = Decimal("0.00")


def to_decimal(value) -> Decimal:
    """Convierte int, str, float o Decimal a Decimal (los float pasan por str)."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def round2(value) -> Decimal:
    """Redondeo a céntimos, mitad hacia arriba."""
    return to_decimal(value).quantize(CENTIMOS, rounding=ROUND_HALF_UP)
