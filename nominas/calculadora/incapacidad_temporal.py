"""
Incapacidad Temporal (IT): reparto de los días de baja entre pagadores.

Los tramos dependen de los días ABSOLUTOS de baja, no del día del mes. Una baja
que empezó el mes anterior entra en este periodo ya avanzada, y los días del
periodo son los días absolutos `absoluto - dias_periodo + 1 ... absoluto`.

Enfermedad común / accidente no laboral:
    días 1-3    sin prestación
    días 4-15   empresa, 60% de la base reguladora diaria
    días 16-20  Seguridad Social, 60%
    día 21+     Seguridad Social, 75%

Accidente de trabajo / enfermedad profesional:
    día 1       empresa, 100% del salario diario
    día 2+      Seguridad Social, 75% de la base reguladora diaria
"""

import logging
from decimal import Decimal
from typing import NamedTuple

from nominas.calculadora.utils import ZERO, round2, to_decimal
from nominas.exceptions import ValidationError
from nominas.models.enums import ContingencyType, normalize_contingency_type
from nominas.models.resultado import ITCalculationResult, ITPayer, ITSegment

logger = logging.getLogger(__name__)

BASE_REGULADORA = "base_reguladora"
SALARIO_DIARIO = "salario_diario"


class ITTier(NamedTuple):
    """Tramo de la prestación. `last_day=None` es un tramo abierto."""
    first_day: int
    last_day: int | None
    payer: ITPayer
    percentage: Decimal
    base: str = BASE_REGULADORA


COMMON_ILLNESS_TIERS: tuple[ITTier, ...] = (
    ITTier(1, 3, ITPayer.NINGUNO, Decimal("0")),
    ITTier(4, 15, ITPayer.EMPRESA, Decimal("60")),
    ITTier(16, 20, ITPayer.SEGURIDAD_SOCIAL, Decimal("60")),
    ITTier(21, None, ITPayer.SEGURIDAD_SOCIAL, Decimal("75")),
)

WORK_ACCIDENT_TIERS: tuple[ITTier, ...] = (
    ITTier(1, 1, ITPayer.EMPRESA, Decimal("100"), SALARIO_DIARIO),
    ITTier(2, None, ITPayer.SEGURIDAD_SOCIAL, Decimal("75")),
)

IT_TIERS: dict[ContingencyType, tuple[ITTier, ...]] = {
    ContingencyType.ENFERMEDAD_COMUN: COMMON_ILLNESS_TIERS,
    ContingencyType.ACCIDENTE_TRABAJO: WORK_ACCIDENT_TIERS,
}


def _overlap(first: int, last: int, tier: ITTier) -> tuple[int, int] | None:
    """Días absolutos [first, last] que caen dentro del tramo."""
    start = max(first, tier.first_day)
    end = last if tier.last_day is None else min(last, tier.last_day)
    if start > end:
        return None
    return start, end


def calculate_it(
    contingency_type: ContingencyType | str,
    absolute_days_since_start: int,
    days_in_period: int,
    daily_base_rate,
    daily_salary=None,
) -> ITCalculationResult:
    """
    Reparte los días de baja del periodo por tramos.

    Args:
        contingency_type: Contingencia de la baja.
        absolute_days_since_start: Día absoluto de la baja al final del periodo.
        days_in_period: Días de baja dentro del periodo.
        daily_base_rate: Base reguladora diaria.
        daily_salary: Salario diario, para los tramos que se pagan sobre
            salario (accidente de trabajo). Si falta se usa la base reguladora.

    Returns:
        ITCalculationResult con días e importes por pagador y el detalle por tramo.
    """
    contingency = normalize_contingency_type(contingency_type)

    if absolute_days_since_start <= 0:
        raise ValidationError.single(
            "temporary_disability.absolute_days_since_start",
            f"El día absoluto de la baja debe ser >= 1 (recibido: {absolute_days_since_start}).",
            "INVALID_IT_ABSOLUTE_DAY",
        )
    if days_in_period <= 0:
        raise ValidationError.single(
            "temporary_disability.days_in_period",
            f"Los días de baja en el periodo deben ser >= 1 (recibido: {days_in_period}).",
            "INVALID_IT_DAYS_IN_PERIOD",
        )
    if days_in_period > absolute_days_since_start:
        raise ValidationError.single(
            "temporary_disability.absolute_days_since_start",
            f"Los días de baja del periodo ({days_in_period}) no pueden superar "
            f"los días absolutos de la baja ({absolute_days_since_start}).",
            "IT_PERIOD_EXCEEDS_ABSOLUTE",
        )

    daily_base = to_decimal(daily_base_rate)
    salary = to_decimal(daily_salary) if daily_salary is not None else daily_base

    first = absolute_days_since_start - days_in_period + 1
    last = absolute_days_since_start

    segments: list[ITSegment] = []
    paid_days = {payer: 0 for payer in ITPayer}
    amounts = {payer: ZERO for payer in ITPayer}

    for tier in IT_TIERS[contingency]:
        rango = _overlap(first, last, tier)
        if rango is None:
            continue
        start, end = rango
        days = end - start + 1
        base = salary if tier.base == SALARIO_DIARIO else daily_base
        daily_amount = round2(base * tier.percentage / 100)
        amount = round2(daily_amount * days)

        paid_days[tier.payer] += days
        amounts[tier.payer] += amount
        segments.append(ITSegment(
            payer=tier.payer,
            from_day=start,
            to_day=end,
            days=days,
            percentage=tier.percentage,
            daily_amount=daily_amount,
            amount=amount,
        ))

    logger.debug(
        "IT calculada",
        extra={
            "contingency": contingency.value,
            "first_day": first,
            "last_day": last,
            "segments": len(segments),
        },
    )

    return ITCalculationResult(
        company_paid_days=paid_days[ITPayer.EMPRESA],
        ss_paid_days=paid_days[ITPayer.SEGURIDAD_SOCIAL],
        unpaid_days=paid_days[ITPayer.NINGUNO],
        company_benefit_amount=amounts[ITPayer.EMPRESA],
        ss_benefit_amount=amounts[ITPayer.SEGURIDAD_SOCIAL],
        percentage_applied=segments[-1].percentage,
        daily_regulatory_base=round2(daily_base),
        segments=tuple(segments),
    )


def calculate_daily_salary(
    base_salary_monthly,
    calendar_days: int,
    part_time_coefficient=Decimal("1"),
    fixed_complements=Decimal("0"),
) -> Decimal:
    """
    Salario diario: (salario base prorrateado por parcialidad + complementos
    fijos) / días naturales del mes.

    Sin complementos es el salario base diario que se descuenta por los días de
    baja; con ellos es el salario íntegro que paga la empresa el día 1 de un
    accidente de trabajo.
    """
    if calendar_days <= 0:
        raise ValidationError.single(
            "calendar_days_in_month",
            "Los días naturales del mes deben ser mayores que 0.",
            "INVALID_CALENDAR_DAYS",
        )
    prorated = to_decimal(base_salary_monthly) * to_decimal(part_time_coefficient)
    return round2((prorated + to_decimal(fixed_complements)) / calendar_days)


def calculate_it_salary_deduction(days_in_period: int, daily_salary) -> Decimal:
    """Salario base que no se devenga por los días de baja."""
    return round2(to_decimal(daily_salary) * days_in_period)
