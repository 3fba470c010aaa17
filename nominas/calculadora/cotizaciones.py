"""
Cotizaciones a la Seguridad Social (trabajador y empresa).

Trabajador:
    contingencias comunes, desempleo, formación profesional, MEI  -> base CC
    horas extras normales / de fuerza mayor -> su base propia
Empresa:
    contingencias comunes, desempleo, formación profesional, MEI  -> base CC
    AT/EP, FOGASA -> base CP
    horas extras normales / de fuerza mayor -> su base propia

Cada línea se redondea por separado; los totales suman líneas ya redondeadas.
"""

from collections.abc import Mapping
from decimal import Decimal

from nominas.calculadora.configuracion import get_rate
from nominas.calculadora.irpf import calculate_irpf
from nominas.calculadora.utils import ZERO, round2, to_decimal
from nominas.models.enums import ContractType, normalize_contract_type
from nominas.models.resultado import BasesCalculationResult, CompanyDeductions, PayslipBases, WorkerDeductions


def select_unemployment_rate(rates: Mapping[str, Decimal], contract_type: ContractType | str) -> Decimal:
    """Tipo de desempleo según contrato: los temporales cotizan más."""
    if normalize_contract_type(contract_type) == ContractType.TEMPORAL:
        return get_rate(rates, "desempleo_temporal")
    return get_rate(rates, "desempleo_indefinido")


def _line(base: Decimal, rate: Decimal) -> Decimal:
    return round2(base * rate / 100)


def calculate_worker_deductions(
    bases: BasesCalculationResult | PayslipBases,
    worker_rates: Mapping[str, Decimal],
    irpf_percentage,
    advances=ZERO,
    *,
    contract_type: ContractType | str = ContractType.INDEFINIDO,
    irpf_base=None,
    other_deductions=ZERO,
) -> WorkerDeductions:
    """
    Deducciones del trabajador.

    `irpf_base` es el total de percepciones salariales; si no se indica se
    retiene sobre la base CC. Los anticipos se restan tal cual.
    """
    contingencias_comunes = _line(bases.base_cc, get_rate(worker_rates, "contingencias_comunes"))
    desempleo = _line(bases.base_cc, select_unemployment_rate(worker_rates, contract_type))
    formacion_profesional = _line(bases.base_cc, get_rate(worker_rates, "formacion_profesional"))
    mei = _line(bases.base_cc, get_rate(worker_rates, "mei"))
    horas_extras_normales = _line(bases.base_overtime_normal, get_rate(worker_rates, "horas_extras_normales"))
    horas_extras_fuerza_mayor = _line(
        bases.base_overtime_force_majeure, get_rate(worker_rates, "horas_extras_fuerza_mayor")
    )

    total_ss = (
        contingencias_comunes
        + desempleo
        + formacion_profesional
        + mei
        + horas_extras_normales
        + horas_extras_fuerza_mayor
    )

    irpf_percentage = to_decimal(irpf_percentage)
    irpf = calculate_irpf(bases.base_cc if irpf_base is None else irpf_base, irpf_percentage)
    advances = round2(advances)
    other_deductions = round2(other_deductions)

    return WorkerDeductions(
        contingencias_comunes=contingencias_comunes,
        desempleo=desempleo,
        formacion_profesional=formacion_profesional,
        mei=mei,
        horas_extras_normales=horas_extras_normales,
        horas_extras_fuerza_mayor=horas_extras_fuerza_mayor,
        total_ss=total_ss,
        irpf=irpf,
        irpf_percentage=irpf_percentage,
        other_deductions=other_deductions,
        advances=advances,
        total_deductions=total_ss + irpf + other_deductions + advances,
    )


def calculate_company_deductions(
    bases: BasesCalculationResult | PayslipBases,
    company_rates: Mapping[str, Decimal],
    *,
    contract_type: ContractType | str = ContractType.INDEFINIDO,
) -> CompanyDeductions:
    """Cotizaciones de la empresa."""
    contingencias_comunes = _line(bases.base_cc, get_rate(company_rates, "contingencias_comunes"))
    desempleo = _line(bases.base_cc, select_unemployment_rate(company_rates, contract_type))
    formacion_profesional = _line(bases.base_cc, get_rate(company_rates, "formacion_profesional"))
    mei = _line(bases.base_cc, get_rate(company_rates, "mei"))
    at_ep = _line(bases.base_cp, get_rate(company_rates, "at_ep"))
    fogasa = _line(bases.base_cp, get_rate(company_rates, "fogasa"))
    horas_extras_normales = _line(bases.base_overtime_normal, get_rate(company_rates, "horas_extras_normales"))
    horas_extras_fuerza_mayor = _line(
        bases.base_overtime_force_majeure, get_rate(company_rates, "horas_extras_fuerza_mayor")
    )

    return CompanyDeductions(
        contingencias_comunes=contingencias_comunes,
        desempleo=desempleo,
        formacion_profesional=formacion_profesional,
        mei=mei,
        at_ep=at_ep,
        fogasa=fogasa,
        horas_extras_normales=horas_extras_normales,
        horas_extras_fuerza_mayor=horas_extras_fuerza_mayor,
        total_company_ss=(
            contingencias_comunes
            + desempleo
            + formacion_profesional
            + mei
            + at_ep
            + fogasa
            + horas_extras_normales
            + horas_extras_fuerza_mayor
        ),
    )
