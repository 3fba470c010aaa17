"""
Devengos de la nómina.

Percepciones salariales (cotizan y tributan): salario base, complementos fijos,
comisiones, incentivos, horas extras, paga extra del mes, prestación IT a cargo
de la empresa y otros devengos salariales.

Percepciones no salariales: complementos no salariales, prestación IT a cargo
de la Seguridad Social (pago delegado) y otros devengos no salariales.

La prorrata de pagas extras se informa pero no suma: cotiza en la base CC y se
cobra cuando se abone la paga.
"""

from nominas.calculadora.bases import calculate_accrued_base_salary
from nominas.calculadora.horas_extra import resolve_overtime_amounts
from nominas.calculadora.utils import ZERO, round2
from nominas.models.nomina import EmployeePayrollInput, MonthlyVariablesInput
from nominas.models.resultado import ITDetail, OvertimeCalculationResult, PayslipAccruals


def calculate_accruals(
    employee: EmployeePayrollInput,
    variables: MonthlyVariablesInput,
    it_result: ITDetail | None = None,
    overtime: OvertimeCalculationResult | None = None,
) -> PayslipAccruals:
    """Devengos del mes, concepto a concepto, con sus totales."""
    if overtime is not None:
        overtime_normal, overtime_force_majeure = overtime.normal_amount, overtime.force_majeure_amount
    else:
        overtime_normal, overtime_force_majeure = resolve_overtime_amounts(employee, variables)

    base_salary = calculate_accrued_base_salary(employee, it_result)
    it_company = it_result.company_benefit_amount if it_result else ZERO
    it_ss = it_result.ss_benefit_amount if it_result else ZERO

    fixed_complements = round2(employee.fixed_complements)
    commissions = round2(variables.commissions)
    incentives = round2(variables.incentives)
    bonus_payment = round2(variables.bonus_payment)
    other_salary = round2(variables.other_salary_accruals)
    non_salary_complements = round2(employee.non_salary_complements)
    other_non_salary = round2(variables.other_non_salary_accruals)

    total_salary_accruals = (
        base_salary
        + fixed_complements
        + commissions
        + incentives
        + overtime_normal
        + overtime_force_majeure
        + bonus_payment
        + it_company
        + other_salary
    )
    total_accruals = total_salary_accruals + non_salary_complements + it_ss + other_non_salary

    return PayslipAccruals(
        base_salary=base_salary,
        fixed_complements=fixed_complements,
        non_salary_complements=non_salary_complements,
        commissions=commissions,
        incentives=incentives,
        overtime_normal=overtime_normal,
        overtime_force_majeure=overtime_force_majeure,
        bonus_payment=bonus_payment,
        prorated_bonuses=round2(employee.prorated_bonuses),
        it_company_benefit=it_company,
        it_ss_benefit=it_ss,
        other_salary_accruals=other_salary,
        other_non_salary_accruals=other_non_salary,
        total_salary_accruals=total_salary_accruals,
        total_accruals=total_accruals,
    )
