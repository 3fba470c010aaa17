"""Motor de cálculo de nóminas (sin E/S)."""

from .calculadora import (
    calculate_payslip,
    calculate_quick_payslip,
    format_payslip_summary,
)
from .configuracion import (
    DEFAULT_CONFIG_2025,
    DEFAULT_CONFIGS,
    DEFAULT_COTIZATION_GROUP,
    resolve_config,
    get_default_config,
    validate_config,
    get_rate,
)
from .incapacidad_temporal import (
    calculate_it,
    calculate_daily_salary,
    calculate_it_salary_deduction,
)
from .bases import calculate_bases
from .devengos import calculate_accruals
from .horas_extra import (
    calculate_overtime,
    calculate_overtime_amount,
    get_updated_accumulated_overtime,
    get_remaining_overtime_hours,
)
from .cotizaciones import (
    calculate_worker_deductions,
    calculate_company_deductions,
    select_unemployment_rate,
)
from .irpf import (
    IRPF_MINIMUM_RATES,
    calculate_irpf,
    validate_irpf_percentage,
)
from .validadores import validate_input

__all__ = [
    "calculate_payslip",
    "calculate_quick_payslip",
    "format_payslip_summary",
    "DEFAULT_CONFIG_2025",
    "DEFAULT_CONFIGS",
    "DEFAULT_COTIZATION_GROUP",
    "resolve_config",
    "get_default_config",
    "validate_config",
    "get_rate",
    "calculate_it",
    "calculate_daily_salary",
    "calculate_it_salary_deduction",
    "calculate_bases",
    "calculate_accruals",
    "calculate_overtime",
    "calculate_overtime_amount",
    "get_updated_accumulated_overtime",
    "get_remaining_overtime_hours",
    "calculate_worker_deductions",
    "calculate_company_deductions",
    "select_unemployment_rate",
    "IRPF_MINIMUM_RATES",
    "calculate_irpf",
    "validate_irpf_percentage",
    "validate_input",
]
