"""Models package."""

from .enums import (
    ContractType,
    WorkdayType,
    ContingencyType,
    normalize_contract_type,
    normalize_workday_type,
    normalize_contingency_type,
)
from .nomina import (
    NominaModel,
    EmployeePayrollInput,
    TemporaryDisabilityInput,
    MonthlyVariablesInput,
    PayslipRequest,
)
from .config import (
    CotizationGroupLimits,
    PayrollConfigInput,
    CompanyPayrollOverride,
)
from .resultado import (
    ITPayer,
    ITSegment,
    ITCalculationResult,
    ITDetail,
    OvertimeCalculationResult,
    BasesCalculationResult,
    PayslipBases,
    PayslipAccruals,
    WorkerDeductions,
    CompanyDeductions,
    PayslipResult,
)
from .generacion import (
    GenerationVariables,
    EmployeeGenerationInput,
    GenerationRequest,
    PayslipLineItem,
    PayslipRecord,
    GenerationResult,
    GenerationSummary,
    GenerationReport,
)

__all__ = [
    "ContractType",
    "WorkdayType",
    "ContingencyType",
    "normalize_contract_type",
    "normalize_workday_type",
    "normalize_contingency_type",
    "NominaModel",
    "EmployeePayrollInput",
    "TemporaryDisabilityInput",
    "MonthlyVariablesInput",
    "PayslipRequest",
    "CotizationGroupLimits",
    "PayrollConfigInput",
    "CompanyPayrollOverride",
    "ITPayer",
    "ITSegment",
    "ITCalculationResult",
    "ITDetail",
    "OvertimeCalculationResult",
    "BasesCalculationResult",
    "PayslipBases",
    "PayslipAccruals",
    "WorkerDeductions",
    "CompanyDeductions",
    "PayslipResult",
    "GenerationVariables",
    "EmployeeGenerationInput",
    "GenerationRequest",
    "PayslipLineItem",
    "PayslipRecord",
    "GenerationResult",
    "GenerationSummary",
    "GenerationReport",
]
