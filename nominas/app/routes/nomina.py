"""Ruta de cálculo de una nómina suelta."""

import logging

from fastapi import APIRouter, HTTPException

from nominas.calculadora import calculate_payslip, get_default_config, resolve_config
from nominas.exceptions import ConfigurationError, ValidationError
from nominas.models.nomina import PayslipRequest
from nominas.models.resultado import PayslipResult

logger = logging.getLogger(__name__)

router = APIRouter()


def validation_detail(error: ValidationError) -> dict:
    """Cuerpo de error con la lista de problemas por campo."""
    return {
        "code": error.code,
        "message": error.message,
        "issues": [issue.model_dump() for issue in error.issues],
    }


@router.post("/nomina", response_model=PayslipResult)
async def calcular_nomina(data: PayslipRequest) -> PayslipResult:
    """
    Calcula la nómina de un empleado para un mes.

    - `employee`: salario base, grupo de cotización, IRPF, contrato, jornada...
    - `variables`: días, horas extras, baja por IT, comisiones, anticipos...
    - `month`: mes de la nómina (1-12)
    - `year`: año de la configuración por defecto (2025)
    - `company_override`: ajustes de la empresa (`annual_parameters`, `at_ep_rate`)

    Returns:
        PayslipResult: devengos, bases, deducciones, líquido, coste empresa y avisos.
    """
    try:
        config = resolve_config(data.company_override, base=get_default_config(data.year))
        return calculate_payslip(data.employee, data.variables, config, data.month)

    except ValidationError as e:
        raise HTTPException(status_code=400, detail=validation_detail(e))
    except ConfigurationError as e:
        raise HTTPException(status_code=422, detail={"code": e.code, "message": e.message})
    except Exception as e:
        logger.exception("Error calculando la nómina")
        raise HTTPException(status_code=500, detail=f"Error en el cálculo de la nómina: {e}")
