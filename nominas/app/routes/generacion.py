"""Ruta de generación de nóminas por lotes."""

import logging

from fastapi import APIRouter, HTTPException
from fastapi.concurrency import run_in_threadpool

from nominas.exceptions import ConfigurationError
from nominas.models.generacion import GenerationReport, GenerationRequest
from nominas.services.generacion import generate_payslips

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/generacion", response_model=GenerationReport)
async def generar_nominas(data: GenerationRequest) -> GenerationReport:
    """
    Genera las nóminas de un mes para varios empleados de una empresa.

    Los errores de un empleado no detienen el lote: aparecen en `results`
    con `success=false` y su mensaje.
    """
    try:
        return await run_in_threadpool(generate_payslips, data)

    except ConfigurationError as e:
        raise HTTPException(status_code=422, detail={"code": e.code, "message": e.message})
    except Exception as e:
        logger.exception("Error generando nóminas")
        raise HTTPException(status_code=500, detail=f"Error en la generación de nóminas: {e}")
