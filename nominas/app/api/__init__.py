"""API router principal."""

from fastapi import APIRouter

from nominas.app.routes.nomina import router as nomina_router
from nominas.app.routes.generacion import router as generacion_router

router = APIRouter()

router.include_router(nomina_router, tags=["nomina"])
router.include_router(generacion_router, tags=["generacion"])
