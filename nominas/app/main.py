"""Aplicación FastAPI principal."""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from nominas.app.api import router
from nominas.app.routes.nomina import validation_detail
from nominas.config import app_settings
from nominas.exceptions import ConfigurationError, NominaError, ValidationError
from nominas.logging_config import configure_logging

configure_logging(level=app_settings.LOG_LEVEL, json_format=app_settings.LOG_JSON)

app = FastAPI(
    title="Calculadora de Nóminas",
    description="API para calcular nóminas españolas: bases, cotizaciones, IRPF e IT",
    version="0.1.0",
    debug=app_settings.DEBUG,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=app_settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(NominaError)
async def nomina_error_handler(request: Request, exc: NominaError) -> JSONResponse:
    """Errores del motor lanzados al leer el cuerpo (p. ej. un tipo de contrato desconocido)."""
    if isinstance(exc, ValidationError):
        return JSONResponse(status_code=400, content={"detail": validation_detail(exc)})
    status_code = 422 if isinstance(exc, ConfigurationError) else 500
    return JSONResponse(status_code=status_code, content={"detail": {"code": exc.code, "message": exc.message}})


app.include_router(router, prefix="/api", tags=["nominas"])


def dev_server():
    """Lanza el servidor de desarrollo."""
    import uvicorn
    uvicorn.run("nominas.app.main:app", host=app_settings.HOST, port=app_settings.PORT, reload=True)


def prod_server():
    """Lanza el servidor de producción."""
    import uvicorn
    uvicorn.run("nominas.app.main:app", host=app_settings.HOST, port=app_settings.PORT, workers=4)
