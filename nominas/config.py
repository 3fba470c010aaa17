"""
Gestión de la configuración de la aplicación.

Este módulo agrupa los parámetros de entorno del servicio. Los parámetros
legales (tipos de cotización, bases, SMI) NO viven aquí: son valores
inmutables inyectados en cada cálculo (ver `nominas.calculadora.configuracion`).
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Parámetros de entorno de la aplicación.

    Se cargan desde el fichero .env (o variables de entorno).
    Settings:
        - APP_NAME: Nombre de la aplicación
        - ENV: Entorno (dev, prod, staging)
        - HOST: Dirección del servidor
        - PORT: Puerto del servidor
        - DEBUG: Modo depuración
        - LOG_LEVEL: Nivel de log del espacio de nombres `nominas`
        - LOG_JSON: Si True, una línea JSON por registro de log
        - CORS_ORIGINS: Orígenes permitidos para el frontend
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    APP_NAME: str = "nominas"
    ENV: str = "dev"
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True
    CORS_ORIGINS: list[str] = [
        "http://localhost:5173",
        "http://localhost:5174",
        "http://localhost:3000",
    ]


class BatchSettings(BaseSettings):
    """
    Parámetros de la generación masiva de nóminas.

    El cálculo de cada empleado es independiente; estos valores solo acotan
    el pool de trabajadores y el tiempo total del lote.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    BATCH_MAX_WORKERS: int = 8
    BATCH_TIMEOUT_SECONDS: float | None = None


app_settings = AppSettings()
batch_settings = BatchSettings()
