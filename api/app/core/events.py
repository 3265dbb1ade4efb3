"""
Ciclo de vida de la aplicacion: inicio y cierre.
"""
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import firebase_admin
from fastapi import FastAPI
from loguru import logger

from app.core.config import settings
from app.infrastructure.external.firebase.firebase_app import initialize_firebase
from app.shared.exceptions.sync import SyncConfigException


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Lifespan de FastAPI: inicializa recursos antes de servir y los libera al cerrar.

    Args:
        app: Instancia de FastAPI
    """
    log_sink_id = await startup(app)
    try:
        yield
    finally:
        await shutdown(app, log_sink_id)


async def startup(app: FastAPI) -> int:
    """
    Inicializa recursos al inicio de la aplicacion.

    Returns:
        int: Id del sink de archivo agregado a loguru
    """
    logger.info(f"Iniciando {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info(f"Entorno: {settings.ENVIRONMENT}")

    # Configurar logging adicional
    log_sink_id = logger.add(
        settings.LOG_FILE,
        rotation="500 MB",
        retention="10 days",
        level=settings.LOG_LEVEL
    )

    # Validar configuracion critica
    _validate_config()

    # Firebase se inicializa una sola vez; si falla, /sync reintenta
    # la inicializacion y responde el error de configuracion.
    app.state.firebase_app = None
    if settings.FIREBASE_SERVICE_ACCOUNT_BASE64:
        try:
            app.state.firebase_app = initialize_firebase(settings)
        except SyncConfigException as e:
            logger.error(f"No se pudo inicializar Firebase: {e.message}")

    logger.success("Aplicacion iniciada correctamente")
    _print_available_urls()
    return log_sink_id


def _validate_config() -> None:
    """Valida que la configuracion critica este presente."""
    for name in settings.missing_sync_settings:
        logger.warning(f"CONFIG: {name} no configurada - /sync respondera 500")


def _print_available_urls() -> None:
    """Imprime las URLs disponibles de la aplicacion."""
    if settings.HOST == "0.0.0.0":
        access_host = "localhost"
    else:
        access_host = settings.HOST

    base_url = f"http://{access_host}:{settings.PORT}"

    logger.opt(colors=True).info("<bold><green>" + "=" * 80 + "</green></bold>")
    logger.opt(colors=True).info("<bold><green>URLS DISPONIBLES:</green></bold>")
    logger.opt(colors=True).info("<bold><green>" + "=" * 80 + "</green></bold>")
    logger.opt(colors=True).info(f"<cyan>  Sync:        {base_url}/sync</cyan>")
    logger.opt(colors=True).info(f"<cyan>  Health:      {base_url}/health</cyan>")
    logger.opt(colors=True).info(f"<cyan>  Swagger UI:  {base_url}/docs</cyan>")
    logger.opt(colors=True).info("<bold><green>" + "=" * 80 + "</green></bold>")


async def shutdown(app: FastAPI, log_sink_id: Optional[int] = None) -> None:
    """Libera recursos al cerrar la aplicacion."""
    logger.info("Cerrando aplicacion...")

    firebase_app = getattr(app.state, "firebase_app", None)
    if firebase_app is not None:
        firebase_admin.delete_app(firebase_app)
        app.state.firebase_app = None
        logger.info("App de Firebase liberada")

    logger.success("Aplicacion cerrada correctamente")
    if log_sink_id is not None:
        logger.remove(log_sink_id)
