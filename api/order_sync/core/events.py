"""
Manejadores de inicio y cierre de la aplicacion (los invoca el lifespan de main.py).
"""
from typing import Callable

from fastapi import FastAPI
from loguru import logger

from order_sync.core.config import settings
from order_sync.infrastructure.scheduler.sync_scheduler import SyncScheduler


def startup_handler(app: FastAPI, run_pass: Callable[[], object]) -> Callable:
    """
    Manejador de eventos de inicio de la aplicacion.

    Args:
        app: Instancia de FastAPI
        run_pass: Funcion que ejecuta una pasada completa (la usa el scheduler)

    Returns:
        Callable: Funcion asincrona de inicio
    """
    async def startup() -> None:
        """Inicializa recursos al inicio de la aplicacion."""
        try:
            logger.info(f"Iniciando {settings.APP_NAME} v{settings.APP_VERSION}")
            logger.info(f"Entorno: {settings.ENVIRONMENT}")

            _validate_config()

            app.state.log_sink_id = logger.add(
                settings.LOG_FILE,
                rotation="500 MB",
                retention="10 days",
                level=settings.LOG_LEVEL,
            )

            app.state.sync_scheduler = SyncScheduler(run_pass)
            if settings.SYNC_SCHEDULER_ENABLED:
                app.state.sync_scheduler.start(settings.SYNC_INTERVAL_MINUTES)
            else:
                logger.info("Sincronizacion automatica deshabilitada (SYNC_SCHEDULER_ENABLED=false)")

            logger.success("Aplicacion iniciada correctamente")
            _print_available_urls()

        except Exception as e:
            logger.error(f"Error durante startup: {e}")
            logger.exception("Detalle del error:")
            raise

    return startup


def _validate_config() -> None:
    """Valida que la configuracion critica este presente."""
    warnings = []

    if not settings.CLIENT_NAMES.strip():
        warnings.append("CLIENT_NAMES no configurada - no hay clientes para sincronizar")
    if not settings.GOOGLE_CLIENT_EMAIL or not settings.GOOGLE_PRIVATE_KEY:
        warnings.append("Credenciales de Google incompletas - la escritura en Sheets fallara")

    for warning in warnings:
        logger.warning(f"CONFIG: {warning}")


def _print_available_urls() -> None:
    """Imprime las URLs disponibles de la aplicacion."""
    access_host = "localhost" if settings.HOST == "0.0.0.0" else settings.HOST
    base_url = f"http://{access_host}:{settings.PORT}"

    logger.opt(colors=True).info("<bold><green>" + "=" * 80 + "</green></bold>")
    logger.opt(colors=True).info("<bold><green>URLS DISPONIBLES:</green></bold>")
    logger.opt(colors=True).info(f"<cyan>  Swagger UI:  {base_url}/docs</cyan>")
    logger.opt(colors=True).info(f"<cyan>  Sync:        {base_url}/api/v1/sync/run</cyan>")
    logger.opt(colors=True).info(f"<cyan>  Health:      {base_url}/health</cyan>")
    logger.opt(colors=True).info("<bold><green>" + "=" * 80 + "</green></bold>")


def shutdown_handler(app: FastAPI) -> Callable:
    """
    Manejador de eventos de cierre de la aplicacion.

    Args:
        app: Instancia de FastAPI

    Returns:
        Callable: Funcion asincrona de cierre
    """
    async def shutdown() -> None:
        """Libera recursos al cerrar la aplicacion."""
        logger.info("Cerrando aplicacion...")

        scheduler = getattr(app.state, "sync_scheduler", None)
        if scheduler is not None and scheduler.stop():
            logger.info("Scheduler de sincronizacion detenido")

        sink_id = getattr(app.state, "log_sink_id", None)
        if sink_id is not None:
            logger.remove(sink_id)
            app.state.log_sink_id = None

        logger.success("Aplicacion cerrada correctamente")

    return shutdown
