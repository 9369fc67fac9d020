"""
Manejadores de eventos de inicio y cierre de la aplicacion.
"""
from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable

from fastapi import FastAPI
from loguru import logger

from backoffice.core.config import settings
from backoffice.infrastructure.database.session import AsyncSessionLocal, init_db, close_db
from backoffice.infrastructure.external.sheets_sync.sheets_client import build_from_settings
from backoffice.application.services.migration_runners import HttpMigrationRunner, InProcessMigrationRunner
from backoffice.application.services.migration_scheduler import MigrationScheduler


def startup_handler(app: FastAPI) -> Callable:
    """
    Manejador de eventos de inicio de la aplicacion.

    Args:
        app: Instancia de FastAPI

    Returns:
        Callable: Funcion asincrona de inicio
    """
    async def startup() -> None:
        """Inicializa recursos al inicio de la aplicacion."""
        try:
            logger.info(f"Iniciando {settings.APP_NAME} v{settings.APP_VERSION}")
            logger.info(f"Entorno: {settings.ENVIRONMENT}")

            logger.add(
                settings.LOG_FILE,
                rotation="500 MB",
                retention="10 days",
                level=settings.LOG_LEVEL
            )

            _validate_config()

            # Inicializar base de datos (crea tablas si no existen)
            await init_db()
            logger.info("Base de datos inicializada")

            app.state.sheets_gateway = build_from_settings(settings)
            if app.state.sheets_gateway is not None:
                logger.info(f"Google Sheets conectado: {settings.GOOGLE_SHEETS_SPREADSHEET_ID}")

            app.state.migration_scheduler = MigrationScheduler(
                _build_runner(app),
                delay_seconds=settings.MIGRATION_ENTITY_DELAY_SECONDS,
                cron=settings.MIGRATION_CRON,
                timezone=settings.MIGRATION_TIMEZONE,
            )

            app.state.scheduler = None
            if settings.MIGRATION_SCHEDULER_ENABLED:
                scheduler = app.state.migration_scheduler.create_scheduler()
                scheduler.start()
                app.state.scheduler = scheduler
                logger.info(
                    f"Migraciones programadas: '{settings.MIGRATION_CRON}' ({settings.MIGRATION_TIMEZONE}), "
                    f"proxima: {app.state.migration_scheduler.next_run_time()}"
                )
            else:
                logger.info("Migraciones programadas deshabilitadas (MIGRATION_SCHEDULER_ENABLED=false)")

            logger.success("Aplicacion iniciada correctamente")

            _print_available_urls()

        except Exception as e:
            logger.error(f"Error durante startup: {e}")
            logger.exception("Detalle del error:")
            raise

    return startup


def _build_runner(app: FastAPI):
    """Transporte de las migraciones programadas segun MIGRATION_TRANSPORT."""
    if settings.MIGRATION_TRANSPORT.lower() == "http":
        logger.info(f"Migraciones via HTTP contra {settings.API_BASE_URL}")
        return HttpMigrationRunner(
            settings.API_BASE_URL,
            timeout_s=settings.MIGRATION_HTTP_TIMEOUT_SECONDS,
        )
    return InProcessMigrationRunner(
        AsyncSessionLocal,
        lambda: getattr(app.state, "sheets_gateway", None),
    )


def _validate_config() -> None:
    """Valida que la configuracion critica este presente."""
    warnings = []

    if not settings.sheets_enabled:
        warnings.append(
            "GOOGLE_SHEETS_SPREADSHEET_ID / GOOGLE_SERVICE_ACCOUNT_* no configurados - "
            "las migraciones fallaran"
        )
    if settings.MIGRATION_TRANSPORT.lower() not in ("inprocess", "http"):
        warnings.append(f"MIGRATION_TRANSPORT desconocido '{settings.MIGRATION_TRANSPORT}', se usa 'inprocess'")

    for warning in warnings:
        logger.warning(f"CONFIG: {warning}")


def _print_available_urls() -> None:
    """Imprime las URLs disponibles de la aplicacion."""
    access_host = "localhost" if settings.HOST == "0.0.0.0" else settings.HOST
    base_url = f"http://{access_host}:{settings.PORT}"

    logger.opt(colors=True).info("<bold><green>" + "=" * 80 + "</green></bold>")
    logger.opt(colors=True).info("<bold><green>URLS DISPONIBLES:</green></bold>")
    logger.opt(colors=True).info("<bold><green>" + "=" * 80 + "</green></bold>")
    logger.opt(colors=True).info(f"<cyan>  Swagger UI:  {base_url}/docs</cyan>")
    logger.opt(colors=True).info(f"<cyan>  Health:      {base_url}/health</cyan>")
    logger.opt(colors=True).info(f"<cyan>  Scheduler:   {base_url}/api/v1/migration-scheduler/status</cyan>")
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

        scheduler = getattr(app.state, "scheduler", None)
        if scheduler is not None and scheduler.running:
            scheduler.shutdown(wait=False)
            logger.info("Scheduler de migraciones detenido")

        await close_db()
        logger.info("Conexiones de base de datos cerradas")

        logger.success("Aplicacion cerrada correctamente")

    return shutdown


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Ciclo de vida de la aplicacion: startup antes de servir, shutdown al salir."""
    await startup_handler(app)()
    try:
        yield
    finally:
        await shutdown_handler(app)()
