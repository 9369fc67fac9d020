"""
Dependencias para inyeccion de recursos compartidos de la aplicacion.
"""
from typing import Any, Optional

from fastapi import Request

from backoffice.application.services.migration_scheduler import MigrationScheduler
from backoffice.shared.exceptions.base import AppException


async def get_sheets_gateway(request: Request) -> Optional[Any]:
    """
    Dependencia para obtener el cliente de Google Sheets creado en el startup.

    Args:
        request: Peticion HTTP (da acceso a app.state)

    Returns:
        GoogleSheetsClient o None si Google Sheets no esta configurado
    """
    return getattr(request.app.state, "sheets_gateway", None)


async def get_migration_scheduler(request: Request) -> MigrationScheduler:
    """
    Dependencia para obtener el orquestador de migraciones.

    Raises:
        AppException: 503 si el orquestador no fue inicializado
    """
    scheduler = getattr(request.app.state, "migration_scheduler", None)
    if scheduler is None:
        raise AppException(
            message="El orquestador de migraciones no esta inicializado",
            status_code=503,
            error_code="SCHEDULER_UNAVAILABLE",
        )
    return scheduler
