"""
Dependencias para inyeccion de casos de uso.
"""
from typing import Any, Callable, Optional

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.api.v1.dependencies.repository_deps import get_sheets_gateway
from backoffice.application.use_cases.migration_use_cases import MigrationUseCases
from backoffice.infrastructure.database.session import get_db
from backoffice.infrastructure.external.sheets_sync.sync_config import EntitySyncConfig


def migration_use_cases_for(config: EntitySyncConfig) -> Callable:
    """
    Fabrica de dependencias: una por entidad registrada.

    Args:
        config: Descriptor de la entidad

    Returns:
        Dependencia async que construye MigrationUseCases para esa entidad
    """
    async def get_migration_use_cases(
        db: AsyncSession = Depends(get_db),
        gateway: Optional[Any] = Depends(get_sheets_gateway),
    ) -> MigrationUseCases:
        return MigrationUseCases(db, config, gateway)

    return get_migration_use_cases
