"""
Servicios de aplicacion.

Orquestacion de migraciones que no pertenece a una entidad especifica.
"""
from backoffice.application.services.migration_scheduler import (
    EntityRunResult,
    MigrationScheduler,
    RunSummary,
)
from backoffice.application.services.migration_runners import (
    HttpMigrationRunner,
    InProcessMigrationRunner,
    MigrationRunError,
)

__all__ = [
    "MigrationScheduler",
    "EntityRunResult",
    "RunSummary",
    "InProcessMigrationRunner",
    "HttpMigrationRunner",
    "MigrationRunError",
]
