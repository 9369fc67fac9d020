"""
Router principal de la API v1.
Agrupa todos los endpoints de la version 1.
"""
from fastapi import APIRouter

from backoffice.api.v1.endpoints import migration_scheduler
from backoffice.api.v1.endpoints.migrations import build_migration_router
from backoffice.infrastructure.external.sheets_sync.registry import REGISTRY


api_router = APIRouter(prefix="/v1")

api_router.include_router(migration_scheduler.router)

# Un router de migracion por entidad registrada
for entity_config in REGISTRY:
    api_router.include_router(build_migration_router(entity_config))
