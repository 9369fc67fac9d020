"""
Endpoints del orquestador de migraciones programadas.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from backoffice.api.v1.dependencies.repository_deps import get_migration_scheduler
from backoffice.application.dto.migration_dto import ApiResponseDTO, EntityRunResultDTO, RunSummaryDTO
from backoffice.application.services.migration_scheduler import MigrationScheduler
from backoffice.infrastructure.external.sheets_sync.registry import MigrationEntity
from backoffice.shared.exceptions.domain import ValidationException

router = APIRouter(prefix="/migration-scheduler", tags=["Migration Scheduler"])


@router.post("/run-all", response_model=ApiResponseDTO)
async def run_all_migrations(
    scheduler: MigrationScheduler = Depends(get_migration_scheduler),
) -> ApiResponseDTO:
    """
    Ejecuta todas las migraciones registradas, en orden.
    Responde 409 si ya hay una corrida en curso.
    """
    summary = await scheduler.run_all()
    return ApiResponseDTO(
        success=summary.success,
        message=(
            f"{summary.successful}/{summary.total_migrations} migrations completed successfully"
        ),
        data=RunSummaryDTO.model_validate(summary).model_dump(),
    )


@router.post("/run", response_model=ApiResponseDTO)
async def run_migration(
    name: Optional[str] = Query(None, description="Nombre o slug, ej. 'Home Visits'"),
    scheduler: MigrationScheduler = Depends(get_migration_scheduler),
) -> ApiResponseDTO:
    """Ejecuta una sola migracion por nombre."""
    if not name or not name.strip():
        raise ValidationException(
            "Migration name is required. Use ?name=Home Visits or ?name=Restructurings",
            field="name",
        )
    entity = MigrationEntity.parse(name)
    result = await scheduler.run_one(entity)
    return ApiResponseDTO(
        success=result.success,
        message=f"Migration {result.name} {'completed' if result.success else 'failed'}",
        data=EntityRunResultDTO.model_validate(result).model_dump(),
        error=result.error,
    )


@router.get("/status", response_model=ApiResponseDTO)
async def scheduler_status(
    scheduler: MigrationScheduler = Depends(get_migration_scheduler),
) -> ApiResponseDTO:
    """Configuracion del cron, proxima ejecucion y ultima corrida."""
    return ApiResponseDTO(success=True, data=scheduler.status())
