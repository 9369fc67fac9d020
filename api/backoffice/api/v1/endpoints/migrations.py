"""
Endpoints de migracion por entidad (Google Sheets <-> Postgres).

Un router por entidad registrada, todos con la misma forma:
/api/v1/<slug>-migration/{import-from-sheets, sync-to-sheets, full-migration,
status, sheet-headers, compare-record, sync-record/{id}}
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from backoffice.api.v1.dependencies.use_case_deps import migration_use_cases_for
from backoffice.application.dto.migration_dto import (
    ApiResponseDTO,
    FullMigrationResultDTO,
    ImportResultDTO,
    MigrationStatusDTO,
    SyncToSheetsResultDTO,
)
from backoffice.application.use_cases.migration_use_cases import MigrationUseCases
from backoffice.infrastructure.external.sheets_sync.sync_config import EntitySyncConfig


def build_migration_router(config: EntitySyncConfig) -> APIRouter:
    """
    Construye el router de migracion de una entidad.

    Args:
        config: Descriptor de la entidad

    Returns:
        APIRouter con prefijo /<slug>-migration
    """
    router = APIRouter(prefix=f"/{config.slug}-migration", tags=[f"{config.display_name} Migration"])
    get_use_cases = migration_use_cases_for(config)

    @router.post("/import-from-sheets", response_model=ApiResponseDTO)
    async def import_from_sheets(
        filter_value: Optional[str] = Query(
            None, alias="filter", description=f"Filtra por '{config.filter_column}'" if config.filter_column else None
        ),
        use_cases: MigrationUseCases = Depends(get_use_cases),
    ) -> ApiResponseDTO:
        """Importa las filas de la hoja que aun no existen en la base de datos."""
        result = await use_cases.import_from_sheets(filter_value=filter_value)
        return ApiResponseDTO(
            success=True,
            message=(
                f"Import completed: {result.imported} imported, {result.updated} updated, "
                f"{result.skipped} skipped, {result.errors} errors"
            ),
            data=ImportResultDTO.model_validate(result).model_dump(),
        )

    @router.post("/sync-to-sheets", response_model=ApiResponseDTO)
    async def sync_to_sheets(
        use_cases: MigrationUseCases = Depends(get_use_cases),
    ) -> ApiResponseDTO:
        """Escribe en la hoja los registros pendientes (synced=False)."""
        result = await use_cases.sync_to_sheets()
        return ApiResponseDTO(
            success=True,
            message=f"Synced {result.success_count} of {result.total_records} records",
            data=SyncToSheetsResultDTO.model_validate(result).model_dump(),
        )

    @router.post("/full-migration", response_model=ApiResponseDTO)
    async def full_migration(
        use_cases: MigrationUseCases = Depends(get_use_cases),
    ) -> ApiResponseDTO:
        """Importacion seguida de sincronizacion."""
        result = await use_cases.full_migration()
        return ApiResponseDTO(
            success=result.success,
            message="Full migration completed" if result.success else "Full migration completed with errors",
            data=FullMigrationResultDTO.model_validate(result.to_dict()).model_dump(by_alias=True),
            error=result.error,
        )

    @router.post("/sync-record/{record_id}", response_model=ApiResponseDTO)
    async def sync_record(
        record_id: int,
        operation: Optional[str] = Query(None, description="create | update"),
        use_cases: MigrationUseCases = Depends(get_use_cases),
    ) -> ApiResponseDTO:
        """Sincroniza un unico registro con la hoja."""
        data = await use_cases.sync_record(record_id, operation)
        return ApiResponseDTO(success=True, message=f"Record {record_id} synced", data=data)

    @router.get("/status", response_model=ApiResponseDTO)
    async def migration_status(
        use_cases: MigrationUseCases = Depends(get_use_cases),
    ) -> ApiResponseDTO:
        """Conteos en base de datos y en la hoja."""
        status = await use_cases.status()
        return ApiResponseDTO(
            success=True,
            data=MigrationStatusDTO(**status).model_dump(),
        )

    @router.get("/sheet-headers", response_model=ApiResponseDTO)
    async def sheet_headers(
        use_cases: MigrationUseCases = Depends(get_use_cases),
    ) -> ApiResponseDTO:
        """Columnas de la hoja y filas de muestra."""
        return ApiResponseDTO(success=True, data=await use_cases.sheet_headers())

    @router.get("/compare-record", response_model=ApiResponseDTO)
    async def compare_record(
        sheet_id: Optional[str] = Query(None, alias="sheetId"),
        use_cases: MigrationUseCases = Depends(get_use_cases),
    ) -> ApiResponseDTO:
        """Compara un registro por su ID externo."""
        return ApiResponseDTO(success=True, data=await use_cases.compare_record(sheet_id))

    return router
