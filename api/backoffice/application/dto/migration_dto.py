"""
DTOs de las migraciones Google Sheets <-> Postgres.
Definen el sobre de respuesta y la forma de los resultados.
"""
from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, Field


class ApiResponseDTO(BaseModel):
    """Sobre comun de todas las respuestas de migracion."""

    success: bool = Field(..., description="Indica si la operacion termino sin errores")
    message: Optional[str] = Field(None, description="Mensaje legible")
    data: Optional[Any] = Field(None, description="Resultado de la operacion")
    error: Optional[str] = Field(None, description="Codigo o detalle de error")


class RecordIssueDTO(BaseModel):
    """Registro omitido o con error."""

    reason: str
    sheet_id: Optional[str] = None
    record_id: Optional[int] = None

    class Config:
        from_attributes = True


class ImportResultDTO(BaseModel):
    """Resultado de importar una hoja a la base de datos."""

    imported: int = Field(..., description="Registros creados")
    updated: int = Field(0, description="Registros actualizados (solo politica upsert)")
    skipped: int = Field(..., description="Filas vacias, sin ID o ya existentes")
    errors: int = Field(..., description="Filas que fallaron")
    total_rows: int = Field(0, description="Filas leidas de la hoja")
    skipped_details: List[RecordIssueDTO] = Field(default_factory=list)
    error_details: List[RecordIssueDTO] = Field(default_factory=list)

    class Config:
        from_attributes = True


class SyncToSheetsResultDTO(BaseModel):
    """Resultado de escribir registros pendientes en la hoja."""

    success_count: int
    created_count: int = 0
    updated_count: int = 0
    skipped_count: int = 0
    error_count: int
    total_records: int
    skipped_details: List[RecordIssueDTO] = Field(default_factory=list)
    error_details: List[RecordIssueDTO] = Field(default_factory=list)

    class Config:
        from_attributes = True


class FullMigrationResultDTO(BaseModel):
    """Importacion + sincronizacion."""

    import_result: Optional[ImportResultDTO] = Field(None, alias="import")
    sync_result: Optional[SyncToSheetsResultDTO] = Field(None, alias="sync")
    import_error: Optional[str] = None
    sync_error: Optional[str] = None

    class Config:
        populate_by_name = True


class MigrationStatusDTO(BaseModel):
    """Conteos de sincronizacion de una entidad."""

    entity: str
    sheet_name: str
    total_in_database: int
    total_in_sheets: int
    synced_in_database: int
    unsynced_in_database: int
    sync_status: str


class EntityRunResultDTO(BaseModel):
    """Resultado de una entidad dentro de una corrida programada."""

    name: str
    success: bool
    imported: int = 0
    updated: int = 0
    skipped: int = 0
    errors: int = 0
    synced: int = 0
    error: Optional[str] = None
    duration_ms: int = 0

    class Config:
        from_attributes = True


class RunSummaryDTO(BaseModel):
    """Resumen de una corrida de todas las migraciones."""

    success: bool
    total_migrations: int
    successful: int
    failed: int
    total_imported: int
    total_errors: int
    duration_ms: int
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    results: List[EntityRunResultDTO] = Field(default_factory=list)

    class Config:
        from_attributes = True
