"""
Data Transfer Objects (DTOs) para la capa de aplicacion.
"""
from .migration_dto import (
    ApiResponseDTO,
    RecordIssueDTO,
    ImportResultDTO,
    SyncToSheetsResultDTO,
    FullMigrationResultDTO,
    MigrationStatusDTO,
    EntityRunResultDTO,
    RunSummaryDTO,
)

__all__ = [
    "ApiResponseDTO",
    "RecordIssueDTO",
    "ImportResultDTO",
    "SyncToSheetsResultDTO",
    "FullMigrationResultDTO",
    "MigrationStatusDTO",
    "EntityRunResultDTO",
    "RunSummaryDTO",
]
