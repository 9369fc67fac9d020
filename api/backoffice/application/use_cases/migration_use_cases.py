"""
Casos de uso de migracion por entidad (Google Sheets <-> Postgres).
"""
from typing import Any, Dict, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.core.config import settings
from backoffice.infrastructure.external.sheets_sync.sync_config import EntitySyncConfig
from backoffice.infrastructure.external.sheets_sync.sync_service import EntitySyncService
from backoffice.infrastructure.external.sheets_sync.types import (
    FullMigrationResult,
    ImportResult,
    SyncToSheetsResult,
)
from backoffice.shared.exceptions.integration import SheetGatewayException


class MigrationUseCases:
    """
    Casos de uso para las migraciones de una entidad.

    Uso:
        use_cases = MigrationUseCases(db, HOME_VISITS, gateway)
        result = await use_cases.full_migration()
    """

    def __init__(self, db: AsyncSession, config: EntitySyncConfig, gateway: Any):
        if gateway is None:
            raise SheetGatewayException(
                "Google Sheets no esta configurado (GOOGLE_SHEETS_SPREADSHEET_ID / cuenta de servicio)",
                sheet_name=config.sheet_name,
            )
        self.config = config
        self.service = EntitySyncService(
            db,
            config,
            gateway,
            in_flight_window_s=settings.SYNC_IN_FLIGHT_WINDOW_SECONDS,
        )

    async def import_from_sheets(self, filter_value: Optional[str] = None) -> ImportResult:
        return await self.service.import_from_sheets(filter_value=filter_value)

    async def sync_to_sheets(self) -> SyncToSheetsResult:
        return await self.service.sync_to_sheets()

    async def sync_record(self, record_id: int, operation: Optional[str] = None) -> Dict[str, Any]:
        outcome = await self.service.sync_record(record_id, operation)
        return {"record_id": record_id, "operation": outcome}

    async def full_migration(self) -> FullMigrationResult:
        return await self.service.full_migration()

    async def status(self) -> Dict[str, Any]:
        status = await self.service.status()
        data = status.to_dict()
        data["entity"] = self.config.display_name
        data["sheet_name"] = self.config.sheet_name
        return data

    async def sheet_headers(self) -> Dict[str, Any]:
        return await self.service.sheet_headers()

    async def compare_record(self, sheet_id: Optional[str]) -> Dict[str, Any]:
        return await self.service.compare_record(sheet_id)
