"""
Motor generico de sincronizacion Google Sheets <-> Postgres.

Diseno (resumen):
- Importacion: recorre las filas de la hoja en orden, omite vacias, sin ID
  o ya existentes (o las actualiza si la entidad usa politica "upsert").
- Sincronizacion: recorre los registros con synced=False, actualiza la fila
  si ya existe en la hoja o la agrega al final, y marca synced=True.
- Cada registro se confirma (commit) por separado; un error hace rollback
  solo de ese registro y la pasada continua.

Estrategia de idempotencia:
- sheet_id es UNIQUE en Postgres: una fila no se importa dos veces.
- Antes de escribir en la hoja se confirma sync_attempted_at. Si el proceso
  muere entre la escritura y synced=True, la siguiente pasada dentro de la
  ventana SYNC_IN_FLIGHT_WINDOW_SECONDS omite el registro en vez de duplicar
  la fila.
"""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Optional

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.infrastructure.repositories.sync_record_repository import SyncRecordRepository
from backoffice.shared.exceptions.domain import RecordNotFoundException, ValidationException

from .sync_config import SHEET_ID_FIELD, EntitySyncConfig
from .types import (
    FullMigrationResult,
    ImportResult,
    MigrationStatus,
    SyncToSheetsResult,
    ensure_utc,
    generate_sheet_id,
    is_blank,
    utc_now,
)

OPERATION_CREATE = "create"
OPERATION_UPDATE = "update"

SAMPLE_SIZE = 3
SAMPLE_VALUE_MAX_LEN = 100
EMPTY_MARKER = "(empty)"


class EntitySyncService:
    """
    Sincronizacion de una entidad, parametrizada por su EntitySyncConfig.

    El gateway es sincrono (requests); cada llamada corre en un thread.
    """

    def __init__(
        self,
        db: AsyncSession,
        config: EntitySyncConfig,
        gateway: Any,
        *,
        in_flight_window_s: int = 300,
        clock: Callable[[], Any] = utc_now,
        id_factory: Callable[[str], str] = generate_sheet_id,
    ) -> None:
        self._db = db
        self._config = config
        self._gateway = gateway
        self._repo = SyncRecordRepository(db, config.model)
        self._mapper = config.mapper
        self._in_flight_window_s = in_flight_window_s
        self._clock = clock
        self._id_factory = id_factory

    @property
    def config(self) -> EntitySyncConfig:
        return self._config

    # ------------------------------------------------------------------
    # Hoja -> base de datos
    # ------------------------------------------------------------------

    async def import_from_sheets(self, filter_value: Optional[str] = None) -> ImportResult:
        """
        Importa las filas de la hoja a la base de datos.

        Args:
            filter_value: si la entidad define filter_column, solo se importan
                las filas cuyo valor en esa columna coincide

        Raises:
            SheetGatewayException: si no se pudo leer la hoja
        """
        name = self._config.display_name
        logger.info(f"[{name}] Importando desde Google Sheets '{self._config.sheet_name}'")

        rows = await self._fetch_rows()
        result = ImportResult(total_rows=len(rows))

        for row in rows:
            if all(is_blank(v) for v in row.values()):
                logger.debug(f"[{name}] Fila vacia omitida")
                result.skip("empty record")
                continue

            sheet_id = self._external_id(row)
            if sheet_id is None:
                logger.debug(f"[{name}] Fila sin ID omitida (columnas: {', '.join(self._config.id_columns)})")
                result.skip("missing external id")
                continue

            if filter_value and self._config.filter_column:
                if str(row.get(self._config.filter_column, "")).strip() != filter_value.strip():
                    result.skip("filtered", sheet_id)
                    continue

            try:
                values = self._mapper.to_internal(row)
                values[SHEET_ID_FIELD] = sheet_id
                values["synced"] = True

                existing = await self._repo.get_by_sheet_id(sheet_id)
                if existing is not None:
                    if not self._config.upserts:
                        result.skip("already exists", sheet_id)
                        continue
                    await self._repo.update(existing.id, values)
                    await self._db.commit()
                    result.updated += 1
                    continue

                await self._repo.create(values)
                await self._db.commit()
                result.imported += 1
            except Exception as e:
                await self._db.rollback()
                logger.error(f"[{name}] Error importando {sheet_id}: {e}")
                result.fail(str(e), sheet_id)

        logger.info(
            f"[{name}] Importacion terminada: {result.imported} importados, "
            f"{result.updated} actualizados, {result.skipped} omitidos, {result.errors} errores"
        )
        return result

    # ------------------------------------------------------------------
    # Base de datos -> hoja
    # ------------------------------------------------------------------

    async def sync_to_sheets(self) -> SyncToSheetsResult:
        """Escribe en la hoja todos los registros con synced=False."""
        name = self._config.display_name
        records = await self._repo.get_unsynced()
        # Snapshot: tras un rollback las instancias ORM quedan expiradas
        snapshots = [self._snapshot(r) for r in records]
        result = SyncToSheetsResult(total_records=len(snapshots))
        logger.info(f"[{name}] Sincronizando {len(snapshots)} registros pendientes hacia Google Sheets")

        now = ensure_utc(self._clock())
        for snapshot in snapshots:
            record_id = snapshot["id"]
            sheet_id = snapshot.get(SHEET_ID_FIELD)

            if self._in_flight(snapshot, now):
                logger.warning(f"[{name}] Registro {record_id} con escritura en vuelo, se omite")
                result.skip("sync already in flight", record_id=record_id, sheet_id=sheet_id)
                continue

            try:
                outcome = await self._push(snapshot)
                result.success_count += 1
                if outcome == OPERATION_UPDATE:
                    result.updated_count += 1
                else:
                    result.created_count += 1
            except Exception as e:
                await self._db.rollback()
                logger.error(f"[{name}] Error sincronizando registro {record_id}: {e}")
                result.fail(str(e), record_id=record_id, sheet_id=sheet_id)

        logger.info(
            f"[{name}] Sincronizacion terminada: {result.success_count} ok "
            f"({result.created_count} nuevos, {result.updated_count} actualizados), "
            f"{result.skipped_count} omitidos, {result.error_count} errores"
        )
        return result

    async def sync_record(self, record_id: int, operation: Optional[str] = None) -> str:
        """
        Sincroniza un unico registro.

        Args:
            record_id: ID interno
            operation: "create", "update" o None (decide segun exista la fila)

        Returns:
            "create" o "update" segun lo que se hizo en la hoja
        """
        if operation not in (None, OPERATION_CREATE, OPERATION_UPDATE):
            raise ValidationException("operation debe ser 'create' o 'update'", field="operation")

        record = await self._repo.get_by_id(record_id)
        if record is None:
            raise RecordNotFoundException(self._config.display_name, record_id)

        try:
            return await self._push(self._snapshot(record), operation)
        except Exception:
            await self._db.rollback()
            raise

    async def full_migration(self) -> FullMigrationResult:
        """Importacion y luego sincronizacion. Un fallo en la primera no impide la segunda."""
        name = self._config.display_name
        result = FullMigrationResult()

        try:
            result.import_result = await self.import_from_sheets()
        except Exception as e:
            await self._db.rollback()
            logger.error(f"[{name}] Fallo la importacion: {e}")
            result.import_error = str(e)

        try:
            result.sync_result = await self.sync_to_sheets()
        except Exception as e:
            await self._db.rollback()
            logger.error(f"[{name}] Fallo la sincronizacion: {e}")
            result.sync_error = str(e)

        return result

    # ------------------------------------------------------------------
    # Diagnostico
    # ------------------------------------------------------------------

    async def status(self) -> MigrationStatus:
        total = await self._repo.count()
        unsynced = await self._repo.count_unsynced()
        rows = await self._fetch_rows()
        return MigrationStatus(
            total_in_database=total,
            total_in_sheets=len([r for r in rows if r]),
            synced_in_database=total - unsynced,
            unsynced_in_database=unsynced,
        )

    async def sheet_headers(self) -> dict[str, Any]:
        """Columnas observadas en la hoja y hasta 3 filas de muestra."""
        rows = [r for r in await self._fetch_rows() if r]

        headers: list[str] = []
        for row in rows:
            for column in row:
                if column not in headers:
                    headers.append(column)

        samples = []
        for row in rows[:SAMPLE_SIZE]:
            sample = {}
            for column in headers:
                value = row.get(column)
                if is_blank(value):
                    sample[column] = EMPTY_MARKER
                else:
                    sample[column] = str(value)[:SAMPLE_VALUE_MAX_LEN]
            samples.append(sample)

        mapped = set(self._mapper.sheet_columns)
        return {
            "sheet_name": self._config.sheet_name,
            "headers": headers,
            "unmapped_headers": [h for h in headers if h not in mapped],
            "total_records": len(rows),
            "sample_count": len(samples),
            "samples": samples,
        }

    async def compare_record(self, sheet_id: Optional[str]) -> dict[str, Any]:
        """Representacion en base de datos y en la hoja de un mismo ID externo."""
        if is_blank(sheet_id):
            raise ValidationException("sheetId is required", field="sheetId")
        sheet_id = sheet_id.strip()

        record = await self._repo.get_by_sheet_id(sheet_id)
        database = self._snapshot(record) if record is not None else None
        row = await asyncio.to_thread(
            self._gateway.find_row, self._config.sheet_name, self._config.primary_id_column, sheet_id
        )
        sheet = row.record if row is not None else None

        return {
            "sheet_id": sheet_id,
            "database": database,
            "database_as_sheet": self._mapper.to_external(database) if database else None,
            "sheet": sheet,
            "exists": {
                "in_database": database is not None,
                "in_sheet": sheet is not None,
            },
        }

    # ------------------------------------------------------------------
    # Internos
    # ------------------------------------------------------------------

    async def _fetch_rows(self) -> list[dict[str, Any]]:
        return await asyncio.to_thread(self._gateway.get_rows, self._config.sheet_name)

    def _external_id(self, row: dict[str, Any]) -> Optional[str]:
        for column in self._config.id_columns:
            value = row.get(column)
            if not is_blank(value):
                return str(value).strip()
        return None

    def _snapshot(self, record: Any) -> dict[str, Any]:
        columns = self._config.model.__table__.columns.keys()
        return {column: getattr(record, column) for column in columns}

    def _in_flight(self, snapshot: dict[str, Any], now) -> bool:
        attempted_at = snapshot.get("sync_attempted_at")
        if attempted_at is None:
            return False
        elapsed = (now - ensure_utc(attempted_at)).total_seconds()
        return elapsed < self._in_flight_window_s

    async def _push(self, snapshot: dict[str, Any], operation: Optional[str] = None) -> str:
        """Escribe un registro en la hoja y lo marca como sincronizado."""
        record_id = snapshot["id"]
        sheet_id = snapshot.get(SHEET_ID_FIELD)
        sheet_name = self._config.sheet_name
        id_column = self._config.primary_id_column

        generated_id = None
        if not sheet_id:
            generated_id = sheet_id = self._id_factory(self._config.id_prefix)
            snapshot = {**snapshot, SHEET_ID_FIELD: sheet_id}
        await self._repo.mark_sync_attempt(record_id, ensure_utc(self._clock()), sheet_id=generated_id)
        await self._db.commit()

        external = self._mapper.to_external(snapshot)
        existing = await asyncio.to_thread(self._gateway.find_row, sheet_name, id_column, sheet_id)

        if existing is not None and operation != OPERATION_CREATE:
            updated = await asyncio.to_thread(
                self._gateway.update_row, sheet_name, id_column, sheet_id, external
            )
            outcome = OPERATION_UPDATE
            if not updated:
                # La fila desaparecio entre la busqueda y la escritura
                await asyncio.to_thread(self._gateway.append_row, sheet_name, external)
                outcome = OPERATION_CREATE
        else:
            if existing is not None:
                logger.warning(
                    f"[{self._config.display_name}] {sheet_id} ya existe en la hoja; "
                    f"se agrega igualmente por operation=create"
                )
            await asyncio.to_thread(self._gateway.append_row, sheet_name, external)
            outcome = OPERATION_CREATE

        await self._repo.mark_synced(record_id)
        await self._db.commit()
        logger.debug(f"[{self._config.display_name}] Registro {record_id} -> {sheet_id} ({outcome})")
        return outcome
