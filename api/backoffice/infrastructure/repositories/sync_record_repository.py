"""
Repositorio generico para entidades sincronizadas con Google Sheets.
Trabaja sobre cualquier modelo que herede SheetSyncMixin.

El repositorio solo hace flush; el commit lo decide el llamador
(la sincronizacion confirma registro por registro).
"""
from datetime import datetime
from typing import Any, Dict, List, Optional

from loguru import logger
from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession


class SyncRecordRepository:
    """Repositorio de registros de una tabla sincronizada."""

    def __init__(self, db: AsyncSession, model: Any):
        self.db = db
        self.model = model

    @property
    def entity_name(self) -> str:
        return self.model.__tablename__

    def _newest_first(self, query):
        return query.order_by(self.model.created_at.desc(), self.model.id.desc())

    async def get_by_id(self, record_id: int) -> Optional[Any]:
        result = await self.db.execute(
            select(self.model).where(self.model.id == record_id)
        )
        return result.scalar_one_or_none()

    async def get_by_sheet_id(self, sheet_id: str) -> Optional[Any]:
        result = await self.db.execute(
            select(self.model).where(self.model.sheet_id == sheet_id)
        )
        return result.scalars().first()

    async def get_all(self, skip: int = 0, limit: Optional[int] = None) -> List[Any]:
        query = self._newest_first(select(self.model)).offset(skip)
        if limit is not None:
            query = query.limit(limit)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_unsynced(self) -> List[Any]:
        """Registros pendientes de escribir en la hoja, mas recientes primero."""
        query = self._newest_first(
            select(self.model).where(self.model.synced == False)  # noqa: E712
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def count(self) -> int:
        result = await self.db.execute(select(func.count()).select_from(self.model))
        return int(result.scalar_one())

    async def count_unsynced(self) -> int:
        result = await self.db.execute(
            select(func.count()).select_from(self.model).where(self.model.synced == False)  # noqa: E712
        )
        return int(result.scalar_one())

    async def create(self, values: Dict[str, Any]) -> Any:
        """
        Crea un registro.

        Args:
            values: Columnas del modelo (claves desconocidas se ignoran)

        Returns:
            Instancia persistida (flush, sin commit)
        """
        record = self.model(**self._known_columns(values))
        self.db.add(record)
        await self.db.flush()
        await self.db.refresh(record)
        return record

    async def update(self, record_id: int, values: Dict[str, Any]) -> bool:
        values = self._known_columns(values)
        if not values:
            return False
        result = await self.db.execute(
            update(self.model).where(self.model.id == record_id).values(**values)
        )
        await self.db.flush()
        return result.rowcount > 0

    async def mark_synced(self, record_id: int) -> bool:
        """Marca el registro como reflejado en la hoja y limpia la marca en vuelo."""
        return await self.update(record_id, {"synced": True, "sync_attempted_at": None})

    async def mark_sync_attempt(
        self,
        record_id: int,
        attempted_at: datetime,
        sheet_id: Optional[str] = None,
    ) -> bool:
        """
        Deja la marca de escritura en curso antes de tocar la hoja.

        Args:
            record_id: ID interno
            attempted_at: Momento del intento (UTC)
            sheet_id: ID externo recien generado, se persiste junto con la marca

        Returns:
            False si el registro ya no existe
        """
        values: Dict[str, Any] = {"sync_attempted_at": attempted_at}
        if sheet_id:
            values["sheet_id"] = sheet_id
            logger.debug(f"{self.entity_name}: ID generado para el registro {record_id}: {sheet_id}")
        updated = await self.update(record_id, values)
        if not updated:
            logger.warning(f"{self.entity_name}: registro no encontrado al marcar intento: {record_id}")
        return updated

    async def delete(self, record_id: int) -> bool:
        """Borrado explicito; la sincronizacion nunca borra registros."""
        record = await self.get_by_id(record_id)
        if record is None:
            logger.warning(f"{self.entity_name}: registro no encontrado para eliminar: {record_id}")
            return False
        await self.db.delete(record)
        await self.db.flush()
        logger.info(f"{self.entity_name}: registro eliminado: {record_id}")
        return True

    def _known_columns(self, values: Dict[str, Any]) -> Dict[str, Any]:
        columns = self.model.__table__.columns.keys()
        return {k: v for k, v in values.items() if k in columns and k != "id"}
