"""
Orquestador de migraciones programadas.

Ejecuta la migracion completa (importar + sincronizar) de cada entidad
registrada, en orden y de forma secuencial, con una pausa fija entre
entidades. Un fallo en una entidad se registra y la corrida continua.

El disparo por reloj vive solo en create_scheduler() (APScheduler);
el resto recibe reloj y sleep inyectados para poder testearse.
"""
from __future__ import annotations

import asyncio
import time
from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional, Protocol, Union

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger
from loguru import logger

from backoffice.infrastructure.external.sheets_sync.registry import REGISTRY, MigrationEntity, available_names
from backoffice.infrastructure.external.sheets_sync.sync_config import EntitySyncConfig
from backoffice.infrastructure.external.sheets_sync.types import FullMigrationResult, utc_now
from backoffice.shared.exceptions.domain import MigrationInProgressException, MigrationNotFoundException

JOB_ID = "hourly-migrations"


class MigrationRunner(Protocol):
    """Transporte que ejecuta la migracion completa de una entidad."""

    async def run(self, config: EntitySyncConfig) -> FullMigrationResult:
        ...


@dataclass
class EntityRunResult:
    """Resultado de la migracion de una entidad dentro de una corrida."""

    name: str
    success: bool
    imported: int = 0
    updated: int = 0
    skipped: int = 0
    errors: int = 0
    synced: int = 0
    error: Optional[str] = None
    duration_ms: int = 0

    @classmethod
    def from_migration(cls, name: str, result: FullMigrationResult, duration_ms: int) -> "EntityRunResult":
        imported = result.import_result
        synced = result.sync_result
        return cls(
            name=name,
            success=result.success,
            imported=imported.imported if imported else 0,
            updated=imported.updated if imported else 0,
            skipped=imported.skipped if imported else 0,
            errors=(imported.errors if imported else 0) + (synced.error_count if synced else 0),
            synced=synced.success_count if synced else 0,
            error=result.error,
            duration_ms=duration_ms,
        )

    @classmethod
    def failed(cls, name: str, error: str, duration_ms: int) -> "EntityRunResult":
        return cls(name=name, success=False, error=error, duration_ms=duration_ms)


@dataclass
class RunSummary:
    """Resumen agregado de una corrida de migraciones."""

    success: bool
    total_migrations: int
    successful: int
    failed: int
    total_imported: int
    total_errors: int
    duration_ms: int
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    results: List[EntityRunResult] = field(default_factory=list)

    @classmethod
    def build(
        cls,
        results: List[EntityRunResult],
        duration_ms: int,
        started_at: Optional[datetime] = None,
        finished_at: Optional[datetime] = None,
    ) -> "RunSummary":
        failed = len([r for r in results if not r.success])
        return cls(
            success=failed == 0,
            total_migrations=len(results),
            successful=len(results) - failed,
            failed=failed,
            total_imported=sum(r.imported for r in results),
            total_errors=sum(r.errors for r in results),
            duration_ms=duration_ms,
            started_at=started_at,
            finished_at=finished_at,
            results=results,
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class MigrationScheduler:
    """
    Ejecuta las migraciones registradas.

    Uso:
        scheduler = MigrationScheduler(InProcessMigrationRunner(...))
        summary = await scheduler.run_all()
        result = await scheduler.run_one("Home Visits")
    """

    def __init__(
        self,
        runner: MigrationRunner,
        registry: Iterable[EntitySyncConfig] = REGISTRY,
        *,
        delay_seconds: float = 1.0,
        cron: str = "0 * * * *",
        timezone: str = "Africa/Nairobi",
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
        wall_clock: Callable[[], datetime] = utc_now,
    ):
        self._runner = runner
        self._registry = tuple(registry)
        self._delay_seconds = delay_seconds
        self._cron = cron
        self._timezone = timezone
        self._trigger = CronTrigger.from_crontab(cron, timezone=timezone)
        self._sleep = sleep
        self._clock = clock
        self._wall_clock = wall_clock
        self._running = False
        self._run_started_at: Optional[datetime] = None
        self.last_summary: Optional[RunSummary] = None

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def migration_names(self) -> List[str]:
        return available_names(self._registry)

    async def run_all(self) -> RunSummary:
        """
        Ejecuta todas las migraciones en orden.

        Raises:
            MigrationInProgressException: si ya hay una corrida en curso
        """
        self._acquire()
        started_at = self._run_started_at
        start = self._clock()
        logger.info(f"Iniciando corrida de {len(self._registry)} migraciones")
        try:
            results: List[EntityRunResult] = []
            for index, config in enumerate(self._registry):
                if index:
                    await self._sleep(self._delay_seconds)
                results.append(await self._run_entity(config))

            summary = RunSummary.build(
                results,
                self._elapsed_ms(start),
                started_at=started_at,
                finished_at=self._wall_clock(),
            )
            self.last_summary = summary
        finally:
            self._release()

        if summary.success:
            logger.success(
                f"Corrida completa: {summary.successful}/{summary.total_migrations} migraciones OK, "
                f"{summary.total_imported} importados en {summary.duration_ms} ms"
            )
        else:
            logger.warning(
                f"Corrida con fallos: {summary.failed}/{summary.total_migrations} migraciones fallaron "
                f"({summary.total_errors} errores de registro)"
            )
        return summary

    async def run_one(self, entity: Union[MigrationEntity, str]) -> EntityRunResult:
        """
        Ejecuta la migracion de una sola entidad.

        Args:
            entity: MigrationEntity, o nombre / slug en texto libre

        Raises:
            MigrationNotFoundException: si la entidad no esta registrada en este scheduler
            MigrationInProgressException: si ya hay una corrida en curso
        """
        if not isinstance(entity, MigrationEntity):
            entity = MigrationEntity.parse(entity)
        config = self._config_for(entity)
        self._acquire()
        try:
            return await self._run_entity(config)
        finally:
            self._release()

    def _config_for(self, entity: MigrationEntity) -> EntitySyncConfig:
        for config in self._registry:
            if config.slug == entity.value:
                return config
        raise MigrationNotFoundException(entity.display_name, self.migration_names)

    async def run_scheduled(self) -> Optional[RunSummary]:
        """Disparo del cron: si la corrida anterior sigue activa, se omite."""
        if self._running:
            logger.warning(
                f"Corrida programada omitida: la anterior sigue en curso desde {self._run_started_at}"
            )
            return None
        return await self.run_all()

    def next_run_time(self) -> Optional[datetime]:
        now = datetime.now(self._trigger.timezone)
        return self._trigger.get_next_fire_time(None, now)

    def status(self) -> Dict[str, Any]:
        return {
            "frequency": "hourly" if self._cron == "0 * * * *" else self._cron,
            "cron_expression": self._cron,
            "time_zone": self._timezone,
            "next_run": self.next_run_time(),
            "running": self._running,
            "run_started_at": self._run_started_at,
            "last_run": self.last_summary.to_dict() if self.last_summary else None,
            "available_migrations": self.migration_names,
        }

    def create_scheduler(self) -> AsyncIOScheduler:
        """Scheduler de APScheduler con el job horario registrado (sin iniciar)."""
        scheduler = AsyncIOScheduler(timezone=self._timezone)
        scheduler.add_job(
            self.run_scheduled,
            trigger=self._trigger,
            id=JOB_ID,
            name="Migraciones Google Sheets <-> Postgres",
            max_instances=1,
            coalesce=True,
            replace_existing=True,
        )
        return scheduler

    async def _run_entity(self, config: EntitySyncConfig) -> EntityRunResult:
        name = config.display_name
        start = self._clock()
        logger.info(f"Migrando {name}...")
        try:
            result = await self._runner.run(config)
        except Exception as e:
            duration = self._elapsed_ms(start)
            logger.error(f"Migracion {name} fallo tras {duration} ms: {e}")
            return EntityRunResult.failed(name, str(e), duration)

        entity_result = EntityRunResult.from_migration(name, result, self._elapsed_ms(start))
        logger.info(
            f"Migracion {name}: {entity_result.imported} importados, {entity_result.synced} sincronizados, "
            f"{entity_result.errors} errores ({entity_result.duration_ms} ms)"
        )
        return entity_result

    def _acquire(self) -> None:
        if self._running:
            started = self._run_started_at.isoformat() if self._run_started_at else None
            raise MigrationInProgressException(started)
        self._running = True
        self._run_started_at = self._wall_clock()

    def _release(self) -> None:
        self._running = False
        self._run_started_at = None

    def _elapsed_ms(self, start: float) -> int:
        return int((self._clock() - start) * 1000)
