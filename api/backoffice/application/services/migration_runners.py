"""
Transportes para ejecutar la migracion completa de una entidad.

- InProcessMigrationRunner: llama al motor directamente con su propia sesion.
- HttpMigrationRunner: hace POST al endpoint full-migration de la API.
"""
from typing import Any, Callable, Optional

import httpx
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.application.use_cases.migration_use_cases import MigrationUseCases
from backoffice.infrastructure.external.sheets_sync.sync_config import EntitySyncConfig
from backoffice.infrastructure.external.sheets_sync.types import FullMigrationResult


class MigrationRunError(RuntimeError):
    """La migracion remota no devolvio un resultado utilizable."""


class InProcessMigrationRunner:
    """Ejecuta la migracion en el mismo proceso, una sesion por entidad."""

    def __init__(self, session_factory: Callable[[], AsyncSession], gateway_provider: Callable[[], Any]):
        self._session_factory = session_factory
        self._gateway_provider = gateway_provider

    async def run(self, config: EntitySyncConfig) -> FullMigrationResult:
        async with self._session_factory() as session:
            use_cases = MigrationUseCases(session, config, self._gateway_provider())
            return await use_cases.full_migration()


class HttpMigrationRunner:
    """
    Ejecuta la migracion via HTTP contra la propia API.

    Permite separar el proceso del scheduler del proceso que atiende requests.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout_s: float = 300.0,
        verify: bool = False,
        client_factory: Optional[Callable[[], httpx.AsyncClient]] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout_s = timeout_s
        self._verify = verify
        self._client_factory = client_factory

    def endpoint_for(self, config: EntitySyncConfig) -> str:
        return f"{self._base_url}/api/v1/{config.slug}-migration/full-migration"

    async def run(self, config: EntitySyncConfig) -> FullMigrationResult:
        url = self.endpoint_for(config)
        logger.debug(f"POST {url}")

        client = self._client_factory() if self._client_factory else httpx.AsyncClient(
            timeout=self._timeout_s, verify=self._verify
        )
        async with client:
            response = await client.post(url)

        try:
            payload = response.json()
        except ValueError as e:
            raise MigrationRunError(
                f"Respuesta no JSON de {url} (HTTP {response.status_code})"
            ) from e

        data = payload.get("data") if isinstance(payload, dict) else None
        if not data:
            message = payload.get("message") if isinstance(payload, dict) else None
            raise MigrationRunError(message or f"HTTP {response.status_code} sin datos de migracion")
        return FullMigrationResult.from_dict(data)
