"""
CLI: migraciones Google Sheets <-> Postgres fuera del API.

Uso recomendado:
  - Cargas iniciales o reintentos manuales sin levantar el servidor.
  - El cron horario normal corre dentro del API (APScheduler).

Variables de entorno requeridas:
  - GOOGLE_SHEETS_SPREADSHEET_ID
  - GOOGLE_SERVICE_ACCOUNT_FILE o GOOGLE_SERVICE_ACCOUNT_JSON
  - DATABASE_URL (o DATABASE_HOST/PORT/USER/PASSWORD/NAME)

Ejecucion:
  python scripts/run_migrations.py                 # todas, en orden
  python scripts/run_migrations.py --name "Home Visits"
  python scripts/run_migrations.py --list
  python scripts/run_migrations.py --delay 0
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from loguru import logger
from dotenv import load_dotenv

# Permite ejecutar este script desde cualquier cwd sin configurar PYTHONPATH.
# La carpeta "api" contiene el paquete raiz `backoffice/`.
_API_ROOT = Path(__file__).resolve().parents[1]
if str(_API_ROOT) not in sys.path:
    sys.path.insert(0, str(_API_ROOT))

load_dotenv(_API_ROOT / ".env", override=False)
load_dotenv(_API_ROOT.parent / ".env", override=False)

from backoffice.core.config import settings
from backoffice.application.services.migration_runners import InProcessMigrationRunner
from backoffice.application.services.migration_scheduler import MigrationScheduler
from backoffice.infrastructure.database.session import AsyncSessionLocal, close_db, init_db
from backoffice.infrastructure.external.sheets_sync.registry import available_names
from backoffice.infrastructure.external.sheets_sync.sheets_client import build_from_settings
from backoffice.shared.exceptions.base import AppException


async def _run(args: argparse.Namespace) -> int:
    gateway = build_from_settings(settings)
    if gateway is None:
        logger.error("Google Sheets no configurado: revisa GOOGLE_SHEETS_SPREADSHEET_ID y la cuenta de servicio")
        return 2

    await init_db()
    scheduler = MigrationScheduler(
        InProcessMigrationRunner(AsyncSessionLocal, lambda: gateway),
        delay_seconds=args.delay,
        cron=settings.MIGRATION_CRON,
        timezone=settings.MIGRATION_TIMEZONE,
    )

    try:
        if args.name:
            result = await scheduler.run_one(args.name)
            logger.info(
                f"{result.name}: success={result.success} imported={result.imported} "
                f"updated={result.updated} skipped={result.skipped} synced={result.synced} "
                f"errors={result.errors}"
            )
            return 0 if result.success else 1

        summary = await scheduler.run_all()
        for result in summary.results:
            status = "OK " if result.success else "ERR"
            logger.info(
                f"[{status}] {result.name:<30} imported={result.imported:<5} synced={result.synced:<5} "
                f"errors={result.errors:<4} {result.duration_ms} ms"
                + (f" - {result.error}" if result.error else "")
            )
        return 0 if summary.success else 1
    except AppException as e:
        logger.error(e.message)
        return 2
    finally:
        await close_db()


def main() -> int:
    parser = argparse.ArgumentParser(description="Migraciones Google Sheets <-> Postgres")
    parser.add_argument("--name", help="Ejecuta solo esta migracion (nombre o slug).")
    parser.add_argument("--list", action="store_true", help="Lista las migraciones registradas, en orden.")
    parser.add_argument(
        "--delay",
        type=float,
        default=settings.MIGRATION_ENTITY_DELAY_SECONDS,
        help="Segundos de pausa entre entidades.",
    )
    args = parser.parse_args()

    if args.list:
        for index, name in enumerate(available_names(), start=1):
            print(f"{index:>2}. {name}")
        return 0

    return asyncio.run(_run(args))


if __name__ == "__main__":
    raise SystemExit(main())
