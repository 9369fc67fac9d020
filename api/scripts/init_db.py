"""
Script para inicializar la base de datos (crea las tablas sincronizadas).
"""
import asyncio
import sys
from pathlib import Path

from loguru import logger

_API_ROOT = Path(__file__).resolve().parents[1]
if str(_API_ROOT) not in sys.path:
    sys.path.insert(0, str(_API_ROOT))

from backoffice.infrastructure.database.session import close_db, init_db
from backoffice.infrastructure.external.sheets_sync.registry import REGISTRY


async def main():
    """Funcion principal para inicializar la base de datos."""
    logger.info("Inicializando base de datos...")

    try:
        await init_db()
        for config in REGISTRY:
            logger.info(f"  {config.model.__tablename__:<30} <- hoja '{config.sheet_name}'")
        logger.success("Base de datos inicializada correctamente")
    except Exception as e:
        logger.error(f"Error al inicializar base de datos: {e}")
        raise
    finally:
        await close_db()


if __name__ == "__main__":
    asyncio.run(main())
