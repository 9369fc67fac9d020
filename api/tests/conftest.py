"""
Configuracion de fixtures para pytest.
"""
import threading
from typing import Any, AsyncGenerator, Dict, List, Optional

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from backoffice.infrastructure.database.session import Base
from backoffice.infrastructure.external.sheets_sync.sheets_client import SheetRow
from backoffice.shared.exceptions.integration import SheetGatewayException


# URL de base de datos de prueba
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture(scope="function")
async def db_engine():
    """Engine en memoria con todas las tablas creadas."""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=StaticPool)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory ligada al engine de prueba (misma config que AsyncSessionLocal)."""
    return async_sessionmaker(
        db_engine, class_=AsyncSession, expire_on_commit=False
    )


@pytest_asyncio.fixture(scope="function")
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """
    Fixture que proporciona una sesion de base de datos para tests.
    Crea una base de datos en memoria para cada test.
    """
    async with session_factory() as session:
        yield session


class FakeSheetsGateway:
    """
    Spreadsheet en memoria con la misma interfaz que GoogleSheetsClient.

    - sheets: {nombre_hoja: [fila_dict, ...]}
    - fail_ids: IDs cuya escritura (append/update) falla
    - fail_reads: si True, get_rows falla
    - fail_finds: IDs cuya busqueda (find_row) falla antes de escribir
    """

    def __init__(self, sheets: Optional[Dict[str, List[Dict[str, Any]]]] = None):
        self.sheets: Dict[str, List[Dict[str, Any]]] = {
            name: [dict(row) for row in rows] for name, rows in (sheets or {}).items()
        }
        self.fail_ids: set = set()
        self.fail_reads = False
        self.fail_finds: set = set()
        self.calls: List[tuple] = []
        self._lock = threading.Lock()

    def _record(self, *call) -> None:
        with self._lock:
            self.calls.append(call)

    def calls_named(self, name: str) -> List[tuple]:
        return [c for c in self.calls if c[0] == name]

    def get_rows(self, sheet_name: str) -> List[Dict[str, Any]]:
        self._record("get_rows", sheet_name)
        if self.fail_reads:
            raise SheetGatewayException("Google Sheets no responde", sheet_name=sheet_name)
        return [dict(row) for row in self.sheets.get(sheet_name, [])]

    def get_headers(self, sheet_name: str) -> List[str]:
        self._record("get_headers", sheet_name)
        headers: List[str] = []
        for row in self.sheets.get(sheet_name, []):
            for column in row:
                if column not in headers:
                    headers.append(column)
        return headers

    def find_row(self, sheet_name: str, id_column: str, identifier: str) -> Optional[SheetRow]:
        self._record("find_row", sheet_name, identifier)
        if identifier in self.fail_finds:
            raise SheetGatewayException(f"busqueda fallo para {identifier}", sheet_name=sheet_name)
        for row_number, row in enumerate(self.sheets.get(sheet_name, []), start=2):
            if str(row.get(id_column, "")).strip() == identifier:
                return SheetRow(row_number=row_number, record=dict(row))
        return None

    def append_row(self, sheet_name: str, record: Dict[str, Any]) -> None:
        self._record("append_row", sheet_name, record.get("ID"))
        if record.get("ID") in self.fail_ids:
            raise SheetGatewayException(f"append fallo para {record.get('ID')}", sheet_name=sheet_name)
        row = {k: v for k, v in record.items() if v != ""}
        self.sheets.setdefault(sheet_name, []).append(row)

    def update_row(self, sheet_name: str, id_column: str, identifier: str, record: Dict[str, Any]) -> bool:
        self._record("update_row", sheet_name, identifier)
        if identifier in self.fail_ids:
            raise SheetGatewayException(f"update fallo para {identifier}", sheet_name=sheet_name)
        for row in self.sheets.get(sheet_name, []):
            if str(row.get(id_column, "")).strip() == identifier:
                row.update({k: v for k, v in record.items() if v != ""})
                return True
        return False


@pytest.fixture
def fake_gateway() -> FakeSheetsGateway:
    """Spreadsheet en memoria vacio."""
    return FakeSheetsGateway()
