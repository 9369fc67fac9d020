"""
Tipos y utilidades puras para el pipeline Google Sheets <-> Postgres.

Se mantienen libres de I/O para poder testearlos facilmente.
"""

from __future__ import annotations

import math
import re
import secrets
import time
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Callable, Optional

Transform = Callable[[Any], Any]

_YES_VALUES = {"yes", "y", "true", "1"}
_NO_VALUES = {"no", "n", "false", "0"}
_NUMBER_PATTERN = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")


def utc_now() -> datetime:
    """Retorna la hora actual en UTC, como datetime aware."""
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime) -> datetime:
    """
    Normaliza datetime a UTC (aware).

    SQLite devuelve datetimes naive aunque la columna sea timezone=True;
    se asumen UTC.
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def is_blank(value: Any) -> bool:
    """Celda vacia: None o string compuesto solo por espacios."""
    return value is None or (isinstance(value, str) and not value.strip())


def generate_sheet_id(prefix: str, *, now_ms: Optional[int] = None, suffix: Optional[str] = None) -> str:
    """
    Genera un ID externo para registros creados en la base de datos.

    Formato: <PREFIX>-<epoch ms>-<4 hex>, ej. "HV-1718000000000-a3f9".
    """
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    if suffix is None:
        suffix = secrets.token_hex(2)
    return f"{prefix}-{now_ms}-{suffix}"


# ---------------------------------------------------------------------------
# Coerciones hoja <-> interno
# ---------------------------------------------------------------------------

def text_to_internal(value: Any) -> Optional[str]:
    if is_blank(value):
        return None
    return str(value).strip()


def text_to_external(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def yes_no_to_internal(value: Any) -> Optional[str]:
    """Yes/Y/True/1 -> "Y", No/N/False/0 -> "N". Otros textos se conservan."""
    if is_blank(value):
        return None
    if isinstance(value, bool):
        return "Y" if value else "N"
    text = str(value).strip()
    lowered = text.lower()
    if lowered in _YES_VALUES:
        return "Y"
    if lowered in _NO_VALUES:
        return "N"
    return text


def yes_no_to_external(value: Any) -> str:
    if value is None:
        return ""
    if value == "Y":
        return "Yes"
    if value == "N":
        return "No"
    return str(value)


def number_to_internal(value: Any) -> Optional[float]:
    """
    Convierte una celda numerica a float.

    Acepta separadores de miles, prefijos de moneda ("KES 1,500.50") y
    notacion exponencial ("1.50E+03"). Un valor no parseable se guarda como None.
    """
    if is_blank(value) or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    match = _NUMBER_PATTERN.search(str(value).replace(",", ""))
    if match is None:
        return None
    number = float(match.group())
    if not math.isfinite(number):
        return None
    return number


def number_to_external(value: Any) -> str:
    """Sin notacion exponencial: 0.00005 -> "0.00005", 1500.0 -> "1500"."""
    if value is None:
        return ""
    number = float(value)
    if not math.isfinite(number):
        return ""
    if number.is_integer():
        return str(int(number))
    text = repr(number)
    if "e" in text:
        text = format(Decimal(text), "f")
    return text


def integer_to_internal(value: Any) -> Optional[int]:
    number = number_to_internal(value)
    if number is None:
        return None
    return int(number)


def integer_to_external(value: Any) -> str:
    if value is None:
        return ""
    return str(int(value))


@dataclass(frozen=True)
class Coercion:
    """Par de transformaciones (hoja -> interno, interno -> hoja)."""

    name: str
    to_internal: Transform
    to_external: Transform


TEXT = Coercion("text", text_to_internal, text_to_external)
YES_NO = Coercion("yes_no", yes_no_to_internal, yes_no_to_external)
NUMBER = Coercion("number", number_to_internal, number_to_external)
INTEGER = Coercion("integer", integer_to_internal, integer_to_external)


@dataclass(frozen=True)
class FieldMapping:
    """
    Define el mapeo de una columna de la hoja a una columna Postgres.

    - sheet_column: encabezado exacto en la hoja (incluye espacios finales si los tiene)
    - field: nombre del atributo en el modelo SQLAlchemy
    - coercion: transformaciones en ambos sentidos
    """

    sheet_column: str
    field: str
    coercion: Coercion = TEXT


# ---------------------------------------------------------------------------
# Resultados (efimeros: se devuelven y se loguean, no se persisten)
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RecordIssue:
    """Registro omitido o con error, con su motivo."""

    reason: str
    sheet_id: Optional[str] = None
    record_id: Optional[int] = None


@dataclass
class ImportResult:
    imported: int = 0
    updated: int = 0
    skipped: int = 0
    errors: int = 0
    total_rows: int = 0
    skipped_details: list[RecordIssue] = field(default_factory=list)
    error_details: list[RecordIssue] = field(default_factory=list)

    def skip(self, reason: str, sheet_id: Optional[str] = None) -> None:
        self.skipped += 1
        self.skipped_details.append(RecordIssue(reason=reason, sheet_id=sheet_id))

    def fail(self, reason: str, sheet_id: Optional[str] = None) -> None:
        self.errors += 1
        self.error_details.append(RecordIssue(reason=reason, sheet_id=sheet_id))

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ImportResult":
        return cls(
            imported=int(data.get("imported") or 0),
            updated=int(data.get("updated") or 0),
            skipped=int(data.get("skipped") or 0),
            errors=int(data.get("errors") or 0),
            total_rows=int(data.get("total_rows") or 0),
        )


@dataclass
class SyncToSheetsResult:
    success_count: int = 0
    created_count: int = 0
    updated_count: int = 0
    skipped_count: int = 0
    error_count: int = 0
    total_records: int = 0
    skipped_details: list[RecordIssue] = field(default_factory=list)
    error_details: list[RecordIssue] = field(default_factory=list)

    def skip(self, reason: str, record_id: Optional[int] = None, sheet_id: Optional[str] = None) -> None:
        self.skipped_count += 1
        self.skipped_details.append(RecordIssue(reason=reason, sheet_id=sheet_id, record_id=record_id))

    def fail(self, reason: str, record_id: Optional[int] = None, sheet_id: Optional[str] = None) -> None:
        self.error_count += 1
        self.error_details.append(RecordIssue(reason=reason, sheet_id=sheet_id, record_id=record_id))

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SyncToSheetsResult":
        return cls(
            success_count=int(data.get("success_count") or 0),
            created_count=int(data.get("created_count") or 0),
            updated_count=int(data.get("updated_count") or 0),
            skipped_count=int(data.get("skipped_count") or 0),
            error_count=int(data.get("error_count") or 0),
            total_records=int(data.get("total_records") or 0),
        )


@dataclass
class FullMigrationResult:
    """Importacion seguida de sincronizacion; un fallo de una fase no cancela la otra."""

    import_result: Optional[ImportResult] = None
    sync_result: Optional[SyncToSheetsResult] = None
    import_error: Optional[str] = None
    sync_error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.import_error is None and self.sync_error is None

    @property
    def error(self) -> Optional[str]:
        errors = [e for e in (self.import_error, self.sync_error) if e]
        return "; ".join(errors) or None

    def to_dict(self) -> dict[str, Any]:
        return {
            "import": self.import_result.to_dict() if self.import_result else None,
            "sync": self.sync_result.to_dict() if self.sync_result else None,
            "import_error": self.import_error,
            "sync_error": self.sync_error,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FullMigrationResult":
        """Reconstruye el resultado desde el JSON del endpoint full-migration."""
        import_data = data.get("import")
        sync_data = data.get("sync")
        return cls(
            import_result=ImportResult.from_dict(import_data) if import_data else None,
            sync_result=SyncToSheetsResult.from_dict(sync_data) if sync_data else None,
            import_error=data.get("import_error"),
            sync_error=data.get("sync_error"),
        )


@dataclass(frozen=True)
class MigrationStatus:
    total_in_database: int
    total_in_sheets: int
    synced_in_database: int
    unsynced_in_database: int

    @property
    def sync_status(self) -> str:
        if self.total_in_database == self.total_in_sheets and self.unsynced_in_database == 0:
            return "Synced"
        return "Out of sync"

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["sync_status"] = self.sync_status
        return data
