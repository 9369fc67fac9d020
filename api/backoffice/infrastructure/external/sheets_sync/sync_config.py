"""
Descriptor de sincronizacion de una entidad (hoja <-> tabla Postgres).

Este modulo no realiza I/O: solo define configuracion.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Optional

from .field_mapper import FieldMapper
from .types import FieldMapping

IMPORT_POLICY_SKIP = "skip"
IMPORT_POLICY_UPSERT = "upsert"

SHEET_ID_FIELD = "sheet_id"


def slugify(name: str) -> str:
    """'Credit Application Comments' -> 'credit-application-comments'."""
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")


@dataclass(frozen=True)
class EntitySyncConfig:
    """
    Config de una hoja de Google Sheets -> una tabla Postgres.

    - display_name: nombre usado por el scheduler y en los logs ("Home Visits")
    - sheet_name: pestana del spreadsheet
    - model: clase SQLAlchemy con SheetSyncMixin
    - field_mappings: debe incluir la columna identificadora -> sheet_id
    - id_columns: columnas candidatas para el ID externo, en orden de preferencia
    - import_policy: "skip" (omite existentes) o "upsert" (actualiza existentes)
    - id_prefix: prefijo para IDs generados al crear filas desde la base de datos
    - filter_column: columna opcional para filtrar la importacion (ej. "Loan ID")
    """

    display_name: str
    sheet_name: str
    model: Any
    field_mappings: tuple[FieldMapping, ...]
    id_columns: tuple[str, ...] = ("ID",)
    import_policy: str = IMPORT_POLICY_SKIP
    id_prefix: str = "R"
    filter_column: Optional[str] = None
    slug: str = field(default="")

    def __post_init__(self) -> None:
        if not self.slug:
            object.__setattr__(self, "slug", slugify(self.display_name))
        if self.import_policy not in (IMPORT_POLICY_SKIP, IMPORT_POLICY_UPSERT):
            raise ValueError(f"import_policy invalida: {self.import_policy}")
        if not any(m.field == SHEET_ID_FIELD for m in self.field_mappings):
            raise ValueError(f"{self.display_name}: falta el mapeo de la columna ID -> sheet_id")

    @property
    def mapper(self) -> FieldMapper:
        return FieldMapper(self.field_mappings)

    @property
    def primary_id_column(self) -> str:
        return self.id_columns[0]

    @property
    def upserts(self) -> bool:
        return self.import_policy == IMPORT_POLICY_UPSERT
