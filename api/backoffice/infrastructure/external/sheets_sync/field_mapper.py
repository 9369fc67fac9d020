"""
Traduccion fila de hoja <-> registro interno para una entidad.

Solo se copian las claves presentes tanto en el origen como en el mapeo;
las claves desconocidas se ignoran en ambos sentidos.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from .types import FieldMapping


class FieldMapper:
    """Diccionario bidireccional columna de hoja <-> atributo del modelo."""

    def __init__(self, mappings: Iterable[FieldMapping]) -> None:
        self._mappings = tuple(mappings)
        self._by_column = {m.sheet_column: m for m in self._mappings}
        self._by_field = {m.field: m for m in self._mappings}

    @property
    def mappings(self) -> tuple[FieldMapping, ...]:
        return self._mappings

    @property
    def sheet_columns(self) -> list[str]:
        return [m.sheet_column for m in self._mappings]

    @property
    def fields(self) -> list[str]:
        return [m.field for m in self._mappings]

    def to_internal(self, external: Mapping[str, Any]) -> dict[str, Any]:
        internal: dict[str, Any] = {}
        for column, raw in external.items():
            mapping = self._by_column.get(column)
            if mapping is None:
                continue
            internal[mapping.field] = mapping.coercion.to_internal(raw)
        return internal

    def to_external(self, internal: Mapping[str, Any]) -> dict[str, Any]:
        external: dict[str, Any] = {}
        for name, value in internal.items():
            mapping = self._by_field.get(name)
            if mapping is None:
                continue
            external[mapping.sheet_column] = mapping.coercion.to_external(value)
        return external
