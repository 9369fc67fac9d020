"""
Cliente minimo de Google Sheets REST API v4 (sin googleapiclient).

Requisitos cubiertos:
- requests (via google.auth.transport.requests.AuthorizedSession)
- rate-limit/backoff (429, 5xx)
- filas como diccionarios encabezado -> celda, solo con celdas no vacias
- append / update de filas por columna identificadora
"""

from __future__ import annotations

import json
import re
import time
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional
from urllib.parse import quote

import requests
from loguru import logger

from backoffice.shared.exceptions.integration import SheetGatewayException

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]
HEADERS_TTL_S = 3600

_SIMPLE_TITLE_RE = re.compile(r"^[A-Za-z0-9_]+$")


def quote_title(title: str) -> str:
    """Nombre de pestana formateado para notacion A1."""
    normalised = (title or "").strip()
    if _SIMPLE_TITLE_RE.fullmatch(normalised):
        return normalised
    escaped = normalised.replace("'", "''")
    return f"'{escaped}'"


def column_letter(index: int) -> str:
    """Indice 1-based a letra de columna: 1 -> A, 27 -> AA."""
    if index < 1:
        raise ValueError("El indice de columna empieza en 1")
    letters = ""
    while index:
        index, remainder = divmod(index - 1, 26)
        letters = chr(65 + remainder) + letters
    return letters


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def row_to_record(headers: list[str], row: list[Any]) -> dict[str, Any]:
    """
    Convierte una fila cruda en dict encabezado -> celda.

    Las celdas vacias no se incluyen: una fila en blanco produce {}.
    """
    record: dict[str, Any] = {}
    for index, header in enumerate(headers):
        if not header or index >= len(row):
            continue
        value = row[index]
        if _cell_text(value):
            record[header] = value
    return record


@dataclass(frozen=True)
class SheetRow:
    """Fila encontrada en la hoja (row_number es 1-based, incluye el encabezado)."""

    row_number: int
    record: dict[str, Any]


class GoogleSheetsClient:
    """
    Gateway HTTP hacia un spreadsheet.

    Importante:
    - Es sincrono (requests). Los llamadores async deben usar asyncio.to_thread.
    - No hace cast de tipos: eso lo decide el FieldMapper.
    """

    def __init__(
        self,
        spreadsheet_id: str,
        *,
        session: requests.Session,
        base_url: str = "https://sheets.googleapis.com/v4/spreadsheets",
        timeout_s: int = 30,
        max_retries: int = 6,
        min_backoff_s: float = 0.8,
        max_backoff_s: float = 20.0,
        headers_ttl_s: int = HEADERS_TTL_S,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._spreadsheet_id = spreadsheet_id
        self._session = session
        self._base_url = base_url.rstrip("/")
        self._timeout_s = timeout_s
        self._max_retries = max_retries
        self._min_backoff_s = min_backoff_s
        self._max_backoff_s = max_backoff_s
        self._headers_ttl_s = headers_ttl_s
        self._sleep = sleep
        self._clock = clock
        self._headers_cache: dict[str, tuple[float, list[str]]] = {}

    # ------------------------------------------------------------------
    # Lectura
    # ------------------------------------------------------------------

    def get_values(self, sheet_name: str) -> list[list[Any]]:
        """Valores crudos de la pestana completa (primera fila = encabezados)."""
        url = self._values_url(quote_title(sheet_name))
        payload = self._request_json("GET", url, sheet_name=sheet_name)
        values = payload.get("values") or []
        if values:
            self._remember_headers(sheet_name, [_cell_text(h) for h in values[0]])
        return values

    def get_rows(self, sheet_name: str) -> list[dict[str, Any]]:
        values = self.get_values(sheet_name)
        if not values:
            return []
        headers = [_cell_text(h) for h in values[0]]
        return [row_to_record(headers, row) for row in values[1:]]

    def get_headers(self, sheet_name: str) -> list[str]:
        cached = self._headers_cache.get(sheet_name)
        if cached and self._clock() - cached[0] < self._headers_ttl_s:
            return list(cached[1])

        url = self._values_url(f"{quote_title(sheet_name)}!1:1")
        payload = self._request_json("GET", url, sheet_name=sheet_name)
        values = payload.get("values") or [[]]
        headers = [_cell_text(h) for h in values[0]]
        self._remember_headers(sheet_name, headers)
        return headers

    def find_row(self, sheet_name: str, id_column: str, identifier: str) -> Optional[SheetRow]:
        """Primera fila cuyo valor en id_column coincide con identifier."""
        values = self.get_values(sheet_name)
        if not values:
            return None
        headers = [_cell_text(h) for h in values[0]]
        if id_column not in headers:
            return None
        column_index = headers.index(id_column)
        wanted = _cell_text(identifier)

        for offset, row in enumerate(values[1:], start=2):
            if column_index < len(row) and _cell_text(row[column_index]) == wanted:
                return SheetRow(row_number=offset, record=row_to_record(headers, row))
        return None

    # ------------------------------------------------------------------
    # Escritura
    # ------------------------------------------------------------------

    def append_row(self, sheet_name: str, record: Mapping[str, Any]) -> None:
        """
        Agrega una fila al final de la hoja.

        Solo se escriben columnas existentes: nunca se crean encabezados nuevos.
        """
        headers = self.get_headers(sheet_name)
        if not headers:
            raise SheetGatewayException(
                f"La hoja '{sheet_name}' no tiene encabezados", sheet_name=sheet_name
            )
        row = [record.get(header, "") for header in headers]
        url = self._values_url(quote_title(sheet_name)) + ":append"
        self._request_json(
            "POST",
            url,
            sheet_name=sheet_name,
            params={"valueInputOption": "USER_ENTERED", "insertDataOption": "INSERT_ROWS"},
            body={"values": [row]},
        )
        logger.debug(f"Fila agregada en '{sheet_name}'")

    def update_row(
        self,
        sheet_name: str,
        id_column: str,
        identifier: str,
        record: Mapping[str, Any],
    ) -> bool:
        """
        Actualiza la fila identificada por id_column == identifier.

        Los valores actuales de columnas no incluidas en record se conservan.
        Retorna False si la fila no existe.
        """
        values = self.get_values(sheet_name)
        if not values:
            return False
        headers = [_cell_text(h) for h in values[0]]
        if id_column not in headers:
            return False
        column_index = headers.index(id_column)
        wanted = _cell_text(identifier)

        for row_number, row in enumerate(values[1:], start=2):
            if column_index < len(row) and _cell_text(row[column_index]) == wanted:
                merged = list(row) + [""] * (len(headers) - len(row))
                for index, header in enumerate(headers):
                    if header in record:
                        merged[index] = record[header]
                a1 = f"{quote_title(sheet_name)}!A{row_number}:{column_letter(len(headers))}{row_number}"
                self._request_json(
                    "PUT",
                    self._values_url(a1),
                    sheet_name=sheet_name,
                    params={"valueInputOption": "USER_ENTERED"},
                    body={"range": a1, "values": [merged[: len(headers)]]},
                )
                logger.debug(f"Fila {row_number} actualizada en '{sheet_name}'")
                return True
        return False

    # ------------------------------------------------------------------
    # HTTP
    # ------------------------------------------------------------------

    def _values_url(self, a1_range: str) -> str:
        return f"{self._base_url}/{self._spreadsheet_id}/values/{quote(a1_range, safe='')}"

    def _remember_headers(self, sheet_name: str, headers: list[str]) -> None:
        self._headers_cache[sheet_name] = (self._clock(), headers)

    def _request_json(
        self,
        method: str,
        url: str,
        *,
        sheet_name: str,
        params: Optional[dict[str, Any]] = None,
        body: Optional[dict[str, Any]] = None,
    ) -> dict[str, Any]:
        """
        Request HTTP con backoff para 429/5xx y errores de red.

        Estrategia:
        - 429: respeta Retry-After si existe, si no exponencial con jitter simple.
        - 5xx / red: exponencial con jitter.
        - 4xx (no 429): error inmediato (config/permisos mal).
        """
        for attempt in range(self._max_retries + 1):
            try:
                resp = self._session.request(
                    method=method,
                    url=url,
                    params=params,
                    json=body,
                    timeout=self._timeout_s,
                )
            except requests.RequestException as e:
                if attempt >= self._max_retries:
                    raise SheetGatewayException(
                        f"Google Sheets no responde tras {attempt} reintentos: {e}",
                        sheet_name=sheet_name,
                    ) from e
                self._sleep(self._backoff(attempt))
                continue

            if 200 <= resp.status_code < 300:
                return resp.json() if resp.content else {}

            if resp.status_code == 429 or 500 <= resp.status_code < 600:
                if attempt >= self._max_retries:
                    raise SheetGatewayException(
                        f"Google Sheets error {resp.status_code} tras {attempt} reintentos: {resp.text}",
                        sheet_name=sheet_name,
                        status=resp.status_code,
                    )

                retry_after = resp.headers.get("Retry-After")
                if retry_after:
                    try:
                        sleep_s = float(retry_after)
                    except ValueError:
                        sleep_s = self._min_backoff_s
                else:
                    sleep_s = self._backoff(attempt)

                logger.warning(
                    f"Google Sheets {resp.status_code} en '{sheet_name}', reintento {attempt + 1} en {sleep_s:.1f}s"
                )
                self._sleep(sleep_s)
                continue

            raise SheetGatewayException(
                f"Google Sheets request fallo {resp.status_code}: {resp.text}",
                sheet_name=sheet_name,
                status=resp.status_code,
            )

        # Inalcanzable: el loop siempre retorna o lanza
        raise SheetGatewayException("Google Sheets: reintentos agotados", sheet_name=sheet_name)

    def _backoff(self, attempt: int) -> float:
        base = min(self._max_backoff_s, self._min_backoff_s * (2 ** attempt))
        return base + (0.15 * base)


def build_from_settings(settings) -> Optional[GoogleSheetsClient]:
    """
    Construye el cliente desde la configuracion de la app.

    Retorna None si falta el spreadsheet o la cuenta de servicio.
    """
    if not settings.sheets_enabled:
        return None

    from google.auth.transport.requests import AuthorizedSession
    from google.oauth2 import service_account

    if settings.GOOGLE_SERVICE_ACCOUNT_JSON:
        info = json.loads(settings.GOOGLE_SERVICE_ACCOUNT_JSON)
        credentials = service_account.Credentials.from_service_account_info(info, scopes=SCOPES)
    else:
        credentials = service_account.Credentials.from_service_account_file(
            settings.GOOGLE_SERVICE_ACCOUNT_FILE, scopes=SCOPES
        )

    return GoogleSheetsClient(
        settings.GOOGLE_SHEETS_SPREADSHEET_ID,
        session=AuthorizedSession(credentials),
        timeout_s=settings.SHEETS_TIMEOUT_SECONDS,
        max_retries=settings.SHEETS_MAX_RETRIES,
    )
