"""
Cliente mínimo de Google Sheets API v4 (REST, sin googleapiclient).

Requisitos cubiertos:
- requests (la sesión autenticada es un google.auth AuthorizedSession)
- lecturas sin reintentos por defecto (max_read_retries=0): el error llega al
  orquestador y la proxima pasada vuelve a intentar
- backoff opcional (429, 5xx) solo en lecturas
- escrituras sin reintentos: un fallo se propaga tal cual
"""

from __future__ import annotations

import time
from typing import Any, Callable, Dict, List, Optional, Sequence
from urllib.parse import quote

import requests
from google.auth.exceptions import GoogleAuthError
from loguru import logger

from order_sync.shared.exceptions.sync import DestinationUnavailable

from .a1 import a1_range, column_letter

SHEETS_SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]


class SheetsApiError(DestinationUnavailable):
    """Error de integración con Google Sheets."""


class GoogleSheetsDestination:
    """
    Implementa TabularDestination sobre la API REST de Google Sheets.

    Importante:
    - Las lecturas devuelven valores formateados (strings), como los ve el usuario.
    - value_input_option="USER_ENTERED" deja que Sheets interprete números.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        *,
        session_factory: Optional[Callable[[], requests.Session]] = None,
        base_url: str = "https://sheets.googleapis.com/v4/spreadsheets",
        value_input_option: str = "USER_ENTERED",
        timeout_s: int = 30,
        max_read_retries: int = 0,
        min_backoff_s: float = 0.8,
        max_backoff_s: float = 20.0,
    ) -> None:
        if session is None and session_factory is None:
            raise ValueError("Se requiere session o session_factory")
        self._session = session
        self._session_factory = session_factory
        self._base_url = base_url.rstrip("/")
        self._value_input_option = value_input_option
        self._timeout_s = timeout_s
        self._max_read_retries = max_read_retries
        self._min_backoff_s = min_backoff_s
        self._max_backoff_s = max_backoff_s

    # ------------------------------------------------------------------
    # TabularDestination
    # ------------------------------------------------------------------

    def list_sheets(self, spreadsheet_id: str) -> List[str]:
        payload = self._request(
            "GET",
            f"{self._base_url}/{spreadsheet_id}",
            params={"fields": "sheets.properties.title"},
        )
        return [
            str((sheet.get("properties") or {}).get("title"))
            for sheet in payload.get("sheets") or []
            if (sheet.get("properties") or {}).get("title") is not None
        ]

    def add_sheet(self, spreadsheet_id: str, sheet_name: str) -> None:
        self._request(
            "POST",
            f"{self._base_url}/{spreadsheet_id}:batchUpdate",
            json={"requests": [{"addSheet": {"properties": {"title": sheet_name}}}]},
        )

    def read_rows(
        self, spreadsheet_id: str, sheet_name: str, *, first_row: int, last_row: int
    ) -> List[List[Any]]:
        payload = self._request(
            "GET", self._values_url(spreadsheet_id, a1_range(sheet_name, f"{first_row}:{last_row}"))
        )
        return payload.get("values") or []

    def read_column(
        self, spreadsheet_id: str, sheet_name: str, column_index: int, *, first_row: int = 2
    ) -> List[Any]:
        letter = column_letter(column_index)
        payload = self._request(
            "GET",
            self._values_url(spreadsheet_id, a1_range(sheet_name, f"{letter}{first_row}:{letter}")),
        )
        # Filas vacías llegan como [] y se omiten.
        return [row[0] for row in payload.get("values") or [] if row]

    def clear(self, spreadsheet_id: str, sheet_name: str) -> None:
        self._request("POST", self._values_url(spreadsheet_id, a1_range(sheet_name)) + ":clear", json={})

    def write_rows(self, spreadsheet_id: str, sheet_name: str, values: Sequence[Sequence[Any]]) -> int:
        target = a1_range(sheet_name, "A1")
        payload = self._request(
            "PUT",
            self._values_url(spreadsheet_id, target),
            params={"valueInputOption": self._value_input_option},
            json={"range": target, "majorDimension": "ROWS", "values": [list(v) for v in values]},
        )
        return int(payload.get("updatedRows") or 0)

    def append_rows(self, spreadsheet_id: str, sheet_name: str, values: Sequence[Sequence[Any]]) -> int:
        target = a1_range(sheet_name)
        payload = self._request(
            "POST",
            self._values_url(spreadsheet_id, target) + ":append",
            params={
                "valueInputOption": self._value_input_option,
                "insertDataOption": "INSERT_ROWS",
            },
            json={"range": target, "majorDimension": "ROWS", "values": [list(v) for v in values]},
        )
        return int((payload.get("updates") or {}).get("updatedRows") or 0)

    # ------------------------------------------------------------------
    # HTTP
    # ------------------------------------------------------------------

    def _values_url(self, spreadsheet_id: str, range_a1: str) -> str:
        return f"{self._base_url}/{spreadsheet_id}/values/{quote(range_a1, safe='')}"

    def _request(
        self,
        method: str,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Request HTTP. Solo GET puede reintentarse (429/5xx/red, hasta
        max_read_retries); las escrituras fallan al primer error.
        """
        retries = self._max_read_retries if method == "GET" else 0

        for attempt in range(retries + 1):
            try:
                resp = self._get_session().request(
                    method=method,
                    url=url,
                    params=params,
                    json=json,
                    timeout=self._timeout_s,
                )
            except GoogleAuthError as e:
                raise SheetsApiError(f"Google Sheets rechazó las credenciales: {e}") from e
            except requests.RequestException as e:
                if attempt >= retries:
                    raise SheetsApiError(f"Google Sheets no respondió ({method}): {e}") from e
                time.sleep(self._backoff(attempt))
                continue

            if 200 <= resp.status_code < 300:
                if not resp.content:
                    return {}
                try:
                    return resp.json()
                except ValueError as e:
                    raise SheetsApiError(f"Google Sheets devolvió un cuerpo no-JSON ({resp.status_code})") from e

            if (resp.status_code == 429 or 500 <= resp.status_code < 600) and attempt < retries:
                sleep_s = self._backoff(attempt)
                logger.debug(f"Google Sheets {resp.status_code}, reintentando en {sleep_s:.1f}s")
                time.sleep(sleep_s)
                continue

            raise SheetsApiError(
                f"Google Sheets request falló {resp.status_code}: {resp.text[:500]}",
                status=resp.status_code,
            )

        raise SheetsApiError("Google Sheets request agotó los reintentos")

    def _get_session(self) -> requests.Session:
        # Sesion creada en el primer request.
        if self._session is None:
            self._session = self._session_factory()
        return self._session

    def _backoff(self, attempt: int) -> float:
        base = min(self._max_backoff_s, self._min_backoff_s * (2**attempt))
        return base + (0.15 * base)
