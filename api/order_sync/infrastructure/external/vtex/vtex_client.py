"""
Cliente mínimo de la API de OMS de VTEX (sin SDKs externos).

Requisitos cubiertos:
- requests
- autenticación por AppKey/AppToken en headers
- rate-limit/backoff (429, 5xx) solo para lecturas
- listado paginado + detalle por pedido
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import requests
from loguru import logger

from order_sync.shared.exceptions.sync import UpstreamUnavailable


@dataclass(frozen=True)
class VtexCredentials:
    account_name: str
    app_key: str
    app_token: str


class VtexApiError(UpstreamUnavailable):
    """Error de integración con VTEX."""


def build_orders_base_url(account_name: str) -> str:
    """
    URL base del OMS para una cuenta VTEX.
    """
    account = (account_name or "").strip()
    if not account:
        raise VtexApiError("Falta el nombre de cuenta VTEX.")
    return f"https://{account}.vtexcommercestable.com.br/api/oms/pvt/orders"


class VtexClient:
    """
    Cliente HTTP de VTEX OMS para una cuenta.

    Importante:
    - No transforma los pedidos: eso lo decide el normalizador.
    - Errores 4xx (no 429) fallan de inmediato (credenciales/config mal).
    """

    def __init__(
        self,
        credentials: VtexCredentials,
        *,
        session: Optional[requests.Session] = None,
        timeout_s: int = 30,
        max_retries: int = 4,
        min_backoff_s: float = 0.8,
        max_backoff_s: float = 20.0,
    ) -> None:
        self._creds = credentials
        self._base_url = build_orders_base_url(credentials.account_name)
        self._timeout_s = timeout_s
        self._max_retries = max_retries
        self._min_backoff_s = min_backoff_s
        self._max_backoff_s = max_backoff_s
        self._owns_session = session is None
        self._session = session or requests.Session()

    def close(self) -> None:
        """Cierra la sesion HTTP si la creo este cliente."""
        if self._owns_session:
            self._session.close()

    def list_orders(
        self,
        *,
        page: int = 1,
        per_page: int = 50,
        status: Optional[str] = "invoiced",
    ) -> Dict[str, Any]:
        """
        Una página del listado de pedidos, ordenado por creationDate desc.

        Retorna el payload completo ({"list": [...], "paging": {...}}).
        """
        params: Dict[str, Any] = {
            "orderBy": "creationDate,desc",
            "page": page,
            "per_page": per_page,
        }
        if status:
            params["f_status"] = status
        payload = self._request_json("GET", self._base_url, params=params)
        return payload if isinstance(payload, dict) else {}

    def get_order(self, order_id: str) -> Dict[str, Any]:
        """Detalle completo de un pedido."""
        payload = self._request_json("GET", f"{self._base_url}/{order_id}")
        if not isinstance(payload, dict):
            raise VtexApiError(f"Respuesta inesperada de VTEX para el pedido {order_id}")
        return payload

    def _headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "X-VTEX-API-AppKey": self._creds.app_key,
            "X-VTEX-API-AppToken": self._creds.app_token,
        }

    def _request_json(
        self, method: str, url: str, *, params: Optional[Dict[str, Any]] = None
    ) -> Any:
        """
        Request HTTP con backoff para 429/5xx.

        Estrategia:
        - 429: respeta Retry-After si existe, si no exponencial con jitter simple.
        - 5xx: exponencial con jitter.
        - 4xx (no 429): error inmediato (config/auth mal).
        - Error de red/timeout: se reintenta igual que un 5xx.
        """
        for attempt in range(self._max_retries + 1):
            try:
                resp = self._session.request(
                    method=method,
                    url=url,
                    params=params,
                    headers=self._headers(),
                    timeout=self._timeout_s,
                )
            except requests.RequestException as e:
                if attempt >= self._max_retries:
                    raise VtexApiError(f"VTEX no respondió tras {attempt} reintentos: {e}") from e
                time.sleep(self._backoff(attempt))
                continue

            if 200 <= resp.status_code < 300:
                try:
                    return resp.json()
                except ValueError as e:
                    raise VtexApiError(f"VTEX devolvió un cuerpo no-JSON ({resp.status_code})") from e

            # Errores recuperables
            if resp.status_code == 429 or 500 <= resp.status_code < 600:
                if attempt >= self._max_retries:
                    raise VtexApiError(
                        f"VTEX error {resp.status_code} tras {attempt} reintentos: {resp.text[:500]}",
                        status=resp.status_code,
                    )
                retry_after = resp.headers.get("Retry-After")
                sleep_s = self._backoff(attempt)
                if retry_after:
                    try:
                        sleep_s = float(retry_after)
                    except ValueError:
                        sleep_s = self._min_backoff_s
                logger.debug(f"VTEX {resp.status_code}, reintentando en {sleep_s:.1f}s")
                time.sleep(sleep_s)
                continue

            # Errores no recuperables
            raise VtexApiError(
                f"VTEX request falló {resp.status_code}: {resp.text[:500]}",
                status=resp.status_code,
            )

        raise VtexApiError("VTEX request agotó los reintentos")

    def _backoff(self, attempt: int) -> float:
        # Exponencial simple + jitter proporcional
        base = min(self._max_backoff_s, self._min_backoff_s * (2**attempt))
        return base + (0.15 * base)
