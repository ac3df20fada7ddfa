"""
Fuente de pedidos VTEX por cliente: listado + detalle de cada pedido.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

import requests
from loguru import logger

from order_sync.domain.entities.tenant import TenantConfig

from .vtex_client import VtexApiError, VtexClient, VtexCredentials

ClientFactory = Callable[[TenantConfig], VtexClient]


class VtexOrderSource:
    """
    Implementa OrderSource sobre VtexClient.

    - El listado se pide en páginas hasta max_pages (o hasta la última página).
    - Si falla el detalle de un pedido, se registra y se omite ese pedido.
    - Si falla el listado, la excepción se propaga (el cliente falla).
    """

    def __init__(
        self,
        *,
        per_page: int = 50,
        max_pages: int = 1,
        status: Optional[str] = "invoiced",
        timeout_s: int = 30,
        max_retries: int = 4,
        session: Optional[requests.Session] = None,
        client_factory: Optional[ClientFactory] = None,
    ) -> None:
        self._per_page = per_page
        self._max_pages = max(1, max_pages)
        self._status = status
        self._timeout_s = timeout_s
        self._max_retries = max_retries
        self._session = session
        self._client_factory = client_factory or self._default_client

    def _default_client(self, tenant: TenantConfig) -> VtexClient:
        return VtexClient(
            VtexCredentials(
                account_name=tenant.vtex_account_name,
                app_key=tenant.vtex_app_key,
                app_token=tenant.vtex_app_token,
            ),
            session=self._session,
            timeout_s=self._timeout_s,
            max_retries=self._max_retries,
        )

    def list_order_ids(self, client: VtexClient, tenant_name: str) -> List[str]:
        order_ids: List[str] = []
        page = 1
        while page <= self._max_pages:
            payload = client.list_orders(page=page, per_page=self._per_page, status=self._status)
            summaries = payload.get("list") or []
            for summary in summaries:
                order_id = summary.get("orderId") if isinstance(summary, dict) else None
                if order_id:
                    order_ids.append(str(order_id))

            total_pages = (payload.get("paging") or {}).get("pages") or 1
            if not summaries or page >= int(total_pages):
                break
            page += 1

        logger.info(f"Encontrados {len(order_ids)} pedidos para {tenant_name}.")
        return order_ids

    def fetch_orders(self, tenant: TenantConfig) -> List[Dict[str, Any]]:
        client = self._client_factory(tenant)
        logger.info(f"Obteniendo listado de pedidos para {tenant.name}...")
        orders: List[Dict[str, Any]] = []
        try:
            for order_id in self.list_order_ids(client, tenant.name):
                try:
                    orders.append(client.get_order(order_id))
                except VtexApiError as e:
                    logger.warning(
                        f"No se pudo obtener el detalle del pedido {order_id} para {tenant.name}: {e.message}"
                    )
        finally:
            client.close()

        logger.info(f"Procesados {len(orders)} pedidos para {tenant.name}.")
        return orders
