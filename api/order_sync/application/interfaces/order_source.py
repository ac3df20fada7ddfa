"""
Interfaz de la fuente de pedidos (API de OMS por cliente).
"""

from __future__ import annotations

from typing import Any, Dict, List, Protocol

from order_sync.domain.entities.tenant import TenantConfig


class OrderSource(Protocol):
    """
    Obtiene los pedidos crudos (detalle completo) de un cliente.

    Reglas:
    - Si el listado falla, debe lanzar UpstreamUnavailable.
    - Si falla el detalle de un pedido puntual, ese pedido se omite.
    """

    def fetch_orders(self, tenant: TenantConfig) -> List[Dict[str, Any]]:
        """Retorna los pedidos crudos del cliente, en el orden del listado."""
