"""
Casos de uso expuestos a la API y al CLI: disparar una pasada, consultar
historial, listar clientes y exportar pedidos a CSV.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Callable, List, Optional

from loguru import logger

from order_sync.application.interfaces.order_source import OrderSource
from order_sync.application.interfaces.run_ledger import RunLedger
from order_sync.application.services.csv_export import rows_to_csv
from order_sync.application.services.order_normalizer import normalize_orders
from order_sync.application.use_cases.sync_use_cases import TenantSyncOrchestrator
from order_sync.domain.entities.sync_run import RunSummary
from order_sync.domain.entities.tenant import TenantConfig
from order_sync.shared.exceptions.sync import ClientNotFound, NoOrdersToExport, SyncAlreadyRunning
from order_sync.shared.utils.date_utils import run_date_for

TenantProvider = Callable[[], List[TenantConfig]]


@dataclass(frozen=True)
class CsvExport:
    file_name: str
    content: str
    rows: int
    tenant_name: str


class OrdersSyncUseCases:
    """
    Fachada de la sincronizacion para la capa de entrada (API, CLI, scheduler).

    - Los clientes se cargan una vez por pasada (tenant_provider).
    - Solo una pasada a la vez por proceso: un segundo disparo manual
      mientras otra corre lanza SyncAlreadyRunning.
    """

    _run_lock = threading.Lock()

    def __init__(
        self,
        *,
        tenant_provider: TenantProvider,
        orchestrator: TenantSyncOrchestrator,
        ledger: RunLedger,
        order_source: OrderSource,
    ) -> None:
        self._tenant_provider = tenant_provider
        self._orchestrator = orchestrator
        self._ledger = ledger
        self._order_source = order_source

    def run_pass(self, *, run_date: Optional[str] = None) -> RunSummary:
        """
        Ejecuta una pasada sobre todos los clientes configurados.

        Raises:
            SyncAlreadyRunning: Si otra pasada sigue en curso
        """
        if not self._run_lock.acquire(blocking=False):
            raise SyncAlreadyRunning()
        try:
            tenants = self._tenant_provider()
            return self._orchestrator.run_all(tenants, run_date=run_date)
        finally:
            self._run_lock.release()

    @classmethod
    def is_running(cls) -> bool:
        return cls._run_lock.locked()

    def get_history(self, limit: Optional[int] = None) -> List[RunSummary]:
        return self._ledger.list(limit)

    def list_clients(self) -> List[TenantConfig]:
        return self._tenant_provider()

    def export_csv(self, client_name: Optional[str] = None) -> CsvExport:
        """
        Obtiene los pedidos de un cliente (el primero si no se indica) y los
        devuelve como CSV. No escribe en la hoja.

        Raises:
            ClientNotFound: Si el cliente no esta configurado
            NoOrdersToExport: Si la fuente no devolvio pedidos
        """
        tenant = self._select_tenant(client_name)
        run_date = run_date_for()
        logger.info(f"Generando CSV de pedidos para {tenant.name}...")

        rows = normalize_orders(self._order_source.fetch_orders(tenant), run_date)
        if not rows:
            raise NoOrdersToExport(tenant.name)
        return CsvExport(
            file_name=f"vtex-orders-{tenant.name}-{run_date}.csv",
            content=rows_to_csv(rows),
            rows=len(rows),
            tenant_name=tenant.name,
        )

    def _select_tenant(self, client_name: Optional[str]) -> TenantConfig:
        tenants = self._tenant_provider()
        if not tenants:
            raise ClientNotFound(None)
        if not client_name:
            return tenants[0]
        wanted = client_name.strip().lower()
        for tenant in tenants:
            if tenant.name.lower() == wanted:
                return tenant
        raise ClientNotFound(client_name)
