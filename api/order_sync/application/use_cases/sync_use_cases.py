"""
Orquestador multi-cliente de la sincronizacion VTEX -> Google Sheets.

Flujo por cliente (estrictamente secuencial, en el orden recibido):
- Valida configuracion (ConfigIncomplete antes de cualquier I/O)
- Obtiene pedidos crudos de la fuente
- Normaliza todos con la misma fecha de corrida
- Reconcilia contra la hoja del cliente

Un fallo en un cliente se registra como RunResult fallido y la pasada
continua con el siguiente. El resumen se agrega al historial una sola vez,
cuando todos los clientes terminaron.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable, List, Optional, Sequence

from loguru import logger

from order_sync.application.interfaces.order_source import OrderSource
from order_sync.application.interfaces.run_ledger import RunLedger
from order_sync.application.services.order_normalizer import normalize_orders
from order_sync.application.services.sheet_reconciler import SheetReconciler
from order_sync.domain.entities.sync_run import RunResult, RunSummary, SyncOutcome
from order_sync.domain.entities.tenant import TenantConfig
from order_sync.shared.exceptions.base import AppException
from order_sync.shared.exceptions.sync import ConfigIncomplete
from order_sync.shared.utils.date_utils import is_iso_date, run_date_for, utc_now

Clock = Callable[[], datetime]


def describe_error(exc: Exception) -> str:
    """Detalle legible de un error para el RunResult."""
    if isinstance(exc, AppException):
        return exc.message
    return str(exc) or exc.__class__.__name__


def build_summary_message(results: Sequence[RunResult]) -> str:
    """Mensaje agregado de la pasada (siempre con totales)."""
    if not results:
        return "No hay clientes configurados."

    total_rows = sum(r.rows_written for r in results if r.succeeded)
    failed = sum(1 for r in results if not r.succeeded)
    if failed == 0:
        return (
            f"Sincronizacion completada. Total de {total_rows} pedido(s) nuevo(s) "
            f"en {len(results)} cliente(s)."
        )
    return (
        f"Sincronizacion completada con errores: {failed} de {len(results)} cliente(s) fallaron. "
        f"Total de {total_rows} pedido(s) nuevo(s) en los clientes exitosos."
    )


class TenantSyncOrchestrator:
    """
    Ejecuta una pasada completa sobre una lista de clientes.

    Uso:
        orchestrator = TenantSyncOrchestrator(
            order_source=VtexOrderSource(),
            reconciler=SheetReconciler(GoogleSheetsDestination(session)),
            ledger=JsonFileRunLedger("data/history.json"),
        )
        summary = orchestrator.run_all(tenants)
    """

    def __init__(
        self,
        *,
        order_source: OrderSource,
        reconciler: SheetReconciler,
        ledger: Optional[RunLedger] = None,
        clock: Clock = utc_now,
    ) -> None:
        self._order_source = order_source
        self._reconciler = reconciler
        self._ledger = ledger
        self._clock = clock

    def run_all(
        self,
        tenants: Sequence[TenantConfig],
        *,
        run_date: Optional[str] = None,
    ) -> RunSummary:
        started_at = self._clock()
        if run_date is None:
            run_date = run_date_for(started_at)
        elif not is_iso_date(run_date):
            raise ValueError(f"run_date debe tener formato YYYY-MM-DD: {run_date!r}")

        logger.info(f"Iniciando sincronizacion VTEX -> Google Sheets ({len(tenants)} cliente(s), fecha {run_date})")

        results: List[RunResult] = []
        for tenant in tenants:
            results.append(self.sync_tenant(tenant, run_date=run_date))

        summary = RunSummary(
            overall_success=all(r.succeeded for r in results),
            message=build_summary_message(results),
            timestamp=started_at,
            run_date=run_date,
            results=tuple(results),
        )
        self._record(summary)

        if summary.overall_success:
            logger.success(summary.message)
        else:
            logger.warning(summary.message)
        return summary

    def sync_tenant(self, tenant: TenantConfig, *, run_date: str) -> RunResult:
        """Sincroniza un cliente; nunca lanza excepciones."""
        log = logger.bind(tenant=tenant.name)
        orders_fetched = 0
        try:
            log.info(f"Procesando cliente: {tenant.name}")
            missing = tenant.missing_fields()
            if missing:
                raise ConfigIncomplete(tenant.name, missing)

            orders = self._order_source.fetch_orders(tenant)
            orders_fetched = len(orders)
            rows = normalize_orders(orders, run_date)

            result = self._reconciler.reconcile(
                tenant.sheet_id, tenant.sheet_name, rows, run_date=run_date
            )
        except Exception as e:
            detail = describe_error(e)
            log.error(f"Fallo la sincronizacion del cliente {tenant.name}: {detail}")
            return RunResult(
                tenant_name=tenant.name,
                outcome=SyncOutcome.FAILED,
                rows_written=0,
                error_detail=detail,
                orders_fetched=orders_fetched,
            )

        log.info(
            f"Cliente {tenant.name} sincronizado: {result.rows_written} pedido(s) nuevo(s) "
            f"({result.strategy.value})."
        )
        return RunResult(
            tenant_name=tenant.name,
            outcome=SyncOutcome.SUCCESS,
            rows_written=result.rows_written,
            strategy=result.strategy,
            orders_fetched=orders_fetched,
        )

    def _record(self, summary: RunSummary) -> None:
        if self._ledger is None:
            return
        try:
            self._ledger.append(summary)
        except Exception as e:
            logger.error(f"No se pudo guardar la corrida en el historial: {describe_error(e)}")
