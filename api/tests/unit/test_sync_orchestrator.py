"""
Tests del orquestador multi-cliente.

Verifica que:
- Un cliente que falla no corta la pasada.
- Sin clientes no hay llamadas y la pasada es exitosa.
- ConfigIncomplete se detecta antes de cualquier llamada de red.
- El resumen se agrega al historial una sola vez.
"""
from __future__ import annotations

from datetime import datetime, timezone

import pytest

from order_sync.application.services.sheet_reconciler import SheetReconciler
from order_sync.application.use_cases.sync_use_cases import (
    TenantSyncOrchestrator,
    build_summary_message,
)
from order_sync.domain.entities.sync_run import SyncOutcome, SyncStrategy
from order_sync.infrastructure.repositories.run_history_repository import InMemoryRunLedger

FIXED_NOW = datetime(2025, 1, 15, 23, 30, tzinfo=timezone.utc)

pytestmark = pytest.mark.unit


class _FailingLedger:
    def append(self, summary) -> None:
        raise OSError("disco lleno")

    def list(self, limit=None):
        return []


def _orchestrator(destination, source, ledger=None):
    return TenantSyncOrchestrator(
        order_source=source,
        reconciler=SheetReconciler(destination),
        ledger=ledger,
        clock=lambda: FIXED_NOW,
    )


def test_partial_failure_does_not_abort_the_pass(destination, order_factory, tenant_factory, source_factory) -> None:
    """El cliente B falla en VTEX; A y C se sincronizan igual."""
    tenants = [tenant_factory("A"), tenant_factory("B"), tenant_factory("C")]
    source = source_factory(
        {"A": [order_factory("a1"), order_factory("a2")], "C": [order_factory("c1")]},
        failing=["B"],
    )
    ledger = InMemoryRunLedger()

    summary = _orchestrator(destination, source, ledger).run_all(tenants)

    assert [r.tenant_name for r in summary.results] == ["A", "B", "C"]
    assert [r.outcome for r in summary.results] == [SyncOutcome.SUCCESS, SyncOutcome.FAILED, SyncOutcome.SUCCESS]
    assert summary.results[1].error_detail == "VTEX no disponible para B"
    assert summary.results[1].rows_written == 0
    assert summary.overall_success is False
    assert summary.total_rows_written == 3
    assert "1 de 3" in summary.message
    assert "3 pedido(s)" in summary.message
    assert source.calls == ["A", "B", "C"]


def test_empty_tenant_list_succeeds_without_calls(destination, source_factory) -> None:
    source = source_factory()
    ledger = InMemoryRunLedger()

    summary = _orchestrator(destination, source, ledger).run_all([])

    assert summary.overall_success is True
    assert summary.results == ()
    assert summary.message == "No hay clientes configurados."
    assert source.calls == []
    assert destination.calls == []
    assert len(ledger.list()) == 1


def test_incomplete_config_fails_before_any_io(destination, tenant_factory, source_factory) -> None:
    tenant = tenant_factory("Acme", sheet_id="", vtex_app_token=" ")
    source = source_factory()

    summary = _orchestrator(destination, source).run_all([tenant])

    result = summary.results[0]
    assert result.outcome is SyncOutcome.FAILED
    assert "vtex_app_token" in result.error_detail
    assert "sheet_id" in result.error_detail
    assert source.calls == []
    assert destination.calls == []


def test_destination_failure_is_recorded_per_tenant(destination, order_factory, tenant_factory, source_factory) -> None:
    destination.fail_on = {"list_sheets"}
    source = source_factory({"A": [order_factory("a1")]})

    summary = _orchestrator(destination, source).run_all([tenant_factory("A")])

    assert summary.overall_success is False
    assert summary.results[0].orders_fetched == 1
    assert "list_sheets" in summary.results[0].error_detail


def test_run_date_defaults_to_utc_date_of_clock(destination, order_factory, tenant_factory, source_factory) -> None:
    source = source_factory({"A": [order_factory("a1")]})

    summary = _orchestrator(destination, source).run_all([tenant_factory("A")])

    assert summary.run_date == "2025-01-15"
    assert summary.timestamp == FIXED_NOW
    assert summary.results[0].strategy is SyncStrategy.FULL_REWRITE
    data = destination.rows("sheet-a", "A")
    assert data[1][0] == "2025-01-15"


def test_second_pass_same_day_writes_nothing(destination, order_factory, tenant_factory, source_factory) -> None:
    source = source_factory({"A": [order_factory("a1"), order_factory("a2")]})
    orchestrator = _orchestrator(destination, source)

    first = orchestrator.run_all([tenant_factory("A")])
    second = orchestrator.run_all([tenant_factory("A")])

    assert first.total_rows_written == 2
    assert second.total_rows_written == 0
    assert second.results[0].strategy is SyncStrategy.DEDUP_APPEND
    assert second.overall_success is True


def test_summary_is_recorded_once_per_pass(destination, tenant_factory, source_factory) -> None:
    ledger = InMemoryRunLedger()
    orchestrator = _orchestrator(destination, source_factory(), ledger)

    orchestrator.run_all([tenant_factory("A"), tenant_factory("B")])

    entries = ledger.list()
    assert len(entries) == 1
    assert len(entries[0].results) == 2


def test_ledger_failure_does_not_break_the_pass(destination, tenant_factory, source_factory) -> None:
    summary = _orchestrator(destination, source_factory(), _FailingLedger()).run_all([tenant_factory("A")])
    assert summary.overall_success is True


def test_invalid_run_date_is_rejected(destination, source_factory) -> None:
    with pytest.raises(ValueError):
        _orchestrator(destination, source_factory()).run_all([], run_date="15/01/2025")


def test_build_summary_message_without_failures() -> None:
    assert build_summary_message([]) == "No hay clientes configurados."
