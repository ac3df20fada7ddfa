"""
Constructor "oficial" del pipeline a partir de Settings.

Arma las piezas concretas (VTEX, Google Sheets, historial en disco) y las
inyecta en los casos de uso. Los tests arman sus propias piezas en memoria.
"""
from __future__ import annotations

from functools import partial
from typing import List

from dotenv import load_dotenv

from order_sync.application.services.sheet_reconciler import SheetReconciler
from order_sync.application.use_cases.orders_sync_use_cases import OrdersSyncUseCases
from order_sync.application.use_cases.sync_use_cases import TenantSyncOrchestrator
from order_sync.core.config import Settings
from order_sync.domain.entities.tenant import TenantConfig
from order_sync.infrastructure.config.tenant_loader import load_tenant_configs, parse_client_names
from order_sync.infrastructure.external.google_sheets.auth import build_authorized_session
from order_sync.infrastructure.external.google_sheets.sheets_client import GoogleSheetsDestination
from order_sync.infrastructure.external.vtex.order_source import VtexOrderSource
from order_sync.infrastructure.repositories.run_history_repository import JsonFileRunLedger


def build_sheets_destination(settings: Settings) -> GoogleSheetsDestination:
    session_factory = partial(
        build_authorized_session,
        client_email=settings.GOOGLE_CLIENT_EMAIL,
        private_key=settings.GOOGLE_PRIVATE_KEY,
        project_id=settings.GOOGLE_PROJECT_ID,
    )
    return GoogleSheetsDestination(
        session_factory=session_factory,
        value_input_option=settings.SHEETS_VALUE_INPUT_OPTION,
        timeout_s=settings.HTTP_TIMEOUT_S,
        max_read_retries=settings.SHEETS_READ_RETRIES,
    )


def build_order_source(settings: Settings) -> VtexOrderSource:
    return VtexOrderSource(
        per_page=settings.VTEX_PAGE_SIZE,
        max_pages=settings.VTEX_MAX_PAGES,
        status=settings.VTEX_ORDER_STATUS or None,
        timeout_s=settings.HTTP_TIMEOUT_S,
        max_retries=settings.HTTP_MAX_RETRIES,
    )


def build_tenant_provider(settings: Settings):
    def provider() -> List[TenantConfig]:
        # Variables por cliente viven en .env, fuera de Settings.
        load_dotenv(override=False)
        return load_tenant_configs(parse_client_names(settings.CLIENT_NAMES))

    return provider


def build_from_settings(settings: Settings) -> OrdersSyncUseCases:
    """
    Arma OrdersSyncUseCases con VTEX + Google Sheets + historial JSON.

    Los clientes se releen del entorno al inicio de cada pasada.
    """
    ledger = JsonFileRunLedger(settings.HISTORY_PATH, capacity=settings.HISTORY_LIMIT)
    order_source = build_order_source(settings)
    orchestrator = TenantSyncOrchestrator(
        order_source=order_source,
        reconciler=SheetReconciler(build_sheets_destination(settings)),
        ledger=ledger,
    )
    return OrdersSyncUseCases(
        tenant_provider=build_tenant_provider(settings),
        orchestrator=orchestrator,
        ledger=ledger,
        order_source=order_source,
    )
