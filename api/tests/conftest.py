"""
Configuracion de fixtures para pytest.

Incluye dobles en memoria de la hoja de destino y de la fuente de pedidos.
"""
from __future__ import annotations

import copy
from typing import Any, Dict, List, Optional, Sequence

import pytest

from order_sync.domain.entities.tenant import TenantConfig
from order_sync.shared.exceptions.sync import DestinationUnavailable, UpstreamUnavailable


class FakeDestination:
    """
    Spreadsheet en memoria: {spreadsheet_id: {sheet_name: [[celdas], ...]}}.

    Registra cada llamada en `calls` para verificar que no hubo escrituras.
    """

    def __init__(self, sheets: Optional[Dict[str, Dict[str, List[List[Any]]]]] = None) -> None:
        self.sheets: Dict[str, Dict[str, List[List[Any]]]] = sheets or {}
        self.calls: List[str] = []
        self.fail_on: set[str] = set()

    def _check(self, op: str) -> None:
        self.calls.append(op)
        if op in self.fail_on:
            raise DestinationUnavailable(f"Falla simulada en {op}")

    def rows(self, spreadsheet_id: str, sheet_name: str) -> List[List[Any]]:
        return self.sheets.get(spreadsheet_id, {}).get(sheet_name, [])

    @property
    def writes(self) -> List[str]:
        return [c for c in self.calls if c in ("add_sheet", "clear", "write_rows", "append_rows")]

    def list_sheets(self, spreadsheet_id: str) -> List[str]:
        self._check("list_sheets")
        return list(self.sheets.get(spreadsheet_id, {}).keys())

    def add_sheet(self, spreadsheet_id: str, sheet_name: str) -> None:
        self._check("add_sheet")
        self.sheets.setdefault(spreadsheet_id, {})[sheet_name] = []

    def read_rows(self, spreadsheet_id: str, sheet_name: str, *, first_row: int, last_row: int) -> List[List[Any]]:
        self._check("read_rows")
        data = self.rows(spreadsheet_id, sheet_name)[first_row - 1:last_row]
        return [[str(c) for c in row] for row in data]

    def read_column(self, spreadsheet_id: str, sheet_name: str, column_index: int, *, first_row: int = 2) -> List[Any]:
        self._check("read_column")
        values = []
        for row in self.rows(spreadsheet_id, sheet_name)[first_row - 1:]:
            if column_index < len(row) and row[column_index] != "":
                values.append(str(row[column_index]))
        return values

    def clear(self, spreadsheet_id: str, sheet_name: str) -> None:
        self._check("clear")
        self.sheets[spreadsheet_id][sheet_name] = []

    def write_rows(self, spreadsheet_id: str, sheet_name: str, values: Sequence[Sequence[Any]]) -> int:
        self._check("write_rows")
        self.sheets[spreadsheet_id][sheet_name] = [list(v) for v in values]
        return len(values)

    def append_rows(self, spreadsheet_id: str, sheet_name: str, values: Sequence[Sequence[Any]]) -> int:
        self._check("append_rows")
        self.sheets[spreadsheet_id][sheet_name].extend(list(v) for v in values)
        return len(values)


class FakeOrderSource:
    """Pedidos crudos por nombre de cliente; `failing` simula VTEX caido."""

    def __init__(self, orders_by_tenant: Optional[Dict[str, List[dict]]] = None, failing: Sequence[str] = ()) -> None:
        self.orders_by_tenant = orders_by_tenant or {}
        self.failing = set(failing)
        self.calls: List[str] = []

    def fetch_orders(self, tenant: TenantConfig) -> List[dict]:
        self.calls.append(tenant.name)
        if tenant.name in self.failing:
            raise UpstreamUnavailable(f"VTEX no disponible para {tenant.name}", status=503)
        return copy.deepcopy(self.orders_by_tenant.get(tenant.name, []))


def make_order(order_id: str, **overrides: Any) -> Dict[str, Any]:
    """Pedido VTEX de ejemplo con las ramas mas usadas."""
    order: Dict[str, Any] = {
        "orderId": order_id,
        "sellerOrderId": f"00-{order_id}",
        "origin": "Marketplace",
        "status": "invoiced",
        "value": 15990,
        "creationDate": "2025-01-15T10:00:00.0000000+00:00",
        "clientProfileData": {"userProfileId": "user-1"},
        "shippingData": {
            "address": {"city": "Santiago", "state": "RM", "countryCode": "CHL"},
            "logisticsInfo": [
                {
                    "itemIndex": 0,
                    "selectedSla": "Normal",
                    "price": 2990,
                    "deliveryIds": [{"courierId": "c1", "courierName": "Courier Uno", "quantity": 1}],
                },
                {"itemIndex": 1, "selectedSla": "Express"},
            ],
        },
        "paymentData": {
            "transactions": [
                {
                    "isActive": True,
                    "merchantName": "STORE",
                    "payments": [{"paymentSystemName": "Visa", "value": 15990, "installments": 3}],
                }
            ]
        },
        "items": [
            {
                "productId": "p-1",
                "name": "Zapatilla",
                "quantity": 1,
                "price": 12990,
                "priceTags": [{"name": "descuento", "value": -1000}],
                "additionalInfo": {"brandName": "Marca", "categories": [{"id": 10, "name": "Calzado"}]},
            },
            {"productId": "p-2", "name": "Calcetin"},
        ],
        "totals": [{"id": "Items", "name": "Total de items", "value": 12990}],
        "marketingData": {"utmSource": "google"},
        "taxData": None,
        "cancellationData": None,
    }
    order.update(overrides)
    return order


def make_tenant(name: str = "Montecarlo", **overrides: Any) -> TenantConfig:
    fields = {
        "name": name,
        "vtex_account_name": name.lower(),
        "vtex_app_key": "key",
        "vtex_app_token": "token",
        "sheet_id": f"sheet-{name.lower()}",
        "sheet_name": name,
    }
    fields.update(overrides)
    return TenantConfig(**fields)


@pytest.fixture
def destination() -> FakeDestination:
    return FakeDestination()


@pytest.fixture
def sample_order() -> Dict[str, Any]:
    return make_order("1001-01")


@pytest.fixture
def order_factory():
    return make_order


@pytest.fixture
def tenant_factory():
    return make_tenant


@pytest.fixture
def source_factory():
    return FakeOrderSource
