"""
Tests del normalizador de pedidos VTEX.

Verifica que:
- Toda fila tenga exactamente ORDER_FIELDS, en ese orden.
- Un pedido vacio o invalido no lance excepciones.
- Solo se proyecte el primer elemento de las listas anidadas.
- Los campos compuestos se guarden como JSON.
"""
from __future__ import annotations

import pytest

import json

from order_sync.application.services.order_normalizer import (
    DATE_FIELD,
    KEY_FIELD,
    ORDER_FIELDS,
    normalize_order,
    normalize_orders,
)

pytestmark = pytest.mark.unit


RUN_DATE = "2025-01-15"


def test_order_fields_start_with_extraction_date_and_are_unique() -> None:
    assert ORDER_FIELDS[0] == DATE_FIELD
    assert KEY_FIELD in ORDER_FIELDS
    assert len(set(ORDER_FIELDS)) == len(ORDER_FIELDS)


def test_normalize_order_is_total_for_empty_and_invalid_input() -> None:
    for raw in ({}, None, "no-es-un-pedido", {"items": "raro", "shippingData": None}):
        row = normalize_order(raw, RUN_DATE)
        assert tuple(row.keys()) == ORDER_FIELDS
        assert row[DATE_FIELD] == RUN_DATE
        assert all(row[field] is None for field in ORDER_FIELDS if field != DATE_FIELD)


def test_rows_share_the_same_columns_regardless_of_shape(order_factory) -> None:
    full = order_factory("1")
    bare = {"orderId": "2"}
    rows = normalize_orders([full, bare], RUN_DATE)
    assert [tuple(r.keys()) for r in rows] == [ORDER_FIELDS, ORDER_FIELDS]
    assert rows[1]["orderId"] == "2"
    assert rows[1]["items.name"] is None


def test_normalize_order_projects_first_element_only(sample_order) -> None:
    row = normalize_order(sample_order, RUN_DATE)

    assert row["orderId"] == "1001-01"
    assert row["clientId"] == "user-1"
    assert row["shippingData.addressCity"] == "Santiago"
    assert row["shippingData.logisticsInfo.selectedSla"] == "Normal"
    assert row["shippingData.logisticsInfo.deliveryIds.courierName"] == "Courier Uno"
    assert row["paymentData.transactions.payments.paymentSystemName"] == "Visa"
    assert row["paymentData.transactions.isActive"] is True
    assert row["items.productId"] == "p-1"
    assert row["items.priceTags.value"] == -1000
    assert row["items.additionalInfo.categories.name"] == "Calzado"
    assert row["totals.name"] == "Total de items"
    assert row["utmSource"] == "google"


def test_composite_fields_are_serialized_as_json(order_factory) -> None:
    order = order_factory(
        "1",
        taxData={"areTaxesDesignatedByMarketplace": True},
        cancellationData={"reason": "Cliente desistio", "requestedByUser": True},
    )
    row = normalize_order(order, RUN_DATE)

    assert json.loads(row["taxData"]) == {"areTaxesDesignatedByMarketplace": True}
    assert json.loads(row["cancellationData"])["reason"] == "Cliente desistio"
    assert row["cancelReason"] == "Cliente desistio"
    assert row["subscriptionData"] is None


def test_unexpected_nested_values_are_flattened_to_text(order_factory) -> None:
    order = order_factory("1", status={"code": "invoiced"})
    row = normalize_order(order, RUN_DATE)
    assert row["status"] == '{"code":"invoiced"}'
