"""
Tests del cliente VTEX OMS y de la fuente de pedidos.

Usa una sesion mockeada (unittest.mock); no hace requests reales.
"""
from __future__ import annotations

from typing import Any, Optional
from unittest.mock import MagicMock

import pytest
import requests

from order_sync.infrastructure.external.vtex.order_source import VtexOrderSource
from order_sync.infrastructure.external.vtex.vtex_client import (
    VtexApiError,
    VtexClient,
    VtexCredentials,
    build_orders_base_url,
)
from order_sync.shared.exceptions.sync import UpstreamUnavailable

CREDS = VtexCredentials(account_name="montecarlo", app_key="k", app_token="t")

pytestmark = pytest.mark.unit


def _response(status: int, payload: Any = None, headers: Optional[dict] = None, text: str = "") -> MagicMock:
    resp = MagicMock()
    resp.status_code = status
    resp.headers = headers or {}
    resp.text = text
    resp.json.return_value = payload
    return resp


def _client(session: MagicMock, **kwargs) -> VtexClient:
    return VtexClient(CREDS, session=session, min_backoff_s=0, max_backoff_s=0, **kwargs)


@pytest.fixture(autouse=True)
def _no_sleep(monkeypatch):
    monkeypatch.setattr("order_sync.infrastructure.external.vtex.vtex_client.time.sleep", lambda s: None)


def test_build_orders_base_url() -> None:
    assert build_orders_base_url(" montecarlo ") == "https://montecarlo.vtexcommercestable.com.br/api/oms/pvt/orders"
    with pytest.raises(VtexApiError):
        build_orders_base_url("")


def test_list_orders_sends_auth_headers_and_filters() -> None:
    session = MagicMock()
    session.request.return_value = _response(200, {"list": [], "paging": {"pages": 1}})

    _client(session).list_orders(page=2, per_page=50)

    kwargs = session.request.call_args.kwargs
    assert kwargs["method"] == "GET"
    assert kwargs["params"] == {"orderBy": "creationDate,desc", "page": 2, "per_page": 50, "f_status": "invoiced"}
    assert kwargs["headers"]["X-VTEX-API-AppKey"] == "k"
    assert kwargs["headers"]["X-VTEX-API-AppToken"] == "t"


def test_retries_on_429_and_5xx_then_succeeds() -> None:
    session = MagicMock()
    session.request.side_effect = [
        _response(429, headers={"Retry-After": "0"}),
        _response(503),
        requests.ConnectionError("reset"),
        _response(200, {"orderId": "1"}),
    ]

    assert _client(session).get_order("1") == {"orderId": "1"}
    assert session.request.call_count == 4


def test_client_error_fails_immediately() -> None:
    session = MagicMock()
    session.request.return_value = _response(403, text="Forbidden")

    with pytest.raises(VtexApiError) as exc_info:
        _client(session).get_order("1")

    assert exc_info.value.upstream_status == 403
    assert isinstance(exc_info.value, UpstreamUnavailable)
    assert session.request.call_count == 1


def test_retries_are_bounded() -> None:
    session = MagicMock()
    session.request.return_value = _response(500, text="boom")

    with pytest.raises(VtexApiError):
        _client(session, max_retries=2).list_orders()

    assert session.request.call_count == 3


def test_order_source_skips_orders_whose_detail_fails() -> None:
    client = MagicMock()
    client.list_orders.return_value = {"list": [{"orderId": "1"}, {"orderId": "2"}, {}], "paging": {"pages": 1}}
    client.get_order.side_effect = [VtexApiError("VTEX 404", status=404), {"orderId": "2"}]
    tenant = MagicMock()
    tenant.name = "Montecarlo"

    source = VtexOrderSource(client_factory=lambda t: client)
    orders = source.fetch_orders(tenant)

    assert orders == [{"orderId": "2"}]
    assert client.get_order.call_count == 2


def test_order_source_pages_until_max_pages() -> None:
    client = MagicMock()
    client.list_orders.side_effect = [
        {"list": [{"orderId": "1"}], "paging": {"pages": 5}},
        {"list": [{"orderId": "2"}], "paging": {"pages": 5}},
    ]
    source = VtexOrderSource(max_pages=2)

    assert source.list_order_ids(client, "Montecarlo") == ["1", "2"]
    assert client.list_orders.call_count == 2


def test_order_source_listing_error_propagates() -> None:
    client = MagicMock()
    client.list_orders.side_effect = VtexApiError("VTEX 401", status=401)
    tenant = MagicMock()
    tenant.name = "Montecarlo"

    with pytest.raises(UpstreamUnavailable):
        VtexOrderSource(client_factory=lambda t: client).fetch_orders(tenant)


def test_order_source_closes_client_even_on_listing_error() -> None:
    client = MagicMock()
    client.list_orders.side_effect = VtexApiError("VTEX 500", status=500)
    tenant = MagicMock()
    tenant.name = "Montecarlo"

    with pytest.raises(VtexApiError):
        VtexOrderSource(client_factory=lambda t: client).fetch_orders(tenant)

    client.close.assert_called_once_with()


def test_client_closes_only_its_own_session(monkeypatch) -> None:
    owned = MagicMock()
    monkeypatch.setattr("order_sync.infrastructure.external.vtex.vtex_client.requests.Session", lambda: owned)

    VtexClient(CREDS).close()
    owned.close.assert_called_once_with()

    injected = MagicMock()
    VtexClient(CREDS, session=injected).close()
    injected.close.assert_not_called()
