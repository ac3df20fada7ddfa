"""
Tests de la jerarquia de excepciones de sincronizacion.
"""
from __future__ import annotations

import pytest

from order_sync.shared.exceptions import AppException, ConfigIncomplete, SchemaMismatch, UpstreamUnavailable

pytestmark = pytest.mark.unit


def test_app_exception_to_dict() -> None:
    exc = AppException("fallo", status_code=418, error_code="TEAPOT", details={"a": 1})
    assert exc.to_dict() == {"error": "TEAPOT", "message": "fallo", "details": {"a": 1}}
    assert str(exc) == "fallo"


def test_config_incomplete_lists_missing_fields() -> None:
    exc = ConfigIncomplete("Acme", ["sheet_id", "vtex_app_key"])
    assert exc.status_code == 400
    assert exc.details == {"tenant": "Acme", "missing_fields": ["sheet_id", "vtex_app_key"]}


def test_upstream_status_is_kept() -> None:
    exc = UpstreamUnavailable("VTEX 503", status=503)
    assert exc.upstream_status == 503
    assert exc.status_code == 502
    assert exc.to_dict()["details"] == {"upstream_status": 503}


def test_schema_mismatch_is_conflict() -> None:
    exc = SchemaMismatch("Pedidos", "orderId", ["extractionDate"])
    assert exc.status_code == 409
    assert exc.error_code == "SCHEMA_MISMATCH"
