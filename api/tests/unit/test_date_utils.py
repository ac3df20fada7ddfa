"""
Tests unitarios para las utilidades de fecha.
"""
from __future__ import annotations

import pytest

from datetime import datetime, timedelta, timezone

from order_sync.shared.utils.date_utils import is_iso_date, run_date_for, utc_now

pytestmark = pytest.mark.unit


class TestRunDateFor:
    def test_uses_utc_calendar_day(self) -> None:
        """Una hora local de Chile ya en el dia siguiente UTC."""
        chile = timezone(timedelta(hours=-3))
        assert run_date_for(datetime(2025, 1, 15, 22, 30, tzinfo=chile)) == "2025-01-16"

    def test_naive_datetime_is_treated_as_utc(self) -> None:
        assert run_date_for(datetime(2025, 1, 15, 23, 59)) == "2025-01-15"

    def test_defaults_to_now(self) -> None:
        assert run_date_for() == utc_now().date().isoformat()


def test_is_iso_date() -> None:
    assert is_iso_date("2025-01-15")
    assert not is_iso_date("2025-1-5")
    assert not is_iso_date("15/01/2025")
    assert not is_iso_date("")
