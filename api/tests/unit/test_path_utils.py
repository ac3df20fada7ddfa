from __future__ import annotations

import pytest

from order_sync.shared.utils.path_utils import get_path

pytestmark = pytest.mark.unit


def test_get_path_reads_nested_keys_and_indexes() -> None:
    tree = {"a": [{"b": {"c": 7}}]}
    assert get_path(tree, "a.0.b.c") == 7


def test_get_path_returns_default_when_branch_missing() -> None:
    tree = {"a": []}
    assert get_path(tree, "a.0.b") is None
    assert get_path(tree, "x.y", "sin-valor") == "sin-valor"
    assert get_path(None, "a", {}) == {}


def test_get_path_treats_none_as_missing() -> None:
    assert get_path({"a": None}, "a.b", "d") == "d"
    assert get_path({"a": None}, "a", "d") == "d"


def test_get_path_does_not_index_strings() -> None:
    assert get_path({"a": "texto"}, "a.0") is None


def test_get_path_keeps_falsy_values() -> None:
    tree = {"a": {"zero": 0, "flag": False, "empty": ""}}
    assert get_path(tree, "a.zero", "d") == 0
    assert get_path(tree, "a.flag", "d") is False
    assert get_path(tree, "a.empty", "d") == ""
