"""Tests for the persisted state contract: schema models, versioning and hashing."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from tabula.core.hashing import hash_state, json_dumps_canonical
from tabula.core.schema import StateStore, TableStateSnapshot
from tabula.core.serde import json_dumps_canonical as serde_dumps
from tabula.core.serde import json_loads
from tabula.core.versioning import STATE_V, StateVersion, is_compatible, parse_tag


def test_defaults() -> None:
    snap = TableStateSnapshot()

    assert snap.version == STATE_V.tag
    assert snap.sort == []
    assert snap.filter.global_text == ""
    assert snap.pagination.page_index == 0
    assert snap.pagination.page_size == 10


def test_directions_are_normalized_and_empty_filters_dropped() -> None:
    snap = TableStateSnapshot.model_validate(
        {
            "sort": [{"column_id": "a", "direction": "Descending"}],
            "filter": {"per_column": {"a": "x", "b": ""}, "global_text": "q"},
        }
    )

    assert snap.sort[0].direction == "desc"
    assert snap.filter.per_column == {"a": "x"}


@pytest.mark.parametrize(
    "payload",
    [
        {"sort": [{"column_id": "a"}, {"column_id": "a", "direction": "desc"}]},
        {"sort": [{"column_id": "a", "direction": "sideways"}]},
        {"sort": [{"column_id": ""}]},
        {"pagination": {"page_size": 0}},
        {"pagination": {"page_index": -1}},
        {"selection": ["a"]},
    ],
)
def test_invalid_payloads_are_rejected(payload: dict) -> None:
    with pytest.raises(ValidationError):
        TableStateSnapshot.model_validate(payload)


def test_json_round_trip() -> None:
    snap = TableStateSnapshot.model_validate(
        {"sort": [{"column_id": "v", "direction": "asc"}], "pagination": {"page_index": 2}}
    )

    back = TableStateSnapshot.model_validate(json_loads(serde_dumps(snap.model_dump())))

    assert back == snap


def test_version_tags() -> None:
    assert parse_tag("1.0") == (1, 0)
    assert is_compatible(STATE_V.tag) is True
    assert is_compatible(f"{STATE_V.major + 1}.0") is False
    assert is_compatible("1") is False
    with pytest.raises(ValueError):
        parse_tag("v1.0")


@pytest.mark.parametrize("bad_date", ["2025/09/20", "2025-9-2", "20-09-2025"])
def test_state_version_rejects_non_iso_date(bad_date: str) -> None:
    with pytest.raises(ValueError, match="StateVersion date must be ISO"):
        StateVersion(major=1, minor=0, date=bad_date)


def test_state_version_rejects_negative_components() -> None:
    with pytest.raises(ValueError, match="major must be non-negative"):
        StateVersion(major=-1, minor=0, date="2026-01-01")


def test_canonical_json_and_hash_are_key_order_invariant() -> None:
    a = {"b": 2, "a": 1, "nested": {"y": 2, "x": 1}, "text": "é"}
    b = {"nested": {"x": 1, "y": 2}, "text": "é", "a": 1, "b": 2}

    assert json_dumps_canonical(a) == json_dumps_canonical(b)
    assert "é" in json_dumps_canonical(a)
    assert hash_state(a) == hash_state(b)
    assert len(hash_state(a)) == 64


def test_in_memory_store_satisfies_protocol() -> None:
    from tabula.io.persistence import InMemoryStateStore

    assert isinstance(InMemoryStateStore(), StateStore)
