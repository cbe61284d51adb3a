"""Tests for `tabula.core.columns` descriptors, missing-value handling and ordering."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

import pytest

from tabula.core.columns import (
    UNAVAILABLE,
    Column,
    ColumnModel,
    compare_values,
    is_missing,
)
from tabula.core.errors import InvalidColumnReference, TableConfigError


@dataclass
class Order:
    id: str
    total: float


def test_from_key_reads_mapping_and_defaults_label_to_id() -> None:
    col = Column.from_key("v")

    assert col.extract({"v": 3}) == 3
    assert col.extract({}) is None
    assert col.header == "v"


def test_from_key_attribute_reads_objects() -> None:
    col = Column.from_key("amount", "total", attribute=True, label="Amount")

    assert col.extract(Order("a", 9.5)) == 9.5
    assert col.header == "Amount"


def test_accessor_errors_propagate_from_extract() -> None:
    col = Column(id="boom", accessor=lambda row: row["nope"])

    with pytest.raises(KeyError):
        col.extract({})


@pytest.mark.parametrize(
    "value", [None, math.nan, Decimal("NaN"), Decimal("sNaN"), UNAVAILABLE]
)
def test_is_missing_true(value) -> None:
    assert is_missing(value) is True


@pytest.mark.parametrize("value", [0, "", False, 0.0])
def test_is_missing_false_for_falsy_values(value) -> None:
    assert is_missing(value) is False


def test_compare_values_numbers_and_strings() -> None:
    assert compare_values(2, 10) == -1
    assert compare_values(10, 9.5) == 1
    assert compare_values("apple", "Banana") == -1
    assert compare_values("ABC", "abc") == 0


def test_compare_values_mixed_kinds_use_fixed_rank() -> None:
    # numbers < dates < strings
    assert compare_values(5, date(2024, 1, 1)) == -1
    assert compare_values(date(2024, 1, 1), "x") == -1
    assert compare_values("1", 1) == 1


def test_compare_puts_missing_last() -> None:
    col = Column.from_key("v")

    assert col.compare({"v": None}, {"v": 1}) == 1
    assert col.compare({"v": 1}, {"v": None}) == -1
    assert col.compare({}, {"v": None}) == 0


def test_custom_comparator_result_is_normalized() -> None:
    col = Column.from_key("v", comparator=lambda a, b: len(a) - len(b))

    assert col.compare({"v": "ccc"}, {"v": "a"}) == 1
    assert col.compare({"v": "a"}, {"v": "bbbbb"}) == -1


def test_column_model_lookup_and_capabilities() -> None:
    model = ColumnModel(
        [
            Column.from_key("id", searchable=False, exportable=False),
            Column.from_key("name"),
        ]
    )

    assert model.ids == ("id", "name")
    assert "name" in model and "nope" not in model
    assert len(model) == 2
    assert [c.id for c in model.searchable()] == ["name"]
    assert [c.id for c in model.exportable()] == ["name"]


def test_column_model_rejects_duplicate_ids() -> None:
    with pytest.raises(TableConfigError, match="duplicate column id"):
        ColumnModel([Column.from_key("a"), Column.from_key("a")])


def test_column_model_get_unknown_raises() -> None:
    model = ColumnModel([Column.from_key("a")])

    with pytest.raises(InvalidColumnReference) as err:
        model.get("zzz")

    assert err.value.column_id == "zzz"
    assert isinstance(err.value, KeyError)
    assert str(err.value) == "unknown column id: 'zzz'"
