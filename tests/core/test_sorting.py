"""Tests for `tabula.core.sorting`: header toggle transitions and the stable multi-key sort."""

from __future__ import annotations

from decimal import Decimal

import pytest

from tabula.core.columns import Column, ColumnModel
from tabula.core.errors import TableConfigError
from tabula.core.grammar import SortDirection
from tabula.core.sorting import SortKey, SortSpec, sort_rows, toggle_sort

COLUMNS = ColumnModel([Column.from_key("id"), Column.from_key("v"), Column.from_key("g")])


def _ids(rows) -> list[str]:
    return [r["id"] for r in rows]


def test_single_toggle_cycles_asc_desc_none() -> None:
    s = toggle_sort(SortSpec(), "v", multi=False)
    assert s == SortSpec.of(("v", "asc"))

    s = toggle_sort(s, "v", multi=False)
    assert s == SortSpec.of(("v", "desc"))

    s = toggle_sort(s, "v", multi=False)
    assert not s


def test_single_toggle_replaces_other_keys() -> None:
    spec = SortSpec.of(("g", "asc"), ("id", "desc"))

    assert toggle_sort(spec, "v", multi=False) == SortSpec.of(("v", "asc"))


def test_multi_toggle_keeps_priority_of_other_keys() -> None:
    spec = SortSpec.of(("g", "asc"), ("v", "asc"), ("id", "desc"))

    flipped = toggle_sort(spec, "v", multi=True)
    assert [(k.column_id, k.direction) for k in flipped] == [
        ("g", SortDirection.ASC),
        ("v", SortDirection.DESC),
        ("id", SortDirection.DESC),
    ]

    removed = toggle_sort(flipped, "v", multi=True)
    assert [k.column_id for k in removed] == ["g", "id"]


def test_sort_spec_rejects_repeated_column() -> None:
    with pytest.raises(TableConfigError):
        SortSpec((SortKey("v", SortDirection.ASC), SortKey("v", SortDirection.DESC)))


def test_sort_spec_queries() -> None:
    spec = SortSpec.of(("g", "desc"), ("v", SortDirection.ASC))

    assert spec.index_of("v") == 1
    assert spec.index_of("id") is None
    assert spec.direction_of("g") is SortDirection.DESC
    assert spec.restricted_to(["v"]) == SortSpec.of(("v", "asc"))


def test_sort_by_numeric_column() -> None:
    rows = [{"id": "a", "v": 3}, {"id": "b", "v": 1}, {"id": "c", "v": 2}]

    assert _ids(sort_rows(rows, SortSpec.of(("v", "asc")), COLUMNS)) == ["b", "c", "a"]
    assert _ids(sort_rows(rows, SortSpec.of(("v", "desc")), COLUMNS)) == ["a", "c", "b"]


def test_sort_is_stable_for_ties() -> None:
    rows = [{"id": str(i), "v": i % 2} for i in range(10)]

    out = sort_rows(rows, SortSpec.of(("v", "asc")), COLUMNS)

    assert _ids(out) == ["0", "2", "4", "6", "8", "1", "3", "5", "7", "9"]


def test_missing_values_last_in_both_directions() -> None:
    rows = [{"id": "a", "v": None}, {"id": "b", "v": 2}, {"id": "c"}, {"id": "d", "v": 5}]

    assert _ids(sort_rows(rows, SortSpec.of(("v", "asc")), COLUMNS)) == ["b", "d", "a", "c"]
    assert _ids(sort_rows(rows, SortSpec.of(("v", "desc")), COLUMNS)) == ["d", "b", "a", "c"]


def test_multi_key_sort_breaks_ties_with_secondary_key() -> None:
    rows = [
        {"id": "a", "g": "x", "v": 2},
        {"id": "b", "g": "y", "v": 1},
        {"id": "c", "g": "x", "v": 1},
        {"id": "d", "g": "Y", "v": 3},
    ]

    out = sort_rows(rows, SortSpec.of(("g", "asc"), ("v", "desc")), COLUMNS)

    assert _ids(out) == ["a", "c", "d", "b"]


def test_empty_spec_and_unknown_columns_keep_order() -> None:
    rows = [{"id": "b"}, {"id": "a"}]

    assert _ids(sort_rows(rows, SortSpec(), COLUMNS)) == ["b", "a"]
    assert _ids(sort_rows(rows, SortSpec.of(("ghost", "asc")), COLUMNS)) == ["b", "a"]


def test_sort_rows_does_not_mutate_input() -> None:
    rows = [{"id": "b", "v": 2}, {"id": "a", "v": 1}]

    sort_rows(rows, SortSpec.of(("v", "asc")), COLUMNS)

    assert _ids(rows) == ["b", "a"]


def test_decimal_nan_sorts_last_like_other_missing_values() -> None:
    rows = [
        {"id": "a", "v": Decimal("1")},
        {"id": "b", "v": Decimal("NaN")},
        {"id": "c", "v": Decimal("0")},
    ]

    assert _ids(sort_rows(rows, SortSpec.of(("v", "asc")), COLUMNS)) == ["c", "a", "b"]
    assert _ids(sort_rows(rows, SortSpec.of(("v", "desc")), COLUMNS)) == ["a", "c", "b"]
