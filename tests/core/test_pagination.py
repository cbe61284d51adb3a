"""Tests for `tabula.core.pagination` slicing, counts, bounds and page lists."""

from __future__ import annotations

import pytest

from tabula.core.errors import TableConfigError
from tabula.core.pagination import (
    ELLIPSIS,
    PaginationState,
    is_out_of_range,
    page_bounds,
    page_count,
    page_numbers,
    slice_page,
)


def test_second_page_of_three_rows_holds_the_third_row() -> None:
    state = PaginationState(page_index=1, page_size=2)

    assert slice_page(["b", "c", "a"], state) == ["a"]


@pytest.mark.parametrize(
    "count,size,expected",
    [(0, 10, 0), (1, 10, 1), (10, 10, 1), (11, 10, 2), (3, 2, 2)],
)
def test_page_count(count: int, size: int, expected: int) -> None:
    assert page_count(count, size) == expected


@pytest.mark.parametrize("count,size", [(0, 3), (7, 3), (9, 3), (25, 10), (1, 1)])
def test_pages_cover_the_order_exactly_once(count: int, size: int) -> None:
    items = list(range(count))

    pages = [
        slice_page(items, PaginationState(page_index=i, page_size=size))
        for i in range(page_count(count, size))
    ]

    assert [x for page in pages for x in page] == items


def test_past_the_end_yields_empty_slice_and_flag() -> None:
    state = PaginationState(page_index=5, page_size=10)

    assert slice_page(list(range(12)), state) == []
    assert is_out_of_range(state, 12) is True
    assert is_out_of_range(state, 0) is False
    assert is_out_of_range(PaginationState(page_index=1, page_size=10), 12) is False


def test_state_validation() -> None:
    with pytest.raises(TableConfigError):
        PaginationState(page_size=0)
    with pytest.raises(TableConfigError):
        PaginationState(page_index=-1)


def test_at_clamps_negative_and_sized_resets_index() -> None:
    state = PaginationState(page_index=3, page_size=10)

    assert state.at(-4).page_index == 0
    assert state.sized(25) == PaginationState(page_index=0, page_size=25)
    assert state.offset == 30


@pytest.mark.parametrize(
    "index,count,expected",
    [
        (0, 10, (1, 10)),
        (1, 15, (11, 15)),
        (0, 0, (0, 0)),
        (4, 15, (0, 0)),
    ],
)
def test_page_bounds(index: int, count: int, expected: tuple[int, int]) -> None:
    assert page_bounds(PaginationState(page_index=index, page_size=10), count) == expected


@pytest.mark.parametrize(
    "index,count,expected",
    [
        (0, 0, []),
        (2, 7, [0, 1, 2, 3, 4, 5, 6]),
        (0, 20, [0, 1, ELLIPSIS, 19]),
        (1, 20, [0, 1, 2, ELLIPSIS, 19]),
        (5, 20, [0, ELLIPSIS, 4, 5, 6, ELLIPSIS, 19]),
        (17, 20, [0, ELLIPSIS, 16, 17, 18, 19]),
        (19, 20, [0, ELLIPSIS, 18, 19]),
    ],
)
def test_page_numbers(index: int, count: int, expected: list) -> None:
    assert page_numbers(index, count) == expected
