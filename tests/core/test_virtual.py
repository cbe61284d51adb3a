"""Tests for `tabula.core.virtual` window computation and spacer geometry."""

from __future__ import annotations

import math

import pytest

from tabula.core.errors import TableConfigError
from tabula.core.virtual import VirtualItem, VirtualWindow, compute_window, total_extent


def test_reference_window() -> None:
    w = compute_window(1000, 40, 600, 2000, 5)

    assert (w.start_index, w.end_index) == (45, 70)
    assert len(w) == 26


def test_empty_dataset_gives_empty_range() -> None:
    w = compute_window(0, 44, 500, 300, 10)

    assert w.is_empty
    assert w.start_index > w.end_index
    assert w.start_index >= 0
    assert len(w) == 0
    assert w.take(["x"]) == []
    assert list(w.items()) == []


def test_window_clamps_at_both_ends() -> None:
    top = compute_window(100, 10, 50, 0, 10)
    assert (top.start_index, top.end_index) == (0, 15)

    bottom = compute_window(100, 10, 50, 980, 10)
    assert bottom.end_index == 99


def test_scroll_past_the_end_still_materializes_last_rows() -> None:
    w = compute_window(10, 40, 400, 10_000, 2)

    assert not w.is_empty
    assert w.end_index == 9
    assert w.start_index == 7


def test_non_positive_row_extent_is_rejected() -> None:
    with pytest.raises(TableConfigError):
        compute_window(10, 0, 100, 0, 1)


@pytest.mark.parametrize("overscan", [0, 3])
@pytest.mark.parametrize("offset", [0, 1, 39, 40, 555.5, 1234, 39_400])
def test_window_covers_the_visible_pixels(offset: float, overscan: int) -> None:
    total, extent, viewport = 1000, 40, 600
    assert offset <= total * extent - viewport

    w = compute_window(total, extent, viewport, offset, overscan)

    first_visible = math.floor(offset / extent)
    last_visible = min(total - 1, math.ceil((offset + viewport) / extent) - 1)
    assert w.start_index <= first_visible
    assert w.end_index >= last_visible


def test_items_and_spacers() -> None:
    w = VirtualWindow(start_index=2, end_index=3, row_extent=36)

    assert list(w.items()) == [
        VirtualItem(index=2, start=72, end=108, size=36),
        VirtualItem(index=3, start=108, end=144, size=36),
    ]
    assert w.offset_before == 72
    assert w.offset_after(10) == 36 * 10 - 144
    assert w.take(list("abcdef")) == ["c", "d"]


def test_total_extent() -> None:
    assert total_extent(25, 44) == 1100
    assert total_extent(0, 44) == 0
