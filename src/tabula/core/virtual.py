"""
Virtual window calculation for large views (1000+ rows).

Computes the minimal contiguous index range to materialize for a scroll position,
assuming a fixed estimated row extent. The calculation is O(1) and meant to run on
every scroll event without debouncing; smoothing is the caller's concern.

Algorithm
    raw_start     = floor(scroll_offset / row_extent)
    visible_count = ceil(viewport_extent / row_extent)
    start_index   = max(0, raw_start - overscan)
    end_index     = min(total_count - 1, raw_start + visible_count + overscan)

Notes:
    - end_index is inclusive. An empty view yields start_index > end_index
      (0, -1), never negative start indices.
    - Negative scroll offsets count as 0; raw_start is clamped to the last row so a
      stale offset after the view shrank still yields a non-empty window.
    - The window always covers every row intersecting
      [scroll_offset, scroll_offset + viewport_extent]; overscan only widens it.

Examples:
    >>> from tabula.core.virtual import compute_window
    >>> w = compute_window(1000, 40, 600, 2000, 5)
    >>> (w.start_index, w.end_index)
    (45, 70)
    >>> compute_window(0, 40, 600, 0, 5).is_empty
    True
"""

from __future__ import annotations

import math
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import TypeVar

from .errors import TableConfigError

__all__ = [
    "VirtualItem",
    "VirtualWindow",
    "compute_window",
    "total_extent",
]

T = TypeVar("T")


@dataclass(frozen=True)
class VirtualItem:
    """
    One materialized row position.

    Attributes:
        index (int): Row index in the view order.
        start (float): Leading pixel offset.
        end (float): Trailing pixel offset (start + size).
        size (float): Row extent.
    """

    index: int
    start: float
    end: float
    size: float


@dataclass(frozen=True)
class VirtualWindow:
    """
    Inclusive index range to materialize; ephemeral, never persisted.

    Attributes:
        start_index (int): First index to render.
        end_index (int): Last index to render (inclusive); < start_index when empty.
        row_extent (float): Estimated extent of one row.
    """

    start_index: int
    end_index: int
    row_extent: float

    @property
    def is_empty(self) -> bool:
        return self.start_index > self.end_index

    def __len__(self) -> int:
        return max(0, self.end_index - self.start_index + 1)

    def indices(self) -> range:
        return range(self.start_index, self.end_index + 1)

    def items(self) -> Iterator[VirtualItem]:
        size = self.row_extent
        for i in self.indices():
            yield VirtualItem(index=i, start=i * size, end=(i + 1) * size, size=size)

    def take(self, seq: Sequence[T]) -> list[T]:
        """Materialize the window's elements from a view-ordered sequence."""
        if self.is_empty:
            return []
        return list(seq[self.start_index : self.end_index + 1])

    @property
    def offset_before(self) -> float:
        """Spacer extent above the first materialized row."""
        return 0 if self.is_empty else self.start_index * self.row_extent

    def offset_after(self, total_count: int) -> float:
        """Spacer extent below the last materialized row."""
        if self.is_empty:
            return 0
        return max(0, total_extent(total_count, self.row_extent) - (self.end_index + 1) * self.row_extent)


def total_extent(total_count: int, row_extent: float) -> float:
    """Scrollable extent of `total_count` rows."""
    return max(0, total_count) * row_extent


def compute_window(
    total_count: int,
    row_extent: float,
    viewport_extent: float,
    scroll_offset: float,
    overscan: int,
) -> VirtualWindow:
    """
    Compute the window of rows to materialize.

    Args:
        total_count (int): Rows in the (filtered/sorted) view.
        row_extent (float): Estimated row extent (> 0).
        viewport_extent (float): Visible extent of the scroll container.
        scroll_offset (float): Current scroll position.
        overscan (int): Extra rows above and below the visible range (>= 0).

    Returns:
        VirtualWindow: Inclusive range; empty (0, -1) when total_count == 0.

    Raises:
        TableConfigError: If row_extent <= 0.
    """
    if row_extent <= 0:
        raise TableConfigError(f"row_extent must be positive, got {row_extent}")
    if total_count <= 0:
        return VirtualWindow(start_index=0, end_index=-1, row_extent=row_extent)

    overscan = max(0, int(overscan))
    raw_start = min(math.floor(max(0, scroll_offset) / row_extent), total_count - 1)
    visible_count = math.ceil(max(0, viewport_extent) / row_extent)
    start_index = max(0, raw_start - overscan)
    end_index = min(total_count - 1, raw_start + visible_count + overscan)
    return VirtualWindow(start_index=start_index, end_index=end_index, row_extent=row_extent)
