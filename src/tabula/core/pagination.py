"""
Page slicing over a filtered/sorted sequence.

Responsibilities
- Hold the page position (`PaginationState`: page_index >= 0, page_size >= 1).
- Slice the current page out of an ordered sequence. A
  page_index past the end yields an empty slice, never an error, and the stored
  index is left untouched.
- Derive navigation data for pagination controls (page count, 1-based row bounds,
  compact page number lists with ellipsis markers).

Notes:
    - page_count(0, size) == 0; an empty view has no pages.
    - Concatenating pages 0..page_count-1 reproduces the input order exactly.

Examples:
    >>> from tabula.core.pagination import PaginationState, slice_page
    >>> slice_page(["b", "c", "a"], PaginationState(page_index=1, page_size=2))
    ['a']
    >>> slice_page(["b", "c", "a"], PaginationState(page_index=5, page_size=2))
    []
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, replace
from typing import Literal, TypeVar

from .constants import DEFAULT_PAGE_SIZE, PAGE_LIST_LIMIT
from .errors import TableConfigError

__all__ = [
    "ELLIPSIS",
    "PaginationState",
    "page_count",
    "slice_page",
    "is_out_of_range",
    "page_bounds",
    "page_numbers",
]

T = TypeVar("T")

ELLIPSIS: Literal["ellipsis"] = "ellipsis"


@dataclass(frozen=True)
class PaginationState:
    """
    Page position.

    Attributes:
        page_index (int): Zero-based page index; may point past the last page.
        page_size (int): Rows per page (>= 1).

    Raises:
        TableConfigError: If page_index < 0 or page_size < 1.
    """

    page_index: int = 0
    page_size: int = DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        if self.page_index < 0:
            raise TableConfigError(f"page_index must be non-negative, got {self.page_index}")
        if self.page_size < 1:
            raise TableConfigError(f"page_size must be positive, got {self.page_size}")

    @property
    def offset(self) -> int:
        return self.page_index * self.page_size

    def at(self, page_index: int) -> PaginationState:
        return replace(self, page_index=max(0, page_index))

    def sized(self, page_size: int) -> PaginationState:
        """Return a state with a new page size and page_index reset to 0."""
        return PaginationState(page_index=0, page_size=page_size)


def page_count(filtered_count: int, page_size: int) -> int:
    """Number of pages needed for `filtered_count` rows (0 for an empty view)."""
    if filtered_count <= 0:
        return 0
    return -(-filtered_count // page_size)


def slice_page(items: Sequence[T], state: PaginationState) -> list[T]:
    """Return the items on the current page; empty when the page is past the end."""
    start = state.offset
    if start >= len(items):
        return []
    return list(items[start : start + state.page_size])


def is_out_of_range(state: PaginationState, filtered_count: int) -> bool:
    """True when the page starts at or beyond the end of a non-empty view."""
    return filtered_count > 0 and state.offset >= filtered_count


def page_bounds(state: PaginationState, filtered_count: int) -> tuple[int, int]:
    """
    1-based (first_row, last_row) shown on the current page.

    Returns (0, 0) when the view is empty or the page is past the end.

    Examples:
        >>> page_bounds(PaginationState(page_index=1, page_size=10), 15)
        (11, 15)
    """
    start = state.offset
    if start >= filtered_count:
        return (0, 0)
    return (start + 1, min(start + state.page_size, filtered_count))


def page_numbers(page_index: int, count: int) -> list[int | Literal["ellipsis"]]:
    """
    Compact list of page indices for pagination controls.

    All pages are listed when there are at most 7; otherwise the first page, the
    neighbours of the current page and the last page, with ELLIPSIS markers for
    the gaps.

    Examples:
        >>> page_numbers(0, 3)
        [0, 1, 2]
        >>> page_numbers(5, 20)
        [0, 'ellipsis', 4, 5, 6, 'ellipsis', 19]
        >>> page_numbers(1, 20)
        [0, 1, 2, 'ellipsis', 19]
    """
    if count <= PAGE_LIST_LIMIT:
        return list(range(count))
    pages: list[int | Literal["ellipsis"]] = [0]
    if page_index > 2:
        pages.append(ELLIPSIS)
    for i in range(max(1, page_index - 1), min(count - 2, page_index + 1) + 1):
        pages.append(i)
    if page_index < count - 3:
        pages.append(ELLIPSIS)
    pages.append(count - 1)
    return pages
