"""
Derived table view: the single source of truth for paging, windowing and export.

A `TableView` is an immutable snapshot produced by TableController.get_view(). It
is never stored as state; every state change re-derives it from
(data, columns, sort, filter, pagination, mode).

Notes:
    - ordered_ids / ordered_rows hold the full filtered and sorted order; the visible
      slice (page, window or everything) is carried separately.
    - cell_errors records accessor failures; the affected rows stay in the view with
      the cell treated as missing.
    - duplicate_ids lists identities shared by more than one row; selection and
      windowing correctness is undefined for those rows.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .errors import RowAccessError
from .filtering import FilterState
from .grammar import ViewMode
from .pagination import PaginationState
from .sorting import SortSpec
from .typing import Row
from .virtual import VirtualWindow

__all__ = ["TableView"]


@dataclass(frozen=True)
class TableView:
    """
    Derived view of a table.

    Attributes:
        ordered_ids (tuple[str, ...]): Identities of filtered rows in sorted order.
        ordered_rows (tuple[Row, ...]): Row objects aligned with ordered_ids.
        filtered_count (int): len(ordered_ids).
        total_count (int): Rows in the dataset before filtering.
        mode (ViewMode): How visible rows were cut from the order.
        visible_ids (tuple[str, ...]): Ids on the current page, in the current
            window, or all ordered ids (ViewMode.ALL).
        visible_rows (tuple[Row, ...]): Row objects aligned with visible_ids.
        pagination (PaginationState): Page position the view was derived with.
        page_count (int): Pages needed for filtered_count rows.
        page_out_of_range (bool): The stored page index points past the last page.
        window (VirtualWindow | None): Materialized range in virtual mode.
        sort (SortSpec): Sort spec the view was derived with.
        filter (FilterState): Filter state the view was derived with.
        cell_errors (tuple[RowAccessError, ...]): Accessor failures, in encounter order.
        duplicate_ids (tuple[str, ...]): Identities shared by several rows.
    """

    ordered_ids: tuple[str, ...]
    ordered_rows: tuple[Row, ...]
    filtered_count: int
    total_count: int
    mode: ViewMode = ViewMode.PAGINATED
    visible_ids: tuple[str, ...] = ()
    visible_rows: tuple[Row, ...] = ()
    pagination: PaginationState = field(default_factory=PaginationState)
    page_count: int = 0
    page_out_of_range: bool = False
    window: VirtualWindow | None = None
    sort: SortSpec = field(default_factory=SortSpec)
    filter: FilterState = field(default_factory=FilterState)
    cell_errors: tuple[RowAccessError, ...] = ()
    duplicate_ids: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return self.filtered_count == 0

    @property
    def is_filtered(self) -> bool:
        return self.filtered_count != self.total_count
