"""
TableController: canonical table state and view derivation.

Responsibilities
- Own the composite state {data, sort, filter, pagination, selection} plus the
  scroll position used in virtual mode.
- Expose explicit transitions (set_data, set_sort, set_filter, set_page,
  set_page_size, ...). Every transition runs to completion and re-derives the
  TableView synchronously: filter -> sort -> (page slice | scroll window | all).
- Recover locally from bad input: unknown column ids are logged no-ops, accessor
  failures become UNAVAILABLE cells recorded on the view, pages past the end yield
  an empty slice with the stored index untouched, duplicate identities are
  reported (or raised in strict mode).

State transitions
- set_data resets page_index to 0 and keeps the selection.
- set_filter / clear_filters reset page_index to 0.
- set_sort keeps page_index.
- set_page_size resets page_index to 0.
- set_scroll / set_viewport only re-window the current view (O(window)).

Determinism
- get_view() is a pure function of the state: no clocks, no randomness. The
  `state_key` fingerprint can key external caches.

Concurrency
- Single-threaded and synchronous. Callers sharing a controller across threads
  must serialize all mutating calls.

Examples:
    >>> from tabula.core.columns import Column
    >>> from tabula.core.controller import TableController
    >>> rows = [{"id": "a", "v": 3}, {"id": "b", "v": 1}, {"id": "c", "v": 2}]
    >>> table = TableController([Column.from_key("id"), Column.from_key("v")], rows)
    >>> table.set_sort("v")
    >>> table.get_view().ordered_ids
    ('b', 'c', 'a')
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import replace
from typing import Any

from .columns import UNAVAILABLE, Column, ColumnModel, item_accessor
from .errors import (
    DuplicateRowIdentity,
    InvalidColumnReference,
    RowAccessError,
    StateVersionMismatch,
)
from .filtering import FilterState, compile_filter
from .grammar import SelectionScope, SortDirection, ViewMode
from .hashing import hash_state
from .options import TableOptions
from .pagination import PaginationState, is_out_of_range, page_count, slice_page
from .schema import (
    FilterSnapshot,
    PaginationSnapshot,
    SortEntry,
    StateStore,
    TableStateSnapshot,
)
from .selection import SelectionManager
from .serializer import RowSerializer
from .sorting import SortKey, SortSpec, sort_rows, toggle_sort
from .typing import Row, RowIdFn
from .versioning import is_compatible
from .view import TableView
from .virtual import VirtualWindow, compute_window

__all__ = ["TableController", "BatchHandler"]

logger = logging.getLogger(__name__)

BatchHandler = Callable[[str, list[Row]], Any]


def _field_row_id(field: str) -> RowIdFn:
    get = item_accessor(field)

    def _row_id(row: Row) -> str:
        return str(get(row))

    return _row_id


class TableController:
    """
    Orchestrates column, sort, filter, selection, pagination and windowing engines.

    Args:
        columns (Iterable[Column] | ColumnModel): Column descriptors (unique ids).
        rows (Iterable[Row]): Initial dataset.
        row_id (RowIdFn | None): Identity function; defaults to
            `str(row.get(options.row_id_field))`.
        options (TableOptions | None): Feature switches and geometry.

    Raises:
        TableConfigError: Duplicate column ids.
        DuplicateRowIdentity: Duplicate identities with options.strict_identity.
    """

    def __init__(
        self,
        columns: Iterable[Column] | ColumnModel,
        rows: Iterable[Row] = (),
        *,
        row_id: RowIdFn | None = None,
        options: TableOptions | None = None,
    ) -> None:
        self.options = options or TableOptions()
        self.columns = columns if isinstance(columns, ColumnModel) else ColumnModel(columns)
        self.selection = SelectionManager()
        self._row_id = row_id or _field_row_id(self.options.row_id_field)
        self._rows: tuple[Row, ...] = ()
        self._ids: tuple[str, ...] = ()
        self._by_id: dict[str, Row] = {}
        self._duplicates: tuple[str, ...] = ()
        self._sort = SortSpec()
        self._filter = FilterState()
        self._pagination = PaginationState(page_size=self.options.page_size)
        self._scroll_offset: float = 0
        self._viewport_extent: float = self.options.viewport_extent
        self._view = TableView(ordered_ids=(), ordered_rows=(), filtered_count=0, total_count=0)
        self.set_data(rows)

    # ---------------------------------------------------------------------
    # State accessors
    # ---------------------------------------------------------------------
    @property
    def mode(self) -> ViewMode:
        return self.options.mode

    @property
    def row_extent(self) -> float:
        return self.options.effective_row_extent

    @property
    def rows(self) -> tuple[Row, ...]:
        return self._rows

    @property
    def sort(self) -> SortSpec:
        return self._sort

    @property
    def filter(self) -> FilterState:
        return self._filter

    @property
    def pagination(self) -> PaginationState:
        return self._pagination

    @property
    def scroll_offset(self) -> float:
        return self._scroll_offset

    @property
    def viewport_extent(self) -> float:
        return self._viewport_extent

    @property
    def has_active_filters(self) -> bool:
        return self._filter.is_active

    def row(self, row_id: str) -> Row | None:
        """Row object for `row_id` (first occurrence), or None."""
        return self._by_id.get(row_id)

    def sort_direction(self, column_id: str) -> SortDirection | None:
        return self._sort.direction_of(column_id)

    def sort_index(self, column_id: str) -> int | None:
        """Priority position of `column_id` in the sort spec (0 = primary)."""
        return self._sort.index_of(column_id)

    # ---------------------------------------------------------------------
    # Transitions
    # ---------------------------------------------------------------------
    def set_data(self, rows: Iterable[Row]) -> None:
        """Replace the dataset; resets page_index to 0, keeps the selection."""
        data = tuple(rows)
        ids = tuple(self._row_id(row) for row in data)
        by_id: dict[str, Row] = {}
        dupes: dict[str, None] = {}
        for rid, row in zip(ids, data, strict=True):
            if rid in by_id:
                dupes[rid] = None
            else:
                by_id[rid] = row
        if dupes:
            if self.options.strict_identity:
                raise DuplicateRowIdentity(tuple(dupes))
            logger.warning(
                "dataset has %d duplicate row identities (first: %r); "
                "selection and windowing are undefined for those rows",
                len(dupes),
                next(iter(dupes)),
            )

        self._rows, self._ids, self._by_id, self._duplicates = data, ids, by_id, tuple(dupes)
        self._pagination = self._pagination.at(0)
        self._recompute()

    def set_columns(self, columns: Iterable[Column] | ColumnModel) -> None:
        """Replace the column model; sort keys and filters on removed columns are dropped."""
        self.columns = columns if isinstance(columns, ColumnModel) else ColumnModel(columns)
        self._sort = self._sort.restricted_to(self.columns.ids)
        self._filter = self._filter.restricted_to(self.columns.ids)
        self._recompute()

    def set_sort(self, column_id: str, multi: bool = False) -> None:
        """
        Toggle sorting on `column_id` (asc -> desc -> none).

        With multi=True (shift-click) the column is appended, flipped or removed
        within the existing spec; otherwise the spec is replaced. Unknown or
        non-sortable columns are ignored.
        """
        if not self.options.enable_sorting:
            return
        column = self._lookup(column_id, "sort")
        if column is None or not column.sortable:
            return
        multi = multi and self.options.enable_multi_sort
        self._sort = toggle_sort(self._sort, column_id, multi=multi)
        self._recompute()

    def set_sort_spec(self, spec: SortSpec) -> None:
        """Replace the sort spec; keys on unknown or non-sortable columns are dropped."""
        keys = []
        for key in spec:
            column = self._lookup(key.column_id, "sort")
            if column is not None and column.sortable:
                keys.append(key)
        self._sort = SortSpec(tuple(keys))
        self._recompute()

    def clear_sort(self) -> None:
        self._sort = SortSpec()
        self._recompute()

    def set_filter(self, column_id: str | None, text: str | None) -> None:
        """
        Set a column's filter text, or the global text when column_id is None.

        Resets page_index to 0. Unknown column ids are ignored.
        """
        text = text or ""
        if column_id is None:
            self._filter = self._filter.with_global(text)
        else:
            if self._lookup(column_id, "filter") is None:
                return
            self._filter = self._filter.with_column(column_id, text)
        self._pagination = self._pagination.at(0)
        self._recompute()

    def clear_filters(self) -> None:
        """Clear the global and every per-column filter; resets page_index to 0."""
        self._filter = self._filter.cleared()
        self._pagination = self._pagination.at(0)
        self._recompute()

    def set_page(self, index: int) -> None:
        """Move to page `index` (negative counts as 0); past-the-end is allowed."""
        self._pagination = self._pagination.at(index)
        self._recompute()

    def set_page_size(self, size: int) -> None:
        """
        Change rows per page and reset page_index to 0.

        Raises:
            TableConfigError: If size < 1.
        """
        self._pagination = self._pagination.sized(size)
        self._recompute()

    @property
    def page_count(self) -> int:
        return self._view.page_count

    @property
    def can_previous_page(self) -> bool:
        return self._pagination.page_index > 0

    @property
    def can_next_page(self) -> bool:
        return self._pagination.page_index < self.page_count - 1

    def next_page(self) -> None:
        if self.can_next_page:
            self.set_page(self._pagination.page_index + 1)

    def previous_page(self) -> None:
        if self.can_previous_page:
            self.set_page(self._pagination.page_index - 1)

    def first_page(self) -> None:
        self.set_page(0)

    def last_page(self) -> None:
        self.set_page(max(0, self.page_count - 1))

    # ---------------------------------------------------------------------
    # Virtual window
    # ---------------------------------------------------------------------
    def set_scroll(self, offset: float) -> None:
        """Record a scroll position and re-window the current view."""
        self._scroll_offset = max(0, offset)
        self._rewindow()

    def set_viewport(self, extent: float) -> None:
        """Record the scroll container extent and re-window the current view."""
        self._viewport_extent = max(0, extent)
        self._rewindow()

    def window(self) -> VirtualWindow:
        """Window for the current scroll position over the current view (O(1))."""
        return compute_window(
            self._view.filtered_count,
            self.row_extent,
            self._viewport_extent,
            self._scroll_offset,
            self.options.overscan,
        )

    # ---------------------------------------------------------------------
    # View
    # ---------------------------------------------------------------------
    def get_view(self) -> TableView:
        """Current derived view (already recomputed by the last transition)."""
        return self._view

    def visible_rows(self) -> tuple[Row, ...]:
        """Row objects to render: page slice, scroll window, or all filtered rows."""
        return self._view.visible_rows

    @property
    def state_key(self) -> str:
        """Fingerprint of (sort, filter, pagination); equal keys derive equal views."""
        return hash_state(self.snapshot().model_dump())

    # ---------------------------------------------------------------------
    # Selection
    # ---------------------------------------------------------------------
    def toggle_row(self, row_id: str) -> bool:
        """Toggle selection of `row_id`; ids outside the dataset are allowed."""
        if not self.options.enable_row_selection:
            return False
        return self.selection.toggle(row_id)

    def is_selected(self, row_id: str) -> bool:
        return self.selection.is_selected(row_id)

    def selected_ids(self) -> set[str]:
        return self.selection.selected_ids()

    def clear_selection(self) -> None:
        self.selection.clear()

    @property
    def is_all_page_rows_selected(self) -> bool:
        ids = self._view.visible_ids
        return bool(ids) and all(self.selection.is_selected(i) for i in ids)

    @property
    def is_some_page_rows_selected(self) -> bool:
        """Some but not all visible rows are selected (indeterminate checkbox)."""
        ids = self._view.visible_ids
        hits = sum(1 for i in ids if self.selection.is_selected(i))
        return 0 < hits < len(ids)

    def toggle_all_page_rows(self) -> None:
        """Select every visible row, or deselect them all when all are selected."""
        if not self.options.enable_row_selection:
            return
        self.selection.set_all(self._view.visible_ids, not self.is_all_page_rows_selected)

    def prune_selection(self) -> tuple[str, ...]:
        """Drop selected ids that no longer exist in the dataset; returns them."""
        removed = self.selection.prune(self._by_id)
        if removed:
            logger.debug("pruned %d stale selected ids", len(removed))
        return removed

    def selected_rows(self) -> list[Row]:
        """Selected row objects present in the dataset, in dataset order."""
        if not self.options.enable_row_selection or not len(self.selection):
            return []
        return [self._by_id[i] for i in self._by_id if self.selection.is_selected(i)]

    def run_batch_action(self, action_id: str, handler: BatchHandler) -> bool:
        """
        Hand the selected row objects to a batch-action collaborator.

        Returns:
            bool: True if the handler was called (at least one row selected).
        """
        rows = self.selected_rows()
        if not rows:
            return False
        logger.debug("batch action %r on %d rows", action_id, len(rows))
        handler(action_id, rows)
        return True

    # ---------------------------------------------------------------------
    # Export
    # ---------------------------------------------------------------------
    def export_text(
        self,
        scope: SelectionScope = SelectionScope.SELECTED,
        serializer: RowSerializer | None = None,
    ) -> str:
        """Serialize the current view (selected rows if any, else all rows by default)."""
        serializer = serializer or RowSerializer()
        return serializer.serialize(self.get_view(), self.columns, scope, self.selected_ids())

    # ---------------------------------------------------------------------
    # Persistence
    # ---------------------------------------------------------------------
    def snapshot(self) -> TableStateSnapshot:
        """Serializable sort/filter/pagination state (selection excluded)."""
        return TableStateSnapshot(
            sort=[SortEntry(column_id=k.column_id, direction=k.direction.value) for k in self._sort],
            filter=FilterSnapshot(
                per_column=dict(self._filter.per_column),
                global_text=self._filter.global_text,
            ),
            pagination=PaginationSnapshot(
                page_index=self._pagination.page_index,
                page_size=self._pagination.page_size,
            ),
        )

    def restore(self, snapshot: TableStateSnapshot) -> None:
        """
        Apply a snapshot; references to unknown columns are dropped.

        Raises:
            StateVersionMismatch: If the snapshot version is incompatible.
        """
        if not is_compatible(snapshot.version):
            raise StateVersionMismatch(f"cannot restore table state version {snapshot.version!r}")
        keys = []
        for entry in snapshot.sort:
            column = self._lookup(entry.column_id, "sort")
            if column is not None and column.sortable:
                keys.append(SortKey(entry.column_id, SortDirection(entry.direction)))
        filter_state = FilterState(global_text=snapshot.filter.global_text)
        for column_id, text in snapshot.filter.per_column.items():
            if self._lookup(column_id, "filter") is not None:
                filter_state = filter_state.with_column(column_id, text)

        self._sort = SortSpec(tuple(keys))
        self._filter = filter_state
        self._pagination = PaginationState(
            page_index=snapshot.pagination.page_index,
            page_size=snapshot.pagination.page_size,
        )
        self._recompute()

    def save(self, store: StateStore) -> None:
        store.save(self.snapshot())

    def load(self, store: StateStore) -> bool:
        """Restore from `store`; returns False when it holds nothing usable."""
        snapshot = store.load()
        if snapshot is None:
            return False
        self.restore(snapshot)
        return True

    # ---------------------------------------------------------------------
    # Derivation
    # ---------------------------------------------------------------------
    def _lookup(self, column_id: str, what: str) -> Column | None:
        try:
            return self.columns.get(column_id)
        except InvalidColumnReference as exc:
            logger.warning("ignoring %s on %s", what, exc)
            return None

    def _recompute(self) -> None:
        rows, ids = self._rows, self._ids
        errors: list[RowAccessError] = []
        cache: dict[tuple[int, str], Any] = {}

        # Engines work on row positions; cells are extracted at most once.
        def cell(column: Column, index: int) -> Any:
            key = (index, column.id)
            if key in cache:
                return cache[key]
            try:
                value = column.extract(rows[index])
            except Exception as exc:
                value = UNAVAILABLE
                errors.append(RowAccessError(ids[index], column.id, exc))
            cache[key] = value
            return value

        keep = compile_filter(
            self._filter,
            self.columns,
            extract=cell,
            use_column_filters=self.options.enable_column_filters,
            use_global_filter=self.options.enable_global_filter,
        )
        order: Sequence[int] = [i for i in range(len(rows)) if keep(i)]
        if self.options.enable_sorting and self._sort:
            order = sort_rows(order, self._sort, self.columns, extract=cell)

        ordered_ids = tuple(ids[i] for i in order)
        ordered_rows = tuple(rows[i] for i in order)
        filtered = len(order)
        view = TableView(
            ordered_ids=ordered_ids,
            ordered_rows=ordered_rows,
            filtered_count=filtered,
            total_count=len(rows),
            mode=self.mode,
            pagination=self._pagination,
            page_count=page_count(filtered, self._pagination.page_size),
            page_out_of_range=is_out_of_range(self._pagination, filtered),
            sort=self._sort,
            filter=self._filter,
            cell_errors=tuple(errors),
            duplicate_ids=self._duplicates,
        )
        if errors:
            logger.debug("%d cells unavailable after accessor errors", len(errors))
        logger.debug(
            "derived view: %d/%d rows, sort=%s, page=%d",
            filtered,
            len(rows),
            [(k.column_id, k.direction.value) for k in self._sort],
            self._pagination.page_index,
        )
        self._view = self._cut(view)

    def _cut(self, view: TableView) -> TableView:
        if view.mode is ViewMode.PAGINATED:
            return replace(
                view,
                visible_ids=tuple(slice_page(view.ordered_ids, view.pagination)),
                visible_rows=tuple(slice_page(view.ordered_rows, view.pagination)),
                window=None,
            )
        if view.mode is ViewMode.VIRTUAL:
            window = compute_window(
                view.filtered_count,
                self.row_extent,
                self._viewport_extent,
                self._scroll_offset,
                self.options.overscan,
            )
            return replace(
                view,
                visible_ids=tuple(window.take(view.ordered_ids)),
                visible_rows=tuple(window.take(view.ordered_rows)),
                window=window,
            )
        return replace(view, visible_ids=view.ordered_ids, visible_rows=view.ordered_rows, window=None)

    def _rewindow(self) -> None:
        if self._view.mode is ViewMode.VIRTUAL:
            self._view = self._cut(self._view)
