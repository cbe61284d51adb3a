"""
Stable multi-key sorting over column descriptors.

Responsibilities
- Represent an ordered sort specification (`SortSpec` of `SortKey`s, earlier keys
  are primary).
- Sort rows key-by-key: the first non-zero column comparison decides; full ties keep
  the original relative order (Python's list.sort is stable).
- Provide the header-click transition (`toggle_sort`) for single and multi
  (shift-click) sorting: asc -> desc -> none.

Ordering policy
- Direction flips the sign of the column comparison, never the comparator itself.
- Missing values (None, NaN, UNAVAILABLE) sort last in both directions.
- Each cell is extracted once per sort (decorate-sort-undecorate); comparisons run
  over the cached values.

Examples:
    >>> from tabula.core.columns import Column, ColumnModel
    >>> from tabula.core.sorting import SortSpec, sort_rows, toggle_sort
    >>> cols = ColumnModel([Column.from_key("id"), Column.from_key("v")])
    >>> rows = [{"id": "a", "v": 3}, {"id": "b", "v": 1}, {"id": "c", "v": 2}]
    >>> spec = toggle_sort(SortSpec(), "v", multi=False)
    >>> [r["id"] for r in sort_rows(rows, spec, cols)]
    ['b', 'c', 'a']
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass
from functools import cmp_to_key
from typing import Any

from .columns import Column, ColumnModel, is_missing
from .errors import TableConfigError
from .grammar import SortDirection
from .typing import Row

__all__ = [
    "SortKey",
    "SortSpec",
    "sort_rows",
    "toggle_sort",
]

CellExtractor = Callable[[Column, Row], Any]


@dataclass(frozen=True)
class SortKey:
    """
    One entry of a sort specification.

    Attributes:
        column_id (str): Column to sort by.
        direction (SortDirection): Ascending or descending.
    """

    column_id: str
    direction: SortDirection = SortDirection.ASC

    @property
    def descending(self) -> bool:
        return self.direction is SortDirection.DESC


@dataclass(frozen=True)
class SortSpec:
    """
    Ordered, duplicate-free sequence of sort keys (earlier = higher priority).

    Raises:
        TableConfigError: If a column id appears twice.
    """

    keys: tuple[SortKey, ...] = ()

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for key in self.keys:
            if key.column_id in seen:
                raise TableConfigError(f"column {key.column_id!r} appears twice in sort spec")
            seen.add(key.column_id)

    @classmethod
    def of(cls, *pairs: tuple[str, SortDirection | str]) -> SortSpec:
        """Build a spec from (column_id, direction) pairs; direction may be a string."""
        return cls(
            tuple(
                SortKey(cid, d if isinstance(d, SortDirection) else SortDirection(d))
                for cid, d in pairs
            )
        )

    def __iter__(self) -> Iterator[SortKey]:
        return iter(self.keys)

    def __len__(self) -> int:
        return len(self.keys)

    def __bool__(self) -> bool:
        return bool(self.keys)

    def index_of(self, column_id: str) -> int | None:
        for i, key in enumerate(self.keys):
            if key.column_id == column_id:
                return i
        return None

    def direction_of(self, column_id: str) -> SortDirection | None:
        i = self.index_of(column_id)
        return None if i is None else self.keys[i].direction

    def restricted_to(self, column_ids: Iterable[str]) -> SortSpec:
        """Drop keys whose column id is not in `column_ids`, keeping priority order."""
        allowed = set(column_ids)
        return SortSpec(tuple(k for k in self.keys if k.column_id in allowed))


def toggle_sort(spec: SortSpec, column_id: str, *, multi: bool) -> SortSpec:
    """
    Apply one header activation for `column_id` and return the new spec.

    Single mode (multi=False) replaces the whole spec with one key cycling
    asc -> desc -> none for that column. Multi mode appends the column as asc,
    flips asc to desc in place, or removes it when desc, leaving the other keys and
    their relative priority untouched.

    Examples:
        >>> s = toggle_sort(SortSpec(), "a", multi=False)
        >>> s = toggle_sort(s, "b", multi=True)
        >>> [(k.column_id, k.direction.value) for k in s]
        [('a', 'asc'), ('b', 'asc')]
        >>> s = toggle_sort(s, "a", multi=True)
        >>> [(k.column_id, k.direction.value) for k in s]
        [('a', 'desc'), ('b', 'asc')]
        >>> [k.column_id for k in toggle_sort(s, "a", multi=True)]
        ['b']
    """
    current = spec.direction_of(column_id)
    if not multi:
        if current is None:
            return SortSpec((SortKey(column_id, SortDirection.ASC),))
        if current is SortDirection.ASC:
            return SortSpec((SortKey(column_id, SortDirection.DESC),))
        return SortSpec()

    if current is None:
        return SortSpec(spec.keys + (SortKey(column_id, SortDirection.ASC),))
    if current is SortDirection.ASC:
        return SortSpec(
            tuple(
                SortKey(column_id, SortDirection.DESC) if k.column_id == column_id else k
                for k in spec.keys
            )
        )
    return SortSpec(tuple(k for k in spec.keys if k.column_id != column_id))


def _extract(column: Column, row: Row) -> Any:
    return column.extract(row)


def sort_rows(
    rows: Sequence[Row],
    spec: SortSpec,
    columns: ColumnModel,
    *,
    extract: CellExtractor | None = None,
) -> list[Row]:
    """
    Stable multi-key sort of rows.

    Args:
        rows (Sequence[Row]): Rows in their current (e.g. filtered data) order.
        spec (SortSpec): Active keys in priority order; empty means identity order.
        columns (ColumnModel): Column descriptors; keys naming unknown columns are
            skipped.
        extract (CellExtractor | None): Cell reader `(column, row) -> value`. The
            controller passes one that records accessor errors and yields
            UNAVAILABLE; defaults to Column.extract (errors propagate).

    Returns:
        list[Row]: A new list; `rows` is not modified.
    """
    out = list(rows)
    plan = [
        (columns.get(k.column_id), k.descending) for k in spec if k.column_id in columns
    ]
    if not plan:
        return out
    get = extract or _extract

    decorated = [(tuple(get(col, row) for col, _ in plan), row) for row in out]

    def _cmp(x: tuple[tuple[Any, ...], Row], y: tuple[tuple[Any, ...], Row]) -> int:
        for pos, (col, descending) in enumerate(plan):
            a, b = x[0][pos], y[0][pos]
            missing_a, missing_b = is_missing(a), is_missing(b)
            if missing_a or missing_b:
                c = missing_a - missing_b
            else:
                c = col.compare_values(a, b)
                if descending:
                    c = -c
            if c:
                return c
        return 0

    decorated.sort(key=cmp_to_key(_cmp))
    return [row for _, row in decorated]
