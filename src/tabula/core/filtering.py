"""
Per-column and global text filtering.

Responsibilities
- Hold filter text per column plus one global (cross-column) text (`FilterState`).
- Decide keep/drop for a row: every active per-column predicate passes AND (global
  text is empty OR the global predicate passes).

Matching policy
- Predicates are case-insensitive substring containment of the filter text within
  the stringified cell value.
- Per-column text configured for a column with `filterable=False` is ignored, as is
  text naming a column id the model does not know.
- The global predicate scans only columns with `searchable=True`.
- Missing cells (None, NaN, UNAVAILABLE) never match a non-empty filter.
- Empty string means "no filter" for that slot. Text is not trimmed.

Stringification
- Deterministic and locale-independent (`stringify`): filtering matches what was
  typed against raw values, never against display formatting.

Examples:
    >>> from tabula.core.columns import Column, ColumnModel
    >>> from tabula.core.filtering import FilterState, keep
    >>> cols = ColumnModel([Column.from_key("id", searchable=False), Column.from_key("v")])
    >>> state = FilterState().with_global("2")
    >>> [keep(r, state, cols) for r in ({"id": "a2", "v": 3}, {"id": "c", "v": 2})]
    [False, True]
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date, time
from decimal import Decimal
from typing import Any

from .columns import Column, ColumnModel, is_missing
from .typing import Row

__all__ = [
    "FilterState",
    "stringify",
    "compile_filter",
    "keep",
    "filter_rows",
]

CellExtractor = Callable[[Column, Row], Any]
RowPredicate = Callable[[Row], bool]


@dataclass(frozen=True)
class FilterState:
    """
    Filter texts for one table.

    Attributes:
        per_column (Mapping[str, str]): column_id -> filter text. Only non-empty texts
            are stored.
        global_text (str): Cross-column filter text ("" = no global filter).
    """

    per_column: Mapping[str, str] = field(default_factory=dict)
    global_text: str = ""

    def with_column(self, column_id: str, text: str) -> FilterState:
        """Return a copy with `column_id`'s text set (or removed when empty)."""
        updated = {k: v for k, v in self.per_column.items() if k != column_id}
        if text:
            updated[column_id] = text
        return FilterState(per_column=updated, global_text=self.global_text)

    def with_global(self, text: str) -> FilterState:
        return FilterState(per_column=dict(self.per_column), global_text=text or "")

    def cleared(self) -> FilterState:
        return FilterState()

    def restricted_to(self, column_ids: Iterable[str]) -> FilterState:
        """Drop per-column texts for column ids not in `column_ids`."""
        allowed = set(column_ids)
        return FilterState(
            per_column={k: v for k, v in self.per_column.items() if k in allowed},
            global_text=self.global_text,
        )

    @property
    def is_active(self) -> bool:
        return bool(self.global_text) or any(self.per_column.values())


def stringify(value: Any) -> str:
    """
    Deterministic, locale-independent text form of a cell value for matching.

    Rules:
        - Missing values (None, NaN, UNAVAILABLE) -> "".
        - bool -> "true" / "false".
        - Integral finite floats drop the fractional part (2.0 -> "2").
        - date/datetime/time -> ISO 8601.
        - Everything else -> str(value).

    Examples:
        >>> stringify(2.0), stringify(2.5), stringify(True), stringify(None)
        ('2', '2.5', 'true', '')
    """
    if is_missing(value):
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, Decimal):
        return format(value, "f")
    if isinstance(value, (date, time)):
        return value.isoformat()
    return str(value)


def _extract(column: Column, row: Row) -> Any:
    return column.extract(row)


def _contains(value: Any, needle: str) -> bool:
    if is_missing(value):
        return False
    return needle in stringify(value).casefold()


def compile_filter(
    state: FilterState,
    columns: ColumnModel,
    *,
    extract: CellExtractor | None = None,
    use_column_filters: bool = True,
    use_global_filter: bool = True,
) -> RowPredicate:
    """
    Build a row predicate for `state`, folding filter texts once.

    Args:
        state (FilterState): Filter texts.
        columns (ColumnModel): Column descriptors.
        extract (CellExtractor | None): Cell reader `(column, row) -> value`;
            defaults to Column.extract (accessor errors propagate).
        use_column_filters (bool): Apply per-column texts.
        use_global_filter (bool): Apply the global text.

    Returns:
        Callable[[Row], bool]: True when the row is kept.
    """
    get = extract or _extract
    column_preds: list[tuple[Column, str]] = []
    if use_column_filters:
        for column_id, text in state.per_column.items():
            if not text or column_id not in columns:
                continue
            col = columns.get(column_id)
            if col.filterable:
                column_preds.append((col, text.casefold()))

    global_needle = state.global_text.casefold() if use_global_filter else ""
    searchable = columns.searchable()

    def _keep(row: Row) -> bool:
        for col, needle in column_preds:
            if not _contains(get(col, row), needle):
                return False
        if global_needle:
            return any(_contains(get(col, row), global_needle) for col in searchable)
        return True

    return _keep


def keep(
    row: Row,
    state: FilterState,
    columns: ColumnModel,
    *,
    extract: CellExtractor | None = None,
) -> bool:
    """Decide whether one row passes `state` (see compile_filter)."""
    return compile_filter(state, columns, extract=extract)(row)


def filter_rows(
    rows: Iterable[Row],
    state: FilterState,
    columns: ColumnModel,
    **options: Any,
) -> list[Row]:
    """Keep rows passing `state`, preserving their order; options go to compile_filter."""
    predicate = compile_filter(state, columns, **options)
    return [row for row in rows if predicate(row)]
