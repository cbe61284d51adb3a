"""
Column descriptors: how to extract, compare and label a value from a row.

Responsibilities
- Describe one column (`Column`): identity, accessor, header label, capability
  flags (sortable/filterable/searchable/exportable) and an optional comparator.
- Provide the default total order over extracted values used when a column has
  no custom comparator.
- Group columns into a `ColumnModel` with unique ids and id lookup.

Accessors
- An accessor is always a callable `(row) -> value`. Key- and attribute-based
  access are wrapped into callables at construction time (`Column.from_key`,
  `item_accessor`, `attr_accessor`) so hot paths never branch on accessor kind.
- Accessor exceptions are NOT caught here. The controller converts them into
  RowAccessError records and treats the cell as `UNAVAILABLE`.

Ordering policy (default comparator)
- Numbers (int/float/Decimal/bool) compare numerically.
- Strings compare case-insensitively by code point (casefold).
- datetime, date and other values compare natively within their own kind.
- Values of different kinds order as: numbers < datetimes < dates < strings < other.
- Missing values (None, NaN, UNAVAILABLE) are handled by callers: they sort last
  regardless of direction (see tabula.core.sorting).

Examples:
    >>> from tabula.core.columns import Column
    >>> col = Column.from_key("v", label="Value")
    >>> col.extract({"v": 3}), col.header
    (3, 'Value')
    >>> col.compare({"v": 1}, {"v": 2})
    -1
    >>> col.compare({"v": None}, {"v": 2})
    1
"""

from __future__ import annotations

import math
import operator
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from .errors import InvalidColumnReference, TableConfigError
from .typing import Accessor, Comparator, Row

__all__ = [
    "UNAVAILABLE",
    "Column",
    "ColumnModel",
    "item_accessor",
    "attr_accessor",
    "is_missing",
    "compare_values",
]


class _Unavailable:
    """Marker for a cell whose accessor raised."""

    _instance: _Unavailable | None = None

    def __new__(cls) -> _Unavailable:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNAVAILABLE"

    def __bool__(self) -> bool:
        return False


UNAVAILABLE: Any = _Unavailable()


def item_accessor(key: Any) -> Accessor:
    """
    Build an accessor reading `row.get(key)` from mapping rows.

    Missing keys yield None (a missing value) rather than raising.
    """

    def _get(row: Row) -> Any:
        return row.get(key)

    return _get


def attr_accessor(name: str) -> Accessor:
    """Build an accessor reading attribute `name` (dotted paths allowed) from object rows."""
    return operator.attrgetter(name)


def is_missing(value: Any) -> bool:
    """
    Check whether an extracted value counts as missing data.

    Missing values are None, float or Decimal NaN and the UNAVAILABLE marker.
    """
    if value is None or value is UNAVAILABLE:
        return True
    if isinstance(value, Decimal):
        return value.is_nan()
    return isinstance(value, float) and math.isnan(value)


def _kind_rank(value: Any) -> int:
    if isinstance(value, (bool, int, float, Decimal)):
        return 0
    if isinstance(value, datetime):
        return 1
    if isinstance(value, date):
        return 2
    if isinstance(value, str):
        return 4
    return 5


def _sign(x: Any) -> int:
    return (x > 0) - (x < 0)


def compare_values(a: Any, b: Any) -> int:
    """
    Default total order over two non-missing values.

    Args:
        a (Any): Left value (not missing).
        b (Any): Right value (not missing).

    Returns:
        int: -1, 0 or 1.

    Examples:
        >>> compare_values("apple", "Banana")
        -1
        >>> compare_values("ABC", "abc")
        0
        >>> compare_values(10, 9.5)
        1
        >>> compare_values(1, "1")
        -1
    """
    ra, rb = _kind_rank(a), _kind_rank(b)
    if ra != rb:
        return -1 if ra < rb else 1
    if ra == 4:
        a, b = a.casefold(), b.casefold()
    try:
        return (a > b) - (a < b)
    except TypeError:
        # e.g. naive vs aware datetimes, or unorderable objects
        sa, sb = str(a), str(b)
        return (sa > sb) - (sa < sb)


@dataclass(frozen=True)
class Column:
    """
    Descriptor for one table column.

    Attributes:
        id (str): Unique column id within a table.
        accessor (Accessor): Callable extracting the cell value from a row.
        label (str | None): Display label used for headers and export; defaults to id.
        sortable (bool): Column may take part in a SortSpec.
        filterable (bool): Per-column filter text applies to this column.
        searchable (bool): Column takes part in the global filter.
        exportable (bool): Column appears in serialized output.
        comparator (Comparator | None): Custom (a, b) -> {-1, 0, 1} over non-missing
            extracted values; the default total order is used when None.
    """

    id: str
    accessor: Accessor
    label: str | None = None
    sortable: bool = True
    filterable: bool = True
    searchable: bool = True
    exportable: bool = True
    comparator: Comparator | None = None

    @classmethod
    def from_key(
        cls,
        id: str,
        key: Any = None,
        *,
        attribute: bool = False,
        **options: Any,
    ) -> Column:
        """
        Build a column reading a mapping key (default) or an object attribute.

        Args:
            id (str): Column id.
            key (Any): Mapping key or attribute name; defaults to `id`.
            attribute (bool): Read an attribute instead of a mapping key.
            **options: Remaining Column fields (label, sortable, comparator, ...).
        """
        key = id if key is None else key
        accessor = attr_accessor(key) if attribute else item_accessor(key)
        return cls(id=id, accessor=accessor, **options)

    @property
    def header(self) -> str:
        return self.label if self.label is not None else self.id

    def extract(self, row: Row) -> Any:
        """Extract this column's value from a row; accessor errors propagate."""
        return self.accessor(row)

    def compare_values(self, a: Any, b: Any) -> int:
        """Compare two non-missing values with the custom or default comparator."""
        if self.comparator is not None:
            return _sign(self.comparator(a, b))
        return compare_values(a, b)

    def compare(self, row_a: Row, row_b: Row) -> int:
        """
        Compare two rows on this column in ascending order, missing values last.

        Accessor errors propagate to the caller.
        """
        a, b = self.extract(row_a), self.extract(row_b)
        missing_a, missing_b = is_missing(a), is_missing(b)
        if missing_a or missing_b:
            return missing_a - missing_b
        return self.compare_values(a, b)


class ColumnModel:
    """
    Ordered collection of columns with unique ids.

    Raises:
        TableConfigError: If two columns share an id.
    """

    def __init__(self, columns: Iterable[Column]) -> None:
        self._columns: tuple[Column, ...] = tuple(columns)
        self._by_id: dict[str, Column] = {}
        for col in self._columns:
            if col.id in self._by_id:
                raise TableConfigError(f"duplicate column id: {col.id!r}")
            self._by_id[col.id] = col

    def __iter__(self) -> Iterator[Column]:
        return iter(self._columns)

    def __len__(self) -> int:
        return len(self._columns)

    def __contains__(self, column_id: object) -> bool:
        return column_id in self._by_id

    def __repr__(self) -> str:
        return f"ColumnModel({list(self._by_id)!r})"

    @property
    def ids(self) -> tuple[str, ...]:
        return tuple(self._by_id)

    def get(self, column_id: str) -> Column:
        """
        Look up a column by id.

        Raises:
            InvalidColumnReference: If no column has this id.
        """
        try:
            return self._by_id[column_id]
        except KeyError:
            raise InvalidColumnReference(column_id) from None

    def searchable(self) -> tuple[Column, ...]:
        return tuple(c for c in self._columns if c.searchable)

    def exportable(self) -> tuple[Column, ...]:
        return tuple(c for c in self._columns if c.exportable)
