"""
Core exception types raised by column lookups, identity checks and state restore.

Provides typed exceptions for engine-domain failures:
- RowAccessError for a column accessor that failed on a specific row.
- InvalidColumnReference for a column id unknown to the column model.
- DuplicateRowIdentity for two rows sharing one identity (strict mode only).
- TableConfigError for invalid construction input (duplicate column ids,
  non-positive page size or row extent).
- StateVersionMismatch for persisted snapshots written by an incompatible format.

Notes:
    - This module uses only the Python standard library and has no side effects.
    - The controller recovers RowAccessError and InvalidColumnReference locally:
        - RowAccessError instances are recorded on TableView.cell_errors.
        - InvalidColumnReference turns the requested operation into a no-op.
    - Out-of-range pages are not an error; the page slice is simply empty.

Examples:
    Catch an unknown column reference.

    >>> from tabula.core.columns import Column, ColumnModel
    >>> from tabula.core.errors import InvalidColumnReference
    >>> model = ColumnModel([Column.from_key("name")])
    >>> try:
    ...     model.get("missing")
    ... except InvalidColumnReference as e:
    ...     msg = str(e)
    >>> "missing" in msg
    True
"""

from __future__ import annotations

__all__ = [
    "TableError",
    "RowAccessError",
    "InvalidColumnReference",
    "DuplicateRowIdentity",
    "TableConfigError",
    "StateVersionMismatch",
]


class TableError(Exception):
    """Base class for tabula engine errors."""


class RowAccessError(TableError):
    """
    A column accessor raised while extracting a value from a row.

    Attributes:
        row_id (str | None): Identity of the affected row, when known.
        column_id (str): Column whose accessor failed.
        cause (BaseException): The original exception.
    """

    def __init__(self, row_id: str | None, column_id: str, cause: BaseException) -> None:
        super().__init__(f"accessor for column {column_id!r} failed on row {row_id!r}: {cause!r}")
        self.row_id = row_id
        self.column_id = column_id
        self.cause = cause


class InvalidColumnReference(TableError, KeyError):
    """A column id is not present in the column model."""

    def __init__(self, column_id: str) -> None:
        super().__init__(column_id)
        self.column_id = column_id

    def __str__(self) -> str:
        return f"unknown column id: {self.column_id!r}"


class DuplicateRowIdentity(TableError, ValueError):
    """Two or more rows in one dataset yield the same identity."""

    def __init__(self, row_ids: tuple[str, ...]) -> None:
        super().__init__(f"duplicate row identities: {', '.join(map(repr, row_ids))}")
        self.row_ids = row_ids


class TableConfigError(TableError, ValueError):
    """Invalid table configuration (columns, page size, extents)."""


class StateVersionMismatch(TableError, RuntimeError):
    """Persisted table state was written by an incompatible snapshot version."""
