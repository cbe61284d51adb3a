"""
Serialize the current logical view into delimited text (CSV-equivalent).

Wire format
- Rows are terminated by CRLF ("\\r\\n"); the last row is not followed by a
  terminator.
- Fields are comma-separated. A field containing the delimiter, a quote character,
  CR or LF is wrapped in quotes with embedded quotes doubled.
- The header row holds the column labels (falling back to ids) in column order,
  excluding columns flagged `exportable=False` and the selection pseudo-column.

Row scope
- SelectionScope.ALL_VISIBLE: every row of the view, in view order.
- SelectionScope.SELECTED: when at least one id is selected, only selected rows of
  the current filtered view, in view order; otherwise every row of the view.

Cell text
- Cells go through a formatter `(column, value) -> str`; the default is the
  deterministic `stringify` used by filtering. Accessor failures become "".

Examples:
    >>> from tabula.core.serializer import escape_field
    >>> escape_field("a,b"), escape_field('x"y'), escape_field("plain")
    ('"a,b"', '"x""y"', 'plain')
"""

from __future__ import annotations

from collections.abc import Callable, Collection, Iterable, Sequence
from typing import Any

from .columns import Column
from .constants import CSV_DELIMITER, CSV_LINE_TERMINATOR, CSV_QUOTE, SELECTION_COLUMN_ID
from .filtering import stringify
from .grammar import SelectionScope
from .typing import Row
from .view import TableView

__all__ = [
    "RowSerializer",
    "escape_field",
    "export_columns",
]

CellFormatter = Callable[[Column, Any], str]


def escape_field(
    text: str, *, delimiter: str = CSV_DELIMITER, quote: str = CSV_QUOTE
) -> str:
    """Quote `text` when it holds the delimiter, a quote, CR or LF; double inner quotes."""
    # Same output as csv.QUOTE_MINIMAL with CR and LF always quoted; csv.writer
    # only quotes line-terminator characters it was configured with.
    if delimiter in text or quote in text or "\n" in text or "\r" in text:
        return quote + text.replace(quote, quote + quote) + quote
    return text


def export_columns(columns: Iterable[Column]) -> list[Column]:
    """Columns that appear in serialized output, in column order."""
    return [c for c in columns if c.exportable and c.id != SELECTION_COLUMN_ID]


def _default_formatter(_column: Column, value: Any) -> str:
    return stringify(value)


class RowSerializer:
    """
    Delimited-text serializer for table views.

    Args:
        delimiter (str): Field separator.
        quote (str): Quote character.
        line_terminator (str): Row terminator.
        formatter (CellFormatter | None): Cell text formatter; defaults to stringify.
    """

    def __init__(
        self,
        *,
        delimiter: str = CSV_DELIMITER,
        quote: str = CSV_QUOTE,
        line_terminator: str = CSV_LINE_TERMINATOR,
        formatter: CellFormatter | None = None,
    ) -> None:
        self.delimiter = delimiter
        self.quote = quote
        self.line_terminator = line_terminator
        self.formatter = formatter or _default_formatter

    def select_rows(
        self,
        view: TableView,
        scope: SelectionScope = SelectionScope.ALL_VISIBLE,
        selected_ids: Collection[str] = (),
    ) -> list[Row]:
        """Rows of `view` in scope, in view order."""
        if scope is SelectionScope.SELECTED and selected_ids:
            chosen = set(selected_ids)
            return [
                row
                for row_id, row in zip(view.ordered_ids, view.ordered_rows, strict=True)
                if row_id in chosen
            ]
        return list(view.ordered_rows)

    def cell(self, column: Column, row: Row) -> str:
        try:
            value = column.extract(row)
        except Exception:
            return ""
        return self.formatter(column, value)

    def grid(
        self,
        view: TableView,
        columns: Iterable[Column],
        scope: SelectionScope = SelectionScope.ALL_VISIBLE,
        selected_ids: Collection[str] = (),
    ) -> list[list[str]]:
        """Header plus cell texts (unescaped) as a list of rows."""
        cols = export_columns(columns)
        out = [[c.header for c in cols]]
        for row in self.select_rows(view, scope, selected_ids):
            out.append([self.cell(c, row) for c in cols])
        return out

    def format_line(self, fields: Sequence[str]) -> str:
        # No terminator; serialize() joins lines with line_terminator, none trailing.
        return self.delimiter.join(
            escape_field(f, delimiter=self.delimiter, quote=self.quote) for f in fields
        )

    def serialize(
        self,
        view: TableView,
        columns: Iterable[Column],
        scope: SelectionScope = SelectionScope.ALL_VISIBLE,
        selected_ids: Collection[str] = (),
    ) -> str:
        """
        Serialize `view` into delimited text.

        Args:
            view (TableView): A view already derived by TableController.get_view().
            columns (Iterable[Column]): Columns in output order.
            scope (SelectionScope): Row scope (see module notes).
            selected_ids (Collection[str]): Current selection.

        Returns:
            str: Header line plus one line per row, joined by the line terminator.
        """
        lines = self.grid(view, columns, scope, selected_ids)
        return self.line_terminator.join(self.format_line(fields) for fields in lines)
