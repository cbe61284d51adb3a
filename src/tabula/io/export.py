"""
Export of derived table views to files and frames.

Responsibilities
- Write the serialized view (tabula.core.serializer) to a CSV file atomically,
  with the optional UTF-8 BOM and timestamped file name used for spreadsheet
  downloads.
- Convert a view's exportable cells into a polars DataFrame for downstream
  analysis.

Notes
- Export always reads a view already derived by TableController.get_view(), never
  engine internals, so it cannot observe a half-applied transition.
- Timestamps come from the caller-supplied `now` (defaults to the current local
  time); the engine itself stays clock-free.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Collection, Iterable
from datetime import datetime
from pathlib import Path

import polars as pl

from tabula.core.columns import Column
from tabula.core.controller import TableController
from tabula.core.grammar import SelectionScope
from tabula.core.serializer import RowSerializer
from tabula.core.view import TableView

from .config import TableSettings
from .fs import write_bytes_atomic

__all__ = [
    "export_filename",
    "write_csv",
    "export_table",
    "grid_to_frame",
    "view_to_frame",
]

logger = logging.getLogger(__name__)

_BOM = "\ufeff"


def export_filename(base: str, *, include_timestamp: bool = True, now: datetime | None = None) -> str:
    """
    File name for an export.

    Examples:
        >>> export_filename("orders", now=datetime(2024, 5, 1, 13, 4, 5))
        'orders_2024-05-01-13-04-05.csv'
        >>> export_filename("orders", include_timestamp=False)
        'orders.csv'
    """
    if not include_timestamp:
        return f"{base}.csv"
    stamp = (now or datetime.now()).strftime("%Y-%m-%d-%H-%M-%S")
    return f"{base}_{stamp}.csv"


def write_csv(
    path: str | os.PathLike[str],
    view: TableView,
    columns: Iterable[Column],
    *,
    scope: SelectionScope = SelectionScope.SELECTED,
    selected_ids: Collection[str] = (),
    include_bom: bool = True,
    serializer: RowSerializer | None = None,
) -> Path:
    """
    Serialize `view` and write it to `path` (UTF-8, tmp -> fsync -> rename).

    Returns:
        Path: The written file.

    Raises:
        tabula.io.errors.IoWriteError: If the atomic write fails.
    """
    serializer = serializer or RowSerializer()
    text = serializer.serialize(view, columns, scope, selected_ids)
    if include_bom:
        text = _BOM + text
    out = Path(path)
    write_bytes_atomic(str(out), text.encode("utf-8"))
    logger.info("exported %s", out)
    return out


def export_table(
    table: TableController,
    directory: str | os.PathLike[str],
    *,
    settings: TableSettings | None = None,
    scope: SelectionScope = SelectionScope.SELECTED,
    now: datetime | None = None,
) -> Path:
    """
    Export a controller's current view into `directory`.

    Selected rows are exported when any are selected (scope SELECTED), otherwise
    every row of the filtered/sorted view. File naming and BOM follow `settings`.
    """
    settings = settings or TableSettings()
    name = export_filename(
        settings.export_filename,
        include_timestamp=settings.export_include_timestamp,
        now=now,
    )
    return write_csv(
        Path(directory) / name,
        table.get_view(),
        table.columns,
        scope=scope,
        selected_ids=table.selected_ids(),
        include_bom=settings.export_include_bom,
    )


def _unique_names(header: Iterable[str]) -> list[str]:
    """Frame column names for `header`, suffixing repeated labels with _2, _3, ..."""
    seen: set[str] = set()
    names: list[str] = []
    for label in header:
        name, n = label, 1
        while name in seen:
            n += 1
            name = f"{label}_{n}"
        seen.add(name)
        names.append(name)
    return names


def grid_to_frame(grid: list[list[str]]) -> pl.DataFrame:
    """
    String-typed DataFrame from a header row plus cell rows.

    Columns are taken by position; repeated header labels get a numeric suffix
    so every column survives.
    """
    header, *body = grid
    names = _unique_names(header)
    return pl.DataFrame(
        [[r[i] for r in body] for i in range(len(names))],
        schema={name: pl.Utf8 for name in names},
        orient="col",
    )


def view_to_frame(
    view: TableView,
    columns: Iterable[Column],
    *,
    scope: SelectionScope = SelectionScope.ALL_VISIBLE,
    selected_ids: Collection[str] = (),
    serializer: RowSerializer | None = None,
) -> pl.DataFrame:
    """
    Exportable cells of `view` as a string-typed polars DataFrame.

    Column names are the column labels (repeated labels suffixed); values are
    the same cell texts the CSV export writes.
    """
    serializer = serializer or RowSerializer()
    return grid_to_frame(serializer.grid(view, columns, scope, selected_ids))
