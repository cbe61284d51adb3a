"""
Polars interop: load tables and derive rows/columns from DataFrames.

Responsibilities
- Read .csv / .parquet files into polars DataFrames.
- Turn a DataFrame into dict rows (the engine's opaque Row objects).
- Build key-accessor Column descriptors from a DataFrame schema.

Notes
- Rows are plain dicts from DataFrame.to_dicts(); polars nulls become None and
  sort last / never match filters.
- Columns listed in `hidden` stay sortable/filterable but are excluded from global
  search and export (e.g. internal ids).
"""

from __future__ import annotations

import os
from collections.abc import Collection, Mapping
from pathlib import Path

import polars as pl

from tabula.core.columns import Column

from .errors import IoReadError

__all__ = [
    "read_table",
    "rows_from_frame",
    "columns_from_frame",
]


def read_table(path: str | os.PathLike[str]) -> pl.DataFrame:
    """
    Load a .csv or .parquet file with polars.

    Raises:
        IoReadError: Unsupported extension, missing file, or parser failure.
    """
    p = Path(path)
    suffix = p.suffix.lower()
    if suffix not in {".csv", ".parquet"}:
        raise IoReadError(f"unsupported table format {suffix!r} for {p}")
    if not p.exists():
        raise IoReadError(f"table file not found: {p}")
    try:
        if suffix == ".csv":
            return pl.read_csv(p, try_parse_dates=True)
        return pl.read_parquet(p)
    except (pl.exceptions.PolarsError, OSError) as exc:
        raise IoReadError(f"failed to read {p}: {exc}") from exc


def rows_from_frame(df: pl.DataFrame) -> list[dict[str, object]]:
    """DataFrame rows as dicts keyed by column name."""
    return df.to_dicts()


def columns_from_frame(
    df: pl.DataFrame,
    *,
    labels: Mapping[str, str] | None = None,
    hidden: Collection[str] = (),
) -> list[Column]:
    """
    One key-accessor Column per DataFrame column, in frame order.

    Args:
        df (pl.DataFrame): Source frame.
        labels (Mapping[str, str] | None): Optional display labels by column name.
        hidden (Collection[str]): Columns excluded from global search and export.
    """
    labels = labels or {}
    return [
        Column.from_key(
            name,
            label=labels.get(name),
            searchable=name not in hidden,
            exportable=name not in hidden,
        )
        for name in df.columns
    ]
