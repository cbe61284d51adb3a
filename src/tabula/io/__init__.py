"""
tabula.io: File, configuration and persistence layer for tabula tables.

## Responsibilities
- Load runtime settings (env > TOML > defaults) and turn them into controller options.
- Persist and restore table state snapshots (sort, filters, pagination).
- Export derived views to CSV files and polars DataFrames.
- Read .csv / .parquet sources into rows and column descriptors via polars.

## Public API
- TableSettings: runtime configuration (defaults sourced from tabula.core.constants).
- InMemoryStateStore / JsonFileStateStore: StateStore implementations.
- export_table / write_csv / view_to_frame: export helpers.
- read_table / rows_from_frame / columns_from_frame: polars interop.

## Import DAG discipline
- Depends only on stdlib, polars, pydantic and tabula.core.*.
- tabula.core never imports tabula.io.

## Examples
```python
from tabula.core import TableController
from tabula.io import TableSettings, columns_from_frame, read_table, rows_from_frame

df = read_table("orders.csv")  # doctest: +SKIP
settings = TableSettings.load()
table = TableController(columns_from_frame(df), rows_from_frame(df), options=settings.options())  # doctest: +SKIP
```

## Notes
- Write path: tmp file -> fsync -> os.replace(tmp, final) in the destination directory.
- Unusable state files are logged and ignored on load; they never raise.
"""

from __future__ import annotations

from .config import TableSettings
from .export import export_filename, export_table, view_to_frame, write_csv
from .frames import columns_from_frame, read_table, rows_from_frame
from .persistence import InMemoryStateStore, JsonFileStateStore

__all__ = [
    "TableSettings",
    "InMemoryStateStore",
    "JsonFileStateStore",
    "export_filename",
    "export_table",
    "view_to_frame",
    "write_csv",
    "columns_from_frame",
    "read_table",
    "rows_from_frame",
]
