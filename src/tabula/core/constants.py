"""
Tabula engine defaults.

Defines pagination, windowing, identity and export defaults consumed by the
controller and by tabula.io.config. This module is zero-IO and uses only the
Python standard library.

Notes:
    - tabula.io.config.TableSettings sources its defaults from these values.
    - Row extents are the estimated per-row sizes (px) used by the virtual
      window calculator; the compact density uses the smaller value.
    - The CSV constants describe the export wire format (RFC 4180 style with
      CRLF row terminators).
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "PAGE_SIZE_OPTIONS",
    "DEFAULT_ROW_ID_FIELD",
    "ROW_EXTENT",
    "COMPACT_ROW_EXTENT",
    "VIEWPORT_EXTENT",
    "OVERSCAN",
    "PAGE_LIST_LIMIT",
    "SELECTION_COLUMN_ID",
    "CSV_DELIMITER",
    "CSV_QUOTE",
    "CSV_LINE_TERMINATOR",
    "EXPORT_FILENAME",
]

# Rows per page when the caller does not choose one.
DEFAULT_PAGE_SIZE: int = 10

# Page sizes offered to the user by page-size selectors.
PAGE_SIZE_OPTIONS: tuple[int, ...] = (10, 25, 50, 100)

# Row field used as identity when no row_id callable is supplied.
DEFAULT_ROW_ID_FIELD: str = "id"

# Estimated row extents (px) for the regular and compact densities.
ROW_EXTENT: int = 44
COMPACT_ROW_EXTENT: int = 36

# Default scroll container extent (px) in virtual mode.
VIEWPORT_EXTENT: int = 500

# Rows materialized above and below the visible range.
OVERSCAN: int = 10

# Up to this many pages are listed without ellipsis markers.
PAGE_LIST_LIMIT: int = 7

# Pseudo-column carrying selection checkboxes; never exported.
SELECTION_COLUMN_ID: str = "_select"

CSV_DELIMITER: str = ","
CSV_QUOTE: str = '"'
CSV_LINE_TERMINATOR: str = "\r\n"

# Base name (without extension) for exported files.
EXPORT_FILENAME: str = "table-export"
