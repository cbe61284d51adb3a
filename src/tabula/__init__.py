"""
tabula: client-side tabular data engine.

- tabula.core: zero-IO engine (columns, sorting, filtering, selection,
  pagination, virtual windows, controller, serializer).
- tabula.io: settings, state persistence, export and polars interop.
- tabula.cli: `tabula view` / `tabula export` console entrypoint.
"""

__version__ = "0.1.0"
