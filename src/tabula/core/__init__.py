"""
Core package aggregator for the tabula table engine.

## Contracts and engines
- Columns: descriptors: accessor, label, capability flags, comparator.
- Sorting: stable multi-key sort and the header-click transition.
- Filtering: per-column and global case-insensitive containment.
- Selection: identity-keyed selection set.
- Pagination / Virtual: page slicing and O(1) scroll windows.
- Serializer: delimited-text export of a derived view.
- Controller: canonical state + synchronous view derivation.
- Schema / Versioning / Hashing: persisted snapshot contract and fingerprints.

## Notes
- Zero-IO policy: stdlib + pydantic only; no file/network IO.
- Rows are opaque and never mutated; identity comes from a caller-supplied function.
- Enum `.value`s are lower_snake and are what gets persisted.

## Examples
```python
from tabula.core import Column, TableController

rows = [{"id": "a", "v": 3}, {"id": "b", "v": 1}, {"id": "c", "v": 2}]
table = TableController([Column.from_key("id"), Column.from_key("v")], rows)
table.set_sort("v")
table.get_view().ordered_ids  # ('b', 'c', 'a')
table.set_filter(None, "2")
table.get_view().ordered_ids  # ('c',)
```
"""

from __future__ import annotations

from .columns import UNAVAILABLE, Column, ColumnModel
from .controller import TableController
from .filtering import FilterState
from .grammar import SelectionScope, SortDirection, ViewMode
from .options import TableOptions
from .pagination import PaginationState
from .schema import StateStore, TableStateSnapshot
from .selection import SelectionManager
from .serializer import RowSerializer
from .sorting import SortKey, SortSpec
from .view import TableView
from .virtual import VirtualWindow, compute_window

__all__ = [
    "UNAVAILABLE",
    "Column",
    "ColumnModel",
    "TableController",
    "FilterState",
    "SelectionScope",
    "SortDirection",
    "ViewMode",
    "TableOptions",
    "PaginationState",
    "StateStore",
    "TableStateSnapshot",
    "SelectionManager",
    "RowSerializer",
    "SortKey",
    "SortSpec",
    "TableView",
    "VirtualWindow",
    "compute_window",
]
