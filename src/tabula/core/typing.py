"""
Lightweight typing aliases used across the engines and the controller.

Provides callable aliases to improve readability and static checks. This module
contains no runtime logic and is zero-IO.

Notes:
    - Rows are opaque to the engine; `Row` is an alias for Any.
    - Row and column identities are plain strings.
    - Keep the surface small and stable to avoid churn in dependents.

Examples:
    >>> from tabula.core.typing import RowIdFn
    >>> by_id: RowIdFn = lambda row: str(row["id"])
    >>> by_id({"id": 7})
    '7'
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

__all__ = [
    "Row",
    "Accessor",
    "Comparator",
    "RowIdFn",
]

# Opaque application record; never mutated by the engine.
Row = Any

# (row) -> value
Accessor = Callable[[Any], Any]
# (a, b) -> -1 | 0 | 1 over extracted, non-missing values
Comparator = Callable[[Any, Any], int]
# (row) -> identity
RowIdFn = Callable[[Any], str]
