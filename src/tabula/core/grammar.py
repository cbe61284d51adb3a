"""
Canonical enums and normalization helpers for the table engine vocabulary.

Defines the small closed vocabularies shared by the engines, the controller and the
persisted state snapshot, and helpers that normalize loose user input (CLI flags,
TOML/env values, JSON payloads) into enum members.

Notes:
    - Enum `.value`s are lower_snake (or single words) and are what gets persisted.
    - Normalizers are case-insensitive and strip whitespace; unknown values raise
      ValueError so callers decide whether to ignore or surface them.
    - Zero-IO; stdlib only.

Examples:
    >>> from tabula.core.grammar import SortDirection, sort_direction_from_value
    >>> sort_direction_from_value(" DESC ") is SortDirection.DESC
    True
    >>> SortDirection.ASC.flipped() is SortDirection.DESC
    True
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Final

__all__ = [
    "SortDirection",
    "SelectionScope",
    "ViewMode",
    "is_lower_snake",
    "sort_direction_from_value",
    "selection_scope_from_value",
    "view_mode_from_value",
]


class SortDirection(Enum):
    """
    Direction of one sort key.

    Notes:
        Direction flips the sign of the column comparison; missing values stay last
        in both directions.
    """

    ASC = "asc"
    DESC = "desc"

    def flipped(self) -> SortDirection:
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


class SelectionScope(Enum):
    """
    Row scope for export.

    Values:
        SELECTED: Selected rows of the current view (falls back to all rows of the
            view when nothing is selected).
        ALL_VISIBLE: Every row of the current filtered/sorted view.
    """

    SELECTED = "selected"
    ALL_VISIBLE = "all_visible"


class ViewMode(Enum):
    """
    How the filtered/sorted order is cut into visible rows.

    Values:
        PAGINATED: Page slice (pageIndex, pageSize).
        VIRTUAL: Contiguous window computed from scroll offset and viewport.
        ALL: Every filtered row is visible.
    """

    PAGINATED = "paginated"
    VIRTUAL = "virtual"
    ALL = "all"


_LOWER_SNAKE_RE: Final[re.Pattern[str]] = re.compile(r"^[a-z0-9]+(?:_[a-z0-9]+)*$")


def is_lower_snake(value: str) -> bool:
    """
    Check whether a string is lower_snake.

    Args:
      value (str): Candidate string to validate.

    Returns:
      bool: True if value matches lower_snake (e.g., "all_visible"), False otherwise.

    Examples:
      >>> is_lower_snake("all_visible")
      True
      >>> is_lower_snake("AllVisible")
      False
    """
    return bool(_LOWER_SNAKE_RE.match(value or ""))


def _normalize(value: str) -> str:
    return value.strip().lower().replace("-", "_")


def sort_direction_from_value(s: str) -> SortDirection:
    """
    Parse a direction string into a SortDirection.

    Accepts "asc"/"desc" plus the long forms "ascending"/"descending".

    Raises:
      ValueError: If s is not a known direction.
    """
    norm = _normalize(s)
    aliases = {"ascending": "asc", "descending": "desc"}
    return SortDirection(aliases.get(norm, norm))


def selection_scope_from_value(s: str) -> SelectionScope:
    """
    Parse an export scope string ("selected", "all_visible", "all-visible").

    Raises:
      ValueError: If s is not a known scope.
    """
    return SelectionScope(_normalize(s))


def view_mode_from_value(s: str) -> ViewMode:
    """
    Parse a view mode string ("paginated", "virtual", "all").

    Raises:
      ValueError: If s is not a known mode.
    """
    return ViewMode(_normalize(s))
