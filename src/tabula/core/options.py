"""
Controller options: feature switches and view geometry.

TableOptions is the zero-IO counterpart of tabula.io.config.TableSettings; settings
loaded from TOML/env are turned into options via TableSettings.options().

Notes:
    - Virtual scrolling wins over pagination when both are enabled.
    - row_extent / compact_row_extent are estimated row sizes in px; `compact`
      selects the smaller one.
"""

from __future__ import annotations

from dataclasses import dataclass

from .constants import (
    COMPACT_ROW_EXTENT,
    DEFAULT_PAGE_SIZE,
    DEFAULT_ROW_ID_FIELD,
    OVERSCAN,
    ROW_EXTENT,
    VIEWPORT_EXTENT,
)
from .errors import TableConfigError
from .grammar import ViewMode

__all__ = ["TableOptions"]


@dataclass(frozen=True)
class TableOptions:
    """
    Feature switches and geometry for one TableController.

    Attributes:
        enable_sorting (bool): Header sorting; when off set_sort is a no-op.
        enable_multi_sort (bool): Shift-click multi-key sorting.
        enable_column_filters (bool): Apply per-column filter texts.
        enable_global_filter (bool): Apply the global filter text.
        enable_row_selection (bool): Selection operations take effect.
        enable_pagination (bool): Cut the view into pages.
        enable_virtual_scrolling (bool): Cut the view into a scroll window.
        page_size (int): Initial rows per page (>= 1).
        compact (bool): Use compact_row_extent.
        row_extent (float): Regular row extent (> 0).
        compact_row_extent (float): Compact row extent (> 0).
        viewport_extent (float): Initial scroll container extent.
        overscan (int): Rows materialized beyond the visible range (>= 0).
        row_id_field (str): Mapping key used for identity when no row_id callable is given.
        strict_identity (bool): Raise DuplicateRowIdentity instead of warning.

    Raises:
        TableConfigError: On non-positive page size or extents, or negative overscan.
    """

    enable_sorting: bool = True
    enable_multi_sort: bool = True
    enable_column_filters: bool = True
    enable_global_filter: bool = True
    enable_row_selection: bool = True
    enable_pagination: bool = True
    enable_virtual_scrolling: bool = False
    page_size: int = DEFAULT_PAGE_SIZE
    compact: bool = False
    row_extent: float = ROW_EXTENT
    compact_row_extent: float = COMPACT_ROW_EXTENT
    viewport_extent: float = VIEWPORT_EXTENT
    overscan: int = OVERSCAN
    row_id_field: str = DEFAULT_ROW_ID_FIELD
    strict_identity: bool = False

    def __post_init__(self) -> None:
        if self.page_size < 1:
            raise TableConfigError(f"page_size must be positive, got {self.page_size}")
        if self.row_extent <= 0 or self.compact_row_extent <= 0:
            raise TableConfigError("row extents must be positive")
        if self.overscan < 0:
            raise TableConfigError(f"overscan must be non-negative, got {self.overscan}")

    @property
    def mode(self) -> ViewMode:
        if self.enable_virtual_scrolling:
            return ViewMode.VIRTUAL
        if self.enable_pagination:
            return ViewMode.PAGINATED
        return ViewMode.ALL

    @property
    def effective_row_extent(self) -> float:
        return self.compact_row_extent if self.compact else self.row_extent
