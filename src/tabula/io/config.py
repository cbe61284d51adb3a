"""
Configuration for tabula tables.

Defines TableSettings, a frozen dataclass carrying runtime configuration for table
behavior (feature switches, paging and windowing geometry, identity, export and
state persistence). Defaults are sourced from tabula.core.constants (the single
source of truth).

Precedence
- environment (TABULA_*) > TOML (./tabula.toml or [tool.tabula.table] in
  ./pyproject.toml) > defaults.
- Values that fail to parse are ignored and the previous layer's value is kept.

Import DAG discipline
- Depends only on stdlib and tabula.core.
- TableSettings.options() produces the zero-IO tabula.core.options.TableOptions
  consumed by TableController.
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from tabula.core.constants import (
    COMPACT_ROW_EXTENT,
    DEFAULT_PAGE_SIZE,
    DEFAULT_ROW_ID_FIELD,
    EXPORT_FILENAME,
    OVERSCAN,
    PAGE_SIZE_OPTIONS,
    ROW_EXTENT,
    VIEWPORT_EXTENT,
)
from tabula.core.options import TableOptions

_SWITCHES = (
    "enable_sorting",
    "enable_multi_sort",
    "enable_column_filters",
    "enable_global_filter",
    "enable_row_selection",
    "enable_pagination",
    "enable_virtual_scrolling",
    "compact",
    "strict_identity",
    "export_include_timestamp",
    "export_include_bom",
)
_POSITIVE_INTS = ("page_size",)
_NON_NEGATIVE_INTS = ("overscan",)
_POSITIVE_FLOATS = ("row_extent", "compact_row_extent")
_NON_NEGATIVE_FLOATS = ("viewport_extent",)
_STRINGS = ("row_id_field", "export_filename")


@dataclass(frozen=True)
class TableSettings:
    """
    Runtime settings for tabula tables.

    Attributes:
        page_size (int): Initial rows per page.
        page_size_options (tuple[int, ...]): Page sizes offered by page-size selectors.
        row_id_field (str): Row key used as identity when no row_id callable is given.
        enable_sorting (bool): Header sorting.
        enable_multi_sort (bool): Shift-click multi-key sorting.
        enable_column_filters (bool): Per-column filters.
        enable_global_filter (bool): Global search.
        enable_row_selection (bool): Row selection.
        enable_pagination (bool): Page slicing.
        enable_virtual_scrolling (bool): Scroll windowing (wins over pagination).
        compact (bool): Compact density (smaller row extent).
        row_extent (float): Estimated row extent in px.
        compact_row_extent (float): Estimated compact row extent in px.
        viewport_extent (float): Scroll container extent in px.
        overscan (int): Rows materialized beyond the visible range.
        strict_identity (bool): Raise on duplicate row identities instead of warning.
        export_filename (str): Base file name for exports (no extension).
        export_include_timestamp (bool): Append _YYYY-MM-DD-HH-MM-SS to export names.
        export_include_bom (bool): Prefix exported CSV with a UTF-8 BOM.
        state_path (str | None): JSON file for persisted table state (None disables).

    Examples:
        >>> from tabula.io import TableSettings
        >>> TableSettings(page_size=25).options().page_size
        25
    """

    page_size: int = DEFAULT_PAGE_SIZE
    page_size_options: tuple[int, ...] = PAGE_SIZE_OPTIONS
    row_id_field: str = DEFAULT_ROW_ID_FIELD
    enable_sorting: bool = True
    enable_multi_sort: bool = True
    enable_column_filters: bool = True
    enable_global_filter: bool = True
    enable_row_selection: bool = True
    enable_pagination: bool = True
    enable_virtual_scrolling: bool = False
    compact: bool = False
    row_extent: float = ROW_EXTENT
    compact_row_extent: float = COMPACT_ROW_EXTENT
    viewport_extent: float = VIEWPORT_EXTENT
    overscan: int = OVERSCAN
    strict_identity: bool = False
    export_filename: str = EXPORT_FILENAME
    export_include_timestamp: bool = True
    export_include_bom: bool = True
    state_path: str | None = None

    def options(self) -> TableOptions:
        """Controller options (feature switches and geometry) from these settings."""
        return TableOptions(
            enable_sorting=self.enable_sorting,
            enable_multi_sort=self.enable_multi_sort,
            enable_column_filters=self.enable_column_filters,
            enable_global_filter=self.enable_global_filter,
            enable_row_selection=self.enable_row_selection,
            enable_pagination=self.enable_pagination,
            enable_virtual_scrolling=self.enable_virtual_scrolling,
            page_size=self.page_size,
            compact=self.compact,
            row_extent=self.row_extent,
            compact_row_extent=self.compact_row_extent,
            viewport_extent=self.viewport_extent,
            overscan=self.overscan,
            row_id_field=self.row_id_field,
            strict_identity=self.strict_identity,
        )

    # Configuration loaders (env/TOML) with precedence: env > TOML > defaults.

    @classmethod
    def _apply_mapping(cls, base: TableSettings, cfg: dict[str, Any] | None) -> TableSettings:
        """Apply a loose config mapping onto TableSettings, returning a new instance."""
        if not isinstance(cfg, dict):
            return base

        s = base

        def _bool(v: Any) -> bool:
            if isinstance(v, bool):
                return v
            if isinstance(v, (int, float)):
                return bool(v)
            if isinstance(v, str):
                return v.strip().lower() in {"1", "true", "t", "yes", "y", "on"}
            return False

        for name in _SWITCHES:
            if name in cfg:
                s = replace(s, **{name: _bool(cfg[name])})

        for name in _POSITIVE_INTS + _NON_NEGATIVE_INTS:
            if name in cfg:
                try:
                    v = int(cfg[name])
                except (TypeError, ValueError):
                    continue
                if v > 0 or (v == 0 and name in _NON_NEGATIVE_INTS):
                    s = replace(s, **{name: v})

        for name in _POSITIVE_FLOATS + _NON_NEGATIVE_FLOATS:
            if name in cfg:
                try:
                    f = float(cfg[name])
                except (TypeError, ValueError):
                    continue
                if f > 0 or (f == 0 and name in _NON_NEGATIVE_FLOATS):
                    s = replace(s, **{name: f})

        for name in _STRINGS:
            if name in cfg and isinstance(cfg[name], str) and cfg[name].strip():
                s = replace(s, **{name: cfg[name].strip()})

        # page_size_options: list in TOML, comma-separated string in env
        if "page_size_options" in cfg:
            raw = cfg["page_size_options"]
            if isinstance(raw, str):
                raw = [p for p in raw.split(",") if p.strip()]
            if isinstance(raw, (list, tuple)):
                try:
                    sizes = tuple(int(p) for p in raw)
                except (TypeError, ValueError):
                    sizes = ()
                if sizes and all(n > 0 for n in sizes):
                    s = replace(s, page_size_options=sizes)

        if "state_path" in cfg and isinstance(cfg["state_path"], str):
            s = replace(s, state_path=cfg["state_path"].strip() or None)

        return s

    @classmethod
    def from_env(cls, base: TableSettings | None = None, prefix: str = "TABULA_") -> TableSettings:
        """
        Build TableSettings from environment variables. Precedence is env > base (if provided) > defaults.

        Every field is recognized under its upper-cased name, e.g.:
            - TABULA_PAGE_SIZE
            - TABULA_PAGE_SIZE_OPTIONS ("10,25,50")
            - TABULA_ENABLE_VIRTUAL_SCROLLING (1/0/true/false/yes/no/on/off)
            - TABULA_OVERSCAN, TABULA_ROW_EXTENT, TABULA_VIEWPORT_EXTENT
            - TABULA_ROW_ID_FIELD, TABULA_STRICT_IDENTITY
            - TABULA_EXPORT_FILENAME, TABULA_EXPORT_INCLUDE_BOM, TABULA_STATE_PATH
        """
        s = base or cls()
        mapping: dict[str, Any] = {}
        names = (
            _SWITCHES
            + _POSITIVE_INTS
            + _NON_NEGATIVE_INTS
            + _POSITIVE_FLOATS
            + _NON_NEGATIVE_FLOATS
            + _STRINGS
            + ("page_size_options", "state_path")
        )
        for name in names:
            v = os.getenv(prefix + name.upper())
            if v:
                mapping[name] = v
        return cls._apply_mapping(s, mapping)

    @classmethod
    def from_toml(cls, path: str | os.PathLike[str] | None = None) -> TableSettings:
        """
        Build TableSettings from a TOML file.

        Search order when `path` is None:
            1) ./tabula.toml (with either a [table] table or top-level keys)
            2) ./pyproject.toml under [tool.tabula.table]

        Returns defaults if no usable file is present.
        """
        s = cls()

        def _load_toml(p: Path) -> dict[str, Any] | None:
            try:
                with p.open("rb") as fh:
                    return tomllib.load(fh)
            except (OSError, tomllib.TOMLDecodeError):
                return None

        cfg: dict[str, Any] | None = None

        cand: list[Path] = []
        if path is not None:
            cand.append(Path(path))
        else:
            cand.append(Path.cwd() / "tabula.toml")
            cand.append(Path.cwd() / "pyproject.toml")

        for p in cand:
            if not p.exists():
                continue
            data = _load_toml(p)
            if not isinstance(data, dict):
                continue
            if p.name == "pyproject.toml":
                tool = data.get("tool", {})
                cfg = tool.get("tabula", {}).get("table", {}) if isinstance(tool, dict) else None
            else:
                top = data
                if "table" in top and isinstance(top["table"], dict):
                    cfg = top["table"]
                else:
                    cfg = top
            if cfg:
                break

        return cls._apply_mapping(s, cfg)

    @classmethod
    def load(cls, path: str | os.PathLike[str] | None = None) -> TableSettings:
        """
        Load TableSettings applying precedence: environment > TOML > defaults.

        Args:
            path: Optional explicit TOML path. If None, search defaults (tabula.toml, pyproject.toml).

        Returns:
            TableSettings
        """
        s = cls.from_toml(path)
        s = cls.from_env(base=s)
        return s
