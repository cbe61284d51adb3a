"""
tabula CLI: inspect and export tabular files from the terminal.

Subcommands
- view:   load a .csv/.parquet file, apply sort/filter/search/paging and print the
          visible rows (a polars frame) with row and page counts.
- export: apply the same transitions and write the CSV export into a directory,
          restricted to the --selected row ids when any are given.

Settings (page size, identity field, switches, export naming, state file) come
from TableSettings.load() (env > TOML > defaults); flags override them. When
`state_path` is configured, the saved table state is restored before the flags
are applied and saved again afterwards.

Usage:
    tabula view data/orders.csv --sort amount:desc --filter status=open --page 2
    tabula export data/orders.csv --out exports --selected 17 --selected 42
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from dataclasses import replace

import polars as pl

from tabula.core.controller import TableController
from tabula.core.errors import TableError
from tabula.core.grammar import sort_direction_from_value
from tabula.core.pagination import page_bounds
from tabula.core.serializer import RowSerializer, export_columns
from tabula.core.sorting import SortSpec
from tabula.io.config import TableSettings
from tabula.io.errors import IoError
from tabula.io.export import export_table, grid_to_frame
from tabula.io.frames import columns_from_frame, read_table, rows_from_frame
from tabula.io.persistence import JsonFileStateStore

__all__ = ["build_argparser", "main"]


def _parse_sort(value: str) -> tuple[str, str]:
    """Parse COL or COL:DIR into (column_id, direction)."""
    column_id, sep, direction = value.rpartition(":")
    if not sep:
        return value, "asc"
    try:
        return column_id, sort_direction_from_value(direction).value
    except ValueError:
        # a colon inside the column name, not a direction suffix
        return value, "asc"


def _parse_filter(value: str) -> tuple[str, str]:
    column_id, sep, text = value.partition("=")
    if not sep or not column_id:
        raise argparse.ArgumentTypeError(f"expected COL=TEXT, got {value!r}")
    return column_id, text


def _add_table_arguments(p: argparse.ArgumentParser) -> None:
    p.add_argument("path", type=str, help="Table file (.csv or .parquet).")
    p.add_argument(
        "--sort",
        action="append",
        default=[],
        type=_parse_sort,
        metavar="COL[:desc]",
        help="Sort key; repeat for multi-key sorting (first is primary).",
    )
    p.add_argument(
        "--filter",
        action="append",
        default=[],
        type=_parse_filter,
        metavar="COL=TEXT",
        help="Per-column case-insensitive containment filter; repeatable.",
    )
    p.add_argument("--search", type=str, default=None, help="Global search text.")
    p.add_argument("--id-column", type=str, default=None, help="Column holding row identity.")


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="tabula", description="Tabular view and export utilities.")
    p.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level for tabula loggers.",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    view = sub.add_parser("view", help="Print the visible rows of a table.")
    _add_table_arguments(view)
    view.add_argument("--page", type=int, default=1, help="1-based page number.")
    view.add_argument(
        "--page-size", type=int, default=None, help="Rows per page; one of page_size_options."
    )

    export = sub.add_parser("export", help="Write the table (or selected rows) to CSV.")
    _add_table_arguments(export)
    export.add_argument("--out", type=str, required=True, help="Output directory.")
    export.add_argument(
        "--selected",
        action="append",
        default=[],
        metavar="ID",
        help="Row id to export; repeatable. Without it every filtered row is exported.",
    )
    return p


def _open_table(args: argparse.Namespace, settings: TableSettings) -> TableController:
    if args.id_column:
        settings = replace(settings, row_id_field=args.id_column)
    df = read_table(args.path)
    table = TableController(
        columns_from_frame(df), rows_from_frame(df), options=settings.options()
    )
    if settings.state_path:
        table.load(JsonFileStateStore(settings.state_path))

    if args.sort:
        table.set_sort_spec(SortSpec.of(*args.sort))
    for column_id, text in args.filter:
        table.set_filter(column_id, text)
    if args.search is not None:
        table.set_filter(None, args.search)
    return table


def _visible_frame(table: TableController) -> pl.DataFrame:
    serializer = RowSerializer()
    columns = export_columns(table.columns)
    grid = [[c.header for c in columns]]
    grid += [[serializer.cell(c, r) for c in columns] for r in table.visible_rows()]
    return grid_to_frame(grid)


def _cmd_view(args: argparse.Namespace, settings: TableSettings) -> int:
    table = _open_table(args, settings)
    if args.page_size is not None:
        if args.page_size not in settings.page_size_options:
            choices = ", ".join(str(n) for n in settings.page_size_options)
            print(f"--page-size must be one of: {choices}", file=sys.stderr)
            return 2
        table.set_page_size(args.page_size)
    table.set_page(args.page - 1)
    if settings.state_path:
        table.save(JsonFileStateStore(settings.state_path))

    view = table.get_view()
    print(_visible_frame(table))
    first, last = page_bounds(view.pagination, view.filtered_count)
    print(
        f"[INFO] rows {first}-{last} of {view.filtered_count} "
        f"(total {view.total_count}); page {view.pagination.page_index + 1} of {view.page_count}"
    )
    if view.page_out_of_range:
        print("[WARN] page is past the end of the filtered rows")
    return 0


def _cmd_export(args: argparse.Namespace, settings: TableSettings) -> int:
    table = _open_table(args, settings)
    for row_id in args.selected:
        if not table.is_selected(row_id):
            table.toggle_row(row_id)
    out = export_table(table, args.out, settings=settings)
    print(f"[INFO] Wrote export to {out}")
    return 0


def main(argv: Sequence[str] | None = None) -> None:
    argv = list(sys.argv[1:] if argv is None else argv)
    if not argv:
        build_argparser().print_help()
        return
    args = build_argparser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )

    settings = TableSettings.load()
    try:
        if args.cmd == "view":
            code = _cmd_view(args, settings)
        else:
            code = _cmd_export(args, settings)
    except (IoError, TableError) as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        code = 1
    raise SystemExit(code)


if __name__ == "__main__":
    main()
