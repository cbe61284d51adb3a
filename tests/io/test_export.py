from __future__ import annotations

from datetime import datetime
from pathlib import Path

import polars as pl

from tabula.core.columns import Column
from tabula.core.controller import TableController
from tabula.core.grammar import SelectionScope
from tabula.io.config import TableSettings
from tabula.io.export import (
    export_filename,
    export_table,
    grid_to_frame,
    view_to_frame,
    write_csv,
)

NOW = datetime(2024, 5, 1, 13, 4, 5)


def _table() -> TableController:
    return TableController(
        [
            Column.from_key("_select"),
            Column.from_key("id", label="ID"),
            Column.from_key("note", label="Note"),
        ],
        [
            {"id": "1", "note": "plain"},
            {"id": "2", "note": "a,b"},
            {"id": "3", "note": None},
        ],
    )


def test_export_filename() -> None:
    assert export_filename("orders", now=NOW) == "orders_2024-05-01-13-04-05.csv"
    assert export_filename("orders", include_timestamp=False) == "orders.csv"


def test_write_csv_with_bom(tmp_path: Path) -> None:
    table = _table()

    out = write_csv(tmp_path / "t.csv", table.get_view(), table.columns)

    data = out.read_bytes()
    assert data.startswith(b"\xef\xbb\xbf")
    assert data.decode("utf-8-sig") == 'ID,Note\r\n1,plain\r\n2,"a,b"\r\n3,'


def test_write_csv_without_bom(tmp_path: Path) -> None:
    table = _table()

    out = write_csv(tmp_path / "t.csv", table.get_view(), table.columns, include_bom=False)

    assert out.read_bytes().decode("utf-8").startswith("ID,Note")


def test_export_table_uses_selection_and_settings(tmp_path: Path) -> None:
    table = _table()
    table.toggle_row("3")
    table.toggle_row("1")
    settings = TableSettings(export_filename="notes", export_include_bom=False)

    out = export_table(table, tmp_path / "exports", settings=settings, now=NOW)

    assert out.name == "notes_2024-05-01-13-04-05.csv"
    assert out.read_bytes().decode("utf-8") == "ID,Note\r\n1,plain\r\n3,"


def test_export_table_all_visible_scope(tmp_path: Path) -> None:
    table = _table()
    table.toggle_row("2")
    settings = TableSettings(export_include_timestamp=False)

    out = export_table(table, tmp_path, settings=settings, scope=SelectionScope.ALL_VISIBLE)

    assert out.name == "table-export.csv"
    assert len(out.read_bytes().decode("utf-8-sig").split("\r\n")) == 4


def test_export_follows_filters(tmp_path: Path) -> None:
    table = _table()
    table.set_filter("note", "A,B")

    out = export_table(table, tmp_path, settings=TableSettings(export_include_bom=False), now=NOW)

    assert out.read_bytes().decode("utf-8") == 'ID,Note\r\n2,"a,b"'


def test_view_to_frame() -> None:
    table = _table()
    table.set_sort("id")
    table.set_sort("id")

    df = view_to_frame(table.get_view(), table.columns)

    assert df.columns == ["ID", "Note"]
    assert df.schema == {"ID": pl.Utf8, "Note": pl.Utf8}
    assert df["ID"].to_list() == ["3", "2", "1"]
    assert df["Note"].to_list() == ["", "a,b", "plain"]


def test_view_to_frame_keeps_columns_with_repeated_labels() -> None:
    table = TableController(
        [Column.from_key("id", label="X"), Column.from_key("v", label="X")],
        [{"id": "a", "v": 1}, {"id": "b", "v": 2}],
    )

    df = view_to_frame(table.get_view(), table.columns)

    assert df.width == 2
    assert df.columns == ["X", "X_2"]
    assert df["X"].to_list() == ["a", "b"]
    assert df["X_2"].to_list() == ["1", "2"]


def test_grid_to_frame_suffixes_until_unique() -> None:
    df = grid_to_frame([["X", "X_2", "X"], ["1", "2", "3"]])

    assert df.columns == ["X", "X_2", "X_3"]
    assert df.row(0) == ("1", "2", "3")


def test_grid_to_frame_header_only() -> None:
    df = grid_to_frame([["A", "B"]])

    assert df.shape == (0, 2)
