from __future__ import annotations

from datetime import date
from pathlib import Path

import polars as pl
import pytest

from tabula.core.controller import TableController
from tabula.io.errors import IoReadError
from tabula.io.frames import columns_from_frame, read_table, rows_from_frame


def _frame() -> pl.DataFrame:
    return pl.DataFrame(
        {
            "id": [1, 2, 3],
            "city": ["Berlin", None, "Rome"],
            "opened": [date(2020, 1, 2), date(2019, 5, 6), date(2021, 7, 8)],
        }
    )


def test_rows_from_frame_are_dicts_with_none_for_nulls() -> None:
    rows = rows_from_frame(_frame())

    assert rows[1] == {"id": 2, "city": None, "opened": date(2019, 5, 6)}


def test_columns_from_frame_labels_and_hidden() -> None:
    columns = columns_from_frame(_frame(), labels={"city": "City"}, hidden=["id"])

    assert [c.id for c in columns] == ["id", "city", "opened"]
    assert columns[1].header == "City"
    assert columns[0].searchable is False
    assert columns[0].exportable is False
    assert columns[0].sortable is True


def test_read_csv_and_parquet(tmp_path: Path) -> None:
    df = _frame()
    csv_path = tmp_path / "t.csv"
    parquet_path = tmp_path / "t.parquet"
    df.write_csv(csv_path)
    df.write_parquet(parquet_path)

    assert read_table(parquet_path).equals(df)
    from_csv = read_table(csv_path)
    assert from_csv.columns == df.columns
    assert from_csv.height == 3


def test_read_table_errors(tmp_path: Path) -> None:
    with pytest.raises(IoReadError, match="unsupported"):
        read_table(tmp_path / "t.xlsx")
    with pytest.raises(IoReadError, match="not found"):
        read_table(tmp_path / "missing.csv")


def test_frame_backed_controller_sorts_dates_and_keeps_nulls_last() -> None:
    df = _frame()
    table = TableController(columns_from_frame(df), rows_from_frame(df))

    table.set_sort("opened")
    assert table.get_view().ordered_ids == ("2", "1", "3")

    table.set_sort("city")
    table.set_sort("city")
    assert table.get_view().ordered_ids == ("3", "1", "2")
