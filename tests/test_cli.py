from __future__ import annotations

from pathlib import Path

import polars as pl
import pytest

from tabula import cli


@pytest.fixture
def orders_csv(tmp_path: Path, monkeypatch) -> Path:
    # Isolate from any tabula.toml / TABULA_* settings of the host
    monkeypatch.chdir(tmp_path)
    for key in ["TABULA_PAGE_SIZE", "TABULA_STATE_PATH", "TABULA_EXPORT_INCLUDE_TIMESTAMP"]:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("TABULA_PAGE_SIZE_OPTIONS", "3,5,10")
    path = tmp_path / "orders.csv"
    pl.DataFrame(
        {
            "id": [f"o{i}" for i in range(12)],
            "status": ["open" if i % 3 else "closed" for i in range(12)],
            "amount": [i * 10 for i in range(12)],
        }
    ).write_csv(path)
    return path


def _run(argv: list[str]) -> int:
    with pytest.raises(SystemExit) as exc:
        cli.main(argv)
    return exc.value.code


def test_view_prints_page_and_counts(orders_csv: Path, capsys) -> None:
    code = _run(
        [
            "view",
            str(orders_csv),
            "--sort",
            "amount:desc",
            "--filter",
            "status=OPEN",
            "--page-size",
            "3",
            "--page",
            "2",
        ]
    )

    out = capsys.readouterr().out
    assert code == 0
    assert "rows 4-6 of 8 (total 12); page 2 of 3" in out
    assert "o7" in out
    assert "o11" not in out


def test_view_search_and_out_of_range_page(orders_csv: Path, capsys) -> None:
    code = _run(["view", str(orders_csv), "--search", "closed", "--page", "9"])

    out = capsys.readouterr().out
    assert code == 0
    assert "of 4 (total 12)" in out
    assert "past the end" in out


def test_export_selected_rows(orders_csv: Path, tmp_path: Path, monkeypatch, capsys) -> None:
    monkeypatch.setenv("TABULA_EXPORT_INCLUDE_TIMESTAMP", "false")

    code = _run(
        [
            "export",
            str(orders_csv),
            "--out",
            str(tmp_path / "exports"),
            "--sort",
            "amount:desc",
            "--selected",
            "o1",
            "--selected",
            "o4",
        ]
    )

    out_file = tmp_path / "exports" / "table-export.csv"
    assert code == 0
    assert "Wrote export" in capsys.readouterr().out
    assert out_file.read_bytes().decode("utf-8-sig") == (
        "id,status,amount\r\no4,open,40\r\no1,open,10"
    )


def test_state_file_is_restored_between_runs(
    orders_csv: Path, tmp_path: Path, monkeypatch, capsys
) -> None:
    monkeypatch.setenv("TABULA_STATE_PATH", str(tmp_path / "state.json"))

    assert _run(["view", str(orders_csv), "--sort", "amount:desc", "--page-size", "5"]) == 0
    capsys.readouterr()
    assert _run(["view", str(orders_csv)]) == 0

    out = capsys.readouterr().out
    assert "rows 1-5 of 12" in out
    assert "o11" in out


def test_unreadable_table_exits_with_error(tmp_path: Path, monkeypatch, capsys) -> None:
    monkeypatch.chdir(tmp_path)

    code = _run(["view", str(tmp_path / "missing.csv")])

    assert code == 1
    assert "not found" in capsys.readouterr().err


def test_bad_filter_argument_is_rejected(orders_csv: Path) -> None:
    assert _run(["view", str(orders_csv), "--filter", "status"]) == 2


def test_parse_sort() -> None:
    assert cli._parse_sort("amount") == ("amount", "asc")
    assert cli._parse_sort("amount:DESC") == ("amount", "desc")
    assert cli._parse_sort("a:b") == ("a:b", "asc")


def test_no_arguments_prints_help(capsys) -> None:
    cli.main([])

    assert "usage: tabula" in capsys.readouterr().out


def test_view_rejects_page_size_outside_options(orders_csv: Path, capsys) -> None:
    code = _run(["view", str(orders_csv), "--page-size", "4"])

    err = capsys.readouterr().err
    assert code == 2
    assert "one of: 3, 5, 10" in err
