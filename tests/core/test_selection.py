from __future__ import annotations

from tabula.core.selection import SelectionManager


def test_toggle_flips_and_reports_state() -> None:
    sel = SelectionManager()

    assert sel.toggle("a") is True
    assert sel.is_selected("a")
    assert sel.toggle("a") is False
    assert not sel.is_selected("a")


def test_ids_outside_any_dataset_are_allowed() -> None:
    sel = SelectionManager()
    sel.toggle("not-loaded-yet")

    assert sel.selected_ids() == {"not-loaded-yet"}


def test_set_all_is_scoped_to_given_ids() -> None:
    sel = SelectionManager(["x"])

    sel.set_all(["a", "b"])
    assert sel.selected_ids() == {"x", "a", "b"}

    sel.set_all(["a", "b"], selected=False)
    assert sel.selected_ids() == {"x"}


def test_selected_ids_is_a_copy() -> None:
    sel = SelectionManager(["a"])

    ids = sel.selected_ids()
    ids.add("b")

    assert sel.selected_ids() == {"a"}


def test_ordered_ids_follow_selection_order() -> None:
    sel = SelectionManager()
    for row_id in ["c", "a", "b"]:
        sel.select(row_id)
    sel.deselect("a")

    assert sel.ordered_ids() == ("c", "b")
    assert list(sel) == ["c", "b"]


def test_prune_removes_only_absent_ids() -> None:
    sel = SelectionManager(["a", "gone", "b", "also-gone"])

    removed = sel.prune(["a", "b", "c"])

    assert removed == ("gone", "also-gone")
    assert sel.selected_ids() == {"a", "b"}


def test_clear() -> None:
    sel = SelectionManager(["a", "b"])
    sel.clear()

    assert len(sel) == 0
    assert "a" not in sel
