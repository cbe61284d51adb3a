"""
Identity-keyed row selection.

Selection is a set of row identities, never row objects or positions, so it survives
sorting, filtering and dataset replacement. Ids absent from the current dataset are
permitted and kept until `prune` is called explicitly.

Notes:
    - "Select all" is always scoped to a caller-provided id list (typically the ids
      visible on the current page or window), never to every id in the dataset.
    - Iteration order is selection order, which keeps outputs deterministic.

Examples:
    >>> from tabula.core.selection import SelectionManager
    >>> sel = SelectionManager()
    >>> sel.toggle("a"); sel.toggle("b"); sel.toggle("a")
    True
    True
    False
    >>> sel.selected_ids()
    {'b'}
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

__all__ = ["SelectionManager"]


class SelectionManager:
    """Set of selected row identities."""

    def __init__(self, ids: Iterable[str] = ()) -> None:
        # dict keeps insertion order
        self._ids: dict[str, None] = dict.fromkeys(ids)

    def __len__(self) -> int:
        return len(self._ids)

    def __iter__(self) -> Iterator[str]:
        return iter(self._ids)

    def __contains__(self, row_id: object) -> bool:
        return row_id in self._ids

    def __repr__(self) -> str:
        return f"SelectionManager({list(self._ids)!r})"

    def toggle(self, row_id: str) -> bool:
        """Flip selection of `row_id`; returns the new state."""
        if row_id in self._ids:
            del self._ids[row_id]
            return False
        self._ids[row_id] = None
        return True

    def select(self, row_id: str) -> None:
        self._ids[row_id] = None

    def deselect(self, row_id: str) -> None:
        self._ids.pop(row_id, None)

    def set_all(self, ids: Iterable[str], selected: bool = True) -> None:
        """
        Select (or deselect) every id in `ids`; other selected ids are untouched.

        Args:
            ids (Iterable[str]): Caller-scoped id list (e.g. the current page).
            selected (bool): True to select, False to deselect.
        """
        if selected:
            for row_id in ids:
                self._ids[row_id] = None
        else:
            for row_id in ids:
                self._ids.pop(row_id, None)

    def clear(self) -> None:
        self._ids.clear()

    def is_selected(self, row_id: str) -> bool:
        return row_id in self._ids

    def selected_ids(self) -> set[str]:
        """Copy of the selected ids."""
        return set(self._ids)

    def ordered_ids(self) -> tuple[str, ...]:
        """Selected ids in selection order."""
        return tuple(self._ids)

    def prune(self, existing: Iterable[str]) -> tuple[str, ...]:
        """
        Remove selected ids that are not in `existing`.

        Returns:
            tuple[str, ...]: The removed ids, in selection order.
        """
        keep = set(existing)
        removed = tuple(i for i in self._ids if i not in keep)
        for row_id in removed:
            del self._ids[row_id]
        return removed
