"""
Pydantic v2 models for the persisted table state snapshot.

The snapshot is the plain, serializable form of the controller's sort, filter and
pagination state, used by the persistence collaborator for save/restore across
process restarts. Selection is session-scoped and not part of it.

Responsibilities
- Define SortEntry, FilterSnapshot, PaginationSnapshot and TableStateSnapshot.
- Normalize sort directions via grammar helpers ("DESC", "descending" -> "desc").
- Enforce snapshot invariants (no duplicate sort column, page_size >= 1,
  page_index >= 0).

Style
- Zero-IO (stdlib + pydantic only); `extra="forbid"` on every model.

Examples:
    >>> from tabula.core.schema import TableStateSnapshot
    >>> snap = TableStateSnapshot.model_validate(
    ...     {"sort": [{"column_id": "v", "direction": "DESC"}], "pagination": {"page_size": 25}}
    ... )
    >>> snap.sort[0].direction, snap.pagination.page_size, snap.pagination.page_index
    ('desc', 25, 0)
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .constants import DEFAULT_PAGE_SIZE
from .errors import TableConfigError
from .grammar import sort_direction_from_value
from .versioning import STATE_V

__all__ = [
    "SortEntry",
    "FilterSnapshot",
    "PaginationSnapshot",
    "TableStateSnapshot",
    "StateStore",
]


class SortEntry(BaseModel):
    """
    One persisted sort key.

    Attributes:
        column_id (str): Column id.
        direction (str): "asc" or "desc" (normalized).
    """

    model_config = ConfigDict(extra="forbid")

    column_id: str = Field(..., min_length=1)
    direction: str = "asc"

    @field_validator("direction")
    @classmethod
    def _normalize_direction(cls, v: str) -> str:
        return sort_direction_from_value(v).value


class FilterSnapshot(BaseModel):
    """
    Persisted filter texts.

    Attributes:
        per_column (dict[str, str]): column_id -> text; empty texts are dropped.
        global_text (str): Global filter text.
    """

    model_config = ConfigDict(extra="forbid")

    per_column: dict[str, str] = Field(default_factory=dict)
    global_text: str = ""

    @field_validator("per_column")
    @classmethod
    def _drop_empty(cls, v: dict[str, str]) -> dict[str, str]:
        return {k: t for k, t in v.items() if t}


class PaginationSnapshot(BaseModel):
    """Persisted page position."""

    model_config = ConfigDict(extra="forbid")

    page_index: int = Field(0, ge=0)
    page_size: int = Field(DEFAULT_PAGE_SIZE, ge=1)


class TableStateSnapshot(BaseModel):
    """
    Serializable controller state (sort, filter, pagination).

    Attributes:
        version (str): Snapshot format tag ("major.minor"), defaults to STATE_V.
        sort (list[SortEntry]): Sort keys in priority order.
        filter (FilterSnapshot): Filter texts.
        pagination (PaginationSnapshot): Page position.

    Raises:
        pydantic.ValidationError: On unknown fields, bad directions, negative page
            index, non-positive page size, or a column repeated in `sort`.
    """

    model_config = ConfigDict(extra="forbid")

    version: str = STATE_V.tag
    sort: list[SortEntry] = Field(default_factory=list)
    filter: FilterSnapshot = Field(default_factory=FilterSnapshot)
    pagination: PaginationSnapshot = Field(default_factory=PaginationSnapshot)

    @model_validator(mode="after")
    def _unique_sort_columns(self) -> TableStateSnapshot:
        seen: set[str] = set()
        for entry in self.sort:
            if entry.column_id in seen:
                raise TableConfigError(f"column {entry.column_id!r} appears twice in sort")
            seen.add(entry.column_id)
        return self


@runtime_checkable
class StateStore(Protocol):
    """
    Persistence collaborator for controller state.

    Implementations live in tabula.io.persistence; `load` returns None when nothing
    usable is stored.
    """

    def save(self, state: TableStateSnapshot) -> None: ...

    def load(self) -> TableStateSnapshot | None: ...
