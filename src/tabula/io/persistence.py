"""
State stores: save/restore of table state across sessions.

Implements the tabula.core.schema.StateStore collaborator:
- InMemoryStateStore: process-local store (tests, embedding in a larger app).
- JsonFileStateStore: canonical JSON on disk, written atomically.

Contract
- save(snapshot) persists sort/filter/pagination (selection is never part of a
  snapshot).
- load() returns None when nothing usable is stored: missing file, unreadable or
  malformed JSON, schema-invalid payload, or an incompatible snapshot version. Such
  files are logged and ignored, never raised, so a stale state file cannot break
  table construction.
"""

from __future__ import annotations

import json
import logging
import os

from pydantic import ValidationError

from tabula.core.schema import TableStateSnapshot
from tabula.core.serde import json_dumps_canonical, json_loads
from tabula.core.versioning import is_compatible

from .fs import write_bytes_atomic

__all__ = [
    "InMemoryStateStore",
    "JsonFileStateStore",
]

logger = logging.getLogger(__name__)


def _decode(payload: object, source: str) -> TableStateSnapshot | None:
    try:
        snapshot = TableStateSnapshot.model_validate(payload)
    except ValidationError as exc:
        logger.warning("discarding invalid table state from %s: %s", source, exc.error_count())
        return None
    if not is_compatible(snapshot.version):
        logger.warning(
            "discarding table state from %s: incompatible version %r", source, snapshot.version
        )
        return None
    return snapshot


class InMemoryStateStore:
    """Holds the last saved snapshot as a plain mapping (copied on save and load)."""

    def __init__(self) -> None:
        self._payload: dict[str, object] | None = None

    def save(self, state: TableStateSnapshot) -> None:
        self._payload = state.model_dump()

    def load(self) -> TableStateSnapshot | None:
        if self._payload is None:
            return None
        return _decode(self._payload, "memory")

    def clear(self) -> None:
        self._payload = None


class JsonFileStateStore:
    """
    Snapshot persisted as canonical JSON at `path`.

    Args:
        path (str | os.PathLike[str]): State file location; parent directories are
            created on save.

    Raises:
        tabula.io.errors.IoWriteError: From save(), if the atomic write fails.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = os.fspath(path)

    def save(self, state: TableStateSnapshot) -> None:
        data = json_dumps_canonical(state.model_dump()).encode("utf-8")
        write_bytes_atomic(self.path, data)
        logger.debug("saved table state to %s", self.path)

    def load(self) -> TableStateSnapshot | None:
        try:
            with open(self.path, "rb") as fh:
                payload = json_loads(fh.read())
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            logger.warning("discarding unreadable table state %s: %s", self.path, exc)
            return None
        return _decode(payload, self.path)

    def clear(self) -> None:
        try:
            os.remove(self.path)
        except FileNotFoundError:
            pass
