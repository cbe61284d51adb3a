"""
Canonical JSON serialization and state fingerprints.

Provides a single canonical JSON policy and a SHA-256 fingerprint over a table
state snapshot, so callers can key caches on "same state -> same view". This
module is zero-IO and uses only the Python standard library.

Notes:
    - Canonical JSON:
        - sort_keys=True
        - separators=(",", ":")
        - ensure_ascii=False
    - Fingerprints hash the UTF-8 encoded canonical JSON string.
"""

from __future__ import annotations

import hashlib
import json
from collections.abc import Mapping
from typing import Any

__all__ = [
    "json_dumps_canonical",
    "hash_state",
]


def json_dumps_canonical(obj: Any) -> str:
    """
    Serialize an object to a canonical JSON string.

    Args:
        obj (Any): JSON-serializable object.

    Returns:
        str: Canonical JSON string with sort_keys=True, compact separators,
        and ensure_ascii=False.
    """
    return json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def hash_state(state: Mapping[str, Any]) -> str:
    """
    Fingerprint a state mapping (e.g. TableStateSnapshot.model_dump()).

    Returns:
        str: SHA-256 hex digest over the canonical JSON serialization.

    Examples:
        >>> hash_state({"a": 1, "b": 2}) == hash_state({"b": 2, "a": 1})
        True
    """
    h = hashlib.sha256()
    h.update(json_dumps_canonical(dict(state)).encode("utf-8"))
    return h.hexdigest()
