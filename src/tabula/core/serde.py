"""
Lightweight JSON serialization/deserialization utilities.

Provides `json_loads` as a thin wrapper around the stdlib `json` module and
re-exports `json_dumps_canonical` from `tabula.core.hashing` to keep a single
canonical JSON policy. This module is zero-IO.
"""

from __future__ import annotations

import json
from typing import Any

# Re-export canonical dumps to keep a single canonicalization policy.
from .hashing import json_dumps_canonical  # noqa: F401

__all__ = [
    "json_loads",
    "json_dumps_canonical",
]


def json_loads(s: str | bytes) -> Any:
    """
    Deserialize a JSON document using the stdlib json module.

    Raises:
        json.JSONDecodeError: If `s` is not valid JSON.
    """
    return json.loads(s)
