"""
Version metadata for persisted table state snapshots.

Exposes the canonical snapshot format version (STATE_V) embedded in every saved
TableStateSnapshot, and a compatibility check used when restoring. This module is
zero-IO.

Notes:
    - Snapshots carry the version as a "major.minor" tag.
    - A snapshot restores only when its major and minor match STATE_V; anything else
      is discarded by the persistence layer (selection/view state then starts fresh).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

STATE_MAJOR_VERSION = 1
STATE_MINOR_VERSION = 0


@dataclass(frozen=True)
class StateVersion:
    """
    Immutable version with ISO release date for persisted table state.

    Attributes:
        major (int): Non-negative major component signalling breaking changes.
        minor (int): Non-negative minor component for additive, non-breaking changes.
        date (str): ISO YYYY-MM-DD release date.

    Raises:
        ValueError: If any component is negative or the date is not ISO compliant.
    """

    major: int
    minor: int
    date: str  # ISO YYYY-MM-DD

    def __post_init__(self) -> None:
        if self.major < 0:
            raise ValueError(f"StateVersion major must be non-negative, got {self.major}")
        if self.minor < 0:
            raise ValueError(f"StateVersion minor must be non-negative, got {self.minor}")
        try:
            date.fromisoformat(self.date)
        except ValueError as exc:
            raise ValueError(
                f"StateVersion date must be ISO YYYY-MM-DD, got {self.date!r}"
            ) from exc

    @property
    def tag(self) -> str:
        return f"{self.major}.{self.minor}"


STATE_V = StateVersion(STATE_MAJOR_VERSION, STATE_MINOR_VERSION, "2026-10-18")


def parse_tag(tag: str) -> tuple[int, int]:
    """
    Parse a "major.minor" tag.

    Raises:
        ValueError: If the tag is not two dot-separated non-negative integers.

    Examples:
        >>> parse_tag("1.0")
        (1, 0)
    """
    parts = tag.strip().split(".")
    if len(parts) != 2 or not all(p.isdigit() for p in parts):
        raise ValueError(f"version tag must look like 'major.minor', got {tag!r}")
    return int(parts[0]), int(parts[1])


def is_compatible(tag: str) -> bool:
    """
    Check whether a snapshot version tag matches STATE_V.

    Returns:
        bool: True if the tag parses and shares major and minor with STATE_V.

    Examples:
        >>> is_compatible(STATE_V.tag)
        True
        >>> is_compatible("0.9"), is_compatible("garbage")
        (False, False)
    """
    try:
        major, minor = parse_tag(tag)
    except ValueError:
        return False
    return major == STATE_V.major and minor == STATE_V.minor
