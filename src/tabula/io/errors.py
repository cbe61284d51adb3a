"""
Custom exceptions for the tabula.io module.

Purpose
- Provide IO-layer error types that map cleanly to responsibilities in tabula.io.
- Keep tabula.core as the source of truth for engine errors (see tabula.core.errors).

Boundaries
- tabula.io raises Io* errors for filesystem concerns:
  - IoReadError: a table file could not be read or has an unsupported format.
  - IoWriteError: atomic write path failed (tmp write/fsync/rename).
- Persisted-state loads never raise for missing or unusable files; the store
  returns None instead.

Notes
- These exceptions do not perform any IO and are stdlib-only.
"""

from __future__ import annotations


class IoError(Exception):
    """
    Base class for IO-related errors in tabula.io.

    Notes:
        Use this as a catch-all for IO-layer failures, distinct from tabula.core errors.
    """


class IoReadError(IoError):
    """
    Raised when a table file cannot be loaded.

    Examples:
        - Unsupported extension (not .csv / .parquet)
        - Parser failure reported by polars
    """


class IoWriteError(IoError):
    """
    Raised when an export or state write fails to complete atomically.

    Notes:
        The write path is tmp file -> fsync -> os.replace(tmp, final). Failures at any
        step surface as IoWriteError (with best-effort cleanup of the tmp file).
    """
