"""
Filesystem helpers for tabula.io (file protocol baseline).

Responsibilities
- Provide a minimal stdlib-only abstraction for the filesystem operations used by
  tabula.io: directory creation, safe write handles, fsync, and atomic renames.
- Establish clear semantics for the atomic write path: tmp write -> fsync -> atomic rename.

Notes
- Atomicity via os.replace is guaranteed only when src and dst reside on the same filesystem;
  temporary files are therefore created next to their destination.
- All helpers are synchronous; callers decide on concurrency/locking if/when needed.
"""

from __future__ import annotations

import os
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from typing import BinaryIO

from .errors import IoWriteError


def makedirs(path: str, exist_ok: bool = True) -> None:
    """
    Create directories recursively.

    Args:
        path (str): Directory path to create.
        exist_ok (bool): Do not error if the directory already exists.
    """
    os.makedirs(path, exist_ok=exist_ok)


@contextmanager
def open_write(path: str) -> Iterator[BinaryIO]:
    """
    Open a file for binary write as a context manager.

    Args:
        path (str): Destination path to open in write-binary mode.

    Yields:
        BinaryIO: A writable handle supporting .flush() and .fileno().
    """
    fh = open(path, "wb")
    try:
        yield fh
    finally:
        fh.close()


def fsync_file(fh: BinaryIO) -> None:
    """
    Flush and fsync an open file handle.

    Notes:
        Ensures file contents reach the storage device (subject to OS/filesystem semantics).
    """
    fh.flush()
    os.fsync(fh.fileno())


def rename_atomic(src: str, dst: str) -> None:
    """
    Atomically rename src -> dst on the same filesystem.

    Notes:
        Uses os.replace, which is atomic only if src and dst reside on the same filesystem.
    """
    os.replace(src, dst)


def write_bytes_atomic(path: str, data: bytes) -> None:
    """
    Write `data` to `path` via tmp file -> fsync -> atomic rename.

    Args:
        path (str): Final destination; parent directories are created.
        data (bytes): Full file contents.

    Raises:
        IoWriteError: If any step fails; the tmp file is removed best-effort.
    """
    parent = os.path.dirname(os.path.abspath(path))
    tmp = os.path.join(parent, f".{os.path.basename(path)}.{uuid.uuid4().hex}.tmp")
    try:
        makedirs(parent)
        with open_write(tmp) as fh:
            fh.write(data)
            fsync_file(fh)
        rename_atomic(tmp, path)
    except OSError as exc:
        try:
            os.remove(tmp)
        except OSError:
            pass
        raise IoWriteError(f"failed to write {path}: {exc}") from exc
