# src/cache/file_store.py — v1
"""Filesystem primitives for cache entries: plain reads, atomic writes.

An entry's existence at its path is the whole state. Writers produce the
entry in a temp file beside it and rename it into place, so readers see
either no file or a complete one, even with several processes writing the
same key at once (same key means same bytes, so the last rename wins
harmlessly).
"""

from __future__ import annotations

import logging
import os
import uuid
from pathlib import Path

logger = logging.getLogger(__name__)

TMP_SUFFIX = ".tmp"


class CacheIOError(Exception):
    """A filesystem operation on the cache failed. Never reaches callers."""

    def __init__(self, stage: str, path: Path, reason: str) -> None:
        self.stage = stage
        self.path = path
        self.reason = reason
        super().__init__(f"Cache {stage} failed for {path}: {reason}")


def read_entry(path: Path) -> bytes | None:
    """Read a cache entry fully.

    Returns:
        The entry bytes, or None if no file exists at path.

    Raises:
        CacheIOError: For any other failure (permissions, path is a directory).
    """
    try:
        return path.read_bytes()
    except FileNotFoundError:
        return None
    except OSError as e:
        raise CacheIOError("read", path, str(e)) from e


def temp_path_for(path: Path) -> Path:
    """Unique hidden temp name in the same directory as path.

    Same directory keeps the final rename on one filesystem, hence atomic.
    """
    return path.parent / f".{uuid.uuid4().hex}{TMP_SUFFIX}"


def write_atomic(path: Path, data: bytes) -> None:
    """Create path's directory if needed, then write data atomically.

    Raises:
        CacheIOError: If any step fails. A leftover temp file is removed on a
            best-effort basis first.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise CacheIOError("mkdir", path.parent, str(e)) from e

    tmp = temp_path_for(path)
    try:
        tmp.write_bytes(data)
    except OSError as e:
        _discard(tmp)
        raise CacheIOError("write", tmp, str(e)) from e

    try:
        os.replace(tmp, path)
    except OSError as e:
        _discard(tmp)
        raise CacheIOError("rename", path, str(e)) from e


def _discard(tmp: Path) -> None:
    try:
        tmp.unlink(missing_ok=True)
    except OSError as e:
        logger.debug("Could not remove temp file %s: %s", tmp, e)
