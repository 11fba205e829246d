# src/cache/writer.py — v1
"""Background write-back of cache entries.

Jobs run on a small dedicated thread pool. submit() never blocks on I/O and
a job's failure is logged inside the job, so nothing is ever raised back at
the code that scheduled it.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait
from pathlib import Path

from transcache.cache.file_store import CacheIOError, write_atomic
from transcache.cache.models import CacheStats

logger = logging.getLogger(__name__)


class BackgroundWriter:
    """Fire-and-forget atomic writer backed by a ThreadPoolExecutor."""

    def __init__(self, max_workers: int = 1, stats: CacheStats | None = None) -> None:
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="transcache-writer"
        )
        self._stats = stats if stats is not None else CacheStats()
        self._pending: set[Future[bool]] = set()
        self._lock = threading.Lock()
        self._closed = False

    @property
    def stats(self) -> CacheStats:
        return self._stats

    @property
    def closed(self) -> bool:
        return self._closed

    def submit(
        self, path: Path, data: bytes, stats: CacheStats | None = None
    ) -> Future[bool] | None:
        """Schedule an atomic write of data to path.

        Outcomes are counted in stats, or in the writer's own stats if None.

        Returns:
            A future resolving to True on success and False on failure, or
            None when the writer is already closed and the write was dropped.
        """
        target = stats if stats is not None else self._stats
        with self._lock:
            if self._closed:
                logger.debug("Writer closed, dropping cache write for %s", path)
                return None
            future = self._executor.submit(self._run, path, data, target)
            self._pending.add(future)
        future.add_done_callback(self._forget)
        return future

    def _run(self, path: Path, data: bytes, stats: CacheStats) -> bool:
        try:
            write_atomic(path, data)
        except CacheIOError as e:
            stats.incr("write_failures")
            logger.warning("Cache write-back failed: %s", e)
            return False
        except Exception:
            stats.incr("write_failures")
            logger.exception("Unexpected error writing cache entry %s", path)
            return False
        stats.incr("writes")
        logger.debug("Cached %d bytes at %s", len(data), path)
        return True

    def _forget(self, future: Future[bool]) -> None:
        with self._lock:
            self._pending.discard(future)

    def flush(self, timeout: float | None = None) -> bool:
        """Wait for writes submitted so far.

        Returns:
            True if all of them finished within timeout.
        """
        with self._lock:
            pending = set(self._pending)
        if not pending:
            return True
        _, not_done = wait(pending, timeout=timeout)
        return not not_done

    def close(self, wait_for_pending: bool = True) -> None:
        """Stop accepting writes and shut the pool down."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
        self._executor.shutdown(wait=wait_for_pending)
