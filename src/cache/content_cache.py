# src/cache/content_cache.py — v1
"""Content-addressed cache of transform results.

Entries live at ``<root>/<pipeline fingerprint>/<source digest><ext>``. A hit
is served synchronously from disk. A miss runs the engine, hands the output
straight back and schedules the write-back without waiting for it. Cache
I/O failures only ever cost a recomputation; they are never raised.
"""

from __future__ import annotations

import logging
from pathlib import Path

from transcache.cache.file_store import CacheIOError, read_entry
from transcache.cache.models import CacheStats
from transcache.cache.writer import BackgroundWriter
from transcache.logging.context import set_pipeline_context, set_source_context
from transcache.transform.engine import TransformEngine
from transcache.transform.fingerprint import PipelineFingerprint, source_digest
from transcache.transform.models import SourceUnit

logger = logging.getLogger(__name__)


class ContentAddressedCache:
    """Maps (pipeline fingerprint, source bytes) to transform output."""

    def __init__(
        self,
        engine: TransformEngine,
        cache_root: Path,
        fingerprint: PipelineFingerprint | None = None,
        extension: str = ".out",
        writer: BackgroundWriter | None = None,
        enabled: bool = True,
        writer_threads: int = 1,
    ) -> None:
        self._engine = engine
        self._root = Path(cache_root)
        self._fingerprint = fingerprint or PipelineFingerprint(engine.config)
        self._extension = extension
        self._enabled = enabled
        self._stats = CacheStats()
        self._owns_writer = writer is None
        self._writer = writer if writer is not None else BackgroundWriter(writer_threads)
        self._cache_dir: Path | None = None

    @property
    def engine(self) -> TransformEngine:
        return self._engine

    @property
    def stats(self) -> CacheStats:
        return self._stats

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def root(self) -> Path:
        return self._root

    def fingerprint(self) -> str:
        """Pipeline fingerprint naming this cache's namespace directory.

        Raises:
            FingerprintReadError: If a logic unit cannot be read.
        """
        return self._fingerprint.digest()

    @property
    def cache_dir(self) -> Path:
        """Namespace directory for the current pipeline fingerprint."""
        if self._cache_dir is None:
            digest = self.fingerprint()
            set_pipeline_context(digest)
            self._cache_dir = self._root / digest
        return self._cache_dir

    def entry_path(self, source: SourceUnit) -> Path:
        """Path of the entry for source; the filename plays no part."""
        return self.cache_dir / f"{source_digest(source.data)}{self._extension}"

    def lookup(self, source: SourceUnit) -> bytes | None:
        """Return cached output for source, or None on a miss."""
        return self._read(self.entry_path(source))

    def _read(self, path: Path) -> bytes | None:
        try:
            data = read_entry(path)
        except CacheIOError as e:
            self._stats.incr("lookup_errors")
            logger.warning("Treating unreadable cache entry as a miss: %s", e)
            data = None

        if data is None:
            self._stats.incr("misses")
        else:
            self._stats.incr("hits")
        return data

    def lookup_or_compute(self, source: SourceUnit) -> bytes:
        """Return transform output for source, from cache when possible.

        Raises:
            TransformError: If the engine rejects the source.
            FingerprintReadError: If the pipeline cannot be fingerprinted.
        """
        set_source_context(source.filename)
        if not self._enabled:
            return self._engine.transform(source)

        path = self.entry_path(source)
        cached = self._read(path)
        if cached is not None:
            logger.debug("Cache hit for %r", source.filename)
            return cached

        output = self._engine.transform(source)
        self._writer.submit(path, output, self._stats)
        return output

    def flush(self, timeout: float | None = None) -> bool:
        """Wait for scheduled write-backs; True if all finished in time."""
        return self._writer.flush(timeout)

    def close(self) -> None:
        """Drain pending write-backs and release the writer if owned."""
        if self._owns_writer:
            self._writer.close()
        else:
            self._writer.flush()

    def __enter__(self) -> ContentAddressedCache:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()
