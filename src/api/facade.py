# src/api/facade.py — v1
"""Public API facade: prefilter, transform and cache behind one object.

Usage:
    from transcache.api.facade import CachingTransformer
    with CachingTransformer.from_settings(loader=my_loader) as transformer:
        output = transformer.process(source_bytes, "app.src")
"""

from __future__ import annotations

import logging

from transcache.cache.cache_factory import create_content_cache
from transcache.cache.content_cache import ContentAddressedCache
from transcache.config.settings import Settings
from transcache.transform.engine import BackendLoader
from transcache.transform.models import PipelineConfig, SourceUnit
from transcache.transform.prefilter import should_transform

logger = logging.getLogger(__name__)


class CachingTransformer:
    """Transforms opted-in sources, reusing results across runs and processes."""

    def __init__(self, cache: ContentAddressedCache) -> None:
        self._cache = cache

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        loader: BackendLoader | None = None,
        config: PipelineConfig | None = None,
    ) -> CachingTransformer:
        """Build a transformer from settings (see create_content_cache)."""
        return cls(create_content_cache(settings, loader=loader, config=config))

    @property
    def cache(self) -> ContentAddressedCache:
        return self._cache

    @staticmethod
    def should_transform(data: bytes | str) -> bool:
        """True if data starts with a transform directive."""
        return should_transform(data)

    def config_digest(self) -> str:
        """Fingerprint of the transformation pipeline."""
        return self._cache.fingerprint()

    def transform(self, data: bytes | str, filename: str | None = None) -> bytes:
        """Transform without touching the cache.

        Raises:
            TransformError: If the backend rejects the source.
        """
        return self._cache.engine.transform(SourceUnit.of(data, filename))

    def transform_with_cache(self, data: bytes | str, filename: str | None = None) -> bytes:
        """Transform, serving and populating the on-disk cache.

        Raises:
            TransformError: If the backend rejects the source.
        """
        return self._cache.lookup_or_compute(SourceUnit.of(data, filename))

    def process(self, data: bytes | str, filename: str | None = None) -> bytes:
        """Transform data if it opts in; otherwise return it unchanged."""
        if not should_transform(data):
            logger.debug("No transform directive in %r, passing through", filename)
            return data.encode("utf-8") if isinstance(data, str) else bytes(data)
        return self.transform_with_cache(data, filename)

    def flush(self, timeout: float | None = None) -> bool:
        """Wait for scheduled cache writes."""
        return self._cache.flush(timeout)

    def close(self) -> None:
        self._cache.close()

    def __enter__(self) -> CachingTransformer:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()
