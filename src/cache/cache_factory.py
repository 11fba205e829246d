# src/cache/cache_factory.py — v1
"""Factory wiring settings into an engine, fingerprint, writer and cache."""

from __future__ import annotations

import logging

from transcache.cache.content_cache import ContentAddressedCache
from transcache.cache.writer import BackgroundWriter
from transcache.config.settings import ConfigurationError, Settings
from transcache.transform.engine import BackendLoader, TransformEngine
from transcache.transform.fingerprint import PipelineFingerprint
from transcache.transform.loader import import_backend, installed_version
from transcache.transform.models import PipelineConfig

logger = logging.getLogger(__name__)


def create_content_cache(
    settings: Settings | None = None,
    loader: BackendLoader | None = None,
    config: PipelineConfig | None = None,
    writer: BackgroundWriter | None = None,
) -> ContentAddressedCache:
    """Build a ContentAddressedCache from settings.

    Args:
        settings: Application settings. Defaults are used if None.
        loader: Backend loader. Defaults to importing TRANSFORM_BACKEND.
        config: Pipeline config. Defaults to the one described by settings,
            with the tool version read from installed package metadata when
            TRANSFORM_TOOL_VERSION is empty.
        writer: Shared write-back worker. A private one is created if None.

    Raises:
        ConfigurationError: If no backend can be determined.
    """
    settings = settings if settings is not None else Settings(_env_file=None)

    if loader is None:
        if not settings.transform_backend:
            raise ConfigurationError(
                "TRANSFORM_BACKEND must be set when no backend loader is supplied"
            )
        loader = import_backend(settings.transform_backend)

    if config is None:
        version = settings.transform_tool_version or installed_version(settings.transform_tool)
        config = settings.pipeline_config(version=version)

    engine = TransformEngine(config, loader)
    cache = ContentAddressedCache(
        engine=engine,
        cache_root=settings.resolved_cache_root,
        fingerprint=PipelineFingerprint(config),
        extension=settings.cache_extension,
        writer=writer,
        enabled=settings.cache_enabled,
        writer_threads=settings.cache_writer_threads,
    )
    logger.debug(
        "Created content cache for %s@%s under %s",
        config.tool, config.version, settings.resolved_cache_root,
    )
    return cache
