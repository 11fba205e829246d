# src/transform/engine.py — v1
"""Transform engine: owns the backend handle and normalizes its failures.

The backend is a black box (`bytes, options -> bytes`). Acquiring it can be
expensive, so it happens on the first transform and the handle is kept for
the lifetime of the engine. The engine knows nothing about caching.
"""

from __future__ import annotations

import copy
import logging
from types import MappingProxyType
from typing import Any, Callable, Mapping, Protocol

from transcache.logging.context import set_source_context
from transcache.transform.models import PipelineConfig, SourceUnit

logger = logging.getLogger(__name__)


class TransformBackend(Protocol):
    """The external transformation capability."""

    def transform(self, source: bytes, options: Mapping[str, Any]) -> bytes | str:
        """Transform source, raising on input the backend rejects."""
        ...


BackendLoader = Callable[[], TransformBackend]


class TransformError(Exception):
    """The backend rejected a source unit."""

    def __init__(self, filename: str, diagnostic: str) -> None:
        self.filename = filename
        self.diagnostic = diagnostic
        super().__init__(f"Error transforming {filename!r}: {diagnostic}")


class TransformEngine:
    """Runs the transformation pipeline over a single source unit."""

    def __init__(self, config: PipelineConfig, loader: BackendLoader) -> None:
        self._config = config
        self._loader = loader
        self._backend: TransformBackend | None = None
        self._options: Mapping[str, Any] = MappingProxyType(copy.deepcopy(config.options))
        self._invocations = 0

    @property
    def config(self) -> PipelineConfig:
        return self._config

    @property
    def options(self) -> Mapping[str, Any]:
        """Read-only options handed to the backend on every call."""
        return self._options

    @property
    def invocations(self) -> int:
        """Number of backend transform calls made so far."""
        return self._invocations

    @property
    def backend_loaded(self) -> bool:
        return self._backend is not None

    def _acquire(self) -> TransformBackend:
        if self._backend is None:
            logger.debug("Loading %s@%s backend", self._config.tool, self._config.version)
            self._backend = self._loader()
        return self._backend

    def transform(self, source: SourceUnit) -> bytes:
        """Transform a source unit.

        Raises:
            TransformError: If the backend rejects the input.
        """
        backend = self._acquire()
        set_source_context(source.filename)
        self._invocations += 1
        try:
            output = backend.transform(source.data, self._options)
        except Exception as e:
            logger.error("Error transforming %r: %s", source.filename, e)
            raise TransformError(source.filename, str(e)) from e

        if isinstance(output, str):
            return output.encode("utf-8")
        return bytes(output)
