# tests/conftest.py — v1
"""Shared test fixtures for all unit and integration tests.

Provides a fake transform backend, sample pipeline configs and temp cache roots.
No external dependencies; the backend is an in-memory stand-in.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

import pytest

from transcache.cache.content_cache import ContentAddressedCache
from transcache.logging.context import clear_context
from transcache.transform.engine import TransformEngine
from transcache.transform.models import PipelineConfig, SourceUnit
from transcache.transform.prefilter import DIRECTIVES


class FakeBackend:
    """Drops a leading directive line and renames foo -> bar.

    Sources containing b"syntax error" are rejected like a real compiler would.
    """

    def __init__(self) -> None:
        self.calls: list[bytes] = []
        self.options_seen: list[Mapping[str, Any]] = []

    def transform(self, source: bytes, options: Mapping[str, Any]) -> str:
        self.calls.append(source)
        self.options_seen.append(options)
        if b"syntax error" in source:
            raise SyntaxError("Unexpected token (1:7)")
        first, sep, rest = source.partition(b"\n")
        if sep and any(first.startswith(d) for d in DIRECTIVES):
            source = rest
        return source.replace(b"foo", b"bar").decode("utf-8")


class BackendFactory:
    """Loader that counts how often the backend gets acquired."""

    def __init__(self, backend: FakeBackend) -> None:
        self.backend = backend
        self.loads = 0

    def __call__(self) -> FakeBackend:
        self.loads += 1
        return self.backend


# === FIXTURES: Logging ===


@pytest.fixture(autouse=True)
def _reset_log_context():
    clear_context()
    yield
    clear_context()


# === FIXTURES: Pipeline ===


@pytest.fixture
def fake_backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def backend_loader(fake_backend: FakeBackend) -> BackendFactory:
    return BackendFactory(fake_backend)


@pytest.fixture
def new_loader():
    """Factory for independent backends, e.g. to stand in for a second process."""
    return lambda: BackendFactory(FakeBackend())


@pytest.fixture
def sample_config() -> PipelineConfig:
    """Config from the reference scenario: tool x 1.0, no options, no units."""
    return PipelineConfig(tool="x", version="1.0", options={}, logic_units=())


@pytest.fixture
def plugin_file(tmp_path: Path) -> Path:
    """A logic unit whose contents participate in the fingerprint."""
    path = tmp_path / "plugins" / "rename_plugin.src"
    path.parent.mkdir()
    path.write_bytes(b"rename foo bar\n")
    return path


@pytest.fixture
def engine(sample_config: PipelineConfig, backend_loader: BackendFactory) -> TransformEngine:
    return TransformEngine(sample_config, backend_loader)


@pytest.fixture
def sample_source() -> SourceUnit:
    return SourceUnit.of("use-directive\nfoo()", "app/main.src")


# === FIXTURES: Temp dirs ===


@pytest.fixture
def tmp_cache_dir(tmp_path: Path) -> Path:
    """Temporary cache root (namespace dirs are created beneath it lazily)."""
    return tmp_path / "cache"


@pytest.fixture
def content_cache(engine: TransformEngine, tmp_cache_dir: Path):
    cache = ContentAddressedCache(engine=engine, cache_root=tmp_cache_dir)
    yield cache
    cache.close()
