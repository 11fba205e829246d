# src/transform/fingerprint.py — v1
"""Pipeline fingerprinting: one digest per exact transformation setup.

The digest covers the tool identifier, the tool version, the canonical
options and the bytes of the driver source plus every logic unit. It names
the cache namespace directory, so any change to the transformation logic
moves subsequent lookups into a fresh namespace.
"""

from __future__ import annotations

import hashlib
import logging
from pathlib import Path
from typing import Iterable

from transcache.transform.models import PipelineConfig

logger = logging.getLogger(__name__)

_SEPARATOR = b"\0"

# The engine module is the driver whose source versions the transforms.
DEFAULT_DRIVER_PATH = Path(__file__).with_name("engine.py")


class FingerprintReadError(Exception):
    """A logic unit needed for fingerprinting could not be read."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot fingerprint pipeline, failed to read {path}: {reason}")


def compute_pipeline_fingerprint(
    config: PipelineConfig,
    unit_paths: Iterable[Path],
) -> str:
    """Hash the config fields and logic unit contents into a hex digest.

    Every field and every unit is terminated by a NUL byte so that
    ("ab", "c") and ("a", "bc") never collide.

    Raises:
        FingerprintReadError: If any unit cannot be read.
    """
    h = hashlib.sha256()
    for part in (config.tool, config.version, config.canonical_options()):
        h.update(part.encode("utf-8"))
        h.update(_SEPARATOR)

    for path in unit_paths:
        try:
            content = Path(path).read_bytes()
        except OSError as e:
            raise FingerprintReadError(Path(path), str(e)) from e
        h.update(content)
        h.update(_SEPARATOR)

    return h.hexdigest()


def source_digest(data: bytes) -> str:
    """SHA-256 of the raw source bytes; the key inside a namespace."""
    return hashlib.sha256(data).hexdigest()


class PipelineFingerprint:
    """Lazily computed, memoized fingerprint of a PipelineConfig."""

    def __init__(self, config: PipelineConfig, driver_path: Path | None = None) -> None:
        self._config = config
        self._driver_path = driver_path if driver_path is not None else DEFAULT_DRIVER_PATH
        self._digest: str | None = None

    @property
    def config(self) -> PipelineConfig:
        return self._config

    @property
    def unit_paths(self) -> list[Path]:
        """Driver source first, then logic units in declared order."""
        return [self._driver_path, *self._config.logic_units]

    def digest(self) -> str:
        """Return the hex digest, computing it on first call."""
        if self._digest is None:
            self._digest = compute_pipeline_fingerprint(self._config, self.unit_paths)
            logger.debug(
                "Pipeline fingerprint for %s@%s: %s",
                self._config.tool, self._config.version, self._digest,
            )
        return self._digest
