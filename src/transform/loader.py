# src/transform/loader.py — v1
"""Locate a transform backend and its version from the environment.

A backend is named by an import path such as ``"mytool.api:Transformer"``.
Nothing is imported until the returned loader is called.
"""

from __future__ import annotations

import importlib
import inspect
import logging
from importlib import metadata

from transcache.transform.engine import BackendLoader, TransformBackend

logger = logging.getLogger(__name__)


class BackendImportError(ImportError):
    """Raised when a backend import path cannot be resolved."""


def _parse_import_path(import_path: str) -> tuple[str, str]:
    module_name, sep, attr = import_path.partition(":")
    if not sep or not module_name or not attr:
        raise BackendImportError(
            f"Invalid backend path {import_path!r}, expected 'package.module:attr'"
        )
    return module_name, attr


def import_backend(import_path: str) -> BackendLoader:
    """Return a loader that imports and instantiates the named backend.

    The attribute may be a backend object (anything with ``transform``),
    a class, or a zero-argument factory.
    """
    module_name, attr = _parse_import_path(import_path)

    def load() -> TransformBackend:
        try:
            module = importlib.import_module(module_name)
        except ImportError as e:
            raise BackendImportError(f"Cannot import backend module {module_name!r}: {e}") from e

        target = module
        for part in attr.split("."):
            try:
                target = getattr(target, part)
            except AttributeError as e:
                raise BackendImportError(
                    f"Module {module_name!r} has no attribute {attr!r}"
                ) from e

        if inspect.isclass(target) or not hasattr(target, "transform"):
            target = target()
        logger.info("Loaded transform backend %s", import_path)
        return target

    return load


def installed_version(distribution: str) -> str:
    """Version of an installed distribution, or "" when it is not installed."""
    try:
        return metadata.version(distribution)
    except metadata.PackageNotFoundError:
        logger.warning("Distribution %r not installed, tool version unknown", distribution)
        return ""
