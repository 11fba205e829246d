# src/logging/context.py — v1
"""Contextual logging support: attach source filename and pipeline fingerprint.

Context variables do not follow work handed to the background writer
threads; write-back log lines carry the entry path instead.
"""

from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Any

_filename: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "filename", default=None
)
_fingerprint: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "fingerprint", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    filename: str | None = None
    fingerprint: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(
        filename=_filename.get(),
        fingerprint=_fingerprint.get(),
    )


def set_source_context(filename: str) -> None:
    """Set the source unit being transformed."""
    _filename.set(filename)


def set_pipeline_context(fingerprint: str) -> None:
    """Set the pipeline fingerprint (called once the namespace is known)."""
    _fingerprint.set(fingerprint)


def clear_context() -> None:
    """Reset all context variables."""
    _filename.set(None)
    _fingerprint.set(None)
