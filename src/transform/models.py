# src/transform/models.py — v1
"""Transform domain models: PipelineConfig, SourceUnit."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class PipelineConfig(BaseModel):
    """Immutable description of the transformation to apply.

    The contents of every logic unit (plugin sources, in declared order)
    participate in the pipeline fingerprint.
    """

    model_config = ConfigDict(frozen=True)

    tool: str
    version: str
    options: dict[str, Any] = Field(default_factory=dict)
    logic_units: tuple[Path, ...] = ()

    def canonical_options(self) -> str:
        """Canonical JSON serialization of options (sorted keys, compact)."""
        return json.dumps(
            self.options, sort_keys=True, separators=(",", ":"), ensure_ascii=False
        )


class SourceUnit(BaseModel):
    """Source bytes plus an advisory filename used only for diagnostics."""

    model_config = ConfigDict(frozen=True)

    data: bytes
    filename: str = "<unknown>"

    @classmethod
    def of(cls, content: bytes | str, filename: str | None = None) -> SourceUnit:
        """Build a SourceUnit from bytes or text (text is encoded UTF-8)."""
        if isinstance(content, str):
            content = content.encode("utf-8")
        return cls(data=content, filename=filename or "<unknown>")
