# src/config/settings.py — v1
"""Typed configuration loaded from .env via pydantic-settings.

Single source of truth for cache location, transform pipeline and logging.
"""

from __future__ import annotations

import json
import tempfile
from pathlib import Path
from typing import Any, Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from transcache.transform.models import PipelineConfig


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Cache ===
    cache_enabled: bool = True
    cache_root: Path | None = None
    cache_subsystem_name: str = "transcache"
    cache_extension: str = ".out"
    cache_writer_threads: int = 1

    # === Transform pipeline ===
    transform_tool: str = "transform"
    transform_tool_version: str = ""
    transform_backend: str = ""
    transform_options: str = "{}"
    transform_logic_units: str = ""

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "json"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 30

    # --- Validators ---

    @field_validator("cache_extension")
    @classmethod
    def validate_cache_extension(cls, v: str) -> str:  # noqa: N805
        if not v.startswith(".") or len(v) < 2:
            raise ValueError("cache_extension must look like '.out'")
        if "/" in v or "\\" in v:
            raise ValueError("cache_extension must not contain path separators")
        return v

    @field_validator("cache_writer_threads")
    @classmethod
    def validate_writer_threads(cls, v: int) -> int:  # noqa: N805
        if v < 1:
            raise ValueError("cache_writer_threads must be >= 1")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        errors: list[str] = []

        try:
            options = json.loads(self.transform_options)
        except json.JSONDecodeError as e:
            errors.append(f"TRANSFORM_OPTIONS is not valid JSON: {e}")
        else:
            if not isinstance(options, dict):
                errors.append("TRANSFORM_OPTIONS must be a JSON object")

        if not self.cache_subsystem_name.strip():
            errors.append("CACHE_SUBSYSTEM_NAME must not be empty")
        elif Path(self.cache_subsystem_name).name != self.cache_subsystem_name:
            errors.append("CACHE_SUBSYSTEM_NAME must be a single path component")

        if not self.transform_tool.strip():
            errors.append("TRANSFORM_TOOL must not be empty")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self

    # --- Helpers ---

    @property
    def resolved_cache_root(self) -> Path:
        """Cache root: explicit CACHE_ROOT or <platform temp>/<subsystem>."""
        if self.cache_root is not None:
            return Path(self.cache_root).expanduser()
        return Path(tempfile.gettempdir()) / self.cache_subsystem_name

    @property
    def transform_options_dict(self) -> dict[str, Any]:
        """Parse TRANSFORM_OPTIONS JSON object."""
        return json.loads(self.transform_options)

    @property
    def transform_logic_units_list(self) -> list[Path]:
        """Parse comma-separated logic unit paths, keeping declared order."""
        return [
            Path(p.strip()).expanduser()
            for p in self.transform_logic_units.split(",")
            if p.strip()
        ]

    def pipeline_config(self, version: str | None = None) -> PipelineConfig:
        """Build the immutable PipelineConfig described by these settings.

        Args:
            version: Tool version to use when TRANSFORM_TOOL_VERSION is empty.
        """
        return PipelineConfig(
            tool=self.transform_tool,
            version=self.transform_tool_version or version or "",
            options=self.transform_options_dict,
            logic_units=tuple(self.transform_logic_units_list),
        )


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or embedding hosts).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
