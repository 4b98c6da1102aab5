# src/scrivener/config/config.py
"""Configuration system for Scrivener."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

ENV_PREFIX = "SCRIVENER_"


class SystemConfig(BaseModel):
    """System configuration settings."""

    log_level: str = Field(default="INFO", description="SCRIVENER_LOG_LEVEL")
    log_format: str = Field(default="", description="SCRIVENER_LOG_FORMAT")
    log_include_trace: bool = Field(
        default=False, description="SCRIVENER_LOG_INCLUDE_TRACE"
    )


class ExtractionConfig(BaseModel):
    """Extractor tuning."""

    # Lines scanned after an "As a ... I want ..." match for acceptance criteria.
    acceptance_lookahead: int = Field(
        default=8, ge=1, description="SCRIVENER_ACCEPTANCE_LOOKAHEAD"
    )


class SynthesisConfig(BaseModel):
    """Limits applied to the deterministic synthesizers."""

    default_max_items: int = Field(
        default=10, ge=1, description="SCRIVENER_DEFAULT_MAX_ITEMS"
    )
    min_items: int = Field(default=1, ge=1, description="SCRIVENER_MIN_ITEMS")
    max_items: int = Field(default=50, ge=1, description="SCRIVENER_MAX_ITEMS")

    @model_validator(mode="after")
    def _check_bounds(self) -> SynthesisConfig:
        if self.min_items > self.max_items:
            raise ValueError("min_items must not exceed max_items")
        return self


class ScrivenerConfig(BaseModel):
    """Main configuration class."""

    model_config = ConfigDict(extra="ignore")

    system: SystemConfig = SystemConfig()
    extraction: ExtractionConfig = ExtractionConfig()
    synthesis: SynthesisConfig = SynthesisConfig()

    @classmethod
    def load(cls, environ: Mapping[str, str] | None = None) -> ScrivenerConfig:
        """Load configuration from ``SCRIVENER_*`` environment variables."""
        env = os.environ if environ is None else environ
        sections: dict[str, dict[str, Any]] = {}
        for section_name, field_info in cls.model_fields.items():
            section_model = field_info.annotation
            values: dict[str, Any] = {}
            for field_name in section_model.model_fields:  # type: ignore[union-attr]
                raw = env.get(f"{ENV_PREFIX}{field_name.upper()}")
                if raw is not None and raw != "":
                    values[field_name] = raw
            sections[section_name] = values
        return cls.model_validate(sections)


# Global configuration instance
config = ScrivenerConfig.load()
