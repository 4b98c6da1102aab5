"""Configuration package for Scrivener."""

from .config import (
    ExtractionConfig,
    ScrivenerConfig,
    SynthesisConfig,
    SystemConfig,
    config,
)

__all__ = [
    "ScrivenerConfig",
    "SystemConfig",
    "ExtractionConfig",
    "SynthesisConfig",
    "config",
]
