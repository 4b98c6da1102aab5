# src/scrivener/synthesis/limits.py
"""Item caps shared by the synthesizers."""

from __future__ import annotations

from scrivener.config import config


def clamp_max_items(value: int | None = None) -> int:
    """Apply the configured default and clamp into ``[min_items, max_items]``."""
    limits = config.synthesis
    requested = limits.default_max_items if value is None else value
    return max(limits.min_items, min(requested, limits.max_items))


__all__ = ["clamp_max_items"]
