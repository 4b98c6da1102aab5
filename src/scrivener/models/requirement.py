# src/scrivener/models/requirement.py
"""Mined requirement model."""

from __future__ import annotations

from pydantic import Field

from .base_model import ScrivenerBaseModel as BaseModel
from .spans import Evidence


class MinedRequirement(BaseModel):
    """An atomic, cleaned requirement sentence and where it came from."""

    text: str = Field(..., min_length=1)
    evidence: list[Evidence] = Field(..., min_length=1)


__all__ = ["MinedRequirement"]
