# src/scrivener/models/signals.py
"""Meeting signal model."""

from __future__ import annotations

from pydantic import Field

from .base_model import ScrivenerBaseModel as BaseModel
from .enums import Confidence, SignalType
from .spans import SourceSpan


class MeetingSignal(BaseModel):
    """A single classified transcript line."""

    type: SignalType
    confidence: Confidence
    text: str = Field(..., min_length=1, description="Trimmed source line")
    span: SourceSpan


__all__ = ["MeetingSignal"]
