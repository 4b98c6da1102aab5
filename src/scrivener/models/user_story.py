# src/scrivener/models/user_story.py
"""User story models, read verbatim or synthesized from requirements."""

from __future__ import annotations

from pydantic import Field

from .base_model import ScrivenerBaseModel as BaseModel
from .enums import Confidence
from .spans import Evidence, SourceSpan


class ExtractedUserStory(BaseModel):
    """An explicit "As a ... I want ... so that ..." statement.

    ``capability`` keeps the text after "I want" as written, so it usually
    starts with "to".
    """

    persona: str = Field(..., min_length=1)
    capability: str = Field(..., min_length=1)
    benefit: str | None = None
    acceptance_criteria: list[str] = Field(default_factory=list)
    spans: list[SourceSpan] = Field(..., min_length=1)


class SynthesizedUserStory(BaseModel):
    """A user story inferred from a mined requirement."""

    persona: str = Field(..., min_length=1)
    capability: str = Field(..., min_length=1, description='"to <verb phrase>"')
    benefit: str | None = None
    acceptance_criteria: list[str] = Field(default_factory=list)
    evidence: list[Evidence] = Field(..., min_length=1)
    confidence: Confidence = Confidence.LOW


__all__ = ["ExtractedUserStory", "SynthesizedUserStory"]
