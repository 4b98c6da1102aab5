# src/scrivener/models/responses.py
"""Result envelopes returned by every extraction and synthesis operation."""

from __future__ import annotations

from pydantic import Field

from .base_model import ScrivenerBaseModel as BaseModel
from .enums import SynthesisMode
from .gherkin import GherkinFeature, SynthesizedGherkinFeature
from .requirement import MinedRequirement
from .signals import MeetingSignal
from .user_story import ExtractedUserStory, SynthesizedUserStory


class ResultEnvelope(BaseModel):
    """Fields shared by every result.

    ``tenant_id`` is passed through unvalidated. ``gaps`` and
    ``follow_up_questions`` describe what could not be found.
    """

    tenant_id: str | None = None
    gaps: list[str] = Field(default_factory=list)
    follow_up_questions: list[str] = Field(default_factory=list)


class UserStoryExtractionResult(ResultEnvelope):
    user_stories: list[ExtractedUserStory] = Field(default_factory=list)


class GherkinExtractionResult(ResultEnvelope):
    features: list[GherkinFeature] = Field(default_factory=list)
    non_gherkin_findings: list[str] = Field(default_factory=list)


class MeetingSignalsResult(ResultEnvelope):
    signals: list[MeetingSignal] = Field(default_factory=list)
    suggested_actions: list[str] = Field(default_factory=list)


class RequirementMiningResult(ResultEnvelope):
    requirements: list[MinedRequirement] = Field(default_factory=list)


class SynthesisEnvelope(ResultEnvelope):
    """Synthesis results also record which path produced them."""

    mode_used: SynthesisMode = SynthesisMode.DETERMINISTIC


class UserStorySynthesisResult(SynthesisEnvelope):
    stories: list[SynthesizedUserStory] = Field(default_factory=list)


class GherkinSynthesisResult(SynthesisEnvelope):
    features: list[SynthesizedGherkinFeature] = Field(default_factory=list)


__all__ = [
    "ResultEnvelope",
    "SynthesisEnvelope",
    "UserStoryExtractionResult",
    "GherkinExtractionResult",
    "MeetingSignalsResult",
    "RequirementMiningResult",
    "UserStorySynthesisResult",
    "GherkinSynthesisResult",
]
