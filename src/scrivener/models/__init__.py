"""Pydantic models for transcript artifacts and result envelopes."""

from .base_model import ScrivenerBaseModel
from .configuration import SignalRuleCatalog, SignalRuleSpec
from .enums import Confidence, SignalType, SynthesisMode
from .gherkin import (
    GherkinFeature,
    GherkinScenario,
    SynthesizedGherkinFeature,
    SynthesizedGherkinScenario,
)
from .requirement import MinedRequirement
from .responses import (
    GherkinExtractionResult,
    GherkinSynthesisResult,
    MeetingSignalsResult,
    RequirementMiningResult,
    ResultEnvelope,
    SynthesisEnvelope,
    UserStoryExtractionResult,
    UserStorySynthesisResult,
)
from .signals import MeetingSignal
from .spans import Evidence, SourceSpan
from .user_story import ExtractedUserStory, SynthesizedUserStory

__all__ = [
    "ScrivenerBaseModel",
    "SignalType",
    "Confidence",
    "SynthesisMode",
    "SourceSpan",
    "Evidence",
    "ExtractedUserStory",
    "SynthesizedUserStory",
    "GherkinScenario",
    "GherkinFeature",
    "SynthesizedGherkinScenario",
    "SynthesizedGherkinFeature",
    "MeetingSignal",
    "MinedRequirement",
    "SignalRuleSpec",
    "SignalRuleCatalog",
    "ResultEnvelope",
    "SynthesisEnvelope",
    "UserStoryExtractionResult",
    "GherkinExtractionResult",
    "MeetingSignalsResult",
    "RequirementMiningResult",
    "UserStorySynthesisResult",
    "GherkinSynthesisResult",
]
