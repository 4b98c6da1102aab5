# src/scrivener/models/gherkin.py
"""Gherkin feature and scenario models."""

from __future__ import annotations

from pydantic import Field

from .base_model import ScrivenerBaseModel as BaseModel
from .enums import Confidence
from .spans import Evidence, SourceSpan


class GherkinScenario(BaseModel):
    """A scenario read from Gherkin-style text."""

    name: str
    tags: list[str] = Field(default_factory=list)
    given: list[str] = Field(default_factory=list)
    when: list[str] = Field(default_factory=list)
    then: list[str] = Field(default_factory=list)
    spans: list[SourceSpan] = Field(..., min_length=1)


class GherkinFeature(BaseModel):
    """A feature block and the scenarios that belong to it."""

    name: str
    description: str | None = None
    scenarios: list[GherkinScenario] = Field(default_factory=list)
    spans: list[SourceSpan] = Field(..., min_length=1)


class SynthesizedGherkinScenario(BaseModel):
    """A scenario generated from a mined requirement by a template."""

    name: str = Field(..., min_length=1)
    given: list[str] = Field(default_factory=list)
    when: list[str] = Field(default_factory=list)
    then: list[str] = Field(default_factory=list)
    evidence: list[Evidence] = Field(..., min_length=1)
    confidence: Confidence = Confidence.LOW


class SynthesizedGherkinFeature(BaseModel):
    """Synthetic feature grouping every synthesized scenario."""

    name: str
    scenarios: list[SynthesizedGherkinScenario] = Field(default_factory=list)


__all__ = [
    "GherkinScenario",
    "GherkinFeature",
    "SynthesizedGherkinScenario",
    "SynthesizedGherkinFeature",
]
