# src/scrivener/models/configuration.py
"""Tenant rule-catalog document consumed by the signal rule compiler."""

from __future__ import annotations

from typing import Annotated

from pydantic import AfterValidator, ConfigDict, Field

from .base_model import ScrivenerBaseModel as BaseModel
from .enums import Confidence, SignalType
from .validators import validate_non_empty

PatternString = Annotated[str, AfterValidator(validate_non_empty)]


class SignalRuleSpec(BaseModel):
    """One uncompiled extraction rule."""

    type: SignalType
    confidence: Confidence
    patterns: list[PatternString] = Field(..., min_length=1)


class SignalRuleCatalog(BaseModel):
    """``{version?, extractionRules?: [...]}``.

    Other top-level keys are ignored since tenant documents carry more than
    rules; unknown keys inside a rule are rejected.
    """

    model_config = ConfigDict(extra="ignore")

    version: int | str | None = None
    extraction_rules: list[SignalRuleSpec] | None = None


__all__ = ["SignalRuleSpec", "SignalRuleCatalog"]
