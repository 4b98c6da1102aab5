# src/scrivener/models/enums.py
"""Enumerations shared by signals, rules and synthesis envelopes."""

from __future__ import annotations

from enum import Enum


class SignalType(str, Enum):
    """Kinds of meeting signal a rule can classify a line as."""

    DECISION = "Decision"
    ACTION_ITEM = "ActionItem"
    RISK = "Risk"
    DEPENDENCY = "Dependency"
    OPEN_QUESTION = "OpenQuestion"


class Confidence(str, Enum):
    """Coarse reliability tag."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class SynthesisMode(str, Enum):
    """Which synthesis path produced an envelope."""

    DETERMINISTIC = "deterministic"
    LLM = "llm"


__all__ = ["SignalType", "Confidence", "SynthesisMode"]
