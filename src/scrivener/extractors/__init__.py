"""Extractors that read already-explicit artifacts straight out of text."""

from .gherkin import extract_gherkin
from .signals import (
    DEFAULT_SIGNAL_RULES,
    SignalRule,
    compile_signal_rules,
    extract_meeting_signals,
    resolve_signal_rules,
)
from .user_stories import extract_user_stories

__all__ = [
    "extract_user_stories",
    "extract_gherkin",
    "extract_meeting_signals",
    "compile_signal_rules",
    "resolve_signal_rules",
    "SignalRule",
    "DEFAULT_SIGNAL_RULES",
]
