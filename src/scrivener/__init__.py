"""Deterministic extraction and synthesis over meeting transcripts."""

__version__ = "0.1.0"

from .errors import MalformedPatternError, RuleConfigError, ScrivenerError
from .extractors import (
    compile_signal_rules,
    extract_gherkin,
    extract_meeting_signals,
    extract_user_stories,
)
from .pipeline import (
    extract_meeting_signals_with_catalog,
    synthesize_gherkin_from_text,
    synthesize_user_stories_from_text,
)
from .synthesis import mine_requirements, synthesize_gherkin, synthesize_user_stories

__all__ = [
    "__version__",
    "ScrivenerError",
    "RuleConfigError",
    "MalformedPatternError",
    "extract_user_stories",
    "extract_gherkin",
    "extract_meeting_signals",
    "compile_signal_rules",
    "mine_requirements",
    "synthesize_user_stories",
    "synthesize_gherkin",
    "synthesize_user_stories_from_text",
    "synthesize_gherkin_from_text",
    "extract_meeting_signals_with_catalog",
]
