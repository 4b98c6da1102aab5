"""Requirement mining and deterministic synthesis of stories and scenarios."""

from .gherkin import synthesize_gherkin
from .intent import (
    capability_from_requirement,
    extract_lockout,
    extract_performance,
    extract_visibility_constraint,
    infer_persona,
    infer_persona_basic,
)
from .limits import clamp_max_items
from .requirements import mine_requirements
from .user_stories import synthesize_user_stories

__all__ = [
    "mine_requirements",
    "synthesize_user_stories",
    "synthesize_gherkin",
    "clamp_max_items",
    "infer_persona",
    "infer_persona_basic",
    "extract_lockout",
    "extract_performance",
    "extract_visibility_constraint",
    "capability_from_requirement",
]
