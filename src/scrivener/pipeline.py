# src/scrivener/pipeline.py
"""Text-in operations that chain the requirement miner into a synthesizer.

The synthesis envelopes come back with the miner's gaps and follow-up
questions appended, so a caller holding only a transcript gets one result
that explains both what was mined and what was synthesized.
"""

from __future__ import annotations

from typing import Any, TypeVar

from scrivener.core.logging import get_logger
from scrivener.extractors.signals import extract_meeting_signals, resolve_signal_rules
from scrivener.models import (
    GherkinSynthesisResult,
    MeetingSignalsResult,
    RequirementMiningResult,
    SynthesisEnvelope,
    UserStorySynthesisResult,
)
from scrivener.synthesis import mine_requirements, synthesize_gherkin, synthesize_user_stories

logger = get_logger(__name__)

EnvelopeT = TypeVar("EnvelopeT", bound=SynthesisEnvelope)


def merge_mining_notes(result: EnvelopeT, mined: RequirementMiningResult) -> EnvelopeT:
    """Return ``result`` with the miner's gaps and follow-ups appended."""
    return result.model_copy(
        update={
            "gaps": [*result.gaps, *mined.gaps],
            "follow_up_questions": [*result.follow_up_questions, *mined.follow_up_questions],
        }
    )


def synthesize_user_stories_from_text(
    text: str,
    tenant_id: str | None = None,
    max_items: int | None = None,
) -> UserStorySynthesisResult:
    mined = mine_requirements(text, tenant_id=tenant_id)
    result = synthesize_user_stories(mined.requirements, tenant_id=tenant_id, max_items=max_items)
    return merge_mining_notes(result, mined)


def synthesize_gherkin_from_text(
    text: str,
    tenant_id: str | None = None,
    max_items: int | None = None,
) -> GherkinSynthesisResult:
    mined = mine_requirements(text, tenant_id=tenant_id)
    result = synthesize_gherkin(mined.requirements, tenant_id=tenant_id, max_items=max_items)
    return merge_mining_notes(result, mined)


def extract_meeting_signals_with_catalog(
    text: str,
    tenant_id: str | None = None,
    catalog: Any = None,
) -> MeetingSignalsResult:
    """Classify ``text`` with a tenant rule catalog, falling back to the defaults.

    ``catalog`` is anything :func:`~scrivener.extractors.compile_signal_rules`
    accepts. A catalog with a pattern that does not compile still raises
    :class:`~scrivener.errors.MalformedPatternError`.
    """
    rules = resolve_signal_rules(catalog)
    logger.debug("Resolved signal rules | tenant=%s rules=%d", tenant_id, len(rules))
    return extract_meeting_signals(text, tenant_id=tenant_id, rules=rules)


__all__ = [
    "merge_mining_notes",
    "synthesize_user_stories_from_text",
    "synthesize_gherkin_from_text",
    "extract_meeting_signals_with_catalog",
]
