# src/scrivener/synthesis/requirements.py
"""Mine atomic requirement sentences from free-form transcript text."""

from __future__ import annotations

import re

from scrivener.core.logging import get_logger
from scrivener.core.text import span_for_line, to_lines
from scrivener.models import Evidence, MinedRequirement, RequirementMiningResult

logger = get_logger(__name__)

# Word-bounded modal vocabulary; a line needs one match to be considered.
REQUIREMENT_RE = re.compile(
    r"\b(?:need to|needs to|need|needs|must|should|have to|has to|can|cannot|can't"
    r"|we want to|we need to|we need|users want to|user wants to|would like to"
    r"|i'd like to|we'd like to|we would like to)\b",
    re.IGNORECASE,
)
_SENTENCE_SPLIT_RE = re.compile(r"(?<=[.!?])\s+")
# "Jordan: ..." or "Jordan (Product Owner): ..."
_SPEAKER_RE = re.compile(r"^[A-Z][A-Za-z0-9 ._'\-()]{0,60}:\s+")
_FILLER_RE = re.compile(r"^(?:so,|so|okay,|ok,|alright,|right,|well,)\s+", re.IGNORECASE)
_WHITESPACE_RE = re.compile(r"\s+")
_QUESTION_RE = re.compile(r"\?\s*$")
_META_OPENERS = (
    re.compile(r"^(?:thanks|thank you)\s+for\s+joining\b"),
    re.compile(r"^(?:today'?s\s+)?goal\s+is\b"),
    re.compile(r"^(?:the\s+)?purpose\s+is\b"),
    re.compile(r"^(?:the\s+)?agenda\s+is\b"),
    re.compile(r"^let'?s\s+(?:talk\s+about|discuss|review)\b"),
)

NO_REQUIREMENTS_GAP = (
    "No obvious requirement statements detected "
    "(e.g., “need to”, “must”, “should”)."
)
NO_REQUIREMENTS_QUESTIONS = (
    "Who is the target user/persona for this meeting?",
    "What are the top 3 required capabilities discussed?",
    "Are there any explicit constraints (security, performance, compliance)?",
)


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()


def split_sentences(line: str) -> list[str]:
    """Rough sentence split on whitespace following ``.``, ``!`` or ``?``."""
    return [s for s in (collapse_whitespace(p) for p in _SENTENCE_SPLIT_RE.split(line)) if s]


def clean_requirement_text(sentence: str) -> str:
    """Drop the speaker label and one leading filler word, then collapse whitespace."""
    without_speaker = _SPEAKER_RE.sub("", sentence, count=1)
    without_filler = _FILLER_RE.sub("", without_speaker, count=1)
    return collapse_whitespace(without_filler)


def is_question(sentence: str) -> bool:
    return bool(_QUESTION_RE.search(sentence.strip()))


def is_meeting_meta(sentence: str) -> bool:
    lowered = sentence.strip().lower()
    return any(opener.search(lowered) for opener in _META_OPENERS)


def mine_requirements(text: str, tenant_id: str | None = None) -> RequirementMiningResult:
    """Return one :class:`MinedRequirement` per qualifying sentence in ``text``."""
    requirements: list[MinedRequirement] = []

    for index, raw in enumerate(to_lines(text)):
        line = raw.strip()
        if not line or not REQUIREMENT_RE.search(line):
            continue

        for sentence in split_sentences(line):
            # Discovery prompts ("Should everyone see the same data?") are not requirements.
            if is_question(sentence):
                continue
            if not REQUIREMENT_RE.search(sentence):
                continue
            cleaned = clean_requirement_text(sentence)
            if not cleaned or is_meeting_meta(cleaned):
                continue
            requirements.append(
                MinedRequirement(
                    text=cleaned,
                    evidence=[Evidence(quote=sentence, spans=[span_for_line(index + 1)])],
                )
            )

    gaps: list[str] = []
    follow_up_questions: list[str] = []
    if not requirements:
        gaps.append(NO_REQUIREMENTS_GAP)
        follow_up_questions.extend(NO_REQUIREMENTS_QUESTIONS)

    logger.debug(
        "Mined requirements | tenant=%s requirements=%d", tenant_id, len(requirements)
    )
    return RequirementMiningResult(
        tenant_id=tenant_id,
        requirements=requirements,
        gaps=gaps,
        follow_up_questions=follow_up_questions,
    )


__all__ = [
    "REQUIREMENT_RE",
    "mine_requirements",
    "split_sentences",
    "clean_requirement_text",
    "is_question",
    "is_meeting_meta",
]
