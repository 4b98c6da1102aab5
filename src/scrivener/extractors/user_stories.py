# src/scrivener/extractors/user_stories.py
"""Extract explicit "As a ... I want ... so that ..." user stories.

Each matching line may be followed by an acceptance-criteria block made of
``AC:`` / ``Acceptance Criteria:`` lines or ``-`` / ``*`` bullets.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from scrivener.config import config
from scrivener.core.logging import get_logger
from scrivener.core.text import span_for_range, to_lines
from scrivener.models import ExtractedUserStory, UserStoryExtractionResult

logger = get_logger(__name__)

USER_STORY_RE = re.compile(
    r"^\s*as\s+an?\s+(?P<persona>.+?)\s*(?:,|\s+)i\s+want\s+(?P<capability>.+?)"
    r"(?:\s+so\s+that\s+(?P<benefit>.+?))?\s*$",
    re.IGNORECASE,
)
AC_HEADER_RE = re.compile(r"^(?:ac|acceptance criteria)\s*:\s*", re.IGNORECASE)
BULLET_RE = re.compile(r"^[-*]\s+")


@dataclass
class _CriteriaBlock:
    criteria: list[str] = field(default_factory=list)
    # 0-based index of the last line that belongs to the block, if any.
    last_index: int | None = None


def _take_acceptance_criteria(lines: list[str], start: int, lookahead: int) -> _CriteriaBlock:
    block = _CriteriaBlock()
    for index in range(start, min(len(lines), start + lookahead)):
        trimmed = lines[index].strip()

        header = AC_HEADER_RE.match(trimmed)
        if header:
            remainder = trimmed[header.end():]
            if remainder:
                block.criteria.append(remainder)
            block.last_index = index
            continue

        if BULLET_RE.match(trimmed):
            block.criteria.append(BULLET_RE.sub("", trimmed, count=1))
            block.last_index = index
            continue

        if not block.criteria:
            continue
        if not trimmed:
            # A blank line closes the block and belongs to it.
            block.last_index = index
        break
    return block


def _describe(story: ExtractedUserStory) -> str:
    return f"As a {story.persona} I want {story.capability}"


def extract_user_stories(text: str, tenant_id: str | None = None) -> UserStoryExtractionResult:
    """Return every explicit user story in ``text`` with its acceptance criteria."""
    lines = to_lines(text)
    lookahead = config.extraction.acceptance_lookahead
    stories: list[ExtractedUserStory] = []

    for index, line in enumerate(lines):
        match = USER_STORY_RE.match(line)
        if not match:
            continue
        persona = match.group("persona").strip()
        capability = match.group("capability").strip()
        if not persona or not capability:
            continue

        block = _take_acceptance_criteria(lines, index + 1, lookahead)
        end_index = block.last_index if block.last_index is not None else index
        benefit = (match.group("benefit") or "").strip() or None
        stories.append(
            ExtractedUserStory(
                persona=persona,
                capability=capability,
                benefit=benefit,
                acceptance_criteria=block.criteria,
                spans=[span_for_range(index + 1, end_index + 1)],
            )
        )

    gaps: list[str] = []
    follow_up_questions: list[str] = []

    if not stories:
        gaps.append('No explicit "As a ... I want ..." user story statements found.')
        follow_up_questions.append(
            "Did the meeting include requirements phrased as user stories, "
            "or should I infer them from discussion?"
        )
        follow_up_questions.append("Who is the primary user/persona for these requirements?")

    for story in stories:
        described = _describe(story)
        if story.benefit is None:
            gaps.append(f'User story missing "so that": {described}')
            follow_up_questions.append(
                f'What is the underlying benefit/value ("so that") for: {described}?'
            )
        if not story.acceptance_criteria:
            gaps.append(f"No acceptance criteria captured for: {described}")
            follow_up_questions.append(
                f'What would make this story "done" (acceptance criteria) for: {described}?'
            )

    logger.debug(
        "Extracted user stories | tenant=%s stories=%d gaps=%d",
        tenant_id,
        len(stories),
        len(gaps),
    )
    return UserStoryExtractionResult(
        tenant_id=tenant_id,
        user_stories=stories,
        gaps=gaps,
        follow_up_questions=follow_up_questions,
    )


__all__ = ["extract_user_stories", "USER_STORY_RE"]
