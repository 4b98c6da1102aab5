# src/scrivener/synthesis/user_stories.py
"""Deterministic user story synthesis from mined requirements.

Each requirement yields one story with two acceptance criteria: a happy path
and a single edge case. Both are picked from ordered rule lists where the
first applicable rule wins.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

from scrivener.core.logging import get_logger
from scrivener.models import (
    Confidence,
    MinedRequirement,
    SynthesisMode,
    SynthesizedUserStory,
    UserStorySynthesisResult,
)

from .intent import (
    GOAL_MODAL_RE,
    LockoutConstraint,
    PerformanceConstraint,
    displayed_object,
    extract_benefit,
    extract_invalid_thing,
    extract_lockout,
    extract_only_constraint,
    extract_performance,
    infer_persona,
    is_display_capability,
    is_invalid_input_error_conditional,
    mentions_prohibition,
    mentions_results,
    normalize_capability,
    split_but_not_constraint,
    split_inline_constraint,
    to_sentence,
)
from .limits import clamp_max_items

logger = get_logger(__name__)

STORY_FOLLOW_UP_QUESTIONS = (
    "Which user roles/personas should we prioritize?",
    "What are the acceptance criteria for each story (success + error cases)?",
    "Are there non-functional requirements (latency, audit, security) that apply?",
)


@dataclass(frozen=True)
class Goal:
    i_want: str
    benefit: str | None = None


def _conditional_error_goal(text: str) -> Goal | None:
    if not is_invalid_input_error_conditional(text):
        return None
    thing = extract_invalid_thing(text) or "input"
    return Goal(f"to see an error message when I provide an invalid {thing}")


def _lockout_goal(text: str) -> Goal | None:
    lockout = extract_lockout(text)
    if lockout is None:
        return None
    thing = lockout.thing or "input"
    return Goal(f"to prevent repeated invalid {thing} attempts by temporarily locking searches")


def _performance_goal(text: str) -> Goal | None:
    perf = extract_performance(text)
    if perf is None or not mentions_results(text):
        return None
    return Goal(f"to receive search results within {perf.within_seconds} seconds")


def _modal_goal(text: str) -> Goal:
    match = GOAL_MODAL_RE.search(text)
    goal = (match.group(1) if match else text).strip().rstrip(".")
    i_want = goal if goal.lower().startswith("to ") else f"to {goal}"
    return Goal(i_want, extract_benefit(text))


GOAL_RULES: tuple[Callable[[str], Goal | None], ...] = (
    _conditional_error_goal,
    _lockout_goal,
    _performance_goal,
)


def infer_goal(text: str) -> Goal:
    """Special phrasings first, then the verb phrase after the strongest modal."""
    for rule in GOAL_RULES:
        goal = rule(text)
        if goal is not None:
            return goal
    return _modal_goal(text)


@dataclass(frozen=True)
class StoryContext:
    """Everything the acceptance-criteria rules look at for one requirement."""

    text: str
    persona: str
    capability: str
    constraint: str | None
    invalid_thing: str | None
    lockout: LockoutConstraint | None
    performance: PerformanceConstraint | None
    only_constraint: str | None

    @property
    def results_performance(self) -> PerformanceConstraint | None:
        if self.performance is not None and mentions_results(self.text):
            return self.performance
        return None


CriterionRule = Callable[[StoryContext], str | None]


def _valid_input_accepted(ctx: StoryContext) -> str | None:
    if ctx.invalid_thing is None:
        return None
    return f"If a valid {ctx.invalid_thing} is provided, the system accepts it"


def _system_shows(ctx: StoryContext) -> str | None:
    if not is_display_capability(ctx.capability):
        return None
    return f"The system shows {displayed_object(ctx.capability)}"


def _persona_can(ctx: StoryContext) -> str | None:
    return f"The {ctx.persona} can {ctx.capability}"


HAPPY_PATH_RULES: tuple[CriterionRule, ...] = (
    _valid_input_accepted,
    _system_shows,
    _persona_can,
)


def _lockout_blocks(ctx: StoryContext) -> str | None:
    if ctx.lockout is None:
        return None
    thing = ctx.lockout.thing or "input"
    return (
        f"After {ctx.lockout.attempts} invalid {thing} attempts, further searches "
        f"are blocked for {ctx.lockout.duration_minutes} minutes"
    )


def _results_within(ctx: StoryContext) -> str | None:
    perf = ctx.results_performance
    if perf is None:
        return None
    return f"Search results are returned within {perf.within_seconds} seconds"


def _only_constraint(ctx: StoryContext) -> str | None:
    if ctx.only_constraint is None:
        return None
    return f"The {ctx.persona} can only {ctx.only_constraint}"


def _explicit_constraint(ctx: StoryContext) -> str | None:
    if ctx.constraint is None:
        return None
    return f"The {ctx.persona} {ctx.constraint}"


def _invalid_input_error(ctx: StoryContext) -> str | None:
    if ctx.invalid_thing is None:
        return None
    return f"If an invalid {ctx.invalid_thing} is provided, the system shows an error message"


def _prohibition_error(ctx: StoryContext) -> str | None:
    if not mentions_prohibition(ctx.text):
        return None
    return "Invalid input or prohibited actions result in a clear error message"


def _generic_error(ctx: StoryContext) -> str | None:
    return "If the action cannot be completed, the system provides a clear error message"


EDGE_CASE_RULES: tuple[CriterionRule, ...] = (
    _lockout_blocks,
    _results_within,
    _only_constraint,
    _explicit_constraint,
    _invalid_input_error,
    _prohibition_error,
    _generic_error,
)


def first_criterion(rules: Sequence[CriterionRule], ctx: StoryContext) -> str:
    for rule in rules:
        criterion = rule(ctx)
        if criterion is not None:
            return criterion
    raise LookupError("criterion rule list has no fallback")


def dedupe_sentences(sentences: Iterable[str]) -> list[str]:
    """Drop empty and repeated sentences, ignoring case and trailing punctuation."""
    seen: set[str] = set()
    result: list[str] = []
    for sentence in sentences:
        key = sentence.strip().rstrip(".!?").strip().lower()
        if not key or key in seen:
            continue
        seen.add(key)
        result.append(sentence)
    return result


def build_story_context(requirement: MinedRequirement) -> tuple[StoryContext, Goal]:
    text = requirement.text
    goal = infer_goal(text)
    after_but_not = split_but_not_constraint(normalize_capability(goal.i_want))
    after_inline = split_inline_constraint(after_but_not.capability)
    ctx = StoryContext(
        text=text,
        persona=infer_persona(text),
        capability=after_inline.capability,
        constraint=after_inline.constraint or after_but_not.constraint,
        invalid_thing=extract_invalid_thing(text),
        lockout=extract_lockout(text),
        performance=extract_performance(text),
        only_constraint=extract_only_constraint(text),
    )
    return ctx, goal


def synthesize_story(requirement: MinedRequirement) -> SynthesizedUserStory:
    ctx, goal = build_story_context(requirement)
    criteria = dedupe_sentences(
        to_sentence(first_criterion(rules, ctx)) for rules in (HAPPY_PATH_RULES, EDGE_CASE_RULES)
    )
    return SynthesizedUserStory(
        persona=ctx.persona,
        capability=f"to {ctx.capability}".strip(),
        benefit=goal.benefit,
        acceptance_criteria=criteria,
        evidence=requirement.evidence,
        confidence=Confidence.LOW,
    )


def synthesize_user_stories(
    requirements: Sequence[MinedRequirement],
    tenant_id: str | None = None,
    max_items: int | None = None,
) -> UserStorySynthesisResult:
    """Synthesize one low-confidence story per requirement, up to ``max_items``."""
    limit = clamp_max_items(max_items)
    stories = [synthesize_story(requirement) for requirement in requirements[:limit]]

    follow_up_questions = list(STORY_FOLLOW_UP_QUESTIONS) if stories else []
    logger.debug(
        "Synthesized user stories | tenant=%s requirements=%d stories=%d limit=%d",
        tenant_id,
        len(requirements),
        len(stories),
        limit,
    )
    return UserStorySynthesisResult(
        tenant_id=tenant_id,
        mode_used=SynthesisMode.DETERMINISTIC,
        stories=stories,
        gaps=[],
        follow_up_questions=follow_up_questions,
    )


__all__ = [
    "Goal",
    "StoryContext",
    "GOAL_RULES",
    "HAPPY_PATH_RULES",
    "EDGE_CASE_RULES",
    "STORY_FOLLOW_UP_QUESTIONS",
    "infer_goal",
    "build_story_context",
    "dedupe_sentences",
    "synthesize_story",
    "synthesize_user_stories",
]
