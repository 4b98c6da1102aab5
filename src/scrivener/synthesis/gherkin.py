# src/scrivener/synthesis/gherkin.py
"""Deterministic Gherkin synthesis from mined requirements.

Each requirement runs through :data:`SCENARIO_TEMPLATES` top to bottom; the
first template whose predicate holds produces its scenarios and the rest are
skipped. Templates that emit a pair stop early once the cap is reached.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from scrivener.core.logging import get_logger
from scrivener.models import (
    Confidence,
    GherkinSynthesisResult,
    MinedRequirement,
    SynthesisMode,
    SynthesizedGherkinFeature,
    SynthesizedGherkinScenario,
)

from .intent import (
    LockoutConstraint,
    PerformanceConstraint,
    VisibilityConstraint,
    capability_from_requirement,
    displayed_object,
    extract_invalid_thing,
    extract_lockout,
    extract_performance,
    extract_visibility_constraint,
    infer_persona_basic,
    is_audit_requirement,
    is_display_capability,
    is_only_assigned_visibility,
    is_view_but_not_edit,
    mentions_results,
    strip_trailing_dots,
)
from .limits import clamp_max_items

logger = get_logger(__name__)

FEATURE_NAME = "Meeting requirements"
GHERKIN_FOLLOW_UP_QUESTIONS = (
    "What are the preconditions/data setup for each scenario?",
    "What are the success criteria and error cases?",
    "Which scenarios are highest priority for automation?",
)


@dataclass(frozen=True)
class ScenarioOutline:
    """Steps of a scenario before evidence is attached."""

    name: str
    given: tuple[str, ...] = ()
    when: tuple[str, ...] = ()
    then: tuple[str, ...] = ()

    def attach(self, requirement: MinedRequirement) -> SynthesizedGherkinScenario:
        return SynthesizedGherkinScenario(
            name=self.name,
            given=list(self.given),
            when=list(self.when),
            then=list(self.then),
            evidence=requirement.evidence,
            confidence=Confidence.LOW,
        )


@dataclass(frozen=True)
class ScenarioContext:
    text: str
    persona: str
    invalid_thing: str | None
    visibility: VisibilityConstraint | None
    lockout: LockoutConstraint | None
    performance: PerformanceConstraint | None

    @classmethod
    def from_requirement(cls, requirement: MinedRequirement) -> ScenarioContext:
        text = requirement.text
        return cls(
            text=text,
            persona=infer_persona_basic(text),
            invalid_thing=extract_invalid_thing(text),
            visibility=extract_visibility_constraint(text),
            lockout=extract_lockout(text),
            performance=extract_performance(text),
        )

    @property
    def using_product(self) -> str:
        return f"a {self.persona} is using the product"


def _only_assigned(ctx: ScenarioContext) -> list[ScenarioOutline]:
    return [
        ScenarioOutline(
            name="Contributors only see assigned tasks",
            given=("an individual contributor has an assigned task and an unassigned task exists",),
            when=("the contributor views their task list",),
            then=("assigned tasks are visible", "unassigned tasks are not visible"),
        )
    ]


def _view_not_edit(ctx: ScenarioContext) -> list[ScenarioOutline]:
    return [
        ScenarioOutline(
            name="Executives can view progress but cannot edit",
            given=("an executive is viewing project progress",),
            when=("the executive attempts to edit a project status",),
            then=("the system prevents editing",),
        )
    ]


def _lockout(ctx: ScenarioContext) -> list[ScenarioOutline]:
    if ctx.lockout is None:
        return []
    thing = ctx.lockout.thing or "input"
    return [
        ScenarioOutline(
            name=f"Too many invalid {thing} attempts triggers lockout",
            given=(ctx.using_product,),
            when=(
                f"the {ctx.persona} attempts to search after "
                f"{ctx.lockout.attempts} invalid {thing} attempts",
            ),
            then=(f"further searches are blocked for {ctx.lockout.duration_minutes} minutes",),
        )
    ]


def _performance(ctx: ScenarioContext) -> list[ScenarioOutline]:
    if ctx.performance is None:
        return []
    seconds = ctx.performance.within_seconds
    return [
        ScenarioOutline(
            name=f"Search returns results within {seconds} seconds",
            given=(ctx.using_product,),
            when=("the user searches tickets",),
            then=(f"search results are returned within {seconds} seconds",),
        )
    ]


def _audit(ctx: ScenarioContext) -> list[ScenarioOutline]:
    return [
        ScenarioOutline(
            name="Audit log entry is recorded for internal note changes",
            given=("a support agent is using the product",),
            when=("the support agent adds or edits an internal note",),
            then=("an audit log entry is recorded",),
        )
    ]


def _valid_invalid_pair(ctx: ScenarioContext) -> list[ScenarioOutline]:
    thing = ctx.invalid_thing
    if thing is None:
        return []
    return [
        ScenarioOutline(
            name=f"Valid {thing} is accepted",
            given=(ctx.using_product,),
            when=(f"the {ctx.persona} provides a valid {thing}",),
            then=(f"the system accepts the {thing}",),
        ),
        ScenarioOutline(
            name=f"Invalid {thing} shows an error",
            given=(ctx.using_product,),
            when=(f"the {ctx.persona} provides an invalid {thing}",),
            then=("the system shows an error message",),
        ),
    ]


def _visibility_pair(ctx: ScenarioContext) -> list[ScenarioOutline]:
    if ctx.visibility is None:
        return []
    subject = ctx.visibility.subject
    return [
        ScenarioOutline(
            name="Support agent adds an internal note",
            given=("a support agent is using the product",),
            when=("the support agent adds an internal note to a ticket",),
            then=("the internal note is saved",),
        ),
        ScenarioOutline(
            name="Internal note is hidden from customers",
            given=("an internal note exists on a ticket",),
            when=(f"the {subject} view the ticket",),
            then=(f"{ctx.visibility.target} is not visible to {subject}",),
        ),
    ]


def _generic(ctx: ScenarioContext) -> list[ScenarioOutline]:
    name = strip_trailing_dots(ctx.text.strip())
    capability = capability_from_requirement(ctx.text)

    if is_display_capability(capability):
        shown = displayed_object(capability)
        if "search results" in shown.lower():
            when = "the user views ticket search results"
        else:
            when = "the user views the relevant results"
        return [
            ScenarioOutline(
                name=name,
                given=(ctx.using_product,),
                when=(when,),
                then=(f"the system shows {shown}",),
            )
        ]

    action = capability[3:] if capability.startswith("to ") else capability
    return [
        ScenarioOutline(
            name=name,
            given=(ctx.using_product,),
            when=(f"the {ctx.persona} {action}",),
            then=("the system allows the action and produces an observable result",),
        )
    ]


ScenarioTemplate = tuple[
    Callable[[ScenarioContext], bool],
    Callable[[ScenarioContext], list[ScenarioOutline]],
]

SCENARIO_TEMPLATES: tuple[ScenarioTemplate, ...] = (
    (lambda ctx: is_only_assigned_visibility(ctx.text), _only_assigned),
    (lambda ctx: is_view_but_not_edit(ctx.text), _view_not_edit),
    (lambda ctx: ctx.lockout is not None, _lockout),
    (lambda ctx: ctx.performance is not None and mentions_results(ctx.text), _performance),
    (lambda ctx: is_audit_requirement(ctx.text), _audit),
    (lambda ctx: ctx.invalid_thing is not None, _valid_invalid_pair),
    (lambda ctx: ctx.visibility is not None, _visibility_pair),
    (lambda ctx: True, _generic),
)


def outlines_for(requirement: MinedRequirement) -> list[ScenarioOutline]:
    """Scenario outlines from the first template that applies to ``requirement``."""
    ctx = ScenarioContext.from_requirement(requirement)
    for applies, build in SCENARIO_TEMPLATES:
        if applies(ctx):
            return build(ctx)
    return []


def synthesize_gherkin(
    requirements: Sequence[MinedRequirement],
    tenant_id: str | None = None,
    max_items: int | None = None,
) -> GherkinSynthesisResult:
    """Synthesize low-confidence scenarios, at most ``max_items`` in total."""
    limit = clamp_max_items(max_items)
    scenarios: list[SynthesizedGherkinScenario] = []

    for requirement in requirements:
        if len(scenarios) >= limit:
            break
        room = limit - len(scenarios)
        scenarios.extend(outline.attach(requirement) for outline in outlines_for(requirement)[:room])

    follow_up_questions = list(GHERKIN_FOLLOW_UP_QUESTIONS) if scenarios else []
    logger.debug(
        "Synthesized gherkin | tenant=%s requirements=%d scenarios=%d limit=%d",
        tenant_id,
        len(requirements),
        len(scenarios),
        limit,
    )
    return GherkinSynthesisResult(
        tenant_id=tenant_id,
        mode_used=SynthesisMode.DETERMINISTIC,
        features=[SynthesizedGherkinFeature(name=FEATURE_NAME, scenarios=scenarios)],
        gaps=[],
        follow_up_questions=follow_up_questions,
    )


__all__ = [
    "FEATURE_NAME",
    "GHERKIN_FOLLOW_UP_QUESTIONS",
    "ScenarioOutline",
    "ScenarioContext",
    "SCENARIO_TEMPLATES",
    "outlines_for",
    "synthesize_gherkin",
]
