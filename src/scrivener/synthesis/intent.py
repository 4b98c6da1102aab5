# src/scrivener/synthesis/intent.py
"""Heuristic intent parsing shared by the user story and Gherkin synthesizers.

Every detector is a pure function of the requirement text. Detectors with a
structured answer return a frozen dataclass or ``None``; a ``None`` only means
the synthesizer skips the branch that needed it.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass

DEFAULT_PERSONA = "user"

_AGENT_RE = re.compile(r"\bagents?\b")
_CUSTOMER_MODAL_RE = re.compile(
    r"\bcustomers?\b\s+(?:want|wants|need|needs|must|should|can|cannot|can't)\b"
)
_INVALID_THING_RE = re.compile(r"\binvalid\s+([a-z][a-z0-9_-]*)\b", re.IGNORECASE)
_ATTEMPT_THING_RE = re.compile(r"\b(?:failed|invalid)\s+([a-z][a-z0-9_-]*)\s+attempts?\b")
_ATTEMPTS_RE = re.compile(
    r"\bafter\s+(\d+)\s+.*?(?:failed|invalid).*?attempts?\b"
    r"|\b(\d+)\s+(?:failed|invalid)\s+attempts?\b"
)
_DURATION_RE = re.compile(r"\bfor\s+(\d+)\s+(?:minutes?|mins?)\b")
_WITHIN_SECONDS_RE = re.compile(r"\bwithin\s+(\d+)\s*(?:seconds?|secs?|s)\b")
_RESULTS_RE = re.compile(r"\b(?:search results|results)\b", re.IGNORECASE)
_VISIBILITY_RE = re.compile(r"\b(customers?|users?)\b\s+(?:cannot|can't|must not)\s+see\b")
_ONLY_RE = re.compile(r"\bonly\b\s+(.+)$", re.IGNORECASE)
_CONDITIONAL_RE = re.compile(r"^\s*if\b", re.IGNORECASE)
_SHOW_OR_DISPLAY_RE = re.compile(r"\b(?:show|display)\b", re.IGNORECASE)
_ERROR_RE = re.compile(r"\berror\b", re.IGNORECASE)
_PROHIBITION_RE = re.compile(
    r"\b(?:cannot|can't|must not|invalid|error|denied|reject|fails?)\b", re.IGNORECASE
)
_DISPLAY_LEAD_RE = re.compile(r"^(?:show|display)\b", re.IGNORECASE)
_DISPLAY_PREFIX_RE = re.compile(r"^(?:show|display)\s+", re.IGNORECASE)

_INLINE_CONSTRAINT_RE = re.compile(
    r"^(.*)\bthat\b\s+(.+\b(?:cannot|can't|must not)\b.+)$", re.IGNORECASE
)
_INLINE_CONSTRAINT_TAIL_RE = re.compile(
    r"\bthat\b\s+.+\b(?:cannot|can't|must not)\b.+$", re.IGNORECASE
)
_BUT_NOT_RE = re.compile(r"^(.*?),?\s*\bbut\s+not\b\s+(.+)$", re.IGNORECASE)
_TRAILING_DOTS_RE = re.compile(r"[.]+$")
_BE_ABLE_TO_RE = re.compile(r"^be\s+able\s+to\s+", re.IGNORECASE)

# Modal phrases that introduce the capability in a requirement sentence.
GOAL_MODAL_RE = re.compile(
    r"\b(?:need to|needs to|must|should|have to|has to|we want to|we need to)\b\s+"
    r"(.+?)(?:\bso that\b|$)",
    re.IGNORECASE,
)
ACTION_MODAL_RE = re.compile(
    r"\b(?:need to|needs to|must|should|have to|has to|can)\b\s+(.+?)(?:\bso that\b|$)",
    re.IGNORECASE,
)
SO_THAT_RE = re.compile(r"\bso that\b\s+(.+)$", re.IGNORECASE)


@dataclass(frozen=True)
class LockoutConstraint:
    attempts: int
    duration_minutes: int
    # The thing being retried ("login", "password"), when it can be named.
    thing: str | None = None


@dataclass(frozen=True)
class PerformanceConstraint:
    within_seconds: int


@dataclass(frozen=True)
class VisibilityConstraint:
    subject: str
    target: str


@dataclass(frozen=True)
class ConstraintSplit:
    capability: str
    constraint: str | None = None


PersonaRule = tuple[str, Callable[[str], bool]]

# Operational roles come before generic nouns that also show up in object
# phrases ("customer email").
PERSONA_RULES: tuple[PersonaRule, ...] = (
    ("support agent", lambda t: "support agent" in t or bool(_AGENT_RE.search(t))),
    ("admin", lambda t: "admin" in t),
    ("manager", lambda t: "manager" in t),
    ("product owner", lambda t: "product owner" in t),
    ("compliance auditor", lambda t: "audit" in t or "compliance" in t),
    ("customer", lambda t: bool(_CUSTOMER_MODAL_RE.search(t))),
)

# Reduced order used by the Gherkin synthesizer.
BASIC_PERSONA_RULES: tuple[PersonaRule, ...] = tuple(
    rule for rule in PERSONA_RULES if rule[0] in {"support agent", "admin", "customer"}
)


def infer_persona(text: str, rules: Sequence[PersonaRule] = PERSONA_RULES) -> str:
    """Return the first persona whose rule matches, else ``"user"``."""
    lowered = text.lower()
    for persona, predicate in rules:
        if predicate(lowered):
            return persona
    return DEFAULT_PERSONA


def infer_persona_basic(text: str) -> str:
    return infer_persona(text, BASIC_PERSONA_RULES)


def strip_trailing_dots(text: str) -> str:
    return _TRAILING_DOTS_RE.sub("", text)


def to_sentence(text: str) -> str:
    """Capitalize and terminate with a single period; empty stays empty."""
    trimmed = strip_trailing_dots(text.strip())
    if not trimmed:
        return ""
    return f"{trimmed[0].upper()}{trimmed[1:]}."


def normalize_capability(text: str) -> str:
    """Strip a leading "to", "be able to" or "able to" and collapse whitespace."""
    capability = text.strip()
    capability = re.sub(r"^to\s+", "", capability, flags=re.IGNORECASE)
    capability = _BE_ABLE_TO_RE.sub("", capability)
    capability = re.sub(r"^able\s+to\s+", "", capability, flags=re.IGNORECASE)
    return re.sub(r"\s+", " ", capability).strip()


def split_but_not_constraint(capability: str) -> ConstraintSplit:
    """``"view progress, but not edit anything"`` -> constraint ``"cannot edit anything"``."""
    match = _BUT_NOT_RE.match(capability)
    if not match:
        return ConstraintSplit(capability)
    base = strip_trailing_dots(match.group(1).strip())
    negated = strip_trailing_dots(match.group(2).strip())
    if not negated:
        return ConstraintSplit(base)
    return ConstraintSplit(base, f"cannot {negated}")


def split_inline_constraint(capability: str) -> ConstraintSplit:
    """``"add a note that customers cannot see"`` -> ``("add a note", "customers cannot see")``."""
    match = _INLINE_CONSTRAINT_RE.match(capability)
    if not match:
        return ConstraintSplit(capability)
    base = strip_trailing_dots(match.group(1).strip())
    return ConstraintSplit(base, match.group(2).strip())


def extract_only_constraint(text: str) -> str | None:
    """The phrase after "only", e.g. ``"see the tasks they're assigned to"``."""
    match = _ONLY_RE.search(text)
    remainder = match.group(1).strip() if match else ""
    return strip_trailing_dots(remainder) or None


def extract_invalid_thing(text: str) -> str | None:
    match = _INVALID_THING_RE.search(text)
    return match.group(1).lower() if match else None


def _lockout_thing(text: str) -> str | None:
    thing = extract_invalid_thing(text)
    if thing is not None and not thing.startswith("attempt"):
        return thing
    match = _ATTEMPT_THING_RE.search(text.lower())
    return match.group(1) if match else None


def extract_lockout(text: str) -> LockoutConstraint | None:
    """Attempt count and lock duration, both required."""
    lowered = text.lower()
    if "lock" not in lowered:
        return None

    attempts_match = _ATTEMPTS_RE.search(lowered)
    if not attempts_match:
        return None
    attempts = int(attempts_match.group(1) or attempts_match.group(2))

    duration_match = _DURATION_RE.search(lowered)
    if not duration_match:
        return None
    duration = int(duration_match.group(1))

    if attempts <= 0 or duration <= 0:
        return None
    return LockoutConstraint(attempts=attempts, duration_minutes=duration, thing=_lockout_thing(text))


def extract_performance(text: str) -> PerformanceConstraint | None:
    match = _WITHIN_SECONDS_RE.search(text.lower())
    if not match:
        return None
    seconds = int(match.group(1))
    return PerformanceConstraint(within_seconds=seconds) if seconds > 0 else None


def mentions_results(text: str) -> bool:
    return bool(_RESULTS_RE.search(text))


def is_audit_requirement(text: str) -> bool:
    lowered = text.lower()
    return "audit log" in lowered or (
        "audit" in lowered and ("record" in lowered or "log" in lowered)
    )


def extract_visibility_constraint(text: str) -> VisibilityConstraint | None:
    """``"customers cannot see"`` style restrictions."""
    lowered = text.lower()
    match = _VISIBILITY_RE.search(lowered)
    if not match:
        return None
    target = "the internal note" if "note" in lowered else "the restricted content"
    return VisibilityConstraint(subject=match.group(1), target=target)


def is_only_assigned_visibility(text: str) -> bool:
    lowered = text.lower()
    return "only" in lowered and "assigned" in lowered and "see" in lowered


def is_view_but_not_edit(text: str) -> bool:
    lowered = text.lower()
    return "view" in lowered and "but not" in lowered and "edit" in lowered


def is_invalid_input_error_conditional(text: str) -> bool:
    """``"If ... invalid ..., show an error"`` phrasing."""
    return bool(
        _CONDITIONAL_RE.search(text)
        and _SHOW_OR_DISPLAY_RE.search(text)
        and _ERROR_RE.search(text)
    )


def mentions_prohibition(text: str) -> bool:
    return bool(_PROHIBITION_RE.search(text))


def is_display_capability(capability: str) -> bool:
    return bool(_DISPLAY_LEAD_RE.match(capability))


def displayed_object(capability: str) -> str:
    """``"show open tickets"`` -> ``"open tickets"``."""
    return _DISPLAY_PREFIX_RE.sub("", capability, count=1).strip()


def extract_benefit(text: str) -> str | None:
    match = SO_THAT_RE.search(text)
    if not match:
        return None
    return strip_trailing_dots(match.group(1).strip()) or None


def capability_from_requirement(text: str, modal_re: re.Pattern[str] = ACTION_MODAL_RE) -> str:
    """The verb phrase after the first modal, minus "be able to" and inline constraints."""
    match = modal_re.search(text)
    raw = strip_trailing_dots((match.group(1) if match else text).strip())
    cleaned = _BE_ABLE_TO_RE.sub("", raw).strip()
    return _INLINE_CONSTRAINT_TAIL_RE.sub("", cleaned).strip()


__all__ = [
    "LockoutConstraint",
    "PerformanceConstraint",
    "VisibilityConstraint",
    "ConstraintSplit",
    "PERSONA_RULES",
    "BASIC_PERSONA_RULES",
    "GOAL_MODAL_RE",
    "ACTION_MODAL_RE",
    "infer_persona",
    "infer_persona_basic",
    "strip_trailing_dots",
    "to_sentence",
    "normalize_capability",
    "split_but_not_constraint",
    "split_inline_constraint",
    "extract_only_constraint",
    "extract_invalid_thing",
    "extract_lockout",
    "extract_performance",
    "mentions_results",
    "is_audit_requirement",
    "extract_visibility_constraint",
    "is_only_assigned_visibility",
    "is_view_but_not_edit",
    "is_invalid_input_error_conditional",
    "mentions_prohibition",
    "is_display_capability",
    "displayed_object",
    "extract_benefit",
    "capability_from_requirement",
]
