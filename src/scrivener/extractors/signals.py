# src/scrivener/extractors/signals.py
"""Keyword-driven meeting signal extraction and tenant rule compilation.

Rules are evaluated in order and the first rule with any matching regex
classifies the line, so reordering a rule list changes its output.
"""

from __future__ import annotations

import json
import re
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

import yaml
from pydantic import ValidationError

from scrivener.core.logging import get_logger
from scrivener.core.text import span_for_line, to_lines
from scrivener.errors import MalformedPatternError
from scrivener.models import (
    Confidence,
    MeetingSignal,
    MeetingSignalsResult,
    SignalRuleCatalog,
    SignalType,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class SignalRule:
    """A compiled classification rule."""

    type: SignalType
    confidence: Confidence
    regexes: tuple[re.Pattern[str], ...]

    def matches(self, line: str) -> bool:
        return any(regex.search(line) for regex in self.regexes)


def _trigger(*phrases: str) -> re.Pattern[str]:
    alternation = "|".join(phrases)
    return re.compile(rf"^\s*(?:{alternation})\s*[:\-]", re.IGNORECASE)


DEFAULT_SIGNAL_RULES: tuple[SignalRule, ...] = (
    SignalRule(
        SignalType.DECISION,
        Confidence.HIGH,
        (_trigger("decision", "decided", "we decided", "final decision"),),
    ),
    SignalRule(
        SignalType.ACTION_ITEM,
        Confidence.HIGH,
        (_trigger("action item", "ai", "todo", "to do", "next step"),),
    ),
    SignalRule(
        SignalType.OPEN_QUESTION,
        Confidence.HIGH,
        (_trigger("question", "open question", "unknown"),),
    ),
    SignalRule(
        SignalType.RISK,
        Confidence.MEDIUM,
        (_trigger("risk", "concern", "blocker", "issue"),),
    ),
    SignalRule(
        SignalType.DEPENDENCY,
        Confidence.MEDIUM,
        (_trigger("dependency", "depends on", "waiting on"),),
    ),
)

# Observed signal type -> suggested follow-through, in output order.
SUGGESTED_ACTIONS: tuple[tuple[SignalType, str], ...] = (
    (SignalType.ACTION_ITEM, "Assign each ActionItem an owner and due date."),
    (SignalType.DECISION, "Record each Decision with rationale and impacted systems."),
    (SignalType.OPEN_QUESTION, "Convert OpenQuestions into tracked follow-ups with owners."),
)
NO_SIGNALS_ACTION = (
    'No signals detected; consider adding explicit markers like "Decision:" '
    'and "Action item:" in notes.'
)

# JavaScript-style flags accepted in "/body/flags" patterns. ``g``, ``u`` and
# ``y`` change nothing for a per-line search.
_PATTERN_FLAGS: dict[str, re.RegexFlag] = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "g": re.NOFLAG,
    "u": re.NOFLAG,
    "y": re.NOFLAG,
}

# "/body/flags" as written in tenant rule catalogs.
DELIMITED_PATTERN_RE = re.compile(r"^/(?P<body>.+)/(?P<flags>[A-Za-z]*)$", re.DOTALL)


def classify_line(line: str, rules: Sequence[SignalRule]) -> SignalRule | None:
    """Return the first rule matching the trimmed ``line``."""
    for rule in rules:
        if rule.matches(line):
            return rule
    return None


def suggested_actions_for(signals: Iterable[MeetingSignal]) -> list[str]:
    observed = {signal.type for signal in signals}
    if not observed:
        return [NO_SIGNALS_ACTION]
    return [action for signal_type, action in SUGGESTED_ACTIONS if signal_type in observed]


def extract_meeting_signals(
    text: str,
    tenant_id: str | None = None,
    rules: Sequence[SignalRule] | None = None,
) -> MeetingSignalsResult:
    """Classify each line of ``text`` against ``rules`` (defaults when ``None``).

    A supplied rule sequence replaces the defaults entirely.
    """
    active_rules = DEFAULT_SIGNAL_RULES if rules is None else tuple(rules)
    signals: list[MeetingSignal] = []

    for index, line in enumerate(to_lines(text)):
        trimmed = line.strip()
        if not trimmed:
            continue
        rule = classify_line(trimmed, active_rules)
        if rule is None:
            continue
        signals.append(
            MeetingSignal(
                type=rule.type,
                confidence=rule.confidence,
                text=trimmed,
                span=span_for_line(index + 1),
            )
        )

    logger.debug(
        "Extracted meeting signals | tenant=%s signals=%d custom_rules=%s",
        tenant_id,
        len(signals),
        rules is not None,
    )
    return MeetingSignalsResult(
        tenant_id=tenant_id,
        signals=signals,
        suggested_actions=suggested_actions_for(signals),
    )


def split_delimited_pattern(value: str) -> tuple[str, str] | None:
    """Return ``(body, flags)`` for a ``/body/flags`` pattern, else ``None``."""
    match = DELIMITED_PATTERN_RE.match(value)
    if not match:
        return None
    return match.group("body"), match.group("flags")


def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Compile a catalog pattern.

    ``/body/flags`` uses the listed flags; anything else is case-insensitive.

    Raises:
        MalformedPatternError: unknown flag or invalid regular expression.
    """
    delimited = split_delimited_pattern(pattern)
    if delimited is None:
        body, flags = pattern, re.IGNORECASE
    else:
        body, letters = delimited
        flags = re.NOFLAG
        for letter in letters:
            if letter not in _PATTERN_FLAGS:
                raise MalformedPatternError(pattern, f"unsupported flag {letter!r}")
            flags |= _PATTERN_FLAGS[letter]
    try:
        return re.compile(body, flags)
    except re.error as exc:
        raise MalformedPatternError(pattern, str(exc)) from exc


def _load_document(document: Any) -> Any:
    if isinstance(document, (bytes, bytearray)):
        document = document.decode("utf-8")
    if isinstance(document, str):
        try:
            return json.loads(document)
        except json.JSONDecodeError:
            return yaml.safe_load(document)
    return document


def compile_signal_rules(document: Any) -> list[SignalRule] | None:
    """Compile a tenant rule catalog into an ordered rule list.

    ``document`` is a :class:`SignalRuleCatalog`, a mapping, or a JSON or
    YAML string of the form
    ``{version?, extractionRules?: [{type, confidence, patterns}]}``.

    Returns ``None`` when the document is absent, unparseable, fails
    validation or defines no rules, so callers fall back to the defaults.
    Rules are never partially accepted.

    Raises:
        MalformedPatternError: a pattern in an otherwise valid document does
            not compile; the whole document is rejected.
    """
    if document is None:
        return None
    if isinstance(document, SignalRuleCatalog):
        return _compile_catalog(document)
    try:
        loaded = _load_document(document)
    except (yaml.YAMLError, UnicodeDecodeError) as exc:
        logger.warning("Signal rule catalog is not valid JSON/YAML; using defaults: %s", exc)
        return None
    if not isinstance(loaded, Mapping):
        logger.warning("Signal rule catalog must be a mapping; using defaults")
        return None

    try:
        catalog = SignalRuleCatalog.model_validate(loaded)
    except ValidationError as exc:
        logger.warning(
            "Signal rule catalog failed validation; using defaults | errors=%d",
            exc.error_count(),
        )
        return None
    return _compile_catalog(catalog)


def _compile_catalog(catalog: SignalRuleCatalog) -> list[SignalRule] | None:
    if not catalog.extraction_rules:
        logger.debug("Signal rule catalog defines no rules; using defaults")
        return None

    compiled = [
        SignalRule(
            type=spec.type,
            confidence=spec.confidence,
            regexes=tuple(compile_pattern(pattern) for pattern in spec.patterns),
        )
        for spec in catalog.extraction_rules
    ]
    logger.debug(
        "Compiled signal rule catalog | version=%s rules=%d", catalog.version, len(compiled)
    )
    return compiled


def resolve_signal_rules(document: Any) -> Sequence[SignalRule]:
    """Compiled catalog rules, or :data:`DEFAULT_SIGNAL_RULES` when unusable."""
    compiled = compile_signal_rules(document)
    return DEFAULT_SIGNAL_RULES if compiled is None else compiled


__all__ = [
    "SignalRule",
    "DEFAULT_SIGNAL_RULES",
    "SUGGESTED_ACTIONS",
    "NO_SIGNALS_ACTION",
    "classify_line",
    "suggested_actions_for",
    "extract_meeting_signals",
    "split_delimited_pattern",
    "compile_pattern",
    "compile_signal_rules",
    "resolve_signal_rules",
]
