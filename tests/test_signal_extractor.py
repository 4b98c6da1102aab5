import json
import logging
import re

import pytest

from scrivener.errors import MalformedPatternError, RuleConfigError
from scrivener.extractors import (
    DEFAULT_SIGNAL_RULES,
    compile_signal_rules,
    extract_meeting_signals,
    resolve_signal_rules,
)
from scrivener.extractors.signals import (
    NO_SIGNALS_ACTION,
    compile_pattern,
    split_delimited_pattern,
)
from scrivener.models import Confidence, SignalRuleCatalog, SignalRuleSpec, SignalType


def test_decision_line():
    result = extract_meeting_signals("Decision: Use stdio as default transport.")
    assert [s.to_payload() for s in result.signals] == [
        {
            "type": "Decision",
            "confidence": "high",
            "text": "Decision: Use stdio as default transport.",
            "span": {"startLine": 1, "endLine": 1},
        }
    ]
    assert result.suggested_actions == [
        "Record each Decision with rationale and impacted systems."
    ]


def test_sample_notes(sample_notes):
    result = extract_meeting_signals(sample_notes, tenant_id="demo")
    assert [(s.type, s.confidence, s.span.start_line) for s in result.signals] == [
        (SignalType.DECISION, Confidence.HIGH, 2),
        (SignalType.ACTION_ITEM, Confidence.HIGH, 3),
        (SignalType.RISK, Confidence.MEDIUM, 4),
        (SignalType.DEPENDENCY, Confidence.MEDIUM, 5),
        (SignalType.OPEN_QUESTION, Confidence.HIGH, 6),
    ]
    assert result.suggested_actions == [
        "Assign each ActionItem an owner and due date.",
        "Record each Decision with rationale and impacted systems.",
        "Convert OpenQuestions into tracked follow-ups with owners.",
    ]


def test_trigger_must_be_followed_by_separator():
    result = extract_meeting_signals("Decisions were hard\n  todo - write tests\nAI: ping vendor")
    assert [(s.type, s.text) for s in result.signals] == [
        (SignalType.ACTION_ITEM, "todo - write tests"),
        (SignalType.ACTION_ITEM, "AI: ping vendor"),
    ]


def test_no_signals():
    result = extract_meeting_signals("just chatting\n\n")
    assert result.signals == []
    assert result.suggested_actions == [NO_SIGNALS_ACTION]


def test_default_rules_are_used_when_none_given(sample_notes):
    assert extract_meeting_signals(sample_notes) == extract_meeting_signals(
        sample_notes, rules=DEFAULT_SIGNAL_RULES
    )


def test_supplied_rules_replace_defaults():
    rules = compile_signal_rules(
        {"extractionRules": [{"type": "Risk", "confidence": "low", "patterns": ["^heads up"]}]}
    )
    result = extract_meeting_signals("Decision: x\nHEADS UP: vendor delay", rules=rules)
    assert [(s.type, s.confidence, s.text) for s in result.signals] == [
        (SignalType.RISK, Confidence.LOW, "HEADS UP: vendor delay")
    ]
    assert extract_meeting_signals("Decision: x", rules=[]).signals == []


@pytest.mark.parametrize(
    "document",
    [
        None,
        "extractionRules: [unclosed",
        "- just a list",
        {"version": 1},
        {"extractionRules": []},
        {"extractionRules": [{"type": "Nope", "confidence": "low", "patterns": ["x"]}]},
        {"extractionRules": [{"type": "Risk", "confidence": "low", "patterns": []}]},
        {"extractionRules": [{"type": "Risk", "confidence": "low", "patterns": ["  "]}]},
        {"extractionRules": [{"type": "Risk", "confidence": "certain", "patterns": ["x"]}]},
    ],
)
def test_unusable_documents_fall_back(document):
    assert compile_signal_rules(document) is None
    assert resolve_signal_rules(document) is DEFAULT_SIGNAL_RULES


def test_invalid_document_logs_warning(caplog):
    with caplog.at_level(logging.WARNING, logger="scrivener.extractors.signals"):
        compile_signal_rules({"extractionRules": [{"type": "Nope"}]})
    assert "failed validation" in caplog.text


def test_yaml_document_with_delimited_pattern():
    document = "\n".join(
        [
            "version: 2",
            "owner: platform-team",
            "extractionRules:",
            "  - type: Decision",
            "    confidence: medium",
            "    patterns:",
            "      - '/^agreed\\b/i'",
            "      - '/^todo/'",
        ]
    )
    [rule] = compile_signal_rules(document)
    assert rule.type is SignalType.DECISION
    assert rule.confidence is Confidence.MEDIUM
    assert rule.matches("Agreed: ship friday")
    assert rule.matches("todo: x")
    assert not rule.matches("TODO: x")


def test_json_string_document():
    rules = compile_signal_rules(
        '{"extractionRules": [{"type": "Dependency", "confidence": "high", "patterns": ["blocked by"]}]}'
    )
    assert rules[0].matches("We are BLOCKED BY legal")


def test_pattern_flags():
    assert compile_pattern("/a.b/s").flags & re.DOTALL
    assert compile_pattern("/^x/gm").flags & re.MULTILINE
    assert compile_pattern("plain").flags & re.IGNORECASE
    assert not compile_pattern("/plain/").flags & re.IGNORECASE


@pytest.mark.parametrize("pattern", ["(unclosed", "/abc/q"])
def test_malformed_pattern_rejects_whole_document(pattern):
    document = {
        "extractionRules": [
            {"type": "Decision", "confidence": "high", "patterns": ["^ok"]},
            {"type": "Risk", "confidence": "high", "patterns": [pattern]},
        ]
    }
    with pytest.raises(MalformedPatternError) as excinfo:
        compile_signal_rules(document)
    assert excinfo.value.pattern == pattern
    assert isinstance(excinfo.value, RuleConfigError)
    assert isinstance(excinfo.value, ValueError)


def test_tab_indented_json_document():
    document = json.dumps(
        {"extractionRules": [{"type": "Risk", "confidence": "medium", "patterns": ["^watch out"]}]},
        indent="\t",
    )
    [rule] = compile_signal_rules(document)
    assert rule.type is SignalType.RISK
    assert rule.matches("Watch out: vendor delay")


def test_catalog_model_is_accepted():
    catalog = SignalRuleCatalog(
        version=1,
        extraction_rules=[
            SignalRuleSpec(type=SignalType.DEPENDENCY, confidence=Confidence.LOW, patterns=["^needs"])
        ],
    )
    [rule] = compile_signal_rules(catalog)
    assert rule.type is SignalType.DEPENDENCY
    assert compile_signal_rules(SignalRuleCatalog()) is None


def test_split_delimited_pattern():
    assert split_delimited_pattern("/a\\/b/im") == ("a\\/b", "im")
    assert split_delimited_pattern("/x/") == ("x", "")
    assert split_delimited_pattern("plain") is None
    assert split_delimited_pattern("//i") is None
