import json

import pytest
from pydantic import ValidationError

from scrivener.models import (
    ExtractedUserStory,
    GherkinSynthesisResult,
    MeetingSignal,
    ScrivenerBaseModel,
    SignalRuleCatalog,
    SourceSpan,
)
from scrivener.models.schemas import export_json_schemas, iter_models


def test_span_rejects_reversed_or_zero_lines():
    with pytest.raises(ValidationError):
        SourceSpan(start_line=3, end_line=2)
    with pytest.raises(ValidationError):
        SourceSpan(start_line=0, end_line=1)


def test_models_accept_camel_case_and_dump_camel_case():
    span = SourceSpan.model_validate({"startLine": 1, "endLine": 2})
    assert span.start_line == 1
    assert span.to_payload() == {"startLine": 1, "endLine": 2}


def test_models_are_frozen():
    span = SourceSpan(start_line=1, end_line=1)
    with pytest.raises(ValidationError):
        span.start_line = 2


def test_payload_omits_missing_benefit():
    story = ExtractedUserStory(
        persona="user",
        capability="to export data",
        spans=[SourceSpan(start_line=1, end_line=1)],
    )
    payload = story.to_payload()
    assert "benefit" not in payload
    assert payload["acceptanceCriteria"] == []


def test_signal_payload_uses_enum_values():
    signal = MeetingSignal(
        type="Decision",
        confidence="high",
        text="Decision: ship it",
        span=SourceSpan(start_line=1, end_line=1),
    )
    assert signal.to_payload() == {
        "type": "Decision",
        "confidence": "high",
        "text": "Decision: ship it",
        "span": {"startLine": 1, "endLine": 1},
    }


def test_synthesis_envelope_defaults_to_deterministic():
    payload = GherkinSynthesisResult(tenant_id="demo").to_payload()
    assert payload["modeUsed"] == "deterministic"
    assert payload["tenantId"] == "demo"
    assert payload["followUpQuestions"] == []


def test_rule_catalog_ignores_unknown_top_level_keys():
    catalog = SignalRuleCatalog.model_validate({"version": 3, "glossary": {"a": "b"}})
    assert catalog.version == 3
    assert catalog.extraction_rules is None


def test_rule_spec_rejects_unknown_keys():
    with pytest.raises(ValidationError):
        SignalRuleCatalog.model_validate(
            {
                "extractionRules": [
                    {"type": "Risk", "confidence": "low", "patterns": ["x"], "weight": 2}
                ]
            }
        )


def test_iter_models_skips_base():
    models = iter_models()
    assert ScrivenerBaseModel not in models
    assert SourceSpan in models


def test_export_json_schemas(tmp_path):
    written = export_json_schemas(tmp_path / "schemas")
    names = {path.name for path in written}
    assert "SourceSpan.json" in names
    assert "GherkinSynthesisResult.json" in names
    schema = json.loads((tmp_path / "schemas" / "SourceSpan.json").read_text())
    assert set(schema["properties"]) == {"startLine", "endLine"}
