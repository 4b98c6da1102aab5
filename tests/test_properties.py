import pytest

from scrivener import (
    extract_gherkin,
    extract_meeting_signals,
    extract_user_stories,
    mine_requirements,
    synthesize_gherkin_from_text,
    synthesize_user_stories_from_text,
)
from scrivener.core.text import line_count

OPERATIONS = [
    extract_user_stories,
    extract_gherkin,
    extract_meeting_signals,
    mine_requirements,
    synthesize_user_stories_from_text,
    synthesize_gherkin_from_text,
]


def _iter_spans(payload):
    if isinstance(payload, dict):
        if set(payload) == {"startLine", "endLine"}:
            yield payload
            return
        for value in payload.values():
            yield from _iter_spans(value)
    elif isinstance(payload, list):
        for item in payload:
            yield from _iter_spans(item)


@pytest.mark.parametrize("operation", OPERATIONS)
@pytest.mark.parametrize("fixture", ["sample_notes", "plain_transcript"])
def test_output_is_deterministic(request, operation, fixture):
    text = request.getfixturevalue(fixture)
    assert operation(text, tenant_id="demo").to_payload() == operation(text, tenant_id="demo").to_payload()


@pytest.mark.parametrize("operation", OPERATIONS)
@pytest.mark.parametrize("fixture", ["sample_notes", "plain_transcript"])
def test_spans_stay_inside_input(request, operation, fixture):
    text = request.getfixturevalue(fixture)
    total = line_count(text)
    for span in _iter_spans(operation(text).to_payload()):
        assert 1 <= span["startLine"] <= span["endLine"] <= total


@pytest.mark.parametrize("operation", OPERATIONS)
def test_crlf_input_matches_lf_input(operation, sample_notes):
    crlf = sample_notes.replace("\n", "\r\n")
    assert operation(crlf).to_payload() == operation(sample_notes).to_payload()
