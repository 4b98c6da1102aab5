from scrivener.models import SynthesisMode
from scrivener.synthesis import synthesize_gherkin
from scrivener.synthesis.gherkin import FEATURE_NAME, GHERKIN_FOLLOW_UP_QUESTIONS


def _scenarios(reqs, **kwargs):
    result = synthesize_gherkin(reqs, **kwargs)
    [feature] = result.features
    assert feature.name == FEATURE_NAME
    return feature.scenarios


def test_lockout_scenario(requirement):
    [scenario] = _scenarios(
        [requirement("Searches lock for 15 minutes after 5 failed login attempts.")]
    )
    assert scenario.name == "Too many invalid login attempts triggers lockout"
    assert scenario.given == ["a user is using the product"]
    assert scenario.when == ["the user attempts to search after 5 invalid login attempts"]
    assert scenario.then == ["further searches are blocked for 15 minutes"]


def test_only_assigned_emits_one_scenario_with_two_outcomes(requirement):
    [scenario] = _scenarios(
        [requirement("Individual contributors should only see the tasks they're assigned to.")],
        max_items=1,
    )
    assert scenario.name == "Contributors only see assigned tasks"
    assert scenario.then == ["assigned tasks are visible", "unassigned tasks are not visible"]


def test_view_but_not_edit(requirement):
    [scenario] = _scenarios(
        [requirement("Executives should be able to view progress, but not edit anything.")]
    )
    assert scenario.name == "Executives can view progress but cannot edit"
    assert scenario.then == ["the system prevents editing"]


def test_performance_requires_results(requirement):
    [scenario] = _scenarios([requirement("Search results should show within 2 seconds.")])
    assert scenario.name == "Search returns results within 2 seconds"
    assert scenario.when == ["the user searches tickets"]
    assert scenario.then == ["search results are returned within 2 seconds"]

    [generic] = _scenarios([requirement("Pages must load within 2 seconds.")])
    assert generic.name == "Pages must load within 2 seconds"


def test_audit(requirement):
    [scenario] = _scenarios(
        [requirement("Every change to an internal note must be recorded in the audit log.")]
    )
    assert scenario.name == "Audit log entry is recorded for internal note changes"
    assert scenario.then == ["an audit log entry is recorded"]


def test_invalid_input_pair(requirement):
    req = requirement("If a user enters an invalid email, the system should display an error.")
    valid, invalid = _scenarios([req])
    assert valid.name == "Valid email is accepted"
    assert valid.when == ["the user provides a valid email"]
    assert valid.then == ["the system accepts the email"]
    assert invalid.name == "Invalid email shows an error"
    assert invalid.then == ["the system shows an error message"]

    [only_valid] = _scenarios([req], max_items=1)
    assert only_valid.name == "Valid email is accepted"


def test_visibility_pair(requirement):
    add, hide = _scenarios(
        [requirement("Support agents need to add internal notes that customers cannot see.")]
    )
    assert add.name == "Support agent adds an internal note"
    assert add.then == ["the internal note is saved"]
    assert hide.name == "Internal note is hidden from customers"
    assert hide.when == ["the customers view the ticket"]
    assert hide.then == ["the internal note is not visible to customers"]


def test_generic_display(requirement):
    [scenario] = _scenarios([requirement("The dashboard must display open tickets.")])
    assert scenario.name == "The dashboard must display open tickets"
    assert scenario.when == ["the user views the relevant results"]
    assert scenario.then == ["the system shows open tickets"]

    [search] = _scenarios([requirement("Agents can show search results for closed tickets.")])
    assert search.given == ["a support agent is using the product"]
    assert search.when == ["the user views ticket search results"]


def test_generic_action(requirement):
    [scenario] = _scenarios([requirement("Admins need to export billing reports.")])
    assert scenario.name == "Admins need to export billing reports"
    assert scenario.given == ["a admin is using the product"]
    assert scenario.when == ["the admin export billing reports"]
    assert scenario.then == ["the system allows the action and produces an observable result"]


def test_cap_spans_requirements(requirement):
    reqs = [
        requirement("If a user enters an invalid email, the system should display an error."),
        requirement("Support agents need to add internal notes that customers cannot see."),
        requirement("Admins need to export billing reports."),
    ]
    scenarios = _scenarios(reqs, max_items=3)
    assert [s.name for s in scenarios] == [
        "Valid email is accepted",
        "Invalid email shows an error",
        "Support agent adds an internal note",
    ]
    assert len(_scenarios(reqs)) == 5


def test_evidence_and_envelope(requirement):
    req = requirement("Admins need to export billing reports.", line=4)
    result = synthesize_gherkin([req], tenant_id="demo")
    assert result.mode_used is SynthesisMode.DETERMINISTIC
    assert result.tenant_id == "demo"
    assert result.features[0].scenarios[0].evidence == req.evidence
    assert result.follow_up_questions == list(GHERKIN_FOLLOW_UP_QUESTIONS)


def test_no_requirements():
    result = synthesize_gherkin([])
    assert result.features[0].scenarios == []
    assert result.follow_up_questions == []
