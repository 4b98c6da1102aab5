from scrivener.synthesis import mine_requirements
from scrivener.synthesis.requirements import (
    NO_REQUIREMENTS_GAP,
    NO_REQUIREMENTS_QUESTIONS,
    clean_requirement_text,
    is_meeting_meta,
    split_sentences,
)


def test_plain_transcript(plain_transcript):
    result = mine_requirements(plain_transcript, tenant_id="demo")

    assert [r.text for r in result.requirements] == [
        "support agents need to add internal notes that customers cannot see.",
        "Search results must show within 2 seconds!",
    ]
    first, second = result.requirements
    assert first.evidence[0].quote == (
        "Sam: So, support agents need to add internal notes that customers cannot see."
    )
    assert first.evidence[0].spans[0].start_line == 2
    assert second.evidence[0].spans[0].start_line == 3
    assert result.gaps == []
    assert result.follow_up_questions == []


def test_questions_are_skipped():
    result = mine_requirements("Should we support SSO? We must support SSO.")
    assert [r.text for r in result.requirements] == ["We must support SSO."]


def test_nothing_mined():
    result = mine_requirements("")
    assert result.requirements == []
    assert result.gaps == [NO_REQUIREMENTS_GAP]
    assert result.follow_up_questions == list(NO_REQUIREMENTS_QUESTIONS)


def test_split_sentences_collapses_whitespace():
    assert split_sentences("One  thing.   Two\tthings!  ") == ["One thing.", "Two things!"]


def test_clean_requirement_text():
    assert clean_requirement_text("Priya (QA Lead): okay, we need   retries") == "we need retries"
    assert clean_requirement_text("Well, admins must approve") == "admins must approve"


def test_meeting_meta():
    assert is_meeting_meta("Today's goal is to agree on search")
    assert is_meeting_meta("Let's discuss what we need")
    assert not is_meeting_meta("The goal must be clear")
