# tests/conftest.py
"""Shared fixtures for the Scrivener test suite."""

from __future__ import annotations

import logging

import pytest

from scrivener.models import Evidence, MinedRequirement, SourceSpan

SAMPLE_NOTES = "\n".join(
    [
        "Meeting notes - ticket search",
        "Decision: Use stdio as default transport.",
        "Action item: Alex to draft the search API.",
        "Risk - search index may lag behind writes.",
        "Waiting on: security review sign-off.",
        "Question: do we need SSO for admins?",
        "",
        "As a support agent, I want to add internal notes so that I can share context.",
        "AC: notes are hidden from customers",
        "- notes are saved with the ticket",
        "",
        "As an admin I want to export audit logs",
        "",
        "Feature: Ticket search",
        "  Agents search tickets by keyword.",
        "",
        "  @smoke",
        "  Scenario: Search by keyword",
        '    Given a ticket titled "Login broken"',
        '    When the agent searches for "login"',
        "    Then the ticket appears in the results",
        "    And the result shows the ticket status",
    ]
)

PLAIN_TRANSCRIPT = "\n".join(
    [
        "Jordan (Product Owner): Thanks for joining, we need to keep this short.",
        "Sam: So, support agents need to add internal notes that customers cannot see. "
        "Should everyone see the same data?",
        "Alex: Search results must show within 2 seconds!",
        "We talked about the roadmap.",
    ]
)


@pytest.fixture
def sample_notes() -> str:
    return SAMPLE_NOTES


@pytest.fixture
def plain_transcript() -> str:
    return PLAIN_TRANSCRIPT


def make_requirement(text: str, line: int = 1) -> MinedRequirement:
    span = SourceSpan(start_line=line, end_line=line)
    return MinedRequirement(text=text, evidence=[Evidence(quote=text, spans=[span])])


@pytest.fixture
def requirement():
    """Factory building a single-line requirement from plain text."""
    return make_requirement


@pytest.fixture
def restore_root_logging():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in list(root.handlers):
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


@pytest.fixture
def restore_config():
    """Put the global configuration sections back after a reload."""
    from scrivener.config import ScrivenerConfig, config

    saved = {name: getattr(config, name) for name in ScrivenerConfig.model_fields}
    yield config
    for name, section in saved.items():
        setattr(config, name, section)
