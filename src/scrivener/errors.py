# src/scrivener/errors.py
"""Exception taxonomy for Scrivener.

Transcript text never raises: empty or unrecognised input degrades to empty
collections plus human-readable gaps. Only rule configuration can fail.
"""

from __future__ import annotations


class ScrivenerError(Exception):
    """Base class for all Scrivener errors."""


class RuleConfigError(ScrivenerError):
    """A tenant rule-catalog document could not be used."""


class MalformedPatternError(RuleConfigError, ValueError):
    """A rule pattern failed to compile as a regular expression."""

    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(f"Invalid signal pattern {pattern!r}: {reason}")
        self.pattern = pattern
        self.reason = reason


__all__ = ["ScrivenerError", "RuleConfigError", "MalformedPatternError"]
