# src/scrivener/models/base_model.py
"""Shared Pydantic base model with camelCase wire names."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ScrivenerBaseModel(BaseModel):
    """Immutable value object serialized with camelCase keys.

    Attributes are snake_case in Python; ``to_payload`` emits the JSON shape
    callers see (``startLine``, ``acceptanceCriteria``, ``followUpQuestions``).
    Either spelling is accepted on input.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="forbid",
    )

    def to_payload(self) -> dict[str, Any]:
        """Return a JSON-ready dict using wire names and omitting unset optionals."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


__all__ = ["ScrivenerBaseModel"]
