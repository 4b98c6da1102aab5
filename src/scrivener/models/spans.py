# src/scrivener/models/spans.py
"""Line spans and evidence linking artifacts back to the transcript."""

from __future__ import annotations

from pydantic import Field, model_validator

from .base_model import ScrivenerBaseModel as BaseModel


class SourceSpan(BaseModel):
    """A 1-based, inclusive range of normalized input lines.

    Attributes:
        start_line: First line of the range.
        end_line: Last line of the range, never before ``start_line``.
    """

    start_line: int = Field(..., ge=1, description="Inclusive first line (1-based)")
    end_line: int = Field(..., ge=1, description="Inclusive last line (1-based)")

    @model_validator(mode="after")
    def _check_order(self) -> SourceSpan:
        if self.start_line > self.end_line:
            raise ValueError("start_line must not exceed end_line")
        return self


class Evidence(BaseModel):
    """A quoted sentence plus the span(s) it was read from."""

    quote: str = Field(..., description="Original, uncleaned sentence")
    spans: list[SourceSpan] = Field(..., min_length=1)


__all__ = ["SourceSpan", "Evidence"]
