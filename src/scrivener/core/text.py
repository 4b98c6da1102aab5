# src/scrivener/core/text.py
"""Line normalization shared by every extractor and the requirement miner.

Line numbers are 1-based everywhere outside this module: index ``i`` of
:func:`to_lines` is line ``i + 1``.
"""

from __future__ import annotations

from scrivener.models.spans import SourceSpan


def to_lines(text: str) -> list[str]:
    """Normalize CRLF and lone CR line endings to LF and split into lines."""
    return text.replace("\r\n", "\n").replace("\r", "\n").split("\n")


def line_count(text: str) -> int:
    return len(to_lines(text))


def is_blank(line: str) -> bool:
    return not line.strip()


def span_for_line(line_number: int) -> SourceSpan:
    return SourceSpan(start_line=line_number, end_line=line_number)


def span_for_range(start_line: int, end_line: int) -> SourceSpan:
    return SourceSpan(start_line=start_line, end_line=end_line)


__all__ = ["to_lines", "line_count", "is_blank", "span_for_line", "span_for_range"]
