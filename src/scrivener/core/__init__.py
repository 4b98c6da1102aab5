"""Core utilities for Scrivener."""

from .env import get_config, load_env
from .logging import get_logger, init_logging
from .text import is_blank, line_count, span_for_line, span_for_range, to_lines

__all__ = [
    "load_env",
    "get_config",
    "init_logging",
    "get_logger",
    "to_lines",
    "line_count",
    "is_blank",
    "span_for_line",
    "span_for_range",
]
