"""
Normalization of extracted page text before it is used as prompt context.
"""

from __future__ import annotations

import re

MAX_CONTENT_LENGTH = 50_000
TRUNCATION_MARKER = "..."

_WHITESPACE_RUN = re.compile(r"\s+")
_BLANK_LINE_RUN = re.compile(r"\n\s*\n")


def sanitize(raw_text: str, max_length: int = MAX_CONTENT_LENGTH, marker: str = TRUNCATION_MARKER) -> str:
    """Collapse whitespace, trim, and cap the text at ``max_length`` characters.

    Text longer than the ceiling is cut to exactly ``max_length`` characters
    and ``marker`` is appended. Calling it on its own output is a no-op.
    """
    text = _WHITESPACE_RUN.sub(" ", raw_text or "")
    text = _BLANK_LINE_RUN.sub("\n", text)
    text = text.strip()

    if len(text) > max_length:
        text = text[:max_length] + marker
    return text


def count_words(text: str) -> int:
    """Number of whitespace-delimited tokens in ``text``."""
    return len(text.split())
