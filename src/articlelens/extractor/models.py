"""
Data models for extraction results.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class CandidateRegion:
    """A node matched by a content selector during one extraction pass."""

    selector: str
    text: str
    word_count: int
    score: float


@dataclass(slots=True, frozen=True)
class ExtractionResult:
    """Primary readable content of a document."""

    text: str
    word_count: int
    title: str
    url: str | None = None

    def __post_init__(self) -> None:
        """Validate the result."""
        if self.word_count < 0:
            raise ValueError("word_count must not be negative")

    @property
    def is_empty(self) -> bool:
        return not self.text
