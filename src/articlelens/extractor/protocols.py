"""
Protocols for pluggable document extraction strategies.
"""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

from bs4 import BeautifulSoup

from .models import ExtractionResult


@runtime_checkable
class Extractor(Protocol):
    """Document-to-ExtractionResult strategy."""

    name: str

    def extract(self, document: BeautifulSoup | str, url: Optional[str] = None) -> ExtractionResult:
        """Extract the primary content from a parsed document or HTML string.

        Args:
            document: Parsed tree or raw HTML
            url: Address the document was loaded from, copied onto the result

        Returns:
            ExtractionResult with the chosen text, its word count and the title
        """
        ...
