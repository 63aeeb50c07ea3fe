"""
Error types raised by the extraction and query pipeline.

Every error carries a message fit for display to the end user. The
orchestrator is the only layer that converts them into UI state.
"""

from __future__ import annotations

from typing import Optional


class ArticleLensError(Exception):
    """Base exception for all pipeline errors."""

    default_message = "Unexpected error"

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class ValidationError(ArticleLensError):
    """Raised when a prompt cannot be built from the given input."""

    default_message = "Invalid input"


class AuthError(ArticleLensError):
    """Raised when no API key is available for the provider."""

    default_message = "Please enter your API key"


class TransportError(ArticleLensError):
    """Raised when the provider request does not complete successfully."""

    def __init__(self, status: Optional[int] = None, message: Optional[str] = None) -> None:
        self.status = status
        if not message:
            message = f"HTTP {status}" if status is not None else "Request failed"
        super().__init__(message)


class FormatError(ArticleLensError):
    """Raised when a successful response lacks the generated text."""

    default_message = "Unexpected API response format"


class ExtractionFailure(ArticleLensError):
    """Raised when the document could not be loaded or extracted."""

    default_message = "Could not extract content from page"
