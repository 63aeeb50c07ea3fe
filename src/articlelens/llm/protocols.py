"""
Protocol for text-generation backends.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from .models import GenerationConfig


@runtime_checkable
class GenerationProvider(Protocol):
    """Turns one prompt into generated text with a single request."""

    name: str

    async def generate(self, prompt: str, credential: str, config: GenerationConfig) -> str:
        """Generate text for ``prompt``.

        Raises:
            TransportError: the request did not complete successfully
            FormatError: the response carried no generated text
        """
        ...
