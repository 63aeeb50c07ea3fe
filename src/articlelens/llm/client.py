"""
Single-attempt client in front of a text-generation provider.
"""

from __future__ import annotations

import time
from typing import Optional

import structlog

from ..config.config import ModelConfig
from ..exceptions import ArticleLensError, AuthError
from ..observability import histogram
from .gemini import GeminiProvider
from .models import GenerationConfig
from .protocols import GenerationProvider

logger = structlog.get_logger(__name__)


class ModelClient:
    """
    Sends prompts to a ``GenerationProvider`` with fixed sampling bounds.

    There are no retries: the first failure is raised to the caller as one
    of ``AuthError``, ``TransportError`` or ``FormatError``.
    """

    def __init__(
        self,
        provider: Optional[GenerationProvider] = None,
        config: Optional[ModelConfig] = None,
    ) -> None:
        self.config = config or ModelConfig()
        self.provider = provider or GeminiProvider(self.config)
        self.generation_config = GenerationConfig.from_model_config(self.config)
        self.logger = logger.bind(component="ModelClient", provider=self.provider.name)

    async def generate(self, prompt: str, credential: str) -> str:
        if not credential or not credential.strip():
            raise AuthError()

        start_time = time.perf_counter()
        try:
            text = await self.provider.generate(prompt, credential.strip(), self.generation_config)
        except ArticleLensError as e:
            self.logger.warning("Generation failed", error=str(e), error_type=type(e).__name__)
            raise
        finally:
            histogram(
                "generation_duration_seconds",
                time.perf_counter() - start_time,
                labels={"model": self.config.model},
            )

        self.logger.info("Generation completed", prompt_length=len(prompt), response_length=len(text))
        return text
