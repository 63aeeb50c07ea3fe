"""
Request parameters for text generation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from ..config.config import ModelConfig


@dataclass(slots=True, frozen=True)
class GenerationConfig:
    """Sampling bounds sent with every request."""

    temperature: float = 0.7
    max_output_tokens: int = 2048

    @classmethod
    def from_model_config(cls, config: ModelConfig) -> GenerationConfig:
        return cls(temperature=config.temperature, max_output_tokens=config.max_output_tokens)

    def to_payload(self) -> Dict[str, Any]:
        return {"temperature": self.temperature, "maxOutputTokens": self.max_output_tokens}
