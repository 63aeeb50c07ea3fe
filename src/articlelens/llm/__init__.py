"""Text-generation providers and the single-attempt model client."""

from .client import ModelClient
from .gemini import GeminiProvider
from .models import GenerationConfig
from .protocols import GenerationProvider

__all__ = ["GeminiProvider", "GenerationConfig", "GenerationProvider", "ModelClient"]
