"""
Gemini ``generateContent`` binding over httpx.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import httpx
import structlog

from ..config.config import ModelConfig
from ..exceptions import FormatError, TransportError
from .models import GenerationConfig

logger = structlog.get_logger(__name__)

API_KEY_HEADER = "x-goog-api-key"


def build_request_body(prompt: str, config: GenerationConfig) -> Dict[str, Any]:
    return {
        "contents": [{"parts": [{"text": prompt}]}],
        "generationConfig": config.to_payload(),
    }


def parse_generated_text(data: Any) -> str:
    """Pull ``candidates[0].content.parts[0].text`` out of a response body."""
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError) as e:
        raise FormatError() from e
    if not isinstance(text, str):
        raise FormatError()
    return text


def parse_error_message(response: httpx.Response) -> Optional[str]:
    """Provider-supplied error message of a failed response, if any."""
    try:
        data = response.json()
    except ValueError:
        return None
    error = data.get("error") if isinstance(data, dict) else None
    if isinstance(error, dict) and isinstance(error.get("message"), str) and error["message"]:
        return error["message"]
    return None


class GeminiProvider:
    """Sends one POST per prompt to the Generative Language API."""

    name = "gemini"

    def __init__(self, config: Optional[ModelConfig] = None, client: Optional[httpx.AsyncClient] = None) -> None:
        """
        Args:
            config: Endpoint and model settings. Defaults to ``ModelConfig()``.
            client: Shared client. When omitted a short-lived client is opened per request.
        """
        self.config = config or ModelConfig()
        self._client = client
        self.logger = logger.bind(component="GeminiProvider", model=self.config.model)

    @property
    def endpoint(self) -> str:
        return f"{self.config.base_url}/models/{self.config.model}:generateContent"

    async def generate(self, prompt: str, credential: str, config: GenerationConfig) -> str:
        body = build_request_body(prompt, config)
        headers = {"Content-Type": "application/json", API_KEY_HEADER: credential}

        self.logger.debug("Sending generation request", prompt_length=len(prompt))
        try:
            if self._client is not None:
                response = await self._client.post(self.endpoint, json=body, headers=headers)
            else:
                async with httpx.AsyncClient(timeout=httpx.Timeout(self.config.timeout)) as client:
                    response = await client.post(self.endpoint, json=body, headers=headers)
        except httpx.HTTPError as e:
            message = str(e).replace(credential, "***") if credential else str(e)
            self.logger.warning("Generation request failed", error_type=type(e).__name__, error=message)
            raise TransportError(None, f"Request failed: {message or type(e).__name__}") from e

        if not response.is_success:
            message = parse_error_message(response)
            self.logger.warning("Provider returned an error", status=response.status_code, error=message)
            raise TransportError(response.status_code, message)

        try:
            data = response.json()
        except ValueError as e:
            raise FormatError() from e
        return parse_generated_text(data)
