"""
OpenAI-compatible Provider Implementation

OpenAI and OpenRouter share the chat-completions wire format: a Bearer
token, SSE ``data:`` lines with the delta at ``choices[0].delta.content``
and a literal ``[DONE]`` terminator.
"""

import json
import logging
from typing import Any, Dict, Optional, Tuple

from codearchitect.core.ai.base import (
    DEFAULT_MAX_TOKENS,
    DEFAULT_TEMPERATURE,
    BaseProviderAdapter,
)
from codearchitect.core.ai.streaming import SSE_DONE, parse_sse_data

logger = logging.getLogger(__name__)


class OpenAIAdapter(BaseProviderAdapter):
    """OpenAI chat-completions adapter."""

    provider_name = "OpenAI"
    api_key_env = "OPENAI_API_KEY"
    fallback_model = "gpt-4o-mini"

    def endpoint(self) -> str:
        return f"{self.base_url}/chat/completions"

    def build_headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

    def build_payload(self, prompt: str, system_instruction: str, model: str) -> Dict[str, Any]:
        return {
            "model": model,
            "messages": [
                {"role": "system", "content": system_instruction},
                {"role": "user", "content": prompt},
            ],
            "stream": True,
            "temperature": DEFAULT_TEMPERATURE,
            "max_tokens": DEFAULT_MAX_TOKENS,
        }

    def parse_line(self, line: str) -> Tuple[Optional[str], bool]:
        data = parse_sse_data(line)
        if data is None:
            # SSE comments and event lines carry no delta
            return None, False
        if data == SSE_DONE:
            return None, True

        event = json.loads(data)
        if not isinstance(event, dict):
            raise ValueError("stream event is not a JSON object")
        choices = event.get("choices") or []
        if not choices:
            return None, False
        delta = (choices[0] or {}).get("delta") or {}
        return delta.get("content"), False

    async def health_check(self) -> None:
        await self._request_json("GET", f"{self.base_url}/models", self.build_headers())
        logger.info(f"{self.config.name} connection successful")


class OpenRouterAdapter(OpenAIAdapter):
    """OpenRouter speaks the OpenAI format plus attribution headers."""

    provider_name = "OpenRouter"
    api_key_env = "OPENROUTER_API_KEY"
    fallback_model = "openai/gpt-4o-mini"

    referer = "https://code-architect.local"
    title = "Code Architect"

    def build_headers(self) -> Dict[str, str]:
        headers = super().build_headers()
        headers["HTTP-Referer"] = self.referer
        headers["X-Title"] = self.title
        return headers
