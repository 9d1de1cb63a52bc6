"""
Anthropic Provider Implementation

Messages API with SSE framing. Text arrives in ``content_block_delta``
events; ``message_stop`` ends the stream.
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

ANTHROPIC_VERSION = "2023-06-01"
HEALTH_CHECK_MODEL = "claude-3-5-haiku-20241022"


class AnthropicAdapter(BaseProviderAdapter):
    """Anthropic Messages API adapter."""

    provider_name = "Anthropic"
    api_key_env = "ANTHROPIC_API_KEY"
    fallback_model = "claude-3-5-sonnet-20241022"

    def endpoint(self) -> str:
        return f"{self.base_url}/messages"

    def build_headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "x-api-key": self.api_key or "",
            "anthropic-version": ANTHROPIC_VERSION,
        }

    def build_payload(self, prompt: str, system_instruction: str, model: str) -> Dict[str, Any]:
        return {
            "model": model,
            "max_tokens": DEFAULT_MAX_TOKENS,
            "temperature": DEFAULT_TEMPERATURE,
            "system": system_instruction,
            "messages": [{"role": "user", "content": prompt}],
            "stream": True,
        }

    def parse_line(self, line: str) -> Tuple[Optional[str], bool]:
        data = parse_sse_data(line)
        if data is None:
            return None, False
        if data == SSE_DONE:
            return None, True

        event = json.loads(data)
        if not isinstance(event, dict):
            raise ValueError("stream event is not a JSON object")
        kind = event.get("type")
        if kind == "message_stop":
            return None, True
        if kind == "content_block_delta":
            return (event.get("delta") or {}).get("text"), False
        return None, False

    async def health_check(self) -> None:
        payload = {
            "model": HEALTH_CHECK_MODEL,
            "max_tokens": 1,
            "messages": [{"role": "user", "content": "Hi"}],
        }
        await self._request_json("POST", self.endpoint(), self.build_headers(), payload)
        logger.info("Anthropic connection successful")
