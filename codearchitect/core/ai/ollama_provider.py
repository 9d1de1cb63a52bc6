"""
Ollama Provider Implementation

Local inference through Ollama's /api/generate endpoint, which streams
newline-delimited JSON objects carrying a ``response`` delta and a final
``done`` marker.
"""

import json
import logging
from typing import Any, Dict, Optional, Tuple

from codearchitect.core.ai.base import (
    DEFAULT_MAX_TOKENS,
    DEFAULT_TEMPERATURE,
    BaseProviderAdapter,
)
from codearchitect.core.errors import ProviderUnavailableError

logger = logging.getLogger(__name__)


class OllamaAdapter(BaseProviderAdapter):
    """Ollama (local) adapter. No credential needed."""

    provider_name = "Ollama"
    timeout = 30.0
    requires_credential = False
    fallback_model = "qwen2.5:0.5b"
    empty_response = "No response generated. The model may still be loading."

    # Smaller context window keeps local models responsive
    options: Dict[str, Any] = {
        "temperature": DEFAULT_TEMPERATURE,
        "top_p": 0.9,
        "top_k": 40,
        "num_predict": DEFAULT_MAX_TOKENS,
        "num_ctx": 2048,
    }

    def endpoint(self) -> str:
        return f"{self.base_url}/api/generate"

    def build_headers(self) -> Dict[str, str]:
        return {"Content-Type": "application/json"}

    @staticmethod
    def build_prompt(prompt: str, system_instruction: str) -> str:
        """Ollama's generate API takes a single prompt string."""
        return f"{system_instruction}\n\nUser: {prompt}\nAssistant:"

    def build_payload(self, prompt: str, system_instruction: str, model: str) -> Dict[str, Any]:
        return {
            "model": model,
            "prompt": self.build_prompt(prompt, system_instruction),
            "stream": True,
            "options": dict(self.options),
        }

    def parse_line(self, line: str) -> Tuple[Optional[str], bool]:
        data = json.loads(line)
        if not isinstance(data, dict):
            raise ValueError("stream line is not a JSON object")
        if data.get("done"):
            return None, True
        return data.get("response") or "", False

    async def health_check(self) -> None:
        data = await self._request_json(
            "GET", f"{self.base_url}/api/tags", self.build_headers()
        )
        models = (data or {}).get("models") or []
        if not models:
            raise ProviderUnavailableError(
                f"No models available in Ollama. Run: ollama pull {self.resolve_model()}"
            )
        logger.info(f"Ollama connection successful, models available: {len(models)}")
