"""
Base Provider Adapter Interface

Provider data model plus the abstract adapter every LLM backend
implements. Each adapter owns one wire format; the shared streaming
loop lives here so all adapters accumulate text and fire callbacks the
same way.
"""

import logging
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from typing import Any, AsyncGenerator, Callable, Dict, List, Optional, Tuple

import aiohttp

from codearchitect.core.ai.streaming import StreamAccumulator, iter_lines
from codearchitect.core.errors import (
    ProviderHTTPError,
    ProviderNotConfiguredError,
    ProviderUnavailableError,
)

logger = logging.getLogger(__name__)

StreamCallback = Callable[[str], None]

# Shared generation settings: low temperature for deterministic code output
DEFAULT_TEMPERATURE = 0.1
DEFAULT_MAX_TOKENS = 1024


@dataclass(frozen=True)
class ModelPricing:
    """Per-token pricing in USD (per 1K tokens)."""
    input: float
    output: float


@dataclass(frozen=True)
class ModelInfo:
    """One model in a provider's catalog."""
    id: str
    name: str
    size: Optional[str] = None
    context_length: Optional[int] = None
    pricing: Optional[ModelPricing] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"id": self.id, "name": self.name}
        if self.size is not None:
            data["size"] = self.size
        if self.context_length is not None:
            data["contextLength"] = self.context_length
        if self.pricing is not None:
            data["pricing"] = {"input": self.pricing.input, "output": self.pricing.output}
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ModelInfo":
        pricing = data.get("pricing")
        return cls(
            id=str(data["id"]),
            name=str(data.get("name") or data["id"]),
            size=data.get("size"),
            context_length=data.get("contextLength", data.get("context_length")),
            pricing=ModelPricing(float(pricing["input"]), float(pricing["output"]))
            if isinstance(pricing, dict) else None,
        )


@dataclass
class ProviderConfig:
    """Configuration for an AI provider."""
    name: str
    base_url: str
    api_key: Optional[str] = None
    models: List[ModelInfo] = field(default_factory=list)
    enabled: bool = False

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "name": self.name,
            "baseUrl": self.base_url,
            "models": [m.to_dict() for m in self.models],
            "enabled": self.enabled,
        }
        if self.api_key:
            data["apiKey"] = self.api_key
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProviderConfig":
        models = data.get("models") or []
        return cls(
            name=str(data["name"]),
            base_url=str(data.get("baseUrl", data.get("base_url", ""))),
            api_key=data.get("apiKey", data.get("api_key")),
            models=[m if isinstance(m, ModelInfo) else ModelInfo.from_dict(m) for m in models],
            enabled=bool(data.get("enabled", False)),
        )

    def copy(self, **changes: Any) -> "ProviderConfig":
        changes.setdefault("models", list(self.models))
        return replace(self, **changes)


class BaseProviderAdapter(ABC):
    """
    Abstract base class for provider wire adapters.

    Subclasses describe the request (endpoint, headers, payload) and how
    to decode one line of the streamed response; ``generate`` runs the
    shared read-accumulate-callback loop.
    """

    provider_name: str = ""
    timeout: float = 60.0
    requires_credential: bool = True
    api_key_env: Optional[str] = None
    fallback_model: str = ""
    empty_response: str = "No response generated."

    def __init__(self, config: ProviderConfig):
        """
        Initialize the adapter.

        Args:
            config: Provider configuration

        Raises:
            ProviderNotConfiguredError: hosted provider without a credential
        """
        self.config = config
        self.api_key = config.api_key or (os.getenv(self.api_key_env) if self.api_key_env else None)
        self._validate_config()

    def _validate_config(self) -> None:
        """Validate provider configuration."""
        if self.requires_credential and not self.api_key:
            raise ProviderNotConfiguredError(f"{self.config.name} API key not configured")

    @property
    def base_url(self) -> str:
        return self.config.base_url.rstrip("/")

    def resolve_model(self, model_id: Optional[str] = None) -> str:
        if model_id:
            return model_id
        if self.config.models:
            return self.config.models[0].id
        return self.fallback_model

    # ------------------------------------------------------------------
    # Wire format hooks
    # ------------------------------------------------------------------
    @abstractmethod
    def endpoint(self) -> str:
        """URL of the streaming generation endpoint."""
        pass

    @abstractmethod
    def build_headers(self) -> Dict[str, str]:
        pass

    @abstractmethod
    def build_payload(self, prompt: str, system_instruction: str, model: str) -> Dict[str, Any]:
        pass

    @abstractmethod
    def parse_line(self, line: str) -> Tuple[Optional[str], bool]:
        """
        Decode one line of the response stream.

        Returns:
            (delta text or None, stop flag)

        Raises:
            ValueError: the line is not valid JSON (caller skips it)
        """
        pass

    @abstractmethod
    async def health_check(self) -> None:
        """
        Verify the provider is reachable and the credential is accepted.

        Raises:
            ProviderUnavailableError: on any failure
        """
        pass

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------
    def _client_timeout(self) -> aiohttp.ClientTimeout:
        return aiohttp.ClientTimeout(
            total=None, sock_connect=self.timeout, sock_read=self.timeout
        )

    async def open_stream(
        self,
        url: str,
        headers: Dict[str, str],
        payload: Dict[str, Any],
    ) -> AsyncGenerator[bytes, None]:
        """POST ``payload`` and yield raw body chunks as they arrive."""
        async with aiohttp.ClientSession(timeout=self._client_timeout()) as session:
            async with session.post(url, json=payload, headers=headers) as resp:
                if resp.status >= 400:
                    raise ProviderHTTPError(self.config.name, resp.status, resp.reason)
                async for chunk in resp.content.iter_any():
                    yield chunk

    async def _request_json(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        payload: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Small non-streaming request used by health checks."""
        try:
            async with aiohttp.ClientSession(timeout=self._client_timeout()) as session:
                async with session.request(method, url, json=payload, headers=headers) as resp:
                    if resp.status >= 400:
                        raise ProviderUnavailableError(
                            f"{self.config.name} API key invalid or service unavailable ({resp.status})"
                        )
                    return await resp.json(content_type=None)
        except aiohttp.ClientError as e:
            raise ProviderUnavailableError(f"{self.config.name} service not reachable: {e}") from e

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------
    async def generate(
        self,
        prompt: str,
        system_instruction: str,
        on_stream: Optional[StreamCallback] = None,
        model_id: Optional[str] = None,
    ) -> str:
        """
        Stream a completion and return the full text.

        ``on_stream`` receives the accumulated text after every delta,
        in wire order.
        """
        model = self.resolve_model(model_id)
        url = self.endpoint()
        payload = self.build_payload(prompt, system_instruction, model)
        logger.info(f"{self.config.name}: streaming from {url} with model {model}")

        accumulator = StreamAccumulator(on_stream)
        chunks = self.open_stream(url, self.build_headers(), payload)
        lines = iter_lines(chunks)
        try:
            async for line in lines:
                if not line.strip():
                    continue
                try:
                    delta, stop = self.parse_line(line)
                except ValueError:
                    logger.warning(f"{self.config.name}: skipping malformed stream line: {line[:100]}")
                    continue
                if stop:
                    break
                if delta:
                    accumulator.feed(delta)
        finally:
            await lines.aclose()
            await chunks.aclose()

        return accumulator.text or self.empty_response
