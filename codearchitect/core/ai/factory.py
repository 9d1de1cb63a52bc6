"""
Provider Adapter Factory

Adapter lookup table keyed by provider name. Supporting a new provider
means registering one adapter class.
"""

import logging
from typing import Dict, List, Type

from codearchitect.core.ai.anthropic_provider import AnthropicAdapter
from codearchitect.core.ai.base import BaseProviderAdapter, ProviderConfig
from codearchitect.core.ai.catalog import ANTHROPIC, OLLAMA, OPENAI, OPENROUTER
from codearchitect.core.ai.ollama_provider import OllamaAdapter
from codearchitect.core.ai.openai_provider import OpenAIAdapter, OpenRouterAdapter

logger = logging.getLogger(__name__)


class ProviderAdapterFactory:
    """
    Factory for creating provider adapters.

    Supports:
    - Dynamic adapter registration
    - Creation from a ProviderConfig by provider name
    """

    _adapters: Dict[str, Type[BaseProviderAdapter]] = {
        OLLAMA: OllamaAdapter,
        OPENROUTER: OpenRouterAdapter,
        OPENAI: OpenAIAdapter,
        ANTHROPIC: AnthropicAdapter,
    }

    @classmethod
    def register_adapter(cls, provider_name: str, adapter_class: Type[BaseProviderAdapter]) -> None:
        """
        Register an adapter for a provider name.

        Args:
            provider_name: Name used in ProviderConfig.name
            adapter_class: Class implementing BaseProviderAdapter
        """
        cls._adapters[provider_name] = adapter_class
        logger.info(f"Registered adapter: {provider_name}")

    @classmethod
    def is_supported(cls, provider_name: str) -> bool:
        return provider_name in cls._adapters

    @classmethod
    def create(cls, config: ProviderConfig) -> BaseProviderAdapter:
        """
        Create an adapter for ``config``.

        Raises:
            ValueError: If no adapter is registered for the provider name
            ProviderNotConfiguredError: If the provider needs a credential and has none
        """
        adapter_class = cls._adapters.get(config.name)
        if not adapter_class:
            raise ValueError(f"Provider {config.name} not registered")
        return adapter_class(config)

    @classmethod
    def get_supported_providers(cls) -> List[str]:
        return list(cls._adapters.keys())
