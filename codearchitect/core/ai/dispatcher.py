"""
Streaming inference dispatcher.

Top-level entry point for model calls: resolves the active provider,
builds its adapter and streams a response. ``generate_response`` never
raises; every failure comes back as a user-facing string.
"""

import asyncio
import logging
from typing import Optional

from codearchitect.core.ai.base import BaseProviderAdapter, ProviderConfig, StreamCallback
from codearchitect.core.ai.factory import ProviderAdapterFactory
from codearchitect.core.ai.registry import ProviderRegistry
from codearchitect.core.errors import ProviderNotConfiguredError, ProviderUnavailableError

logger = logging.getLogger(__name__)

NO_PROVIDER_MESSAGE = "No AI provider configured. Please check your settings."
TIMEOUT_MESSAGE = "Response timeout. The model may still be loading. Please try again in a moment."


class StreamingDispatcher:
    """Routes generation requests to the registry's active provider."""

    def __init__(self, registry: ProviderRegistry):
        self.registry = registry

    def active_provider(self) -> Optional[ProviderConfig]:
        return self.registry.get_active_provider()

    def _adapter_for(self, provider: ProviderConfig) -> BaseProviderAdapter:
        return ProviderAdapterFactory.create(provider)

    async def generate_response(
        self,
        prompt: str,
        system_instruction: str,
        on_stream: Optional[StreamCallback] = None,
        model_id: Optional[str] = None,
    ) -> str:
        """
        Stream a completion from the active provider.

        Args:
            prompt: User prompt
            system_instruction: System prompt
            on_stream: Called with the accumulated text after every delta
            model_id: Model override (defaults to the provider's first model)

        Returns:
            The generated text, or an explanatory message on failure
        """
        provider = self.registry.get_active_provider()
        if provider is None:
            return NO_PROVIDER_MESSAGE
        if not ProviderAdapterFactory.is_supported(provider.name):
            return f"Provider {provider.name} not yet supported."

        logger.info(f"Using provider {provider.name} with model {model_id or 'default'}")
        try:
            adapter = self._adapter_for(provider)
            return await adapter.generate(prompt, system_instruction, on_stream, model_id)
        except asyncio.TimeoutError:
            logger.warning(f"{provider.name} request timed out")
            return TIMEOUT_MESSAGE
        except Exception as e:
            logger.error(f"AI API error: {e}", exc_info=True)
            return f"Error: {e}. Please check your provider configuration."

    async def check_provider(self, name: Optional[str] = None) -> bool:
        """
        Health-check a provider (the active one by default).

        Raises:
            ProviderNotConfiguredError: No such provider, or missing credential
            ProviderUnavailableError: The provider did not answer correctly
        """
        provider = self.registry.get_provider(name) if name else self.registry.get_active_provider()
        if provider is None:
            raise ProviderNotConfiguredError(
                f"Unknown provider: {name}" if name
                else "No AI provider selected. Please configure a provider in settings."
            )

        adapter = self._adapter_for(provider)
        try:
            await adapter.health_check()
        except asyncio.TimeoutError as e:
            raise ProviderUnavailableError(f"{provider.name} health check timed out") from e
        logger.info(f"{provider.name} health check passed")
        return True
