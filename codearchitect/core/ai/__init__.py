"""
AI Provider Abstraction Layer

Unified streaming interface over Ollama, OpenRouter, OpenAI and Anthropic.
Adapters are looked up by provider name.
"""

from codearchitect.core.ai.base import (
    BaseProviderAdapter,
    ModelInfo,
    ModelPricing,
    ProviderConfig,
)
from codearchitect.core.ai.dispatcher import StreamingDispatcher
from codearchitect.core.ai.factory import ProviderAdapterFactory
from codearchitect.core.ai.registry import ProviderRegistry

__all__ = [
    "BaseProviderAdapter",
    "ModelInfo",
    "ModelPricing",
    "ProviderConfig",
    "StreamingDispatcher",
    "ProviderAdapterFactory",
    "ProviderRegistry",
]
