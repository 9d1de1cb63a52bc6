"""
Built-in provider catalog.

These records seed the registry; persisted edits are overlaid on top of
them by name. Ollama is the enabled provider out of the box.
"""

from typing import List

from codearchitect.core.ai.base import ModelInfo, ModelPricing, ProviderConfig

OLLAMA = "Ollama"
OPENROUTER = "OpenRouter"
OPENAI = "OpenAI"
ANTHROPIC = "Anthropic"


def _m(id: str, name: str, context_length: int, price=None, size=None) -> ModelInfo:
    pricing = ModelPricing(*price) if price else None
    return ModelInfo(id=id, name=name, size=size, context_length=context_length, pricing=pricing)


_OLLAMA_MODELS = [
    _m("qwen2.5:0.5b", "Qwen 2.5 (Fast)", 32768, size="0.5B"),
    _m("codegemma:latest", "CodeGemma", 8192, size="7.3B"),
    _m("llama3.2:3b", "Llama 3.2 3B", 32768, size="3B"),
]

_OPENROUTER_MODELS = [
    # Free tier
    _m("openai/gpt-oss-120b:free", "GPT-OSS 120B (Free)", 32768),
    _m("meta-llama/llama-3.1-8b-instruct:free", "Llama 3.1 8B Instruct (Free)", 131072),
    _m("meta-llama/llama-3.1-70b-instruct:free", "Llama 3.1 70B Instruct (Free)", 131072),
    _m("mistralai/mistral-7b-instruct:free", "Mistral 7B Instruct (Free)", 32768),
    # OpenAI
    _m("openai/gpt-4o", "GPT-4o", 128000, (0.005, 0.015)),
    _m("openai/gpt-4o-mini", "GPT-4o Mini", 128000, (0.00015, 0.0006)),
    _m("openai/gpt-4-turbo", "GPT-4 Turbo", 128000, (0.01, 0.03)),
    _m("openai/gpt-3.5-turbo", "GPT-3.5 Turbo", 16385, (0.0005, 0.0015)),
    # Anthropic
    _m("anthropic/claude-3.5-sonnet", "Claude 3.5 Sonnet", 200000, (0.003, 0.015)),
    _m("anthropic/claude-3-opus", "Claude 3 Opus", 200000, (0.015, 0.075)),
    _m("anthropic/claude-3-haiku", "Claude 3 Haiku", 200000, (0.00025, 0.00125)),
    # Google
    _m("google/gemini-pro-1.5", "Gemini Pro 1.5", 2097152, (0.00125, 0.005)),
    _m("google/gemini-flash-1.5", "Gemini Flash 1.5", 1048576, (0.000075, 0.0003)),
    # Meta / Mistral
    _m("meta-llama/llama-3.1-405b-instruct", "Llama 3.1 405B Instruct", 131072, (0.002, 0.002)),
    _m("meta-llama/llama-3.1-70b-instruct", "Llama 3.1 70B Instruct", 131072, (0.0009, 0.0009)),
    _m("mistralai/mixtral-8x7b-instruct", "Mixtral 8x7B Instruct", 32768, (0.0007, 0.0007)),
    # Cohere
    _m("cohere/command-r-plus", "Command R Plus", 128000, (0.003, 0.015)),
    _m("cohere/command-r", "Command R", 128000, (0.0005, 0.0015)),
]

_OPENAI_MODELS = [
    _m("gpt-4o", "GPT-4o", 128000, (0.005, 0.015)),
    _m("gpt-4o-mini", "GPT-4o Mini", 128000, (0.00015, 0.0006)),
    _m("gpt-3.5-turbo", "GPT-3.5 Turbo", 16385, (0.0005, 0.0015)),
]

_ANTHROPIC_MODELS = [
    _m("claude-3-5-sonnet-20241022", "Claude 3.5 Sonnet", 200000, (0.003, 0.015)),
    _m("claude-3-5-haiku-20241022", "Claude 3.5 Haiku", 200000, (0.0008, 0.004)),
]


def default_providers() -> List[ProviderConfig]:
    """Fresh copies of the built-in provider records, in display order."""
    return [
        ProviderConfig(OLLAMA, "http://localhost:11434", models=list(_OLLAMA_MODELS), enabled=True),
        ProviderConfig(OPENROUTER, "https://openrouter.ai/api/v1", models=list(_OPENROUTER_MODELS)),
        ProviderConfig(OPENAI, "https://api.openai.com/v1", models=list(_OPENAI_MODELS)),
        ProviderConfig(ANTHROPIC, "https://api.anthropic.com/v1", models=list(_ANTHROPIC_MODELS)),
    ]
