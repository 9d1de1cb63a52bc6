"""
Tests for the provider registry: catalog defaults, persistence and the
exactly-one-active rule.
"""

import json

import pytest

from codearchitect.core.ai.registry import ProviderRegistry
from codearchitect.services.config_service import ConfigService


def make_registry(tmp_path, saved=None):
    path = tmp_path / "config.json"
    if saved is not None:
        path.write_text(json.dumps(saved), encoding="utf-8")
    return ProviderRegistry(ConfigService(path)), path


def enabled_names(registry):
    return [p.name for p in registry.get_available_providers() if p.enabled]


def test_defaults_in_display_order_with_ollama_active(tmp_path):
    registry, _ = make_registry(tmp_path)

    names = [p.name for p in registry.get_available_providers()]
    assert names == ["Ollama", "OpenRouter", "OpenAI", "Anthropic"]
    assert registry.get_active_provider().name == "Ollama"
    assert registry.get_active_provider().base_url == "http://localhost:11434"
    assert [m.id for m in registry.get_available_models()][:1] == ["qwen2.5:0.5b"]


def test_set_active_provider_enables_exactly_one_and_persists(tmp_path):
    registry, path = make_registry(tmp_path)

    active = registry.set_active_provider("Anthropic")

    assert active.name == "Anthropic"
    assert enabled_names(registry) == ["Anthropic"]

    stored = json.loads(path.read_text(encoding="utf-8"))
    assert stored["providers"]["Anthropic"]["enabled"] is True
    assert stored["providers"]["Ollama"]["enabled"] is False

    reloaded = ProviderRegistry(ConfigService(path))
    assert enabled_names(reloaded) == ["Anthropic"]


def test_unknown_provider_is_rejected(tmp_path):
    registry, _ = make_registry(tmp_path)
    with pytest.raises(ValueError, match="Unknown provider: Nope"):
        registry.set_active_provider("Nope")
    assert enabled_names(registry) == ["Ollama"]


def test_persisted_fields_override_defaults_shallowly(tmp_path):
    saved = {"providers": {"OpenAI": {"apiKey": "sk-saved", "enabled": True}, "Ollama": {"enabled": False}}}
    registry, _ = make_registry(tmp_path, saved)

    openai = registry.get_provider("OpenAI")
    assert openai.api_key == "sk-saved"
    assert openai.base_url == "https://api.openai.com/v1"
    assert [m.id for m in openai.models] == ["gpt-4o", "gpt-4o-mini", "gpt-3.5-turbo"]
    assert registry.get_active_provider().name == "OpenAI"


def test_persisted_choice_wins_over_default_active_provider(tmp_path):
    saved = {"providers": {"OpenAI": {"enabled": True, "apiKey": "k"}}}
    registry, _ = make_registry(tmp_path, saved)

    assert enabled_names(registry) == ["OpenAI"]
    assert registry.get_active_provider().name == "OpenAI"
    assert registry.get_provider("Ollama").enabled is False


def test_reload_keeps_first_of_several_persisted_choices(tmp_path):
    saved = {"providers": {"Anthropic": {"enabled": True}, "OpenRouter": {"enabled": True}}}
    registry, _ = make_registry(tmp_path, saved)

    assert enabled_names(registry) == ["OpenRouter"]


def test_legacy_list_form_is_read(tmp_path):
    saved = {"providers": [{"name": "Anthropic", "apiKey": "ak-legacy"}]}
    registry, _ = make_registry(tmp_path, saved)
    assert registry.get_provider("Anthropic").api_key == "ak-legacy"


def test_extra_persisted_provider_is_appended(tmp_path):
    saved = {"providers": {"LM Studio": {"baseUrl": "http://localhost:1234/v1", "models": [{"id": "local"}]}}}
    registry, _ = make_registry(tmp_path, saved)

    providers = registry.get_available_providers()
    assert providers[-1].name == "LM Studio"
    assert providers[-1].models[0].name == "local"


def test_update_provider_persists_and_keeps_enabled_flag(tmp_path):
    registry, path = make_registry(tmp_path)

    updated = registry.update_provider("OpenAI", api_key="sk-new", enabled=True)

    assert updated.api_key == "sk-new"
    assert updated.enabled is False
    assert ProviderRegistry(ConfigService(path)).get_provider("OpenAI").api_key == "sk-new"

    with pytest.raises(ValueError):
        registry.update_provider("Nope", api_key="x")


def test_returned_records_are_copies():
    registry = ProviderRegistry()
    record = registry.get_provider("Ollama")
    record.enabled = False
    record.models.clear()

    assert registry.get_active_provider().name == "Ollama"
    assert registry.get_provider("Ollama").models
