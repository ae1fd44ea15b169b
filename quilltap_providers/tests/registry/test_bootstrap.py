"""Bootstrap helpers: registering bundled plugins and listing models."""
from __future__ import annotations

import pytest

from quilltap_providers.base.errors import ProviderNotFoundError
from quilltap_providers.bootstrap import (
    BUILTIN_PLUGINS,
    bootstrap_registry,
    get_provider,
    list_available_models,
)
from quilltap_providers.ollama import OllamaPlugin
from quilltap_providers.registry import ProviderRegistry


def test_bootstrap_creates_registry_when_omitted():
    reg = bootstrap_registry()
    assert reg.is_initialized()  # nosec B101
    assert reg.get_stats().total == len(BUILTIN_PLUGINS)  # nosec B101
    assert reg.get_errors() == []  # nosec B101


def test_bootstrap_with_custom_sources():
    reg = bootstrap_registry(ProviderRegistry(), sources=BUILTIN_PLUGINS[:2])
    assert reg.get_provider_names() == ["ANTHROPIC", "OPENAI"]  # nosec B101


def test_get_provider_applies_base_url(registry):
    plugin = get_provider(registry, "OLLAMA", base_url="http://gpu-box:11434/")
    assert isinstance(plugin, OllamaPlugin)  # nosec B101
    assert plugin.base_url == "http://gpu-box:11434"  # nosec B101
    with pytest.raises(ProviderNotFoundError):
        get_provider(registry, "NOPE")


def test_list_available_models_unknown_or_disabled_is_empty(registry):
    assert list_available_models(registry, "NOPE", api_key="k") == []  # nosec B101
    registry.set_enabled("OPENAI", False)
    assert list_available_models(registry, "OPENAI", api_key="k") == []  # nosec B101


def test_list_available_models_through_plugin(registry, vendor):
    vendor.json("GET", "/api/tags", {"models": [{"name": "llava:13b"}, {"name": "llama3.2:latest"}]})
    models = list_available_models(registry, "OLLAMA", api_key=None, base_url="http://localhost:11434")
    assert models == ["llama3.2:latest", "llava:13b"]  # nosec B101
