"""ProviderRegistry unit tests.

Covers:
- every bundled name round-trips to a plugin whose metadata names it
- not-found vs disabled lookups
- manifests are validated before registration; mismatched names rejected
- upsert semantics: re-register keeps the enabled flag, initialize is idempotent
- stats, errors and capability queries
"""
from __future__ import annotations

import copy

import pytest

from quilltap_providers.base.errors import (
    ManifestValidationError,
    ProviderDisabledError,
    ProviderNotFoundError,
)
from quilltap_providers.bootstrap import BUILTIN_PLUGINS
from quilltap_providers.openai import MANIFEST as OPENAI_MANIFEST
from quilltap_providers.registry import PluginSource, ProviderRegistry


class _Dummy:
    def __init__(self, base_url=None):
        self.base_url = base_url


def test_every_bundled_name_round_trips(registry):
    assert registry.get_provider_names() == sorted(s.name for s in BUILTIN_PLUGINS)  # nosec B101
    for name in registry.get_provider_names():
        plugin = registry.create_provider(name)
        assert plugin.metadata.provider_name == name  # nosec B101
        assert registry.get_metadata(name).provider_name == name  # nosec B101


def test_not_found_and_disabled_are_distinct(registry):
    with pytest.raises(ProviderNotFoundError):
        registry.get("MISSING")
    registry.set_enabled("OLLAMA", False)
    with pytest.raises(ProviderDisabledError) as info:
        registry.get("OLLAMA")
    assert info.value.name == "OLLAMA"  # nosec B101
    assert registry.has_provider("OLLAMA") and not registry.is_enabled("OLLAMA")  # nosec B101
    registry.set_enabled("OLLAMA", True)
    assert registry.get("OLLAMA") is not None  # nosec B101


def test_set_enabled_on_unknown_name_raises():
    with pytest.raises(ProviderNotFoundError):
        ProviderRegistry().set_enabled("NOPE", True)


def test_create_provider_passes_base_url():
    reg = ProviderRegistry()
    reg.register("OPENAI", _Dummy, OPENAI_MANIFEST)
    assert reg.create_provider("OPENAI", base_url="https://proxy.test/v1").base_url == "https://proxy.test/v1"  # nosec B101


def test_name_must_match_manifest_provider_name():
    reg = ProviderRegistry()
    with pytest.raises(ManifestValidationError) as info:
        reg.register("OPENAI_TWO", _Dummy, OPENAI_MANIFEST)
    assert [e.path for e in info.value.errors] == ["providerConfig.providerName"]  # nosec B101
    assert not reg.has_provider("OPENAI_TWO")  # nosec B101
    assert [e.name for e in reg.get_errors()] == ["OPENAI_TWO"]  # nosec B101


def test_invalid_manifest_never_enters_catalog():
    bad = copy.deepcopy(OPENAI_MANIFEST)
    bad["version"] = "one"
    reg = ProviderRegistry()
    with pytest.raises(ManifestValidationError):
        reg.register("OPENAI", _Dummy, bad)
    assert reg.get_provider_names() == []  # nosec B101


def test_manifest_without_provider_config_is_rejected():
    theme = {
        "name": "qtap-plugin-theme",
        "title": "Theme",
        "description": "Theme",
        "version": "1.0.0",
        "author": "x",
        "compatibility": {"quilltapVersion": ">=1.0.0"},
        "capabilities": ["THEME"],
    }
    with pytest.raises(ManifestValidationError) as info:
        ProviderRegistry().register("THEME", _Dummy, theme)
    assert info.value.errors[0].path == "providerConfig"  # nosec B101


def test_factory_must_be_callable():
    with pytest.raises(ManifestValidationError) as info:
        ProviderRegistry().register("OPENAI", "not callable", OPENAI_MANIFEST)
    assert info.value.errors[0].path == "factory"  # nosec B101


def test_reregister_keeps_enabled_flag_and_replaces_factory():
    reg = ProviderRegistry()
    reg.register("OPENAI", _Dummy, OPENAI_MANIFEST)
    reg.set_enabled("OPENAI", False)

    class _Other(_Dummy):
        pass

    entry = reg.register("OPENAI", _Other, OPENAI_MANIFEST)
    assert entry.enabled is False  # nosec B101
    assert reg.get_entry("OPENAI").factory is _Other  # nosec B101
    assert reg.register("OPENAI", _Other, OPENAI_MANIFEST, enabled=True).enabled is True  # nosec B101


def test_initialize_is_idempotent(registry):
    before = registry.get_stats()
    again = registry.initialize(BUILTIN_PLUGINS)
    assert again.total == before.total == len(BUILTIN_PLUGINS)  # nosec B101
    assert again.providers == before.providers  # nosec B101
    assert again.initialized and again.errors == 0  # nosec B101


def test_initialize_records_failures_for_that_run_only():
    bad = copy.deepcopy(OPENAI_MANIFEST)
    bad["providerConfig"]["providerName"] = "SOMETHING_ELSE"
    reg = ProviderRegistry()
    stats = reg.initialize([PluginSource("OPENAI", _Dummy, bad), BUILTIN_PLUGINS[1]])
    assert stats.total == 1 and stats.errors == 1  # nosec B101
    assert reg.get_errors()[0].to_dict()["provider"] == "OPENAI"  # nosec B101

    stats = reg.initialize([BUILTIN_PLUGINS[0]])
    assert stats.errors == 0 and reg.get_errors() == []  # nosec B101
    assert stats.total == 2  # nosec B101


def test_stats_and_reset(registry):
    registry.set_enabled("GOOGLE", False)
    stats = registry.get_stats()
    assert (stats.total, stats.enabled, stats.disabled) == (5, 4, 1)  # nosec B101
    assert stats.last_init_time is not None  # nosec B101
    assert stats.to_dict()["providers"] == list(stats.providers)  # nosec B101

    assert registry.unregister("GOOGLE") is True  # nosec B101
    assert registry.unregister("GOOGLE") is False  # nosec B101

    registry.reset()
    stats = registry.get_stats()
    assert stats.total == 0 and not stats.initialized and stats.last_init_time is None  # nosec B101


def test_capability_queries_accept_camel_and_snake_case(registry):
    assert registry.supports_capability("OPENAI", "imageGeneration")  # nosec B101
    assert registry.supports_capability("OPENAI", "image_generation")  # nosec B101
    assert not registry.supports_capability("MISSING", "chat")  # nosec B101
    assert registry.get_providers_by_capability("imageGeneration") == ["GOOGLE", "OPENAI"]  # nosec B101
    assert registry.get_providers_by_capability("webSearch") == ["GOOGLE", "OPENAI"]  # nosec B101

    registry.set_enabled("GOOGLE", False)
    assert registry.get_providers_by_capability("imageGeneration") == ["OPENAI"]  # nosec B101
    assert registry.get_providers_by_capability("imageGeneration", enabled_only=False) == ["GOOGLE", "OPENAI"]  # nosec B101


def test_attachment_and_config_lookups(registry):
    assert registry.get_providers_with_attachment_support() == ["ANTHROPIC", "GOOGLE", "OLLAMA", "OPENAI"]  # nosec B101
    assert registry.get_attachment_support("MISSING") is None  # nosec B101
    req = registry.get_config_requirements("OPENAI_COMPATIBLE")
    assert req.requires_base_url and not req.requires_api_key  # nosec B101
    assert req.base_url_default == "http://localhost:8080/v1"  # nosec B101
    assert [m.provider_name for m in registry.get_all_metadata()] == registry.get_provider_names()  # nosec B101
