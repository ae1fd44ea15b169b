"""Plugin manifest validation tests.

Covers:
- bundled manifests are valid
- validate_manifest is pure and total (same verdict and errors, any input)
- structural errors carry camelCase field paths
- dependent-field rules report every violation at once
- parse_manifest raises ManifestValidationError
- user plugin configuration checks against configSchema
"""
from __future__ import annotations

import copy

import pytest

from quilltap_providers.base.errors import ManifestValidationError
from quilltap_providers.bootstrap import BUILTIN_PLUGINS
from quilltap_providers.manifest import (
    PluginCapability,
    PluginManifest,
    parse_manifest,
    validate_manifest,
    validate_plugin_config,
)


def _manifest(**overrides):
    base = {
        "name": "qtap-plugin-acme",
        "title": "Acme Provider",
        "description": "Acme LLMs",
        "version": "1.2.3",
        "author": "Acme Inc.",
        "compatibility": {"quilltapVersion": ">=1.0.0"},
        "capabilities": ["LLM_PROVIDER"],
        "providerConfig": {
            "providerName": "ACME",
            "displayName": "Acme",
            "description": "Acme models",
            "abbreviation": "ACM",
            "colors": {"bg": "bg-red-100", "text": "text-red-800", "icon": "text-red-600"},
            "attachmentSupport": {"supported": True, "mimeTypes": ["image/png"]},
        },
    }
    base.update(overrides)
    return base


def _paths(result):
    return [e.path for e in result.errors]


@pytest.mark.parametrize("source", BUILTIN_PLUGINS, ids=lambda s: s.name)
def test_bundled_manifests_are_valid(source):
    result = validate_manifest(source.manifest)
    assert result.valid, result.errors  # nosec B101
    assert result.manifest.provider_config.provider_name == source.name  # nosec B101


def test_validate_is_pure():
    raw = _manifest(version="not-a-version", capabilities=["LLM_PROVIDER", "AUTH_METHODS"])
    snapshot = copy.deepcopy(raw)
    first = validate_manifest(raw)
    second = validate_manifest(raw)
    assert first.valid is second.valid is False  # nosec B101
    assert first.errors == second.errors  # nosec B101
    assert raw == snapshot  # nosec B101


@pytest.mark.parametrize("garbage", [None, 42, "manifest", ["name"]])
def test_non_mapping_input_is_invalid_not_an_exception(garbage):
    result = validate_manifest(garbage)
    assert result.valid is False  # nosec B101
    assert result.errors[0].path == ""  # nosec B101
    assert "must be an object" in result.errors[0].message  # nosec B101


def test_structural_errors_use_manifest_paths():
    raw = _manifest(name="Acme Plugin", bogusKey=True)
    raw["providerConfig"] = dict(raw["providerConfig"], abbreviation="x")
    result = validate_manifest(raw)
    paths = _paths(result)
    assert "name" in paths  # nosec B101
    assert "bogusKey" in paths  # nosec B101
    assert "providerConfig.abbreviation" in paths  # nosec B101


def test_invalid_mime_type_is_rejected():
    raw = _manifest()
    raw["providerConfig"]["attachmentSupport"] = {"supported": True, "mimeTypes": ["not a mime"]}
    result = validate_manifest(raw)
    assert any(p.startswith("providerConfig.attachmentSupport.mimeTypes") for p in _paths(result))  # nosec B101


def test_provider_capability_requires_provider_config():
    raw = _manifest()
    del raw["providerConfig"]
    result = validate_manifest(raw)
    assert _paths(result) == ["providerConfig"]  # nosec B101
    assert "LLM_PROVIDER" in result.errors[0].message  # nosec B101


def test_dependent_rules_report_every_violation():
    raw = _manifest(
        capabilities=["LLM_PROVIDER", "AUTH_METHODS"],
        compatibility={"quilltapVersion": ">=2.0.0", "quilltapMaxVersion": "<=1.5.0"},
        configSchema=[{"key": "depth", "label": "Depth", "type": "number", "min": 1, "max": 5}],
        defaultConfig={"depth": 9, "unknownKey": 1},
    )
    raw["providerConfig"]["attachmentSupport"] = {"supported": True, "mimeTypes": ["image/png", "IMAGE/PNG"]}
    result = validate_manifest(raw)
    assert result.valid is False  # nosec B101
    assert _paths(result) == [  # nosec B101
        "authProviderConfig",
        "providerConfig.attachmentSupport.mimeTypes",
        "compatibility.quilltapMaxVersion",
        "defaultConfig.depth",
        "defaultConfig.unknownKey",
    ]


def test_attachment_support_flags_must_agree():
    raw = _manifest()
    raw["providerConfig"]["attachmentSupport"] = {"supported": True, "mimeTypes": []}
    assert _paths(validate_manifest(raw)) == ["providerConfig.attachmentSupport.mimeTypes"]  # nosec B101

    raw["providerConfig"]["attachmentSupport"] = {"supported": False, "mimeTypes": ["image/png"]}
    assert _paths(validate_manifest(raw)) == ["providerConfig.attachmentSupport.supported"]  # nosec B101


def test_select_field_needs_options():
    raw = _manifest(configSchema=[{"key": "mode", "label": "Mode", "type": "select"}])
    result = validate_manifest(raw)
    assert result.valid is False  # nosec B101
    assert any("select fields must declare options" in e.message for e in result.errors)  # nosec B101


def test_snake_case_keys_are_accepted():
    raw = {
        "name": "qtap-plugin-theme",
        "title": "Theme",
        "description": "A theme",
        "version": "0.1.0",
        "author": {"name": "Someone", "email": "someone@example.com"},
        "compatibility": {"quilltap_version": ">=1.0.0"},
        "capabilities": ["THEME"],
        "enabled_by_default": True,
    }
    result = validate_manifest(raw)
    assert result.valid, result.errors  # nosec B101
    assert result.manifest.has_capability(PluginCapability.THEME)  # nosec B101
    assert result.manifest.to_dict()["enabledByDefault"] is True  # nosec B101


def test_manifest_instances_are_revalidated():
    valid = parse_manifest(_manifest())
    assert isinstance(valid, PluginManifest)  # nosec B101
    assert validate_manifest(valid).valid is True  # nosec B101

    unchecked = valid.model_copy(update={"name": "bad name"})
    result = validate_manifest(unchecked)
    assert result.valid is False  # nosec B101
    assert _paths(result) == ["name"]  # nosec B101


def test_parse_manifest_raises_with_errors():
    with pytest.raises(ManifestValidationError) as info:
        parse_manifest(_manifest(version="1"))
    assert info.value.plugin == "qtap-plugin-acme"  # nosec B101
    assert [e.path for e in info.value.errors] == ["version"]  # nosec B101
    assert isinstance(info.value, ValueError)  # nosec B101


def test_validate_plugin_config_against_schema():
    manifest = parse_manifest(
        _manifest(
            configSchema=[
                {"key": "endpoint", "label": "Endpoint", "type": "url", "required": True},
                {
                    "key": "tier",
                    "label": "Tier",
                    "type": "select",
                    "options": [{"label": "Free", "value": "free"}, {"label": "Pro", "value": "pro"}],
                },
                {"key": "region", "label": "Region", "type": "text", "pattern": "^[a-z]{2}-[a-z]+$"},
            ]
        )
    )
    assert validate_plugin_config(manifest, {"endpoint": "https://acme.test", "tier": "pro", "region": "eu-west"}) == ()  # nosec B101

    errors = validate_plugin_config(manifest, {"endpoint": "", "tier": "gold", "region": "EU", "extra": 1})
    assert [e.path for e in errors] == ["endpoint", "tier", "region", "extra"]  # nosec B101
    assert errors[0].message == "Endpoint is required"  # nosec B101
