"""Unit tests for provider configuration and timeout resolution.

Covers:
- defaults per provider (case-insensitive lookup)
- merge order: defaults -> PROVIDERS_CONFIG_FILE -> env -> overrides
- JSON or YAML config files; unreadable ones are ignored
- TimeoutConfig env parsing and httpx translation
"""
from __future__ import annotations

import json

from quilltap_providers.base.timeouts import TimeoutConfig, get_timeout_config, to_httpx_timeout
from quilltap_providers.config import get_base_url, get_model, get_provider_config
from quilltap_providers.config.defaults import OLLAMA_DEFAULT_HOST, OPENAI_DEFAULT_MODEL


def test_defaults_are_case_insensitive():
    assert get_model("OPENAI") == OPENAI_DEFAULT_MODEL  # nosec B101
    assert get_base_url("ollama") == OLLAMA_DEFAULT_HOST  # nosec B101
    assert get_provider_config("unknown") == {}  # nosec B101


def test_merge_order(tmp_path, monkeypatch):
    cfg_file = tmp_path / "providers.json"
    cfg_file.write_text(
        json.dumps({"ollama": {"model": "from-file", "base_url": "http://file:11434"}}),
        encoding="utf-8",
    )
    monkeypatch.setenv("PROVIDERS_CONFIG_FILE", str(cfg_file))
    assert get_provider_config("OLLAMA")["model"] == "from-file"  # nosec B101

    monkeypatch.setenv("OLLAMA_MODEL", "from-env")
    cfg = get_provider_config("OLLAMA")
    assert cfg["model"] == "from-env"  # nosec B101
    assert cfg["base_url"] == "http://file:11434"  # nosec B101

    cfg = get_provider_config("OLLAMA", {"model": "explicit", "base_url": None})
    assert cfg["model"] == "explicit"  # nosec B101
    # None overrides never mask lower layers
    assert cfg["base_url"] == "http://file:11434"  # nosec B101


def test_unparsable_config_file_is_ignored(tmp_path, monkeypatch):
    bad = tmp_path / "broken.json"
    bad.write_text("{not json", encoding="utf-8")
    monkeypatch.setenv("PROVIDERS_CONFIG_FILE", str(bad))
    assert get_model("openai") == OPENAI_DEFAULT_MODEL  # nosec B101


def test_timeout_config_reads_env(monkeypatch):
    monkeypatch.setenv("PT_TIMEOUT_HTTP_SECONDS", "12.5")
    monkeypatch.setenv("PT_TIMEOUT_STREAM_SECONDS", "-3")
    monkeypatch.setenv("PT_TIMEOUT_OVERALL_SECONDS", "90")
    cfg = get_timeout_config()
    assert cfg.http_timeout_seconds == 12.5  # nosec B101
    # non-positive values fall back to the default
    assert cfg.stream_idle_timeout_seconds == TimeoutConfig().stream_idle_timeout_seconds  # nosec B101
    assert cfg.stream_overall_timeout_seconds == 90.0  # nosec B101


def test_timeout_config_is_refreshed_when_env_changes(monkeypatch):
    first = get_timeout_config()
    assert get_timeout_config() is first  # nosec B101
    monkeypatch.setenv("PT_TIMEOUT_PROBE_SECONDS", "3")
    assert get_timeout_config().probe_timeout_seconds == 3.0  # nosec B101


def test_to_httpx_timeout_selects_read_bound():
    cfg = TimeoutConfig(connect_timeout_seconds=2, http_timeout_seconds=30, probe_timeout_seconds=5, stream_idle_timeout_seconds=45)
    assert to_httpx_timeout(cfg).read == 30  # nosec B101
    assert to_httpx_timeout(cfg, kind="probe").read == 5  # nosec B101
    stream = to_httpx_timeout(cfg, kind="stream")
    assert stream.read == 45 and stream.connect == 2  # nosec B101


def test_yaml_config_file(tmp_path, monkeypatch):
    cfg_file = tmp_path / "providers.yaml"
    cfg_file.write_text("google:\n  model: gemini-2.5-pro\n", encoding="utf-8")
    monkeypatch.setenv("PROVIDERS_CONFIG_FILE", str(cfg_file))
    assert get_model("GOOGLE") == "gemini-2.5-pro"  # nosec B101
