"""Shared fixtures for the provider test-suite.

Provides environment isolation, a freshly bootstrapped registry per test and
an in-process vendor wired into the shared HTTP client pool.
"""
from __future__ import annotations

import httpx
import pytest

from quilltap_providers.base.http import close_all_clients, set_transport
from quilltap_providers.bootstrap import bootstrap_registry
from quilltap_providers.registry import ProviderRegistry

from .helpers import MockVendor

_PROVIDER_PREFIXES = ("OPENAI", "OPENAI_COMPATIBLE", "ANTHROPIC", "GOOGLE", "OLLAMA")
_TIMEOUT_VARS = (
    "PT_TIMEOUT_CONNECT_SECONDS",
    "PT_TIMEOUT_HTTP_SECONDS",
    "PT_TIMEOUT_PROBE_SECONDS",
    "PT_TIMEOUT_STREAM_SECONDS",
    "PT_TIMEOUT_OVERALL_SECONDS",
)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    for prefix in _PROVIDER_PREFIXES:
        monkeypatch.delenv(f"{prefix}_MODEL", raising=False)
        monkeypatch.delenv(f"{prefix}_BASE_URL", raising=False)
    for name in _TIMEOUT_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.delenv("PROVIDERS_CONFIG_FILE", raising=False)
    yield


@pytest.fixture()
def registry() -> ProviderRegistry:
    return bootstrap_registry(ProviderRegistry())


@pytest.fixture()
def vendor():
    """A ``MockVendor`` receiving every request made through the client pool."""
    mock = MockVendor()
    set_transport(httpx.MockTransport(mock))
    try:
        yield mock
    finally:
        set_transport(None)
        close_all_clients()
