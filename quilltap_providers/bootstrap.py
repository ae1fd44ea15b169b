"""Startup registration of the bundled provider plugins.

Purpose
-------
Populate a :class:`ProviderRegistry` from an explicit table of plugin
classes and their manifests. There is no filesystem discovery: the set of
bundled providers is exactly ``BUILTIN_PLUGINS``. Hosts that ship extra
plugins pass their own ``PluginSource`` tuple.

Failure semantics
-----------------
- :func:`bootstrap_registry` never raises for a bad plugin; failures are
  recorded on the registry (``get_errors()``).
- :func:`get_provider` raises ``ProviderNotFoundError`` or
  ``ProviderDisabledError``.
- :func:`list_available_models` never raises; unknown or disabled providers
  yield ``[]`` like any other listing failure.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from .anthropic import MANIFEST as ANTHROPIC_MANIFEST
from .anthropic import AnthropicPlugin
from .base.errors import ProviderDisabledError, ProviderNotFoundError
from .base.logging import get_logger, log_event
from .google import MANIFEST as GOOGLE_MANIFEST
from .google import GooglePlugin
from .ollama import MANIFEST as OLLAMA_MANIFEST
from .ollama import OllamaPlugin
from .openai import MANIFEST as OPENAI_MANIFEST
from .openai import OpenAIPlugin
from .openai_compatible import MANIFEST as OPENAI_COMPATIBLE_MANIFEST
from .openai_compatible import OpenAICompatiblePlugin
from .plugins import ProviderPlugin
from .registry import PluginSource, ProviderRegistry

_logger = get_logger("bootstrap")

BUILTIN_PLUGINS = (
    PluginSource("OPENAI", OpenAIPlugin, OPENAI_MANIFEST),
    PluginSource("ANTHROPIC", AnthropicPlugin, ANTHROPIC_MANIFEST),
    PluginSource("GOOGLE", GooglePlugin, GOOGLE_MANIFEST),
    PluginSource("OLLAMA", OllamaPlugin, OLLAMA_MANIFEST),
    PluginSource("OPENAI_COMPATIBLE", OpenAICompatiblePlugin, OPENAI_COMPATIBLE_MANIFEST),
)


def bootstrap_registry(
    registry: Optional[ProviderRegistry] = None,
    sources: Sequence[PluginSource] = BUILTIN_PLUGINS,
) -> ProviderRegistry:
    """Register ``sources`` on ``registry`` (a new one when omitted) and return it.

    Safe to call repeatedly: names are upserted, never duplicated.
    """
    registry = registry if registry is not None else ProviderRegistry()
    registry.initialize(sources)
    return registry


def get_provider(registry: ProviderRegistry, name: str, base_url: Optional[str] = None) -> ProviderPlugin:
    """Instantiate the enabled provider ``name``."""
    return registry.create_provider(name, base_url=base_url)


def list_available_models(
    registry: ProviderRegistry,
    name: str,
    api_key: Optional[str],
    base_url: Optional[str] = None,
) -> List[str]:
    """Model ids offered by ``name`` for ``api_key``; ``[]`` on any failure."""
    try:
        plugin = get_provider(registry, name, base_url)
    except (ProviderNotFoundError, ProviderDisabledError) as exc:
        log_event(_logger, "models.unavailable", provider=name, reason=str(exc), level=logging.WARNING)
        return []
    return plugin.get_available_models(api_key)


__all__ = ["BUILTIN_PLUGINS", "bootstrap_registry", "get_provider", "list_available_models"]
