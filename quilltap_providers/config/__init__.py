"""Unified configuration layer for providers.

Goals
-----
* Centralize defaults (models, base URLs).
* Merge sources in a predictable order:
    1. Built-in defaults
    2. Optional external JSON or YAML config file pointed to by PROVIDERS_CONFIG_FILE
    3. Environment variables (e.g. ``OPENAI_MODEL``, ``OLLAMA_BASE_URL``)
    4. In-code overrides passed to the helper
* Provide a single call site: ``get_provider_config(provider)``.

Credentials are not part of this layer: API keys are supplied by the caller on
every call and never read from the environment or config files here.

External Config File (Optional)
-------------------------------
Structure example::

    {
      "openai": {"model": "gpt-4o"},
      "ollama": {"base_url": "http://gpu-box:11434"}
    }

Public API
----------
* get_provider_config(provider: str, overrides: dict | None = None) -> dict
* get_model(provider: str) -> str | None
* get_base_url(provider: str) -> str | None
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .defaults import (
    ANTHROPIC_DEFAULT_BASE_URL,
    ANTHROPIC_DEFAULT_MODEL,
    GOOGLE_DEFAULT_BASE_URL,
    GOOGLE_DEFAULT_MODEL,
    OLLAMA_DEFAULT_HOST,
    OLLAMA_DEFAULT_MODEL,
    OPENAI_COMPATIBLE_DEFAULT_BASE_URL,
    OPENAI_COMPATIBLE_DEFAULT_MODEL,
    OPENAI_DEFAULT_BASE_URL,
    OPENAI_DEFAULT_MODEL,
)

# -------------------- Defaults --------------------

DEFAULTS: Dict[str, Dict[str, Any]] = {
    "openai": {"model": OPENAI_DEFAULT_MODEL, "base_url": OPENAI_DEFAULT_BASE_URL},
    "openai_compatible": {
        "model": OPENAI_COMPATIBLE_DEFAULT_MODEL,
        "base_url": OPENAI_COMPATIBLE_DEFAULT_BASE_URL,
    },
    "anthropic": {"model": ANTHROPIC_DEFAULT_MODEL, "base_url": ANTHROPIC_DEFAULT_BASE_URL},
    "google": {"model": GOOGLE_DEFAULT_MODEL, "base_url": GOOGLE_DEFAULT_BASE_URL},
    "ollama": {"model": OLLAMA_DEFAULT_MODEL, "base_url": OLLAMA_DEFAULT_HOST},
}


ENV_FIELD_MAP = {
    "model": "MODEL",
    "base_url": "BASE_URL",
}

_FILE_CACHE: Optional[Dict[str, Any]] = None
_FILE_CACHE_PATH: Optional[str] = None


def _load_external_config() -> Dict[str, Any]:
    """Load the JSON or YAML file named by ``PROVIDERS_CONFIG_FILE`` (cached per path).

    A missing or unparsable file yields an empty mapping; configuration is an
    optional layer and must not break provider construction.
    """
    global _FILE_CACHE, _FILE_CACHE_PATH  # noqa: PLW0603 - documented module cache
    path = os.getenv("PROVIDERS_CONFIG_FILE")
    if _FILE_CACHE is not None and _FILE_CACHE_PATH == path:
        return _FILE_CACHE
    data: Dict[str, Any] = {}
    if path and Path(path).is_file():
        try:
            text = Path(path).read_text(encoding="utf-8")
        except OSError:
            text = ""
        try:
            loaded = json.loads(text)
        except ValueError:
            try:
                loaded = yaml.safe_load(text) or {}
            except yaml.YAMLError:
                loaded = {}
        if isinstance(loaded, dict):
            data = loaded
    _FILE_CACHE, _FILE_CACHE_PATH = data, path
    return data


def _env_overrides(provider: str) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    prefix = provider.upper()
    for field, suffix in ENV_FIELD_MAP.items():
        val = os.getenv(f"{prefix}_{suffix}")
        if val:
            out[field] = val
    return out


def get_provider_config(provider: str, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return merged configuration for a provider.

    ``provider`` is matched case-insensitively, so ``"OPENAI_COMPATIBLE"``
    and ``"openai_compatible"`` are the same section.

    Merge order (later wins): defaults -> external config -> env vars -> overrides
    """
    name = (provider or "").lower().strip()
    cfg: Dict[str, Any] = {}

    # 1. Defaults
    cfg.update(DEFAULTS.get(name, {}))

    # 2. External config file section
    file_cfg = _load_external_config().get(name)
    if isinstance(file_cfg, dict):
        cfg.update(file_cfg)

    # 3. Env overrides
    cfg.update(_env_overrides(name))

    # 4. Explicit overrides arg
    if overrides:
        cfg.update({k: v for k, v in overrides.items() if v is not None})

    return cfg


def get_model(provider: str) -> Optional[str]:
    return get_provider_config(provider).get("model")


def get_base_url(provider: str) -> Optional[str]:
    return get_provider_config(provider).get("base_url")


__all__ = [
    "get_provider_config",
    "get_model",
    "get_base_url",
    "DEFAULTS",
]
