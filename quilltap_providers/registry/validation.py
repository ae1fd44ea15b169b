"""
Provider configuration validation utilities.

These helpers answer "is this connection configuration usable?" by reading
the requirements a provider declared in its manifest instead of hard-coding
provider names.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from ..base.errors import ProviderDisabledError, ProviderNotFoundError
from ..base.logging import get_logger, log_event
from .provider_registry import ProviderRegistry

logger = get_logger("registry.validation")


@dataclass(frozen=True)
class ConfigValidation:
    valid: bool
    errors: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class ConnectionTestResult:
    valid: bool
    error: Optional[str] = None


def validate_provider_config(
    registry: ProviderRegistry,
    provider: str,
    *,
    api_key: Optional[str] = None,
    base_url: Optional[str] = None,
) -> ConfigValidation:
    """Check ``api_key`` / ``base_url`` against the provider's declared requirements.

    Example:
        ``validate_provider_config(reg, "OLLAMA", base_url="")`` on a provider
        requiring a base URL gives ``errors == ["Base URL is required for OLLAMA"]``.
    """
    requirements = registry.get_config_requirements(provider)
    if requirements is None:
        return ConfigValidation(valid=False, errors=[f"Provider '{provider}' not found"])
    errors: List[str] = []
    if requirements.requires_base_url and not base_url:
        errors.append(f"{requirements.base_url_label} is required for {provider}")
    if requirements.requires_api_key and not api_key:
        errors.append(f"{requirements.api_key_label} is required for {provider}")
    return ConfigValidation(valid=not errors, errors=errors)


def requires_api_key(registry: ProviderRegistry, provider: str) -> bool:
    """Unknown providers are assumed to need a key."""
    requirements = registry.get_config_requirements(provider)
    return requirements.requires_api_key if requirements else True


def requires_base_url(registry: ProviderRegistry, provider: str) -> bool:
    requirements = registry.get_config_requirements(provider)
    return requirements.requires_base_url if requirements else False


def get_default_base_url(registry: ProviderRegistry, provider: str) -> Optional[str]:
    requirements = registry.get_config_requirements(provider)
    return requirements.base_url_default if requirements else None


def check_provider_connection(
    registry: ProviderRegistry,
    provider: str,
    *,
    api_key: Optional[str] = None,
    base_url: Optional[str] = None,
) -> ConnectionTestResult:
    """Validate the configuration, then check it with the plugin's ``validate_api_key``.

    Never raises; every failure becomes ``valid=False`` with a reason.
    """
    check = validate_provider_config(registry, provider, api_key=api_key, base_url=base_url)
    if not check.valid:
        return ConnectionTestResult(valid=False, error=check.errors[0])
    try:
        plugin = registry.create_provider(provider, base_url=base_url)
    except (ProviderNotFoundError, ProviderDisabledError) as exc:
        return ConnectionTestResult(valid=False, error=str(exc))
    ok = plugin.validate_api_key(api_key)
    log_event(logger, "apikey.validate", provider=provider, valid=ok, has_base_url=bool(base_url))
    if ok:
        return ConnectionTestResult(valid=True)
    meta = registry.get_metadata(provider)
    display = meta.display_name if meta else provider
    return ConnectionTestResult(valid=False, error=f"Failed to validate connection to {display}")


__all__ = [
    "ConfigValidation",
    "ConnectionTestResult",
    "validate_provider_config",
    "requires_api_key",
    "requires_base_url",
    "get_default_base_url",
    "check_provider_connection",
]
