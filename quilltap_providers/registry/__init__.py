"""Provider registry package: catalog, entry types and configuration checks."""

from .entry import (
    ConfigRequirements,
    PluginSource,
    ProviderFactory,
    RegistrationFailure,
    RegistryEntry,
    RegistryStats,
)
from .provider_registry import ProviderRegistry
from .validation import (
    ConfigValidation,
    ConnectionTestResult,
    check_provider_connection,
    get_default_base_url,
    requires_api_key,
    requires_base_url,
    validate_provider_config,
)

__all__ = [
    "ConfigRequirements",
    "PluginSource",
    "ProviderFactory",
    "RegistrationFailure",
    "RegistryEntry",
    "RegistryStats",
    "ProviderRegistry",
    "ConfigValidation",
    "ConnectionTestResult",
    "get_default_base_url",
    "requires_api_key",
    "requires_base_url",
    "check_provider_connection",
    "validate_provider_config",
]
