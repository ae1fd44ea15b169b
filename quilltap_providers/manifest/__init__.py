"""Plugin manifest validation (public API facade).

A manifest is validated once, before its plugin is registered; nothing that
fails :func:`validate_manifest` ever reaches the registry.
"""

from .capability import PluginCapability, PROVIDER_CAPABILITIES
from .schema import (
    AttachmentSupportConfig,
    AuthProviderConfig,
    Compatibility,
    ConfigField,
    ConfigOption,
    Permissions,
    PluginAuthor,
    PluginManifest,
    ProviderCapabilitiesConfig,
    ProviderColorsConfig,
    ProviderConfig,
)
from .validator import (
    FieldError,
    ManifestValidationResult,
    parse_manifest,
    validate_manifest,
    validate_plugin_config,
)
from .compat import is_compatible, security_warnings
from .descriptors import (
    attachment_support_from_manifest,
    capabilities_from_manifest,
    metadata_from_manifest,
)

__all__ = [
    "PluginCapability",
    "PROVIDER_CAPABILITIES",
    "AttachmentSupportConfig",
    "AuthProviderConfig",
    "Compatibility",
    "ConfigField",
    "ConfigOption",
    "Permissions",
    "PluginAuthor",
    "PluginManifest",
    "ProviderCapabilitiesConfig",
    "ProviderColorsConfig",
    "ProviderConfig",
    "FieldError",
    "ManifestValidationResult",
    "parse_manifest",
    "validate_manifest",
    "validate_plugin_config",
    "is_compatible",
    "security_warnings",
    "attachment_support_from_manifest",
    "capabilities_from_manifest",
    "metadata_from_manifest",
]
