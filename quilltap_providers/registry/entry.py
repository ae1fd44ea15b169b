"""
Registry value types.

``RegistryEntry`` is immutable: toggling ``enabled`` produces a new entry via
:func:`dataclasses.replace`, so a reader holding an entry never observes it
change underneath.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, Optional, Tuple, Union

from ..base.models import AttachmentSupport, ProviderCapabilities, ProviderMetadata
from ..manifest import PluginManifest

# ``factory(base_url=None)`` returns a fresh provider plugin instance.
ProviderFactory = Callable[..., Any]
ManifestInput = Union[PluginManifest, Dict[str, Any]]


@dataclass(frozen=True)
class RegistryEntry:
    """A fully validated, addressable provider.

    Attributes:
        name: Canonical registry key; equals ``manifest.provider_config.provider_name``.
        factory: Callable producing plugin instances.
        manifest: The validated manifest.
        enabled: Whether ``get`` may hand out the factory.
        metadata / capabilities / attachment_support: Descriptors derived
            from the manifest once at registration.
    """

    name: str
    factory: ProviderFactory
    manifest: PluginManifest
    enabled: bool
    metadata: ProviderMetadata
    capabilities: ProviderCapabilities
    attachment_support: AttachmentSupport
    registered_at: datetime = field(default_factory=datetime.now)


@dataclass(frozen=True)
class PluginSource:
    """One item of a bootstrap list: a name, a plugin factory and its raw manifest."""

    name: str
    factory: ProviderFactory
    manifest: ManifestInput


@dataclass(frozen=True)
class RegistrationFailure:
    name: str
    error: str

    def to_dict(self) -> Dict[str, str]:
        return {"provider": self.name, "error": self.error}


@dataclass(frozen=True)
class ConfigRequirements:
    requires_api_key: bool
    requires_base_url: bool
    api_key_label: str
    base_url_label: str
    base_url_default: Optional[str]


@dataclass(frozen=True)
class RegistryStats:
    total: int
    enabled: int
    disabled: int
    errors: int
    initialized: bool
    last_init_time: Optional[datetime]
    providers: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "enabled": self.enabled,
            "disabled": self.disabled,
            "errors": self.errors,
            "initialized": self.initialized,
            "last_init_time": self.last_init_time.isoformat() if self.last_init_time else None,
            "providers": list(self.providers),
        }


__all__ = [
    "ProviderFactory",
    "ManifestInput",
    "RegistryEntry",
    "PluginSource",
    "RegistrationFailure",
    "ConfigRequirements",
    "RegistryStats",
]
