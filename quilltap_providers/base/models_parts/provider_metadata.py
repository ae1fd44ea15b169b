"""
Provider identity and connection requirements.

Built once from a validated plugin manifest and immutable afterwards. The
``provider_name`` is the registry key the plugin is addressed by.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ProviderColors:
    bg: str = "bg-gray-100"
    text: str = "text-gray-800"
    icon: str = "text-gray-600"


@dataclass(frozen=True)
class ProviderMetadata:
    """Identity, branding and connection requirements of a provider.

    Attributes:
        provider_name: Stable machine name (e.g. ``"OPENAI_COMPATIBLE"``).
        display_name: Human-readable name.
        description: One-line description.
        abbreviation: 2-4 character badge text.
        colors: Branding hints.
        requires_api_key: Whether calls need an API key.
        requires_base_url: Whether the caller must supply a base URL.
        api_key_label: Form label for the key field.
        base_url_label: Form label for the base URL field.
        base_url_default: Default base URL, if the vendor has one.
    """

    provider_name: str
    display_name: str
    description: str = ""
    abbreviation: str = ""
    colors: ProviderColors = ProviderColors()
    requires_api_key: bool = True
    requires_base_url: bool = False
    api_key_label: str = "API Key"
    base_url_label: str = "Base URL"
    base_url_default: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = ["ProviderMetadata", "ProviderColors"]
