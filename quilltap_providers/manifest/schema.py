"""
Pydantic models for plugin manifests.

Purpose
-------
Structural validation of an untrusted manifest document: field types, string
formats (name, semver, MIME types, URLs), enum membership and per-object
constraints. Models accept the camelCase keys used in manifest JSON and the
snake_case field names alike, and reject unknown keys.

Rules that relate one part of the manifest to another (a provider capability
requires ``providerConfig``, ``defaultConfig`` must match ``configSchema``)
live in :mod:`quilltap_providers.manifest.rules` so that every violation is
reported with its own field path instead of one opaque model error.
"""

from __future__ import annotations

import re
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from .capability import PluginCapability

PLUGIN_NAME_PATTERN = r"^qtap-plugin-[a-z0-9-]+$"
SEMVER_PATTERN = r"^\d+\.\d+\.\d+(-[a-zA-Z0-9.-]+)?(\+[a-zA-Z0-9.-]+)?$"
MIN_VERSION_PATTERN = r"^>=?\d+\.\d+\.\d+(-[a-zA-Z0-9.-]+)?$"
MAX_VERSION_PATTERN = r"^<=?\d+\.\d+\.\d+(-[a-zA-Z0-9.-]+)?$"
MIME_TYPE_PATTERN = r"^[A-Za-z0-9][A-Za-z0-9!#$&^_.+-]*/[A-Za-z0-9*][A-Za-z0-9!#$&^_.+*-]*$"
HTTP_URL_PATTERN = r"^https?://[^\s/?#]+[^\s]*$"

MimeType = Annotated[str, Field(pattern=MIME_TYPE_PATTERN)]
ConfigFieldType = Literal["text", "number", "boolean", "select", "textarea", "password", "url", "email"]


class _ManifestModel(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
        populate_by_name=True,
        alias_generator=to_camel,
        frozen=True,
    )


class PluginAuthor(_ManifestModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: Optional[str] = Field(default=None, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    url: Optional[str] = Field(default=None, pattern=HTTP_URL_PATTERN)


class Compatibility(_ManifestModel):
    """Host version bounds, e.g. ``{"quilltapVersion": ">=1.7.0"}``."""

    quilltap_version: str = Field(..., pattern=MIN_VERSION_PATTERN)
    quilltap_max_version: Optional[str] = Field(default=None, pattern=MAX_VERSION_PATTERN)
    node_version: Optional[str] = Field(default=None, pattern=r"^>=?\d+\.\d+\.\d+$")


class ConfigOption(_ManifestModel):
    label: str
    value: Any = None


class ConfigField(_ManifestModel):
    """One entry of a plugin's ``configSchema``.

    Failure Modes:
        ``min`` greater than ``max``, a ``select`` field without options, or a
        ``pattern`` that is not a valid regular expression raise a validation
        error located at this entry.
    """

    key: str = Field(..., pattern=r"^[a-z][a-zA-Z0-9]*$")
    label: str = Field(..., min_length=1, max_length=100)
    type: ConfigFieldType
    default: Any = None
    required: bool = False
    description: Optional[str] = None
    options: Optional[List[ConfigOption]] = None
    pattern: Optional[str] = None
    min: Optional[float] = None
    max: Optional[float] = None

    @model_validator(mode="after")
    def _check_constraints(self) -> "ConfigField":
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ValueError(f"min ({self.min}) must not exceed max ({self.max})")
        if self.type == "select" and not self.options:
            raise ValueError("select fields must declare options")
        if self.pattern is not None:
            try:
                re.compile(self.pattern)
            except re.error as exc:
                raise ValueError(f"pattern is not a valid regular expression: {exc}") from exc
        return self


class Permissions(_ManifestModel):
    file_system: List[str] = Field(default_factory=list)
    network: List[str] = Field(default_factory=list)
    environment: List[str] = Field(default_factory=list)
    database: bool = False
    user_data: bool = False


class ProviderColorsConfig(_ManifestModel):
    bg: str = Field(..., min_length=1)
    text: str = Field(..., min_length=1)
    icon: str = Field(..., min_length=1)


class ProviderCapabilitiesConfig(_ManifestModel):
    chat: bool = True
    image_generation: bool = False
    embeddings: bool = False
    web_search: bool = False
    tool_calling: bool = False


class AttachmentSupportConfig(_ManifestModel):
    supported: bool = False
    mime_types: List[MimeType] = Field(default_factory=list)
    description: Optional[str] = None
    notes: Optional[str] = None


class ProviderConfig(_ManifestModel):
    """Provider identity, branding and connection requirements."""

    provider_name: str = Field(..., pattern=r"^[A-Z][A-Z0-9_]*$")
    display_name: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=1, max_length=500)
    abbreviation: str = Field(..., min_length=2, max_length=4, pattern=r"^[A-Z0-9]+$")
    colors: ProviderColorsConfig
    requires_api_key: bool = True
    requires_base_url: bool = False
    api_key_label: Optional[str] = Field(default=None, min_length=1, max_length=100)
    base_url_label: Optional[str] = Field(default=None, min_length=1, max_length=100)
    base_url_default: Optional[str] = Field(default=None, pattern=HTTP_URL_PATTERN)
    capabilities: ProviderCapabilitiesConfig = Field(default_factory=ProviderCapabilitiesConfig)
    attachment_support: AttachmentSupportConfig = Field(default_factory=AttachmentSupportConfig)


class AuthProviderConfig(_ManifestModel):
    provider_id: str = Field(..., pattern=r"^[a-z][a-z0-9-]*$")
    display_name: str = Field(..., min_length=1, max_length=100)
    required_env_vars: List[str] = Field(..., min_length=1)
    optional_env_vars: List[str] = Field(default_factory=list)
    button_color: Optional[str] = None
    button_text_color: Optional[str] = None
    icon: Optional[str] = None


class PluginManifest(_ManifestModel):
    """Complete, structurally valid plugin manifest.

    Instances are immutable. A ``PluginManifest`` alone does not prove the
    manifest is acceptable; use :func:`validate_manifest`, which also applies
    the dependent-field rules.
    """

    schema_uri: Optional[str] = Field(default=None, alias="$schema")
    name: str = Field(..., pattern=PLUGIN_NAME_PATTERN)
    title: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=1, max_length=500)
    version: str = Field(..., pattern=SEMVER_PATTERN)
    author: Union[str, PluginAuthor]
    license: str = "MIT"
    main: str = "index.js"
    homepage: Optional[str] = Field(default=None, pattern=HTTP_URL_PATTERN)
    icon: Optional[str] = None
    compatibility: Compatibility
    capabilities: List[PluginCapability] = Field(default_factory=list)
    config_schema: List[ConfigField] = Field(default_factory=list)
    default_config: Dict[str, Any] = Field(default_factory=dict)
    provider_config: Optional[ProviderConfig] = None
    auth_provider_config: Optional[AuthProviderConfig] = None
    permissions: Permissions = Field(default_factory=Permissions)
    sandboxed: bool = True
    keywords: List[str] = Field(default_factory=list)
    category: Literal[
        "PROVIDER",
        "THEME",
        "INTEGRATION",
        "UTILITY",
        "ENHANCEMENT",
        "DATABASE",
        "STORAGE",
        "AUTHENTICATION",
        "OTHER",
    ] = "OTHER"
    enabled_by_default: bool = False
    status: Literal["STABLE", "BETA", "ALPHA", "DEPRECATED"] = "STABLE"

    @field_validator("capabilities")
    @classmethod
    def _no_duplicate_capabilities(cls, value: List[PluginCapability]) -> List[PluginCapability]:
        seen = set()
        for cap in value:
            if cap in seen:
                raise ValueError(f"duplicate capability {cap.value}")
            seen.add(cap)
        return value

    @field_validator("config_schema")
    @classmethod
    def _unique_config_keys(cls, value: List[ConfigField]) -> List[ConfigField]:
        keys = [f.key for f in value]
        dupes = sorted({k for k in keys if keys.count(k) > 1})
        if dupes:
            raise ValueError(f"duplicate config keys: {', '.join(dupes)}")
        return value

    def has_capability(self, capability: PluginCapability | str) -> bool:
        return PluginCapability(capability) in self.capabilities

    def to_dict(self) -> Dict[str, Any]:
        """Return the manifest as camelCase JSON-compatible data."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


__all__ = [
    "PLUGIN_NAME_PATTERN",
    "SEMVER_PATTERN",
    "MIME_TYPE_PATTERN",
    "PluginAuthor",
    "Compatibility",
    "ConfigOption",
    "ConfigField",
    "Permissions",
    "ProviderColorsConfig",
    "ProviderCapabilitiesConfig",
    "AttachmentSupportConfig",
    "ProviderConfig",
    "AuthProviderConfig",
    "PluginManifest",
]
