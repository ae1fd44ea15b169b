"""Build the immutable provider descriptors from a validated manifest."""
from __future__ import annotations

from ..base.models import AttachmentSupport, ProviderCapabilities, ProviderColors, ProviderMetadata
from .schema import PluginManifest, ProviderConfig


def _provider_config(manifest: PluginManifest) -> ProviderConfig:
    if manifest.provider_config is None:
        raise ValueError(f"manifest '{manifest.name}' declares no providerConfig")
    return manifest.provider_config


def metadata_from_manifest(manifest: PluginManifest) -> ProviderMetadata:
    cfg = _provider_config(manifest)
    return ProviderMetadata(
        provider_name=cfg.provider_name,
        display_name=cfg.display_name,
        description=cfg.description,
        abbreviation=cfg.abbreviation,
        colors=ProviderColors(bg=cfg.colors.bg, text=cfg.colors.text, icon=cfg.colors.icon),
        requires_api_key=cfg.requires_api_key,
        requires_base_url=cfg.requires_base_url,
        api_key_label=cfg.api_key_label or "API Key",
        base_url_label=cfg.base_url_label or "Base URL",
        base_url_default=cfg.base_url_default,
    )


def capabilities_from_manifest(manifest: PluginManifest) -> ProviderCapabilities:
    caps = _provider_config(manifest).capabilities
    return ProviderCapabilities(
        chat=caps.chat,
        image_generation=caps.image_generation,
        embeddings=caps.embeddings,
        web_search=caps.web_search,
        tool_calling=caps.tool_calling,
    )


def attachment_support_from_manifest(manifest: PluginManifest) -> AttachmentSupport:
    """Return the declared attachment support; MIME types are lower-cased, order kept."""
    support = _provider_config(manifest).attachment_support
    if not support.supported:
        return AttachmentSupport(
            supported=False,
            description=support.description or "No file attachments supported",
            notes=support.notes,
        )
    return AttachmentSupport(
        supported=True,
        mime_types=tuple(m.lower() for m in support.mime_types),
        description=support.description or ", ".join(support.mime_types),
        notes=support.notes,
    )


__all__ = ["metadata_from_manifest", "capabilities_from_manifest", "attachment_support_from_manifest"]
