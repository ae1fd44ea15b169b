"""Capability Negotiator.

Answers per-request capability questions (can this provider take this MIME
type, does it call tools, generate images, search the web) from the
registry's descriptors. Every question has a boolean answer: unknown or
disabled providers simply support nothing, so a negative answer routes the
caller to the fallback pipeline rather than to an exception.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Sequence, Union

from ..base.models import FileAttachment
from ..registry import ProviderRegistry
from .attachment_support import supports_mime_type as _table_supports_mime_type

TEXT_LIKE_MIME_TYPES = frozenset(
    {
        "application/json",
        "application/xml",
        "application/x-yaml",
        "application/yaml",
        "text/csv",
        "text/markdown",
    }
)

FEATURES = ("chat", "tool_calling", "streaming", "image_generation", "embeddings", "web_search", "attachments")


def classify_mime_type(mime_type: str) -> str:
    """Return ``"text"``, ``"image"`` or ``"other"`` for fallback routing."""
    base = (mime_type or "").split(";", 1)[0].strip().lower()
    if base.startswith("text/") or base in TEXT_LIKE_MIME_TYPES or base.endswith("+json") or base.endswith("+xml"):
        return "text"
    if base.startswith("image/"):
        return "image"
    return "other"


def _provider_of(target: Union[str, Any]) -> str:
    """Accept a provider name or any object with a ``provider`` attribute (a connection profile)."""
    return target if isinstance(target, str) else getattr(target, "provider", "")


@dataclass
class NegotiationPlan:
    """Attachments split into those sent natively and those needing fallback."""

    native: List[FileAttachment] = field(default_factory=list)
    needs_fallback: List[FileAttachment] = field(default_factory=list)

    @property
    def all_native(self) -> bool:
        return not self.needs_fallback


class CapabilityNegotiator:
    def __init__(self, registry: ProviderRegistry) -> None:
        self._registry = registry

    def supports_mime_type(self, target: Union[str, Any], mime_type: str) -> bool:
        """Native support for ``mime_type`` by ``target`` (a provider name or connection profile)."""
        provider = _provider_of(target)
        if self._registry.has_provider(provider):
            if not self._registry.is_enabled(provider):
                return False
            support = self._registry.get_attachment_support(provider)
            return bool(support and support.accepts(mime_type))
        return _table_supports_mime_type(provider, mime_type)

    def supports_feature(self, target: Union[str, Any], feature: str) -> bool:
        provider = _provider_of(target)
        if not self._registry.is_enabled(provider):
            return False
        if feature == "streaming":
            return True
        if feature == "attachments":
            support = self._registry.get_attachment_support(provider)
            return bool(support and support.supported)
        return self._registry.supports_capability(provider, feature)

    def negotiate_attachments(self, target: Union[str, Any], attachments: Sequence[FileAttachment]) -> NegotiationPlan:
        plan = NegotiationPlan()
        for att in attachments:
            if self.supports_mime_type(target, att.mime_type):
                plan.native.append(att)
            else:
                plan.needs_fallback.append(att)
        return plan


__all__ = ["CapabilityNegotiator", "NegotiationPlan", "classify_mime_type", "FEATURES", "TEXT_LIKE_MIME_TYPES"]
