"""Provider attachment-support lookups.

Answers "which files can this provider take natively?" for UI hints, upload
validation and the fallback pipeline. A registry, when given, is the
authority (its descriptors come from validated manifests); the built-in
table covers the bundled providers when no registry is at hand.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from ..base.models import AttachmentSupport, NO_ATTACHMENTS
from ..registry import ProviderRegistry

MIME_TYPE_CATEGORIES: Dict[str, tuple] = {
    "images": ("image/jpeg", "image/png", "image/gif", "image/webp"),
    "documents": ("application/pdf",),
    "text": ("text/plain", "text/markdown", "text/csv"),
}

BUILTIN_ATTACHMENT_SUPPORT: Dict[str, AttachmentSupport] = {
    "OPENAI": AttachmentSupport(
        supported=True,
        mime_types=("image/jpeg", "image/png", "image/gif", "image/webp"),
        description="Images only (JPEG, PNG, GIF, WebP)",
    ),
    "ANTHROPIC": AttachmentSupport(
        supported=True,
        mime_types=("image/jpeg", "image/png", "image/gif", "image/webp", "application/pdf"),
        description="Images (JPEG, PNG, GIF, WebP) and PDF documents",
    ),
    "GOOGLE": AttachmentSupport(
        supported=True,
        mime_types=("image/jpeg", "image/png", "image/gif", "image/webp"),
        description="Images only (JPEG, PNG, GIF, WebP)",
    ),
    "OLLAMA": AttachmentSupport(
        supported=True,
        mime_types=("image/jpeg", "image/png"),
        description="Images (JPEG, PNG) for multimodal models",
        notes="Only multimodal models such as llava make use of images",
    ),
    "OPENAI_COMPATIBLE": AttachmentSupport(
        supported=False,
        description="No file attachments supported",
        notes="Varies by implementation (LM Studio, vLLM, etc.)",
    ),
}

_EXTENSIONS = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
    "application/pdf": ".pdf",
    "text/plain": ".txt",
    "text/markdown": ".md",
    "text/csv": ".csv",
}


def get_attachment_support(provider: str, registry: Optional[ProviderRegistry] = None) -> AttachmentSupport:
    if registry is not None:
        support = registry.get_attachment_support(provider)
        if support is not None:
            return support
    return BUILTIN_ATTACHMENT_SUPPORT.get(provider, NO_ATTACHMENTS)


def get_supported_mime_types(provider: str, registry: Optional[ProviderRegistry] = None) -> List[str]:
    """Supported MIME types in declared order; ``[]`` when attachments are unsupported."""
    support = get_attachment_support(provider, registry)
    return list(support.mime_types) if support.supported else []


def supports_file_attachments(provider: str, registry: Optional[ProviderRegistry] = None) -> bool:
    return bool(get_supported_mime_types(provider, registry))


def supports_mime_type(provider: str, mime_type: str, registry: Optional[ProviderRegistry] = None) -> bool:
    return get_attachment_support(provider, registry).accepts(mime_type)


def get_supported_file_types(provider: str, registry: Optional[ProviderRegistry] = None) -> Dict[str, List[str]]:
    """Supported types grouped as ``images``, ``documents``, ``text`` and ``all``."""
    types = get_supported_mime_types(provider, registry)
    return {
        "images": [t for t in types if t.startswith("image/")],
        "documents": [t for t in types if t == "application/pdf"],
        "text": [t for t in types if t.startswith("text/")],
        "all": types,
    }


def get_attachment_support_description(provider: str, registry: Optional[ProviderRegistry] = None) -> str:
    """Human-readable summary, e.g. ``"Images (JPEG, PNG), PDF documents"``."""
    groups = get_supported_file_types(provider, registry)
    if not groups["all"]:
        return "No file attachments supported"
    parts: List[str] = []
    if groups["images"]:
        parts.append(f"Images ({', '.join(t[len('image/'):].upper() for t in groups['images'])})")
    if groups["documents"]:
        parts.append("PDF documents")
    if groups["text"]:
        formats = []
        for t in groups["text"]:
            sub = t[len("text/"):]
            formats.append("TXT" if sub == "plain" else sub.upper())
        parts.append(f"Text files ({', '.join(formats)})")
    return ", ".join(parts)


def get_file_extension_for_mime(mime_type: str) -> Optional[str]:
    return _EXTENSIONS.get(mime_type)


__all__ = [
    "MIME_TYPE_CATEGORIES",
    "BUILTIN_ATTACHMENT_SUPPORT",
    "get_attachment_support",
    "get_supported_mime_types",
    "supports_file_attachments",
    "supports_mime_type",
    "get_supported_file_types",
    "get_attachment_support_description",
    "get_file_extension_for_mime",
]
