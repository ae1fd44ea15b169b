"""Capability negotiation and attachment-support lookups."""

from .attachment_support import (
    BUILTIN_ATTACHMENT_SUPPORT,
    MIME_TYPE_CATEGORIES,
    get_attachment_support,
    get_attachment_support_description,
    get_file_extension_for_mime,
    get_supported_file_types,
    get_supported_mime_types,
    supports_file_attachments,
    supports_mime_type,
)
from .negotiator import FEATURES, CapabilityNegotiator, NegotiationPlan, classify_mime_type

__all__ = [
    "BUILTIN_ATTACHMENT_SUPPORT",
    "MIME_TYPE_CATEGORIES",
    "get_attachment_support",
    "get_attachment_support_description",
    "get_file_extension_for_mime",
    "get_supported_file_types",
    "get_supported_mime_types",
    "supports_file_attachments",
    "supports_mime_type",
    "FEATURES",
    "CapabilityNegotiator",
    "NegotiationPlan",
    "classify_mime_type",
]
