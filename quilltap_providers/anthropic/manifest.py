"""Plugin manifest for the Anthropic provider."""

from __future__ import annotations

from ..config.defaults import ANTHROPIC_DEFAULT_BASE_URL

ANTHROPIC_MIME_TYPES = ["image/jpeg", "image/png", "image/gif", "image/webp", "application/pdf"]

MANIFEST = {
    "name": "qtap-plugin-anthropic",
    "title": "Anthropic Provider",
    "description": "Anthropic Claude chat models with image and PDF input and tool use.",
    "version": "1.0.0",
    "author": {"name": "Quilltap"},
    "license": "MIT",
    "compatibility": {"quilltapVersion": ">=1.0.0"},
    "capabilities": ["LLM_PROVIDER"],
    "category": "PROVIDER",
    "keywords": ["anthropic", "claude"],
    "enabledByDefault": True,
    "permissions": {"network": ["api.anthropic.com"]},
    "providerConfig": {
        "providerName": "ANTHROPIC",
        "displayName": "Anthropic",
        "description": "Anthropic Claude models with support for image and PDF analysis",
        "abbreviation": "ANT",
        "colors": {"bg": "bg-purple-100", "text": "text-purple-800", "icon": "text-purple-600"},
        "requiresApiKey": True,
        "requiresBaseUrl": False,
        "apiKeyLabel": "Anthropic API Key",
        "baseUrlDefault": ANTHROPIC_DEFAULT_BASE_URL,
        "capabilities": {"chat": True, "toolCalling": True},
        "attachmentSupport": {
            "supported": True,
            "mimeTypes": ANTHROPIC_MIME_TYPES,
            "description": "Images (JPEG, PNG, GIF, WebP) and PDFs",
            "notes": "PDFs are sent as document blocks; images as base64 image blocks",
        },
    },
}

__all__ = ["MANIFEST", "ANTHROPIC_MIME_TYPES"]
