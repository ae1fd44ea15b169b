"""Plugin manifest for the Google Gemini provider."""

from __future__ import annotations

from ..config.defaults import GOOGLE_DEFAULT_BASE_URL

GOOGLE_IMAGE_MIME_TYPES = ["image/jpeg", "image/png", "image/gif", "image/webp"]

MANIFEST = {
    "name": "qtap-plugin-google",
    "title": "Google Gemini Provider",
    "description": "Google Gemini chat models with vision input, Google Search grounding and image generation.",
    "version": "1.0.0",
    "author": {"name": "Quilltap"},
    "license": "MIT",
    "compatibility": {"quilltapVersion": ">=1.0.0"},
    "capabilities": ["LLM_PROVIDER", "IMAGE_PROVIDER"],
    "category": "PROVIDER",
    "keywords": ["google", "gemini", "imagen"],
    "enabledByDefault": True,
    "permissions": {"network": ["generativelanguage.googleapis.com"]},
    "providerConfig": {
        "providerName": "GOOGLE",
        "displayName": "Google Gemini",
        "description": "Google Gemini models including text and image generation via Generative AI API",
        "abbreviation": "GGL",
        "colors": {"bg": "bg-blue-100", "text": "text-blue-800", "icon": "text-blue-600"},
        "requiresApiKey": True,
        "requiresBaseUrl": False,
        "apiKeyLabel": "Google Generative AI API Key",
        "baseUrlDefault": GOOGLE_DEFAULT_BASE_URL,
        "capabilities": {"chat": True, "imageGeneration": True, "webSearch": True, "toolCalling": True},
        "attachmentSupport": {
            "supported": True,
            "mimeTypes": GOOGLE_IMAGE_MIME_TYPES,
            "description": "Images only (JPEG, PNG, GIF, WebP)",
            "notes": "Images are supported in Gemini models for vision analysis",
        },
    },
}

__all__ = ["MANIFEST", "GOOGLE_IMAGE_MIME_TYPES"]
