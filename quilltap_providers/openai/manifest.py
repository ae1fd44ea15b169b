"""Plugin manifest for the OpenAI provider."""

from __future__ import annotations

from ..config.defaults import OPENAI_DEFAULT_BASE_URL

OPENAI_IMAGE_MIME_TYPES = ["image/jpeg", "image/png", "image/gif", "image/webp"]

MANIFEST = {
    "name": "qtap-plugin-openai",
    "title": "OpenAI Provider",
    "description": "OpenAI GPT chat models with vision input, tool calling, web search and DALL-E image generation.",
    "version": "1.0.0",
    "author": {"name": "Quilltap"},
    "license": "MIT",
    "compatibility": {"quilltapVersion": ">=1.0.0"},
    "capabilities": ["LLM_PROVIDER", "IMAGE_PROVIDER"],
    "category": "PROVIDER",
    "keywords": ["openai", "gpt", "dall-e"],
    "enabledByDefault": True,
    "permissions": {"network": ["api.openai.com"]},
    "providerConfig": {
        "providerName": "OPENAI",
        "displayName": "OpenAI",
        "description": "OpenAI GPT models including GPT-4o and DALL-E image generation",
        "abbreviation": "OAI",
        "colors": {"bg": "bg-green-100", "text": "text-green-800", "icon": "text-green-600"},
        "requiresApiKey": True,
        "requiresBaseUrl": False,
        "apiKeyLabel": "OpenAI API Key",
        "baseUrlDefault": OPENAI_DEFAULT_BASE_URL,
        "capabilities": {"chat": True, "imageGeneration": True, "webSearch": True, "toolCalling": True},
        "attachmentSupport": {
            "supported": True,
            "mimeTypes": OPENAI_IMAGE_MIME_TYPES,
            "description": "Images only (JPEG, PNG, GIF, WebP)",
            "notes": "Images are supported in vision-capable models like GPT-4V and GPT-4o",
        },
    },
}

__all__ = ["MANIFEST", "OPENAI_IMAGE_MIME_TYPES"]
