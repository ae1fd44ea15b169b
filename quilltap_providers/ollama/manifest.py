"""Plugin manifest for the Ollama provider."""

from __future__ import annotations

from ..config.defaults import OLLAMA_DEFAULT_HOST

OLLAMA_IMAGE_MIME_TYPES = ["image/jpeg", "image/png"]

MANIFEST = {
    "name": "qtap-plugin-ollama",
    "title": "Ollama Provider",
    "description": "Chat with models served by a local or remote Ollama daemon.",
    "version": "1.0.0",
    "author": {"name": "Quilltap"},
    "license": "MIT",
    "compatibility": {"quilltapVersion": ">=1.0.0"},
    "capabilities": ["LLM_PROVIDER"],
    "category": "PROVIDER",
    "keywords": ["ollama", "local", "offline"],
    "enabledByDefault": True,
    "permissions": {"network": ["localhost"]},
    "providerConfig": {
        "providerName": "OLLAMA",
        "displayName": "Ollama",
        "description": "Local Ollama LLM models for offline AI inference",
        "abbreviation": "OLL",
        "colors": {"bg": "bg-gray-100", "text": "text-gray-800", "icon": "text-gray-600"},
        "requiresApiKey": False,
        "requiresBaseUrl": True,
        "baseUrlLabel": "Ollama Base URL",
        "baseUrlDefault": OLLAMA_DEFAULT_HOST,
        "capabilities": {"chat": True, "toolCalling": True},
        "attachmentSupport": {
            "supported": True,
            "mimeTypes": OLLAMA_IMAGE_MIME_TYPES,
            "description": "Images (JPEG, PNG) for multimodal models",
            "notes": "Images are only understood by multimodal models such as llava or llama3.2-vision",
        },
    },
}

__all__ = ["MANIFEST", "OLLAMA_IMAGE_MIME_TYPES"]
