"""Plugin manifest for the OpenAI-compatible provider."""

from __future__ import annotations

from ..config.defaults import OPENAI_COMPATIBLE_DEFAULT_BASE_URL

MANIFEST = {
    "name": "qtap-plugin-openai-compatible",
    "title": "OpenAI-Compatible Provider",
    "description": "Chat completions against any server implementing the OpenAI API (LM Studio, vLLM, Text Generation Web UI).",
    "version": "1.0.0",
    "author": {"name": "Quilltap"},
    "license": "MIT",
    "compatibility": {"quilltapVersion": ">=1.0.0"},
    "capabilities": ["LLM_PROVIDER"],
    "category": "PROVIDER",
    "keywords": ["openai-compatible", "local", "lm-studio", "vllm"],
    "enabledByDefault": True,
    "permissions": {"network": ["*"]},
    "providerConfig": {
        "providerName": "OPENAI_COMPATIBLE",
        "displayName": "OpenAI-Compatible",
        "description": "OpenAI-compatible API provider for local and remote LLM services",
        "abbreviation": "OAC",
        "colors": {"bg": "bg-slate-100", "text": "text-slate-800", "icon": "text-slate-600"},
        "requiresApiKey": False,
        "requiresBaseUrl": True,
        "apiKeyLabel": "API Key (optional)",
        "baseUrlLabel": "Base URL",
        "baseUrlDefault": OPENAI_COMPATIBLE_DEFAULT_BASE_URL,
        "capabilities": {"chat": True, "toolCalling": True},
        "attachmentSupport": {
            "supported": False,
            "mimeTypes": [],
            "description": "File attachments are not supported. Attachment support varies by implementation.",
            "notes": "Some compatible implementations may support attachments; this is a conservative default.",
        },
    },
}

__all__ = ["MANIFEST"]
