"""quilltap_providers.config.defaults
===================================

Central place for small, stable default values used across the package.
These defaults can be overridden via environment variables or an external
configuration file (see :func:`quilltap_providers.config.get_provider_config`),
but provide sensible fallbacks for local development and tests.

Only plain constants live here; this module imports nothing from the rest of
the package to avoid circular imports.
"""

from __future__ import annotations

# ---- Provider-specific defaults ----
OPENAI_DEFAULT_MODEL = "gpt-4o-mini"
OPENAI_DEFAULT_BASE_URL = "https://api.openai.com/v1"
OPENAI_DEFAULT_IMAGE_MODEL = "dall-e-3"

# OpenAI-compatible servers (LM Studio, vLLM, llama.cpp ...) usually run locally.
OPENAI_COMPATIBLE_DEFAULT_MODEL = "local-model"
OPENAI_COMPATIBLE_DEFAULT_BASE_URL = "http://localhost:8080/v1"

ANTHROPIC_DEFAULT_MODEL = "claude-sonnet-4-5-20250929"
ANTHROPIC_DEFAULT_BASE_URL = "https://api.anthropic.com/v1"
ANTHROPIC_API_VERSION = "2023-06-01"

GOOGLE_DEFAULT_MODEL = "gemini-2.5-flash"
GOOGLE_DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
GOOGLE_DEFAULT_IMAGE_MODEL = "gemini-2.5-flash-image"

OLLAMA_DEFAULT_MODEL = "llama3.2"
OLLAMA_DEFAULT_HOST = "http://localhost:11434"

# ---- Sampling defaults applied when the caller leaves a field unset ----
DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 1000
DEFAULT_TOP_P = 1.0
# Anthropic rejects requests carrying both temperature and top_p; when the
# caller sets neither, temperature is sent with this value.
ANTHROPIC_DEFAULT_TEMPERATURE = 1.0

# ---- Attachment fallback (image description) ----
# Reasoning models spend completion tokens on hidden reasoning before any
# visible text, so the description call raises its budget for them.
REASONING_MODEL_MAX_TOKENS = 4000
REASONING_MODEL_MARKERS = ("o1", "o3", "gpt-5", "reasoning")

IMAGE_DESCRIPTION_PROMPT = (
    "Please describe this image in great detail. Include all visible elements, "
    "colors, composition, mood, and any text or notable features. Be thorough and descriptive."
)

# Phrases that make a "description" look like an error message instead.
DESCRIPTION_ERROR_PHRASES = (
    "error",
    "cannot",
    "unable to",
    "failed to",
    "not support",
    "invalid",
)
# Descriptions shorter than this are treated as failed.
DESCRIPTION_MIN_LENGTH = 20

# ---- Tool formatting ----
TOOL_DESCRIPTION_TRUNCATION_NOTE = " [Note: description truncated due to length limit]"

# ---- Host compatibility ----
HOST_VERSION = "1.7.0"

__all__ = [
    "OPENAI_DEFAULT_MODEL",
    "OPENAI_DEFAULT_BASE_URL",
    "OPENAI_DEFAULT_IMAGE_MODEL",
    "OPENAI_COMPATIBLE_DEFAULT_MODEL",
    "OPENAI_COMPATIBLE_DEFAULT_BASE_URL",
    "ANTHROPIC_DEFAULT_MODEL",
    "ANTHROPIC_DEFAULT_BASE_URL",
    "ANTHROPIC_API_VERSION",
    "GOOGLE_DEFAULT_MODEL",
    "GOOGLE_DEFAULT_BASE_URL",
    "GOOGLE_DEFAULT_IMAGE_MODEL",
    "OLLAMA_DEFAULT_MODEL",
    "OLLAMA_DEFAULT_HOST",
    "DEFAULT_TEMPERATURE",
    "DEFAULT_MAX_TOKENS",
    "DEFAULT_TOP_P",
    "ANTHROPIC_DEFAULT_TEMPERATURE",
    "REASONING_MODEL_MAX_TOKENS",
    "REASONING_MODEL_MARKERS",
    "IMAGE_DESCRIPTION_PROMPT",
    "DESCRIPTION_ERROR_PHRASES",
    "DESCRIPTION_MIN_LENGTH",
    "TOOL_DESCRIPTION_TRUNCATION_NOTE",
    "HOST_VERSION",
]
