"""quilltap_providers package

Provider abstraction layer for chat, image generation and tool calling
across LLM vendors.

Purpose:
    Give chat logic one uniform surface over heterogeneous vendor APIs.
    Plugins are described by validated manifests, registered on an
    explicitly constructed :class:`ProviderRegistry`, and expose the
    :class:`ProviderPlugin` contract (buffered and streaming chat, image
    generation, key validation, model listing, tool-call translation).

Public API (re-exported):
    - Version: ``__version__``
    - Registry: :class:`ProviderRegistry`, :func:`bootstrap_registry`,
      :func:`get_provider`, :func:`list_available_models`
    - Contract and DTOs: :class:`ProviderPlugin`, :class:`LLMParams`,
      :class:`LLMMessage`, :class:`LLMResponse`, :class:`StreamChunk`
    - Exceptions: :class:`ProviderError`, :class:`ErrorCode`
    - Negotiation and fallback: :class:`CapabilityNegotiator`,
      :func:`process_attachment`

Notes:
    - There is no module-level registry. Construct one per process (or per
      test) with :func:`bootstrap_registry` and pass it around.
"""

from .attachments import AttachmentProcessingResult, process_attachment, process_attachments
from .base.cancellation import CancellationToken
from .base.errors import ErrorCode, ProviderError
from .base.models import FileAttachment, LLMMessage, LLMParams, LLMResponse, StreamChunk, ToolCallRequest
from .bootstrap import BUILTIN_PLUGINS, bootstrap_registry, get_provider, list_available_models
from .capabilities import CapabilityNegotiator
from .manifest import validate_manifest
from .plugins import ProviderPlugin
from .registry import PluginSource, ProviderRegistry

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Exceptions
    "ProviderError",
    "ErrorCode",
    # Registry
    "ProviderRegistry",
    "PluginSource",
    "BUILTIN_PLUGINS",
    "bootstrap_registry",
    "get_provider",
    "list_available_models",
    "validate_manifest",
    # Contract
    "ProviderPlugin",
    "CancellationToken",
    "FileAttachment",
    "LLMMessage",
    "LLMParams",
    "LLMResponse",
    "StreamChunk",
    "ToolCallRequest",
    # Negotiation / fallback
    "CapabilityNegotiator",
    "AttachmentProcessingResult",
    "process_attachment",
    "process_attachments",
]
