"""
Provider-agnostic domain models (DTOs) public surface.

This module re-exports the one-class-per-file implementations under
``quilltap_providers.base.models_parts``. Vendor-specific field names never
appear in these types; each plugin maps its wire format onto them.
"""

from .models_parts.file_attachment import FileAttachment
from .models_parts.message import LLMMessage, Role
from .models_parts.llm_params import LLMParams
from .models_parts.token_usage import TokenUsage
from .models_parts.attachment_results import AttachmentResults, FailedAttachment
from .models_parts.llm_response import LLMResponse
from .models_parts.stream_chunk import StreamChunk
from .models_parts.tool_call import ToolCallRequest
from .models_parts.image_generation import ImageGenParams, GeneratedImage, ImageGenResponse
from .models_parts.provider_metadata import ProviderMetadata, ProviderColors
from .models_parts.provider_capabilities import ProviderCapabilities
from .models_parts.attachment_support import AttachmentSupport, NO_ATTACHMENTS

__all__ = [
    "FileAttachment",
    "LLMMessage",
    "Role",
    "LLMParams",
    "TokenUsage",
    "AttachmentResults",
    "FailedAttachment",
    "LLMResponse",
    "StreamChunk",
    "ToolCallRequest",
    "ImageGenParams",
    "GeneratedImage",
    "ImageGenResponse",
    "ProviderMetadata",
    "ProviderColors",
    "ProviderCapabilities",
    "AttachmentSupport",
    "NO_ATTACHMENTS",
]
