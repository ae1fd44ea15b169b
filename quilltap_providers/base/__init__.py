"""
Providers Base Package

Provider-agnostic building blocks shared by the registry, the vendor plugins
and the attachment pipeline:

- Models (DTOs): the uniform request/response/streaming contract
- Errors: normalized error taxonomy and HTTP classification
- Streaming: the adapter every vendor stream runs through
- Cancellation and timeouts for network calls
"""

from .models import (
    AttachmentResults,
    AttachmentSupport,
    FileAttachment,
    LLMMessage,
    LLMParams,
    LLMResponse,
    ProviderCapabilities,
    ProviderMetadata,
    StreamChunk,
    TokenUsage,
    ToolCallRequest,
)
from .errors import ErrorCode, ProviderError
from .timeouts import TimeoutConfig, get_timeout_config
from .cancellation import CancellationToken, CancelledError
from .streaming import (
    BaseStreamingAdapter,
    StreamController,
    accumulate_chunks,
    finalize_stream,
)

__all__ = [
    # Models
    "AttachmentResults",
    "AttachmentSupport",
    "FileAttachment",
    "LLMMessage",
    "LLMParams",
    "LLMResponse",
    "ProviderCapabilities",
    "ProviderMetadata",
    "StreamChunk",
    "TokenUsage",
    "ToolCallRequest",
    # Errors
    "ErrorCode",
    "ProviderError",
    # Timeouts / cancellation
    "TimeoutConfig",
    "get_timeout_config",
    "CancellationToken",
    "CancelledError",
    # Streaming
    "BaseStreamingAdapter",
    "StreamController",
    "accumulate_chunks",
    "finalize_stream",
]
