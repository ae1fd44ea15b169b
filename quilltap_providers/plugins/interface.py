"""ProviderPlugin Protocol: the uniform contract every vendor plugin implements.

Callers depend on this Protocol only; vendor field names never cross it.
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, List, Optional, Protocol, Sequence, runtime_checkable

from ..base.cancellation import CancellationToken
from ..base.models import (
    AttachmentSupport,
    ImageGenParams,
    ImageGenResponse,
    LLMParams,
    LLMResponse,
    ProviderCapabilities,
    ProviderMetadata,
    StreamChunk,
    ToolCallRequest,
)


@runtime_checkable
class ProviderPlugin(Protocol):
    """Minimal interface for provider plugins.

    Plugin instances are cheap and hold no per-call state; construct one per
    request or per connection profile.
    """

    @property
    def metadata(self) -> ProviderMetadata: ...

    @property
    def capabilities(self) -> ProviderCapabilities: ...

    @property
    def attachment_support(self) -> AttachmentSupport: ...

    def send_message(self, params: LLMParams, api_key: Optional[str]) -> LLMResponse:
        """One buffered round trip. Transport and auth failures raise ``ProviderError``."""
        ...

    def stream_message(
        self,
        params: LLMParams,
        api_key: Optional[str],
        cancellation_token: Optional[CancellationToken] = None,
    ) -> Iterator[StreamChunk]:
        """Yield deltas then exactly one terminal chunk; closing the iterator releases the connection."""
        ...

    def generate_image(self, params: ImageGenParams, api_key: Optional[str]) -> ImageGenResponse: ...

    def validate_api_key(self, api_key: Optional[str]) -> bool:
        """Cheap probe; never raises."""
        ...

    def get_available_models(self, api_key: Optional[str]) -> List[str]:
        """Sorted model ids; ``[]`` on any failure."""
        ...

    def format_tools(self, tools: Optional[Sequence[Dict[str, Any]]]) -> List[Dict[str, Any]]: ...

    def parse_tool_calls(self, raw: Any) -> List[ToolCallRequest]: ...


__all__ = ["ProviderPlugin"]
