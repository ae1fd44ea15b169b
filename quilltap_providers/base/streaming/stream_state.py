"""Mutable per-stream accumulator shared between the adapter and a vendor translator."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ..models import TokenUsage


@dataclass
class StreamState:
    """Values a translator collects while events flow.

    Vendors report usage and finish reasons on different events (OpenAI on
    the last chunk, Anthropic split across ``message_start`` and
    ``message_delta``, Ollama on the ``done`` line); translators record what
    they see here and the adapter reads it when it builds the terminal chunk.
    A translator that assembles a whole-response payload (for tool calls
    streamed as fragments) stores it under ``vendor["raw_response"]``; it
    becomes the terminal chunk's ``raw_response``. An error reported by the
    vendor inside the stream is stored as ``vendor["stream_error"]``
    (``"<code>:<message>"``) together with ``finished``.
    """

    prompt_tokens: Optional[int] = None
    completion_tokens: Optional[int] = None
    total_tokens: Optional[int] = None
    finish_reason: Optional[str] = None
    response_id: Optional[str] = None
    last_event: Optional[Any] = None
    finished: bool = False
    emitted: int = 0
    text_length: int = 0
    vendor: Dict[str, Any] = field(default_factory=dict)

    def usage(self) -> TokenUsage:
        return TokenUsage.of(self.prompt_tokens, self.completion_tokens, self.total_tokens)


__all__ = ["StreamState"]
