"""
LLMResponse DTO: the result of one buffered round trip.

``raw`` is the untouched vendor payload for diagnostics and for
``parse_tool_calls``; callers must not read vendor fields from it directly.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .attachment_results import AttachmentResults
from .token_usage import TokenUsage


@dataclass
class LLMResponse:
    """Normalized buffered chat response.

    Attributes:
        content: Final assistant text ("" when the model only called tools).
        finish_reason: Vendor finish reason normalized to a string.
        usage: Prompt/completion/total token counts.
        raw: Untouched vendor JSON payload.
        attachment_results: Which attachments were sent and which failed.
    """

    content: str
    finish_reason: str
    usage: TokenUsage = field(default_factory=TokenUsage)
    raw: Optional[Any] = None
    attachment_results: AttachmentResults = field(default_factory=AttachmentResults)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "content": self.content,
            "finish_reason": self.finish_reason,
            "usage": self.usage.to_dict(),
            "attachment_results": self.attachment_results.to_dict(),
        }


__all__ = ["LLMResponse"]
