"""
StreamChunk DTO.

A stream is a sequence of delta chunks (``done=False``) followed by exactly
one terminal chunk (``done=True``). Only the terminal chunk carries usage and
attachment results; when the stream ended abnormally (timeout, cancellation,
mid-stream transport failure) the terminal chunk also carries
``error="<code>:<message>"``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .attachment_results import AttachmentResults
from .token_usage import TokenUsage


@dataclass
class StreamChunk:
    content: str
    done: bool = False
    usage: Optional[TokenUsage] = None
    attachment_results: Optional[AttachmentResults] = None
    finish_reason: Optional[str] = None
    error: Optional[str] = None
    raw_response: Optional[Any] = None

    @property
    def error_code(self) -> Optional[str]:
        """Return the ``<code>`` prefix of ``error`` (e.g. ``"timeout"``)."""
        if not self.error:
            return None
        return self.error.split(":", 1)[0].strip() or None

    def is_error(self) -> bool:
        return self.error is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "content": self.content,
            "done": self.done,
            "usage": self.usage.to_dict() if self.usage else None,
            "attachment_results": self.attachment_results.to_dict() if self.attachment_results else None,
            "finish_reason": self.finish_reason,
            "error": self.error,
        }


__all__ = ["StreamChunk"]
