"""Collapse a chunk sequence into a single buffered response."""
from __future__ import annotations

from typing import Iterable, List

from ..errors import ErrorCode, ProviderError
from ..models import LLMResponse, StreamChunk, TokenUsage


def accumulate_chunks(chunks: Iterable[StreamChunk], *, provider: str = "unknown", raise_on_error: bool = False) -> LLMResponse:
    """Concatenate deltas and take usage and attachment results from the terminal chunk.

    When the terminal chunk carries an error and ``raise_on_error`` is set, a
    :class:`ProviderError` with the same code is raised instead.
    """
    parts: List[str] = []
    terminal = None
    for chunk in chunks:
        if chunk.done:
            terminal = chunk
            break
        parts.append(chunk.content)
    if terminal is None:
        return LLMResponse(content="".join(parts), finish_reason="incomplete")
    if terminal.error and raise_on_error:
        try:
            code = ErrorCode(terminal.error_code)
        except ValueError:
            code = ErrorCode.UNKNOWN
        message = terminal.error.split(":", 1)[1] if ":" in terminal.error else terminal.error
        raise ProviderError(code=code, message=message, provider=provider)
    response = LLMResponse(
        content="".join(parts),
        finish_reason=terminal.finish_reason or "stop",
        usage=terminal.usage or TokenUsage(),
        raw=terminal.raw_response,
    )
    if terminal.attachment_results is not None:
        response.attachment_results = terminal.attachment_results
    return response


__all__ = ["accumulate_chunks"]
