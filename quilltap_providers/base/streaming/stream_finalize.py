"""Finalize stream helper.

Builds the single terminal ``StreamChunk`` of a stream and emits the
consolidated ``stream.end`` / ``stream.error`` log event with metrics.
"""
from __future__ import annotations

import time
from typing import Optional

from ..logging import LogContext, normalized_log_event
from ..models import AttachmentResults, StreamChunk
from .stream_state import StreamState


def finalize_stream(
    *,
    logger,
    ctx: LogContext,
    state: StreamState,
    started_at: float,
    attachment_results: Optional[AttachmentResults] = None,
    error: Optional[str] = None,
    first_token_at: Optional[float] = None,
) -> StreamChunk:
    """Create the terminal chunk (``done=True``) and log stream metrics."""
    error_code = None
    if error and ":" in error:
        error_code = error.split(":", 1)[0].strip() or None
    usage = state.usage()
    now = time.perf_counter()
    normalized_log_event(
        logger,
        "stream.end" if error is None else "stream.error",
        ctx,
        phase="finalize",
        emitted=state.emitted > 0,
        tokens=usage,
        error_code=error_code,
        emitted_count=state.emitted,
        time_to_first_token_ms=(first_token_at - started_at) * 1000.0 if first_token_at is not None else None,
        total_duration_ms=(now - started_at) * 1000.0,
        finish_reason=state.finish_reason,
        error=error,
    )
    finish_reason = state.finish_reason
    if error_code == "cancelled":
        finish_reason = "cancelled"
    elif error is not None and finish_reason is None:
        finish_reason = "error"
    return StreamChunk(
        content="",
        done=True,
        usage=usage,
        attachment_results=attachment_results if attachment_results is not None else AttachmentResults(),
        finish_reason=finish_reason or "stop",
        error=error,
        raw_response=state.vendor.get("raw_response", state.last_event),
    )


__all__ = ["finalize_stream"]
