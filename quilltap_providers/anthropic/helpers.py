"""Anthropic Messages API helpers.

Pure functions for request shaping and stream-event translation, kept apart
from ``client.py`` so they can be tested without HTTP.

Stream events (SSE, ``event:`` names mirror ``data.type``):
    ``message_start``       message id, model, ``usage.input_tokens``
    ``content_block_start`` a new text or ``tool_use`` block
    ``content_block_delta`` ``text_delta`` text or ``input_json_delta`` fragments
    ``message_delta``       ``usage.output_tokens`` and ``stop_reason``
    ``message_stop``        end of message
    ``error``               vendor error mid-stream; ends the stream with an error terminal
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..base.errors import ErrorCode
from ..base.models import LLMParams
from ..base.streaming import StreamState
from ..config.defaults import ANTHROPIC_DEFAULT_TEMPERATURE, DEFAULT_MAX_TOKENS

_STREAM_ERROR_CODES = {
    "overloaded_error": ErrorCode.UNAVAILABLE,
    "rate_limit_error": ErrorCode.RATE_LIMIT,
    "authentication_error": ErrorCode.AUTH,
    "invalid_request_error": ErrorCode.VALIDATION,
    "api_error": ErrorCode.SERVER_ERROR,
}


def attachment_block(mime_type: str, data: str) -> Dict[str, Any]:
    """PDFs become ``document`` blocks, everything else ``image`` blocks."""
    block_type = "document" if mime_type == "application/pdf" else "image"
    return {"type": block_type, "source": {"type": "base64", "media_type": mime_type, "data": data}}


def sampling_fields(params: LLMParams) -> Dict[str, Any]:
    """Temperature or top_p, never both; temperature 1.0 when neither is set."""
    out: Dict[str, Any] = {"max_tokens": params.max_tokens if params.max_tokens is not None else DEFAULT_MAX_TOKENS}
    if params.temperature is not None:
        out["temperature"] = params.temperature
    elif params.top_p is not None:
        out["top_p"] = params.top_p
    else:
        out["temperature"] = ANTHROPIC_DEFAULT_TEMPERATURE
    return out


def response_text(data: Dict[str, Any]) -> str:
    """Concatenate the text blocks of a buffered response."""
    return "".join(
        block.get("text") or ""
        for block in data.get("content") or []
        if isinstance(block, dict) and block.get("type") == "text"
    )


def _message(state: StreamState) -> Dict[str, Any]:
    return state.vendor.setdefault(
        "raw_response",
        {"id": None, "type": "message", "role": "assistant", "content": [], "model": None, "stop_reason": None, "usage": {}},
    )


def _block(message: Dict[str, Any], index: int) -> Dict[str, Any]:
    blocks: List[Dict[str, Any]] = message["content"]
    while len(blocks) <= index:
        blocks.append({"type": "text", "text": ""})
    return blocks[index]


def translate_stream_event(event: Dict[str, Any], state: StreamState) -> Optional[str]:
    """Map one decoded SSE event to a text delta, recording usage on ``state``.

    ``tool_use`` blocks are rebuilt on ``state.vendor["raw_response"]`` with
    their ``input`` JSON fragments concatenated, so the terminal chunk can be
    handed to ``parse_tool_calls``.
    """
    data = event["data"]
    kind = data.get("type") or event.get("event")
    message = _message(state)
    if kind == "message_start":
        info = data.get("message") or {}
        state.response_id = info.get("id")
        state.prompt_tokens = (info.get("usage") or {}).get("input_tokens")
        message["id"] = info.get("id")
        message["model"] = info.get("model")
        return None
    if kind == "content_block_start":
        block = dict(data.get("content_block") or {})
        if block.get("type") == "tool_use":
            block["input"] = ""
        _block(message, data.get("index") or 0).update(block)
        return None
    if kind == "content_block_delta":
        delta = data.get("delta") or {}
        block = _block(message, data.get("index") or 0)
        if delta.get("type") == "text_delta":
            text = delta.get("text") or ""
            block["text"] = (block.get("text") or "") + text
            return text or None
        if delta.get("type") == "input_json_delta":
            block["input"] = (block.get("input") or "") + (delta.get("partial_json") or "")
        return None
    if kind == "message_delta":
        state.completion_tokens = (data.get("usage") or {}).get("output_tokens")
        stop = (data.get("delta") or {}).get("stop_reason")
        if stop:
            state.finish_reason = stop
            message["stop_reason"] = stop
        return None
    if kind == "message_stop":
        message["usage"] = {"input_tokens": state.prompt_tokens or 0, "output_tokens": state.completion_tokens or 0}
        state.finished = True
        return None
    if kind == "error":
        err = data.get("error") or {}
        code = _STREAM_ERROR_CODES.get(err.get("type"), ErrorCode.SERVER_ERROR)
        state.vendor["stream_error"] = f"{code.value}:{err.get('message') or err.get('type') or 'stream error'}"
        state.finished = True
    return None


__all__ = ["attachment_block", "sampling_fields", "response_text", "translate_stream_event"]
