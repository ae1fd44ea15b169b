"""Wire decoders for streamed vendor responses.

``iter_sse_events`` understands server-sent events (``event:``/``data:``
lines, blank-line dispatch, the OpenAI ``[DONE]`` sentinel); ``iter_ndjson``
handles newline-delimited JSON (Ollama). Both yield decoded JSON objects and
skip lines that fail to decode after reporting them through ``on_error``, so
one corrupt line never ends an otherwise healthy stream.
"""
from __future__ import annotations

import json
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional

ErrorHook = Callable[[str, Exception], None]

DONE_SENTINEL = "[DONE]"


def _decode(payload: str, on_error: Optional[ErrorHook]) -> Optional[Any]:
    try:
        return json.loads(payload)
    except (ValueError, RecursionError) as exc:
        if on_error is not None:
            on_error(payload, exc)
        return None


def iter_sse_events(lines: Iterable[str], on_error: Optional[ErrorHook] = None) -> Iterator[Dict[str, Any]]:
    """Yield ``{"event": name | None, "data": obj}`` for each SSE message.

    Multi-line ``data:`` fields are joined with newlines per the SSE format.
    Iteration stops at ``data: [DONE]``.
    """
    event_name: Optional[str] = None
    data_lines: List[str] = []

    def _dispatch() -> Optional[Dict[str, Any]]:
        if not data_lines:
            return None
        payload = "\n".join(data_lines)
        obj = _decode(payload, on_error)
        return None if obj is None else {"event": event_name, "data": obj}

    for raw in lines:
        line = raw.rstrip("\r")
        if not line:
            msg = _dispatch()
            event_name, data_lines = None, []
            if msg is not None:
                yield msg
            continue
        if line.startswith(":"):
            continue
        field_name, _, value = line.partition(":")
        value = value[1:] if value.startswith(" ") else value
        if field_name == "event":
            event_name = value
        elif field_name == "data":
            if value.strip() == DONE_SENTINEL:
                return
            data_lines.append(value)
    msg = _dispatch()
    if msg is not None:
        yield msg


def iter_ndjson(lines: Iterable[str], on_error: Optional[ErrorHook] = None) -> Iterator[Any]:
    """Yield one decoded object per non-empty line."""
    for raw in lines:
        line = raw.strip()
        if not line:
            continue
        obj = _decode(line, on_error)
        if obj is not None:
            yield obj


__all__ = ["iter_sse_events", "iter_ndjson", "DONE_SENTINEL"]
