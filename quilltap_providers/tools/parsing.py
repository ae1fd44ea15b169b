"""
Tool-call parsers: vendor response -> ``List[ToolCallRequest]``.

Contract shared by every parser:

* never raises, whatever the input;
* locates the tool-call array where the vendor nests it, returning ``[]``
  when it is absent;
* accepts argument payloads as a mapping or a JSON-encoded object string;
* skips entries without a function name or with unparseable arguments,
  logging each skipped entry, and keeps parsing the rest.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

from ..base.logging import get_logger, log_event
from ..base.models import ToolCallRequest

logger = get_logger("tools")


class _SkipEntry(ValueError):
    pass


def _arguments(raw: Any) -> Dict[str, Any]:
    if raw is None or raw == "":
        return {}
    if isinstance(raw, Mapping):
        return dict(raw)
    if isinstance(raw, str):
        try:
            value = json.loads(raw)
        except (ValueError, RecursionError) as exc:
            raise _SkipEntry(f"arguments are not valid JSON: {exc!r}"[:200]) from exc
        if isinstance(value, dict):
            return value
        raise _SkipEntry(f"arguments decode to {type(value).__name__}, expected object")
    raise _SkipEntry(f"arguments have unsupported type {type(raw).__name__}")


def _skip(vendor: str, index: int, reason: str) -> None:
    log_event(logger, "tools.parse_error", vendor=vendor, index=index, reason=reason, level=logging.WARNING)


def _collect(vendor: str, entries: Iterable[Any], extract) -> List[ToolCallRequest]:
    calls: List[ToolCallRequest] = []
    for index, entry in enumerate(entries):
        try:
            call = extract(entry)
        except _SkipEntry as exc:
            _skip(vendor, index, str(exc))
            continue
        except (AttributeError, KeyError, TypeError, IndexError, RecursionError) as exc:
            _skip(vendor, index, f"malformed entry: {exc}")
            continue
        if call is not None:
            calls.append(call)
    return calls


def _get(obj: Any, *path: Any) -> Any:
    """Walk ``path`` through nested mappings/lists; ``None`` when any step is missing."""
    for step in path:
        if isinstance(step, int):
            if not isinstance(obj, list) or len(obj) <= step:
                return None
            obj = obj[step]
        else:
            if not isinstance(obj, Mapping):
                return None
            obj = obj.get(step)
    return obj


def parse_openai_tool_calls(raw: Any) -> List[ToolCallRequest]:
    """Parse ``tool_calls`` (top level or ``choices[0].message``) from an OpenAI-style body."""
    entries = _get(raw, "tool_calls")
    if not isinstance(entries, list):
        entries = _get(raw, "choices", 0, "message", "tool_calls")
    if not isinstance(entries, list):
        return []

    def extract(entry: Mapping[str, Any]) -> Optional[ToolCallRequest]:
        if entry.get("type") not in (None, "function"):
            return None
        fn = entry["function"]
        name = fn.get("name")
        if not name:
            raise _SkipEntry("missing function name")
        return ToolCallRequest(name=name, arguments=_arguments(fn.get("arguments")), call_id=entry.get("id"))

    return _collect("openai", entries, extract)


def parse_anthropic_tool_calls(raw: Any) -> List[ToolCallRequest]:
    """Parse ``tool_use`` blocks from an Anthropic message's ``content`` array."""
    blocks = _get(raw, "content")
    if not isinstance(blocks, list):
        return []

    def extract(block: Mapping[str, Any]) -> Optional[ToolCallRequest]:
        if block.get("type") != "tool_use":
            return None
        name = block.get("name")
        if not name:
            raise _SkipEntry("missing tool name")
        return ToolCallRequest(name=name, arguments=_arguments(block.get("input")), call_id=block.get("id"))

    return _collect("anthropic", blocks, extract)


def parse_google_tool_calls(raw: Any) -> List[ToolCallRequest]:
    """Parse ``functionCall`` parts from ``candidates[0].content.parts``."""
    parts = _get(raw, "candidates", 0, "content", "parts")
    if not isinstance(parts, list):
        return []

    def extract(part: Mapping[str, Any]) -> Optional[ToolCallRequest]:
        call = part.get("functionCall")
        if call is None:
            return None
        name = call.get("name")
        if not name:
            raise _SkipEntry("missing function name")
        return ToolCallRequest(name=name, arguments=_arguments(call.get("args")), call_id=call.get("id"))

    return _collect("google", parts, extract)


__all__ = ["parse_openai_tool_calls", "parse_anthropic_tool_calls", "parse_google_tool_calls"]
