"""
Tool definition translators.

The internal tool shape is OpenAI's "universal" function tool::

    {"type": "function",
     "function": {"name": ..., "description": ..., "parameters": {JSON schema}}}

A flat ``{"name", "description", "parameters"}`` mapping is accepted as
input too. Every function here is pure: inputs are never mutated.
"""
from __future__ import annotations

import copy
import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..base.logging import get_logger, log_event
from ..config.defaults import TOOL_DESCRIPTION_TRUNCATION_NOTE

logger = get_logger("tools")

UniversalTool = Dict[str, Any]


def _function_part(tool: Mapping[str, Any]) -> Optional[Mapping[str, Any]]:
    fn = tool.get("function") if isinstance(tool.get("function"), Mapping) else tool
    if not isinstance(fn, Mapping) or not fn.get("name"):
        return None
    return fn


def _schema(fn: Mapping[str, Any]) -> Dict[str, Any]:
    params = fn.get("parameters")
    params = params if isinstance(params, Mapping) else {}
    schema: Dict[str, Any] = {
        "type": "object",
        "properties": copy.deepcopy(dict(params.get("properties") or {})),
        "required": list(params.get("required") or []),
    }
    for key, value in params.items():
        if key not in schema:
            schema[key] = copy.deepcopy(value)
    return schema


def to_universal_tool(tool: Mapping[str, Any]) -> Optional[UniversalTool]:
    """Normalize ``tool`` to the universal shape; ``None`` when it has no name."""
    fn = _function_part(tool)
    if fn is None:
        log_event(logger, "tools.format_skipped", reason="missing function name", level=logging.WARNING)
        return None
    return {
        "type": "function",
        "function": {
            "name": fn["name"],
            "description": fn.get("description") or "",
            "parameters": _schema(fn),
        },
    }


def format_openai_tools(tools: Optional[Sequence[Mapping[str, Any]]]) -> List[UniversalTool]:
    return [t for t in (to_universal_tool(x) for x in tools or ()) if t is not None]


def format_anthropic_tools(tools: Optional[Sequence[Mapping[str, Any]]]) -> List[Dict[str, Any]]:
    """Convert to Anthropic ``{name, description, input_schema}`` entries."""
    out = []
    for tool in format_openai_tools(tools):
        fn = tool["function"]
        out.append({"name": fn["name"], "description": fn["description"], "input_schema": fn["parameters"]})
    return out


def format_google_tools(tools: Optional[Sequence[Mapping[str, Any]]]) -> List[Dict[str, Any]]:
    """Convert to Gemini function declarations ``{name, description, parameters}``.

    The caller wraps the list as ``{"functionDeclarations": [...]}``.
    """
    out = []
    for tool in format_openai_tools(tools):
        fn = tool["function"]
        out.append({"name": fn["name"], "description": fn["description"], "parameters": fn["parameters"]})
    return out


def _truncate_utf8(text: str, max_bytes: int) -> str:
    encoded = text.encode("utf-8")[:max_bytes]
    # drop a multi-byte sequence cut in half
    return encoded.decode("utf-8", errors="ignore")


def apply_prompt_length_limit(tool: Mapping[str, Any], max_bytes: int) -> Dict[str, Any]:
    """Return a copy of ``tool`` whose description fits in ``max_bytes`` UTF-8 bytes.

    Works on any of the shapes above (the description is looked up on
    ``tool["function"]`` first). An over-long description is cut and
    suffixed with a truncation note; the limit includes the note. When the
    limit cannot even hold the note the tool is returned unchanged.
    """
    out = copy.deepcopy(dict(tool))
    holder = out["function"] if isinstance(out.get("function"), dict) else out
    description = holder.get("description")
    if not isinstance(description, str) or not description:
        return out
    note_bytes = len(TOOL_DESCRIPTION_TRUNCATION_NOTE.encode("utf-8"))
    if max_bytes - note_bytes <= 0:
        log_event(logger, "tools.limit_too_small", max_bytes=max_bytes, level=logging.WARNING)
        return out
    if len(description.encode("utf-8")) <= max_bytes:
        return out
    holder["description"] = _truncate_utf8(description, max_bytes - note_bytes) + TOOL_DESCRIPTION_TRUNCATION_NOTE
    return out


__all__ = [
    "UniversalTool",
    "to_universal_tool",
    "format_openai_tools",
    "format_anthropic_tools",
    "format_google_tools",
    "apply_prompt_length_limit",
]
