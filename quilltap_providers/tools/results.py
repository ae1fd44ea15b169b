"""Tool-result message builders: the reply a caller sends after running a tool."""
from __future__ import annotations

import json
from typing import Any, Dict

from ..base.models import ToolCallRequest


def _as_text(result: Any) -> str:
    if isinstance(result, str):
        return result
    return json.dumps(result, ensure_ascii=False, default=str)


def format_openai_tool_result(call: ToolCallRequest, result: Any) -> Dict[str, Any]:
    """``{"role": "tool", "tool_call_id": ..., "content": ...}``."""
    return {"role": "tool", "tool_call_id": call.call_id or call.name, "name": call.name, "content": _as_text(result)}


def format_anthropic_tool_result(call: ToolCallRequest, result: Any, *, is_error: bool = False) -> Dict[str, Any]:
    """A user turn carrying one ``tool_result`` block."""
    block: Dict[str, Any] = {
        "type": "tool_result",
        "tool_use_id": call.call_id or call.name,
        "content": _as_text(result),
    }
    if is_error:
        block["is_error"] = True
    return {"role": "user", "content": [block]}


def format_google_tool_result(call: ToolCallRequest, result: Any) -> Dict[str, Any]:
    """A user turn carrying one ``functionResponse`` part; non-object results are wrapped."""
    response = result if isinstance(result, dict) else {"content": result if isinstance(result, str) else _as_text(result)}
    return {"role": "user", "parts": [{"functionResponse": {"name": call.name, "response": response}}]}


__all__ = ["format_openai_tool_result", "format_anthropic_tool_result", "format_google_tool_result"]
