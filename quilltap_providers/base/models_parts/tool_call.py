"""ToolCallRequest DTO: "the model wants to invoke function X with arguments Y".

``call_id`` is the vendor's identifier for the call when it sends one
(OpenAI ``id``, Anthropic ``tool_use.id``); it is needed to address the tool
result back to the call and is ``None`` for vendors without ids (Google).
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ToolCallRequest:
    name: str
    arguments: Dict[str, Any] = field(default_factory=dict)
    call_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"name": self.name, "arguments": dict(self.arguments)}
        if self.call_id is not None:
            out["call_id"] = self.call_id
        return out


__all__ = ["ToolCallRequest"]
