"""
LLMParams DTO: the uniform request every plugin accepts.

Sampling fields left as ``None`` mean "use the default": plugins fill them
from ``quilltap_providers.config.defaults`` (temperature 0.7, 1000 tokens,
top_p 1.0) unless the vendor forbids a combination (Anthropic accepts
temperature or top_p, never both).
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

from .message import LLMMessage


@dataclass
class LLMParams:
    """Normalized chat request.

    Attributes:
        messages: Ordered role-tagged messages.
        model: Target model identifier.
        temperature: Optional sampling temperature.
        max_tokens: Optional completion token cap.
        top_p: Optional nucleus sampling value.
        stop: Optional stop sequences.
        tools: Optional tool definitions in the internal (OpenAI-style) shape;
            plugins translate them with their ``format_tools``.
    """

    messages: List[LLMMessage]
    model: str
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    top_p: Optional[float] = None
    stop: Optional[List[str]] = None
    tools: Optional[List[Dict[str, Any]]] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def system_prompt(self) -> Optional[str]:
        """Return the concatenated system message text, if any."""
        parts = [m.content for m in self.messages if m.role == "system" and m.content]
        return "\n\n".join(parts) if parts else None

    def non_system_messages(self) -> List[LLMMessage]:
        return [m for m in self.messages if m.role != "system"]

    def with_model(self, model: str) -> "LLMParams":
        return replace(self, model=model)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "model": self.model,
            "messages": [m.to_dict() for m in self.messages],
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
            "top_p": self.top_p,
            "stop": self.stop,
            "tools": self.tools,
        }


__all__ = ["LLMParams"]
