"""
LLMMessage DTO used across providers.

Defines the `LLMMessage` dataclass and the `Role` literal. Attachments are
references; each vendor plugin decides how (or whether) to inline them.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal

from .file_attachment import FileAttachment


Role = Literal["system", "user", "assistant"]


@dataclass
class LLMMessage:
    """A role-tagged chat message.

    Attributes:
        role: ``"system"``, ``"user"`` or ``"assistant"``.
        content: Message text.
        attachments: Files attached to this message, in upload order.
    """

    role: Role
    content: str
    attachments: List[FileAttachment] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "role": self.role,
            "content": self.content,
            "attachments": [a.to_dict() for a in self.attachments],
        }


__all__ = ["LLMMessage", "Role"]
