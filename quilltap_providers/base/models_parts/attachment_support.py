"""
AttachmentSupport descriptor.

``mime_types`` is an ordered tuple so the declared order survives into
user-facing descriptions. Never mutated after load.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class AttachmentSupport:
    supported: bool = False
    mime_types: Tuple[str, ...] = ()
    description: str = "No file attachments supported"
    notes: Optional[str] = None

    def accepts(self, mime_type: str) -> bool:
        """Return True when ``mime_type`` (case-insensitive, parameters ignored) is accepted."""
        if not self.supported or not mime_type:
            return False
        base = mime_type.split(";", 1)[0].strip().lower()
        return base in self.mime_types

    def to_dict(self) -> Dict[str, Any]:
        return {
            "supported": self.supported,
            "mime_types": list(self.mime_types),
            "description": self.description,
            "notes": self.notes,
        }


NO_ATTACHMENTS = AttachmentSupport()


__all__ = ["AttachmentSupport", "NO_ATTACHMENTS"]
