"""
FileAttachment DTO.

A reference to a user-uploaded file travelling with a chat message. ``data``
holds the base64-encoded payload once the caller has loaded it; plugins that
need bytes and find ``data`` missing report the attachment as failed rather
than reading the file themselves.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


@dataclass
class FileAttachment:
    """A file attached to a chat message.

    Attributes:
        id: Stable attachment identifier (echoed in attachment results).
        filepath: Storage path understood by the caller's ``FileReader``.
        filename: Original file name shown to users.
        mime_type: Declared MIME type (e.g. ``"image/png"``).
        size: Size in bytes.
        data: Optional base64-encoded content.
    """

    id: str
    filepath: str
    filename: str
    mime_type: str
    size: int = 0
    data: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out = asdict(self)
        out.pop("data", None)
        out["has_data"] = self.data is not None
        return out


__all__ = ["FileAttachment"]
