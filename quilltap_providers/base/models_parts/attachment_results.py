"""
Attachment processing results reported by plugins.

Every attachment on the request ends up in exactly one of ``sent`` (the vendor
received it) or ``failed`` (with a human-readable reason). Plugins never drop
an attachment silently.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class FailedAttachment:
    id: str
    error: str

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "error": self.error}


@dataclass
class AttachmentResults:
    """Outcome of attachment handling for one request."""

    sent: List[str] = field(default_factory=list)
    failed: List[FailedAttachment] = field(default_factory=list)

    def mark_sent(self, attachment_id: str) -> None:
        self.sent.append(attachment_id)

    def mark_failed(self, attachment_id: str, error: str) -> None:
        self.failed.append(FailedAttachment(id=attachment_id, error=error))

    def failed_ids(self) -> List[str]:
        return [f.id for f in self.failed]

    def to_dict(self) -> Dict[str, Any]:
        return {"sent": list(self.sent), "failed": [f.to_dict() for f in self.failed]}


__all__ = ["AttachmentResults", "FailedAttachment"]
