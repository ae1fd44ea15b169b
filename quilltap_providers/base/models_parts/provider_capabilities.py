"""Capability flags declared by a provider plugin (read-only to callers)."""
from __future__ import annotations

from dataclasses import dataclass, asdict, fields
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class ProviderCapabilities:
    chat: bool = True
    image_generation: bool = False
    embeddings: bool = False
    web_search: bool = False
    tool_calling: bool = False

    def enabled(self) -> Tuple[str, ...]:
        """Return the names of the capabilities set to True."""
        return tuple(f.name for f in fields(self) if getattr(self, f.name))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = ["ProviderCapabilities"]
