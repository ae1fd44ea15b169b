"""Token usage DTO shared by buffered responses and terminal stream chunks."""
from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


@dataclass
class TokenUsage:
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    @classmethod
    def of(cls, prompt: Optional[int], completion: Optional[int], total: Optional[int] = None) -> "TokenUsage":
        """Build usage from possibly-missing vendor counts; ``total`` is derived when absent."""
        p = int(prompt or 0)
        c = int(completion or 0)
        return cls(prompt_tokens=p, completion_tokens=c, total_tokens=int(total) if total else p + c)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = ["TokenUsage"]
