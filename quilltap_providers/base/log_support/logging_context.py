"""Structured logging context object for providers.

:class:`LogContext` carries the fields shared by every event of one provider
operation (provider name, model, operation, request id). ``to_dict`` merges
the ``extra`` mapping and prunes ``None`` values.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    """Structured context for provider logging events."""

    provider: Optional[str] = None
    model: Optional[str] = None
    operation: Optional[str] = None
    request_id: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "provider": self.provider,
            "model": self.model,
            "operation": self.operation,
            "request_id": self.request_id,
        }
        data.update(self.extra or {})
        return {k: v for k, v in data.items() if v is not None}

    def child(self, **extra: Any) -> "LogContext":
        """Return a copy with additional ``extra`` fields."""
        merged = dict(self.extra)
        merged.update(extra)
        return LogContext(
            provider=self.provider,
            model=self.model,
            operation=self.operation,
            request_id=self.request_id,
            extra=merged,
        )


__all__ = ["LogContext"]
