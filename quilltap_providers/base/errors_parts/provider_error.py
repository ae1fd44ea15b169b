"""
Structured provider error exception type.

Wraps transport, authentication, and vendor failures with a normalized
`ErrorCode` so callers can decide on retries and user messaging without
inspecting vendor payloads.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass
class ProviderError(Exception):
    """Represents a structured provider error with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message suitable for logging.
        provider: Provider name where the error originated (e.g. ``"OPENAI"``).
        model: Optional model name associated with the failure.
        retryable: Hint for the caller's retry policy (not authoritative).
        raw: Optional original exception for diagnostics.
        status_code: HTTP status returned by the vendor, when there was one.
        retry_after: Seconds the vendor asked us to wait (``Retry-After``).
    """

    code: ErrorCode
    message: str
    provider: str
    model: Optional[str] = None
    retryable: bool = False
    raw: Optional[Exception] = None
    status_code: Optional[int] = None
    retry_after: Optional[float] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.provider}:{self.model or '-'} {self.code.value}: {self.message}"

    def as_stream_error(self) -> str:
        """Return the ``"<code>:<message>"`` form used on terminal stream chunks."""
        return f"{self.code.value}:{self.message[:260]}"


__all__ = ["ProviderError"]
