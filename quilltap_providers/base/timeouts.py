"""Unified timeout configuration for provider network calls.

Every network call made by this package (buffered chat, streaming, model
listing, key validation, the attachment fallback's description call) is
bounded. Values come from :func:`get_timeout_config`; plugins accept an
explicit ``TimeoutConfig`` override at construction for callers that need
different bounds.

Environment variables (all optional, seconds, must be > 0):
    PT_TIMEOUT_CONNECT_SECONDS   connection establishment (default 10)
    PT_TIMEOUT_HTTP_SECONDS      buffered request read timeout (default 60)
    PT_TIMEOUT_PROBE_SECONDS     model listing / key validation (default 15)
    PT_TIMEOUT_STREAM_SECONDS    idle gap between streamed events (default 60)
    PT_TIMEOUT_OVERALL_SECONDS   absolute cap for one stream (default unset)

Failure modes
-------------
A buffered call exceeding its bound raises ``httpx.TimeoutException``, which
plugins convert to ``ProviderError(code=timeout)``. A stream exceeding its
idle or overall bound ends with a synthesized terminal chunk instead.
"""
from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Optional

import httpx


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        connect_timeout_seconds: Time allowed to establish a connection.
        http_timeout_seconds: Read timeout for buffered requests.
        probe_timeout_seconds: Read timeout for cheap probes (model listing,
            API key validation).
        stream_idle_timeout_seconds: Longest silence tolerated between two
            streamed events.
        stream_overall_timeout_seconds: Optional absolute cap for an entire
            stream; ``None`` disables the cap.
    """

    connect_timeout_seconds: float = 10.0
    http_timeout_seconds: float = 60.0
    probe_timeout_seconds: float = 15.0
    stream_idle_timeout_seconds: float = 60.0
    stream_overall_timeout_seconds: Optional[float] = None


_ENV_NAMES = (
    "PT_TIMEOUT_CONNECT_SECONDS",
    "PT_TIMEOUT_HTTP_SECONDS",
    "PT_TIMEOUT_PROBE_SECONDS",
    "PT_TIMEOUT_STREAM_SECONDS",
    "PT_TIMEOUT_OVERALL_SECONDS",
)

_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None


def _parse_env_float(name: str, default: float | None) -> float | None:
    """Read ``name`` as a positive float, falling back to ``default``."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached `TimeoutConfig`, refreshed when the env changes."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    guard = "/".join(os.getenv(n, "") for n in _ENV_NAMES)
    if _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED
    defaults = TimeoutConfig()
    _CACHED = TimeoutConfig(
        connect_timeout_seconds=_parse_env_float("PT_TIMEOUT_CONNECT_SECONDS", defaults.connect_timeout_seconds),
        http_timeout_seconds=_parse_env_float("PT_TIMEOUT_HTTP_SECONDS", defaults.http_timeout_seconds),
        probe_timeout_seconds=_parse_env_float("PT_TIMEOUT_PROBE_SECONDS", defaults.probe_timeout_seconds),
        stream_idle_timeout_seconds=_parse_env_float("PT_TIMEOUT_STREAM_SECONDS", defaults.stream_idle_timeout_seconds),
        stream_overall_timeout_seconds=_parse_env_float("PT_TIMEOUT_OVERALL_SECONDS", None),
    )
    _ENV_GUARD = guard
    return _CACHED


def to_httpx_timeout(cfg: TimeoutConfig, *, kind: str = "http") -> httpx.Timeout:
    """Translate ``cfg`` into an ``httpx.Timeout`` for a call of the given kind.

    ``kind`` is one of ``"http"``, ``"probe"`` or ``"stream"``; it selects
    which read timeout applies.
    """
    read = {
        "http": cfg.http_timeout_seconds,
        "probe": cfg.probe_timeout_seconds,
        "stream": cfg.stream_idle_timeout_seconds,
    }.get(kind, cfg.http_timeout_seconds)
    return httpx.Timeout(read, connect=cfg.connect_timeout_seconds)


__all__ = [
    "TimeoutConfig",
    "get_timeout_config",
    "to_httpx_timeout",
]
