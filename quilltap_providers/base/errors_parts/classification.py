"""
Error classification helpers mapping exceptions to normalized ErrorCode values.

Implements HTTP status extraction, status-to-code mapping, and message-based
heuristics as a fallback for exceptions that carry no status. Also builds a
`ProviderError` directly from a non-2xx ``httpx.Response`` so every vendor
plugin reports HTTP failures the same way.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from .error_code import ErrorCode, RETRYABLE_CODES
from .provider_error import ProviderError


def _extract_status(exc: Exception) -> Optional[int]:
    """Attempt to extract an HTTP status code from an exception.

    Supported attribute shapes (checked in order):
    - ``exc.status_code``
    - ``exc.status``
    - ``exc.response.status_code``
    Returns ``None`` if no valid status can be found.
    """
    for attr in ("status_code", "status"):
        val = getattr(exc, attr, None)
        if isinstance(val, int) and 100 <= val < 600:
            return val
    resp = getattr(exc, "response", None)
    if resp is not None:
        sc = getattr(resp, "status_code", None)
        if isinstance(sc, int) and 100 <= sc < 600:
            return sc
    return None


_HTTP_STATUS_MAP: Dict[int, ErrorCode] = {
    400: ErrorCode.VALIDATION,
    401: ErrorCode.AUTH,
    403: ErrorCode.AUTH,
    404: ErrorCode.NOT_FOUND,
    408: ErrorCode.TIMEOUT,
    413: ErrorCode.VALIDATION,
    422: ErrorCode.VALIDATION,
    429: ErrorCode.RATE_LIMIT,
    500: ErrorCode.SERVER_ERROR,
    502: ErrorCode.TRANSIENT,
    503: ErrorCode.UNAVAILABLE,
    504: ErrorCode.TIMEOUT,
    529: ErrorCode.UNAVAILABLE,
}

_MESSAGE_PATTERNS = (
    (ErrorCode.TIMEOUT, ("timeout", "timed out")),
    (ErrorCode.AUTH, ("api key", "apikey", "unauthorized", "authentication", "forbidden")),
    (ErrorCode.NOT_FOUND, ("model not found", "does not exist", "not found")),
    (ErrorCode.UNSUPPORTED, ("unsupported", "not supported")),
    (ErrorCode.UNAVAILABLE, ("unavailable", "overloaded")),
    (ErrorCode.TRANSIENT, ("connection reset", "connection refused", "network", "econnrefused")),
    (ErrorCode.VALIDATION, ("invalid", "malformed", "validation")),
    (ErrorCode.SERVER_ERROR, ("server error", "internal error")),
)


def _heuristic_from_message(msg: str) -> Optional[ErrorCode]:
    """Substring heuristic mapping for exceptions without an HTTP status."""
    if "rate" in msg and "limit" in msg:
        return ErrorCode.RATE_LIMIT
    for code, patterns in _MESSAGE_PATTERNS:
        if any(p in msg for p in patterns):
            return code
    return None


def classify_exception(exc: Exception) -> ErrorCode:
    """Classify an exception into a normalized :class:`ErrorCode`.

    Precedence:
        1. ProviderError passthrough.
        2. Timeout exceptions (httpx and builtin).
        3. Other httpx transport failures; malformed URLs are validation errors.
        4. HTTP status mapping.
        5. Substring heuristics.
        6. ``UNKNOWN`` fallback.
    """
    if isinstance(exc, ProviderError):
        return exc.code
    if isinstance(exc, (httpx.TimeoutException, TimeoutError)):
        return ErrorCode.TIMEOUT
    if isinstance(exc, httpx.TransportError):
        return ErrorCode.TRANSIENT
    if isinstance(exc, httpx.InvalidURL):
        return ErrorCode.VALIDATION
    status = _extract_status(exc)
    if status is not None and status in _HTTP_STATUS_MAP:
        return _HTTP_STATUS_MAP[status]
    if status is not None and status >= 500:
        return ErrorCode.SERVER_ERROR
    code = _heuristic_from_message(str(exc).lower())
    return code if code is not None else ErrorCode.UNKNOWN


def wrap_exception(exc: Exception, *, provider: str, model: Optional[str] = None) -> ProviderError:
    """Return ``exc`` as a classified :class:`ProviderError` (passthrough if already one)."""
    if isinstance(exc, ProviderError):
        return exc
    code = classify_exception(exc)
    return ProviderError(
        code=code,
        message=str(exc) or exc.__class__.__name__,
        provider=provider,
        model=model,
        retryable=code in RETRYABLE_CODES,
        raw=exc,
        status_code=_extract_status(exc),
    )


def _vendor_error_message(body: Any) -> Optional[str]:
    """Pull a human message out of the common vendor error envelopes."""
    if isinstance(body, dict):
        err = body.get("error")
        if isinstance(err, dict):
            msg = err.get("message") or err.get("type")
            if isinstance(msg, str) and msg:
                return msg
        if isinstance(err, str) and err:
            return err
        msg = body.get("message")
        if isinstance(msg, str) and msg:
            return msg
    return None


def _parse_retry_after(value: Optional[str]) -> Optional[float]:
    if not value:
        return None
    try:
        seconds = float(value)
    except ValueError:
        return None
    return seconds if seconds >= 0 else None


def error_from_response(response: httpx.Response, *, provider: str, model: Optional[str] = None) -> ProviderError:
    """Build a :class:`ProviderError` from a non-2xx vendor response.

    The response body must already be read (callers holding a streaming
    response call ``response.read()`` first).
    """
    status = response.status_code
    code = _HTTP_STATUS_MAP.get(status) or (ErrorCode.SERVER_ERROR if status >= 500 else ErrorCode.UNKNOWN)
    try:
        body: Any = response.json()
    except ValueError:
        body = None
    message = _vendor_error_message(body) or (response.text or "").strip()[:500] or f"HTTP {status}"
    return ProviderError(
        code=code,
        message=message,
        provider=provider,
        model=model,
        retryable=code in RETRYABLE_CODES,
        status_code=status,
        retry_after=_parse_retry_after(response.headers.get("retry-after")),
    )


__all__ = [
    "classify_exception",
    "wrap_exception",
    "error_from_response",
    "_extract_status",
    "_HTTP_STATUS_MAP",
]
