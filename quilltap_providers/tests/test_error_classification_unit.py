"""Unit tests for error classification and user-facing messages.

Covers:
- ProviderError passthrough and httpx timeout / transport mapping
- HTTP status extraction from ``status_code`` / ``response.status_code``
- Message heuristics and the ``unknown`` fallback
- ``error_from_response`` for vendor error envelopes and Retry-After
- ``user_friendly_message`` wording
"""
from __future__ import annotations

import httpx

from quilltap_providers.base.errors import (
    ErrorCode,
    ProviderDisabledError,
    ProviderError,
    ProviderNotFoundError,
    classify_exception,
    error_from_response,
    user_friendly_message,
    wrap_exception,
)


class _StatusError(Exception):
    def __init__(self, status_code: int, msg: str = "boom") -> None:
        super().__init__(msg)
        self.status_code = status_code


class _WithResponse(Exception):
    def __init__(self, status: int) -> None:
        super().__init__("vendor failure")
        self.response = type("R", (), {"status_code": status})()


def test_provider_error_passthrough():
    err = ProviderError(code=ErrorCode.RATE_LIMIT, message="slow down", provider="OPENAI")
    assert classify_exception(err) is ErrorCode.RATE_LIMIT  # nosec B101
    assert wrap_exception(err, provider="OTHER") is err  # nosec B101


def test_httpx_timeout_and_transport_errors():
    assert classify_exception(httpx.ReadTimeout("read timed out")) is ErrorCode.TIMEOUT  # nosec B101
    assert classify_exception(TimeoutError()) is ErrorCode.TIMEOUT  # nosec B101
    assert classify_exception(httpx.ConnectError("refused")) is ErrorCode.TRANSIENT  # nosec B101


def test_status_code_mapping():
    assert classify_exception(_StatusError(401)) is ErrorCode.AUTH  # nosec B101
    assert classify_exception(_StatusError(404)) is ErrorCode.NOT_FOUND  # nosec B101
    assert classify_exception(_StatusError(429)) is ErrorCode.RATE_LIMIT  # nosec B101
    assert classify_exception(_StatusError(503)) is ErrorCode.UNAVAILABLE  # nosec B101
    assert classify_exception(_StatusError(599)) is ErrorCode.SERVER_ERROR  # nosec B101
    assert classify_exception(_WithResponse(403)) is ErrorCode.AUTH  # nosec B101


def test_message_heuristics_and_unknown():
    assert classify_exception(RuntimeError("Rate limit reached for model")) is ErrorCode.RATE_LIMIT  # nosec B101
    assert classify_exception(RuntimeError("Invalid API key provided")) is ErrorCode.AUTH  # nosec B101
    assert classify_exception(RuntimeError("model not found")) is ErrorCode.NOT_FOUND  # nosec B101
    assert classify_exception(RuntimeError("something odd")) is ErrorCode.UNKNOWN  # nosec B101


def test_wrap_exception_sets_retryable_and_status():
    wrapped = wrap_exception(_StatusError(429, "too many"), provider="ANTHROPIC", model="claude")
    assert wrapped.code is ErrorCode.RATE_LIMIT  # nosec B101
    assert wrapped.retryable is True  # nosec B101
    assert wrapped.status_code == 429  # nosec B101
    assert wrapped.provider == "ANTHROPIC" and wrapped.model == "claude"  # nosec B101

    auth = wrap_exception(_StatusError(401), provider="OPENAI")
    assert auth.retryable is False  # nosec B101


def test_error_from_response_reads_vendor_envelope():
    resp = httpx.Response(
        429,
        json={"error": {"message": "Rate limit exceeded", "type": "rate_limit_error"}},
        headers={"retry-after": "12"},
    )
    err = error_from_response(resp, provider="OPENAI", model="gpt-4o")
    assert err.code is ErrorCode.RATE_LIMIT  # nosec B101
    assert err.message == "Rate limit exceeded"  # nosec B101
    assert err.retry_after == 12.0  # nosec B101
    assert err.as_stream_error() == "rate_limit:Rate limit exceeded"  # nosec B101


def test_error_from_response_plain_text_and_unknown_status():
    resp = httpx.Response(418, text="teapot")
    err = error_from_response(resp, provider="OLLAMA")
    assert err.code is ErrorCode.UNKNOWN  # nosec B101
    assert err.message == "teapot"  # nosec B101

    resp = httpx.Response(502, text="")
    err = error_from_response(resp, provider="OLLAMA")
    assert err.code is ErrorCode.TRANSIENT  # nosec B101
    assert err.message == "HTTP 502"  # nosec B101


def test_user_friendly_messages():
    auth = ProviderError(code=ErrorCode.AUTH, message="401", provider="OPENAI")
    assert "Invalid API key" in user_friendly_message(auth)  # nosec B101

    limited = ProviderError(code=ErrorCode.RATE_LIMIT, message="429", provider="OPENAI", retry_after=30)
    assert user_friendly_message(limited) == "Rate limit exceeded. Please try again in 30 seconds."  # nosec B101

    assert user_friendly_message(RuntimeError("???")).startswith("An unexpected error")  # nosec B101


def test_registry_errors_are_distinct_lookup_errors():
    missing = ProviderNotFoundError("NOPE")
    disabled = ProviderDisabledError("OPENAI")
    assert isinstance(missing, LookupError) and isinstance(disabled, LookupError)  # nosec B101
    assert missing.code is ErrorCode.NOT_FOUND  # nosec B101
    assert disabled.code is ErrorCode.DISABLED  # nosec B101
    assert "not registered" in str(missing) and "disabled" in str(disabled)  # nosec B101
