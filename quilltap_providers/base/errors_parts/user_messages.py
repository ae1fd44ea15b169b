"""User-facing messages for normalized provider errors."""
from __future__ import annotations

from .error_code import ErrorCode
from .provider_error import ProviderError
from .classification import classify_exception


_MESSAGES = {
    ErrorCode.AUTH: "Invalid API key. Please check your API key in settings.",
    ErrorCode.NOT_FOUND: "The selected model is not available. Please choose a different model.",
    ErrorCode.VALIDATION: "The request was rejected by the provider. Please check your settings and try again.",
    ErrorCode.TIMEOUT: "The provider took too long to respond. Please try again.",
    ErrorCode.TRANSIENT: "Network error. Please check your connection and try again.",
    ErrorCode.UNAVAILABLE: "The provider is temporarily unavailable. Please try again later.",
    ErrorCode.SERVER_ERROR: "The provider encountered an internal error. Please try again later.",
    ErrorCode.CANCELLED: "The request was cancelled.",
    ErrorCode.UNSUPPORTED: "This provider does not support the requested feature.",
    ErrorCode.DISABLED: "This provider is currently disabled.",
}


def user_friendly_message(error: Exception) -> str:
    """Return a short, end-user oriented message for ``error``."""
    code = classify_exception(error)
    if code is ErrorCode.RATE_LIMIT:
        retry_after = error.retry_after if isinstance(error, ProviderError) else None
        if retry_after:
            return f"Rate limit exceeded. Please try again in {int(retry_after)} seconds."
        return "Rate limit exceeded. Please try again later."
    if code in _MESSAGES:
        return _MESSAGES[code]
    return "An unexpected error occurred. Please try again."


__all__ = ["user_friendly_message"]
