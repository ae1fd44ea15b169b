"""Unified provider error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``quilltap_providers.base.errors_parts`` to keep a single stable import path.
"""

from .errors_parts.error_code import ErrorCode, RETRYABLE_CODES
from .errors_parts.provider_error import ProviderError
from .errors_parts.classification import classify_exception, wrap_exception, error_from_response
from .errors_parts.registry_errors import (
    ManifestValidationError,
    ProviderDisabledError,
    ProviderNotFoundError,
)
from .errors_parts.user_messages import user_friendly_message

__all__ = [
    "ErrorCode",
    "RETRYABLE_CODES",
    "ProviderError",
    "classify_exception",
    "wrap_exception",
    "error_from_response",
    "ProviderNotFoundError",
    "ProviderDisabledError",
    "ManifestValidationError",
    "user_friendly_message",
]
