"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `quilltap_providers.base.errors` for the stable surface.
"""

from .error_code import ErrorCode, RETRYABLE_CODES
from .provider_error import ProviderError
from .classification import classify_exception, wrap_exception, error_from_response
from .registry_errors import ProviderNotFoundError, ProviderDisabledError, ManifestValidationError
from .user_messages import user_friendly_message

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
