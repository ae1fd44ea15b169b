"""
Registry and manifest error types.

``ProviderNotFoundError`` and ``ProviderDisabledError`` separate "never
registered" from "switched off".
Both subclass ``LookupError``; ``ManifestValidationError`` subclasses
``ValueError`` and carries the field-level error list.
"""
from __future__ import annotations

from typing import Sequence, Tuple

from .error_code import ErrorCode


class ProviderNotFoundError(LookupError):
    """Raised when no registry entry exists for a provider name."""

    code = ErrorCode.NOT_FOUND

    def __init__(self, name: str) -> None:
        super().__init__(f"Provider '{name}' is not registered")
        self.name = name


class ProviderDisabledError(LookupError):
    """Raised when a provider is registered but currently disabled."""

    code = ErrorCode.DISABLED

    def __init__(self, name: str) -> None:
        super().__init__(f"Provider '{name}' is disabled")
        self.name = name


class ManifestValidationError(ValueError):
    """Raised when a plugin manifest fails validation.

    Attributes:
        errors: Tuple of ``FieldError``-like objects (``path`` + ``message``).
        plugin: Plugin or provider name the manifest was submitted for.
    """

    code = ErrorCode.VALIDATION

    def __init__(self, plugin: str, errors: Sequence) -> None:
        self.plugin = plugin
        self.errors: Tuple = tuple(errors)
        summary = "; ".join(str(e) for e in self.errors[:5]) or "invalid manifest"
        super().__init__(f"Invalid manifest for '{plugin}': {summary}")


__all__ = ["ProviderNotFoundError", "ProviderDisabledError", "ManifestValidationError"]
