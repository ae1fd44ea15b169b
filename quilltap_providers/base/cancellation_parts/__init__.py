"""Cancellation implementation parts; import from ``base.cancellation`` instead."""

from .cancelled_error import CancelledError
from .cancellation_token import CancellationToken

__all__ = ["CancellationToken", "CancelledError"]
