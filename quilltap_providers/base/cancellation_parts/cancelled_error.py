"""Cancellation error type raised when a stream observes a cancel request."""

from __future__ import annotations


class CancelledError(RuntimeError):
    """Raised when an operation is cancelled cooperatively.

    Kept separate from transport failures so the streaming adapter can map it
    to a ``cancelled`` terminal chunk instead of a transport error.
    """


__all__ = ["CancelledError"]
