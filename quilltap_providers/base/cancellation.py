"""Cooperative cancellation primitives (public API facade).

``CancellationToken`` is handed to ``stream_message`` by callers that want to
stop a stream from another thread; ``CancelledError`` is raised internally when
a stream observes the request and is mapped to a terminal ``cancelled`` chunk.
"""

from .cancellation_parts.cancelled_error import CancelledError
from .cancellation_parts.cancellation_token import CancellationToken

__all__ = ["CancellationToken", "CancelledError"]
