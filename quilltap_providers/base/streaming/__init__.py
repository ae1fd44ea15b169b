"""Streaming package for the provider layer.

Exposes the adapter that every vendor stream runs through, the
cancellable controller, wire decoders, and helpers.
"""

from .stream_state import StreamState
from .decoders import iter_sse_events, iter_ndjson, DONE_SENTINEL
from .stream_finalize import finalize_stream
from .stream_adapter import BaseStreamingAdapter
from .stream_controller import StreamController
from .accumulate import accumulate_chunks

__all__ = [
    "StreamState",
    "iter_sse_events",
    "iter_ndjson",
    "DONE_SENTINEL",
    "finalize_stream",
    "BaseStreamingAdapter",
    "StreamController",
    "accumulate_chunks",
]
