"""StreamController: a cancellable iterator facade over a plugin stream.

Callers that consume a stream on one thread and may need to stop it from
another (a UI "stop" button, a request being torn down) hold the controller:
``cancel()`` trips the shared :class:`CancellationToken`, which closes the
underlying connection and makes the stream end with a ``cancelled`` terminal
chunk. ``close()`` abandons the stream without waiting for a terminal chunk.
"""
from __future__ import annotations

from contextlib import suppress
from typing import Iterator, Optional

from ..cancellation import CancellationToken
from ..models import LLMParams, StreamChunk


class StreamController:
    """High-level cancellable iterator over :class:`StreamChunk` objects."""

    def __init__(self, chunks: Iterator[StreamChunk], token: CancellationToken | None = None) -> None:
        self._chunks = chunks
        self._token = token or CancellationToken()
        self._terminal: Optional[StreamChunk] = None

    @classmethod
    def start(
        cls,
        plugin,
        params: LLMParams,
        api_key: Optional[str],
        token: CancellationToken | None = None,
    ) -> "StreamController":
        """Open ``plugin.stream_message`` with a token owned by the controller."""
        token = token or CancellationToken()
        return cls(iter(plugin.stream_message(params, api_key, cancellation_token=token)), token)

    def __iter__(self) -> Iterator[StreamChunk]:
        for chunk in self._chunks:
            if chunk.done:
                self._terminal = chunk
            yield chunk

    @property
    def token(self) -> CancellationToken:
        return self._token

    def cancel(self, reason: str | None = None) -> None:
        """Request cancellation. Safe to call repeatedly or after completion."""
        self._token.cancel(reason or "cancelled by caller")

    def close(self) -> None:
        """Stop consuming; the connection is released by the stream's cleanup."""
        close = getattr(self._chunks, "close", None)
        if callable(close):
            with suppress(Exception):
                close()

    @property
    def finished(self) -> bool:
        """Whether the terminal chunk has been delivered."""
        return self._terminal is not None

    @property
    def terminal_chunk(self) -> Optional[StreamChunk]:
        return self._terminal

    @property
    def error(self) -> Optional[str]:
        return self._terminal.error if self._terminal else None


__all__ = ["StreamController"]
