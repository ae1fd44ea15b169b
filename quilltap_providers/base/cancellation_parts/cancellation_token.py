"""Cooperative cancellation token implementation.

Exposes ``CancellationToken``. A stream checks the token between vendor events
and registers an ``on_cancel`` callback that closes its HTTP response, so a
cancel issued from another thread also unblocks a read parked on the socket.
"""

from __future__ import annotations

from contextlib import suppress
from threading import Lock
from typing import Callable, List

from .state import State
from .cancelled_error import CancelledError

Callback = Callable[[], None]


class CancellationToken:
    """A cooperative cancellation token with cascading semantics.

    Thread-safe. Child tokens inherit cancellation when the parent is cancelled;
    callbacks registered after cancellation run immediately.
    """

    def __init__(self, *, parent: "CancellationToken | None" = None) -> None:
        self._state = State()
        self._lock = Lock()
        self._children: List[CancellationToken] = []
        self._callbacks: List[Callback] = []
        if parent is not None:
            parent.link_child(self)

    @property
    def cancelled(self) -> bool:
        """Whether cancellation has been requested."""
        return self._state.cancelled

    @property
    def reason(self) -> str | None:
        """Reason string supplied at cancel time (if any)."""
        return self._state.reason

    def cancel(self, reason: str | None = None) -> None:
        """Request cancellation, run callbacks, and cascade to children. Idempotent."""
        with self._lock:
            if self._state.cancelled:
                return
            self._state.cancelled = True
            self._state.reason = reason
            children = list(self._children)
            callbacks = list(self._callbacks)
            self._callbacks.clear()
        for cb in callbacks:
            # a failing close must not stop the remaining callbacks
            with suppress(Exception):
                cb()
        for child in children:
            child.cancel(reason)

    def on_cancel(self, callback: Callback) -> Callback:
        """Register ``callback`` to run once on cancellation; returns it for removal."""
        with self._lock:
            run_now = self._state.cancelled
            if not run_now:
                self._callbacks.append(callback)
        if run_now:
            with suppress(Exception):
                callback()
        return callback

    def remove_callback(self, callback: Callback) -> None:
        """Unregister a callback previously passed to :meth:`on_cancel`."""
        with self._lock:
            with suppress(ValueError):
                self._callbacks.remove(callback)

    def link_child(self, token: "CancellationToken") -> "CancellationToken":
        """Link a child token so parent cancellation cascades (returns child)."""
        with self._lock:
            self._children.append(token)
            should_cancel = self._state.cancelled
            reason = self._state.reason
        if should_cancel:
            token.cancel(reason)
        return token

    def raise_if_cancelled(self) -> None:
        """Raise ``CancelledError`` if the token is cancelled."""
        if self._state.cancelled:
            raise CancelledError(self._state.reason or "operation cancelled")

    def child(self) -> "CancellationToken":
        return CancellationToken(parent=self)

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"CancellationToken(cancelled={self._state.cancelled}, reason={self._state.reason!r})"


__all__ = ["CancellationToken"]
