"""Shared HTTP client pool for provider plugins.

Purpose:
    Provide a thread-safe pool of reusable ``httpx.Client`` instances keyed by
    ``(base_url, purpose)``. Plugin instances are cheap and created per
    request, so connection reuse lives here rather than on the plugin.

External dependencies:
    - ``httpx`` for the underlying synchronous HTTP client.

Timeout strategy:
    - Pooled clients carry the default ``TimeoutConfig``; call sites pass an
      explicit per-request ``timeout=`` derived from the plugin's own config.

Lifecycle & cleanup:
    - The pool holds at most ``MAX_POOLED_CLIENTS`` clients; creating one more
      closes and drops the least recently used client.
    - All clients are closed at interpreter exit via ``atexit``; tests may call
      :func:`close_all_clients` explicitly.
    - :func:`set_transport` installs an ``httpx`` transport used for every
      client created afterwards (tests use ``httpx.MockTransport``).
"""

from __future__ import annotations

import atexit
import threading
from collections import OrderedDict
from contextlib import suppress
from typing import Optional, Tuple

import httpx

from ..timeouts import get_timeout_config, to_httpx_timeout

MAX_POOLED_CLIENTS = 64

_CLIENTS: OrderedDict[Tuple[Optional[str], str], httpx.Client] = OrderedDict()
_LOCK = threading.RLock()
_TRANSPORT: Optional[httpx.BaseTransport] = None


def get_httpx_client(base_url: Optional[str], purpose: str) -> httpx.Client:
    """Return a pooled ``httpx.Client`` for the given base URL and purpose.

    Parameters:
        base_url: API base URL; relative request paths resolve against it.
            ``None`` groups clients that always use absolute URLs.
        purpose: Short discriminator (e.g. ``"anthropic.stream"``).

    Thread-safety:
        Safe for concurrent use; lookup, creation and eviction happen under a
        lock.

    Raises:
        httpx.InvalidURL: ``base_url`` cannot be parsed.
    """
    key = (base_url.rstrip("/") if base_url else None, purpose)
    with _LOCK:
        client = _CLIENTS.get(key)
        if client is not None and not client.is_closed:
            _CLIENTS.move_to_end(key)
            return client
        kwargs = {"timeout": to_httpx_timeout(get_timeout_config())}
        if key[0]:
            # trailing slash keeps relative paths appended to the base path
            kwargs["base_url"] = key[0] + "/"
        if _TRANSPORT is not None:
            kwargs["transport"] = _TRANSPORT
        client = httpx.Client(**kwargs)
        _CLIENTS[key] = client
        _CLIENTS.move_to_end(key)
        while len(_CLIENTS) > MAX_POOLED_CLIENTS:
            _, evicted = _CLIENTS.popitem(last=False)
            with suppress(Exception):
                evicted.close()
        return client


def set_transport(transport: Optional[httpx.BaseTransport]) -> None:
    """Route all subsequently created clients through ``transport``.

    Existing pooled clients are closed so the change takes effect at once.
    Pass ``None`` to restore the default network transport.
    """
    global _TRANSPORT  # noqa: PLW0603 - module level pool configuration
    with _LOCK:
        _TRANSPORT = transport
        _close_locked()


def _close_locked() -> None:
    for c in _CLIENTS.values():
        # pool teardown failures are not actionable
        with suppress(Exception):
            c.close()
    _CLIENTS.clear()


def close_all_clients() -> None:
    """Close and clear all pooled HTTP clients."""
    with _LOCK:
        _close_locked()


atexit.register(close_all_clients)

__all__ = ["get_httpx_client", "close_all_clients", "set_transport", "MAX_POOLED_CLIENTS"]
