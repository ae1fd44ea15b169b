"""Base streaming adapter: the lifecycle shared by every vendor stream.

Guarantees
----------
* The HTTP response is entered inside an ``ExitStack`` and closed on every
  exit path, including the consumer abandoning the iterator (``GeneratorExit``
  at a ``yield``) and a cancel issued from another thread.
* Delta chunks are yielded in the order the vendor sent them.
* Exactly one terminal chunk (``done=True``, with usage) ends every stream
  that started. Timeouts, cancellation and mid-stream transport failures
  end in a synthesized terminal chunk carrying ``error="<code>:<message>"``.
* Failures before the stream starts (authentication, non-2xx status,
  connection refused) raise :class:`ProviderError` to the caller; retry
  policy belongs to the caller.
"""
from __future__ import annotations

import time
from contextlib import ExitStack
from typing import Any, Callable, ContextManager, Iterable, Iterator, Literal, Optional

import httpx

from ..cancellation import CancellationToken
from ..errors import ErrorCode, ProviderError, classify_exception, error_from_response, wrap_exception
from ..logging import LogContext, normalized_log_event
from ..models import AttachmentResults, StreamChunk
from ..timeouts import TimeoutConfig, get_timeout_config
from .decoders import iter_ndjson, iter_sse_events
from .stream_finalize import finalize_stream
from .stream_state import StreamState

Opener = Callable[[], ContextManager[httpx.Response]]
Translator = Callable[[Any, StreamState], Optional[str]]
Wire = Literal["sse", "ndjson"]


class _DeadlineExceeded(Exception):
    pass


class BaseStreamingAdapter:
    """Encapsulates the provider streaming loop.

    Parameters
    ----------
    ctx:
        Logging context (provider/model).
    opener:
        Zero-argument callable returning the ``httpx`` streaming context
        manager (``client.stream("POST", ...)``). Called once.
    translator:
        Maps one decoded vendor event to a text delta (or ``None``) and records
        usage / finish reason on the :class:`StreamState`. Setting
        ``state.finished`` ends iteration after the current event.
    wire:
        ``"sse"`` or ``"ndjson"``.
    attachment_results:
        Attachment outcome computed while building the request; attached to
        the terminal chunk.
    cancellation_token:
        Optional token; cancelling it ends the stream with a ``cancelled``
        terminal chunk and closes the connection.
    timeouts:
        Bounds for the overall stream deadline (the idle bound is applied by
        the opener through ``httpx``).
    """

    def __init__(
        self,
        *,
        ctx: LogContext,
        provider_name: str,
        model: str,
        opener: Opener,
        translator: Translator,
        logger,
        wire: Wire = "sse",
        attachment_results: Optional[AttachmentResults] = None,
        cancellation_token: Optional[CancellationToken] = None,
        timeouts: Optional[TimeoutConfig] = None,
    ) -> None:
        self.ctx = ctx
        self.provider_name = provider_name
        self.model = model
        self._opener = opener
        self._translator = translator
        self._logger = logger
        self._wire = wire
        self._attachment_results = attachment_results
        self._token = cancellation_token
        self._timeouts = timeouts or get_timeout_config()
        self.state = StreamState()
        self._t0 = 0.0
        self._first_token_at: Optional[float] = None

    # -- lifecycle ---------------------------------------------------------
    def run(self) -> Iterator[StreamChunk]:
        """Execute the streaming lifecycle, yielding deltas then one terminal chunk."""
        self._t0 = time.perf_counter()
        overall = self._timeouts.stream_overall_timeout_seconds
        deadline = time.monotonic() + overall if overall else None
        normalized_log_event(self._logger, "stream.start", self.ctx, phase="start")

        if self._token is not None and self._token.cancelled:
            yield self._terminal(f"{ErrorCode.CANCELLED.value}:{self._token.reason or 'operation cancelled'}")
            return

        with ExitStack() as stack:
            try:
                response = self._open(stack)
            except httpx.TimeoutException as exc:
                yield self._terminal(f"{ErrorCode.TIMEOUT.value}:stream start timed out ({exc})")
                return
            except ProviderError as exc:
                normalized_log_event(
                    self._logger,
                    "stream.error",
                    self.ctx,
                    phase="start",
                    emitted=False,
                    error_code=exc.code.value,
                    error=exc.message[:260],
                    status_code=exc.status_code,
                )
                raise

            if self._token is not None:
                callback = self._token.on_cancel(response.close)
                stack.callback(self._token.remove_callback, callback)

            try:
                for event in self._events(response, deadline):
                    if self._token is not None and self._token.cancelled:
                        yield self._cancelled_terminal()
                        return
                    delta = self._translate(event)
                    if delta:
                        if self._first_token_at is None:
                            self._first_token_at = time.perf_counter()
                        self.state.emitted += 1
                        self.state.text_length += len(delta)
                        yield StreamChunk(content=delta, done=False)
                    if self.state.finished:
                        break
            except _DeadlineExceeded:
                yield self._terminal(f"{ErrorCode.TIMEOUT.value}:stream exceeded {overall}s")
                return
            except httpx.TimeoutException as exc:
                yield self._terminal(f"{ErrorCode.TIMEOUT.value}:no data for {self._timeouts.stream_idle_timeout_seconds}s ({exc})")
                return
            except Exception as exc:  # transport failure or socket closed by a cancel
                if self._token is not None and self._token.cancelled:
                    yield self._cancelled_terminal()
                else:
                    code = classify_exception(exc)
                    yield self._terminal(f"{code.value}:{str(exc)[:260] or exc.__class__.__name__}")
                return
            yield self._terminal(self.state.vendor.get("stream_error"))

    # -- helpers -----------------------------------------------------------
    def _open(self, stack: ExitStack) -> httpx.Response:
        try:
            response = stack.enter_context(self._opener())
        except httpx.TimeoutException:
            raise
        except Exception as exc:
            raise wrap_exception(exc, provider=self.provider_name, model=self.model) from exc
        if response.status_code >= 400:
            response.read()
            raise error_from_response(response, provider=self.provider_name, model=self.model)
        return response

    def _events(self, response: httpx.Response, deadline: Optional[float]) -> Iterable[Any]:
        lines = response.iter_lines()
        if deadline is not None:
            lines = _bounded(lines, deadline)
        if self._wire == "ndjson":
            return iter_ndjson(lines, on_error=self._on_decode_error)
        return iter_sse_events(lines, on_error=self._on_decode_error)

    def _translate(self, event: Any) -> Optional[str]:
        self.state.last_event = event
        try:
            return self._translator(event, self.state)
        except (KeyError, TypeError, ValueError, AttributeError, IndexError) as exc:
            # one malformed event must not end the stream
            self._on_decode_error(repr(event)[:200], exc)
            return None

    def _on_decode_error(self, payload: str, exc: Exception) -> None:
        normalized_log_event(
            self._logger,
            "stream.decode_error",
            self.ctx,
            phase="mid_stream",
            emitted=self.state.emitted > 0,
            error_code=ErrorCode.VALIDATION.value,
            error=str(exc)[:200],
            payload=payload[:200],
        )

    def _cancelled_terminal(self) -> StreamChunk:
        reason = (self._token.reason if self._token is not None else None) or "operation cancelled"
        normalized_log_event(
            self._logger, "stream.cancelled", self.ctx, phase="mid_stream", emitted=self.state.emitted > 0, reason=reason
        )
        return self._terminal(f"{ErrorCode.CANCELLED.value}:{reason[:260]}")

    def _terminal(self, error: Optional[str]) -> StreamChunk:
        return finalize_stream(
            logger=self._logger,
            ctx=self.ctx,
            state=self.state,
            started_at=self._t0,
            attachment_results=self._attachment_results,
            error=error,
            first_token_at=self._first_token_at,
        )


def _bounded(lines: Iterable[str], deadline: float) -> Iterator[str]:
    # checked per raw line so keep-alive comments cannot hold a stream open
    for line in lines:
        if time.monotonic() > deadline:
            raise _DeadlineExceeded
        yield line


__all__ = ["BaseStreamingAdapter", "Opener", "Translator"]
