"""Wire decoder tests (SSE and NDJSON).

Covers:
- SSE event names, multi-line data, comments and CRLF endings
- ``[DONE]`` ends iteration
- undecodable payloads are reported and skipped
- trailing message without a blank line is still dispatched
- NDJSON blank and corrupt lines
"""
from __future__ import annotations

from quilltap_providers.base.streaming import iter_ndjson, iter_sse_events


def test_sse_event_names_and_multiline_data():
    lines = [
        ": keep-alive",
        "event: message_start",
        'data: {"a":',
        "data: 1}",
        "",
        'data: {"b": 2}\r',
        "",
    ]
    events = list(iter_sse_events(lines))
    assert events == [  # nosec B101
        {"event": "message_start", "data": {"a": 1}},
        {"event": None, "data": {"b": 2}},
    ]


def test_sse_done_sentinel_stops_iteration():
    lines = ['data: {"n": 1}', "", "data: [DONE]", "", 'data: {"n": 2}', ""]
    assert [e["data"]["n"] for e in iter_sse_events(lines)] == [1]  # nosec B101


def test_sse_bad_payload_is_reported_and_skipped():
    errors = []
    lines = ["data: {oops", "", 'data: {"ok": true}', ""]
    events = list(iter_sse_events(lines, on_error=lambda payload, exc: errors.append(payload)))
    assert events == [{"event": None, "data": {"ok": True}}]  # nosec B101
    assert errors == ["{oops"]  # nosec B101


def test_sse_trailing_message_without_blank_line():
    assert list(iter_sse_events(['data: {"last": 1}'])) == [{"event": None, "data": {"last": 1}}]  # nosec B101


def test_ndjson_skips_blank_and_corrupt_lines():
    errors = []
    lines = ['{"a": 1}', "", "   ", "not json", '{"b": 2}']
    out = list(iter_ndjson(lines, on_error=lambda payload, exc: errors.append(payload)))
    assert out == [{"a": 1}, {"b": 2}]  # nosec B101
    assert errors == ["not json"]  # nosec B101
