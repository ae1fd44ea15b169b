"""Unit tests for shared httpx client pool.

Covers:
- Same key (base_url, purpose) returns the same instance.
- Different purpose yields different instances.
- Different base_url yields different instances.
- Relative request paths resolve below the base path.
- ``set_transport`` replaces pooled clients.
- The pool is bounded and evicts the least recently used client.
"""
from __future__ import annotations

import httpx

from quilltap_providers.base.http import client as pool
from quilltap_providers.base.http import close_all_clients, get_httpx_client, set_transport


def setup_function(_):
    # Ensure a clean slate for each test
    close_all_clients()


def teardown_function(_):
    set_transport(None)
    close_all_clients()


def test_same_key_returns_same_instance():
    c1 = get_httpx_client("https://api.example.com", purpose="chat")
    c2 = get_httpx_client("https://api.example.com/", purpose="chat")
    assert c1 is c2, "Expected pooled client instances to be identical for same key"  # nosec B101


def test_different_purpose_returns_different_instances():
    c1 = get_httpx_client("https://api.example.com", purpose="chat")
    c2 = get_httpx_client("https://api.example.com", purpose="stream")
    assert c1 is not c2, "Different purposes should not share the same client instance"  # nosec B101


def test_different_base_url_returns_different_instances():
    c1 = get_httpx_client("https://api.example.com", purpose="chat")
    c2 = get_httpx_client("https://api.other.com", purpose="chat")
    assert c1 is not c2, "Different base URLs should not share the same client instance"  # nosec B101


def test_relative_paths_keep_base_path():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, json={})

    set_transport(httpx.MockTransport(handler))
    client = get_httpx_client("https://api.openai.com/v1", purpose="chat")
    client.post("chat/completions", json={})
    assert seen == ["https://api.openai.com/v1/chat/completions"]  # nosec B101


def test_set_transport_closes_existing_clients():
    before = get_httpx_client("https://api.example.com", purpose="chat")
    set_transport(httpx.MockTransport(lambda request: httpx.Response(204)))
    after = get_httpx_client("https://api.example.com", purpose="chat")
    assert before.is_closed  # nosec B101
    assert after is not before  # nosec B101
    assert after.get("ping").status_code == 204  # nosec B101


def test_pool_evicts_least_recently_used(monkeypatch):
    monkeypatch.setattr(pool, "MAX_POOLED_CLIENTS", 2)
    first = get_httpx_client("https://a.example.com", purpose="chat")
    second = get_httpx_client("https://b.example.com", purpose="chat")
    assert get_httpx_client("https://a.example.com", purpose="chat") is first  # nosec B101
    third = get_httpx_client("https://c.example.com", purpose="chat")

    assert len(pool._CLIENTS) == 2  # nosec B101
    assert second.is_closed  # nosec B101
    assert not first.is_closed and not third.is_closed  # nosec B101
    assert get_httpx_client("https://b.example.com", purpose="chat") is not second  # nosec B101


def test_many_base_urls_stay_within_bound():
    for n in range(pool.MAX_POOLED_CLIENTS + 10):
        get_httpx_client(f"https://host{n}.example.com", purpose="chat")
    assert len(pool._CLIENTS) == pool.MAX_POOLED_CLIENTS  # nosec B101
