"""Shared test doubles: an in-process vendor behind ``httpx.MockTransport``,
wire-format builders, and fake collaborators for the attachment pipeline.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Tuple, Union

import httpx

from quilltap_providers.attachments import (
    ApiKeyRecord,
    ChatSettings,
    ConnectionProfile,
    Repositories,
)
from quilltap_providers.base.models import LLMResponse, TokenUsage

Responder = Callable[[httpx.Request], httpx.Response]


class MockVendor:
    """Routes requests by method and path suffix and records every request."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self._routes: List[Tuple[str, str, Responder]] = []

    def route(self, method: str, path_suffix: str, responder: Responder) -> None:
        self._routes.append((method.upper(), path_suffix, responder))

    def json(self, method: str, path_suffix: str, body: Any, status: int = 200) -> None:
        self.route(method, path_suffix, lambda _req: httpx.Response(status, json=body))

    def stream(self, method: str, path_suffix: str, lines: Iterable[str], status: int = 200) -> None:
        payload = "".join(lines).encode("utf-8")
        self.route(method, path_suffix, lambda _req: httpx.Response(status, content=payload))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        for method, suffix, responder in self._routes:
            if request.method == method and request.url.path.endswith(suffix):
                return responder(request)
        return httpx.Response(404, json={"error": {"message": f"no route for {request.url.path}"}})

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Dict[str, Any]:
        return json.loads(self.last.content)


def sse(*events: Union[Dict[str, Any], Tuple[str, Dict[str, Any]]], done: bool = False) -> List[str]:
    """Encode events as SSE blocks; ``(name, data)`` tuples add an ``event:`` line."""
    out: List[str] = []
    for ev in events:
        if isinstance(ev, tuple):
            name, data = ev
            out.append(f"event: {name}\ndata: {json.dumps(data)}\n\n")
        else:
            out.append(f"data: {json.dumps(ev)}\n\n")
    if done:
        out.append("data: [DONE]\n\n")
    return out


def ndjson(*objs: Dict[str, Any]) -> List[str]:
    return [json.dumps(o) + "\n" for o in objs]


class ScriptedStream(httpx.SyncByteStream):
    """Byte stream yielding ``chunks`` then raising ``fail_with`` (if set); records ``close``."""

    def __init__(self, chunks: Iterable[bytes], fail_with: Optional[Exception] = None) -> None:
        self._chunks = list(chunks)
        self._fail_with = fail_with
        self.closed = False

    def __iter__(self) -> Iterator[bytes]:
        for chunk in self._chunks:
            yield chunk
        if self._fail_with is not None:
            raise self._fail_with

    def close(self) -> None:
        self.closed = True


# -- attachment pipeline fakes -------------------------------------------------


class FakeConnections:
    def __init__(self, profiles: Iterable[ConnectionProfile] = ()) -> None:
        self.profiles = {p.id: p for p in profiles}

    def find_by_id(self, profile_id: str) -> Optional[ConnectionProfile]:
        return self.profiles.get(profile_id)

    def find_by_user_id(self, user_id: str) -> List[ConnectionProfile]:
        return list(self.profiles.values())


class FakeApiKeys:
    def __init__(self, records: Iterable[ApiKeyRecord] = ()) -> None:
        self.records = {r.id: r for r in records}

    def find_by_id(self, key_id: str) -> Optional[ApiKeyRecord]:
        return self.records.get(key_id)


class FakeChatSettings:
    def __init__(self, settings: Optional[ChatSettings] = None) -> None:
        self.settings = settings

    def find_by_user_id(self, user_id: str) -> Optional[ChatSettings]:
        return self.settings


class FakeCredentials:
    def __init__(self) -> None:
        self.calls: List[Tuple[str, str, str, str]] = []

    def decrypt(self, ciphertext: str, iv: str, auth_tag: str, user_id: str) -> str:
        self.calls.append((ciphertext, iv, auth_tag, user_id))
        return f"plain-{ciphertext}"


class FakeFiles:
    def __init__(self, contents: Optional[Dict[str, Union[bytes, str]]] = None) -> None:
        self.contents = dict(contents or {})

    def read(self, path: str) -> Union[bytes, str]:
        if path not in self.contents:
            raise FileNotFoundError(f"ENOENT: no such file or directory, open '{path}'")
        return self.contents[path]


def make_repositories(
    profiles: Iterable[ConnectionProfile] = (),
    *,
    settings: Optional[ChatSettings] = None,
    keys: Iterable[ApiKeyRecord] = (),
    files: Optional[Dict[str, Union[bytes, str]]] = None,
) -> Repositories:
    return Repositories(
        connections=FakeConnections(profiles),
        api_keys=FakeApiKeys(keys),
        chat_settings=FakeChatSettings(settings),
        credentials=FakeCredentials(),
        files=FakeFiles(files),
    )


@dataclass
class RecordingPlugin:
    """Stands in for a vendor plugin in the fallback pipeline."""

    reply: str = "A detailed description of a sunny meadow"
    finish_reason: str = "stop"
    completion_tokens: int = 0
    raises: Optional[Exception] = None
    calls: List[Tuple[Any, Optional[str]]] = field(default_factory=list)

    def send_message(self, params, api_key):
        self.calls.append((params, api_key))
        if self.raises is not None:
            raise self.raises
        return LLMResponse(
            content=self.reply,
            finish_reason=self.finish_reason,
            usage=TokenUsage.of(10, self.completion_tokens),
        )


__all__ = [
    "MockVendor",
    "sse",
    "ndjson",
    "ScriptedStream",
    "make_repositories",
    "RecordingPlugin",
]
