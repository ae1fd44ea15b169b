"""OpenAI-compatible plugin tests (local servers such as LM Studio or vLLM)."""
from __future__ import annotations

import pytest

from quilltap_providers.base.errors import ErrorCode, ProviderError
from quilltap_providers.base.models import FileAttachment, ImageGenParams, LLMMessage, LLMParams
from quilltap_providers.bootstrap import bootstrap_registry, list_available_models
from quilltap_providers.openai_compatible import ATTACHMENTS_NOT_SUPPORTED, OpenAICompatiblePlugin

from ..helpers import sse

REPLY = {
    "choices": [{"message": {"role": "assistant", "content": "local reply"}, "finish_reason": "length"}],
    "usage": {"prompt_tokens": 4, "completion_tokens": 2},
}


def _params(**kw) -> LLMParams:
    kw.setdefault("messages", [LLMMessage(role="user", content="ping")])
    kw.setdefault("model", "qwen2.5-7b")
    return LLMParams(**kw)


def test_defaults_to_local_server_and_placeholder_key(vendor):
    vendor.json("POST", "/v1/chat/completions", REPLY)
    response = OpenAICompatiblePlugin().send_message(_params(), None)

    assert str(vendor.last.url) == "http://localhost:8080/v1/chat/completions"  # nosec B101
    assert vendor.last.headers["Authorization"] == "Bearer not-needed"  # nosec B101
    body = vendor.last_json()
    assert (body["temperature"], body["max_tokens"], body["top_p"]) == (0.7, 1000, 1.0)  # nosec B101
    assert response.content == "local reply" and response.finish_reason == "length"  # nosec B101
    assert response.usage.total_tokens == 6  # nosec B101


def test_custom_base_url_and_real_key(vendor):
    vendor.json("POST", "/api/v1/chat/completions", REPLY)
    OpenAICompatiblePlugin(base_url="http://gpu-box:1234/api/v1/").send_message(_params(), "secret")
    assert str(vendor.last.url) == "http://gpu-box:1234/api/v1/chat/completions"  # nosec B101
    assert vendor.last.headers["Authorization"] == "Bearer secret"  # nosec B101


def test_every_attachment_is_reported_failed(vendor):
    vendor.json("POST", "/chat/completions", REPLY)
    message = LLMMessage(
        role="user",
        content="look",
        attachments=[FileAttachment(id="a", filepath="/a", filename="a.png", mime_type="image/png", data="QQ==")],
    )
    response = OpenAICompatiblePlugin().send_message(_params(messages=[message]), None)
    assert vendor.last_json()["messages"] == [{"role": "user", "content": "look"}]  # nosec B101
    assert response.attachment_results.sent == []  # nosec B101
    assert response.attachment_results.failed[0].error == ATTACHMENTS_NOT_SUPPORTED  # nosec B101


def test_streaming(vendor):
    vendor.stream(
        "POST",
        "/chat/completions",
        sse(
            {"choices": [{"delta": {"content": "a"}}]},
            {"choices": [{"delta": {"content": "b"}, "finish_reason": "stop"}]},
            done=True,
        ),
    )
    chunks = list(OpenAICompatiblePlugin().stream_message(_params(), None))
    assert "".join(c.content for c in chunks) == "ab"  # nosec B101
    assert chunks[-1].done and chunks[-1].finish_reason == "stop"  # nosec B101


def test_models_listing_keeps_all_ids(vendor):
    vendor.json("GET", "/v1/models", {"data": [{"id": "qwen2.5-7b"}, {"id": "llama-3-8b"}, {"object": "model"}]})
    assert OpenAICompatiblePlugin().get_available_models(None) == ["llama-3-8b", "qwen2.5-7b"]  # nosec B101


def test_missing_models_endpoint_means_invalid_key(vendor):
    assert OpenAICompatiblePlugin().validate_api_key(None) is False  # nosec B101


def test_image_generation_unsupported(vendor):
    with pytest.raises(ProviderError) as info:
        OpenAICompatiblePlugin().generate_image(ImageGenParams(prompt="x"), None)
    assert info.value.code is ErrorCode.UNSUPPORTED  # nosec B101
    assert vendor.requests == []  # nosec B101


def test_malformed_base_url_is_reported_not_raised(vendor):
    plugin = OpenAICompatiblePlugin(base_url="http://localhost:99x/v1")
    assert plugin.validate_api_key(None) is False  # nosec B101
    assert plugin.get_available_models(None) == []  # nosec B101
    models = list_available_models(bootstrap_registry(), "OPENAI_COMPATIBLE", None, base_url="http://localhost:99x/v1")
    assert models == []  # nosec B101

    with pytest.raises(ProviderError) as info:
        plugin.send_message(_params(), None)
    assert info.value.code is ErrorCode.VALIDATION  # nosec B101

    with pytest.raises(ProviderError) as info:
        list(plugin.stream_message(_params(), None))
    assert info.value.code is ErrorCode.VALIDATION  # nosec B101
    assert vendor.requests == []  # nosec B101
