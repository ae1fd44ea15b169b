"""Capability negotiation tests.

Covers:
- MIME support by provider name or connection profile
- disabled and unknown providers
- feature questions with camelCase and snake_case names
- splitting attachments into native and fallback sets
"""
from __future__ import annotations

from types import SimpleNamespace

import pytest

from quilltap_providers.base.models import FileAttachment
from quilltap_providers.capabilities import CapabilityNegotiator, classify_mime_type


def _att(att_id: str, mime: str) -> FileAttachment:
    return FileAttachment(id=att_id, filepath=f"/files/{att_id}", filename=att_id, mime_type=mime)


@pytest.mark.parametrize(
    "mime,kind",
    [
        ("text/plain", "text"),
        ("text/markdown; charset=utf-8", "text"),
        ("application/json", "text"),
        ("application/ld+json", "text"),
        ("image/PNG", "image"),
        ("application/pdf", "other"),
        ("", "other"),
    ],
)
def test_classify_mime_type(mime, kind):
    assert classify_mime_type(mime) == kind  # nosec B101


def test_supports_mime_type_by_name_and_profile(registry):
    negotiator = CapabilityNegotiator(registry)
    assert negotiator.supports_mime_type("OPENAI", "image/png")  # nosec B101
    assert not negotiator.supports_mime_type("OPENAI", "application/pdf")  # nosec B101
    profile = SimpleNamespace(provider="ANTHROPIC")
    assert negotiator.supports_mime_type(profile, "application/pdf")  # nosec B101
    assert not negotiator.supports_mime_type("OPENAI_COMPATIBLE", "image/png")  # nosec B101


def test_disabled_provider_supports_nothing(registry):
    negotiator = CapabilityNegotiator(registry)
    registry.set_enabled("OPENAI", False)
    assert not negotiator.supports_mime_type("OPENAI", "image/png")  # nosec B101
    assert not negotiator.supports_feature("OPENAI", "chat")  # nosec B101
    assert not negotiator.supports_feature("OPENAI", "streaming")  # nosec B101


def test_unknown_provider_answers_false_not_raise(registry):
    negotiator = CapabilityNegotiator(registry)
    assert not negotiator.supports_mime_type("MYSTERY", "image/png")  # nosec B101
    assert not negotiator.supports_feature("MYSTERY", "tool_calling")  # nosec B101


def test_supports_feature(registry):
    negotiator = CapabilityNegotiator(registry)
    assert negotiator.supports_feature("OPENAI", "imageGeneration")  # nosec B101
    assert negotiator.supports_feature("GOOGLE", "web_search")  # nosec B101
    assert not negotiator.supports_feature("ANTHROPIC", "image_generation")  # nosec B101
    assert negotiator.supports_feature("OLLAMA", "toolCalling")  # nosec B101
    assert negotiator.supports_feature("OLLAMA", "streaming")  # nosec B101
    assert negotiator.supports_feature("OLLAMA", "attachments")  # nosec B101
    assert not negotiator.supports_feature("OPENAI_COMPATIBLE", "attachments")  # nosec B101
    assert not negotiator.supports_feature("OPENAI", "teleportation")  # nosec B101


def test_negotiate_attachments_keeps_order(registry):
    negotiator = CapabilityNegotiator(registry)
    atts = [_att("a", "image/png"), _att("b", "text/plain"), _att("c", "image/gif"), _att("d", "application/pdf")]
    plan = negotiator.negotiate_attachments("OLLAMA", atts)
    assert [a.id for a in plan.native] == ["a"]  # nosec B101
    assert [a.id for a in plan.needs_fallback] == ["b", "c", "d"]  # nosec B101
    assert plan.all_native is False  # nosec B101

    assert negotiator.negotiate_attachments("ANTHROPIC", [atts[0], atts[3]]).all_native  # nosec B101
