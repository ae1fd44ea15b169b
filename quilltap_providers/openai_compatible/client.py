"""OpenAI-compatible provider plugin.

Purpose:
    Chat completions against self-hosted or third-party servers that speak
    the OpenAI API (LM Studio, vLLM, llama.cpp server). The base URL is the
    one setting that matters; an API key is optional.

External dependencies:
    - ``httpx`` via the shared client pool (no SDK).

Failure semantics:
    - Attachment support differs between servers, so none are sent: every
      attachment is reported failed and the message text goes out alone.
    - Image generation raises ``ProviderError(code=unsupported)``.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from ..base.models import AttachmentResults, FileAttachment, LLMMessage
from ..plugins.openai_style import OpenAIStylePlugin
from .manifest import MANIFEST

ATTACHMENTS_NOT_SUPPORTED = (
    "OpenAI-compatible provider file attachment support varies by implementation (not yet implemented)"
)


class OpenAICompatiblePlugin(OpenAIStylePlugin):
    MANIFEST = MANIFEST
    PROVIDER_KEY = "openai_compatible"

    def _headers(self, api_key: Optional[str]) -> Dict[str, str]:
        # many local servers ignore the header but reject a missing one
        return super()._headers(api_key or "not-needed")

    def _partition_attachments(self, message: LLMMessage, results: AttachmentResults) -> List[FileAttachment]:
        for att in message.attachments:
            results.mark_failed(att.id, ATTACHMENTS_NOT_SUPPORTED)
        return []


__all__ = ["OpenAICompatiblePlugin", "ATTACHMENTS_NOT_SUPPORTED"]
