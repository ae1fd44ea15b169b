"""Anthropic provider plugin.

Purpose:
    Claude chat over the Messages API (buffered and SSE streaming) with image
    and PDF input and tool use.

External dependencies:
    - ``httpx`` via the shared client pool (no SDK).

Request shaping:
    - System messages are lifted into the top-level ``system`` field.
    - ``temperature`` and ``top_p`` are mutually exclusive on this API.
    - Tools are translated to ``{name, description, input_schema}``.

Failure semantics:
    - ``error`` events inside a stream end it with an error terminal chunk.
    - Image generation raises ``ProviderError(code=unsupported)``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from ..base.models import AttachmentResults, LLMMessage, LLMParams, LLMResponse, TokenUsage, ToolCallRequest
from ..base.streaming import StreamState
from ..config.defaults import ANTHROPIC_API_VERSION
from ..plugins.base_plugin import BaseProviderPlugin
from ..tools import format_anthropic_tools, parse_anthropic_tool_calls
from .helpers import attachment_block, response_text, sampling_fields, translate_stream_event
from .manifest import MANIFEST


class AnthropicPlugin(BaseProviderPlugin):
    MANIFEST = MANIFEST
    PROVIDER_KEY = "anthropic"

    def _headers(self, api_key: Optional[str]) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "x-api-key": api_key or "",
            "anthropic-version": ANTHROPIC_API_VERSION,
        }

    def _chat_path(self, params: LLMParams, *, stream: bool) -> str:
        return "messages"

    def _format_message(self, message: LLMMessage, results: AttachmentResults) -> Dict[str, Any]:
        role = "user" if message.role == "user" else "assistant"
        usable = self._partition_attachments(message, results)
        if not usable:
            return {"role": role, "content": message.content}
        content: List[Dict[str, Any]] = []
        if message.content:
            content.append({"type": "text", "text": message.content})
        for att in usable:
            content.append(attachment_block(att.mime_type, att.data or ""))
            results.mark_sent(att.id)
        return {"role": role, "content": content}

    def _build_payload(self, params: LLMParams, results: AttachmentResults, *, stream: bool) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "model": params.model,
            "messages": [self._format_message(m, results) for m in params.non_system_messages()],
        }
        system = params.system_prompt()
        if system:
            payload["system"] = system
        payload.update(sampling_fields(params))
        if params.stop:
            payload["stop_sequences"] = list(params.stop)
        if params.tools:
            payload["tools"] = self.format_tools(params.tools)
        if stream:
            payload["stream"] = True
        return payload

    def _parse_response(self, data: Dict[str, Any], params: LLMParams, results: AttachmentResults) -> LLMResponse:
        usage = data.get("usage") or {}
        return LLMResponse(
            content=response_text(data),
            finish_reason=data.get("stop_reason") or "stop",
            usage=TokenUsage.of(usage.get("input_tokens"), usage.get("output_tokens")),
            raw=data,
            attachment_results=results,
        )

    def _translate_event(self, event: Any, state: StreamState) -> Optional[str]:
        return translate_stream_event(event, state)

    def format_tools(self, tools: Optional[Sequence[Dict[str, Any]]]) -> List[Dict[str, Any]]:
        return format_anthropic_tools(tools)

    def _parse_tool_calls(self, raw: Any) -> List[ToolCallRequest]:
        return parse_anthropic_tool_calls(raw)


__all__ = ["AnthropicPlugin"]
