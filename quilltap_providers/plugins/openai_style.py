"""Shared base for plugins speaking the OpenAI chat-completions wire format.

Both ``OPENAI`` and ``OPENAI_COMPATIBLE`` post to ``chat/completions``, stream
SSE ``chat.completion.chunk`` events terminated by ``data: [DONE]`` and list
models from ``models``. Subclasses differ in sampling fields, attachment
handling and extras (web search, image generation).

Streamed tool calls arrive as fragments keyed by ``index``; the translator
merges them into a whole-response payload so ``parse_tool_calls`` works on
the terminal chunk's ``raw_response`` exactly as on a buffered response.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from ..base.models import AttachmentResults, LLMMessage, LLMParams, LLMResponse, TokenUsage, ToolCallRequest
from ..base.streaming import StreamState
from ..config.defaults import DEFAULT_MAX_TOKENS, DEFAULT_TEMPERATURE, DEFAULT_TOP_P
from ..tools import format_openai_tools, parse_openai_tool_calls
from .base_plugin import BaseProviderPlugin


def _empty_accumulator() -> Dict[str, Any]:
    return {
        "id": None,
        "choices": [{"message": {"role": "assistant", "content": "", "tool_calls": []}, "finish_reason": None}],
        "usage": {"prompt_tokens": 0, "completion_tokens": 0, "total_tokens": 0},
    }


def _merge_tool_call_deltas(target: List[Dict[str, Any]], deltas: Sequence[Dict[str, Any]]) -> None:
    for delta in deltas:
        index = delta.get("index") or 0
        # fragments extend the list one call at a time; anything else is corrupt
        if not isinstance(index, int) or isinstance(index, bool) or not 0 <= index <= len(target):
            continue
        if index == len(target):
            target.append({"id": "", "type": "function", "function": {"name": "", "arguments": ""}})
        call = target[index]
        if delta.get("id"):
            call["id"] = delta["id"]
        fn = delta.get("function") or {}
        if fn.get("name"):
            call["function"]["name"] = fn["name"]
        if fn.get("arguments"):
            call["function"]["arguments"] += fn["arguments"]


class OpenAIStylePlugin(BaseProviderPlugin):
    """Chat-completions request/response mapping shared by OpenAI-family vendors."""

    MAX_TOKENS_FIELD = "max_tokens"

    def _headers(self, api_key: Optional[str]) -> Dict[str, str]:
        return {"Content-Type": "application/json", "Authorization": f"Bearer {api_key}"}

    def _chat_path(self, params: LLMParams, *, stream: bool) -> str:
        return "chat/completions"

    # -- request -----------------------------------------------------------
    def _format_message(self, message: LLMMessage, results: AttachmentResults) -> Dict[str, Any]:
        usable = self._partition_attachments(message, results)
        if not usable:
            return {"role": message.role, "content": message.content}
        content: List[Dict[str, Any]] = []
        if message.content:
            content.append({"type": "text", "text": message.content})
        for att in usable:
            content.append(
                {
                    "type": "image_url",
                    "image_url": {"url": f"data:{att.mime_type};base64,{att.data}", "detail": "auto"},
                }
            )
            results.mark_sent(att.id)
        return {"role": message.role, "content": content}

    def _sampling(self, params: LLMParams) -> Dict[str, Any]:
        return {
            "temperature": params.temperature if params.temperature is not None else DEFAULT_TEMPERATURE,
            self.MAX_TOKENS_FIELD: params.max_tokens if params.max_tokens is not None else DEFAULT_MAX_TOKENS,
            "top_p": params.top_p if params.top_p is not None else DEFAULT_TOP_P,
        }

    def _extras(self, params: LLMParams) -> Dict[str, Any]:
        return {}

    def _build_payload(self, params: LLMParams, results: AttachmentResults, *, stream: bool) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "model": params.model,
            "messages": [self._format_message(m, results) for m in params.messages],
        }
        payload.update(self._sampling(params))
        if params.stop:
            payload["stop"] = list(params.stop)
        if params.tools and self.capabilities.tool_calling:
            payload["tools"] = self.format_tools(params.tools)
            payload["tool_choice"] = "auto"
        payload.update(self._extras(params))
        if stream:
            payload["stream"] = True
            payload["stream_options"] = {"include_usage": True}
        return payload

    # -- response ----------------------------------------------------------
    def _parse_response(self, data: Dict[str, Any], params: LLMParams, results: AttachmentResults) -> LLMResponse:
        choices = data.get("choices") or [{}]
        choice = choices[0] or {}
        message = choice.get("message") or {}
        usage = data.get("usage") or {}
        return LLMResponse(
            content=message.get("content") or "",
            finish_reason=choice.get("finish_reason") or "stop",
            usage=TokenUsage.of(usage.get("prompt_tokens"), usage.get("completion_tokens"), usage.get("total_tokens")),
            raw=data,
            attachment_results=results,
        )

    def _translate_event(self, event: Any, state: StreamState) -> Optional[str]:
        data = event["data"]
        acc = state.vendor.setdefault("raw_response", _empty_accumulator())
        if data.get("id") and state.response_id is None:
            state.response_id = data["id"]
            acc["id"] = data["id"]
        usage = data.get("usage")
        if usage:
            state.prompt_tokens = usage.get("prompt_tokens")
            state.completion_tokens = usage.get("completion_tokens")
            state.total_tokens = usage.get("total_tokens")
            acc["usage"] = usage
        choices = data.get("choices") or []
        if not choices:
            return None
        choice = choices[0]
        delta = choice.get("delta") or {}
        message = acc["choices"][0]["message"]
        if delta.get("tool_calls"):
            _merge_tool_call_deltas(message["tool_calls"], delta["tool_calls"])
        if choice.get("finish_reason"):
            state.finish_reason = choice["finish_reason"]
            acc["choices"][0]["finish_reason"] = choice["finish_reason"]
        content = delta.get("content")
        if content:
            message["content"] += content
        return content or None

    # -- tools -------------------------------------------------------------
    def format_tools(self, tools: Optional[Sequence[Dict[str, Any]]]) -> List[Dict[str, Any]]:
        return format_openai_tools(tools)

    def _parse_tool_calls(self, raw: Any) -> List[ToolCallRequest]:
        return parse_openai_tool_calls(raw)


__all__ = ["OpenAIStylePlugin"]
