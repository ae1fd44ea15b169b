"""Ollama provider plugin.

Purpose:
    Chat against a local (or remote) Ollama daemon through ``/api/chat``.

External dependencies:
    - ``httpx`` via the shared client pool (no SDK). No API key is used;
      ``validate_api_key`` checks that the daemon answers ``/api/tags``.

Streaming:
    - Newline-delimited JSON; each line carries ``message.content`` and the
      final line has ``done: true`` with ``prompt_eval_count`` /
      ``eval_count``. A line with ``error`` ends the stream with an error
      terminal chunk.

Attachments:
    - Images travel as a base64 ``images`` list on the message; only
      multimodal models make use of them.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from ..base.errors import ErrorCode
from ..base.models import AttachmentResults, LLMMessage, LLMParams, LLMResponse, TokenUsage, ToolCallRequest
from ..base.streaming import StreamState
from ..config.defaults import DEFAULT_MAX_TOKENS, DEFAULT_TEMPERATURE, DEFAULT_TOP_P
from ..plugins.base_plugin import BaseProviderPlugin
from ..tools import format_openai_tools, parse_openai_tool_calls
from .manifest import MANIFEST


class OllamaPlugin(BaseProviderPlugin):
    MANIFEST = MANIFEST
    PROVIDER_KEY = "ollama"
    STREAM_WIRE = "ndjson"

    def _chat_path(self, params: LLMParams, *, stream: bool) -> str:
        return "api/chat"

    def _models_path(self) -> str:
        return "api/tags"

    def _format_message(self, message: LLMMessage, results: AttachmentResults) -> Dict[str, Any]:
        out: Dict[str, Any] = {"role": message.role, "content": message.content}
        images = []
        for att in self._partition_attachments(message, results):
            images.append(att.data)
            results.mark_sent(att.id)
        if images:
            out["images"] = images
        return out

    def _build_payload(self, params: LLMParams, results: AttachmentResults, *, stream: bool) -> Dict[str, Any]:
        options: Dict[str, Any] = {
            "temperature": params.temperature if params.temperature is not None else DEFAULT_TEMPERATURE,
            "num_predict": params.max_tokens if params.max_tokens is not None else DEFAULT_MAX_TOKENS,
            "top_p": params.top_p if params.top_p is not None else DEFAULT_TOP_P,
        }
        if params.stop:
            options["stop"] = list(params.stop)
        payload: Dict[str, Any] = {
            "model": params.model,
            "messages": [self._format_message(m, results) for m in params.messages],
            "stream": stream,
            "options": options,
        }
        if params.tools:
            payload["tools"] = self.format_tools(params.tools)
        return payload

    def _parse_response(self, data: Dict[str, Any], params: LLMParams, results: AttachmentResults) -> LLMResponse:
        message = data.get("message") or {}
        return LLMResponse(
            content=message.get("content") or "",
            finish_reason=data.get("done_reason") or ("stop" if data.get("done") else "length"),
            usage=TokenUsage.of(data.get("prompt_eval_count"), data.get("eval_count")),
            raw=data,
            attachment_results=results,
        )

    def _translate_event(self, event: Any, state: StreamState) -> Optional[str]:
        if event.get("error"):
            state.vendor["stream_error"] = f"{ErrorCode.SERVER_ERROR.value}:{event['error']}"
            state.finished = True
            return None
        message = event.get("message") or {}
        acc = state.vendor.setdefault("raw_response", {"message": {"role": "assistant", "content": ""}})
        if message.get("tool_calls"):
            acc["message"].setdefault("tool_calls", []).extend(message["tool_calls"])
        if event.get("done"):
            state.prompt_tokens = event.get("prompt_eval_count")
            state.completion_tokens = event.get("eval_count")
            state.finish_reason = event.get("done_reason") or "stop"
            acc.update({k: v for k, v in event.items() if k != "message"})
            state.finished = True
        content = message.get("content")
        if content:
            acc["message"]["content"] += content
        return content or None

    def _parse_models(self, data: Any) -> List[str]:
        return [m.get("name") for m in data.get("models") or [] if isinstance(m, dict)]

    def format_tools(self, tools: Optional[Sequence[Dict[str, Any]]]) -> List[Dict[str, Any]]:
        return format_openai_tools(tools)

    def _parse_tool_calls(self, raw: Any) -> List[ToolCallRequest]:
        message = raw.get("message") if isinstance(raw, dict) else None
        return parse_openai_tool_calls(message if isinstance(message, dict) else raw)


__all__ = ["OllamaPlugin"]
