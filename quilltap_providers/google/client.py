"""Google Gemini provider plugin.

Purpose:
    Gemini chat over ``generateContent`` / ``streamGenerateContent`` with
    vision input, function calling and Google Search grounding, plus image
    generation (Gemini image models inline, Imagen through ``:predict``).

External dependencies:
    - ``httpx`` via the shared client pool (no SDK).

Request shaping:
    - Assistant turns use the ``model`` role; system messages go to
      ``systemInstruction``.
    - ``params.extra["web_search"]`` appends ``{"googleSearch": {}}`` to tools.
    - The API key travels as the ``key`` query parameter.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from ..base.errors import ErrorCode, ProviderError
from ..base.models import (
    AttachmentResults,
    ImageGenParams,
    ImageGenResponse,
    LLMMessage,
    LLMParams,
    LLMResponse,
    TokenUsage,
    ToolCallRequest,
)
from ..base.streaming import StreamState
from ..config.defaults import DEFAULT_TEMPERATURE, GOOGLE_DEFAULT_IMAGE_MODEL
from ..plugins.base_plugin import BaseProviderPlugin
from ..tools import format_google_tools, parse_google_tool_calls
from .helpers import (
    SAFETY_SETTINGS,
    extract_inline_images,
    extract_predictions,
    finish_reason,
    generation_config,
    model_ids,
    response_text,
    translate_stream_event,
)
from .manifest import MANIFEST


class GooglePlugin(BaseProviderPlugin):
    MANIFEST = MANIFEST
    PROVIDER_KEY = "google"

    def _query(self, api_key: Optional[str], *, stream: bool = False) -> Dict[str, str]:
        query = {"key": api_key} if api_key else {}
        if stream:
            query["alt"] = "sse"
        return query

    def _chat_path(self, params: LLMParams, *, stream: bool) -> str:
        if stream:
            return f"models/{params.model}:streamGenerateContent"
        return f"models/{params.model}:generateContent"

    def _format_message(self, message: LLMMessage, results: AttachmentResults) -> Dict[str, Any]:
        parts: List[Dict[str, Any]] = []
        if message.content:
            parts.append({"text": message.content})
        for att in self._partition_attachments(message, results):
            parts.append({"inlineData": {"mimeType": att.mime_type, "data": att.data}})
            results.mark_sent(att.id)
        return {"role": "model" if message.role == "assistant" else "user", "parts": parts}

    def _build_payload(self, params: LLMParams, results: AttachmentResults, *, stream: bool) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "contents": [self._format_message(m, results) for m in params.non_system_messages()],
            "generationConfig": generation_config(params),
            "safetySettings": SAFETY_SETTINGS,
        }
        system = params.system_prompt()
        if system:
            payload["systemInstruction"] = {"parts": [{"text": system}]}
        tools = self.format_tools(params.tools) if params.tools else []
        if params.extra.get("web_search") and self.capabilities.web_search:
            tools.append({"googleSearch": {}})
        if tools:
            payload["tools"] = tools
        return payload

    def _parse_response(self, data: Dict[str, Any], params: LLMParams, results: AttachmentResults) -> LLMResponse:
        usage = data.get("usageMetadata") or {}
        return LLMResponse(
            content=response_text(data),
            finish_reason=finish_reason(data) or "STOP",
            usage=TokenUsage.of(
                usage.get("promptTokenCount"), usage.get("candidatesTokenCount"), usage.get("totalTokenCount")
            ),
            raw=data,
            attachment_results=results,
        )

    def _translate_event(self, event: Any, state: StreamState) -> Optional[str]:
        return translate_stream_event(event, state)

    def _parse_models(self, data: Any) -> List[str]:
        return model_ids(data)

    # -- images ------------------------------------------------------------
    def _generate_image(self, params: ImageGenParams, api_key: Optional[str]) -> ImageGenResponse:
        model = params.model or GOOGLE_DEFAULT_IMAGE_MODEL
        if model.startswith("imagen"):
            return self._predict_images(params, model, api_key)
        config: Dict[str, Any] = {"temperature": DEFAULT_TEMPERATURE}
        if params.aspect_ratio:
            config["imageConfig"] = {"aspectRatio": params.aspect_ratio}
        body = {
            "contents": [{"role": "user", "parts": [{"text": params.prompt}]}],
            "generationConfig": config,
            "safetySettings": SAFETY_SETTINGS,
        }
        data = self._post_json(f"models/{model}:generateContent", body, api_key=api_key, purpose="images", model=model)
        images = extract_inline_images(data)
        if not images:
            raise ProviderError(
                code=ErrorCode.VALIDATION,
                message="No images generated in response",
                provider=self.provider_name,
                model=model,
            )
        return ImageGenResponse(images=images, raw=data)

    def _predict_images(self, params: ImageGenParams, model: str, api_key: Optional[str]) -> ImageGenResponse:
        parameters: Dict[str, Any] = {"sampleCount": params.n or 1}
        if params.aspect_ratio:
            parameters["aspectRatio"] = params.aspect_ratio
        body = {"instances": [{"prompt": params.prompt}], "parameters": parameters}
        data = self._post_json(f"models/{model}:predict", body, api_key=api_key, purpose="images", model=model)
        return ImageGenResponse(images=extract_predictions(data), raw=data)

    # -- tools -------------------------------------------------------------
    def format_tools(self, tools: Optional[Sequence[Dict[str, Any]]]) -> List[Dict[str, Any]]:
        """Return the ``tools`` entry list: one ``functionDeclarations`` group, or ``[]``."""
        declarations = format_google_tools(tools)
        return [{"functionDeclarations": declarations}] if declarations else []

    def _parse_tool_calls(self, raw: Any) -> List[ToolCallRequest]:
        return parse_google_tool_calls(raw)


__all__ = ["GooglePlugin"]
