"""OpenAI provider plugin.

Purpose:
    Chat completions (buffered and SSE streaming) with vision input, tool
    calling and native web search, plus DALL-E / gpt-image image generation.

External dependencies:
    - ``httpx`` via the shared client pool (no SDK).

Request shaping:
    - ``max_completion_tokens`` replaces ``max_tokens`` (required by the
      reasoning models, accepted by all).
    - ``temperature`` is sent only when the caller set it; several models
      reject any value other than their default.
    - ``params.extra["web_search"]`` adds ``web_search_options``.

Model listing:
    - ``models`` filtered to ids containing ``"gpt"``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..base.errors import ErrorCode, ProviderError
from ..base.models import ImageGenParams, ImageGenResponse, LLMParams
from ..config.defaults import DEFAULT_MAX_TOKENS, DEFAULT_TOP_P, OPENAI_DEFAULT_IMAGE_MODEL
from ..plugins.openai_style import OpenAIStylePlugin
from .helpers import build_image_payload, parse_image_response
from .manifest import MANIFEST


class OpenAIPlugin(OpenAIStylePlugin):
    MANIFEST = MANIFEST
    PROVIDER_KEY = "openai"
    MAX_TOKENS_FIELD = "max_completion_tokens"

    def _sampling(self, params: LLMParams) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            self.MAX_TOKENS_FIELD: params.max_tokens if params.max_tokens is not None else DEFAULT_MAX_TOKENS,
            "top_p": params.top_p if params.top_p is not None else DEFAULT_TOP_P,
        }
        if params.temperature is not None:
            out["temperature"] = params.temperature
        return out

    def _extras(self, params: LLMParams) -> Dict[str, Any]:
        if params.extra.get("web_search") and self.capabilities.web_search:
            return {"web_search_options": {}}
        return {}

    def _parse_models(self, data: Any) -> List[str]:
        return [m for m in super()._parse_models(data) if "gpt" in m]

    def _generate_image(self, params: ImageGenParams, api_key: Optional[str]) -> ImageGenResponse:
        model = params.model or OPENAI_DEFAULT_IMAGE_MODEL
        data = self._post_json(
            "images/generations",
            build_image_payload(params, model),
            api_key=api_key,
            purpose="images",
            model=model,
        )
        try:
            return parse_image_response(data)
        except (ValueError, AttributeError) as exc:
            raise ProviderError(
                code=ErrorCode.VALIDATION,
                message=str(exc),
                provider=self.provider_name,
                model=model,
                raw=exc,
            ) from exc


__all__ = ["OpenAIPlugin"]
