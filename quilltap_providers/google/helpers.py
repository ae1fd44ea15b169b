"""Gemini ``generateContent`` helpers.

Request bodies, response text extraction, stream translation and image
extraction for the Generative Language API. Stream events are whole
``GenerateContentResponse`` objects delivered over SSE (``alt=sse``); the
last one carries ``usageMetadata``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..base.models import GeneratedImage, LLMParams
from ..base.streaming import StreamState
from ..config.defaults import DEFAULT_MAX_TOKENS, DEFAULT_TEMPERATURE, DEFAULT_TOP_P

SAFETY_CATEGORIES = (
    "HARM_CATEGORY_HATE_SPEECH",
    "HARM_CATEGORY_SEXUALLY_EXPLICIT",
    "HARM_CATEGORY_DANGEROUS_CONTENT",
    "HARM_CATEGORY_HARASSMENT",
)

SAFETY_SETTINGS = [{"category": c, "threshold": "BLOCK_NONE"} for c in SAFETY_CATEGORIES]


def generation_config(params: LLMParams) -> Dict[str, Any]:
    cfg: Dict[str, Any] = {
        "temperature": params.temperature if params.temperature is not None else DEFAULT_TEMPERATURE,
        "maxOutputTokens": params.max_tokens if params.max_tokens is not None else DEFAULT_MAX_TOKENS,
        "topP": params.top_p if params.top_p is not None else DEFAULT_TOP_P,
    }
    if params.stop:
        cfg["stopSequences"] = list(params.stop)
    return cfg


def candidate_parts(data: Dict[str, Any]) -> List[Dict[str, Any]]:
    candidates = data.get("candidates") or []
    if not candidates:
        return []
    content = candidates[0].get("content") or {}
    return [p for p in content.get("parts") or [] if isinstance(p, dict)]


def response_text(data: Dict[str, Any]) -> str:
    """Text of the first candidate; thought parts are skipped."""
    return "".join(p.get("text") or "" for p in candidate_parts(data) if not p.get("thought"))


def finish_reason(data: Dict[str, Any]) -> Optional[str]:
    candidates = data.get("candidates") or []
    return candidates[0].get("finishReason") if candidates else None


def translate_stream_event(event: Dict[str, Any], state: StreamState) -> Optional[str]:
    """Return the text of one streamed response; keep usage and parts on ``state``."""
    data = event["data"]
    acc = state.vendor.setdefault(
        "raw_response", {"candidates": [{"content": {"role": "model", "parts": []}, "finishReason": None}]}
    )
    usage = data.get("usageMetadata")
    if usage:
        state.prompt_tokens = usage.get("promptTokenCount")
        state.completion_tokens = usage.get("candidatesTokenCount")
        state.total_tokens = usage.get("totalTokenCount")
        acc["usageMetadata"] = usage
    reason = finish_reason(data)
    if reason:
        state.finish_reason = reason
        acc["candidates"][0]["finishReason"] = reason
    parts = candidate_parts(data)
    acc_parts = acc["candidates"][0]["content"]["parts"]
    acc_parts.extend(p for p in parts if "functionCall" in p)
    text = "".join(p.get("text") or "" for p in parts if not p.get("thought"))
    return text or None


def extract_inline_images(data: Dict[str, Any]) -> List[GeneratedImage]:
    """Collect ``inlineData`` parts of every candidate as generated images."""
    images: List[GeneratedImage] = []
    for candidate in data.get("candidates") or []:
        for part in (candidate.get("content") or {}).get("parts") or []:
            inline = part.get("inlineData") if isinstance(part, dict) else None
            if inline and inline.get("data"):
                images.append(GeneratedImage(data=inline["data"], mime_type=inline.get("mimeType") or "image/png"))
    return images


def extract_predictions(data: Dict[str, Any]) -> List[GeneratedImage]:
    """Images from an Imagen ``:predict`` response."""
    return [
        GeneratedImage(data=p["bytesBase64Encoded"], mime_type=p.get("mimeType") or "image/png")
        for p in data.get("predictions") or []
        if isinstance(p, dict) and p.get("bytesBase64Encoded")
    ]


def model_ids(data: Dict[str, Any]) -> List[str]:
    """Model ids (``models/`` prefix removed) that can generate content or images."""
    out: List[str] = []
    for model in data.get("models") or []:
        if not isinstance(model, dict) or not model.get("name"):
            continue
        methods = model.get("supportedGenerationMethods") or []
        if methods and not {"generateContent", "predict"} & set(methods):
            continue
        name = model["name"]
        out.append(name[len("models/"):] if name.startswith("models/") else name)
    return out


__all__ = [
    "SAFETY_SETTINGS",
    "generation_config",
    "candidate_parts",
    "response_text",
    "finish_reason",
    "translate_stream_event",
    "extract_inline_images",
    "extract_predictions",
    "model_ids",
]
