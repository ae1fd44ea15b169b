"""OpenAI image generation helpers.

Size and parameter rules differ per image model; these functions keep the
request valid for the chosen model instead of letting the API reject it.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from ..base.models import GeneratedImage, ImageGenParams, ImageGenResponse

DEFAULT_IMAGE_SIZE = "1024x1024"

_MODEL_SIZES = {
    "gpt-image-1": ("1024x1024", "1024x1536", "1536x1024", "auto"),
    "dall-e-3": ("1024x1024", "1024x1792", "1792x1024"),
    "dall-e-2": ("256x256", "512x512", "1024x1024"),
}


def normalize_image_size(size: Optional[str], model: str) -> str:
    """Return ``size`` when ``model`` accepts it, else the square default."""
    if not size:
        return DEFAULT_IMAGE_SIZE
    allowed = _MODEL_SIZES.get(model, _MODEL_SIZES["dall-e-2"])
    return size if size in allowed else DEFAULT_IMAGE_SIZE


def build_image_payload(params: ImageGenParams, model: str) -> Dict[str, Any]:
    """Build the ``images/generations`` body for ``model``.

    ``gpt-image-1`` takes neither ``response_format`` nor the DALL-E
    ``quality``/``style`` hints.
    """
    payload: Dict[str, Any] = {
        "model": model,
        "prompt": params.prompt,
        "n": params.n or 1,
        "size": normalize_image_size(params.size, model),
    }
    if model != "gpt-image-1":
        payload["response_format"] = "b64_json"
        payload["quality"] = params.quality or "standard"
        payload["style"] = params.style or "vivid"
    return payload


def parse_image_response(data: Dict[str, Any]) -> ImageGenResponse:
    items = data.get("data")
    if not isinstance(items, list):
        raise ValueError("Invalid response from OpenAI Images API")
    return ImageGenResponse(
        images=[
            GeneratedImage(
                data=item.get("b64_json") or item.get("url") or "",
                mime_type="image/png",
                revised_prompt=item.get("revised_prompt"),
            )
            for item in items
        ],
        raw=data,
    )


__all__ = ["normalize_image_size", "build_image_payload", "parse_image_response", "DEFAULT_IMAGE_SIZE"]
