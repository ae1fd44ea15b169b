"""
Image generation DTOs.

Only plugins whose capabilities declare ``image_generation`` implement
``generate_image``; the request and response shapes are shared.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class ImageGenParams:
    """Image generation request.

    Attributes:
        prompt: Text prompt.
        model: Optional model override.
        n: Number of images.
        size: Vendor size string (e.g. ``"1024x1024"``).
        quality: Optional quality hint (``"standard"``/``"hd"``).
        style: Optional style hint (``"vivid"``/``"natural"``).
        aspect_ratio: Optional aspect ratio (``"16:9"``) for vendors that take one.
    """

    prompt: str
    model: Optional[str] = None
    n: int = 1
    size: Optional[str] = None
    quality: Optional[str] = None
    style: Optional[str] = None
    aspect_ratio: Optional[str] = None


@dataclass
class GeneratedImage:
    data: str
    mime_type: str = "image/png"
    revised_prompt: Optional[str] = None


@dataclass
class ImageGenResponse:
    images: List[GeneratedImage] = field(default_factory=list)
    raw: Optional[Any] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "images": [
                {"mime_type": i.mime_type, "revised_prompt": i.revised_prompt, "bytes_b64": len(i.data)}
                for i in self.images
            ]
        }


__all__ = ["ImageGenParams", "GeneratedImage", "ImageGenResponse"]
