"""Fallback results and tunables.

``AttachmentProcessingResult`` is a successful return value even when its
``type`` is ``"unsupported"``: attachment problems are reported, never raised.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional, Tuple

from ..base.models import FileAttachment
from ..config.defaults import (
    DEFAULT_MAX_TOKENS,
    DEFAULT_TEMPERATURE,
    DESCRIPTION_ERROR_PHRASES,
    DESCRIPTION_MIN_LENGTH,
    IMAGE_DESCRIPTION_PROMPT,
    REASONING_MODEL_MARKERS,
    REASONING_MODEL_MAX_TOKENS,
)

ResultType = Literal["text", "image_description", "unsupported"]


@dataclass
class ProcessingMetadata:
    original_filename: str
    original_mime_type: str
    used_image_description_llm: Optional[bool] = None
    description_profile_id: Optional[str] = None
    description_provider: Optional[str] = None
    description_model: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "original_filename": self.original_filename,
            "original_mime_type": self.original_mime_type,
            "used_image_description_llm": self.used_image_description_llm,
            "description_profile_id": self.description_profile_id,
            "description_provider": self.description_provider,
            "description_model": self.description_model,
        }
        return {k: v for k, v in data.items() if v is not None}


@dataclass
class AttachmentProcessingResult:
    """Outcome of running one attachment through the fallback pipeline.

    Attributes:
        type: ``"text"``, ``"image_description"`` or ``"unsupported"``.
        text_content: Inline text block (``type == "text"``).
        image_description: Generated description (``type == "image_description"``).
        error: Human-readable reason (``type == "unsupported"``). ``None`` on an
            unsupported result means the provider takes the file natively and
            nothing needed converting.
        processing_metadata: Original file identity plus the description profile used.
    """

    type: ResultType
    processing_metadata: ProcessingMetadata
    text_content: Optional[str] = None
    image_description: Optional[str] = None
    error: Optional[str] = None

    @property
    def is_native(self) -> bool:
        return self.type == "unsupported" and self.error is None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"type": self.type, "processing_metadata": self.processing_metadata.to_dict()}
        for key in ("text_content", "image_description", "error"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        return data


@dataclass(frozen=True)
class FallbackConfig:
    """Tunables for the image-description call and its sanity checks.

    ``error_phrases`` and ``min_description_length`` drive the heuristic that
    rejects a successful vendor reply whose text reads like an error message.
    """

    description_prompt: str = IMAGE_DESCRIPTION_PROMPT
    error_phrases: Tuple[str, ...] = DESCRIPTION_ERROR_PHRASES
    min_description_length: int = DESCRIPTION_MIN_LENGTH
    default_temperature: float = DEFAULT_TEMPERATURE
    default_max_tokens: int = DEFAULT_MAX_TOKENS
    reasoning_model_markers: Tuple[str, ...] = REASONING_MODEL_MARKERS
    reasoning_model_max_tokens: int = REASONING_MODEL_MAX_TOKENS


@dataclass
class FallbackOutcome:
    """Result of processing every attachment of one message.

    Attributes:
        native: Attachments the target provider takes as-is.
        results: One result per attachment that needed fallback, in order.
        message_prefix: Formatted results, ready to prepend to the message text.
    """

    native: List[FileAttachment] = field(default_factory=list)
    results: List[AttachmentProcessingResult] = field(default_factory=list)
    message_prefix: str = ""


__all__ = [
    "ResultType",
    "ProcessingMetadata",
    "AttachmentProcessingResult",
    "FallbackConfig",
    "FallbackOutcome",
]
