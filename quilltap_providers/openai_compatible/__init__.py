"""OpenAI-compatible provider package."""

from .client import ATTACHMENTS_NOT_SUPPORTED, OpenAICompatiblePlugin
from .manifest import MANIFEST

__all__ = ["OpenAICompatiblePlugin", "ATTACHMENTS_NOT_SUPPORTED", "MANIFEST"]
