"""OpenAI provider package."""

from .client import OpenAIPlugin
from .manifest import MANIFEST

__all__ = ["OpenAIPlugin", "MANIFEST"]
