"""Anthropic provider package."""

from .client import AnthropicPlugin
from .manifest import MANIFEST

__all__ = ["AnthropicPlugin", "MANIFEST"]
