"""Ollama provider package."""

from .client import OllamaPlugin
from .manifest import MANIFEST

__all__ = ["OllamaPlugin", "MANIFEST"]
