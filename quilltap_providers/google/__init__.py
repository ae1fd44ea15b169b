"""Google Gemini provider package."""

from .client import GooglePlugin
from .manifest import MANIFEST

__all__ = ["GooglePlugin", "MANIFEST"]
