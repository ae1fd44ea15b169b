"""Provider plugin contract and the shared HTTP plugin base."""

from .interface import ProviderPlugin
from .base_plugin import BaseProviderPlugin

__all__ = ["ProviderPlugin", "BaseProviderPlugin"]
