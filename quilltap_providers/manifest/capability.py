"""Plugin capability enumeration declared in a manifest's ``capabilities`` list."""
from __future__ import annotations

from enum import Enum


class PluginCapability(str, Enum):
    CHAT_COMMANDS = "CHAT_COMMANDS"
    MESSAGE_PROCESSORS = "MESSAGE_PROCESSORS"
    UI_COMPONENTS = "UI_COMPONENTS"
    DATA_STORAGE = "DATA_STORAGE"
    API_ROUTES = "API_ROUTES"
    AUTH_METHODS = "AUTH_METHODS"
    WEBHOOKS = "WEBHOOKS"
    BACKGROUND_TASKS = "BACKGROUND_TASKS"
    CUSTOM_MODELS = "CUSTOM_MODELS"
    FILE_HANDLERS = "FILE_HANDLERS"
    NOTIFICATIONS = "NOTIFICATIONS"
    BACKEND_INTEGRATIONS = "BACKEND_INTEGRATIONS"
    LLM_PROVIDER = "LLM_PROVIDER"
    IMAGE_PROVIDER = "IMAGE_PROVIDER"
    EMBEDDING_PROVIDER = "EMBEDDING_PROVIDER"
    THEME = "THEME"
    DATABASE_BACKEND = "DATABASE_BACKEND"
    FILE_BACKEND = "FILE_BACKEND"
    UPGRADE_MIGRATION = "UPGRADE_MIGRATION"


# Capabilities that make a plugin a provider and therefore require ``providerConfig``.
PROVIDER_CAPABILITIES = frozenset(
    {
        PluginCapability.LLM_PROVIDER,
        PluginCapability.IMAGE_PROVIDER,
        PluginCapability.EMBEDDING_PROVIDER,
    }
)

__all__ = ["PluginCapability", "PROVIDER_CAPABILITIES"]
