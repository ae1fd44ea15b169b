"""Collaborator protocols and DTOs for the attachment fallback pipeline.

The pipeline needs a few things it does not own: connection profiles, stored
API keys and their decryption, per-user chat settings, and file contents.
Callers provide them through the structural ``Protocol`` types below, bundled
in :class:`Repositories`.

Failure / Error Semantics:
- Implementations may raise on I/O failures. The pipeline catches every such
  exception and turns it into an ``unsupported`` result; nothing escapes.

Security:
- ``CredentialStore.decrypt`` is called immediately before the vendor call.
  The plaintext key is passed to the plugin and never logged or cached.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol, Union, runtime_checkable

# ---------- Data Transfer Objects ----------


@dataclass
class ConnectionProfile:
    """A user's saved connection to one provider/model.

    Attributes
    ----------
    id: Profile identifier.
    provider: Registry name of the provider (e.g. ``"OPENAI"``).
    model_name: Model identifier sent to the vendor.
    base_url: Optional endpoint override.
    api_key_id: Identifier of the stored API key, if any.
    parameters: Sampling parameters (``temperature``, ``max_tokens``, ``top_p``).
    is_cheap: Marked as a low-cost profile for background tasks.
    is_default: The user's default profile.
    """

    id: str
    provider: str
    model_name: str
    base_url: Optional[str] = None
    api_key_id: Optional[str] = None
    parameters: Dict[str, Any] = field(default_factory=dict)
    is_cheap: bool = False
    is_default: bool = False


@dataclass
class ApiKeyRecord:
    """Encrypted API key material as stored by the host application."""

    id: str
    ciphertext: str
    iv: str
    auth_tag: str


@dataclass
class ChatSettings:
    image_description_profile_id: Optional[str] = None


# ---------- Collaborator Protocols ----------


@runtime_checkable
class CredentialStore(Protocol):
    def decrypt(self, ciphertext: str, iv: str, auth_tag: str, user_id: str) -> str: ...


@runtime_checkable
class ConnectionProfileRepository(Protocol):
    def find_by_id(self, profile_id: str) -> Optional[ConnectionProfile]: ...

    def find_by_user_id(self, user_id: str) -> List[ConnectionProfile]: ...


@runtime_checkable
class ApiKeyRepository(Protocol):
    def find_by_id(self, key_id: str) -> Optional[ApiKeyRecord]: ...


@runtime_checkable
class ChatSettingsRepository(Protocol):
    def find_by_user_id(self, user_id: str) -> Optional[ChatSettings]: ...


@runtime_checkable
class FileReader(Protocol):
    def read(self, path: str) -> Union[bytes, str]:
        """Return file content; ``str`` results for images are taken as base64 already."""
        ...


@dataclass
class Repositories:
    """Everything the pipeline reads from the host application."""

    connections: ConnectionProfileRepository
    api_keys: ApiKeyRepository
    chat_settings: ChatSettingsRepository
    credentials: CredentialStore
    files: FileReader


__all__ = [
    "ConnectionProfile",
    "ApiKeyRecord",
    "ChatSettings",
    "CredentialStore",
    "ConnectionProfileRepository",
    "ApiKeyRepository",
    "ChatSettingsRepository",
    "FileReader",
    "Repositories",
]
