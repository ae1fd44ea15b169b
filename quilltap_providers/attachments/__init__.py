"""Attachment fallback pipeline: inline text, describe images, report the rest."""

from .interfaces import (
    ApiKeyRecord,
    ApiKeyRepository,
    ChatSettings,
    ChatSettingsRepository,
    ConnectionProfile,
    ConnectionProfileRepository,
    CredentialStore,
    FileReader,
    Repositories,
)
from .pipeline import (
    SupportsMimeType,
    convert_text_file_to_inline,
    format_fallback_as_message_prefix,
    generate_image_description,
    get_image_description_profile,
    needs_fallback_processing,
    process_attachment,
    process_attachments,
)
from .result import AttachmentProcessingResult, FallbackConfig, FallbackOutcome, ProcessingMetadata

__all__ = [
    "ApiKeyRecord",
    "ApiKeyRepository",
    "ChatSettings",
    "ChatSettingsRepository",
    "ConnectionProfile",
    "ConnectionProfileRepository",
    "CredentialStore",
    "FileReader",
    "Repositories",
    "SupportsMimeType",
    "convert_text_file_to_inline",
    "format_fallback_as_message_prefix",
    "generate_image_description",
    "get_image_description_profile",
    "needs_fallback_processing",
    "process_attachment",
    "process_attachments",
    "AttachmentProcessingResult",
    "FallbackConfig",
    "FallbackOutcome",
    "ProcessingMetadata",
]
