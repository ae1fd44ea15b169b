"""Attachment fallback pipeline.

Purpose:
    Degrade gracefully when the target provider cannot take an attachment
    natively. Text-like files are inlined into the message; images are
    described by a secondary vision-capable profile; anything else is
    reported as unsupported without a network call.

Flow per attachment:
    1. Native support check (``supports(profile, mime_type)``). Supported
       files pass through untouched.
    2. :func:`classify_mime_type` routes to ``text``, ``image`` or ``other``.
    3. ``text``: read via ``FileReader`` and wrap in a provenance block.
    4. ``image``: pick the description profile (configured first, then a
       vision-capable profile preferring ``is_cheap``), decrypt its key,
       call its plugin's ``send_message`` and sanity-check the reply.
    5. ``other``: unsupported.

Failure semantics:
    - :func:`process_attachment` is total. Every failure, including
      transport and auth errors from the description call, resolves to an
      ``unsupported`` result carrying an explanatory ``error``.

Timeout strategy:
    - The description call runs through the plugin, whose requests are
      bounded by ``get_timeout_config()``.
"""

from __future__ import annotations

import base64
import logging
import threading
from dataclasses import replace
from typing import Callable, List, Optional, Sequence

from ..base.errors import ProviderError
from ..base.logging import LogContext, get_logger, log_event
from ..base.models import FileAttachment, LLMMessage, LLMParams, LLMResponse
from ..bootstrap import bootstrap_registry
from ..capabilities import CapabilityNegotiator, classify_mime_type
from ..capabilities import supports_mime_type as _table_supports_mime_type
from ..registry import ProviderRegistry
from .interfaces import ConnectionProfile, Repositories
from .result import AttachmentProcessingResult, FallbackConfig, FallbackOutcome, ProcessingMetadata

SupportsMimeType = Callable[[ConnectionProfile, str], bool]

VISION_PROBE_MIME_TYPE = "image/jpeg"
SUGGESTED_VISION_MODELS = "gpt-4o-mini, claude-haiku-4-5, or gemini-2.0-flash"

_logger = get_logger("attachments")

_DEFAULT_REGISTRY: Optional[ProviderRegistry] = None
_DEFAULT_REGISTRY_LOCK = threading.Lock()


def _default_registry() -> ProviderRegistry:
    """Built-in registry shared by calls that do not pass one; built on first use."""
    global _DEFAULT_REGISTRY  # noqa: PLW0603 - lazily built module level registry
    with _DEFAULT_REGISTRY_LOCK:
        if _DEFAULT_REGISTRY is None:
            _DEFAULT_REGISTRY = bootstrap_registry()
        return _DEFAULT_REGISTRY


def _default_supports(registry: Optional[ProviderRegistry]) -> SupportsMimeType:
    if registry is not None:
        return CapabilityNegotiator(registry).supports_mime_type
    return lambda profile, mime_type: _table_supports_mime_type(profile.provider, mime_type)


def _error_text(exc: BaseException) -> str:
    if isinstance(exc, ProviderError):
        return exc.message
    return str(exc) or "Unknown error"


def _metadata(attachment: FileAttachment, profile: Optional[ConnectionProfile] = None) -> ProcessingMetadata:
    meta = ProcessingMetadata(original_filename=attachment.filename, original_mime_type=attachment.mime_type)
    if profile is not None:
        meta.description_profile_id = profile.id
        meta.description_provider = profile.provider
        meta.description_model = profile.model_name
    return meta


def _unsupported(error: Optional[str], meta: ProcessingMetadata) -> AttachmentProcessingResult:
    return AttachmentProcessingResult(type="unsupported", error=error, processing_metadata=meta)


def needs_fallback_processing(
    profile: ConnectionProfile,
    mime_type: str,
    supports: Optional[SupportsMimeType] = None,
) -> bool:
    """True when ``profile`` cannot take ``mime_type`` natively."""
    check = supports or _default_supports(None)
    return not check(profile, mime_type)


def get_image_description_profile(
    repositories: Repositories,
    user_id: str,
    supports: Optional[SupportsMimeType] = None,
) -> Optional[ConnectionProfile]:
    """Profile used to describe images for ``user_id``.

    The profile named in the user's chat settings wins when it exists.
    Otherwise the first vision-capable profile marked ``is_cheap``, else the
    first vision-capable profile, else ``None``.
    """
    check = supports or _default_supports(None)
    settings = repositories.chat_settings.find_by_user_id(user_id)
    configured_id = settings.image_description_profile_id if settings else None
    if configured_id:
        profile = repositories.connections.find_by_id(configured_id)
        if profile is not None:
            return profile
    vision = [p for p in repositories.connections.find_by_user_id(user_id) or [] if check(p, VISION_PROBE_MIME_TYPE)]
    if not vision:
        return None
    for profile in vision:
        if profile.is_cheap:
            return profile
    return vision[0]


# -- text -----------------------------------------------------------------
def _read_text(repositories: Repositories, path: str) -> str:
    try:
        content = repositories.files.read(path)
        return content.decode("utf-8") if isinstance(content, bytes) else str(content)
    except Exception as exc:
        raise ValueError(f"Failed to read text file: {_error_text(exc)}") from exc


def convert_text_file_to_inline(attachment: FileAttachment, repositories: Repositories) -> AttachmentProcessingResult:
    meta = _metadata(attachment)
    try:
        content = _read_text(repositories, attachment.filepath)
    except ValueError as exc:
        return _unsupported(f"Failed to process text file: {exc}", meta)
    text = f"[User attached text file: {attachment.filename}]\n\n{content}\n\n[End of attached file]"
    return AttachmentProcessingResult(type="text", text_content=text, processing_metadata=meta)


# -- images ---------------------------------------------------------------
def _with_data(attachment: FileAttachment, repositories: Repositories) -> FileAttachment:
    if attachment.data is not None:
        return attachment
    content = repositories.files.read(attachment.filepath)
    data = base64.b64encode(content).decode("ascii") if isinstance(content, bytes) else str(content)
    return replace(attachment, data=data)


def _decrypted_api_key(profile: ConnectionProfile, repositories: Repositories, user_id: str) -> Optional[str]:
    if not profile.api_key_id:
        return None
    record = repositories.api_keys.find_by_id(profile.api_key_id)
    if record is None:
        return None
    return repositories.credentials.decrypt(record.ciphertext, record.iv, record.auth_tag, user_id)


def _number(value: object) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


def _is_reasoning_model(model_name: str, config: FallbackConfig) -> bool:
    name = (model_name or "").lower()
    return any(marker in name for marker in config.reasoning_model_markers)


def _description_params(
    profile: ConnectionProfile,
    attachment: FileAttachment,
    config: FallbackConfig,
    ctx: LogContext,
) -> LLMParams:
    parameters = profile.parameters or {}
    temperature = _number(parameters.get("temperature"))
    max_tokens = _number(parameters.get("max_tokens"))
    top_p = _number(parameters.get("top_p"))
    temperature = config.default_temperature if temperature is None else temperature
    max_tokens = int(config.default_max_tokens if max_tokens is None else max_tokens)
    if _is_reasoning_model(profile.model_name, config) and max_tokens < config.reasoning_model_max_tokens:
        log_event(
            _logger,
            "attachment.fallback.token_floor",
            ctx,
            level=logging.WARNING,
            from_tokens=max_tokens,
            to_tokens=config.reasoning_model_max_tokens,
        )
        max_tokens = config.reasoning_model_max_tokens
    return LLMParams(
        messages=[LLMMessage(role="user", content=config.description_prompt, attachments=[attachment])],
        model=profile.model_name,
        temperature=temperature,
        max_tokens=max_tokens if max_tokens > 0 else None,
        top_p=top_p,
    )


def _looks_like_error(text: str, config: FallbackConfig) -> bool:
    lowered = text.lower()
    return any(phrase in lowered for phrase in config.error_phrases) or len(text) < config.min_description_length


def _check_description(
    response: LLMResponse,
    profile: ConnectionProfile,
    params: LLMParams,
    meta: ProcessingMetadata,
    config: FallbackConfig,
) -> AttachmentProcessingResult:
    text = (response.content or "").strip()
    if not text:
        if response.finish_reason == "length" and _is_reasoning_model(profile.model_name, config):
            used = response.usage.completion_tokens or params.max_tokens
            return _unsupported(
                f"Image description failed - {profile.model_name} is a reasoning model that used all {used} tokens "
                "for internal reasoning and didn't output a description. Reasoning models are expensive and slow "
                f"for this task. Switch to {SUGGESTED_VISION_MODELS} instead.",
                meta,
            )
        return _unsupported(
            f"Image could not be processed - {profile.provider} {profile.model_name} returned empty response. "
            f"The model may not support vision. Try using {SUGGESTED_VISION_MODELS} as your image description profile.",
            meta,
        )
    if _looks_like_error(text, config):
        return _unsupported(
            f'The image description profile responded with: "{text[:100]}...". This appears to be an error rather '
            "than an image description. The model may not support images or there's a parameter mismatch. "
            f"Try using {SUGGESTED_VISION_MODELS}.",
            meta,
        )
    meta.used_image_description_llm = True
    return AttachmentProcessingResult(type="image_description", image_description=response.content, processing_metadata=meta)


def generate_image_description(
    attachment: FileAttachment,
    repositories: Repositories,
    user_id: str,
    registry: Optional[ProviderRegistry] = None,
    config: Optional[FallbackConfig] = None,
    supports: Optional[SupportsMimeType] = None,
) -> AttachmentProcessingResult:
    """Describe an image with the user's description profile; never raises."""
    config = config or FallbackConfig()
    try:
        if registry is None:
            registry = _default_registry()
        check = supports or _default_supports(registry)
        profile = get_image_description_profile(repositories, user_id, check)
        if profile is None:
            return _unsupported(
                "No image description profile available. Configure one in Settings → Chat Settings → "
                "Image Description Profile",
                _metadata(attachment),
            )
        meta = _metadata(attachment, profile)
        if not check(profile, attachment.mime_type):
            return _unsupported(
                f"Image description profile ({profile.provider} {profile.model_name}) does not support image files",
                meta,
            )
        ctx = LogContext(provider=profile.provider, model=profile.model_name, operation="attachment.describe")
        api_key = _decrypted_api_key(profile, repositories, user_id)
        plugin = registry.create_provider(profile.provider, base_url=profile.base_url or None)
        params = _description_params(profile, _with_data(attachment, repositories), config, ctx)
        response = plugin.send_message(params, api_key)
        result = _check_description(response, profile, params, meta, config)
        log_event(
            _logger,
            "attachment.fallback",
            ctx,
            level=logging.INFO if result.type == "image_description" else logging.WARNING,
            outcome=result.type,
            filename=attachment.filename,
            mime_type=attachment.mime_type,
            finish_reason=response.finish_reason,
            description_chars=len((response.content or "").strip()),
        )
        return result
    except Exception as exc:
        log_event(
            _logger,
            "attachment.fallback.error",
            level=logging.ERROR,
            filename=attachment.filename,
            mime_type=attachment.mime_type,
            error_type=type(exc).__name__,
            error=_error_text(exc)[:260],
        )
        return _unsupported(f"Failed to generate image description: {_error_text(exc)}", _metadata(attachment))


# -- entry points -------------------------------------------------------------
def process_attachment(
    attachment: FileAttachment,
    target_profile: ConnectionProfile,
    repositories: Repositories,
    user_id: str,
    registry: Optional[ProviderRegistry] = None,
    config: Optional[FallbackConfig] = None,
    supports: Optional[SupportsMimeType] = None,
) -> AttachmentProcessingResult:
    """Route one attachment for ``target_profile``; always returns a result.

    Attachments the target takes natively come back as ``unsupported`` with
    ``error=None`` (:attr:`AttachmentProcessingResult.is_native`), formatting
    to an empty prefix.
    """
    try:
        check = supports or _default_supports(registry)
        if not needs_fallback_processing(target_profile, attachment.mime_type, check):
            return _unsupported(None, _metadata(attachment))
        kind = classify_mime_type(attachment.mime_type)
    except Exception as exc:
        return _unsupported(f"Failed to check attachment support: {_error_text(exc)}", _metadata(attachment))
    if kind == "text":
        return convert_text_file_to_inline(attachment, repositories)
    if kind == "image":
        return generate_image_description(attachment, repositories, user_id, registry, config, supports)
    log_event(
        _logger,
        "attachment.fallback",
        provider=target_profile.provider,
        outcome="unsupported",
        filename=attachment.filename,
        mime_type=attachment.mime_type,
    )
    return _unsupported(
        f"File type {attachment.mime_type} is not supported by provider {target_profile.provider} "
        "and no fallback is available",
        _metadata(attachment),
    )


def format_fallback_as_message_prefix(result: AttachmentProcessingResult) -> str:
    """Render a result as text to prepend to the user's message ("" when nothing to say)."""
    if result.type == "text" and result.text_content:
        return result.text_content + "\n\n"
    if result.type == "image_description" and result.image_description:
        filename = result.processing_metadata.original_filename or "Unknown"
        return f"[Image: {filename}]\n\nImage Description (generated by AI):\n{result.image_description}\n\n"
    if result.type == "unsupported" and result.error:
        filename = result.processing_metadata.original_filename or "Unknown file"
        return f"⚠️ Attachment Processing Failed: {filename}\n{result.error}\n\n"
    return ""


def process_attachments(
    attachments: Sequence[FileAttachment],
    target_profile: ConnectionProfile,
    repositories: Repositories,
    user_id: str,
    registry: Optional[ProviderRegistry] = None,
    config: Optional[FallbackConfig] = None,
    supports: Optional[SupportsMimeType] = None,
) -> FallbackOutcome:
    """Split a message's attachments into native ones and a formatted fallback prefix."""
    outcome = FallbackOutcome()
    prefixes: List[str] = []
    for attachment in attachments:
        result = process_attachment(attachment, target_profile, repositories, user_id, registry, config, supports)
        if result.is_native:
            outcome.native.append(attachment)
            continue
        outcome.results.append(result)
        prefixes.append(format_fallback_as_message_prefix(result))
    outcome.message_prefix = "".join(prefixes)
    return outcome


__all__ = [
    "SupportsMimeType",
    "needs_fallback_processing",
    "get_image_description_profile",
    "convert_text_file_to_inline",
    "generate_image_description",
    "process_attachment",
    "format_fallback_as_message_prefix",
    "process_attachments",
]
