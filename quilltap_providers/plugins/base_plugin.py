"""Shared plumbing for HTTP-backed provider plugins.

Purpose:
    ``BaseProviderPlugin`` owns everything the vendor plugins have in common:
    manifest-derived descriptors, configuration lookup, pooled ``httpx``
    clients, bounded requests, structured ``chat.*`` / ``models.*`` logging,
    capability gating for image generation, and the attachment partition
    that reports every file a vendor cannot consume. Subclasses supply the
    vendor wire format only.

External dependencies:
    - ``httpx`` through :func:`quilltap_providers.base.http.get_httpx_client`.

Timeout strategy:
    - Buffered calls use ``to_httpx_timeout(cfg, kind="http")``; model listing
      and key validation use ``kind="probe"``; streams use ``kind="stream"``
      for the idle bound and the adapter for the overall deadline.

Failure semantics:
    - Transport failures and non-2xx responses raise ``ProviderError``.
    - ``validate_api_key`` and ``get_available_models`` never raise.
    - Streams end with exactly one terminal chunk (see ``BaseStreamingAdapter``).
"""

from __future__ import annotations

import time
from typing import Any, ClassVar, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

import httpx

from ..base.cancellation import CancellationToken
from ..base.errors import ErrorCode, ProviderError, classify_exception, error_from_response, wrap_exception
from ..base.http import get_httpx_client
from ..base.logging import LogContext, get_logger, log_event, normalized_log_event
from ..base.models import (
    AttachmentResults,
    AttachmentSupport,
    FileAttachment,
    ImageGenParams,
    ImageGenResponse,
    LLMMessage,
    LLMParams,
    LLMResponse,
    ProviderCapabilities,
    ProviderMetadata,
    StreamChunk,
    ToolCallRequest,
)
from ..base.streaming import BaseStreamingAdapter, StreamState
from ..base.timeouts import TimeoutConfig, get_timeout_config, to_httpx_timeout
from ..config import get_provider_config
from ..manifest import (
    PluginManifest,
    attachment_support_from_manifest,
    capabilities_from_manifest,
    metadata_from_manifest,
    parse_manifest,
)


class BaseProviderPlugin:
    """Template for vendor plugins speaking JSON over HTTP.

    Class attributes set by subclasses:
        MANIFEST: Raw plugin manifest (camelCase JSON shape).
        PROVIDER_KEY: Section name in the provider configuration.
        STREAM_WIRE: ``"sse"`` or ``"ndjson"``.
    """

    MANIFEST: ClassVar[Dict[str, Any]] = {}
    PROVIDER_KEY: ClassVar[str] = ""
    STREAM_WIRE: ClassVar[str] = "sse"

    _parsed: ClassVar[Optional[Tuple[PluginManifest, ProviderMetadata, ProviderCapabilities, AttachmentSupport]]] = None

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        timeouts: Optional[TimeoutConfig] = None,
        model: Optional[str] = None,
    ) -> None:
        cfg = get_provider_config(self.PROVIDER_KEY, {"base_url": base_url, "model": model})
        manifest, metadata, capabilities, attachment_support = self._descriptors()
        self._manifest = manifest
        self._metadata = metadata
        self._capabilities = capabilities
        self._attachment_support = attachment_support
        self.base_url: str = (cfg.get("base_url") or metadata.base_url_default or "").rstrip("/")
        self.default_model: Optional[str] = cfg.get("model")
        self._timeouts = timeouts or get_timeout_config()
        self.logger = get_logger(f"providers.{self.PROVIDER_KEY}")

    @classmethod
    def _descriptors(cls) -> Tuple[PluginManifest, ProviderMetadata, ProviderCapabilities, AttachmentSupport]:
        # parsed once per concrete class; descriptors are immutable
        parsed = cls.__dict__.get("_parsed")
        if parsed is None:
            manifest = parse_manifest(cls.MANIFEST, plugin=cls.__name__)
            parsed = (
                manifest,
                metadata_from_manifest(manifest),
                capabilities_from_manifest(manifest),
                attachment_support_from_manifest(manifest),
            )
            cls._parsed = parsed
        return parsed

    # -- descriptors -------------------------------------------------------
    @property
    def manifest(self) -> PluginManifest:
        return self._manifest

    @property
    def metadata(self) -> ProviderMetadata:
        return self._metadata

    @property
    def capabilities(self) -> ProviderCapabilities:
        return self._capabilities

    @property
    def attachment_support(self) -> AttachmentSupport:
        return self._attachment_support

    @property
    def provider_name(self) -> str:
        return self._metadata.provider_name

    # -- vendor hooks ------------------------------------------------------
    def _headers(self, api_key: Optional[str]) -> Dict[str, str]:
        return {"Content-Type": "application/json"}

    def _query(self, api_key: Optional[str], *, stream: bool = False) -> Dict[str, str]:
        return {}

    def _chat_path(self, params: LLMParams, *, stream: bool) -> str:
        raise NotImplementedError

    def _build_payload(self, params: LLMParams, results: AttachmentResults, *, stream: bool) -> Dict[str, Any]:
        raise NotImplementedError

    def _parse_response(self, data: Dict[str, Any], params: LLMParams, results: AttachmentResults) -> LLMResponse:
        raise NotImplementedError

    def _translate_event(self, event: Any, state: StreamState) -> Optional[str]:
        raise NotImplementedError

    def _models_path(self) -> str:
        return "models"

    def _parse_models(self, data: Any) -> List[str]:
        return [m.get("id") for m in (data.get("data") or []) if isinstance(m, dict) and m.get("id")]

    def _generate_image(self, params: ImageGenParams, api_key: Optional[str]) -> ImageGenResponse:
        raise ProviderError(
            code=ErrorCode.UNSUPPORTED,
            message=f"{self.provider_name} does not implement image generation",
            provider=self.provider_name,
            model=params.model,
        )

    # -- HTTP helpers ------------------------------------------------------
    def _client(self, purpose: str) -> httpx.Client:
        return get_httpx_client(self.base_url, purpose=f"{self.PROVIDER_KEY}.{purpose}")

    def _request_json(
        self,
        method: str,
        path: str,
        *,
        api_key: Optional[str],
        purpose: str,
        kind: str = "http",
        json: Optional[Mapping[str, Any]] = None,
        model: Optional[str] = None,
    ) -> Any:
        """Send one request and return the decoded JSON body.

        Raises ``ProviderError`` for transport failures, malformed base URLs,
        non-2xx responses and bodies that are not a JSON object.
        """
        try:
            client = self._client(purpose)
            resp = client.request(
                method,
                path,
                json=json,
                headers=self._headers(api_key),
                params=self._query(api_key) or None,
                timeout=to_httpx_timeout(self._timeouts, kind=kind),
            )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise wrap_exception(exc, provider=self.provider_name, model=model) from exc
        if resp.status_code >= 400:
            raise error_from_response(resp, provider=self.provider_name, model=model)
        try:
            body = resp.json()
        except ValueError as exc:
            raise ProviderError(
                code=ErrorCode.VALIDATION,
                message=f"response was not JSON: {resp.text[:200]}",
                provider=self.provider_name,
                model=model,
                raw=exc,
            ) from exc
        if not isinstance(body, dict):
            raise ProviderError(
                code=ErrorCode.VALIDATION,
                message=f"expected a JSON object, got {type(body).__name__}",
                provider=self.provider_name,
                model=model,
                status_code=resp.status_code,
            )
        return body

    def _post_json(self, path: str, payload: Mapping[str, Any], *, api_key: Optional[str], purpose: str, model: Optional[str] = None) -> Any:
        return self._request_json("POST", path, api_key=api_key, purpose=purpose, json=payload, model=model)

    def _get_json(self, path: str, *, api_key: Optional[str], purpose: str, kind: str = "probe") -> Any:
        return self._request_json("GET", path, api_key=api_key, purpose=purpose, kind=kind)

    def _ctx(self, params: LLMParams, operation: str) -> LogContext:
        return LogContext(provider=self.provider_name, model=params.model, operation=operation)

    def _resolve_model(self, params: LLMParams) -> LLMParams:
        if params.model or not self.default_model:
            return params
        return params.with_model(self.default_model)

    # -- chat --------------------------------------------------------------
    def send_message(self, params: LLMParams, api_key: Optional[str]) -> LLMResponse:
        """Buffered chat round trip; failures raise ``ProviderError``."""
        params = self._resolve_model(params)
        ctx = self._ctx(params, "chat")
        results = AttachmentResults()
        payload = self._build_payload(params, results, stream=False)
        normalized_log_event(self.logger, "chat.start", ctx, phase="start", attempt=None, emitted=False, tokens=None)
        t0 = time.perf_counter()
        try:
            data = self._post_json(self._chat_path(params, stream=False), payload, api_key=api_key, purpose="chat", model=params.model)
            try:
                response = self._parse_response(data, params, results)
            except (AttributeError, TypeError, KeyError, IndexError) as exc:
                raise ProviderError(
                    code=ErrorCode.VALIDATION,
                    message=f"unexpected response shape: {exc!r}"[:260],
                    provider=self.provider_name,
                    model=params.model,
                    raw=data,
                ) from exc
        except ProviderError as exc:
            normalized_log_event(
                self.logger,
                "chat.error",
                ctx,
                phase="finalize",
                attempt=None,
                emitted=False,
                tokens=None,
                error_code=exc.code.value,
                error=exc.message[:260],
                status_code=exc.status_code,
            )
            raise
        normalized_log_event(
            self.logger,
            "chat.end",
            ctx,
            phase="finalize",
            attempt=None,
            emitted=bool(response.content),
            tokens=response.usage,
            latency_ms=(time.perf_counter() - t0) * 1000.0,
            finish_reason=response.finish_reason,
            attachments_sent=len(results.sent),
            attachments_failed=len(results.failed),
        )
        return response

    def stream_message(
        self,
        params: LLMParams,
        api_key: Optional[str],
        cancellation_token: Optional[CancellationToken] = None,
    ) -> Iterator[StreamChunk]:
        """Yield text deltas followed by exactly one terminal chunk."""
        params = self._resolve_model(params)
        ctx = self._ctx(params, "stream")
        results = AttachmentResults()
        payload = self._build_payload(params, results, stream=True)
        path = self._chat_path(params, stream=True)

        def _opener():
            # client built lazily so a malformed base URL surfaces as a ProviderError
            return self._client("stream").stream(
                "POST",
                path,
                json=payload,
                headers=self._headers(api_key),
                params=self._query(api_key, stream=True) or None,
                timeout=to_httpx_timeout(self._timeouts, kind="stream"),
            )

        adapter = BaseStreamingAdapter(
            ctx=ctx,
            provider_name=self.provider_name,
            model=params.model,
            opener=_opener,
            translator=self._translate_event,
            logger=self.logger,
            wire=self.STREAM_WIRE,  # type: ignore[arg-type]
            attachment_results=results,
            cancellation_token=cancellation_token,
            timeouts=self._timeouts,
        )
        yield from adapter.run()

    # -- images ------------------------------------------------------------
    def generate_image(self, params: ImageGenParams, api_key: Optional[str]) -> ImageGenResponse:
        if not self._capabilities.image_generation:
            raise ProviderError(
                code=ErrorCode.UNSUPPORTED,
                message=f"{self._metadata.display_name} does not support image generation",
                provider=self.provider_name,
                model=params.model,
            )
        ctx = LogContext(provider=self.provider_name, model=params.model, operation="image")
        response = self._generate_image(params, api_key)
        log_event(self.logger, "image.generate", ctx, count=len(response.images))
        return response

    # -- probes ------------------------------------------------------------
    def validate_api_key(self, api_key: Optional[str]) -> bool:
        """Return True when a model listing succeeds with ``api_key``."""
        ctx = LogContext(provider=self.provider_name, operation="apikey")
        try:
            self._get_json(self._models_path(), api_key=api_key, purpose="probe")
        except Exception as exc:  # availability checks report, never raise
            code = classify_exception(exc).value
            log_event(self.logger, "apikey.validate", ctx, valid=False, error_code=code)
            return False
        log_event(self.logger, "apikey.validate", ctx, valid=True)
        return True

    def get_available_models(self, api_key: Optional[str]) -> List[str]:
        """Sorted, de-duplicated model ids; ``[]`` on any failure."""
        ctx = LogContext(provider=self.provider_name, operation="models")
        try:
            data = self._get_json(self._models_path(), api_key=api_key, purpose="probe")
            models = sorted({m for m in self._parse_models(data) if m})
        except Exception as exc:  # availability checks report, never raise
            code = classify_exception(exc).value
            log_event(self.logger, "models.error", ctx, error_code=code, error=str(exc)[:200])
            return []
        log_event(self.logger, "models.list", ctx, count=len(models))
        return models

    # -- tools -------------------------------------------------------------
    def format_tools(self, tools: Optional[Sequence[Dict[str, Any]]]) -> List[Dict[str, Any]]:
        raise NotImplementedError

    def _parse_tool_calls(self, raw: Any) -> List[ToolCallRequest]:
        raise NotImplementedError

    def parse_tool_calls(self, raw: Any) -> List[ToolCallRequest]:
        """Accept a vendor payload or an ``LLMResponse`` wrapping one."""
        if isinstance(raw, LLMResponse):
            raw = raw.raw
        return self._parse_tool_calls(raw)

    # -- attachments -------------------------------------------------------
    def _unsupported_message(self, mime_type: str) -> str:
        return (
            f"Unsupported file type: {mime_type}. "
            f"{self._metadata.display_name} supports: {', '.join(self._attachment_support.mime_types)}"
        )

    def _partition_attachments(self, message: LLMMessage, results: AttachmentResults) -> List[FileAttachment]:
        """Return the attachments of ``message`` this vendor will receive.

        Every other attachment is recorded in ``results.failed`` with a reason.
        Callers mark the returned ones as sent once they are encoded.
        """
        usable: List[FileAttachment] = []
        for att in message.attachments:
            if not self._attachment_support.accepts(att.mime_type):
                results.mark_failed(att.id, self._unsupported_message(att.mime_type))
            elif not att.data:
                results.mark_failed(att.id, "File data not loaded")
            else:
                usable.append(att)
        return usable


__all__ = ["BaseProviderPlugin"]
