"""Focused tests for quilltap_providers.base.logging.

Covers:
- _parse_level string parsing
- _coerce_tokens stability
- normalized_log_event emits required keys and default levels
- log_event drops None fields and hoists context
- JsonFormatter redaction of credential-looking keys
- configure_logger level and formatter switching
"""
from __future__ import annotations

import json
import logging

from quilltap_providers.base.logging import (
    REQUIRED_NORMALIZED_KEYS,
    _coerce_tokens,  # type: ignore[attr-defined]
    _parse_level,  # type: ignore[attr-defined]
    configure_logger,
    get_logger,
    log_event,
    normalized_log_event,
)
from quilltap_providers.base.log_support import JsonFormatter, LogContext
from quilltap_providers.base.models import TokenUsage


class _ListHandler(logging.Handler):
    """Capture log records into a list for assertions."""

    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:  # pragma: no cover - exercised via tests
        self.records.append(record)

    @property
    def payloads(self) -> list[dict]:
        return [json.loads(r.getMessage()) for r in self.records]


def _logger_with_handler(name: str):
    logger = get_logger(name)
    handler = _ListHandler()
    logger.handlers[:] = [handler]
    logger.propagate = False
    logger.setLevel(logging.DEBUG)
    return logger, handler


def test_parse_level_variants():
    assert _parse_level(None) == logging.INFO  # nosec B101
    assert _parse_level("debug") == logging.DEBUG  # nosec B101
    assert _parse_level("WARN") == logging.WARNING  # nosec B101
    assert _parse_level("unknown", default=logging.ERROR) == logging.ERROR  # nosec B101


def test_get_logger_prefixes_names_into_hierarchy():
    assert get_logger("registry").name == "providers.registry"  # nosec B101
    assert get_logger("providers.openai").name == "providers.openai"  # nosec B101


def test_normalized_log_event_emits_required_keys():
    logger, handler = _logger_with_handler("test.logging.required")

    ctx = LogContext(provider="p", model="m")
    normalized_log_event(
        logger,
        "stream.end",
        ctx,
        phase="finalize",
        attempt=None,
        error_code="timeout",
        emitted=3,
        tokens={"prompt": 10, "completion": 5},
    )

    payload = handler.payloads[-1]
    for key in REQUIRED_NORMALIZED_KEYS:
        assert key in payload  # nosec B101
    assert payload["event"] == "stream.end"  # nosec B101
    assert payload["provider"] == "p" and payload["model"] == "m"  # nosec B101
    assert payload["error_code"] == "timeout"  # nosec B101
    assert payload["attempt"] is None  # nosec B101
    # events with an error code default to WARNING
    assert handler.records[-1].levelno == logging.WARNING  # nosec B101


def test_normalized_log_event_extra_fields_cannot_overwrite_required_keys():
    logger, handler = _logger_with_handler("test.logging.overwrite")
    normalized_log_event(logger, "chat.end", None, phase="finalize", structured="nope", latency_ms=1.5)
    payload = handler.payloads[-1]
    assert payload["structured"] is True  # nosec B101
    assert payload["latency_ms"] == 1.5  # nosec B101
    assert "error_code" not in payload  # nosec B101
    assert handler.records[-1].levelno == logging.INFO  # nosec B101


def test_coerce_tokens_mapping_and_to_dict():
    assert _coerce_tokens(None) is None  # nosec B101
    assert _coerce_tokens({"prompt": 1}) == {"prompt": 1}  # nosec B101
    usage = TokenUsage.of(4, 6)
    assert _coerce_tokens(usage) == {"prompt_tokens": 4, "completion_tokens": 6, "total_tokens": 10}  # nosec B101
    assert _coerce_tokens(42) == {"value": "42"}  # nosec B101


def test_log_event_drops_none_fields():
    logger, handler = _logger_with_handler("test.logging.none")
    log_event(logger, "models.list", LogContext(provider="OLLAMA"), count=0, error=None)
    payload = handler.payloads[-1]
    assert payload == {"event": "models.list", "provider": "OLLAMA", "count": 0}  # nosec B101


def test_json_formatter_hoists_message_and_redacts_keys():
    record = logging.LogRecord("providers.x", logging.INFO, __file__, 1, json.dumps({"event": "e", "api_key": "sk-1"}), None, None)
    record.authorization = "Bearer secret"
    out = json.loads(JsonFormatter().format(record))
    assert out["event"] == "e"  # nosec B101
    assert out["api_key"] == "***"  # nosec B101
    assert out["authorization"] == "***"  # nosec B101
    assert out["logger"] == "providers.x"  # nosec B101


def test_configure_logger_switches_level_and_formatter():
    base = logging.getLogger("providers")
    previous = base.level
    try:
        logger = configure_logger(level="warning", json_mode=False)
        assert logger is base  # nosec B101
        assert logger.level == logging.WARNING  # nosec B101
        managed = [h for h in logger.handlers if getattr(h, "_providers_managed_handler", False)]
        assert managed and not isinstance(managed[0].formatter, JsonFormatter)  # nosec B101
    finally:
        configure_logger(level=previous, json_mode=True)
