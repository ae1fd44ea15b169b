"""JSON logging formatter used by the provider logging setup.

:class:`JsonFormatter` serializes the standard record fields, hoists keys from
messages that are themselves JSON objects (the shape ``log_event`` emits), and
merges non-internal ``extra`` attributes. Keys that look like credentials are
masked so an accidental ``extra={"api_key": ...}`` never reaches a log sink.
"""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone

ISO = "%Y-%m-%dT%H:%M:%S.%fZ"

# Record attributes owned by the logging module itself.
_RESERVED = frozenset(
    {
        "msg",
        "args",
        "levelname",
        "levelno",
        "name",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
    }
)

SENSITIVE_KEYS = frozenset({"api_key", "apikey", "authorization", "x-api-key", "password", "secret", "token"})
REDACTED = "***"


def _redact(payload: dict) -> dict:
    return {k: (REDACTED if str(k).lower() in SENSITIVE_KEYS and v else v) for k, v in payload.items()}


class JsonFormatter(logging.Formatter):
    """Lightweight JSON formatter for structured logs."""

    def format(self, record: logging.LogRecord) -> str:
        out = {
            "ts": datetime.now(timezone.utc).strftime(ISO),
            "level": record.levelname,
            "logger": record.name,
        }
        text = record.getMessage()
        try:
            parsed = json.loads(text)
        except (TypeError, ValueError):
            parsed = None
        if isinstance(parsed, dict):
            out.update(_redact(parsed))
        else:
            out["msg"] = text
        extras = {k: v for k, v in record.__dict__.items() if not k.startswith("_") and k not in _RESERVED and k not in out}
        out.update(_redact(extras))
        if record.exc_info:
            out["exc"] = self.formatException(record.exc_info)
        return json.dumps(out, ensure_ascii=False, default=str)


__all__ = ["JsonFormatter", "ISO", "SENSITIVE_KEYS"]
