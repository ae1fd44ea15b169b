"""Base structured logging utilities for the provider layer.

Purpose
-------
One place that configures the shared ``providers`` logger (JSON to stderr by
default) and the event helpers every plugin uses. Module loggers obtained via
``get_logger`` are children that propagate to the shared logger, so tests can
attach handlers or use ``caplog`` without fighting duplicate handlers.

``normalized_log_event`` guarantees a canonical key set on every event:
``structured``, ``phase``, ``attempt``, ``emitted``, ``tokens`` and, when an
error occurred, ``error_code``.

Environment
-----------
``PROVIDERS_LOG_LEVEL`` (DEBUG/INFO/WARNING/ERROR/CRITICAL, default INFO).
"""
from __future__ import annotations

import json
import logging
import os
import sys
from typing import Any, Dict, Mapping, Optional

from .log_support import JsonFormatter, LogContext

BASE_LOGGER_NAME = "providers"
_MANAGED_ATTR = "_providers_managed_handler"
_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _parse_level(value: Optional[str], default: int = logging.INFO) -> int:
    """Parse a logging level name case-insensitively; unknown names give ``default``."""
    if not value:
        return default
    mapping = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARN": logging.WARNING,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    return mapping.get(value.strip().upper(), default)


def _make_formatter(json_mode: bool) -> logging.Formatter:
    return JsonFormatter() if json_mode else logging.Formatter(_PLAIN_FORMAT)


def _ensure_base_logger(json_mode: bool) -> logging.Logger:
    logger = logging.getLogger(BASE_LOGGER_NAME)
    if any(getattr(h, _MANAGED_ATTR, False) for h in logger.handlers):
        return logger
    level = _parse_level(os.getenv("PROVIDERS_LOG_LEVEL"))
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_make_formatter(json_mode))
    setattr(handler, _MANAGED_ATTR, True)
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger


def get_logger(name: str = BASE_LOGGER_NAME, json_mode: bool = True) -> logging.Logger:
    """Return a logger under the shared ``providers`` hierarchy.

    Names outside the hierarchy are prefixed (``"registry"`` becomes
    ``"providers.registry"``) so every package logger shares one handler.
    """
    base = _ensure_base_logger(json_mode)
    if name == BASE_LOGGER_NAME:
        return base
    if not name.startswith(BASE_LOGGER_NAME + "."):
        name = f"{BASE_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logger(*, level: int | str | None = None, json_mode: bool = True) -> logging.Logger:
    """Reconfigure the shared logger level and formatter at runtime."""
    logger = _ensure_base_logger(json_mode)
    if level is not None:
        logger.setLevel(_parse_level(level, logger.level) if isinstance(level, str) else level)
    for handler in logger.handlers:
        if getattr(handler, _MANAGED_ATTR, False):
            handler.setFormatter(_make_formatter(json_mode))
    return logger


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    level: int = logging.INFO,
    keep_none: bool = False,
    **fields: Any,
) -> None:
    """Emit one structured JSON event.

    ``None`` values are dropped unless ``keep_none`` is set, which
    ``normalized_log_event`` uses to keep its required keys present.
    """
    if not logger.isEnabledFor(level):
        return
    payload: Dict[str, Any] = {"event": event}
    if ctx is not None:
        payload.update(ctx.to_dict())
    if keep_none:
        payload.update(fields)
    else:
        payload.update({k: v for k, v in fields.items() if v is not None})
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))


REQUIRED_NORMALIZED_KEYS = ("structured", "phase", "attempt", "emitted", "tokens")


def _coerce_tokens(tokens: Any) -> Any:
    """Coerce token usage info (mapping, dataclass with ``to_dict``) into a plain dict."""
    if tokens is None:
        return None
    if isinstance(tokens, Mapping):
        return dict(tokens)
    to_dict = getattr(tokens, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    return {"value": repr(tokens)}


def normalized_log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    phase: str,
    attempt: int | None = None,
    error_code: str | None = None,
    emitted: bool | int | None = None,
    tokens: Any = None,
    level: int | None = None,
    **extra_fields: Any,
) -> None:
    """Emit a normalized structured log event with the canonical key set.

    Extra fields never overwrite the normalized keys. Events carrying an
    ``error_code`` default to WARNING level, all others to INFO.
    """
    base_fields: Dict[str, Any] = {
        "structured": True,
        "phase": phase,
        "attempt": attempt,
        "emitted": emitted,
        "tokens": _coerce_tokens(tokens),
    }
    if error_code is not None:
        base_fields["error_code"] = error_code
    for k, v in extra_fields.items():
        if v is None or k in base_fields:
            continue
        base_fields[k] = v
    if level is None:
        level = logging.WARNING if error_code is not None else logging.INFO
    log_event(logger, event, ctx, level=level, keep_none=True, **base_fields)


__all__ = [
    "LogContext",
    "BASE_LOGGER_NAME",
    "get_logger",
    "configure_logger",
    "log_event",
    "normalized_log_event",
    "REQUIRED_NORMALIZED_KEYS",
]
