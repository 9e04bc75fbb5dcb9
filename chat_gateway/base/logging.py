"""Structured logging for the gateway.

Every module logs through a child of the ``gateway`` logger. Only that base
logger owns handlers: one console handler on stderr and, when
:func:`configure_logger` is given a path, one rotating file handler. Messages
are single JSON objects built by :func:`log_event`, which the
:class:`JsonFormatter` merges into the line it writes.

:func:`normalized_log_event` is what adapters call. It always writes
``structured``, ``phase``, ``attempt``, ``emitted`` and ``tokens``, adds
``error_code`` for failures and picks ERROR for those, INFO otherwise.
"""
from __future__ import annotations

import json
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Mapping, Optional

from .log_support import JsonFormatter, LogContext

BASE_LOGGER_NAME = "gateway"
LOG_LEVEL_ENV = "GATEWAY_LOG_LEVEL"
PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def _parse_level(value: str | None, default: int = logging.INFO) -> int:
    """Level constant for a case-insensitive name; ``default`` when unknown."""
    if not value:
        return default
    return _LEVELS.get(value.strip().upper(), default)


def _formatter(json_mode: bool) -> logging.Formatter:
    return JsonFormatter() if json_mode else logging.Formatter(PLAIN_FORMAT)


class _ConsoleHandler(logging.StreamHandler):
    """Writes to the current ``sys.stderr``.

    Looking the stream up on each emit keeps the handler usable when test
    runners or embedding applications swap ``sys.stderr`` out.
    """

    def __init__(self) -> None:
        logging.Handler.__init__(self)

    @property
    def stream(self):  # type: ignore[override]
        return sys.stderr

    @stream.setter
    def stream(self, _value) -> None:
        pass


class _FileHandler(RotatingFileHandler):
    """Rotating file handler attached by :func:`configure_logger`."""


def _base_logger(json_mode: bool, level: int) -> logging.Logger:
    base = logging.getLogger(BASE_LOGGER_NAME)
    base.propagate = False
    console = next((h for h in base.handlers if isinstance(h, _ConsoleHandler)), None)
    if console is None:
        # first use; later calls keep whatever configure_logger set
        base.setLevel(_parse_level(os.getenv(LOG_LEVEL_ENV), default=level))
        console = _ConsoleHandler()
        base.addHandler(console)
    if json_mode != isinstance(console.formatter, JsonFormatter):
        console.setFormatter(_formatter(json_mode))
    console.setLevel(base.level)
    return base


def get_logger(
    name: str = BASE_LOGGER_NAME, json_mode: bool = True, level: int = logging.INFO
) -> logging.Logger:
    """Return ``name`` wired to the shared ``gateway`` handlers.

    Names outside the ``gateway.`` hierarchy are not re-parented; pass
    ``"gateway.<component>"``. Child loggers keep no handlers and propagate,
    so each event is written once.
    """
    base = _base_logger(json_mode, level)
    if name == BASE_LOGGER_NAME:
        return base
    logger = logging.getLogger(name)
    for handler in [h for h in logger.handlers if isinstance(h, (_ConsoleHandler, _FileHandler))]:
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    return logger


def configure_logger(
    *,
    level: int | str | None = None,
    file_path: Optional[str] = None,
    json_mode: bool = True,
) -> logging.Logger:
    """Adjust the base ``gateway`` logger at runtime.

    Parameters
    ----------
    level:
        Numeric level or name such as ``"DEBUG"``. ``None`` keeps the current one.
    file_path:
        Path for a rotating file handler. The handler is reused when it
        already targets this path and replaced otherwise. ``None`` detaches
        any file handler added earlier.
    json_mode:
        JSON lines when true, the plain ``PLAIN_FORMAT`` text otherwise.

    Handlers added by other code are left alone.
    """
    base = get_logger(BASE_LOGGER_NAME, json_mode=json_mode)
    if level is not None:
        base.setLevel(_parse_level(level, default=base.level) if isinstance(level, str) else level)

    target = os.path.abspath(os.path.expanduser(file_path)) if file_path else None
    kept: Optional[_FileHandler] = None
    for handler in [h for h in base.handlers if isinstance(h, _FileHandler)]:
        if target is not None and handler.baseFilename == target:
            kept = handler
            continue
        base.removeHandler(handler)
        handler.close()

    if target is not None and kept is None:
        os.makedirs(os.path.dirname(target), exist_ok=True)
        kept = _FileHandler(target, maxBytes=LOG_FILE_MAX_BYTES, backupCount=LOG_FILE_BACKUPS, encoding="utf-8")
        base.addHandler(kept)
    if kept is not None:
        kept.setFormatter(_formatter(json_mode))

    for handler in base.handlers:
        if isinstance(handler, (_ConsoleHandler, _FileHandler)):
            handler.setLevel(base.level)
    return base


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    level: int = logging.INFO,
    keep_none: bool = False,
    **fields: Any,
) -> None:
    """Log ``{"event": event, **ctx, **fields}`` as one JSON message.

    ``None`` values in ``fields`` are dropped unless ``keep_none`` is set.
    """
    payload: Dict[str, Any] = {"event": event}
    if ctx is not None:
        payload.update(ctx.to_dict())
    payload.update(fields if keep_none else {k: v for k, v in fields.items() if v is not None})
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))


REQUIRED_NORMALIZED_KEYS = (
    "structured",
    "phase",
    "attempt",
    "error_code",
    "emitted",
    "tokens",
)


def _tokens_field(tokens: Any) -> Any:
    if tokens is None or isinstance(tokens, dict):
        return tokens
    if isinstance(tokens, Mapping):
        return dict(tokens)
    return {"value": repr(tokens)}


def normalized_log_event(  # noqa: PLR0913
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    phase: str,
    attempt: int | None = None,
    error_code: str | None = None,
    emitted: bool | None = None,
    tokens: Any = None,
    structured: bool = True,
    level: int | None = None,
    **extra_fields: Any,
) -> None:
    fields: Dict[str, Any] = {
        "structured": structured,
        "phase": phase,
        "attempt": attempt,
        "emitted": emitted,
        "tokens": _tokens_field(tokens),
    }
    if error_code is not None:
        fields["error_code"] = error_code
    for key, value in extra_fields.items():
        if value is not None and fields.get(key) is None:
            fields[key] = value
    if level is None:
        level = logging.INFO if error_code is None else logging.ERROR
    log_event(logger, event, ctx, level=level, keep_none=True, **fields)


__all__ = [
    "BASE_LOGGER_NAME",
    "LogContext",
    "get_logger",
    "configure_logger",
    "log_event",
    "normalized_log_event",
    "REQUIRED_NORMALIZED_KEYS",
]
