"""Auxiliary logging helpers (formatters, context, redaction) used by base.logging."""

from .json_formatter import JsonFormatter, ISO
from .logging_context import LogContext
from .redaction import MASK, mask_secret, redact_url, truncate_body

__all__ = [
    "JsonFormatter",
    "ISO",
    "LogContext",
    "MASK",
    "mask_secret",
    "redact_url",
    "truncate_body",
]
