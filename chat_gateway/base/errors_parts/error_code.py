"""Failure categories carried by ``GenerationResult.error_code``.

The string values show up in ``chat.error`` log lines and in the CLI's JSON
output, so renaming one is a breaking change.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    # upstream answered with a failure status
    AUTH = "auth"
    NOT_FOUND = "not_found"
    RATE_LIMIT = "rate_limit"
    VALIDATION = "validation"
    CONFLICT = "conflict"
    SERVER_ERROR = "server_error"

    # upstream could not be reached, or gave up
    TIMEOUT = "timeout"
    UNAVAILABLE = "unavailable"
    TRANSIENT = "transient"

    # upstream said 200 but the body was unusable
    BAD_RESPONSE = "bad_response"

    # never left the process
    CONFIG = "config"
    DISABLED = "disabled"
    INTERNAL = "internal"

    UNKNOWN = "unknown"


__all__ = ["ErrorCode"]
