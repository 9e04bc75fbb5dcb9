"""Map HTTP statuses and raised exceptions onto :class:`ErrorCode`.

``classify_exception`` checks, in order: an already classified
``ProviderError``, timeouts, unreachable hosts, a status code carried on the
exception or its ``response``, and finally keywords in the message.
"""
from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import httpx

from ..constants import CONNECTION_FAILURE_PATTERNS
from .error_code import ErrorCode
from .provider_error import ProviderError

_HTTP_STATUS_MAP: Dict[int, ErrorCode] = {
    400: ErrorCode.VALIDATION,
    401: ErrorCode.AUTH,
    403: ErrorCode.AUTH,
    404: ErrorCode.NOT_FOUND,
    408: ErrorCode.TIMEOUT,
    409: ErrorCode.CONFLICT,
    422: ErrorCode.VALIDATION,
    429: ErrorCode.RATE_LIMIT,
    500: ErrorCode.SERVER_ERROR,
    502: ErrorCode.TRANSIENT,
    503: ErrorCode.UNAVAILABLE,
    504: ErrorCode.TIMEOUT,
}

# First match wins.
_MESSAGE_KEYWORDS: Tuple[Tuple[ErrorCode, Tuple[str, ...]], ...] = (
    (ErrorCode.TIMEOUT, ("timeout", "timed out")),
    (ErrorCode.AUTH, ("unauthorized", "forbidden", "api key")),
    (ErrorCode.NOT_FOUND, ("not found", "does not exist")),
    (ErrorCode.RATE_LIMIT, ("rate limit", "too many requests")),
    (ErrorCode.UNAVAILABLE, ("unavailable",)),
    (ErrorCode.VALIDATION, ("invalid", "malformed")),
    (ErrorCode.SERVER_ERROR, ("server error", "internal error")),
)


def _as_status(value: Any) -> Optional[int]:
    if isinstance(value, int) and not isinstance(value, bool) and 100 <= value <= 599:
        return value
    return None


def _extract_status(exc: Any) -> Optional[int]:
    """Status code from ``exc.status_code``, ``exc.status`` or ``exc.response``."""
    candidates = (
        getattr(exc, "status_code", None),
        getattr(exc, "status", None),
        getattr(getattr(exc, "response", None), "status_code", None),
    )
    for candidate in candidates:
        status = _as_status(candidate)
        if status is not None:
            return status
    return None


def classify_status(status: int) -> ErrorCode:
    """Known statuses map directly; other 5xx are ``SERVER_ERROR``, the rest ``UNKNOWN``."""
    code = _HTTP_STATUS_MAP.get(status)
    if code is not None:
        return code
    return ErrorCode.SERVER_ERROR if 500 <= status <= 599 else ErrorCode.UNKNOWN


def is_connection_failure(exc: BaseException) -> bool:
    """True when ``exc`` means the host was never reached."""
    if isinstance(exc, httpx.ConnectError):
        return True
    text = str(exc).lower()
    return any(pattern in text for pattern in CONNECTION_FAILURE_PATTERNS)


def _classify_message(text: str) -> ErrorCode:
    lowered = text.lower()
    for code, keywords in _MESSAGE_KEYWORDS:
        if any(word in lowered for word in keywords):
            return code
    return ErrorCode.UNKNOWN


def classify_exception(exc: Any) -> ErrorCode:
    if isinstance(exc, ProviderError):
        return exc.code
    if isinstance(exc, (httpx.TimeoutException, TimeoutError)):
        return ErrorCode.TIMEOUT
    if isinstance(exc, BaseException) and is_connection_failure(exc):
        return ErrorCode.UNAVAILABLE
    status = _extract_status(exc)
    if status is not None:
        return classify_status(status)
    return _classify_message(str(exc))


__all__ = [
    "classify_exception",
    "classify_status",
    "is_connection_failure",
]
