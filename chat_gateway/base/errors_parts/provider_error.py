"""Exception passed between the steps of one upstream call.

:func:`chat_gateway.base.http_chat.execute_chat` raises it from the send,
status and decode steps and turns it into an in-band failure result before
returning, so callers of ``process_message`` never see it.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

from .error_code import ErrorCode


class ProviderError(Exception):
    """One failed call, already classified.

    ``message`` is safe to show to an end user. ``log_fields`` holds the
    diagnostics (redacted body, failing stage, masked exception text) that
    only go to the log.
    """

    def __init__(
        self,
        *,
        code: ErrorCode,
        message: str,
        provider: str,
        model: Optional[str] = None,
        status_code: Optional[int] = None,
        log_fields: Optional[Dict[str, Any]] = None,
        raw: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.provider = provider
        self.model = model
        self.status_code = status_code
        self.log_fields: Dict[str, Any] = dict(log_fields or {})
        self.raw = raw

    def __str__(self) -> str:
        where = f"{self.provider}/{self.model}" if self.model else self.provider
        return f"[{where}] {self.code.value}: {self.message}"


__all__ = ["ProviderError"]
