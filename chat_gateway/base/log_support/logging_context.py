"""Per-call logging context.

Every event emitted for one upstream call (``chat.start``, ``chat.end``,
``chat.error``) shares a :class:`LogContext`, so the provider, the model and a
short ``request_id`` can be used to stitch the lines of one call together.
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


def new_request_id() -> str:
    return uuid.uuid4().hex[:12]


@dataclass(frozen=True)
class LogContext:
    """Fields merged into each structured event.

    Attributes:
        provider: Provider key (``"gemini"``, ``"ollama"``...).
        model: Model identifier the call targets.
        request_id: Correlation id shared by the events of one call.
        extra: Additional flat fields; ``None`` values are skipped.
    """

    provider: Optional[str] = None
    model: Optional[str] = None
    request_id: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def for_call(cls, provider: str, model: Optional[str]) -> "LogContext":
        """Context for a new upstream call with a fresh ``request_id``."""
        return cls(provider=provider, model=model, request_id=new_request_id())

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for key in ("provider", "model", "request_id"):
            value = getattr(self, key)
            if value is not None:
                out[key] = value
        for key, value in self.extra.items():
            if value is not None:
                out.setdefault(key, value)
        return out


__all__ = ["LogContext", "new_request_id"]
