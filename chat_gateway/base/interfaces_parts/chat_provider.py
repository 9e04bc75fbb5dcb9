"""ChatProvider Protocol (single-class module).

Defines the chat contract every adapter, including the keyword fallback,
satisfies.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional, Protocol, runtime_checkable

from ..models import GenerationResult


@runtime_checkable
class ChatProvider(Protocol):
    """Capability contract for conversational providers.

    Implementations map the provider-agnostic inputs into their upstream's
    wire format and normalize the reply into a ``GenerationResult``.
    """

    @property
    def provider_name(self) -> str:
        """Canonical provider identifier, e.g. ``"gemini"`` or ``"ollama"``."""
        ...

    @property
    def display_name(self) -> str:
        """Human-readable label used as the result's ``model`` prefix."""
        ...

    def process_message(
        self,
        message: str,
        history: Optional[Iterable[Any]] = None,
        system_prompt: str = "",
    ) -> GenerationResult:
        """Produce one reply for ``message``.

        Failure handling: never raise. Every failure is returned in-band with
        ``model`` ending in ``(Error)`` and a populated ``error_code``.
        """
        ...
