"""
GenerationRequest DTO built once per outbound call.

The request carries the normalized inputs every adapter consumes: the system
prompt (possibly empty), the already-truncated history, and the current user
message. It is never persisted.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Optional, Tuple

from ..constants import MAX_HISTORY_TURNS
from .conversation_turn import ConversationTurn


def coerce_history(history: Optional[Iterable[Any]]) -> Tuple[ConversationTurn, ...]:
    """Normalize caller history into a tuple of turns, skipping unusable items."""
    if not history or isinstance(history, (str, bytes)):
        return ()
    turns = []
    try:
        for item in history:
            turn = ConversationTurn.from_obj(item)
            if turn is not None:
                turns.append(turn)
    except TypeError:
        return ()
    return tuple(turns)


def recent_history(
    history: Optional[Iterable[Any]], limit: int = MAX_HISTORY_TURNS
) -> Tuple[ConversationTurn, ...]:
    """Return at most the last ``limit`` turns of ``history`` in order."""
    turns = coerce_history(history)
    if limit <= 0:
        return ()
    return turns[-limit:]


def normalize_system_prompt(system_prompt: Any) -> str:
    """Return the system prompt, or ``""`` when absent, blank or not a string."""
    if not isinstance(system_prompt, str) or not system_prompt.strip():
        return ""
    return system_prompt


@dataclass(frozen=True)
class GenerationRequest:
    """Provider-agnostic inputs for a single outbound generation call.

    Attributes:
        system_prompt: Instruction text; empty means "omit from payload".
        history: Chronological turns, already capped at ``MAX_HISTORY_TURNS``.
        message: The latest user utterance (may be empty).
    """

    system_prompt: str
    history: Tuple[ConversationTurn, ...]
    message: str

    @property
    def has_system_prompt(self) -> bool:
        return bool(self.system_prompt)

    @classmethod
    def build(
        cls,
        message: Any,
        history: Optional[Iterable[Any]] = None,
        system_prompt: Any = "",
    ) -> "GenerationRequest":
        """Build a request from raw caller inputs; never raises for bad shapes."""
        if message is None:
            text = ""
        elif isinstance(message, str):
            text = message
        else:
            text = str(message)
        return cls(
            system_prompt=normalize_system_prompt(system_prompt),
            history=recent_history(history),
            message=text,
        )


__all__ = [
    "GenerationRequest",
    "coerce_history",
    "recent_history",
    "normalize_system_prompt",
]
