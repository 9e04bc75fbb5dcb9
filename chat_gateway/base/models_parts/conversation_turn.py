"""
ConversationTurn DTO used across providers.

Defines the immutable `ConversationTurn` dataclass and the `Role` literal.
Caller-supplied history arrives as plain mappings (``{"role", "content"}``);
`ConversationTurn.from_obj` normalizes those into turns without ever raising.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Mapping, Optional

Role = Literal["user", "assistant"]


@dataclass(frozen=True)
class ConversationTurn:
    """One role-tagged message from a prior exchange.

    Attributes:
        role: ``"user"`` or ``"assistant"``. Adapters remap this into each
            upstream's own vocabulary.
        content: Message text.
    """

    role: Role
    content: str

    @classmethod
    def from_obj(cls, obj: Any) -> Optional["ConversationTurn"]:
        """Coerce a mapping or turn into a `ConversationTurn`.

        Any role other than ``"user"`` is treated as ``"assistant"``. Missing
        or non-string content becomes an empty string. Returns ``None`` for
        objects that are neither mappings nor turns.
        """
        if isinstance(obj, ConversationTurn):
            return obj
        if not isinstance(obj, Mapping):
            return None
        role: Role = "user" if obj.get("role") == "user" else "assistant"
        content = obj.get("content")
        return cls(role=role, content=content if isinstance(content, str) else "")

    def to_dict(self) -> dict:
        return {"role": self.role, "content": self.content}


__all__ = ["ConversationTurn", "Role"]
