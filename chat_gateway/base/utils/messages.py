"""Message assembly helpers shared across providers.

Helpers here are side-effect free and operate on provider-agnostic DTOs only.
Each adapter still decides its own envelope; these functions cover the flat
``{role, content}`` shape used by every upstream except Gemini.
"""
from __future__ import annotations

from typing import Dict, List

from ..models import ConversationTurn, GenerationRequest


def map_role(turn: ConversationTurn, assistant_role: str = "assistant", user_role: str = "user") -> str:
    """Translate a turn's role into an upstream's vocabulary.

    ``"user"`` maps to ``user_role``; every other role maps to ``assistant_role``.
    """
    return user_role if turn.role == "user" else assistant_role


def build_role_content_messages(
    request: GenerationRequest,
    *,
    system_role: str = "system",
    assistant_role: str = "assistant",
) -> List[Dict[str, str]]:
    """Assemble ``[{role, content}, ...]`` from a request.

    Order: optional system entry (omitted entirely when the prompt is empty),
    the truncated history with remapped roles, then the current message as a
    final ``user`` entry.
    """
    messages: List[Dict[str, str]] = []
    if request.has_system_prompt:
        messages.append({"role": system_role, "content": request.system_prompt})
    for turn in request.history:
        messages.append({"role": map_role(turn, assistant_role), "content": turn.content})
    messages.append({"role": "user", "content": request.message})
    return messages


__all__ = ["map_role", "build_role_content_messages"]
