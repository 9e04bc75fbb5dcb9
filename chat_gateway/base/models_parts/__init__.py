"""Models parts package public surface.

Re-exports individual DTOs so callers can import from
`chat_gateway.base.models_parts` if needed, while `chat_gateway.base.models`
remains the primary stable import path.
"""

from .conversation_turn import ConversationTurn, Role
from .generation_request import (
    GenerationRequest,
    coerce_history,
    normalize_system_prompt,
    recent_history,
)
from .generation_result import GenerationResult
from .provider_config import DEFAULT_MAX_TOKENS, DEFAULT_TEMPERATURE, ProviderConfig

__all__ = [
    "ConversationTurn",
    "Role",
    "GenerationRequest",
    "coerce_history",
    "normalize_system_prompt",
    "recent_history",
    "GenerationResult",
    "ProviderConfig",
    "DEFAULT_TEMPERATURE",
    "DEFAULT_MAX_TOKENS",
]
