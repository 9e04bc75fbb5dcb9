"""Provider-agnostic DTOs public surface.

Re-exports from ``chat_gateway.base.models_parts`` to keep a stable import path.
"""

from .models_parts import (
    DEFAULT_MAX_TOKENS,
    DEFAULT_TEMPERATURE,
    ConversationTurn,
    GenerationRequest,
    GenerationResult,
    ProviderConfig,
    Role,
    coerce_history,
    normalize_system_prompt,
    recent_history,
)

__all__ = [
    "ConversationTurn",
    "Role",
    "GenerationRequest",
    "GenerationResult",
    "ProviderConfig",
    "DEFAULT_TEMPERATURE",
    "DEFAULT_MAX_TOKENS",
    "coerce_history",
    "normalize_system_prompt",
    "recent_history",
]
