"""
Gateway Base Package

Exports provider-agnostic contracts, DTOs, the error taxonomy and the provider
factory used by the adapters and the chatbot service.

- Interfaces: the ``ChatProvider`` capability protocol
- Models (DTOs): turns, requests, results and adapter configuration
- Errors: normalized ``ErrorCode`` values and ``ProviderError``
- Factory: lazy creation of provider adapters by canonical name
"""

from .errors import ErrorCode, ProviderError, classify_exception, classify_status
from .factory import ProviderFactory, UnknownProviderError
from .interfaces import ChatProvider
from .models import (
    ConversationTurn,
    GenerationRequest,
    GenerationResult,
    ProviderConfig,
    Role,
)
from .timeouts import TimeoutConfig, get_timeout_config

__all__ = [
    "ChatProvider",
    "ConversationTurn",
    "ErrorCode",
    "GenerationRequest",
    "GenerationResult",
    "ProviderConfig",
    "ProviderError",
    "ProviderFactory",
    "Role",
    "TimeoutConfig",
    "UnknownProviderError",
    "classify_exception",
    "classify_status",
    "get_timeout_config",
]
