"""chat_gateway package

Multi-provider conversational gateway.

Purpose:
    Turn ``(message, history, system_prompt)`` into a normalized
    ``{"response", "model"}`` reply from one of several interchangeable
    upstream LLM services, degrading to a zero-network keyword assistant when
    nothing is configured.

Public API (re-exported):
    - Version: ``__version__``
    - Factory: :func:`create`, :class:`ProviderFactory`
    - Contracts and DTOs: :class:`ChatProvider`, :class:`GenerationResult`,
      :class:`ProviderConfig`
    - Errors: :class:`ErrorCode`, :class:`ProviderError`

Example:
    >>> from chat_gateway import create
    >>> create("basic").process_message("hello").to_dict()["model"]
    'Basic Assistant'
"""

from typing import Any

from .base.errors import ErrorCode, ProviderError
from .base.factory import ProviderFactory, UnknownProviderError
from .base.interfaces import ChatProvider
from .base.models import GenerationResult, ProviderConfig

__version__ = "0.1.0"


def create(provider: str, **kwargs: Any) -> ChatProvider:
    """Create a provider adapter by name (see :meth:`ProviderFactory.create`)."""
    return ProviderFactory.create(provider, **kwargs)


__all__ = [
    "__version__",
    "create",
    "ChatProvider",
    "ErrorCode",
    "GenerationResult",
    "ProviderConfig",
    "ProviderError",
    "ProviderFactory",
    "UnknownProviderError",
]
