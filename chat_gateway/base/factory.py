"""Build provider adapters by name.

Adapter modules are imported on first use, so a process that only ever talks
to one vendor never imports the others. The factory never falls back: it
returns an adapter or raises :class:`UnknownProviderError`, and choosing the
basic assistant instead is left to :class:`chat_gateway.service.chatbot.ChatbotService`.

Legacy identifiers (``google_gemini``, ``grok``) resolve through
``PROVIDER_ALIASES``.
"""

from __future__ import annotations

import logging
from importlib import import_module
from typing import Any, Dict, Mapping, NamedTuple, Optional, Tuple, Union

from ..config.defaults import PROVIDER_ALIASES
from .interfaces import ChatProvider
from .models import ProviderConfig


class UnknownProviderError(Exception):
    """The name is not registered, or its adapter could not be loaded or built."""


class _AdapterRef(NamedTuple):
    module: str
    attr: str


def create_provider(provider: str, **kwargs: Any) -> ChatProvider:
    """Shortcut for :meth:`ProviderFactory.create`."""
    return ProviderFactory.create(provider, **kwargs)


class ProviderFactory:
    """Registry of adapter classes keyed by canonical provider name."""

    # insertion order is the order shown by ``supported()``
    _PROVIDERS: Dict[str, _AdapterRef] = {
        "basic": _AdapterRef("chat_gateway.basic.client", "BasicProvider"),
        "gemini": _AdapterRef("chat_gateway.gemini.client", "GeminiProvider"),
        "xai": _AdapterRef("chat_gateway.xai.client", "XAIProvider"),
        "ollama": _AdapterRef("chat_gateway.ollama.client", "OllamaProvider"),
        "openai": _AdapterRef("chat_gateway.openai.client", "OpenAIProvider"),
        "openrouter": _AdapterRef("chat_gateway.openrouter.client", "OpenRouterProvider"),
        "perplexity": _AdapterRef("chat_gateway.perplexity.client", "PerplexityProvider"),
    }

    @classmethod
    def canonical_name(cls, provider: Optional[str]) -> str:
        name = (provider or "").strip().lower()
        return PROVIDER_ALIASES.get(name, name)

    @classmethod
    def is_supported(cls, provider: Optional[str]) -> bool:
        return cls.canonical_name(provider) in cls._PROVIDERS

    @classmethod
    def supported(cls) -> Tuple[str, ...]:
        return tuple(cls._PROVIDERS)

    @classmethod
    def _adapter_class(cls, provider: str) -> type:
        ref = cls._PROVIDERS.get(cls.canonical_name(provider))
        if ref is None:
            raise UnknownProviderError(f"Unknown provider '{provider}'")
        try:
            return getattr(import_module(ref.module), ref.attr)
        except (ImportError, AttributeError) as exc:  # pragma: no cover - broken install
            raise UnknownProviderError(f"Adapter {ref.module}.{ref.attr} for '{provider}' is not loadable: {exc}") from exc

    @classmethod
    def create(
        cls,
        provider: str,
        *,
        config: Union[ProviderConfig, Mapping[str, Any], None] = None,
        logger: Optional[logging.Logger] = None,
        **kwargs: Any,
    ) -> ChatProvider:
        """Instantiate the adapter registered for ``provider``.

        ``config`` may be a ready ``ProviderConfig`` or a mapping of overrides
        that the adapter merges over defaults, config file and environment.
        Keyword overrides such as ``model=`` are passed to the constructor.

        Raises:
            UnknownProviderError: unknown name, unloadable adapter, or a
                constructor that rejected its arguments.
        """
        adapter_cls = cls._adapter_class(provider)
        try:
            return adapter_cls(config, logger=logger, **kwargs)
        except TypeError as exc:
            raise UnknownProviderError(f"Invalid arguments for the '{provider}' adapter: {exc}") from exc
        except Exception as exc:
            raise UnknownProviderError(f"Failed to initialize provider '{provider}': {exc}") from exc


__all__ = ["ProviderFactory", "UnknownProviderError", "create_provider"]
