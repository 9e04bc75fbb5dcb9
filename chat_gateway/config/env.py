"""Environment variables that carry provider API keys.

Each keyed provider lists the variables it reads, canonical name first.
``ENV_MAP`` exposes the canonical name alone and ``ENV_ALIASES`` only the
providers that accept more than one name. Ollama needs no key and has no
entry. Lookups never raise; an unknown provider or an unset variable reads
as ``None``.
"""

from __future__ import annotations

import os
from typing import Dict, Iterable, Optional, Tuple

_KEY_VARIABLES: Dict[str, Tuple[str, ...]] = {
    "gemini": ("GEMINI_API_KEY", "GOOGLE_API_KEY"),
    "xai": ("XAI_API_KEY", "GROK_API_KEY"),
    "openai": ("OPENAI_API_KEY",),
    "openrouter": ("OPENROUTER_API_KEY",),
    "perplexity": ("PERPLEXITY_API_KEY",),
}

ENV_MAP: Dict[str, str] = {provider: names[0] for provider, names in _KEY_VARIABLES.items()}
ENV_ALIASES: Dict[str, Tuple[str, ...]] = {
    provider: names for provider, names in _KEY_VARIABLES.items() if len(names) > 1
}

_PLACEHOLDER_MARKERS = ("placeholder", "changeme", "example")


def is_placeholder(val: Optional[str]) -> bool:
    """True for values copied from sample configs rather than real keys."""
    if val is None:
        return False
    lowered = str(val).strip().lower()
    if lowered.startswith("test_"):
        return True
    return any(marker in lowered for marker in _PLACEHOLDER_MARKERS)


def get_env_var_name(provider: str) -> Optional[str]:
    return ENV_MAP.get((provider or "").lower())


def get_env_var_candidates(provider: str) -> Iterable[str]:
    """Variable names to try for ``provider``, most preferred first."""
    return iter(_KEY_VARIABLES.get((provider or "").lower(), ()))


def resolve_provider_key(provider: str) -> Tuple[Optional[str], Optional[str]]:
    """Return ``(key, variable_name)`` from the first usable variable.

    Empty and placeholder values are passed over. ``(None, None)`` when no
    candidate holds a real key.
    """
    for name in get_env_var_candidates(provider):
        value = os.environ.get(name)
        if value and not is_placeholder(value):
            return value, name
    return None, None


__all__ = [
    "ENV_MAP",
    "ENV_ALIASES",
    "is_placeholder",
    "get_env_var_name",
    "get_env_var_candidates",
    "resolve_provider_key",
]
