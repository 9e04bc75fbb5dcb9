"""Settings-store collaborator for the chatbot service.

Administrators configure the chatbot through flat string key/value settings
(``chatbot_ai_provider``, ``chatbot_openai_api_key``, ...). This module
defines the read-only store contract, two concrete stores, and the validated
view the service works with.

Key Components
--------------
SettingsStore
    Protocol: ``get_setting(key, default) -> str``.
MappingSettingsStore
    Store backed by an in-memory mapping (tests, embedding applications).
EnvSettingsStore
    Store reading ``CHATBOT_*`` environment variables
    (``chatbot_ai_provider`` → ``CHATBOT_AI_PROVIDER``).
ChatbotSettings
    Pydantic model holding the parsed global knobs. Malformed numbers fall
    back to defaults; out-of-range numbers are clamped.
PROVIDER_SETTING_KEYS
    Per-provider setting names for the credential, model and base URL.
"""
from __future__ import annotations

import os
from typing import Any, Dict, Mapping, Optional, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, field_validator

from .defaults import (
    CHATBOT_DEFAULT_MAX_HISTORY,
    CHATBOT_DEFAULT_MAX_TOKENS,
    CHATBOT_DEFAULT_PROVIDER,
    CHATBOT_DEFAULT_TEMPERATURE,
    CHATBOT_MAX_TOKENS_LIMIT,
)

# ---- Global setting keys ----
CHATBOT_ENABLED = "chatbot_enabled"
CHATBOT_AI_PROVIDER = "chatbot_ai_provider"
CHATBOT_TEMPERATURE = "chatbot_temperature"
CHATBOT_MAX_TOKENS = "chatbot_max_tokens"
CHATBOT_MAX_HISTORY = "chatbot_max_history"
CHATBOT_SYSTEM_PROMPT = "chatbot_system_prompt"
CHATBOT_USER_PROMPT = "chatbot_user_prompt"
CHATBOT_FALLBACK_ON_ERROR = "chatbot_fallback_on_error"

# Per-provider setting keys. ``api_key`` may also come from user preferences.
PROVIDER_SETTING_KEYS: Dict[str, Dict[str, str]] = {
    "gemini": {
        "api_key": "chatbot_google_ai_api_key",
        "model": "chatbot_google_ai_model",
    },
    "xai": {
        "api_key": "chatbot_grok_api_key",
        "model": "chatbot_grok_model",
    },
    "ollama": {
        "base_url": "chatbot_ollama_base_url",
        "model": "chatbot_ollama_model",
    },
    "openai": {
        "api_key": "chatbot_openai_api_key",
        "model": "chatbot_openai_model",
        "base_url": "chatbot_openai_base_url",
    },
    "openrouter": {
        "api_key": "chatbot_openrouter_api_key",
        "model": "chatbot_openrouter_model",
    },
    "perplexity": {
        "api_key": "chatbot_perplexity_api_key",
        "model": "chatbot_perplexity_model",
        "base_url": "chatbot_perplexity_base_url",
    },
}


@runtime_checkable
class SettingsStore(Protocol):
    """Read-only access to administrator-configured settings."""

    def get_setting(self, key: str, default: str = "") -> str:
        """Return the stored value for ``key`` or ``default`` when unset."""
        ...


class MappingSettingsStore:
    """Settings store backed by a plain mapping; values are stringified."""

    def __init__(self, values: Optional[Mapping[str, Any]] = None) -> None:
        self._values: Dict[str, Any] = dict(values or {})

    def get_setting(self, key: str, default: str = "") -> str:
        value = self._values.get(key)
        if value is None:
            return default
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)


class EnvSettingsStore:
    """Settings store reading upper-cased keys from the process environment."""

    def __init__(self, environ: Optional[Mapping[str, str]] = None) -> None:
        self._environ = environ

    def get_setting(self, key: str, default: str = "") -> str:
        env = self._environ if self._environ is not None else os.environ
        value = env.get(key.upper())
        return default if value is None else value


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


class ChatbotSettings(BaseModel):
    """Validated global chatbot knobs.

    Attributes mirror the setting keys without the ``chatbot_`` prefix.
    """

    model_config = ConfigDict(frozen=True)

    enabled: bool = True
    provider: str = CHATBOT_DEFAULT_PROVIDER
    temperature: float = CHATBOT_DEFAULT_TEMPERATURE
    max_tokens: int = CHATBOT_DEFAULT_MAX_TOKENS
    max_history: int = CHATBOT_DEFAULT_MAX_HISTORY
    system_prompt: str = ""
    user_prompt: str = ""
    fallback_on_error: bool = False

    @field_validator("temperature", mode="before")
    @classmethod
    def _temperature(cls, v: Any) -> float:
        try:
            return _clamp(float(v), 0.0, 1.0)
        except (TypeError, ValueError):
            return CHATBOT_DEFAULT_TEMPERATURE

    @field_validator("max_tokens", mode="before")
    @classmethod
    def _max_tokens(cls, v: Any) -> int:
        try:
            return int(_clamp(int(float(v)), 1, CHATBOT_MAX_TOKENS_LIMIT))
        except (TypeError, ValueError):
            return CHATBOT_DEFAULT_MAX_TOKENS

    @field_validator("max_history", mode="before")
    @classmethod
    def _max_history(cls, v: Any) -> int:
        try:
            return max(1, int(float(v)))
        except (TypeError, ValueError):
            return CHATBOT_DEFAULT_MAX_HISTORY

    @field_validator("provider", mode="before")
    @classmethod
    def _provider(cls, v: Any) -> str:
        text = str(v or "").strip().lower()
        return text or CHATBOT_DEFAULT_PROVIDER

    @classmethod
    def from_store(cls, store: SettingsStore) -> "ChatbotSettings":
        """Read and validate every global knob from ``store``.

        ``chatbot_enabled`` is enabled only by the exact string ``"true"``.
        """
        return cls(
            enabled=store.get_setting(CHATBOT_ENABLED, "true") == "true",
            provider=store.get_setting(CHATBOT_AI_PROVIDER, CHATBOT_DEFAULT_PROVIDER),
            temperature=store.get_setting(CHATBOT_TEMPERATURE, str(CHATBOT_DEFAULT_TEMPERATURE)),
            max_tokens=store.get_setting(CHATBOT_MAX_TOKENS, str(CHATBOT_DEFAULT_MAX_TOKENS)),
            max_history=store.get_setting(CHATBOT_MAX_HISTORY, str(CHATBOT_DEFAULT_MAX_HISTORY)),
            system_prompt=store.get_setting(CHATBOT_SYSTEM_PROMPT, ""),
            user_prompt=store.get_setting(CHATBOT_USER_PROMPT, ""),
            fallback_on_error=store.get_setting(CHATBOT_FALLBACK_ON_ERROR, "false") == "true",
        )


__all__ = [
    "SettingsStore",
    "MappingSettingsStore",
    "EnvSettingsStore",
    "ChatbotSettings",
    "PROVIDER_SETTING_KEYS",
    "CHATBOT_ENABLED",
    "CHATBOT_AI_PROVIDER",
    "CHATBOT_TEMPERATURE",
    "CHATBOT_MAX_TOKENS",
    "CHATBOT_MAX_HISTORY",
    "CHATBOT_SYSTEM_PROMPT",
    "CHATBOT_USER_PROMPT",
    "CHATBOT_FALLBACK_ON_ERROR",
]
