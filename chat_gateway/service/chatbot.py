"""Chatbot service: settings-driven provider selection and prompt assembly.

Purpose:
    Sits between a chat endpoint and the adapters. It reads the administrator
    settings, decides whether the chatbot is enabled, composes the system
    prompt from its sections, picks and configures one provider, and returns
    that provider's ``GenerationResult``.

Failure semantics:
    - Never raises for configuration problems. A disabled chatbot, a missing
      credential, a config-file value of the wrong type, or an adapter that
      cannot be constructed all come back as in-band results labelled with
      the assistant name.
    - Unknown provider identifiers fall back to the basic provider.
    - When ``chatbot_fallback_on_error`` is ``"true"``, a failed upstream
      result is replaced by the basic provider's reply.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Mapping, Optional, Union

from pydantic import ValidationError

from ..base.errors import ErrorCode
from ..base.factory import ProviderFactory, UnknownProviderError
from ..base.interfaces import ChatProvider
from ..base.logging import LogContext, get_logger, log_event, normalized_log_event
from ..base.models import GenerationResult, ProviderConfig, recent_history
from ..config import build_provider_config
from ..config.defaults import ASSISTANT_DISPLAY_NAME, OLLAMA_DEFAULT_HOST, PROVIDER_DISPLAY_NAMES
from ..config.settings import PROVIDER_SETTING_KEYS, ChatbotSettings, SettingsStore

DISABLED_MESSAGE = "The AI chatbot is currently disabled by the administrator."

# Providers that need no API key; they need a reachable base URL instead.
KEYLESS_PROVIDERS = frozenset({"basic", "ollama"})


def compose_system_prompt(
    base_prompt: str = "",
    admin_prompt: str = "",
    user_context: str = "",
    conversation_memory: str = "",
) -> str:
    """Join the prompt sections, skipping empty ones.

    Layout::

        <base prompt>

        ## Additional Instructions
        <admin prompt>

        ## Current User Context
        <user context>

        ## Conversation Memory
        <conversation memory>
    """
    parts = []
    if base_prompt and base_prompt.strip():
        parts.append(base_prompt.strip())
    for heading, body in (
        ("Additional Instructions", admin_prompt),
        ("Current User Context", user_context),
        ("Conversation Memory", conversation_memory),
    ):
        if body and body.strip():
            parts.append(f"## {heading}\n{body.strip()}")
    return "\n\n".join(parts)


def apply_user_prompt(message: str, user_prompt: str) -> str:
    """Append the admin-configured user prompt to the outgoing message."""
    if not user_prompt or not user_prompt.strip():
        return message
    return f"{message}\n\n[User Context: {user_prompt.strip()}]"


def _missing_setting_message(provider: str) -> str:
    label = PROVIDER_DISPLAY_NAMES.get(provider, provider)
    if provider == "ollama":
        return f"{label} base URL is not configured. Please configure it in admin settings."
    return (
        f"{label} API key is not configured. Please configure it in admin settings "
        "or your user preferences."
    )


class ChatbotService:
    """Settings-driven front door to the provider adapters.

    Parameters:
        settings: Store supplying ``chatbot_*`` settings.
        logger: Optional logger; defaults to ``gateway.chatbot``.
        factory: Provider factory; injectable for tests.
    """

    def __init__(
        self,
        settings: SettingsStore,
        *,
        logger: Optional[logging.Logger] = None,
        factory: type = ProviderFactory,
    ) -> None:
        self._settings = settings
        self._logger = logger or get_logger("gateway.chatbot")
        self._factory = factory

    @property
    def assistant_name(self) -> str:
        return ASSISTANT_DISPLAY_NAME

    def load_settings(self) -> ChatbotSettings:
        return ChatbotSettings.from_store(self._settings)

    def process_message(
        self,
        message: str,
        history: Optional[Iterable[Any]] = None,
        *,
        base_system_prompt: str = "",
        user_context: str = "",
        conversation_memory: str = "",
        user_preferences: Optional[Mapping[str, Any]] = None,
    ) -> GenerationResult:
        """Answer ``message`` with the configured provider.

        Returns:
            The provider's result, or an in-band result for a disabled chatbot
            (``error_code=DISABLED``) or missing configuration
            (``error_code=CONFIG``).
        """
        settings = self.load_settings()
        if not settings.enabled:
            log_event(self._logger, "chatbot.disabled", LogContext(provider=settings.provider))
            return GenerationResult(
                response=DISABLED_MESSAGE,
                model=f"{self.assistant_name} (Disabled)",
                error_code=ErrorCode.DISABLED,
            )

        turns = recent_history(history, settings.max_history)
        system_prompt = compose_system_prompt(
            base_system_prompt, settings.system_prompt, user_context, conversation_memory
        )
        full_message = apply_user_prompt(message or "", settings.user_prompt)

        provider = self.select_provider(settings, user_preferences)
        if isinstance(provider, GenerationResult):
            return provider

        result = provider.process_message(full_message, turns, system_prompt)
        if result.ok or not settings.fallback_on_error or provider.provider_name == "basic":
            return result

        log_event(
            self._logger,
            "chatbot.fallback",
            LogContext(provider=provider.provider_name),
            level=logging.WARNING,
            error_code=result.error_code.value if result.error_code else None,
        )
        return self._basic().process_message(full_message, turns, system_prompt)

    def select_provider(
        self,
        settings: ChatbotSettings,
        user_preferences: Optional[Mapping[str, Any]] = None,
    ) -> Union[ChatProvider, GenerationResult]:
        """Return a configured adapter, or an in-band ``CONFIG`` result."""
        name = self._factory.canonical_name(settings.provider)
        if not self._factory.is_supported(name):
            log_event(
                self._logger,
                "chatbot.unknown_provider",
                LogContext(provider=settings.provider),
                level=logging.WARNING,
            )
            return self._basic()
        if name == "basic":
            return self._basic()

        try:
            config = self._provider_config(name, settings, user_preferences or {})
        except ValidationError as e:
            return self._config_error(
                name,
                f"Invalid configuration for {PROVIDER_DISPLAY_NAMES.get(name, name)}. Please check the provider settings.",
                detail=str(e),
            )
        if name in KEYLESS_PROVIDERS:
            missing = not config.base_url
        else:
            missing = not config.api_key and not self._custom_base_url(name, config)
        if missing:
            return self._config_error(name, _missing_setting_message(name))

        try:
            return self._factory.create(name, config=config, logger=get_logger(f"gateway.{name}"))
        except UnknownProviderError as e:
            return self._config_error(name, f"Invalid AI provider configured: {settings.provider}", detail=str(e))

    def _provider_config(
        self,
        name: str,
        settings: ChatbotSettings,
        user_preferences: Mapping[str, Any],
    ) -> ProviderConfig:
        keys = PROVIDER_SETTING_KEYS.get(name, {})
        overrides: Dict[str, Any] = {
            "temperature": settings.temperature,
            "max_tokens": settings.max_tokens,
        }
        if "api_key" in keys:
            user_key = user_preferences.get(keys["api_key"])
            admin_key = self._settings.get_setting(keys["api_key"], "")
            key = user_key if isinstance(user_key, str) and user_key.strip() else admin_key
            if key.strip():
                overrides["api_key"] = key.strip()
        if "model" in keys:
            model = self._settings.get_setting(keys["model"], "")
            if model.strip():
                overrides["model"] = model.strip()
        if "base_url" in keys:
            default = OLLAMA_DEFAULT_HOST if name == "ollama" else ""
            base_url = self._settings.get_setting(keys["base_url"], default).strip()
            if base_url:
                overrides["base_url"] = base_url
            elif name == "ollama":
                # An explicitly blanked Ollama URL must not fall back to defaults.
                return build_provider_config(name, ProviderConfig(**overrides))
        return build_provider_config(name, overrides)

    @staticmethod
    def _custom_base_url(name: str, config: ProviderConfig) -> bool:
        """OpenAI-compatible servers at a custom URL may not need a key."""
        if name != "openai" or not config.base_url:
            return False
        return "api.openai.com" not in config.base_url

    def _config_error(self, name: str, message: str, detail: Optional[str] = None) -> GenerationResult:
        normalized_log_event(
            self._logger,
            "chatbot.config_error",
            LogContext(provider=name),
            phase="select",
            error_code=ErrorCode.CONFIG.value,
            emitted=False,
            detail=detail,
        )
        return GenerationResult.failure(message, self.assistant_name, ErrorCode.CONFIG)

    def _basic(self) -> ChatProvider:
        return self._factory.create("basic", logger=get_logger("gateway.basic"))


__all__ = ["ChatbotService", "compose_system_prompt", "apply_user_prompt", "DISABLED_MESSAGE"]
