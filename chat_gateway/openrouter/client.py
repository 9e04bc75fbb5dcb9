"""OpenRouter provider adapter.

Purpose:
    Routes chat completions through OpenRouter's aggregator at
    ``https://openrouter.ai/api/v1``. The upstream may route to a different
    sub-model than requested, so the result label uses the model echoed in the
    response (see :func:`resolve_echoed_model`).

Auth:
    ``Authorization: Bearer`` plus the ``HTTP-Referer`` / ``X-Title``
    attribution headers.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional, Union

from ..base.http_chat import ChatCall, execute_chat, missing_credential_result
from ..base.logging import get_logger
from ..base.models import GenerationRequest, GenerationResult, ProviderConfig
from ..base.openai_style import build_chat_completion_payload, extract_chat_completion_text
from ..base.timeouts import resolve_call_timeout
from ..config import build_provider_config
from ..config.defaults import OPENROUTER_DEFAULT_BASE_URL, OPENROUTER_DEFAULT_MODEL, PROVIDER_DISPLAY_NAMES
from .helpers import build_headers, resolve_echoed_model

NOT_FOUND_HINT = (
    "Check the model identifier on openrouter.ai/models; OpenRouter ids include "
    "the vendor prefix (for example openai/gpt-4o-mini)."
)


class OpenRouterProvider:
    """Adapter for OpenRouter chat completions."""

    def __init__(
        self,
        config: Union[ProviderConfig, Mapping[str, Any], None] = None,
        *,
        logger: Optional[logging.Logger] = None,
        **overrides: Any,
    ) -> None:
        self._config = build_provider_config("openrouter", config, **overrides)
        self._model = self._config.model or OPENROUTER_DEFAULT_MODEL
        self._base_url = self._config.base_url or OPENROUTER_DEFAULT_BASE_URL
        self._logger = logger or get_logger("gateway.openrouter")

    @property
    def provider_name(self) -> str:
        return "openrouter"

    @property
    def display_name(self) -> str:
        return PROVIDER_DISPLAY_NAMES["openrouter"]

    @property
    def model(self) -> str:
        return self._model

    def process_message(
        self,
        message: str,
        history: Optional[Iterable[Any]] = None,
        system_prompt: str = "",
    ) -> GenerationResult:
        api_key = self._config.api_key
        if not api_key:
            return missing_credential_result(
                self._logger,
                provider=self.provider_name,
                label=self.display_name,
                model=self._model,
                message=f"{self.display_name} API key is not configured. Please configure it in settings.",
            )
        request = GenerationRequest.build(message, history, system_prompt)
        call = ChatCall(
            provider=self.provider_name,
            label=self.display_name,
            model=self._model,
            base_url=self._base_url,
            path="/chat/completions",
            payload=build_chat_completion_payload(self._model, request, self._config),
            headers=build_headers(api_key, self._config.headers),
            timeout=resolve_call_timeout(self._config.timeout_seconds, local=False),
            extract_text=extract_chat_completion_text,
            verify=self._config.verify_tls is not False,
            resolve_model=resolve_echoed_model,
            not_found_hint=NOT_FOUND_HINT,
            secret=api_key,
        )
        return execute_chat(call, self._logger)


__all__ = ["OpenRouterProvider"]
