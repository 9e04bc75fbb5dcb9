"""xAI (Grok) provider adapter.

xAI exposes an OpenAI-compatible chat-completions endpoint at
``https://api.x.ai/v1``. Requests are sent directly with ``httpx`` and
``stream: false`` is always set explicitly.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional, Union

from ..base.http_chat import JSON_HEADERS, ChatCall, bearer_auth, execute_chat, missing_credential_result
from ..base.logging import get_logger
from ..base.models import GenerationRequest, GenerationResult, ProviderConfig
from ..base.openai_style import build_chat_completion_payload, extract_chat_completion_text
from ..base.timeouts import resolve_call_timeout
from ..base.utils import merge_headers
from ..config import build_provider_config
from ..config.defaults import PROVIDER_DISPLAY_NAMES, XAI_DEFAULT_BASE_URL, XAI_DEFAULT_MODEL

NOT_FOUND_HINT = "Check that the Grok model name is correct (for example grok-2-1212)."


class XAIProvider:
    """Adapter for xAI Grok chat completions."""

    def __init__(
        self,
        config: Union[ProviderConfig, Mapping[str, Any], None] = None,
        *,
        logger: Optional[logging.Logger] = None,
        **overrides: Any,
    ) -> None:
        self._config = build_provider_config("xai", config, **overrides)
        self._model = self._config.model or XAI_DEFAULT_MODEL
        self._base_url = self._config.base_url or XAI_DEFAULT_BASE_URL
        self._logger = logger or get_logger("gateway.xai")

    @property
    def provider_name(self) -> str:
        return "xai"

    @property
    def display_name(self) -> str:
        return PROVIDER_DISPLAY_NAMES["xai"]

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
            payload=build_chat_completion_payload(self._model, request, self._config, stream=False),
            headers=merge_headers(JSON_HEADERS, self._config.headers, bearer_auth(api_key)),
            timeout=resolve_call_timeout(self._config.timeout_seconds, local=False),
            extract_text=extract_chat_completion_text,
            verify=self._config.verify_tls is not False,
            not_found_hint=NOT_FOUND_HINT,
            secret=api_key,
        )
        return execute_chat(call, self._logger)


__all__ = ["XAIProvider"]
