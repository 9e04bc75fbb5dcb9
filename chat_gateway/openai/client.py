"""OpenAI provider adapter.

Purpose:
    Calls ``{base}/v1/chat/completions`` on api.openai.com or any
    OpenAI-compatible server (vLLM, LM Studio, LocalAI, Azure-style proxies).

Base URL handling:
    The configured base is the server origin. A trailing ``/v1`` is tolerated
    and stripped so ``https://host/v1`` and ``https://host`` reach the same
    endpoint.

Auth:
    ``Authorization: Bearer``. A key is required for the default OpenAI host;
    a custom base URL may be used without one since many self-hosted
    compatible servers do not check credentials.
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
from ..config.defaults import OPENAI_DEFAULT_BASE_URL, OPENAI_DEFAULT_MODEL, PROVIDER_DISPLAY_NAMES

NOT_FOUND_HINT = (
    "Check that the model name is correct and that your account or server "
    "has access to it (for example gpt-4o-mini)."
)


def normalize_base_url(base_url: Optional[str]) -> str:
    """Return the server origin without a trailing slash or ``/v1`` suffix."""
    base = (base_url or "").strip().rstrip("/") or OPENAI_DEFAULT_BASE_URL
    if base.endswith("/v1"):
        base = base[: -len("/v1")]
    return base


class OpenAIProvider:
    """Adapter for OpenAI-compatible chat completions."""

    def __init__(
        self,
        config: Union[ProviderConfig, Mapping[str, Any], None] = None,
        *,
        logger: Optional[logging.Logger] = None,
        **overrides: Any,
    ) -> None:
        self._config = build_provider_config("openai", config, **overrides)
        self._model = self._config.model or OPENAI_DEFAULT_MODEL
        self._base_url = normalize_base_url(self._config.base_url)
        self._logger = logger or get_logger("gateway.openai")

    @property
    def provider_name(self) -> str:
        return "openai"

    @property
    def display_name(self) -> str:
        return PROVIDER_DISPLAY_NAMES["openai"]

    @property
    def model(self) -> str:
        return self._model

    @property
    def base_url(self) -> str:
        return self._base_url

    def _requires_key(self) -> bool:
        return self._base_url == OPENAI_DEFAULT_BASE_URL

    def process_message(
        self,
        message: str,
        history: Optional[Iterable[Any]] = None,
        system_prompt: str = "",
    ) -> GenerationResult:
        api_key = self._config.api_key
        if not api_key and self._requires_key():
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
            path="/v1/chat/completions",
            payload=build_chat_completion_payload(self._model, request, self._config),
            headers=merge_headers(JSON_HEADERS, self._config.headers, bearer_auth(api_key)),
            timeout=resolve_call_timeout(self._config.timeout_seconds, local=False),
            extract_text=extract_chat_completion_text,
            verify=self._config.verify_tls is not False,
            not_found_hint=NOT_FOUND_HINT,
            secret=api_key,
        )
        return execute_chat(call, self._logger)


__all__ = ["OpenAIProvider", "normalize_base_url"]
