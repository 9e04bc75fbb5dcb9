"""Ollama provider adapter.

Purpose:
    Chat against a self-hosted Ollama daemon (default
    ``http://localhost:11434``) through its native ``/api/chat`` endpoint.

External dependencies:
    - HTTP client only (``httpx``). No API key is required; one configured
      for an authenticating reverse proxy is sent as a Bearer token.

Timeout strategy:
    - Local timeout (60 s by default) from
      :func:`chat_gateway.base.timeouts.resolve_call_timeout`; local inference
      is slower than hosted APIs.

Transport:
    - TLS verification is off by default because daemons on private networks
      commonly sit behind self-signed certificates. ``verify_tls=True`` in the
      config turns it back on.
    - Connection failures produce a message telling the operator to check
      that the service is running.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional, Union

from ..base.http_chat import JSON_HEADERS, ChatCall, bearer_auth, execute_chat
from ..base.logging import get_logger
from ..base.models import GenerationRequest, GenerationResult, ProviderConfig
from ..base.timeouts import resolve_call_timeout
from ..base.utils import merge_headers
from ..config import build_provider_config
from ..config.defaults import OLLAMA_DEFAULT_HOST, OLLAMA_DEFAULT_MODEL, PROVIDER_DISPLAY_NAMES
from .helpers import build_payload, connect_failure_message, extract_ollama_text

NOT_FOUND_HINT = "Pull the model first with `ollama pull <model>` or check the model name."


class OllamaProvider:
    """Adapter for a local or LAN Ollama daemon."""

    def __init__(
        self,
        config: Union[ProviderConfig, Mapping[str, Any], None] = None,
        *,
        logger: Optional[logging.Logger] = None,
        **overrides: Any,
    ) -> None:
        self._config = build_provider_config("ollama", config, **overrides)
        self._model = (self._config.model or "").strip() or OLLAMA_DEFAULT_MODEL
        self._base_url = (self._config.base_url or "").strip().rstrip("/") or OLLAMA_DEFAULT_HOST
        self._logger = logger or get_logger("gateway.ollama")

    @property
    def provider_name(self) -> str:
        return "ollama"

    @property
    def display_name(self) -> str:
        return PROVIDER_DISPLAY_NAMES["ollama"]

    @property
    def model(self) -> str:
        return self._model

    @property
    def base_url(self) -> str:
        return self._base_url

    def process_message(
        self,
        message: str,
        history: Optional[Iterable[Any]] = None,
        system_prompt: str = "",
    ) -> GenerationResult:
        request = GenerationRequest.build(message, history, system_prompt)
        call = ChatCall(
            provider=self.provider_name,
            label=self.display_name,
            model=self._model,
            base_url=self._base_url,
            path="/api/chat",
            payload=build_payload(self._model, request, self._config),
            headers=merge_headers(JSON_HEADERS, self._config.headers, bearer_auth(self._config.api_key)),
            timeout=resolve_call_timeout(self._config.timeout_seconds, local=True),
            extract_text=extract_ollama_text,
            verify=self._config.verify_tls is True,
            not_found_hint=NOT_FOUND_HINT,
            connect_message=connect_failure_message(self._base_url),
            secret=self._config.api_key,
        )
        return execute_chat(call, self._logger)


__all__ = ["OllamaProvider"]
