"""Google Gemini provider adapter.

Purpose:
    Calls the Generative Language REST API (``:generateContent``) directly over
    ``httpx``. Gemini uses its own envelope: turns are ``{role, parts:[{text}]}``
    with the assistant role spelled ``model``, and the system prompt travels in
    a top-level ``systemInstruction`` rather than as a message.

Auth:
    The API key is sent in the ``x-goog-api-key`` header. It never appears in
    the request URL, and redaction still masks any ``key=`` query parameter
    should a base URL carry one.

Timeout strategy:
    - Cloud timeout from :func:`chat_gateway.base.timeouts.resolve_call_timeout`.

Failure semantics:
    - Delegated to :func:`chat_gateway.base.http_chat.execute_chat`; every
      failure is returned in-band.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from ..base.http_chat import JSON_HEADERS, ChatCall, execute_chat, missing_credential_result, text_at
from ..base.logging import get_logger
from ..base.models import GenerationRequest, GenerationResult, ProviderConfig
from ..base.timeouts import resolve_call_timeout
from ..base.utils import map_role, merge_headers
from ..config import build_provider_config
from ..config.defaults import (
    GEMINI_DEFAULT_BASE_URL,
    GEMINI_DEFAULT_MODEL,
    GEMINI_TOP_K,
    GEMINI_TOP_P,
    PROVIDER_DISPLAY_NAMES,
)

NOT_FOUND_HINT = (
    "Check that the model name is correct and available for your API key "
    "(for example gemini-2.5-flash)."
)

extract_gemini_text = text_at("candidates", 0, "content", "parts", 0, "text")


def normalize_model_name(model: Optional[str]) -> str:
    """Strip a leading ``models/`` resource prefix; fall back to the default."""
    name = (model or "").strip()
    if name.startswith("models/"):
        name = name[len("models/"):]
    return name or GEMINI_DEFAULT_MODEL


def build_contents(request: GenerationRequest) -> List[Dict[str, Any]]:
    """Return Gemini ``contents``: history turns then the current message."""
    contents = [
        {"role": map_role(turn, assistant_role="model"), "parts": [{"text": turn.content}]}
        for turn in request.history
    ]
    contents.append({"role": "user", "parts": [{"text": request.message}]})
    return contents


def build_payload(request: GenerationRequest, config: ProviderConfig) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "contents": build_contents(request),
        "generationConfig": {
            "temperature": config.temperature,
            "topK": GEMINI_TOP_K,
            "topP": GEMINI_TOP_P,
            "maxOutputTokens": config.max_tokens,
        },
    }
    if request.has_system_prompt:
        payload["systemInstruction"] = {"parts": [{"text": request.system_prompt}]}
    return payload


class GeminiProvider:
    """Adapter for Google Gemini ``generateContent``."""

    def __init__(
        self,
        config: Union[ProviderConfig, Mapping[str, Any], None] = None,
        *,
        logger: Optional[logging.Logger] = None,
        **overrides: Any,
    ) -> None:
        self._config = build_provider_config("gemini", config, **overrides)
        self._model = normalize_model_name(self._config.model)
        self._base_url = self._config.base_url or GEMINI_DEFAULT_BASE_URL
        self._logger = logger or get_logger("gateway.gemini")

    @property
    def provider_name(self) -> str:
        return "gemini"

    @property
    def display_name(self) -> str:
        return PROVIDER_DISPLAY_NAMES["gemini"]

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
            path=f"/v1beta/models/{self._model}:generateContent",
            payload=build_payload(request, self._config),
            headers=merge_headers(JSON_HEADERS, self._config.headers, {"x-goog-api-key": api_key}),
            timeout=resolve_call_timeout(self._config.timeout_seconds, local=False),
            extract_text=extract_gemini_text,
            verify=self._config.verify_tls is not False,
            not_found_hint=NOT_FOUND_HINT,
            secret=api_key,
        )
        return execute_chat(call, self._logger)


__all__ = ["GeminiProvider", "build_payload", "build_contents", "normalize_model_name"]
