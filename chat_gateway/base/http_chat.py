"""Shared single-attempt HTTP chat execution for provider adapters.

Purpose:
    Every HTTP adapter follows the same sequence: POST one JSON body under a
    bounded timeout, interpret the status code, pull the reply text out of the
    provider's envelope, and convert every failure into an in-band
    ``GenerationResult``. Adapters describe *what* to send and *where the reply
    lives* with a :class:`ChatCall`; :func:`execute_chat` runs it.

External dependencies:
    - ``httpx`` through the pooled :func:`get_httpx_client`.

Timeout & retry strategy:
    - One attempt per call. The per-request ``timeout`` comes from the
      adapter (see :mod:`chat_gateway.base.timeouts`).

Failure semantics:
    - Steps raise :class:`ProviderError`; :func:`execute_chat` converts it to a
      result and logs the diagnostic. Any other exception raised while talking
      to the upstream is classified and converted too. Nothing propagates.
    - Logged URLs are redacted and the adapter's credential is masked out of
      logged bodies and user-facing detail.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

import httpx

from .constants import MAX_DETAIL_CHARS
from .errors import ErrorCode, ProviderError, classify_exception, classify_status, is_connection_failure
from .http import get_httpx_client
from .log_support import mask_secret, redact_url, truncate_body
from .logging import LogContext, normalized_log_event
from .models import GenerationResult
from .timeouts import get_timeout_config

TextExtractor = Callable[[Any], Optional[str]]
ModelResolver = Callable[[Any], Optional[str]]


@dataclass(frozen=True)
class ChatCall:
    """Everything :func:`execute_chat` needs for one upstream request.

    Attributes:
        provider: Stable provider key used in logs (e.g. ``"gemini"``).
        label: Display name used in result labels (e.g. ``"Google Gemini"``).
        model: Configured model identifier.
        base_url: Endpoint root; the pooled client is bound to it.
        path: Path relative to ``base_url``.
        payload: JSON body.
        headers: Request headers, auth included. Never logged.
        timeout: Per-operation httpx timeout in seconds (read, write, pool);
            connecting uses the smaller of this and the connect timeout.
        extract_text: Returns the reply text from decoded JSON, or ``None``
            when the expected field is missing.
        verify: TLS certificate verification.
        resolve_model: Optional hook returning the model identifier echoed by
            the upstream; falls back to ``model`` when it yields nothing.
        not_found_hint: Remediation text appended to 404 diagnostics.
        connect_message: Replacement text for connection failures.
        secret: Credential to mask out of anything logged or displayed.
    """

    provider: str
    label: str
    model: str
    base_url: str
    path: str
    payload: Dict[str, Any]
    headers: Dict[str, str]
    timeout: float
    extract_text: TextExtractor
    verify: bool = True
    resolve_model: Optional[ModelResolver] = None
    not_found_hint: str = ""
    connect_message: str = ""
    secret: Optional[str] = field(default=None, repr=False)

    @property
    def url(self) -> str:
        return f"{self.base_url.rstrip('/')}/{self.path.lstrip('/')}"


def dig(data: Any, *path: Any) -> Any:
    """Walk nested dicts/lists along ``path``; return ``None`` on any miss."""
    cur = data
    for key in path:
        if isinstance(key, int):
            if not isinstance(cur, list) or not -len(cur) <= key < len(cur):
                return None
            cur = cur[key]
        else:
            if not isinstance(cur, dict) or key not in cur:
                return None
            cur = cur[key]
    return cur


def text_at(*path: Any) -> TextExtractor:
    """Build an extractor returning the string found at ``path``."""

    def _extract(data: Any) -> Optional[str]:
        value = dig(data, *path)
        return value if isinstance(value, str) else None

    return _extract


JSON_HEADERS: Dict[str, str] = {"Content-Type": "application/json", "Accept": "application/json"}


def bearer_auth(api_key: Optional[str]) -> Dict[str, str]:
    """Return the ``Authorization: Bearer`` header, or nothing without a key."""
    return {"Authorization": f"Bearer {api_key}"} if api_key else {}


def _clip(text: str, limit: int = MAX_DETAIL_CHARS) -> str:
    text = text.strip()
    return text if len(text) <= limit else f"{text[:limit]}..."


def _detail_from_json(body: Any) -> Optional[str]:
    """Pull a human-readable error message out of a decoded error envelope.

    Understands ``{"error": {"message"}}`` (OpenAI, Gemini, OpenRouter,
    Perplexity), ``{"error": "..."}`` (Ollama, xAI), top-level ``message`` or
    ``detail`` keys, and Gemini's occasional list-wrapped envelope.
    """
    if isinstance(body, list) and body:
        return _detail_from_json(body[0])
    if not isinstance(body, dict):
        return None
    err = body.get("error")
    if isinstance(err, dict):
        for key in ("message", "status", "code"):
            val = err.get(key)
            if isinstance(val, str) and val.strip():
                return val
    elif isinstance(err, str) and err.strip():
        return err
    for key in ("message", "detail"):
        val = body.get(key)
        if isinstance(val, str) and val.strip():
            return val
    return None


def extract_error_detail(response: httpx.Response) -> str:
    """Return the best available error detail from a non-200 response.

    Falls back to the raw body text when the shape is not recognized.
    """
    try:
        detail = _detail_from_json(response.json())
    except ValueError:
        detail = None
    if detail:
        return _clip(detail)
    return _clip(response.text or "")


def describe_status_error(label: str, status: int, detail: str, not_found_hint: str = "") -> str:
    """Synthesize the user-facing diagnostic for a non-200 status."""
    if status == 404:
        message = f"{label} model not found (HTTP 404)."
        if not_found_hint:
            message = f"{message} {not_found_hint}"
    elif status in (401, 403):
        message = (
            f"{label} API key is invalid or unauthorized (HTTP {status}). "
            "Please check the API key in your settings."
        )
    else:
        message = f"{label} API error: HTTP {status}."
    if detail:
        message = f"{message} Details: {detail}"
    return message


def _send(call: ChatCall) -> httpx.Response:
    """Issue the POST; convert transport failures to ``ProviderError``."""
    try:
        client = get_httpx_client(call.base_url, purpose=f"{call.provider}.chat", verify=call.verify)
        connect = min(get_timeout_config().connect_timeout_seconds, call.timeout)
        timeout = httpx.Timeout(call.timeout, connect=connect)
        return client.post(call.path, json=call.payload, headers=call.headers, timeout=timeout)
    except httpx.TimeoutException as e:
        raise ProviderError(
            code=ErrorCode.TIMEOUT,
            message=f"The request to {call.label} timed out after {call.timeout:g} seconds. Please try again.",
            provider=call.provider,
            model=call.model,
            log_fields={"stage": "transport", "error": mask_secret(str(e), call.secret)},
            raw=e,
        ) from e
    except Exception as e:
        if is_connection_failure(e):
            message = call.connect_message or (
                f"Could not connect to the {call.label} API. "
                "Please check your network connection and try again."
            )
            code = ErrorCode.UNAVAILABLE
        else:
            message = f"An unexpected error occurred while contacting {call.label}. Please try again later."
            code = classify_exception(e)
            if code is ErrorCode.UNKNOWN:
                code = ErrorCode.INTERNAL
        raise ProviderError(
            code=code,
            message=message,
            provider=call.provider,
            model=call.model,
            log_fields={
                "stage": "transport",
                "error": mask_secret(f"{type(e).__name__}: {e}", call.secret),
            },
            raw=e,
        ) from e


def _check_status(call: ChatCall, response: httpx.Response) -> None:
    """Raise ``ProviderError`` for any non-200 response."""
    if response.status_code == 200:
        return
    status = response.status_code
    detail = mask_secret(extract_error_detail(response), call.secret) or ""
    raise ProviderError(
        code=classify_status(status),
        message=describe_status_error(call.label, status, detail, call.not_found_hint),
        provider=call.provider,
        model=call.model,
        status_code=status,
        log_fields={
            "stage": "status",
            "body": truncate_body(mask_secret(response.text, call.secret)),
        },
    )


def _bad_response(call: ChatCall, response: httpx.Response, reason: str) -> ProviderError:
    return ProviderError(
        code=ErrorCode.BAD_RESPONSE,
        message=f"Received an unexpected response from {call.label}. Please try again.",
        provider=call.provider,
        model=call.model,
        status_code=response.status_code,
        log_fields={
            "stage": "extract",
            "reason": reason,
            "body": truncate_body(mask_secret(response.text, call.secret)),
        },
    )


def _decode(call: ChatCall, response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError as e:
        raise _bad_response(call, response, "invalid_json") from e


def failure_result(
    logger: logging.Logger,
    error: ProviderError,
    label: str,
    *,
    ctx: Optional[LogContext] = None,
    url: Optional[str] = None,
    latency_ms: Optional[float] = None,
) -> GenerationResult:
    """Log a normalized ``chat.error`` event and return the in-band failure."""
    normalized_log_event(
        logger,
        "chat.error",
        ctx or LogContext(provider=error.provider, model=error.model),
        phase="finalize",
        error_code=error.code.value,
        emitted=False,
        status_code=error.status_code,
        url=redact_url(url) if url else None,
        latency_ms=latency_ms,
        **error.log_fields,
    )
    return GenerationResult.failure(error.message, label, error.code)


def execute_chat(call: ChatCall, logger: logging.Logger) -> GenerationResult:
    """Run one chat call end to end and return a normalized result.

    Parameters:
        call: Fully-built request description from an adapter.
        logger: Adapter logger receiving start/end/error events.

    Returns:
        ``GenerationResult`` with the verbatim reply on success; an in-band
        failure (``model`` ending in ``(Error)``) otherwise.
    """
    ctx = LogContext.for_call(call.provider, call.model)
    normalized_log_event(
        logger,
        "chat.start",
        ctx,
        phase="start",
        url=redact_url(call.url),
        timeout=call.timeout,
    )
    t0 = time.perf_counter()
    try:
        response = _send(call)
        _check_status(call, response)
        data = _decode(call, response)
        text = call.extract_text(data)
        if text is None:
            raise _bad_response(call, response, "missing_field")
        model = (call.resolve_model(data) if call.resolve_model else None) or call.model
    except ProviderError as e:
        latency_ms = (time.perf_counter() - t0) * 1000.0
        return failure_result(logger, e, call.label, ctx=ctx, url=call.url, latency_ms=latency_ms)
    except Exception as e:  # pragma: no cover - extractor bugs must not escape
        latency_ms = (time.perf_counter() - t0) * 1000.0
        error = ProviderError(
            code=ErrorCode.INTERNAL,
            message=f"An unexpected error occurred while processing the {call.label} response. Please try again.",
            provider=call.provider,
            model=call.model,
            log_fields={"stage": "extract", "error": mask_secret(repr(e), call.secret)},
            raw=e,
        )
        return failure_result(logger, error, call.label, ctx=ctx, url=call.url, latency_ms=latency_ms)

    latency_ms = (time.perf_counter() - t0) * 1000.0
    normalized_log_event(
        logger,
        "chat.end",
        ctx,
        phase="finalize",
        emitted=True,
        latency_ms=latency_ms,
        response_model=model,
    )
    return GenerationResult.success(text, call.label, model)


def missing_credential_result(
    logger: logging.Logger,
    *,
    provider: str,
    label: str,
    model: Optional[str],
    message: str,
) -> GenerationResult:
    """Return the in-band ``CONFIG`` failure used when no credential is set."""
    error = ProviderError(
        code=ErrorCode.CONFIG,
        message=message,
        provider=provider,
        model=model,
        log_fields={"stage": "config"},
    )
    return failure_result(logger, error, label)


__all__ = [
    "ChatCall",
    "dig",
    "text_at",
    "JSON_HEADERS",
    "bearer_auth",
    "extract_error_detail",
    "describe_status_error",
    "execute_chat",
    "failure_result",
    "missing_credential_result",
]
