"""Behavior every HTTP adapter shares.

Covers, for each adapter:
- end-to-end success label and verbatim text
- never raising for odd inputs
- last-10 history truncation
- system prompt omission
- status code taxonomy (401/403/404/500)
- malformed 200 bodies
- transport failures (connect, timeout, unexpected)
- per-call timeout and TLS policy
"""
from __future__ import annotations

import json
from typing import Any, Callable, Dict, List, NamedTuple

import httpx
import pytest

from chat_gateway.base.errors import ErrorCode
from chat_gateway.base.models import GenerationResult, ProviderConfig
from chat_gateway.gemini import GeminiProvider
from chat_gateway.ollama import OllamaProvider
from chat_gateway.openai import OpenAIProvider
from chat_gateway.openrouter import OpenRouterProvider
from chat_gateway.perplexity import PerplexityProvider
from chat_gateway.xai import XAIProvider


def _chat_ok(text: str) -> Dict[str, Any]:
    return {"choices": [{"index": 0, "message": {"role": "assistant", "content": text}}]}


def _gemini_ok(text: str) -> Dict[str, Any]:
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def _ollama_ok(text: str) -> Dict[str, Any]:
    return {"model": "llama3.2", "message": {"role": "assistant", "content": text}, "done": True}


def _flat_texts(body: Dict[str, Any]) -> List[str]:
    return [m["content"] for m in body["messages"] if m["role"] != "system"]


def _gemini_texts(body: Dict[str, Any]) -> List[str]:
    return [c["parts"][0]["text"] for c in body["contents"]]


def _flat_has_system(body: Dict[str, Any]) -> bool:
    return any(m["role"] == "system" for m in body["messages"])


def _gemini_has_system(body: Dict[str, Any]) -> bool:
    return "systemInstruction" in body


class AdapterCase(NamedTuple):
    name: str
    cls: type
    label: str
    model: str
    path: str
    ok_body: Callable[[str], Dict[str, Any]]
    texts: Callable[[Dict[str, Any]], List[str]]
    has_system: Callable[[Dict[str, Any]], bool]
    local: bool = False


CASES = [
    AdapterCase("gemini", GeminiProvider, "Google Gemini", "gemini-2.5-flash",
                "/v1beta/models/gemini-2.5-flash:generateContent", _gemini_ok, _gemini_texts, _gemini_has_system),
    AdapterCase("xai", XAIProvider, "xAI Grok", "grok-2-1212",
                "/v1/chat/completions", _chat_ok, _flat_texts, _flat_has_system),
    AdapterCase("ollama", OllamaProvider, "Ollama", "llama3.2",
                "/api/chat", _ollama_ok, _flat_texts, _flat_has_system, True),
    AdapterCase("openai", OpenAIProvider, "OpenAI", "gpt-4o-mini",
                "/v1/chat/completions", _chat_ok, _flat_texts, _flat_has_system),
    AdapterCase("openrouter", OpenRouterProvider, "OpenRouter", "openai/gpt-4o-mini",
                "/api/v1/chat/completions", _chat_ok, _flat_texts, _flat_has_system),
    AdapterCase("perplexity", PerplexityProvider, "Perplexity", "sonar",
                "/chat/completions", _chat_ok, _flat_texts, _flat_has_system),
]

cases = pytest.mark.parametrize("case", CASES, ids=[c.name for c in CASES])


def _make(case: AdapterCase, logger=None):
    return case.cls(ProviderConfig(api_key="sk-test-key", model=case.model), logger=logger)


@cases
def test_end_to_end_scenario(case, upstream):
    upstream.reply(200, case.ok_body("42"))
    result = _make(case).process_message("What is the answer?", [], "")
    assert result.to_dict() == {"response": "42", "model": f"{case.label} {case.model}"}  # nosec B101
    assert result.ok and result.error_code is None  # nosec B101
    assert upstream.last.url.path == case.path  # nosec B101


@cases
def test_reply_text_is_returned_verbatim(case, upstream):
    text = "  **Bold**\n\n<b>raw</b>  "
    upstream.reply(200, case.ok_body(text))
    assert _make(case).process_message("x").response == text  # nosec B101


@cases
@pytest.mark.parametrize(
    "message,history,system_prompt",
    [
        ("", [], ""),
        (None, None, None),
        ("x", "not-a-list", {"not": "a string"}),
        ("x", [1, None, {"role": "user"}, {"content": 5}], ""),
        ("x", [{"role": "user", "content": f"t{i}"} for i in range(25)], 123),
    ],
)
def test_never_raises_for_odd_inputs(case, upstream, message, history, system_prompt):
    upstream.reply(200, case.ok_body("ok"))
    result = _make(case).process_message(message, history, system_prompt)
    assert isinstance(result, GenerationResult)  # nosec B101
    assert result.ok  # nosec B101


@cases
def test_only_last_ten_history_turns_are_forwarded(case, upstream):
    upstream.reply(200, case.ok_body("ok"))
    history = [
        {"role": "user" if i % 2 == 0 else "assistant", "content": f"turn-{i}"}
        for i in range(15)
    ]
    _make(case).process_message("current", history, "")
    texts = case.texts(upstream.last_json)
    assert texts == [f"turn-{i}" for i in range(5, 15)] + ["current"]  # nosec B101


@cases
@pytest.mark.parametrize("system_prompt", ["", "   ", None])
def test_empty_system_prompt_is_omitted(case, upstream, system_prompt):
    upstream.reply(200, case.ok_body("ok"))
    _make(case).process_message("hi", [], system_prompt)
    assert not case.has_system(upstream.last_json)  # nosec B101


@cases
def test_system_prompt_is_sent_when_present(case, upstream):
    upstream.reply(200, case.ok_body("ok"))
    _make(case).process_message("hi", [], "You are terse.")
    body = upstream.last_json
    assert case.has_system(body)  # nosec B101
    if case.name != "gemini":
        assert body["messages"][0] == {"role": "system", "content": "You are terse."}  # nosec B101


@cases
@pytest.mark.parametrize(
    "status,keyword,code",
    [
        (401, "unauthorized", ErrorCode.AUTH),
        (403, "unauthorized", ErrorCode.AUTH),
        (404, "not found", ErrorCode.NOT_FOUND),
        (500, "HTTP 500", ErrorCode.SERVER_ERROR),
    ],
)
def test_status_code_taxonomy(case, upstream, log_capture, status, keyword, code):
    logger, handler = log_capture
    upstream.reply(status, {"error": {"message": "upstream says no"}})
    result = _make(case, logger).process_message("x")
    assert keyword.lower() in result.response.lower()  # nosec B101
    assert result.model == f"{case.label} (Error)"  # nosec B101
    assert result.error_code is code  # nosec B101
    assert "upstream says no" in result.response  # nosec B101
    [event] = handler.named("chat.error")
    assert event["status_code"] == status  # nosec B101
    assert event["provider"] == case.name  # nosec B101
    assert event["error_code"] == code.value  # nosec B101
    [start] = handler.named("chat.start")
    assert start["request_id"] == event["request_id"]  # nosec B101


@cases
def test_plain_text_error_body_is_used_as_detail(case, upstream):
    upstream.reply(502, text="Bad Gateway from proxy")
    result = _make(case).process_message("x")
    assert "HTTP 502" in result.response  # nosec B101
    assert "Bad Gateway from proxy" in result.response  # nosec B101


@cases
@pytest.mark.parametrize(
    "kwargs",
    [
        {"json_body": {"unexpected": True}},
        {"json_body": []},
        {"text": "<html>not json</html>"},
    ],
    ids=["missing-field", "wrong-type", "not-json"],
)
def test_malformed_success_is_bad_response(case, upstream, log_capture, kwargs):
    logger, handler = log_capture
    upstream.reply(200, **kwargs)
    result = _make(case, logger).process_message("x")
    assert result.error_code is ErrorCode.BAD_RESPONSE  # nosec B101
    assert "unexpected response" in result.response.lower()  # nosec B101
    assert result.model.endswith("(Error)")  # nosec B101
    [event] = handler.named("chat.error")
    assert event["stage"] == "extract"  # nosec B101
    if "text" in kwargs:
        assert event["body"] == kwargs["text"]  # nosec B101
    else:
        assert json.loads(event["body"]) == kwargs["json_body"]  # nosec B101


@cases
def test_connection_refused_is_friendly(case, upstream):
    upstream.fail_with(lambda r: httpx.ConnectError("[Errno 111] Connection refused", request=r))
    result = _make(case).process_message("x")
    assert result.error_code is ErrorCode.UNAVAILABLE  # nosec B101
    assert "connect" in result.response.lower()  # nosec B101
    assert "Errno" not in result.response  # nosec B101
    if case.name == "ollama":
        assert "ensure the Ollama service is running" in result.response  # nosec B101


@cases
def test_timeout_is_reported(case, upstream):
    upstream.fail_with(lambda r: httpx.ReadTimeout("timed out", request=r))
    result = _make(case).process_message("x")
    assert result.error_code is ErrorCode.TIMEOUT  # nosec B101
    assert "timed out" in result.response  # nosec B101


@cases
def test_unexpected_exception_is_generic(case, upstream):
    upstream.fail_with(lambda r: RuntimeError("kaboom internals"))
    result = _make(case).process_message("x")
    assert result.error_code is ErrorCode.INTERNAL  # nosec B101
    assert "unexpected error" in result.response.lower()  # nosec B101
    assert "kaboom" not in result.response  # nosec B101


@cases
def test_timeout_and_tls_policy(case, upstream):
    upstream.reply(200, case.ok_body("ok"))
    _make(case).process_message("x")
    expected = 60.0 if case.local else 30.0
    timeouts = upstream.last.extensions["timeout"]
    # applied per operation, not as one deadline for the whole call
    assert [timeouts[k] for k in ("read", "write", "pool")] == [expected] * 3  # nosec B101
    assert upstream.last.extensions["timeout"]["connect"] == 10.0  # nosec B101
    [(_, purpose, verify)] = upstream.clients
    assert purpose == f"{case.name}.chat"  # nosec B101
    assert verify is (not case.local)  # nosec B101


@cases
def test_timeout_override_from_config(case, upstream):
    upstream.reply(200, case.ok_body("ok"))
    cfg = ProviderConfig(api_key="k", model=case.model, timeout_seconds=5)
    case.cls(cfg).process_message("x")
    assert upstream.last.extensions["timeout"]["read"] == 5.0  # nosec B101
    assert upstream.last.extensions["timeout"]["connect"] == 5.0  # nosec B101


@cases
def test_credential_never_reaches_logs(case, upstream, log_capture):
    logger, handler = log_capture
    upstream.reply(401, {"error": {"message": "bad key sk-test-key"}})
    result = _make(case, logger).process_message("x")
    assert "sk-test-key" not in result.response  # nosec B101
    assert handler.messages  # nosec B101
    assert all("sk-test-key" not in m for m in handler.messages)  # nosec B101
