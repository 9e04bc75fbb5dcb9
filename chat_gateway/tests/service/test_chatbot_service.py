"""Tests for ChatbotService orchestration.

Covers:
- disabled chatbot short-circuit
- prompt composition and the user prompt suffix
- provider selection (aliases, unknown names, user-preference keys)
- missing credential / base URL results
- fallback to the basic assistant on upstream errors
- history window from ``chatbot_max_history``
"""
from __future__ import annotations

import pytest

from chat_gateway.base.errors import ErrorCode
from chat_gateway.base.factory import ProviderFactory, UnknownProviderError
from chat_gateway.basic.client import GREETING_RESPONSE
from chat_gateway.config.settings import MappingSettingsStore
from chat_gateway.service.chatbot import (
    DISABLED_MESSAGE,
    ChatbotService,
    apply_user_prompt,
    compose_system_prompt,
)


def _chat_ok(text="upstream reply"):
    return {"choices": [{"message": {"role": "assistant", "content": text}}]}


def _gemini_ok(text="gemini reply"):
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def _service(logger=None, **settings):
    return ChatbotService(MappingSettingsStore(settings), logger=logger)


# ---- prompt helpers ----


def test_compose_system_prompt_all_sections():
    prompt = compose_system_prompt("Base.", "Admin rules.", "User is Sam.", "Asked about backups.")
    assert prompt == (  # nosec B101
        "Base.\n\n"
        "## Additional Instructions\nAdmin rules.\n\n"
        "## Current User Context\nUser is Sam.\n\n"
        "## Conversation Memory\nAsked about backups."
    )


def test_compose_system_prompt_skips_empty_sections():
    assert compose_system_prompt("", "  ", "ctx", "") == "## Current User Context\nctx"  # nosec B101
    assert compose_system_prompt() == ""  # nosec B101


def test_apply_user_prompt():
    assert apply_user_prompt("hi", "") == "hi"  # nosec B101
    assert apply_user_prompt("hi", " premium plan ") == "hi\n\n[User Context: premium plan]"  # nosec B101


# ---- enable / basic ----


def test_disabled_chatbot_returns_notice(upstream):
    result = _service(chatbot_enabled="false", chatbot_ai_provider="openai").process_message("hello")
    assert result.to_dict() == {"response": DISABLED_MESSAGE, "model": "AI Assistant (Disabled)"}  # nosec B101
    assert result.error_code is ErrorCode.DISABLED  # nosec B101
    assert upstream.requests == []  # nosec B101


def test_default_provider_is_basic(upstream):
    result = _service().process_message("hello there")
    assert result.to_dict() == {"response": GREETING_RESPONSE, "model": "Basic Assistant"}  # nosec B101
    assert upstream.requests == []  # nosec B101


def test_unknown_provider_falls_back_to_basic(log_capture):
    logger, handler = log_capture
    result = _service(logger, chatbot_ai_provider="claude").process_message("hello")
    assert result.model == "Basic Assistant"  # nosec B101
    [event] = handler.named("chatbot.unknown_provider")
    assert event["provider"] == "claude"  # nosec B101


# ---- provider selection ----


def test_gemini_with_admin_key(upstream):
    upstream.reply(200, _gemini_ok())
    service = _service(
        chatbot_ai_provider="google_gemini",
        chatbot_google_ai_api_key="admin-key",
        chatbot_google_ai_model="gemini-1.5-pro",
    )
    result = service.process_message("What is the answer?")
    assert result.to_dict() == {"response": "gemini reply", "model": "Google Gemini gemini-1.5-pro"}  # nosec B101
    assert upstream.last.headers["x-goog-api-key"] == "admin-key"  # nosec B101


def test_user_preference_key_wins_over_admin_key(upstream):
    upstream.reply(200, _chat_ok())
    service = _service(chatbot_ai_provider="grok", chatbot_grok_api_key="admin-key")
    result = service.process_message("x", user_preferences={"chatbot_grok_api_key": " user-key "})
    assert result.model == "xAI Grok grok-2-1212"  # nosec B101
    assert upstream.last.headers["authorization"] == "Bearer user-key"  # nosec B101


def test_blank_user_preference_key_is_ignored(upstream):
    upstream.reply(200, _chat_ok())
    service = _service(chatbot_ai_provider="openrouter", chatbot_openrouter_api_key="admin-key")
    service.process_message("x", user_preferences={"chatbot_openrouter_api_key": "   "})
    assert upstream.last.headers["authorization"] == "Bearer admin-key"  # nosec B101


def test_environment_key_is_accepted(upstream, monkeypatch):
    monkeypatch.setenv("PERPLEXITY_API_KEY", "env-key")
    upstream.reply(200, _chat_ok())
    result = _service(chatbot_ai_provider="perplexity").process_message("x")
    assert result.ok  # nosec B101
    assert upstream.last.headers["authorization"] == "Bearer env-key"  # nosec B101


@pytest.mark.parametrize(
    "provider,label",
    [
        ("gemini", "Google Gemini"),
        ("xai", "xAI Grok"),
        ("openai", "OpenAI"),
        ("openrouter", "OpenRouter"),
        ("perplexity", "Perplexity"),
    ],
)
def test_missing_key_is_a_config_result(provider, label, upstream, log_capture):
    logger, handler = log_capture
    result = _service(logger, chatbot_ai_provider=provider).process_message("x")
    assert result.error_code is ErrorCode.CONFIG  # nosec B101
    assert result.model == "AI Assistant (Error)"  # nosec B101
    assert result.response.startswith(f"{label} API key is not configured")  # nosec B101
    assert upstream.requests == []  # nosec B101
    assert handler.named("chatbot.config_error")  # nosec B101


def test_openai_custom_base_url_needs_no_key(upstream):
    upstream.reply(200, _chat_ok("self-hosted"))
    service = _service(chatbot_ai_provider="openai", chatbot_openai_base_url="http://vllm.lan:8000/v1")
    result = service.process_message("x")
    assert result.response == "self-hosted"  # nosec B101
    assert str(upstream.last.url) == "http://vllm.lan:8000/v1/chat/completions"  # nosec B101


def test_ollama_uses_default_host_when_unset(upstream):
    upstream.reply(200, {"message": {"role": "assistant", "content": "local"}})
    result = _service(chatbot_ai_provider="ollama", chatbot_ollama_model="phi3").process_message("x")
    assert result.to_dict() == {"response": "local", "model": "Ollama phi3"}  # nosec B101
    assert str(upstream.last.url) == "http://localhost:11434/api/chat"  # nosec B101


def test_ollama_blank_base_url_is_a_config_result(upstream):
    result = _service(chatbot_ai_provider="ollama", chatbot_ollama_base_url="  ").process_message("x")
    assert result.error_code is ErrorCode.CONFIG  # nosec B101
    assert "Ollama base URL is not configured" in result.response  # nosec B101
    assert upstream.requests == []  # nosec B101


def test_adapter_construction_failure_is_reported():
    class _BrokenFactory(ProviderFactory):
        @classmethod
        def create(cls, provider, **kwargs):
            if cls.canonical_name(provider) == "basic":
                return super().create(provider, **kwargs)
            raise UnknownProviderError("boom")

    service = ChatbotService(
        MappingSettingsStore({"chatbot_ai_provider": "openai", "chatbot_openai_api_key": "k"}),
        factory=_BrokenFactory,
    )
    result = service.process_message("x")
    assert result.error_code is ErrorCode.CONFIG  # nosec B101
    assert result.response == "Invalid AI provider configured: openai"  # nosec B101


def test_numeric_scalars_in_config_file_are_used_as_text(upstream, monkeypatch, tmp_path):
    path = tmp_path / "gateway.yaml"
    path.write_text("openai:\n  api_key: 123456789\nollama:\n  model: 3\n", encoding="utf-8")
    monkeypatch.setenv("GATEWAY_CONFIG_FILE", str(path))
    upstream.reply(200, _chat_ok("numeric key"))
    result = _service(chatbot_ai_provider="openai").process_message("hello")
    assert result.response == "numeric key"  # nosec B101
    assert upstream.last.headers["authorization"] == "Bearer 123456789"  # nosec B101

    upstream.reply(200, {"message": {"role": "assistant", "content": "local"}})
    result = _service(chatbot_ai_provider="ollama").process_message("hello")
    assert result.model == "Ollama 3"  # nosec B101
    assert upstream.last_json["model"] == "3"  # nosec B101


def test_invalid_config_file_value_is_a_config_result(upstream, monkeypatch, tmp_path, log_capture):
    logger, handler = log_capture
    path = tmp_path / "gateway.yaml"
    path.write_text("openai:\n  api_key: k\n  verify_tls: [1, 2]\n", encoding="utf-8")
    monkeypatch.setenv("GATEWAY_CONFIG_FILE", str(path))
    result = _service(logger, chatbot_ai_provider="openai").process_message("hello")
    assert result.error_code is ErrorCode.CONFIG  # nosec B101
    assert result.model == "AI Assistant (Error)"  # nosec B101
    assert result.response.startswith("Invalid configuration for OpenAI")  # nosec B101
    assert upstream.requests == []  # nosec B101
    [event] = handler.named("chatbot.config_error")
    assert "verify_tls" in event["detail"]  # nosec B101


# ---- payload assembly ----


def test_prompts_and_sampling_reach_the_upstream(upstream):
    upstream.reply(200, _chat_ok())
    service = _service(
        chatbot_ai_provider="openai",
        chatbot_openai_api_key="k",
        chatbot_system_prompt="Never share passwords.",
        chatbot_user_prompt="free tier",
        chatbot_temperature="0.25",
        chatbot_max_tokens="256",
    )
    service.process_message(
        "How do I reboot?",
        base_system_prompt="You are a hosting assistant.",
        user_context="Owns 2 servers.",
        conversation_memory="",
    )
    body = upstream.last_json
    assert body["temperature"] == 0.25  # nosec B101
    assert body["max_tokens"] == 256  # nosec B101
    assert body["messages"][0] == {  # nosec B101
        "role": "system",
        "content": (
            "You are a hosting assistant.\n\n"
            "## Additional Instructions\nNever share passwords.\n\n"
            "## Current User Context\nOwns 2 servers."
        ),
    }
    assert body["messages"][-1] == {"role": "user", "content": "How do I reboot?\n\n[User Context: free tier]"}  # nosec B101


def test_history_window_follows_max_history(upstream):
    upstream.reply(200, _chat_ok())
    history = [{"role": "user" if i % 2 == 0 else "assistant", "content": f"t{i}"} for i in range(6)]
    service = _service(chatbot_ai_provider="xai", chatbot_grok_api_key="k", chatbot_max_history="2")
    service.process_message("now", history)
    contents = [m["content"] for m in upstream.last_json["messages"]]
    assert contents == ["t4", "t5", "now"]  # nosec B101


# ---- fallback ----


def test_upstream_error_is_returned_without_fallback(upstream):
    upstream.reply(500, {"error": {"message": "overloaded"}})
    result = _service(chatbot_ai_provider="openai", chatbot_openai_api_key="k").process_message("hello")
    assert result.model == "OpenAI (Error)"  # nosec B101
    assert result.error_code is ErrorCode.SERVER_ERROR  # nosec B101


def test_fallback_on_error_uses_basic(upstream, log_capture):
    logger, handler = log_capture
    upstream.reply(500, {"error": {"message": "overloaded"}})
    service = _service(
        logger,
        chatbot_ai_provider="openai",
        chatbot_openai_api_key="k",
        chatbot_fallback_on_error="true",
    )
    result = service.process_message("hello")
    assert result.to_dict() == {"response": GREETING_RESPONSE, "model": "Basic Assistant"}  # nosec B101
    [event] = handler.named("chatbot.fallback")
    assert event["provider"] == "openai" and event["error_code"] == "server_error"  # nosec B101
