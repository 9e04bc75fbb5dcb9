"""Tests for the request/result DTOs.

Covers:
- history coercion from loose caller shapes
- last-N truncation
- system prompt normalization
- result labelling and the two-field mapping
"""
from __future__ import annotations

import pytest
from pydantic import ValidationError

from chat_gateway.base.errors import ErrorCode
from chat_gateway.base.models import (
    ConversationTurn,
    GenerationRequest,
    GenerationResult,
    ProviderConfig,
    coerce_history,
    recent_history,
)


def test_turn_from_mapping_normalizes_role_and_content():
    assert ConversationTurn.from_obj({"role": "user", "content": "hi"}) == ConversationTurn("user", "hi")
    assert ConversationTurn.from_obj({"role": "model", "content": "yo"}).role == "assistant"
    assert ConversationTurn.from_obj({"role": "user", "content": 3}).content == ""
    assert ConversationTurn.from_obj("plain string") is None


@pytest.mark.parametrize("history", [None, [], "abc", b"abc", 42, {"role": "user"}])
def test_coerce_history_tolerates_non_lists(history):
    assert coerce_history(history) == ()  # nosec B101


def test_coerce_history_skips_unusable_items():
    turns = coerce_history([None, 5, {"role": "user", "content": "a"}, ConversationTurn("assistant", "b")])
    assert [t.content for t in turns] == ["a", "b"]  # nosec B101


def test_recent_history_keeps_last_turns_in_order():
    history = [{"role": "user", "content": str(i)} for i in range(12)]
    assert [t.content for t in recent_history(history)] == [str(i) for i in range(2, 12)]  # nosec B101
    assert [t.content for t in recent_history(history, 3)] == ["9", "10", "11"]  # nosec B101
    assert recent_history(history, 0) == ()  # nosec B101


def test_recent_history_shorter_than_limit_is_unchanged():
    history = [{"role": "user", "content": "only"}]
    assert [t.content for t in recent_history(history)] == ["only"]  # nosec B101


@pytest.mark.parametrize("prompt", ["", "   \n", None, 12, ["x"]])
def test_request_drops_blank_system_prompt(prompt):
    request = GenerationRequest.build("hi", [], prompt)
    assert request.system_prompt == ""  # nosec B101
    assert not request.has_system_prompt  # nosec B101


def test_request_keeps_prompt_verbatim_and_stringifies_message():
    request = GenerationRequest.build(7, None, "  Be kind.  ")
    assert request.message == "7"  # nosec B101
    assert request.system_prompt == "  Be kind.  "  # nosec B101
    assert GenerationRequest.build(None).message == ""  # nosec B101


def test_result_labels():
    ok = GenerationResult.success("hello", "OpenAI", "gpt-4o-mini")
    assert ok.to_dict() == {"response": "hello", "model": "OpenAI gpt-4o-mini"}  # nosec B101
    assert ok.ok  # nosec B101
    assert GenerationResult.success("hello", "Basic Assistant", None).model == "Basic Assistant"  # nosec B101

    bad = GenerationResult.failure("nope", "Perplexity", ErrorCode.AUTH)
    assert bad.model == "Perplexity (Error)"  # nosec B101
    assert bad.error_code is ErrorCode.AUTH  # nosec B101
    assert not bad.ok  # nosec B101
    assert set(bad.to_dict()) == {"response", "model"}  # nosec B101


def test_provider_config_defaults_and_validation():
    cfg = ProviderConfig()
    assert cfg.temperature == 0.7  # nosec B101
    assert cfg.max_tokens == 2048  # nosec B101
    assert cfg.headers == {} and cfg.extra == {}  # nosec B101
    with pytest.raises(ValidationError):
        ProviderConfig(timeout_seconds=0)
    with pytest.raises(ValidationError):
        cfg.model = "frozen"  # type: ignore[misc]
