"""Keyword fallback provider behavior."""
from __future__ import annotations

import pytest

from chat_gateway.basic import BasicProvider
from chat_gateway.basic.client import (
    GREETING_RESPONSE,
    HELP_RESPONSE,
    SERVER_RESPONSE,
    THANKS_RESPONSE,
    match_keyword_reply,
)


def test_greeting_help_and_echo():
    provider = BasicProvider()
    assert provider.process_message("Hello there").response == GREETING_RESPONSE  # nosec B101
    assert provider.process_message("need some help").response == HELP_RESPONSE  # nosec B101
    echo = provider.process_message("random gibberish")
    assert "random gibberish" in echo.response  # nosec B101
    assert "basic assistant" in echo.response  # nosec B101


@pytest.mark.parametrize(
    "message,expected",
    [
        ("My SERVER is down", SERVER_RESPONSE),
        ("thanks a lot", THANKS_RESPONSE),
        ("Thank you", THANKS_RESPONSE),
        ("HI", GREETING_RESPONSE),
    ],
)
def test_triggers_are_case_insensitive(message, expected):
    assert BasicProvider().process_message(message).response == expected  # nosec B101


def test_first_matching_rule_wins():
    # "hello" outranks "help" even though both occur
    assert match_keyword_reply("hello, help me") == GREETING_RESPONSE  # nosec B101
    # "hi" matches as a plain substring
    assert match_keyword_reply("this server") == GREETING_RESPONSE  # nosec B101


def test_label_and_success_shape():
    result = BasicProvider().process_message("random gibberish", [{"role": "user", "content": "x"}], "sys")
    assert result.ok  # nosec B101
    assert result.to_dict() == {"response": result.response, "model": "Basic Assistant"}  # nosec B101


def test_none_and_empty_messages_do_not_raise():
    provider = BasicProvider()
    assert provider.process_message(None).ok  # type: ignore[arg-type]  # nosec B101
    assert provider.process_message("").ok  # nosec B101


def test_deterministic():
    provider = BasicProvider()
    assert provider.process_message("server?") == provider.process_message("server?")  # nosec B101
