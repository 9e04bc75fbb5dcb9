"""Basic keyword assistant.

Zero-network fallback used when no upstream is configured, and as the last
resort when the chatbot service is told to fall back on upstream errors. The
message is lower-cased and checked for ordered substring triggers; the first
match wins. Matching is plain substring membership, so ``"hi"`` also fires
inside words such as ``"this"``.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional, Tuple

from ..base.logging import LogContext, get_logger, log_event
from ..base.models import GenerationRequest, GenerationResult
from ..config.defaults import PROVIDER_DISPLAY_NAMES

GREETING_RESPONSE = (
    "Hello! I'm your assistant. I can help you with questions about your "
    "servers and account. What would you like to know?"
)

HELP_RESPONSE = (
    "I can help you with:\n"
    "- Managing and troubleshooting your servers\n"
    "- Explaining panel features and settings\n"
    "- Answering general questions about your account\n\n"
    "Ask me anything, or ask an administrator to enable an AI provider for "
    "richer answers."
)

SERVER_RESPONSE = (
    "For server questions, open the server from your dashboard to see its "
    "status, console and resource usage. If a server won't start, check the "
    "console output for errors and make sure it has enough memory and disk "
    "space allocated."
)

THANKS_RESPONSE = "You're welcome! Let me know if there's anything else I can help with."

ECHO_TEMPLATE = (
    "I'm a basic assistant and can only answer simple questions. You said: "
    "\"{message}\". Try asking for \"help\" to see what I can do, or ask an "
    "administrator to configure an AI provider."
)

# Ordered (triggers, reply) pairs; first match wins.
KEYWORD_RULES: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("hello", "hi"), GREETING_RESPONSE),
    (("help",), HELP_RESPONSE),
    (("server",), SERVER_RESPONSE),
    (("thank",), THANKS_RESPONSE),
)


def match_keyword_reply(message: str) -> Optional[str]:
    """Return the canned reply for the first matching trigger, if any."""
    lowered = message.lower()
    for triggers, reply in KEYWORD_RULES:
        if any(t in lowered for t in triggers):
            return reply
    return None


class BasicProvider:
    """Deterministic keyword assistant; never performs I/O and never fails.

    Accepts and ignores provider configuration so the factory can build it
    like any other adapter.
    """

    def __init__(
        self,
        config: Any = None,
        *,
        logger: Optional[logging.Logger] = None,
        **_: Any,
    ) -> None:
        self._logger = logger or get_logger("gateway.basic")

    @property
    def provider_name(self) -> str:
        return "basic"

    @property
    def display_name(self) -> str:
        return PROVIDER_DISPLAY_NAMES["basic"]

    def process_message(
        self,
        message: str,
        history: Optional[Iterable[Any]] = None,
        system_prompt: str = "",
    ) -> GenerationResult:
        request = GenerationRequest.build(message, history, system_prompt)
        reply = match_keyword_reply(request.message)
        reply_matched = reply is not None
        if reply is None:
            reply = ECHO_TEMPLATE.format(message=request.message)
        log_event(
            self._logger,
            "chat.fallback",
            LogContext(provider=self.provider_name),
            level=logging.DEBUG,
            matched=reply_matched,
        )
        return GenerationResult(response=reply, model=self.display_name)


__all__ = ["BasicProvider", "KEYWORD_RULES", "match_keyword_reply"]
