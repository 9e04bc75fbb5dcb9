"""Helpers for upstreams speaking the OpenAI chat-completions schema.

xAI, OpenAI, OpenRouter and Perplexity share the request body
``{model, messages, temperature, max_tokens}`` and the reply path
``choices[0].message.content``. Only the endpoint, auth headers and a few
extra body fields differ, so those stay in each adapter.
"""

from __future__ import annotations

from typing import Any, Dict

from .http_chat import text_at
from .models import GenerationRequest, ProviderConfig
from .utils import build_role_content_messages

extract_chat_completion_text = text_at("choices", 0, "message", "content")


def build_chat_completion_payload(
    model: str,
    request: GenerationRequest,
    config: ProviderConfig,
    **extra_fields: Any,
) -> Dict[str, Any]:
    """Return the chat-completions body for ``request``.

    ``extra_fields`` (e.g. ``stream=False``) are added after the common keys.
    """
    payload: Dict[str, Any] = {
        "model": model,
        "messages": build_role_content_messages(request),
        "temperature": config.temperature,
        "max_tokens": config.max_tokens,
    }
    payload.update(extra_fields)
    return payload


__all__ = ["build_chat_completion_payload", "extract_chat_completion_text"]
