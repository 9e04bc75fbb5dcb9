"""Helper functions for the Ollama adapter.

Ollama's ``/api/chat`` takes flat ``{role, content}`` messages like the
OpenAI schema but nests sampling parameters under ``options`` and returns a
single ``message`` object instead of ``choices``.
"""

from __future__ import annotations

from typing import Any, Dict

from ..base.http_chat import text_at
from ..base.models import GenerationRequest, ProviderConfig
from ..base.utils import build_role_content_messages

extract_ollama_text = text_at("message", "content")


def build_payload(model: str, request: GenerationRequest, config: ProviderConfig) -> Dict[str, Any]:
    """Return the non-streaming ``/api/chat`` body."""
    return {
        "model": model,
        "messages": build_role_content_messages(request),
        "stream": False,
        "options": {
            "temperature": config.temperature,
            "num_predict": config.max_tokens,
        },
    }


def connect_failure_message(base_url: str) -> str:
    return (
        f"Could not connect to Ollama at {base_url}. Please ensure the Ollama "
        "service is running and the base URL is correct."
    )


__all__ = ["build_payload", "extract_ollama_text", "connect_failure_message"]
