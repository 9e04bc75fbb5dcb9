"""Helper functions for the OpenRouter adapter.

Contains header assembly and the echoed-model resolution, kept apart from the
adapter class so they can be tested directly.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from ..base.http_chat import JSON_HEADERS, bearer_auth
from ..base.utils import merge_headers
from ..config.defaults import OPENROUTER_DEFAULT_REFERER, OPENROUTER_DEFAULT_TITLE


def build_headers(api_key: Optional[str], configured: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """Return request headers including OpenRouter's attribution headers.

    ``HTTP-Referer`` and ``X-Title`` identify the calling application on
    openrouter.ai; configured headers replace the defaults.
    """
    base = dict(JSON_HEADERS)
    base["HTTP-Referer"] = OPENROUTER_DEFAULT_REFERER
    base["X-Title"] = OPENROUTER_DEFAULT_TITLE
    return merge_headers(base, configured, bearer_auth(api_key))


def resolve_echoed_model(data: Any) -> Optional[str]:
    """Return the model OpenRouter actually routed to.

    The ``model`` field is usually a string but some routes return an object;
    its ``id`` is unpacked instead of stringifying the whole object.
    """
    if not isinstance(data, dict):
        return None
    echoed = data.get("model")
    if isinstance(echoed, str) and echoed.strip():
        return echoed
    if isinstance(echoed, dict):
        model_id = echoed.get("id")
        if isinstance(model_id, str) and model_id.strip():
            return model_id
    return None


__all__ = ["build_headers", "resolve_echoed_model"]
