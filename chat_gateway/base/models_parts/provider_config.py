"""Typed configuration object for provider adapter construction.

Purpose
-------
Capture the per-adapter parameters resolved from the settings layer: the
credential (API key, or base URL for a self-hosted daemon), model identifier,
sampling parameters, and optional transport overrides. One instance belongs to
exactly one adapter for that adapter's lifetime.

External dependencies
---------------------
- Pydantic v2 ``BaseModel`` for validation and ``.model_dump()`` convenience.

Failure modes & side effects
----------------------------
- Pure data container: no I/O. Pydantic raises ``ValidationError`` for values
  of the wrong type; range checks are the settings layer's responsibility.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 2048


class ProviderConfig(BaseModel):
    """Immutable provider adapter parameters.

    Attributes
    ----------
    api_key:
        Credential for cloud providers. Never logged.
    base_url:
        Endpoint root; required for self-hosted providers, an override for
        cloud ones.
    model:
        Model identifier sent upstream and shown in the result label.
    temperature:
        Sampling temperature.
    max_tokens:
        Maximum output tokens.
    timeout_seconds:
        Per-call timeout override; adapters otherwise use
        :func:`chat_gateway.base.timeouts.get_timeout_config`.
    verify_tls:
        TLS verification override; adapters otherwise use their own policy.
    headers:
        Extra static HTTP headers merged over the adapter defaults.
    extra:
        Free-form provider-specific configuration bag.
    """

    model_config = ConfigDict(frozen=True)

    api_key: Optional[str] = None
    base_url: Optional[str] = None
    model: Optional[str] = None
    temperature: float = DEFAULT_TEMPERATURE
    max_tokens: int = DEFAULT_MAX_TOKENS
    timeout_seconds: Optional[float] = Field(default=None, gt=0)
    verify_tls: Optional[bool] = None
    headers: Dict[str, str] = Field(default_factory=dict)
    extra: Dict[str, Any] = Field(default_factory=dict)


__all__ = ["ProviderConfig", "DEFAULT_TEMPERATURE", "DEFAULT_MAX_TOKENS"]
