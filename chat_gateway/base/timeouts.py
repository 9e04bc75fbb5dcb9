"""Unified timeout configuration for provider adapters.

This module centralizes the per-call timeout values used by the HTTP adapters
so no adapter hard-codes its own numbers. Cloud upstreams get a 30 second
timeout; self-hosted daemons (Ollama) get 60 seconds because local inference
is slower under load.

Key Components
--------------
TimeoutConfig
    Frozen dataclass capturing normalized timeout values in seconds.

get_timeout_config()
    Returns a process-cached configuration, re-parsing environment overrides
    only when they change. Supported environment variables (all optional):
        GATEWAY_TIMEOUT_CLOUD_SECONDS
        GATEWAY_TIMEOUT_LOCAL_SECONDS
        GATEWAY_TIMEOUT_CONNECT_SECONDS

Failure Modes
-------------
Invalid or non-positive overrides are ignored in favor of the defaults.
"""
from __future__ import annotations

import os
from dataclasses import dataclass

CLOUD_TIMEOUT_SECONDS = 30.0
LOCAL_TIMEOUT_SECONDS = 60.0
CONNECT_TIMEOUT_SECONDS = 10.0

_ENV_NAMES = (
    "GATEWAY_TIMEOUT_CLOUD_SECONDS",
    "GATEWAY_TIMEOUT_LOCAL_SECONDS",
    "GATEWAY_TIMEOUT_CONNECT_SECONDS",
)


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        cloud_timeout_seconds: Per-operation timeout for hosted upstream APIs.
            httpx applies it to each read, write and pool wait separately, so
            a body that keeps trickling in can outlast it.
        local_timeout_seconds: Same, for self-hosted daemons.
        connect_timeout_seconds: Cap on establishing the TCP/TLS connection,
            never larger than the per-operation timeout.
    """

    cloud_timeout_seconds: float = CLOUD_TIMEOUT_SECONDS
    local_timeout_seconds: float = LOCAL_TIMEOUT_SECONDS
    connect_timeout_seconds: float = CONNECT_TIMEOUT_SECONDS

    def for_provider(self, *, local: bool) -> float:
        return self.local_timeout_seconds if local else self.cloud_timeout_seconds


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None


def _parse_env_float(name: str, default: float) -> float:
    """Parse an environment variable as a positive float with a fallback default."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
        return val if val > 0 else default
    except ValueError:
        return default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached `TimeoutConfig` instance."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - module cache
    cur_guard = "/".join(os.getenv(n, "") for n in _ENV_NAMES)
    if _CACHED is not None and _ENV_GUARD == cur_guard:
        return _CACHED

    _CACHED = TimeoutConfig(
        cloud_timeout_seconds=_parse_env_float(_ENV_NAMES[0], CLOUD_TIMEOUT_SECONDS),
        local_timeout_seconds=_parse_env_float(_ENV_NAMES[1], LOCAL_TIMEOUT_SECONDS),
        connect_timeout_seconds=_parse_env_float(_ENV_NAMES[2], CONNECT_TIMEOUT_SECONDS),
    )
    _ENV_GUARD = cur_guard
    return _CACHED


def resolve_call_timeout(override: float | None, *, local: bool) -> float:
    """Return ``override`` when set, else the configured timeout for the provider kind."""
    if override is not None and override > 0:
        return float(override)
    return get_timeout_config().for_provider(local=local)


__all__ = [
    "TimeoutConfig",
    "get_timeout_config",
    "resolve_call_timeout",
    "CLOUD_TIMEOUT_SECONDS",
    "LOCAL_TIMEOUT_SECONDS",
]
