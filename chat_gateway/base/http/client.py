"""Pooled ``httpx`` clients shared by the provider adapters.

One client is kept per ``(base_url, purpose, verify)`` so adapters reuse
connections across calls instead of opening a socket per message. TLS
verification is fixed when an ``httpx.Client`` is built, which is why it is
part of the key: an Ollama daemon reached with ``verify=False`` never borrows
a client that talks to a cloud vendor.

The client-level timeout is only a fallback. :mod:`chat_gateway.base.http_chat`
passes an explicit per-request timeout on every call.
"""

from __future__ import annotations

import atexit
import threading
from typing import Dict, NamedTuple, Optional

import httpx

from ..timeouts import get_timeout_config


class _PoolKey(NamedTuple):
    base_url: Optional[str]
    purpose: str
    verify: bool


_POOL: Dict[_PoolKey, httpx.Client] = {}
_POOL_LOCK = threading.RLock()


def _build_client(key: _PoolKey) -> httpx.Client:
    limits = get_timeout_config()
    kwargs = {
        "timeout": httpx.Timeout(limits.cloud_timeout_seconds, connect=limits.connect_timeout_seconds),
        "verify": key.verify,
    }
    if key.base_url:
        kwargs["base_url"] = key.base_url
    return httpx.Client(**kwargs)


def get_httpx_client(base_url: Optional[str], purpose: str, verify: bool = True) -> httpx.Client:
    """Return the pooled client for ``base_url``/``purpose``/``verify``.

    ``purpose`` is a stable label such as ``"gemini.chat"``; distinct labels
    never share a client even when the base URL matches. Creation is guarded
    by a lock, lookups of an existing client are not.
    """
    key = _PoolKey(base_url, purpose, verify)
    found = _POOL.get(key)
    if found is None or found.is_closed:
        with _POOL_LOCK:
            found = _POOL.get(key)
            if found is None or found.is_closed:
                found = _build_client(key)
                _POOL[key] = found
    return found


def close_all_clients() -> None:
    """Close every pooled client and empty the pool."""
    with _POOL_LOCK:
        clients = list(_POOL.values())
        _POOL.clear()
    for client in clients:
        try:
            client.close()
        except Exception:  # nosec B110 - shutdown path, nothing to report to
            pass


atexit.register(close_all_clients)

__all__ = ["get_httpx_client", "close_all_clients"]
