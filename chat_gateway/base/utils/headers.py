"""Request header assembly shared by the HTTP adapters."""
from __future__ import annotations

from typing import Dict, Mapping, Optional


def merge_headers(
    base: Mapping[str, str],
    configured: Optional[Mapping[str, str]] = None,
    auth: Optional[Mapping[str, str]] = None,
) -> Dict[str, str]:
    """Combine adapter defaults, configured extras and auth headers.

    Configured headers override the adapter defaults but never the auth
    headers, which are applied last.
    """
    headers = dict(base)
    if configured:
        headers.update({str(k): str(v) for k, v in configured.items()})
    if auth:
        headers.update(auth)
    return headers


__all__ = ["merge_headers"]
