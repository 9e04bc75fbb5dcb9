"""Base shared constants for provider adapters.

Central location to avoid scattering magic strings and numbers across the
adapters and the shared HTTP skeleton.

Security
--------
Only generic sentinel strings and numeric limits live here. There are no
credentials or tokens embedded.
"""
from __future__ import annotations

# Hard cap on conversation turns forwarded upstream, independent of provider.
MAX_HISTORY_TURNS = 10

# Suffix appended to a provider display name when a call fails.
ERROR_LABEL_SUFFIX = "(Error)"

# Upper bound on response-body characters copied into diagnostics.
MAX_LOGGED_BODY_CHARS = 2000

# Upper bound on upstream error detail echoed back to the end user.
MAX_DETAIL_CHARS = 500

# Transport error substrings that indicate the upstream is unreachable.
CONNECTION_FAILURE_PATTERNS = (
    "connection refused",
    "failed to connect",
    "could not connect",
    "couldn't connect",
    "name or service not known",
    "nodename nor servname",
    "temporary failure in name resolution",
    "all connection attempts failed",
)

__all__ = [
    "MAX_HISTORY_TURNS",
    "ERROR_LABEL_SUFFIX",
    "MAX_LOGGED_BODY_CHARS",
    "MAX_DETAIL_CHARS",
    "CONNECTION_FAILURE_PATTERNS",
]
