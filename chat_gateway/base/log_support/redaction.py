"""Credential redaction helpers for diagnostics.

Upstream URLs may embed a credential in the query string (Google's ``key=``
convention) and error bodies can be arbitrarily large. Everything that reaches
a log line goes through these helpers first.
"""
from __future__ import annotations

from typing import Any, Iterable, Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from ..constants import MAX_LOGGED_BODY_CHARS

MASK = "***"

SECRET_QUERY_PARAMS = frozenset({"key", "api_key", "apikey", "token", "access_token"})


def redact_url(url: Any, secret_params: Iterable[str] = SECRET_QUERY_PARAMS) -> str:
    """Return ``url`` with credential-bearing query values replaced by ``***``.

    Userinfo (``user:pass@host``) is masked as well. Unparseable input is
    returned as its string form with no query string.
    """
    text = str(url)
    secrets = {p.lower() for p in secret_params}
    try:
        parts = urlsplit(text)
    except ValueError:
        return text.split("?", 1)[0]
    netloc = parts.netloc
    if "@" in netloc:
        netloc = f"{MASK}@{netloc.rsplit('@', 1)[1]}"
    query = parts.query
    if query:
        pairs = parse_qsl(query, keep_blank_values=True)
        query = urlencode(
            [(k, MASK if k.lower() in secrets else v) for k, v in pairs],
            safe="*",
        )
    return urlunsplit((parts.scheme, netloc, parts.path, query, parts.fragment))


def mask_secret(text: Optional[str], secret: Optional[str]) -> Optional[str]:
    """Replace every occurrence of ``secret`` inside ``text`` with ``***``."""
    if not text or not secret:
        return text
    return text.replace(secret, MASK)


def truncate_body(body: Optional[str], limit: int = MAX_LOGGED_BODY_CHARS) -> str:
    """Trim a response body for logging, marking the cut when one is made."""
    if not body:
        return ""
    if len(body) <= limit:
        return body
    return f"{body[:limit]}...[truncated {len(body) - limit} chars]"


__all__ = ["MASK", "SECRET_QUERY_PARAMS", "redact_url", "mask_secret", "truncate_body"]
