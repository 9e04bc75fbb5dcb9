"""Small shared helpers for provider adapters."""

from .headers import merge_headers
from .messages import build_role_content_messages, map_role

__all__ = ["build_role_content_messages", "map_role", "merge_headers"]
