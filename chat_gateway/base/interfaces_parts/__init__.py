"""Single-class Protocol modules re-exported by ``chat_gateway.base.interfaces``."""

from .chat_provider import ChatProvider

__all__ = ["ChatProvider"]
