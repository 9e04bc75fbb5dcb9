"""
Provider-agnostic interfaces (Protocols) for the gateway.

Re-exports the single-class modules under
``chat_gateway.base.interfaces_parts`` to keep imports stable.
"""

from __future__ import annotations

from .interfaces_parts import ChatProvider

__all__ = ["ChatProvider"]
