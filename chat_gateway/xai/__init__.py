"""xAI Grok adapter package."""

from .client import XAIProvider

__all__ = ["XAIProvider"]
