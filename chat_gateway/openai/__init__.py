"""OpenAI (and OpenAI-compatible) adapter package."""

from .client import OpenAIProvider

__all__ = ["OpenAIProvider"]
