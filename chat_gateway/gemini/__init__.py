"""Google Gemini adapter package."""

from .client import GeminiProvider

__all__ = ["GeminiProvider"]
