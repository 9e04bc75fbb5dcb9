"""Perplexity adapter package."""

from .client import PerplexityProvider

__all__ = ["PerplexityProvider"]
