"""Keyword-matching fallback provider."""

from .client import BasicProvider

__all__ = ["BasicProvider"]
