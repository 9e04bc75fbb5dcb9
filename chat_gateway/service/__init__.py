"""Service layer: chatbot orchestration, FastAPI app and CLI.

The FastAPI app is not imported here so that using :class:`ChatbotService`
does not require the web stack to be importable at package import time.
"""

from .chatbot import ChatbotService, apply_user_prompt, compose_system_prompt

__all__ = ["ChatbotService", "apply_user_prompt", "compose_system_prompt"]
