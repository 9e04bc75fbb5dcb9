from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import HTTPException
from pydantic import BaseModel, Field

from chat_gateway.base.factory import ProviderFactory
from chat_gateway.config.defaults import PROVIDER_DISPLAY_NAMES
from chat_gateway.config.settings import EnvSettingsStore
from chat_gateway.service.chatbot import ChatbotService


class ChatTurnBody(BaseModel):
    """One prior turn of the conversation as sent by the client."""

    role: str
    content: Any = ""


class ChatBody(BaseModel):
    """Request body for ``POST /api/chatbot/chat``.

    ``system_prompt`` is the base prompt; the administrator's instructions,
    the user context and the conversation memory are appended as sections.
    """

    message: str
    history: List[ChatTurnBody] = Field(default_factory=list)
    system_prompt: Optional[str] = None
    user_context: Optional[str] = None
    conversation_memory: Optional[str] = None


def get_chatbot_service() -> ChatbotService:
    """FastAPI dependency returning a service backed by ``CHATBOT_*`` env vars."""
    return ChatbotService(EnvSettingsStore())


def _build_providers_response() -> Dict[str, Any]:
    providers = [
        {"name": name, "display_name": PROVIDER_DISPLAY_NAMES.get(name, name)}
        for name in ProviderFactory.supported()
    ]
    return {"ok": True, "providers": providers}


def _handle_chat(body: ChatBody, service: ChatbotService) -> Dict[str, Any]:
    """Validate the body, run the chatbot service, shape the response."""
    if not body.message or not body.message.strip():
        raise HTTPException(status_code=400, detail="Message is required")
    history = [turn.model_dump() for turn in body.history]
    result = service.process_message(
        body.message,
        history,
        base_system_prompt=body.system_prompt or "",
        user_context=body.user_context or "",
        conversation_memory=body.conversation_memory or "",
    )
    return {"ok": result.ok, **result.to_dict()}
