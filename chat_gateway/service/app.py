from __future__ import annotations

import os
from typing import Any, Dict

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from chat_gateway import __version__
from chat_gateway.config.defaults import GATEWAY_SERVICE_CORS_DEFAULT_ORIGINS
from chat_gateway.service.chatbot import ChatbotService

from .app_parts.app_core import (
    ChatBody,
    _build_providers_response,
    _handle_chat,
    get_chatbot_service,
)

app = FastAPI(title="Chat Gateway", version=__version__)


# ---------------------------------------------------------------------------
# CORS configuration
# ---------------------------------------------------------------------------

cors_origins_env = os.getenv("GATEWAY_SERVICE_CORS_ORIGINS", GATEWAY_SERVICE_CORS_DEFAULT_ORIGINS)
allow_origins = [o.strip() for o in cors_origins_env.split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/api/health")
def health() -> Dict[str, Any]:
    """Report that the service is up."""
    return {"ok": True}


@app.get("/api/providers")
def get_providers() -> Dict[str, Any]:
    """List the provider identifiers the gateway can route to."""
    return _build_providers_response()


@app.post("/api/chatbot/chat")
def post_chat(body: ChatBody, service: ChatbotService = Depends(get_chatbot_service)) -> Dict[str, Any]:
    """Answer one chat message.

    Upstream failures are not HTTP errors: they come back with ``ok: false``
    and a display-safe ``response``. Only a blank message is rejected (400).
    """
    return _handle_chat(body, service)
