"""chat_gateway.config.defaults
============================

Central place for small, stable default values used across the gateway and
its service layer. These defaults can be overridden via environment variables,
an external config file, or the settings store, but provide sensible fallbacks
for local development and tests.

This module avoids importing from the provider packages to prevent circular
dependencies. Only plain constants live here.
"""

from __future__ import annotations

# ---- Service / HTTP layer ----

# Bind address and port for the FastAPI dev server.
GATEWAY_SERVICE_DEFAULT_HOST = "127.0.0.1"
GATEWAY_SERVICE_DEFAULT_PORT = 8091
# Comma-separated list of allowed origins for the dev server.
GATEWAY_SERVICE_CORS_DEFAULT_ORIGINS = "http://localhost:5173,http://127.0.0.1:5173"

# Label used by the chatbot service for results it produces itself.
ASSISTANT_DISPLAY_NAME = "AI Assistant"

# ---- Chatbot settings defaults ----
CHATBOT_DEFAULT_PROVIDER = "basic"
CHATBOT_DEFAULT_TEMPERATURE = 0.7
CHATBOT_DEFAULT_MAX_TOKENS = 2048
CHATBOT_DEFAULT_MAX_HISTORY = 10
CHATBOT_MAX_TOKENS_LIMIT = 8192

# ---- CLI defaults ----
GATEWAY_CLI_DEFAULT_PROVIDER = "basic"


# ---- Provider-specific sane defaults ----
GEMINI_DEFAULT_MODEL = "gemini-2.5-flash"
GEMINI_DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com"
# Nucleus/top-k sampling sent with every Gemini request.
GEMINI_TOP_K = 40
GEMINI_TOP_P = 0.95

# xAI (Grok) defaults
XAI_DEFAULT_MODEL = "grok-2-1212"
XAI_DEFAULT_BASE_URL = "https://api.x.ai/v1"

# Ollama (local daemon) defaults
OLLAMA_DEFAULT_MODEL = "llama3.2"
OLLAMA_DEFAULT_HOST = "http://localhost:11434"

# OpenAI defaults; the path adds /v1 so the base is the bare origin.
OPENAI_DEFAULT_MODEL = "gpt-4o-mini"
OPENAI_DEFAULT_BASE_URL = "https://api.openai.com"

# OpenRouter defaults, including the attribution headers it asks clients to send.
OPENROUTER_DEFAULT_MODEL = "openai/gpt-4o-mini"
OPENROUTER_DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
OPENROUTER_DEFAULT_REFERER = "https://github.com/chat-gateway/chat-gateway"
OPENROUTER_DEFAULT_TITLE = "Chat Gateway"

# Perplexity defaults
PERPLEXITY_DEFAULT_MODEL = "sonar"
PERPLEXITY_DEFAULT_BASE_URL = "https://api.perplexity.ai"


# ---- Display names (prefix of every result label) ----
PROVIDER_DISPLAY_NAMES = {
    "basic": "Basic Assistant",
    "gemini": "Google Gemini",
    "xai": "xAI Grok",
    "ollama": "Ollama",
    "openai": "OpenAI",
    "openrouter": "OpenRouter",
    "perplexity": "Perplexity",
}

# Identifiers accepted for compatibility with older settings values.
PROVIDER_ALIASES = {
    "google_gemini": "gemini",
    "grok": "xai",
}


__all__ = [
    # Service
    "GATEWAY_SERVICE_DEFAULT_HOST",
    "GATEWAY_SERVICE_DEFAULT_PORT",
    "GATEWAY_SERVICE_CORS_DEFAULT_ORIGINS",
    "ASSISTANT_DISPLAY_NAME",
    # Chatbot
    "CHATBOT_DEFAULT_PROVIDER",
    "CHATBOT_DEFAULT_TEMPERATURE",
    "CHATBOT_DEFAULT_MAX_TOKENS",
    "CHATBOT_DEFAULT_MAX_HISTORY",
    "CHATBOT_MAX_TOKENS_LIMIT",
    # CLI
    "GATEWAY_CLI_DEFAULT_PROVIDER",
    # Provider defaults
    "GEMINI_DEFAULT_MODEL",
    "GEMINI_DEFAULT_BASE_URL",
    "GEMINI_TOP_K",
    "GEMINI_TOP_P",
    "XAI_DEFAULT_MODEL",
    "XAI_DEFAULT_BASE_URL",
    "OLLAMA_DEFAULT_MODEL",
    "OLLAMA_DEFAULT_HOST",
    "OPENAI_DEFAULT_MODEL",
    "OPENAI_DEFAULT_BASE_URL",
    "OPENROUTER_DEFAULT_MODEL",
    "OPENROUTER_DEFAULT_BASE_URL",
    "OPENROUTER_DEFAULT_REFERER",
    "OPENROUTER_DEFAULT_TITLE",
    "PERPLEXITY_DEFAULT_MODEL",
    "PERPLEXITY_DEFAULT_BASE_URL",
    "PROVIDER_DISPLAY_NAMES",
    "PROVIDER_ALIASES",
]
