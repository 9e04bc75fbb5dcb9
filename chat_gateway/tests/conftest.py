"""Pytest configuration for the gateway test suite.

Provides:
- ``upstream``: replaces the pooled HTTP client used by the shared chat
  skeleton with an ``httpx.MockTransport`` that records every request and
  answers with a programmable response.
- ``log_capture``: a logger wired to an in-memory handler; parsed JSON events
  are available as ``log_capture.events``.
- Environment isolation so provider keys on the developer machine never leak
  into tests.
"""

from __future__ import annotations

import json
import logging
import uuid
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

import httpx
import pytest

from chat_gateway.base import http_chat
from chat_gateway.base.http import close_all_clients

_ISOLATED_ENV = (
    "GEMINI_API_KEY",
    "GOOGLE_API_KEY",
    "XAI_API_KEY",
    "GROK_API_KEY",
    "OPENAI_API_KEY",
    "OPENROUTER_API_KEY",
    "PERPLEXITY_API_KEY",
    "GATEWAY_CONFIG_FILE",
    "GATEWAY_LOG_LEVEL",
    "GATEWAY_TIMEOUT_CLOUD_SECONDS",
    "GATEWAY_TIMEOUT_LOCAL_SECONDS",
    "GATEWAY_TIMEOUT_CONNECT_SECONDS",
)

_PROVIDER_PREFIXES = ("GEMINI", "XAI", "OLLAMA", "OPENAI", "OPENROUTER", "PERPLEXITY")
_PROVIDER_SUFFIXES = ("MODEL", "API_KEY", "BASE_URL", "HOST", "TEMPERATURE", "MAX_TOKENS")


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Remove provider configuration from the environment for every test."""
    for name in _ISOLATED_ENV:
        monkeypatch.delenv(name, raising=False)
    for prefix in _PROVIDER_PREFIXES:
        for suffix in _PROVIDER_SUFFIXES:
            monkeypatch.delenv(f"{prefix}_{suffix}", raising=False)
    monkeypatch.setenv("DOTENV_FILE", str(tmp_path / "missing.env"))
    yield
    close_all_clients()


class RecordingUpstream:
    """Programmable stand-in for an upstream HTTP API."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self.clients: List[Tuple[Optional[str], str, bool]] = []
        self._responder: Callable[[httpx.Request], httpx.Response] = lambda r: httpx.Response(200, json={})

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._responder(request)

    def reply(self, status: int = 200, json_body: Any = None, text: Optional[str] = None) -> None:
        if text is not None:
            self._responder = lambda r: httpx.Response(status, text=text)
        else:
            self._responder = lambda r: httpx.Response(status, json=json_body)

    def fail_with(self, factory: Callable[[httpx.Request], Exception]) -> None:
        def _raise(request: httpx.Request) -> httpx.Response:
            raise factory(request)

        self._responder = _raise

    @property
    def last(self) -> httpx.Request:
        assert self.requests, "no upstream request was made"  # nosec B101
        return self.requests[-1]

    @property
    def last_json(self) -> Dict[str, Any]:
        return json.loads(self.last.content)


@pytest.fixture()
def upstream(monkeypatch: pytest.MonkeyPatch) -> Iterator[RecordingUpstream]:
    rec = RecordingUpstream()
    created: List[httpx.Client] = []

    def _fake_client(base_url: Optional[str], purpose: str, verify: bool = True) -> httpx.Client:
        rec.clients.append((base_url, purpose, verify))
        client = httpx.Client(base_url=base_url or "", transport=httpx.MockTransport(rec.handler))
        created.append(client)
        return client

    monkeypatch.setattr(http_chat, "get_httpx_client", _fake_client)
    yield rec
    for client in created:
        client.close()


class _ListHandler(logging.Handler):
    """Capture log records into a list for assertions."""

    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.records: List[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:  # pragma: no cover - exercised via tests
        self.records.append(record)

    @property
    def messages(self) -> List[str]:
        return [r.getMessage() for r in self.records]

    @property
    def events(self) -> List[Dict[str, Any]]:
        out = []
        for msg in self.messages:
            try:
                out.append(json.loads(msg))
            except ValueError:
                continue
        return out

    def named(self, event: str) -> List[Dict[str, Any]]:
        return [e for e in self.events if e.get("event") == event]


@pytest.fixture()
def log_capture() -> Iterator[Tuple[logging.Logger, _ListHandler]]:
    """Yield ``(logger, handler)`` isolated from the shared gateway handler."""
    logger = logging.getLogger(f"gateway_tests.{uuid.uuid4().hex}")
    handler = _ListHandler()
    logger.handlers[:] = [handler]
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    yield logger, handler
    logger.handlers.clear()
