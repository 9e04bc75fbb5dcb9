"""Run the gateway app under uvicorn for local development.

Bind address and reload behavior come from ``GATEWAY_SERVICE_HOST``,
``GATEWAY_SERVICE_PORT`` and ``GATEWAY_SERVICE_RELOAD``. Reload is on unless
the last one is set to something other than ``"true"``.
"""
from __future__ import annotations

import os
from typing import Any, Dict, Mapping, Optional

import uvicorn

from chat_gateway.base.logging import get_logger
from chat_gateway.config.defaults import GATEWAY_SERVICE_DEFAULT_HOST, GATEWAY_SERVICE_DEFAULT_PORT

APP_PATH = "chat_gateway.service.app:app"

_logger = get_logger("gateway.service.dev_server")


def _port_from(raw: Optional[str]) -> int:
    if raw and raw.strip().isdigit():
        return int(raw)
    return GATEWAY_SERVICE_DEFAULT_PORT


def server_options(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """uvicorn keyword arguments derived from ``environ`` (default ``os.environ``)."""
    env = os.environ if environ is None else environ
    reload_flag = env.get("GATEWAY_SERVICE_RELOAD")
    return {
        "host": env.get("GATEWAY_SERVICE_HOST") or GATEWAY_SERVICE_DEFAULT_HOST,
        "port": _port_from(env.get("GATEWAY_SERVICE_PORT")),
        "reload": reload_flag is None or reload_flag.strip().lower() == "true",
    }


def main() -> None:
    options = server_options()
    _logger.info("dev server on %s:%s (reload=%s)", options["host"], options["port"], options["reload"])
    uvicorn.run(APP_PATH, **options)


if __name__ == "__main__":
    main()
