"""Argument parser for ``chat-gateway``.

Each subparser stores its handler from ``cli_actions`` as ``args.handler``;
nothing here performs I/O.
"""

from __future__ import annotations

import argparse

from ...config.defaults import GATEWAY_CLI_DEFAULT_PROVIDER
from .cli_actions import handle_chat, handle_providers


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chat-gateway",
        description="Send chat messages through a provider adapter",
    )
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ERROR or CRITICAL")
    parser.add_argument("--log-file", default=None, help="Also write JSON log lines to this rotating file")
    sub = parser.add_subparsers(dest="cmd")

    chat = sub.add_parser("chat", help="Send one message and print the reply")
    chat.add_argument("message")
    chat.add_argument("--provider", default=GATEWAY_CLI_DEFAULT_PROVIDER)
    chat.add_argument("--model", default=None)
    chat.add_argument("--base-url", dest="base_url", default=None)
    chat.add_argument("--system", dest="system_prompt", default="")
    chat.add_argument("--history", default=None, help="JSON file holding a list of {role, content} turns")
    chat.add_argument("--json", action="store_true", help="Print the result as one JSON object")
    chat.set_defaults(handler=handle_chat)

    providers = sub.add_parser("providers", help="List supported provider identifiers")
    providers.set_defaults(handler=handle_providers)

    return parser


__all__ = ["build_parser"]
