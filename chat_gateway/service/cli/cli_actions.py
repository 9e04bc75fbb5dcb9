"""CLI action handlers.

Handlers return process exit codes and write to stdout/stderr; they never let
adapter failures escape as exceptions. A failed generation is still printed
(it carries a display-safe message) and yields exit code 1.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, List, Optional

from ...base.factory import ProviderFactory, UnknownProviderError
from ...config.defaults import PROVIDER_DISPLAY_NAMES


def load_history(path: Optional[str]) -> List[Any]:
    """Read a JSON list of turns from ``path``; an empty list when unset.

    Raises
    ------
    ValueError
        When the file does not contain a JSON list.
    """
    if not path:
        return []
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"History file {path} must contain a JSON list")
    return data


def handle_chat(args: argparse.Namespace) -> int:
    try:
        history = load_history(args.history)
    except (OSError, ValueError) as e:
        print(json.dumps({"error": f"Could not read history: {e}"}), file=sys.stderr)
        return 2
    overrides = {"model": args.model, "base_url": args.base_url}
    try:
        provider = ProviderFactory.create(args.provider, **overrides)
    except UnknownProviderError as e:
        print(json.dumps({"error": str(e)}), file=sys.stderr)
        return 2
    result = provider.process_message(args.message, history, args.system_prompt)
    if args.json:
        print(json.dumps({"ok": result.ok, **result.to_dict()}, ensure_ascii=False))
    else:
        print(f"[{result.model}]")
        print(result.response)
    return 0 if result.ok else 1


def handle_providers(args: argparse.Namespace) -> int:
    for name in ProviderFactory.supported():
        print(f"{name}\t{PROVIDER_DISPLAY_NAMES.get(name, name)}")
    return 0


__all__ = ["handle_chat", "handle_providers", "load_history"]
