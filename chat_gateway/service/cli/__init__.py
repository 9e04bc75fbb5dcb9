"""``chat-gateway`` command line entrypoint.

Exit codes: 0 for a successful reply, 1 when the provider returned an
in-band failure, 2 for usage errors (unknown provider, unreadable history,
missing subcommand).
"""

from __future__ import annotations

from typing import Optional

from ...base.logging import configure_logger
from .cli_parser import build_parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    handler = getattr(args, "handler", None)
    if handler is None:
        parser.print_help()
        return 2
    if args.log_level or args.log_file:
        configure_logger(level=args.log_level, file_path=args.log_file)
    return handler(args)


__all__ = ["main", "build_parser"]
