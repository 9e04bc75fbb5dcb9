"""``python -m chat_gateway.service.cli``."""

from . import main

raise SystemExit(main())
