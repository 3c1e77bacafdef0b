"""
Logging setup for the API process.

Modules log through ``logging.getLogger(__name__)``; this module only
installs the handler once at startup.
"""

import logging

from rich.logging import RichHandler

_configured = False


def configure_logging(level: str = "INFO") -> None:
    """Install a rich console handler on the root logger (idempotent)."""
    global _configured
    if _configured:
        logging.getLogger().setLevel(level.upper())
        return

    logging.basicConfig(
        level=level.upper(),
        format="%(name)s: %(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )
    # httpx logs every PostgREST request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    _configured = True
