from __future__ import annotations

import logging

from rich.logging import RichHandler

from .console import err_console

LIBRARY_LOGGER = "captcha_a2_client"


def setup_logging(verbose: bool) -> None:
    """Route log records to stderr; ``-v`` surfaces transport diagnostics."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(name)s: %(message)s",
        handlers=[RichHandler(console=err_console, show_path=False, show_time=verbose)],
    )
    logging.getLogger(LIBRARY_LOGGER).setLevel(level)

    # httpx logs one INFO line per request; worth seeing only with -v.
    logging.getLogger("httpx").setLevel(logging.INFO if verbose else logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
