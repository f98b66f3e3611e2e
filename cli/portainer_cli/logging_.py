from __future__ import annotations

import logging

from rich.logging import RichHandler

from .console import err_console

NOISY_LOGGERS = ("httpx", "httpcore")


def setup_logging(verbose: bool) -> None:
    """Route log records through rich on stderr; DEBUG with ``--verbose``, WARNING otherwise."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False, rich_tracebacks=verbose)],
        force=True,
    )
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(level)
