"""Logging configuration for the site."""

import logging

from rich.console import Console
from rich.logging import RichHandler

console = Console(stderr=True)


def setup_logging(verbose: bool = False) -> None:
    """Install a RichHandler on the root logger unless one is already there."""
    level = logging.DEBUG if verbose else logging.INFO
    root = logging.getLogger()
    root.setLevel(level)

    if any(isinstance(h, RichHandler) for h in root.handlers):
        return

    handler = RichHandler(console=console, rich_tracebacks=True, show_path=verbose)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    root.addHandler(handler)
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
