"""Logging setup for the command line entrypoint."""

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(level: str = "INFO") -> None:
    """Route ``elemental_bias`` loggers to stderr at the given level."""
    logger = logging.getLogger("elemental_bias")
    logger.setLevel(level.upper())
    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        logger.addHandler(RichHandler(console=Console(stderr=True), show_path=False))
