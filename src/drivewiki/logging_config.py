"""Logging configuration for drivewiki.

Application messages go through loguru. The Drive client logs its requests
through the stdlib ``api`` logger, which only speaks up with ``--verbose``.
"""

import logging
import sys

from loguru import logger


def configure_logging(*, verbose: bool = False) -> None:
    """Configure loguru and the request log with appropriate level."""
    logger.remove()
    level = "DEBUG" if verbose else "INFO"
    logger.add(sys.stderr, level=level, format="{level.icon} {message}")

    api_logger = logging.getLogger("api")
    if verbose:
        logging.basicConfig(stream=sys.stderr, format="  {name}: {message}", style="{")
        api_logger.setLevel(logging.DEBUG)
    else:
        api_logger.setLevel(logging.WARNING)
