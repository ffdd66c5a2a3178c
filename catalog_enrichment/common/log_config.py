"""
Logging Configuration

Configures logging for the webhook server and CLI scripts.
Output goes to stderr to keep stdout clean for user-facing reports.
"""

import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "catalog_enrichment"

# Chatty HTTP libraries are kept at WARNING unless running verbose
_NOISY_LOGGERS = ("urllib3", "httpx")


def setup_logging(verbose: bool = False, quiet: bool = False, level_name: Optional[str] = None) -> None:
    """
    Configure logging for the enrichment pipeline.

    Args:
        verbose: If True, set level to DEBUG
        quiet: If True, set level to WARNING
        level_name: Explicit level (e.g. "ERROR"), wins over verbose/quiet
    """
    if level_name:
        level = logging.getLevelName(level_name.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {level_name}")
    elif verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)-8s %(name)s: %(message)s"))

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    # Avoid duplicate handlers if called multiple times
    logger.handlers.clear()
    logger.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if verbose else logging.WARNING)
