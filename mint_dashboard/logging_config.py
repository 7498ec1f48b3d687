"""
Logging configuration for the mint dashboard backend.
"""

import logging
import sys
from typing import Optional

DEFAULT_FORMAT = "[%(asctime)s] [MINT-DASHBOARD] %(levelname)s - %(name)s - %(message)s"


def setup_logging(level="INFO", format_string: Optional[str] = None) -> logging.Logger:
    """
    Configure the root logger to write to stdout.

    Args:
        level: Logging level name or number (DEBUG, INFO, WARNING, ...)
        format_string: Custom format string (default provided)
    """
    if format_string is None:
        format_string = DEFAULT_FORMAT

    logging.basicConfig(
        level=level,
        format=format_string,
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    logger = logging.getLogger("mint_dashboard")
    logger.debug("Logging initialized (level=%s)", level)
    return logger
