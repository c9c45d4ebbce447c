"""Logging configuration for the ragline CLI.

Library modules only create ``logging.getLogger(__name__)`` loggers; handlers
are installed here, by the application.
"""

import logging
import sys


def configure_logging(level: int = logging.WARNING) -> None:
    """Install a single timestamped stderr handler on the ragline logger."""
    logger = logging.getLogger("ragline")
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False

    # Reduce noise from verbose third-party libraries
    logging.getLogger("LiteLLM").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
