"""
Logging Configuration

Sets up the `image_finder` logger tree. Log lines go to stderr (and
optionally a file) so that stdout carries only the augmented page.
Watcher sessions run for a long time, so every line carries a timestamp.
"""

import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"

# HTTP libraries used for the catalog fetch and image probes
NOISY_LOGGERS = ("urllib3", "requests")


def setup_logging(verbose: bool = False, quiet: bool = False, log_file: Optional[str] = None) -> None:
    """
    Configure logging for the image finder.

    Args:
        verbose: DEBUG level, including connection logs of the HTTP libraries
        quiet: WARNING level
        log_file: Also append log lines to this file
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))

    logger = logging.getLogger("image_finder")
    logger.setLevel(level)

    for old in logger.handlers:
        old.close()
    logger.handlers.clear()
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if verbose else logging.WARNING)
