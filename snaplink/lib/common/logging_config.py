"""Logger wiring for the snaplink service.

Everything the service logs goes through the ``snaplink`` logger tree:
the request middleware uses ``snaplink.web`` and library modules use
``logging.getLogger(__name__)``. Only the root of that tree gets handlers.
"""

import logging
import sys
from typing import List, Optional


LOGGER_NAME = "snaplink"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"
JSON_FORMAT = (
    '{"timestamp": "%(asctime)s", "level": "%(levelname)s", '
    '"logger": "%(name)s", "message": "%(message)s"}'
)


def _build_handlers(log_file: Optional[str]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    return handlers


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    json_format: bool = False,
) -> logging.Logger:
    """Point the ``snaplink`` logger at stdout and, optionally, a file.

    Handlers from an earlier call are closed and replaced, so the app
    startup and the tests can call this repeatedly.

    Args:
        level: Level name, case-insensitive; unknown names fall back to INFO
        log_file: Extra destination for the same records
        json_format: Emit one JSON object per line instead of plain text

    Returns:
        The ``snaplink`` logger
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(numeric_level)

    for stale in list(logger.handlers):
        logger.removeHandler(stale)
        stale.close()

    formatter = logging.Formatter(JSON_FORMAT if json_format else TEXT_FORMAT, datefmt=DATE_FORMAT)
    for handler in _build_handlers(log_file):
        handler.setLevel(numeric_level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger
