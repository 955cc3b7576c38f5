"""Logging setup shared by all simulator components."""

import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
ROOT_LOGGER = "schedsim"


def setup_logger(name: str, level: Optional[str] = None,
                 verbose: bool = False) -> logging.Logger:
    """Get a logger under the ``schedsim`` hierarchy.

    Component loggers (``schedsim.<name>``) inherit level and handler from
    the root ``schedsim`` logger, so setting the level there with
    ``setup_logger("schedsim", level=...)`` applies to every component.

    Args:
        name: Logger name, usually the component class name
        level: Explicit level name ("DEBUG", "INFO", ...)
        verbose: Shortcut for DEBUG when no level is given

    Returns:
        Configured logger
    """
    root = logging.getLogger(ROOT_LOGGER)
    # Handler is attached once
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        root.setLevel(logging.INFO)
        root.propagate = False

    if name == ROOT_LOGGER or name.startswith(ROOT_LOGGER + "."):
        logger = logging.getLogger(name)
    else:
        logger = logging.getLogger(f"{ROOT_LOGGER}.{name}")

    if level is None and verbose:
        level = "DEBUG"
    if level is not None:
        logger.setLevel(level.upper())

    return logger
