"""Logging setup shared by all simulator components."""

import logging
import sys
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
ROOT_LOGGER_NAME = "deliverysim"


def _root_logger() -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        root.setLevel(logging.INFO)
        root.propagate = False
    return root


def setup_logger(name: str, level: Optional[Union[str, int]] = None) -> logging.Logger:
    """Get a component logger under the ``deliverysim`` namespace.

    Component loggers inherit their level from the package logger, so
    passing ``level`` here (as the CLI does) changes verbosity for the
    whole simulator.

    Args:
        name: Logger name, usually the component class name
        level: Optional log level ("DEBUG", "INFO", ... or an int)

    Returns:
        Configured logger
    """
    root = _root_logger()
    if level is not None:
        root.setLevel(level)
    return root.getChild(name)
