"""Logging setup shared by the client modules."""

import logging
import sys
from typing import Dict

from config import LOG_LEVEL

LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

_loggers: Dict[str, logging.Logger] = {}
_configured = False


def _configure(level: str) -> None:
    global _configured
    root = logging.getLogger()
    root.setLevel(LEVELS.get(level.upper(), logging.INFO))
    # Streamlit reruns the script; avoid stacking handlers.
    if not any(getattr(h, "_bookrec", False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s [%(levelname)s] [%(name)s] %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        handler._bookrec = True
        root.addHandler(handler)
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a configured logger, setting up the root handler on first use."""
    if not _configured:
        _configure(LOG_LEVEL)
    if name not in _loggers:
        _loggers[name] = logging.getLogger(name)
    return _loggers[name]
