"""
Logging setup for Lonerbox Data.

Streamlit re-executes page scripts on every interaction, so
``configure_logging`` must be safe to call many times: it installs a
single stream handler on the package logger and only adjusts the level
on later calls.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

from .config import DEFAULT_LOG_LEVEL

PACKAGE_LOGGER = "lonerbox_data"
LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"

_HANDLER_NAME = "lonerbox_console"


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    level_name = (level or os.environ.get("LONERBOX_LOG_LEVEL", "") or DEFAULT_LOG_LEVEL).upper()
    numeric = logging.getLevelName(level_name)
    if not isinstance(numeric, int):
        numeric = logging.INFO

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(numeric)

    if not any(h.get_name() == _HANDLER_NAME for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))
        logger.addHandler(handler)

    return logger
