# qstatelab/logging_config.py
from __future__ import annotations

import logging

from qstatelab.settings import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str | None = None) -> logging.Logger:
    """
    Configure root logging once and return the package logger.

    The level defaults to settings.LOG_LEVEL.
    """
    chosen = (level or get_settings().LOG_LEVEL).upper()
    logging.basicConfig(level=chosen, format=LOG_FORMAT)
    logger = logging.getLogger("qstatelab")
    logger.setLevel(chosen)
    return logger
