"""Logging utilities for the meff_history package."""

from __future__ import annotations

import logging
import os
from typing import Optional

_LOGGER: Optional[logging.Logger] = None
LOG_LEVEL_ENV_VAR = "MEFF_HISTORY_LOG_LEVEL"


def get_logger(name: str = "meff_history") -> logging.Logger:
    """Return a module-level logger, configuring the root handler once.

    The level comes from ``$MEFF_HISTORY_LOG_LEVEL`` (``INFO`` by default).
    """
    global _LOGGER
    if _LOGGER is None:
        level_name = os.environ.get(LOG_LEVEL_ENV_VAR, "INFO").upper()
        logging.basicConfig(
            level=getattr(logging, level_name, logging.INFO),
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        )
        _LOGGER = logging.getLogger("meff_history")
    return logging.getLogger(name)
