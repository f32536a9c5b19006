"""Location of the files meff_history keeps between runs."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Final

__all__ = ["CACHE_DIR_NAME", "HOME_ENV_VAR", "get_base_settings_path", "default_cache_dir"]

CACHE_DIR_NAME: Final[str] = "MEFFCACHE"
HOME_ENV_VAR: Final[str] = "MEFF_HISTORY_HOME"


def get_base_settings_path() -> Path:
    """Return the base settings directory supplied by the host environment.

    ``$MEFF_HISTORY_HOME`` wins when set, otherwise ``~/.meff_history`` is
    used. The directory is not created here.
    """

    configured = os.environ.get(HOME_ENV_VAR)
    if configured:
        return Path(configured).expanduser()
    return Path.home() / ".meff_history"


def default_cache_dir() -> Path:
    return get_base_settings_path() / CACHE_DIR_NAME
