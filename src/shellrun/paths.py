"""Path helpers for locating shellrun configuration files."""

import os
from pathlib import Path

from platformdirs import user_config_dir

SHELLRUN_APP_NAME = "shellrun"
CONFIG_FILENAME = "config.json"
CONFIG_PATH_ENV = "SHELLRUN_CONFIG"


def shellrun_config_dir() -> Path:
    """Return the per-user shellrun configuration directory.

    Example:
        >>> shellrun_config_dir().name == SHELLRUN_APP_NAME
        True
    """
    return Path(user_config_dir(SHELLRUN_APP_NAME, appauthor=False))


def user_config_path() -> Path:
    """Return the user config file path, honoring ``SHELLRUN_CONFIG``."""
    override = os.environ.get(CONFIG_PATH_ENV, "").strip()
    if override:
        return Path(override).expanduser()
    return shellrun_config_dir() / CONFIG_FILENAME
