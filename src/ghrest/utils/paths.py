"""Per-user file locations for configuration, credentials and logs."""

from __future__ import annotations

import getpass
import platform
from pathlib import Path

import platformdirs

APP_NAME = "ghrest"


def config_dir() -> Path:
    """Roaming per-user settings folder (e.g. ~/.config/ghrest)."""
    return Path(platformdirs.user_config_dir(APP_NAME, appauthor=False))


def data_dir() -> Path:
    """Local (non-roaming) per-user folder; holds the secured token file."""
    return Path(platformdirs.user_data_dir(APP_NAME, appauthor=False))


def log_dir() -> Path:
    return Path(platformdirs.user_log_dir(APP_NAME, appauthor=False))


def config_file() -> Path:
    return config_dir() / "config.json"


def token_file() -> Path:
    return data_dir() / "token.json"


def default_log_file() -> Path:
    return log_dir() / "ghrest.log"


def get_machine_name() -> str:
    return platform.node() or "unknown"


def get_username() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return "unknown"
