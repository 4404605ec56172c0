"""Logging setup: a file handler from the configuration plus rich console warnings."""

from __future__ import annotations

import logging
import time
from pathlib import Path

from rich.logging import RichHandler

from ghrest.core.config import GitHubConfiguration
from ghrest.utils.output import error_console
from ghrest.utils.paths import default_log_file

_HANDLER_NAME = "ghrest-file"
_FORMAT = "%(asctime)s [%(process)d] %(levelname)s %(name)s: %(message)s"


def log_file_path(config: GitHubConfiguration) -> Path:
    return Path(config.log_path) if config.log_path else default_log_file()


def configure_logging(config: GitHubConfiguration, level: int = logging.INFO) -> logging.Handler | None:
    """Attach (or replace) the ghrest file handler on the package logger.

    Returns the handler, or None when ``disable_logging`` is set.
    """
    root = logging.getLogger("ghrest")
    for handler in list(root.handlers):
        if handler.get_name() == _HANDLER_NAME:
            root.removeHandler(handler)
            handler.close()

    if config.disable_logging:
        return None

    path = log_file_path(config)
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.set_name(_HANDLER_NAME)
    formatter = logging.Formatter(_FORMAT)
    if config.log_time_as_utc:
        formatter.converter = time.gmtime
    handler.setFormatter(formatter)
    handler.setLevel(level)
    root.addHandler(handler)
    if root.level == logging.NOTSET or root.level > level:
        root.setLevel(level)
    return handler


_CONSOLE_HANDLER_NAME = "ghrest-console"


def configure_console_logging(level: int = logging.WARNING) -> logging.Handler:
    """Show warnings (e.g. the missing-token notice) on stderr via rich."""
    root = logging.getLogger("ghrest")
    for handler in list(root.handlers):
        if handler.get_name() == _CONSOLE_HANDLER_NAME:
            root.removeHandler(handler)
    handler = RichHandler(console=error_console, show_time=False, show_path=False)
    handler.set_name(_CONSOLE_HANDLER_NAME)
    handler.setLevel(level)
    root.addHandler(handler)
    if root.level == logging.NOTSET or root.level > level:
        root.setLevel(level)
    return handler
