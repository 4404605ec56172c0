"""Configuration store: a flat settings record persisted as per-user JSON."""

from __future__ import annotations

import json
import logging
import shutil
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ValidationError

from ghrest.core.errors import ConfigurationError
from ghrest.utils.paths import config_file

logger = logging.getLogger(__name__)


class GitHubConfiguration(BaseModel):
    """Every setting ghrest understands, with its hard-coded default."""

    api_host_name: str = "github.com"
    default_owner_name: str = ""
    default_repository_name: str = ""
    default_no_status: bool = False
    disable_logging: bool = False
    disable_uri_validation: bool = False
    log_path: str = ""
    log_request_body: bool = False
    log_time_as_utc: bool = False
    maximum_retries_when_result_not_ready: int = 30
    multi_request_progress_threshold: int = 10
    retry_delay_seconds: int = 30
    state_change_delay_seconds: int = 10
    state_change_timeout_seconds: int = 0
    suppress_no_token_warning: bool = False
    web_request_timeout_seconds: int = 0


def setting_names() -> list[str]:
    return sorted(GitHubConfiguration.model_fields)


def _same_type(value: Any, default: Any) -> bool:
    # bool is an int subclass; keep the two apart
    if isinstance(default, bool) or isinstance(value, bool):
        return isinstance(value, bool) and isinstance(default, bool)
    return isinstance(value, type(default))


class ConfigurationStore:
    """Read-modify-write access to the settings file.

    Values live in memory for the session. ``set`` and ``reset`` touch the
    file unless ``session_only`` is passed.
    """

    def __init__(self, path: Path | None = None) -> None:
        self.path = path or config_file()
        self._config = GitHubConfiguration()
        self.load()

    @property
    def current(self) -> GitHubConfiguration:
        return self._config

    def load(self) -> GitHubConfiguration:
        """Reset to defaults, then overlay whatever is persisted on disk."""
        defaults = GitHubConfiguration()
        values = defaults.model_dump()
        for name, value in self._read_persisted().items():
            if name not in values:
                logger.debug("Ignoring unknown configuration key %r", name)
                continue
            if not _same_type(value, values[name]):
                logger.warning(
                    "Persisted value for %r has type %s, expected %s; using the default",
                    name,
                    type(value).__name__,
                    type(values[name]).__name__,
                )
                continue
            values[name] = value
        self._config = GitHubConfiguration(**values)
        return self._config

    def get(self, name: str) -> Any:
        self._require_known(name)
        return getattr(self._config, name)

    def set(self, name: str, value: Any, session_only: bool = False) -> Any:
        """Set one value, coercing strings like ``"30"`` or ``"true"``."""
        self._require_known(name)
        data = self._config.model_dump()
        data[name] = value
        try:
            updated = GitHubConfiguration.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid value for {name}: {value!r}") from e
        self._config = updated
        coerced = getattr(updated, name)

        if not session_only:
            persisted = self._read_persisted()
            persisted[name] = coerced
            self._write_persisted(persisted)
        return coerced

    def reset(self, session_only: bool = False) -> None:
        """Return to defaults; also forget the persisted file unless session_only."""
        self._config = GitHubConfiguration()
        if not session_only and self.path.exists():
            self.path.unlink()
            logger.info("Removed persisted configuration at %s", self.path)

    def backup(self, destination: Path, force: bool = False) -> Path:
        """Copy the persisted settings to *destination*."""
        if destination.exists() and not force:
            raise ConfigurationError(f"{destination} already exists (use force to overwrite)")
        destination.parent.mkdir(parents=True, exist_ok=True)
        if self.path.exists():
            shutil.copyfile(self.path, destination)
        else:
            destination.write_text("{}\n")
        return destination

    def restore(self, source: Path) -> GitHubConfiguration:
        """Replace the persisted settings with *source* and reload."""
        if not source.is_file():
            raise ConfigurationError(f"Backup file not found: {source}")
        self.path.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source, self.path)
        return self.load()

    def as_dict(self) -> dict[str, Any]:
        return self._config.model_dump()

    # -- Internal helpers --

    def _require_known(self, name: str) -> None:
        if name not in GitHubConfiguration.model_fields:
            raise ConfigurationError(
                f"Unknown configuration key: {name}. Valid keys: {', '.join(setting_names())}"
            )

    def _read_persisted(self) -> dict[str, Any]:
        if not self.path.is_file():
            return {}
        try:
            data = json.loads(self.path.read_text())
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Could not read configuration file %s: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def _write_persisted(self, data: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2, sort_keys=True) + "\n")
