"""Config subcommands: get, set, list, reset, backup, restore."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from ghrest.cli._shared import FORMAT_OPTION, get_session, handle_errors
from ghrest.utils.output import info, output, success

config_app = typer.Typer(no_args_is_help=True)


@config_app.command("get")
def config_get(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="Configuration key"),
    fmt: Optional[str] = FORMAT_OPTION,
) -> None:
    """Get a configuration value."""
    with handle_errors():
        value = get_session(ctx).config_store.get(key)

    if fmt == "json":
        output({"key": key, "value": value}, fmt="json")
    elif value == "":
        info(f"{key}: (not set)")
    else:
        info(f"{key}: {value}")


@config_app.command("set")
def config_set(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="Configuration key"),
    value: str = typer.Argument(..., help="Value to set"),
    session_only: bool = typer.Option(
        False, "--session-only", help="Change this process only; leave the file alone"
    ),
    fmt: Optional[str] = FORMAT_OPTION,
) -> None:
    """Set a configuration value."""
    with handle_errors():
        stored = get_session(ctx).config_store.set(key, value, session_only=session_only)

    if fmt == "json":
        output({"key": key, "value": stored}, fmt="json")
    else:
        success(f"{key} = {stored}")


@config_app.command("list")
def config_list(
    ctx: typer.Context,
    fmt: Optional[str] = FORMAT_OPTION,
) -> None:
    """List all configuration values."""
    config = get_session(ctx).config_store.as_dict()
    if fmt == "json":
        output(config, fmt="json")
    else:
        for k, v in sorted(config.items()):
            info(f"{k}: {v}")


@config_app.command("reset")
def config_reset(
    ctx: typer.Context,
    session_only: bool = typer.Option(False, "--session-only", help="Keep the file on disk"),
) -> None:
    """Restore every setting to its default."""
    get_session(ctx).config_store.reset(session_only=session_only)
    success("Configuration reset to defaults")


@config_app.command("backup")
def config_backup(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="Where to write the backup"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing file"),
) -> None:
    """Copy the persisted configuration to a file."""
    with handle_errors():
        written = get_session(ctx).config_store.backup(path, force=force)
    success(f"Configuration backed up to {written}")


@config_app.command("restore")
def config_restore(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="Backup file to restore"),
) -> None:
    """Replace the persisted configuration with a backup."""
    with handle_errors():
        get_session(ctx).config_store.restore(path)
    success(f"Configuration restored from {path}")
