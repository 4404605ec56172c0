"""Auth subcommands: store, clear and inspect the API token."""

from __future__ import annotations

from typing import Optional

import typer

from ghrest.cli._shared import FORMAT_OPTION, get_session, handle_errors
from ghrest.utils.output import info, output, success

auth_app = typer.Typer(no_args_is_help=True)


@auth_app.command("set")
def auth_set(
    ctx: typer.Context,
    token: str = typer.Option(
        ..., "--token", prompt="GitHub API token", hide_input=True, help="Personal access token"
    ),
    session_only: bool = typer.Option(
        False, "--session-only", help="Keep the token in memory only"
    ),
) -> None:
    """Store an API token, encrypted for the current user and machine."""
    with handle_errors():
        get_session(ctx).credentials.set_token(token, session_only=session_only)
    success("Token stored" if not session_only else "Token set for this session")


@auth_app.command("clear")
def auth_clear(
    ctx: typer.Context,
    session_only: bool = typer.Option(False, "--session-only", help="Keep the stored file"),
) -> None:
    """Forget the cached token and delete the stored one."""
    get_session(ctx).credentials.clear(session_only=session_only)
    success("Token cleared")


@auth_app.command("status")
def auth_status(
    ctx: typer.Context,
    fmt: Optional[str] = FORMAT_OPTION,
) -> None:
    """Report whether a token is configured (never prints the token)."""
    configured = get_session(ctx).credentials.is_configured()
    if fmt == "json":
        output({"configured": configured}, fmt="json")
    elif configured:
        success("A GitHub API token is configured")
    else:
        info("No GitHub API token is configured")
