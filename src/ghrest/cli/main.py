"""Typer app: the root callback owns the GitHubSession for one invocation."""

from __future__ import annotations

import logging
from typing import Optional

import typer

from ghrest import __version__
from ghrest.api import misc
from ghrest.cli._shared import FORMAT_OPTION, get_session, handle_errors
from ghrest.core.session import GitHubSession
from ghrest.utils.logs import configure_console_logging, configure_logging
from ghrest.utils.output import console, output

app = typer.Typer(
    name="ghrest",
    help="ghrest: GitHub REST API from the command line.",
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"ghrest {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log requests at debug level"),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version"
    ),
) -> None:
    """Create the session shared by every subcommand."""
    session = GitHubSession()
    ctx.obj = session
    ctx.call_on_close(session.close)
    configure_logging(session.config, logging.DEBUG if verbose else logging.INFO)
    configure_console_logging(logging.DEBUG if verbose else logging.WARNING)


@app.command("rate-limit")
def rate_limit(ctx: typer.Context, fmt: Optional[str] = FORMAT_OPTION) -> None:
    """Show the remaining API quota."""
    with handle_errors():
        limits = misc.get_rate_limit(get_session(ctx))

    core = limits.core
    if fmt == "json" or core is None:
        output(limits, fmt=fmt)
    else:
        console.print(f"Remaining: {core.remaining} / {core.limit}")
        console.print(f"Resets at: {core.reset:%Y-%m-%d %H:%M:%S %Z}")


# Register subcommand groups
from ghrest.cli.auth_cmd import auth_app
from ghrest.cli.codespace_cmd import codespace_app
from ghrest.cli.config_cmd import config_app
from ghrest.cli.content_cmd import content_command
from ghrest.cli.issue_cmd import issue_app
from ghrest.cli.repo_cmd import repo_app

app.add_typer(config_app, name="config", help="Manage configuration")
app.add_typer(auth_app, name="auth", help="Manage the API token")
app.add_typer(repo_app, name="repo", help="Repositories")
app.add_typer(issue_app, name="issue", help="Issues")
app.add_typer(codespace_app, name="codespace", help="Codespaces")
app.command("content")(content_command)
