"""Codespace subcommands."""

from __future__ import annotations

from typing import Optional

import typer

from ghrest.api import codespaces
from ghrest.cli._shared import (
    FORMAT_OPTION,
    OWNER_OPTION,
    REPO_OPTION,
    URI_OPTION,
    get_session,
    handle_errors,
    repository_source,
)
from ghrest.utils.output import output, output_table

codespace_app = typer.Typer(no_args_is_help=True)

_WAIT_OPTION = typer.Option(False, "--wait", "-w", help="Block until the state settles")
_TIMEOUT_OPTION = typer.Option(
    None, "--timeout", help="Seconds to wait (default: state_change_timeout_seconds)"
)


@codespace_app.command("list")
def codespace_list(
    ctx: typer.Context,
    owner: Optional[str] = OWNER_OPTION,
    repo: Optional[str] = REPO_OPTION,
    uri: Optional[str] = URI_OPTION,
    org: Optional[str] = typer.Option(None, "--org", help="List an organization's codespaces"),
    user: Optional[str] = typer.Option(None, "--user", help="With --org: one member only"),
    fmt: Optional[str] = FORMAT_OPTION,
) -> None:
    """List codespaces for you, a repository or an organization."""
    with handle_errors():
        if org:
            scope: codespaces.CodespaceScope = codespaces.ForOrganization(org, user)
        elif owner or repo or uri:
            scope = codespaces.ForRepository(repository_source(owner, repo, uri))
        else:
            scope = codespaces.ForAuthenticatedUser()
        found = codespaces.list_codespaces(get_session(ctx), scope)
    output_table(found, ["name", "state", "repository_url", "last_used_at"], fmt=fmt)


@codespace_app.command("start")
def codespace_start(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Codespace name"),
    wait: bool = _WAIT_OPTION,
    timeout: Optional[float] = _TIMEOUT_OPTION,
    fmt: Optional[str] = FORMAT_OPTION,
) -> None:
    """Start a codespace."""
    with handle_errors():
        codespace = codespaces.start_codespace(get_session(ctx), name, wait=wait, timeout=timeout)
    output(codespace, fmt=fmt)


@codespace_app.command("stop")
def codespace_stop(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Codespace name"),
    wait: bool = _WAIT_OPTION,
    timeout: Optional[float] = _TIMEOUT_OPTION,
    fmt: Optional[str] = FORMAT_OPTION,
) -> None:
    """Stop a codespace."""
    with handle_errors():
        codespace = codespaces.stop_codespace(get_session(ctx), name, wait=wait, timeout=timeout)
    output(codespace, fmt=fmt)
