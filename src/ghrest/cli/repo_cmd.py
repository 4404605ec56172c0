"""Repository subcommands."""

from __future__ import annotations

from typing import Optional

import typer

from ghrest.api import repositories
from ghrest.cli._shared import (
    FORMAT_OPTION,
    OWNER_OPTION,
    REPO_OPTION,
    URI_OPTION,
    get_session,
    handle_errors,
    repository_source,
)
from ghrest.utils.output import info, output, output_table, success

repo_app = typer.Typer(no_args_is_help=True)


@repo_app.command("get")
def repo_get(
    ctx: typer.Context,
    owner: Optional[str] = OWNER_OPTION,
    repo: Optional[str] = REPO_OPTION,
    uri: Optional[str] = URI_OPTION,
    fmt: Optional[str] = FORMAT_OPTION,
) -> None:
    """Show one repository."""
    with handle_errors():
        source = repository_source(owner, repo, uri)
        repository = repositories.get_repository(get_session(ctx), source)
    output(repository, fmt=fmt)


@repo_app.command("list")
def repo_list(
    ctx: typer.Context,
    user: Optional[str] = typer.Option(None, "--user", help="Defaults to the authenticated user"),
    sort: Optional[str] = typer.Option(None, "--sort", help="created, updated, pushed, full_name"),
    fmt: Optional[str] = FORMAT_OPTION,
) -> None:
    """List repositories for a user."""
    with handle_errors():
        repos = repositories.list_repositories_for_user(get_session(ctx), user_name=user, sort=sort)
    output_table(repos, ["full_name", "private", "default_branch", "pushed_at"], fmt=fmt)


@repo_app.command("starred")
def repo_starred(
    ctx: typer.Context,
    owner: Optional[str] = OWNER_OPTION,
    repo: Optional[str] = REPO_OPTION,
    uri: Optional[str] = URI_OPTION,
    fmt: Optional[str] = FORMAT_OPTION,
) -> None:
    """Check whether you starred a repository."""
    with handle_errors():
        source = repository_source(owner, repo, uri)
        starred = repositories.is_repository_starred(get_session(ctx), source)
    if fmt == "json":
        output({"starred": starred}, fmt="json")
    elif starred:
        success("Starred")
    else:
        info("Not starred")
