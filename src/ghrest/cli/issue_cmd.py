"""Issue subcommands."""

from __future__ import annotations

from typing import List, Optional

import typer

from ghrest.api import issues
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

issue_app = typer.Typer(no_args_is_help=True)


@issue_app.command("list")
def issue_list(
    ctx: typer.Context,
    owner: Optional[str] = OWNER_OPTION,
    repo: Optional[str] = REPO_OPTION,
    uri: Optional[str] = URI_OPTION,
    state: str = typer.Option("open", "--state", "-s", help="open, closed or all"),
    label: Optional[List[str]] = typer.Option(None, "--label", "-l", help="Filter by label"),
    no_pulls: bool = typer.Option(False, "--no-pulls", help="Skip pull requests"),
    fmt: Optional[str] = FORMAT_OPTION,
) -> None:
    """List issues in a repository."""
    with handle_errors():
        source = repository_source(owner, repo, uri)
        found = issues.list_issues(
            get_session(ctx),
            source,
            state=state,
            labels=label or None,
            include_pull_requests=not no_pulls,
        )
    output_table(found, ["number", "state", "title", "labels"], fmt=fmt)


@issue_app.command("get")
def issue_get(
    ctx: typer.Context,
    number: int = typer.Argument(..., help="Issue number"),
    owner: Optional[str] = OWNER_OPTION,
    repo: Optional[str] = REPO_OPTION,
    uri: Optional[str] = URI_OPTION,
    fmt: Optional[str] = FORMAT_OPTION,
) -> None:
    """Show one issue."""
    with handle_errors():
        source = repository_source(owner, repo, uri)
        issue = issues.get_issue(get_session(ctx), number, source)
    output(issue, fmt=fmt)
