"""Shared CLI utilities to avoid circular imports."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

import typer

from ghrest.core.errors import GitHubError, ParameterError
from ghrest.core.resolver import ByElements, ByUri, FromDefaults, RepositorySource
from ghrest.core.session import GitHubSession
from ghrest.utils.output import error

FORMAT_OPTION = typer.Option(None, "--format", "-F", help="Output format: json or text")
OWNER_OPTION = typer.Option(None, "--owner", "-o", help="Repository owner (defaults to config)")
REPO_OPTION = typer.Option(None, "--repo", "-r", help="Repository name (defaults to config)")
URI_OPTION = typer.Option(None, "--uri", "-u", help="Repository URL, instead of --owner/--repo")


def get_session(ctx: typer.Context) -> GitHubSession:
    """Return the session created by the root callback."""
    session = ctx.find_root().obj
    if not isinstance(session, GitHubSession):
        raise RuntimeError("CLI session was not initialized")
    return session


def repository_source(
    owner: str | None, repo: str | None, uri: str | None
) -> RepositorySource:
    if uri and (owner or repo):
        raise ParameterError("--uri cannot be combined with --owner or --repo")
    if uri:
        return ByUri(uri)
    if owner or repo:
        return ByElements(owner or "", repo or "")
    return FromDefaults()


@contextmanager
def handle_errors() -> Iterator[None]:
    """Print ghrest errors and exit 1 instead of dumping a traceback."""
    try:
        yield
    except GitHubError as e:
        error(str(e))
        raise typer.Exit(1)
