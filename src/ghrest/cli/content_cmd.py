"""Content subcommand: print or save a file from a repository."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import typer

from ghrest.api import contents
from ghrest.cli._shared import (
    FORMAT_OPTION,
    OWNER_OPTION,
    REPO_OPTION,
    URI_OPTION,
    get_session,
    handle_errors,
    repository_source,
)
from ghrest.core.rest import MediaType
from ghrest.utils.output import output, output_table, success


def content_command(
    ctx: typer.Context,
    path: str = typer.Argument("", help="Path inside the repository"),
    owner: Optional[str] = OWNER_OPTION,
    repo: Optional[str] = REPO_OPTION,
    uri: Optional[str] = URI_OPTION,
    ref: Optional[str] = typer.Option(None, "--ref", help="Branch, tag or commit"),
    raw: bool = typer.Option(False, "--raw", help="Print the file's bytes"),
    out: Optional[Path] = typer.Option(None, "--out", help="Save the file here"),
    fmt: Optional[str] = FORMAT_OPTION,
) -> None:
    """Show a file or directory listing from a repository."""
    with handle_errors():
        source = repository_source(owner, repo, uri)
        result = contents.get_content(
            get_session(ctx),
            path,
            source,
            media_type=MediaType.RAW if raw else MediaType.OBJECT,
            ref=ref,
            result_as_file=out,
        )

    if isinstance(result, Path):
        success(f"Saved {path} to {result}")
    elif isinstance(result, bytes):
        sys.stdout.buffer.write(result)
        sys.stdout.flush()
    elif isinstance(result, list):
        output_table(result, ["type", "name", "size"], fmt=fmt)
    else:
        output(result, fmt=fmt)
