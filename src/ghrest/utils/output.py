"""Console output for the CLI: JSON when piped, rich text on a terminal."""

from __future__ import annotations

import json
import sys
from typing import Any

from pydantic import BaseModel
from rich.console import Console
from rich.markup import escape
from rich.table import Table

console = Console()
error_console = Console(stderr=True)


def is_piped() -> bool:
    return not sys.stdout.isatty()


def _resolve_format(fmt: str | None) -> str:
    if fmt is None:
        return "json" if is_piped() else "text"
    return fmt


def to_jsonable(data: Any) -> Any:
    """Convert models (and lists of them) into plain JSON-ready structures."""
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json")
    if isinstance(data, list):
        return [to_jsonable(item) for item in data]
    if isinstance(data, dict):
        return {k: to_jsonable(v) for k, v in data.items()}
    return data


def output(data: Any, fmt: str | None = None) -> None:
    """Print one value: a model, dict, list or scalar."""
    fmt = _resolve_format(fmt)
    data = to_jsonable(data)

    if fmt == "json":
        if isinstance(data, (dict, list)):
            print(json.dumps(data, indent=2, default=str))
        else:
            print(json.dumps({"value": data}, default=str))
    elif isinstance(data, (dict, list)):
        console.print_json(json.dumps(data, default=str))
    else:
        console.print(str(data))


def output_table(rows: list[Any], columns: list[str], fmt: str | None = None) -> None:
    """Print records as a table; JSON output keeps every field."""
    fmt = _resolve_format(fmt)
    records = to_jsonable(rows)

    if fmt == "json":
        print(json.dumps(records, indent=2, default=str))
        return

    table = Table()
    for col in columns:
        table.add_column(col.replace("_", " ").title())
    for record in records:
        table.add_row(*[_cell(record.get(col)) for col in columns])
    console.print(table)


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, list):
        return ", ".join(_cell(v.get("name", v) if isinstance(v, dict) else v) for v in value)
    return str(value)


def error(msg: str) -> None:
    error_console.print(f"[red]Error:[/red] {escape(msg)}", highlight=False)


def success(msg: str) -> None:
    console.print(f"[green]{msg}[/green]")


def info(msg: str) -> None:
    console.print(f"[dim]{msg}[/dim]")
