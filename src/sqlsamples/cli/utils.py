"""
CLI utility helpers: settings, adapter sessions and output formatting.
"""

from __future__ import annotations

import json
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import asdict
from pathlib import Path
from typing import Any

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from sqlsamples.core.adapters import get_adapter
from sqlsamples.core.errors import SampleError
from sqlsamples.core.logging import configure_logging
from sqlsamples.core.settings import SamplesSettings
from sqlsamples.ops.context import OperationContext
from sqlsamples.ops.result import OperationResult

console = Console()
err_console = Console(stderr=True)

# Shared option declarations
DatabaseOption = typer.Option(None, "--database", "-d", help="SQLite path or database name")
DbTypeOption = typer.Option(None, "--db-type", "-t", help="sqlite, postgresql or db2")
JsonOption = typer.Option(False, "--json", help="JSON output")


# ── Settings / connection ────────────────────────────────────────────────


def load_settings(database: str | None = None, db_type: str | None = None) -> SamplesSettings:
    """``SAMPLES_*`` settings with command-line overrides applied."""
    overrides = {
        key: value
        for key, value in (("database", database), ("db_type", db_type))
        if value is not None
    }
    try:
        settings = SamplesSettings(**overrides)
    except ValidationError as exc:
        err_console.print(f"[bold red]Invalid settings[/bold red]: {exc.errors()[0]['msg']}")
        raise typer.Exit(code=2) from exc
    configure_logging(level=settings.log_level, json_format=settings.json_logs)
    return settings


@contextmanager
def session(
    database: str | None = None,
    db_type: str | None = None,
    *,
    dry_run: bool = False,
) -> Iterator[OperationContext]:
    """Connected ``OperationContext`` for one command; disconnects on exit."""
    settings = load_settings(database, db_type)
    if settings.db_type == "sqlite" and settings.database != ":memory:" and not settings.database.startswith("file:"):
        Path(settings.database).expanduser().parent.mkdir(parents=True, exist_ok=True)

    try:
        adapter = get_adapter(settings.db_type, **settings.adapter_kwargs())
        adapter.connect()
    except SampleError as exc:
        err_console.print(f"[bold red]Connection failed[/bold red]: {exc.message}")
        raise typer.Exit(code=1) from exc

    try:
        yield OperationContext(adapter=adapter, caller="cli", dry_run=dry_run)
    finally:
        adapter.disconnect()


# ── Output helpers ───────────────────────────────────────────────────────


def _to_dict(obj: Any) -> dict[str, Any]:
    """Convert dataclass / dict to plain dict."""
    if hasattr(obj, "__dataclass_fields__"):
        return asdict(obj)
    if isinstance(obj, dict):
        return obj
    return {"value": str(obj)}


def fail_if_error(result: OperationResult) -> None:
    if not result.success:
        err = result.error
        msg = err.message if err else "Unknown error"
        code = err.code if err else "ERROR"
        err_console.print(f"[bold red]Error[/bold red] ({code}): {msg}")
        raise typer.Exit(code=1)


def print_warnings(result: OperationResult) -> None:
    for warning in result.warnings:
        err_console.print(f"[yellow]warning[/yellow]: {warning}")


def output_result(
    result: OperationResult,
    *,
    as_json: bool = False,
    title: str = "",
) -> None:
    """Render an ``OperationResult`` to the terminal."""
    fail_if_error(result)
    data = result.data

    if as_json:
        print_json(result)
        return

    print_warnings(result)
    if isinstance(data, list):
        if not data:
            console.print("[dim]No items.[/dim]")
            return
        print_table(data, title=title)
    else:
        print_dict(_to_dict(data), title=title)


def print_json(result: OperationResult) -> None:
    console.print_json(json.dumps(result.to_dict(), default=str))


def print_rows(columns: list[str], rows: list[list[Any]], *, title: str = "") -> None:
    """Render query output as a Rich table."""
    table = Table(title=title or None, show_lines=False, pad_edge=False)
    for col in columns:
        table.add_column(col, overflow="fold")
    for row in rows:
        table.add_row(*("" if v is None else str(v) for v in row))
    console.print(table)
    console.print(f"[dim]{len(rows)} rows[/dim]")


def print_table(items: list, *, title: str = "") -> None:
    """Render a list of dataclasses/dicts as a Rich table."""
    first = _to_dict(items[0])
    table = Table(title=title or None, show_lines=False, pad_edge=False)
    for col in first:
        table.add_column(col, overflow="fold")
    for item in items:
        d = _to_dict(item)
        table.add_row(*(str(v) for v in d.values()))
    console.print(table)


def print_dict(data: dict[str, Any], *, title: str = "") -> None:
    """Render a single dict as key-value pairs."""
    if title:
        console.print(f"[bold]{title}[/bold]")
    for k, v in data.items():
        console.print(f"  [cyan]{k}[/cyan]: {v}")
