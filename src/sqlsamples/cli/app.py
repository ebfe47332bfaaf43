"""
Root Typer application for the sqlsamples CLI.

Every command opens one adapter session from ``SAMPLES_*`` settings
(overridable with ``--database`` / ``--db-type``), calls one operation
from :mod:`sqlsamples.ops.samples` and renders the result.  Failed
operations exit with status 1.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version
from pathlib import Path

import typer
from typer import Typer

from sqlsamples.cli.utils import (
    DatabaseOption,
    DbTypeOption,
    JsonOption,
    console,
    fail_if_error,
    load_settings,
    output_result,
    print_json,
    print_table,
    print_warnings,
    session,
)

app = Typer(
    name="sqlsamples",
    help="sqlsamples: runnable SQL samples for SQLite, PostgreSQL and DB2.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        try:
            v = pkg_version("sqlsamples")
        except PackageNotFoundError:
            from sqlsamples import __version__ as v
        typer.echo(f"sqlsamples {v}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """sqlsamples CLI: set up, seed, run, check, export and clean up."""


from sqlsamples.cli.examples import app as examples_app  # noqa: E402

app.add_typer(examples_app, name="examples", help="List, show and run examples.")


# ── Schema and data ──────────────────────────────────────────────────────


@app.command()
def setup(
    group: list[str] | None = typer.Option(
        None, "--group", "-g", help="core, temporal or semistructured (repeatable)"
    ),
    database: str | None = DatabaseOption,
    db_type: str | None = DbTypeOption,
    dry_run: bool = typer.Option(False, "--dry-run", help="Preview without changes"),
    json_out: bool = JsonOption,
) -> None:
    """Create the sample schema, replacing any existing copy."""
    from sqlsamples.ops.samples import setup_schema

    with session(database, db_type, dry_run=dry_run) as ctx:
        result = setup_schema(ctx, group or None)
    output_result(result, as_json=json_out, title="Schema Setup")


@app.command()
def seed(
    database: str | None = DatabaseOption,
    db_type: str | None = DbTypeOption,
    json_out: bool = JsonOption,
) -> None:
    """Load the seed rows into the core tables."""
    from sqlsamples.ops.samples import seed_data

    with session(database, db_type) as ctx:
        result = seed_data(ctx)
    fail_if_error(result)
    if json_out:
        print_json(result)
        return
    rows = [{"table": t, "rows": n} for t, n in result.data.counts.items()]
    print_table(rows, title=f"Seeded {result.data.total} rows")


@app.command()
def topic(
    name: str = typer.Argument(..., help="Topic name, e.g. windows"),
    database: str | None = DatabaseOption,
    db_type: str | None = DbTypeOption,
    json_out: bool = JsonOption,
) -> None:
    """Run every example of a topic and report row counts."""
    from sqlsamples.ops.samples import run_topic

    with session(database, db_type) as ctx:
        result = run_topic(ctx, name)
    fail_if_error(result)
    if json_out:
        print_json(result)
        return
    ran = result.data
    rows = [{"example": r.key, "rows": r.row_count, "ms": f"{r.elapsed_ms:.1f}"} for r in ran.runs]
    rows += [{"example": key, "rows": "skipped", "ms": ""} for key in ran.skipped]
    rows += [{"example": key, "rows": "FAILED", "ms": ""} for key in ran.failed]
    print_table(rows, title=f"Topic {ran.topic}")
    print_warnings(result)
    if ran.failed:
        raise typer.Exit(code=1)


# ── Checks and cleanup ───────────────────────────────────────────────────


@app.command()
def check(
    after_cleanup: bool = typer.Option(
        False, "--after-cleanup", help="Verify that no sample objects remain"
    ),
    database: str | None = DatabaseOption,
    db_type: str | None = DbTypeOption,
    json_out: bool = JsonOption,
) -> None:
    """Run the integrity checks; exits 1 when any check fails."""
    from sqlsamples.ops.samples import check_integrity

    with session(database, db_type) as ctx:
        result = check_integrity(ctx, after_cleanup=after_cleanup)
    fail_if_error(result)
    if json_out:
        print_json(result)
    else:
        rows = [{"check": c.name, "status": c.status, "message": c.message} for c in result.data.checks]
        print_table(rows, title="Integrity")
    if not result.data.passed:
        raise typer.Exit(code=1)


@app.command()
def cleanup(
    database: str | None = DatabaseOption,
    db_type: str | None = DbTypeOption,
    dry_run: bool = typer.Option(False, "--dry-run", help="List what would be dropped"),
    json_out: bool = JsonOption,
) -> None:
    """Drop every sample table, view and index."""
    from sqlsamples.ops.samples import cleanup as cleanup_op

    with session(database, db_type, dry_run=dry_run) as ctx:
        result = cleanup_op(ctx)
    output_result(result, as_json=json_out, title="Cleanup")


@app.command()
def catalog(
    database: str | None = DatabaseOption,
    db_type: str | None = DbTypeOption,
    json_out: bool = JsonOption,
) -> None:
    """Show which sample objects exist."""
    from sqlsamples.ops.samples import show_catalog

    with session(database, db_type) as ctx:
        result = show_catalog(ctx)
    output_result(result, as_json=json_out, title="Catalog")


# ── Scripts ──────────────────────────────────────────────────────────────


@app.command()
def export(
    out_dir: Path = typer.Argument(..., help="Directory to write the .sql files into"),
    dialect: str | None = typer.Option(None, "--dialect", help="Target engine"),
    json_out: bool = JsonOption,
) -> None:
    """Write setup, seed, topic and cleanup scripts for one engine."""
    from sqlsamples.core.adapters import get_adapter
    from sqlsamples.ops.context import OperationContext
    from sqlsamples.ops.samples import export as export_op

    settings = load_settings(db_type=dialect)
    # Rendering only; the adapter is never connected
    adapter = get_adapter(settings.db_type, **settings.adapter_kwargs())
    result = export_op(OperationContext(adapter=adapter, caller="cli"), out_dir)
    output_result(result, as_json=json_out, title="Export")


@app.command()
def script(
    path: Path = typer.Argument(..., help="SQL file to run"),
    continue_on_error: bool = typer.Option(
        False, "--continue-on-error", help="Record failing statements and keep going"
    ),
    database: str | None = DatabaseOption,
    db_type: str | None = DbTypeOption,
    json_out: bool = JsonOption,
) -> None:
    """Run a SQL script file in one session."""
    from sqlsamples.ops.samples import execute_script

    with session(database, db_type) as ctx:
        result = execute_script(ctx, path, continue_on_error)
    output_result(result, as_json=json_out, title="Script")


@app.command()
def cycle(
    database: str | None = DatabaseOption,
    db_type: str | None = DbTypeOption,
    json_out: bool = JsonOption,
) -> None:
    """Setup, seed, check, run every example, clean up and verify."""
    from sqlsamples.ops.samples import run_cycle

    with session(database, db_type) as ctx:
        result = run_cycle(ctx)
    output_result(result, as_json=json_out, title="Cycle")
    if not result.data.passed:
        console.print("[bold red]Cycle finished with failures[/bold red]")
        raise typer.Exit(code=1)
