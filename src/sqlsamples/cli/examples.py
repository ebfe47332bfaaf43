"""
CLI: ``sqlsamples examples`` -- list, show and run sample queries.
"""

from __future__ import annotations

import typer

from sqlsamples.cli.utils import (
    DatabaseOption,
    DbTypeOption,
    JsonOption,
    console,
    err_console,
    fail_if_error,
    load_settings,
    output_result,
    print_json,
    print_rows,
    session,
)

app = typer.Typer(no_args_is_help=True)


@app.command("list")
def list_(
    topic: str | None = typer.Option(None, "--topic", help="Only this topic"),
    database: str | None = DatabaseOption,
    db_type: str | None = DbTypeOption,
    json_out: bool = JsonOption,
) -> None:
    """List registered examples and whether they run on the engine."""
    from sqlsamples.ops.samples import list_examples

    with session(database, db_type) as ctx:
        result = list_examples(ctx, topic)
    output_result(result, as_json=json_out, title="Examples")


@app.command()
def show(
    key: str = typer.Argument(..., help="Example key, e.g. recursive.number_series"),
    dialect: str | None = typer.Option(None, "--dialect", help="Render for this engine"),
) -> None:
    """Print an example's SQL for a dialect without running it."""
    from sqlsamples.core.dialect import get_dialect
    from sqlsamples.core.errors import SampleError
    from sqlsamples.examples import get_registry

    settings = load_settings(db_type=dialect)
    try:
        sql = get_registry().get(key).render(get_dialect(settings.db_type))
    except SampleError as exc:
        err_console.print(f"[bold red]Error[/bold red]: {exc.message}")
        raise typer.Exit(code=1) from exc
    typer.echo(sql)


@app.command()
def run(
    key: str = typer.Argument(..., help="Example key, e.g. recursive.number_series"),
    no_prepare: bool = typer.Option(False, "--no-prepare", help="Skip the topic's setup step"),
    database: str | None = DatabaseOption,
    db_type: str | None = DbTypeOption,
    json_out: bool = JsonOption,
) -> None:
    """Run one example and print its rows."""
    from sqlsamples.ops.samples import run_example

    with session(database, db_type) as ctx:
        result = run_example(ctx, key, prepare=not no_prepare)
    fail_if_error(result)
    if json_out:
        print_json(result)
        return
    run = result.data
    print_rows(run.columns, run.rows, title=run.key)
    console.print(f"[dim]{run.statements} statements, {run.elapsed_ms:.1f} ms[/dim]")
