"""
Sample lifecycle operations.

Thin wrappers around :mod:`sqlsamples.schema`, :mod:`sqlsamples.seed`,
:mod:`sqlsamples.examples`, :mod:`sqlsamples.integrity` and
:mod:`sqlsamples.scripts`.  Each function takes an
:class:`OperationContext`, returns an :class:`OperationResult` and turns
any :class:`SampleError` into a failed result instead of raising.

Usage::

    from sqlsamples.core.adapters import SQLiteAdapter
    from sqlsamples.ops import OperationContext
    from sqlsamples.ops.samples import run_cycle

    with SQLiteAdapter(":memory:") as adapter:
        result = run_cycle(OperationContext(adapter=adapter))
        assert result.success and result.data.passed
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from sqlsamples.core.dialect import get_dialect
from sqlsamples.core.errors import SampleError, UnsupportedDialectError
from sqlsamples.core.logging import get_logger
from sqlsamples.examples.base import SqlExample, get_registry
from sqlsamples.examples.base import run_example as _execute_example
from sqlsamples.integrity import IntegrityRunner, cleanup_check, data_checks
from sqlsamples.ops.context import OperationContext
from sqlsamples.ops.responses import (
    CatalogResult,
    CheckOutcome,
    CleanupResult,
    CycleResult,
    ExampleRun,
    ExampleSummary,
    ExportResult,
    IntegrityReport,
    ScriptResult,
    SeedResult,
    SetupResult,
    TopicRun,
)
from sqlsamples.ops.result import OperationResult, start_timer
from sqlsamples.schema import ddl
from sqlsamples.schema.tables import TableGroup, table_names
from sqlsamples.scripts import export_scripts, run_script
from sqlsamples.seed.loader import seed_all

logger = get_logger(__name__)


def setup_schema(
    ctx: OperationContext,
    groups: Iterable[TableGroup | str] | None = None,
) -> OperationResult[SetupResult]:
    """Create (or re-create) the sample tables, views and indexes."""
    timer = start_timer()
    selected = [TableGroup(g) for g in (groups or ddl.DEFAULT_GROUPS)]
    names = [g.value for g in selected]

    if ctx.dry_run:
        return OperationResult.ok(
            SetupResult(tables=table_names(selected), groups=names, dry_run=True),
            elapsed_ms=timer.elapsed_ms,
        )

    try:
        created = ddl.setup_schema(ctx.adapter, selected)
    except SampleError as exc:
        logger.error("op.failed", op="setup_schema", error=exc.message)
        return OperationResult.from_error(exc, elapsed_ms=timer.elapsed_ms)
    return OperationResult.ok(
        SetupResult(tables=created, groups=names), elapsed_ms=timer.elapsed_ms
    )


def seed_data(ctx: OperationContext) -> OperationResult[SeedResult]:
    """Replace the core tables' contents with the seed rows."""
    timer = start_timer()
    try:
        counts = seed_all(ctx.adapter)
    except SampleError as exc:
        logger.error("op.failed", op="seed_data", error=exc.message)
        return OperationResult.from_error(exc, elapsed_ms=timer.elapsed_ms)
    return OperationResult.ok(SeedResult(counts=counts), elapsed_ms=timer.elapsed_ms)


def _summary(example: SqlExample, ctx: OperationContext) -> ExampleSummary:
    return ExampleSummary(
        key=example.key,
        topic=example.topic,
        name=example.name,
        title=example.title,
        dialects=sorted(example.dialects) if example.dialects else None,
        mutates=example.mutates,
        available=example.supports(ctx.dialect),
    )


def list_examples(
    ctx: OperationContext,
    topic: str | None = None,
) -> OperationResult[list[ExampleSummary]]:
    timer = start_timer()
    registry = get_registry()
    try:
        examples = registry.by_topic(topic) if topic else list(registry)
    except SampleError as exc:
        return OperationResult.from_error(exc, elapsed_ms=timer.elapsed_ms)
    return OperationResult.ok(
        [_summary(ex, ctx) for ex in examples], elapsed_ms=timer.elapsed_ms
    )


def _run(ctx: OperationContext, example: SqlExample) -> ExampleRun:
    result = _execute_example(ctx.adapter, example)
    return ExampleRun(
        key=result.example,
        columns=result.columns,
        rows=[list(row) for row in result.rows],
        row_count=result.row_count,
        statements=result.statements,
        elapsed_ms=result.elapsed_ms,
    )


def run_example(
    ctx: OperationContext,
    key: str,
    prepare: bool = True,
) -> OperationResult[ExampleRun]:
    """Run one example by ``topic.name`` key.

    With ``prepare`` the topic's setup step runs first (temporal history,
    documents, removal of earlier tuning objects).
    """
    timer = start_timer()
    registry = get_registry()
    try:
        example = registry.get(key)
        if not example.supports(ctx.dialect):
            raise UnsupportedDialectError(
                f"Example '{key}' is not available for {ctx.dialect.name}"
            )
        topic = registry.topic(example.topic)
        if prepare and topic.prepare is not None:
            topic.prepare(ctx.adapter)
        run = _run(ctx, example)
    except SampleError as exc:
        ctx.adapter.rollback()
        logger.error("op.failed", op="run_example", example=key, error=exc.message)
        return OperationResult.from_error(exc, elapsed_ms=timer.elapsed_ms)
    return OperationResult.ok(run, elapsed_ms=timer.elapsed_ms)


def run_topic(
    ctx: OperationContext,
    topic: str,
    prepare: bool = True,
) -> OperationResult[TopicRun]:
    """Run every example of a topic that the engine supports.

    A failing example is rolled back and recorded; the rest still run.
    """
    timer = start_timer()
    registry = get_registry()
    try:
        found = registry.topic(topic)
        if prepare and found.prepare is not None:
            found.prepare(ctx.adapter)
    except SampleError as exc:
        return OperationResult.from_error(exc, elapsed_ms=timer.elapsed_ms)

    outcome = TopicRun(topic=topic)
    for example in registry.by_topic(topic):
        if not example.supports(ctx.dialect):
            outcome.skipped.append(example.key)
            continue
        try:
            outcome.runs.append(_run(ctx, example))
        except SampleError as exc:
            ctx.adapter.rollback()
            outcome.failed[example.key] = exc.message
            logger.warning("example.failed", example=example.key, error=exc.message)

    warnings = [f"{key}: {message}" for key, message in outcome.failed.items()]
    return OperationResult.ok(outcome, warnings=warnings, elapsed_ms=timer.elapsed_ms)


def check_integrity(
    ctx: OperationContext,
    after_cleanup: bool = False,
) -> OperationResult[IntegrityReport]:
    """Run the data checks, or the empty-catalog check with ``after_cleanup``."""
    timer = start_timer()
    runner = IntegrityRunner(ctx.adapter)
    for check in [cleanup_check()] if after_cleanup else data_checks():
        runner.add(check)

    try:
        runner.run_all()
    except SampleError as exc:
        return OperationResult.from_error(exc, elapsed_ms=timer.elapsed_ms)

    report = IntegrityReport(
        checks=[
            CheckOutcome(
                name=name,
                status=result.status.value,
                message=result.message,
                actual=result.actual_value,
                expected=result.expected_value,
            )
            for name, result in runner.results.items()
        ]
    )
    warnings = [c.message for c in report.checks if c.status == "WARN"]
    return OperationResult.ok(report, warnings=warnings, elapsed_ms=timer.elapsed_ms)


def cleanup(ctx: OperationContext) -> OperationResult[CleanupResult]:
    """Drop every sample object; objects already gone are reported, not errors."""
    timer = start_timer()
    steps = ddl.cleanup_steps(ctx.dialect)

    if ctx.dry_run:
        return OperationResult.ok(
            CleanupResult(dropped=[s.name for s in steps], dry_run=True),
            elapsed_ms=timer.elapsed_ms,
        )

    try:
        report = ddl.drop_all(ctx.adapter, steps)
        remaining = ddl.catalog(ctx.adapter).total
    except SampleError as exc:
        logger.error("op.failed", op="cleanup", error=exc.message)
        return OperationResult.from_error(exc, elapsed_ms=timer.elapsed_ms)

    warnings = [f"{remaining} sample objects remain"] if remaining else []
    return OperationResult.ok(
        CleanupResult(dropped=report.dropped, missing=report.missing, remaining=remaining),
        warnings=warnings,
        elapsed_ms=timer.elapsed_ms,
    )


def show_catalog(ctx: OperationContext) -> OperationResult[CatalogResult]:
    timer = start_timer()
    try:
        present = ddl.catalog(ctx.adapter)
    except SampleError as exc:
        return OperationResult.from_error(exc, elapsed_ms=timer.elapsed_ms)
    return OperationResult.ok(
        CatalogResult(tables=present.tables, views=present.views, indexes=present.indexes),
        elapsed_ms=timer.elapsed_ms,
    )


def export(
    ctx: OperationContext,
    out_dir: str | Path,
    dialect: str | None = None,
) -> OperationResult[ExportResult]:
    """Write the script set for ``dialect`` (default: the adapter's engine)."""
    timer = start_timer()
    try:
        target = get_dialect(dialect) if dialect else ctx.dialect
    except ValueError as exc:
        return OperationResult.fail("UNSUPPORTED", str(exc), elapsed_ms=timer.elapsed_ms)

    paths = export_scripts(target, out_dir)
    return OperationResult.ok(
        ExportResult(
            dialect=target.name,
            directory=str(Path(out_dir)),
            files=[p.name for p in paths],
        ),
        elapsed_ms=timer.elapsed_ms,
    )


def execute_script(
    ctx: OperationContext,
    path: str | Path,
    continue_on_error: bool = False,
) -> OperationResult[ScriptResult]:
    """Run one SQL file against the adapter."""
    timer = start_timer()
    script = Path(path)
    if not script.is_file():
        return OperationResult.fail(
            "NOT_FOUND", f"Script not found: {script}", elapsed_ms=timer.elapsed_ms
        )
    try:
        report = run_script(ctx.adapter, script.read_text(encoding="utf-8"), continue_on_error)
    except SampleError as exc:
        return OperationResult.from_error(exc, elapsed_ms=timer.elapsed_ms)
    data = ScriptResult(executed=report.executed, failures=report.to_dict()["failures"])
    warnings = [f"statement {f['index']}: {f['error']}" for f in data.failures]
    return OperationResult.ok(data, warnings=warnings, elapsed_ms=timer.elapsed_ms)


def run_cycle(ctx: OperationContext) -> OperationResult[CycleResult]:
    """Setup, seed, check, run every topic, clean up and verify the cleanup.

    The cycle stops at the first step that fails outright; example failures
    and integrity failures are collected and reported in the summary.
    """
    timer = start_timer()
    summary = CycleResult()

    setup = setup_schema(ctx)
    if not setup.success:
        return setup  # type: ignore[return-value]
    summary.tables_created = len(setup.data.tables)

    seeded = seed_data(ctx)
    if not seeded.success:
        return seeded  # type: ignore[return-value]
    summary.rows_seeded = seeded.data.total

    checked = check_integrity(ctx)
    if not checked.success:
        return checked  # type: ignore[return-value]
    summary.integrity_failures.extend(checked.data.failures)

    for topic in get_registry().topics():
        ran = run_topic(ctx, topic.name)
        if not ran.success:
            return ran  # type: ignore[return-value]
        summary.examples_run += len(ran.data.runs)
        summary.examples_skipped += len(ran.data.skipped)
        summary.examples_failed.update(ran.data.failed)

    cleaned = cleanup(ctx)
    if not cleaned.success:
        return cleaned  # type: ignore[return-value]

    verified = check_integrity(ctx, after_cleanup=True)
    if not verified.success:
        return verified  # type: ignore[return-value]
    summary.integrity_failures.extend(verified.data.failures)
    summary.objects_remaining = cleaned.data.remaining

    logger.info(
        "cycle.done",
        examples=summary.examples_run,
        failed=len(summary.examples_failed),
        passed=summary.passed,
    )
    return OperationResult.ok(summary, elapsed_ms=timer.elapsed_ms)


__all__ = [
    "check_integrity",
    "cleanup",
    "execute_script",
    "export",
    "list_examples",
    "run_cycle",
    "run_example",
    "run_topic",
    "seed_data",
    "setup_schema",
    "show_catalog",
]
