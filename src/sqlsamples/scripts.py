"""SQL script files: run one against a database, or export the full set.

An exported directory for one dialect looks like::

    01_create_sample_tables.sql    every table, view and index
    02_load_sample_data.sql        core seed rows
    10_recursive.sql ...           one file per topic, examples in order
    cleanup_all.sql                drops everything the other files create

The topic files are numbered after the two setup files.  The temporal and
semi-structured topic files load their own rows first so each file runs
on its own after setup.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from sqlsamples.core.adapters.base import DatabaseAdapter
from sqlsamples.core.dialect import Dialect
from sqlsamples.core.errors import DatabaseError
from sqlsamples.core.logging import get_logger
from sqlsamples.core.statements import split_statements
from sqlsamples.examples.base import Topic, get_registry
from sqlsamples.schema.ddl import render_cleanup_script, render_setup_script
from sqlsamples.seed.data import DOCUMENT_ROWS, SeedTable
from sqlsamples.seed.loader import insert_statements, render_seed_script
from sqlsamples.temporal.scenario import scenario_rows

logger = get_logger(__name__)

SETUP_SCRIPT = "01_create_sample_tables.sql"
SEED_SCRIPT = "02_load_sample_data.sql"
CLEANUP_SCRIPT = "cleanup_all.sql"

# Rows a topic file loads before its examples
_TOPIC_DATA: dict[str, Callable[[], Sequence[SeedTable]]] = {
    "temporal": scenario_rows,
    "semistructured": lambda: DOCUMENT_ROWS,
}


@dataclass
class StatementFailure:
    index: int
    statement: str
    error: str


@dataclass
class ScriptReport:
    """What happened when a script ran."""

    executed: int = 0
    failures: list[StatementFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    def to_dict(self) -> dict:
        return {
            "executed": self.executed,
            "failed": len(self.failures),
            "failures": [
                {"index": f.index, "statement": f.statement[:200], "error": f.error}
                for f in self.failures
            ],
        }


def _run_one(adapter: DatabaseAdapter, statement: str) -> None:
    keyword = statement.strip().upper()
    if keyword in ("COMMIT", "COMMIT WORK"):
        adapter.commit()
    elif keyword in ("ROLLBACK", "ROLLBACK WORK"):
        adapter.rollback()
    else:
        adapter.execute(statement)


def run_script(
    adapter: DatabaseAdapter,
    sql: str,
    continue_on_error: bool = False,
) -> ScriptReport:
    """Execute a script top to bottom in the adapter's session.

    Parameters
    ----------
    adapter
        Connected adapter.
    sql
        Script text; split with :func:`split_statements`.
    continue_on_error
        When true, each statement is committed on its own and a failing
        statement is rolled back, recorded and skipped.  When false the
        script runs as one unit: the first failure rolls back and is raised.

    Returns
    -------
    ScriptReport
        Statement counts and any recorded failures.
    """
    report = ScriptReport()
    statements = split_statements(sql)

    if not continue_on_error:
        try:
            for statement in statements:
                _run_one(adapter, statement)
                report.executed += 1
        except DatabaseError:
            adapter.rollback()
            raise
        adapter.commit()
        logger.info("script.run", statements=report.executed)
        return report

    for index, statement in enumerate(statements, start=1):
        try:
            _run_one(adapter, statement)
        except DatabaseError as exc:
            adapter.rollback()
            report.failures.append(StatementFailure(index, statement, exc.message))
            logger.warning("script.statement_failed", index=index, error=exc.message)
            continue
        adapter.commit()
        report.executed += 1

    logger.info("script.run", statements=report.executed, failed=len(report.failures))
    return report


def topic_filename(topic: Topic) -> str:
    return f"{topic.order + 9:02d}_{topic.name}.sql"


def render_topic_script(dialect: Dialect, topic: Topic) -> str:
    """Every example of ``topic`` that runs on ``dialect``, in registration order."""
    parts = [
        "-- =====================================================\n"
        f"-- {topic.title} ({dialect.name})\n"
        "-- =====================================================\n"
    ]

    data = _TOPIC_DATA.get(topic.name)
    if data is not None:
        tables = list(data())
        parts.append("\n-- Sample rows\n")
        parts.extend(f"DELETE FROM {table.name};\n" for table in reversed(tables))
        for table in tables:
            parts.extend(f"{stmt};\n" for stmt in insert_statements(table))
        parts.append("COMMIT;\n")

    for example in get_registry().by_topic(topic.name):
        if not example.supports(dialect):
            parts.append(f"\n-- {example.name}: not available on {dialect.name}\n")
            continue
        parts.append("\n-- -----------------------------------------------------\n")
        parts.append(f"-- {example.name}: {example.title}\n")
        parts.append("-- -----------------------------------------------------\n")
        parts.extend(f"{stmt};\n\n" for stmt in split_statements(example.render(dialect)))
    return "".join(parts)


def export_scripts(dialect: Dialect, out_dir: str | Path) -> list[Path]:
    """Write the full script set for ``dialect`` into ``out_dir``.

    Returns the written paths in run order, cleanup last.
    """
    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)

    files: list[tuple[str, str]] = [
        (SETUP_SCRIPT, render_setup_script(dialect)),
        (SEED_SCRIPT, render_seed_script(dialect)),
    ]
    for topic in get_registry().topics():
        files.append((topic_filename(topic), render_topic_script(dialect, topic)))
    files.append((CLEANUP_SCRIPT, render_cleanup_script(dialect)))

    written = []
    for name, text in files:
        path = out / name
        path.write_text(text, encoding="utf-8")
        written.append(path)

    logger.info("scripts.exported", dialect=dialect.name, files=len(written), path=str(out))
    return written


__all__ = [
    "CLEANUP_SCRIPT",
    "SEED_SCRIPT",
    "SETUP_SCRIPT",
    "ScriptReport",
    "StatementFailure",
    "export_scripts",
    "render_topic_script",
    "run_script",
    "split_statements",
    "topic_filename",
]
