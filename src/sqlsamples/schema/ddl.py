"""DDL generation, setup and cleanup for the sample schema.

Table DDL is compiled from the SQLAlchemy metadata in
:mod:`sqlsamples.schema.tables` with the target engine's SQLAlchemy dialect;
views come from :mod:`sqlsamples.schema.views`.  Execution always goes
through a :class:`~sqlsamples.core.adapters.DatabaseAdapter` in one session.

Setup is repeatable: objects that already exist are dropped first, so
running it twice leaves the same catalog.  Cleanup tolerates objects that
are already gone and keeps going.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from sqlalchemy.schema import CreateIndex, CreateTable

from sqlsamples.core.adapters.base import DatabaseAdapter
from sqlsamples.core.dialect import Dialect
from sqlsamples.core.errors import ObjectNotFoundError
from sqlsamples.core.logging import get_logger
from sqlsamples.schema.tables import (
    ALL_GROUPS,
    SUMMARY_TABLES,
    TUNING_INDEXES,
    TableGroup,
    index_names,
    table_names,
    tables_for,
)
from sqlsamples.schema.views import create_view_sql, view_names

logger = get_logger(__name__)

DEFAULT_GROUPS: tuple[TableGroup, ...] = (TableGroup.CORE,)


@dataclass(frozen=True)
class DropStep:
    """One cleanup statement and the object it removes."""

    kind: str  # "table", "view" or "index"
    name: str
    sql: str


@dataclass
class Catalog:
    """Sample objects currently present in the target schema."""

    tables: list[str] = field(default_factory=list)
    views: list[str] = field(default_factory=list)
    indexes: list[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.tables) + len(self.views) + len(self.indexes)

    @property
    def is_empty(self) -> bool:
        return self.total == 0

    def to_dict(self) -> dict[str, list[str]]:
        return {"tables": self.tables, "views": self.views, "indexes": self.indexes}


@dataclass
class CleanupReport:
    dropped: list[str] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, list[str]]:
        return {"dropped": self.dropped, "missing": self.missing}


def _groups(groups: Iterable[TableGroup | str] | None) -> list[TableGroup]:
    return [TableGroup(g) for g in (groups or DEFAULT_GROUPS)]


def _compile(element, dialect: Dialect) -> str:
    return str(element.compile(dialect=dialect.sa_dialect())).strip()


# =============================================================================
# Statement generation
# =============================================================================


def create_statements(
    dialect: Dialect,
    groups: Iterable[TableGroup | str] | None = None,
) -> list[str]:
    """CREATE statements for the given table groups.

    Parameters
    ----------
    dialect
        Target engine dialect; its SQLAlchemy dialect compiles the DDL.
    groups
        Table groups to create. Defaults to ``CORE``. Views are included
        whenever ``CORE`` is.

    Returns
    -------
    list[str]
        Statements without trailing semicolons, parents before children.
    """
    selected = _groups(groups)
    statements: list[str] = []
    for table in tables_for(selected):
        statements.append(_compile(CreateTable(table), dialect))
        for index in sorted(table.indexes, key=lambda i: i.name):
            statements.append(_compile(CreateIndex(index), dialect))
    if TableGroup.CORE in selected:
        statements.extend(create_view_sql(name) for name in view_names())
    return statements


def drop_steps(
    dialect: Dialect,
    groups: Iterable[TableGroup | str] | None = None,
    if_exists: bool = False,
) -> list[DropStep]:
    """Drops for the given groups: views first, then children before parents."""
    selected = _groups(groups)
    steps: list[DropStep] = []
    if TableGroup.CORE in selected:
        steps.extend(
            DropStep("view", name, dialect.drop_view(name, if_exists)) for name in view_names()
        )
    for name in reversed(table_names(selected)):
        steps.append(DropStep("table", name, dialect.drop_table(name, if_exists)))
    return steps


def drop_statements(
    dialect: Dialect,
    groups: Iterable[TableGroup | str] | None = None,
    if_exists: bool = False,
) -> list[str]:
    return [step.sql for step in drop_steps(dialect, groups, if_exists)]


def cleanup_steps(dialect: Dialect, if_exists: bool = False) -> list[DropStep]:
    """Every sample object, in the order a full cleanup removes them.

    Views, then the summary table built by the tuning examples, then the
    versioned and semi-structured tables, then core children before
    parents, then the tuning indexes (already gone if their table was).
    With ``if_exists`` every step renders in the form that ignores a
    missing object.
    """
    steps = [DropStep("view", name, dialect.drop_view(name, if_exists)) for name in view_names()]
    steps.extend(
        DropStep("table", name, dialect.drop_table(name, if_exists)) for name in SUMMARY_TABLES
    )
    for group in (TableGroup.TEMPORAL, TableGroup.SEMISTRUCTURED, TableGroup.CORE):
        steps.extend(
            DropStep("table", name, dialect.drop_table(name, if_exists))
            for name in reversed(table_names([group]))
        )
    steps.extend(
        DropStep("index", index, dialect.drop_index(index, table, if_exists))
        for index, table in TUNING_INDEXES
    )
    return steps


# =============================================================================
# Execution
# =============================================================================


def catalog(adapter: DatabaseAdapter) -> Catalog:
    """List the sample tables, views and indexes present in the database.

    Objects that are not part of the sample schema (including engine-made
    indexes behind primary keys and unique constraints) are ignored.
    """
    d = adapter.dialect
    known_tables = set(table_names(ALL_GROUPS)) | set(SUMMARY_TABLES)
    known_views = set(view_names())
    known_indexes = set(index_names(ALL_GROUPS)) | {name for name, _ in TUNING_INDEXES}

    def _names(sql: str, known: set[str]) -> list[str]:
        _, rows = adapter.fetch(sql)
        return sorted(str(row[0]).lower() for row in rows if str(row[0]).lower() in known)

    return Catalog(
        tables=_names(d.list_tables_query(), known_tables),
        views=_names(d.list_views_query(), known_views),
        indexes=_names(d.list_indexes_query(), known_indexes),
    )


def setup_schema(
    adapter: DatabaseAdapter,
    groups: Iterable[TableGroup | str] | None = None,
) -> list[str]:
    """Create the sample schema, replacing any existing copy.

    Parameters
    ----------
    adapter
        Connected adapter; all statements run in its session.
    groups
        Table groups to create. Defaults to ``CORE``.

    Returns
    -------
    list[str]
        Names of the tables created.
    """
    selected = _groups(groups)
    present = catalog(adapter)
    existing = set(present.tables) | set(present.views)

    dropped = 0
    for step in drop_steps(adapter.dialect, selected):
        if step.name in existing:
            adapter.execute(step.sql)
            dropped += 1

    for statement in create_statements(adapter.dialect, selected):
        adapter.execute(statement)
    adapter.commit()

    created = table_names(selected)
    logger.info(
        "schema.created",
        groups=[g.value for g in selected],
        tables=len(created),
        replaced=dropped,
    )
    return created


def drop_all(adapter: DatabaseAdapter, steps: Sequence[DropStep] | None = None) -> CleanupReport:
    """Remove every sample object, continuing past objects already gone.

    Each successful drop is committed on its own so a later failure cannot
    undo it.
    """
    report = CleanupReport()
    for step in steps if steps is not None else cleanup_steps(adapter.dialect):
        try:
            adapter.execute(step.sql)
        except ObjectNotFoundError:
            # PostgreSQL aborts the transaction on any error
            adapter.rollback()
            report.missing.append(step.name)
            logger.debug("cleanup.skipped", kind=step.kind, name=step.name)
            continue
        adapter.commit()
        report.dropped.append(step.name)

    logger.info("cleanup.done", dropped=len(report.dropped), missing=len(report.missing))
    return report


# =============================================================================
# Script rendering
# =============================================================================


def _render(title: str, dialect: Dialect, statements: Iterable[str]) -> str:
    header = (
        "-- =====================================================\n"
        f"-- {title} ({dialect.name})\n"
        "-- =====================================================\n\n"
    )
    return header + "".join(f"{stmt};\n\n" for stmt in statements)


def render_setup_script(
    dialect: Dialect,
    groups: Iterable[TableGroup | str] | None = ALL_GROUPS,
) -> str:
    """Guarded drops then CREATE statements for the groups, as one script.

    The drops ignore missing objects, so the script can be run again on a
    database that already holds the schema.
    """
    statements = [
        *drop_statements(dialect, groups, if_exists=True),
        *create_statements(dialect, groups),
    ]
    return _render("Sample schema setup", dialect, statements)


def render_cleanup_script(dialect: Dialect) -> str:
    """Cleanup script; every drop ignores objects that are already gone."""
    return _render(
        "Sample schema cleanup",
        dialect,
        (step.sql for step in cleanup_steps(dialect, if_exists=True)),
    )


__all__ = [
    "Catalog",
    "CleanupReport",
    "DropStep",
    "DEFAULT_GROUPS",
    "catalog",
    "cleanup_steps",
    "create_statements",
    "drop_all",
    "drop_statements",
    "drop_steps",
    "render_cleanup_script",
    "render_setup_script",
    "setup_schema",
]
