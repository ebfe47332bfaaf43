"""Load seed rows through an adapter and render them as a SQL script."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from sqlsamples.core.adapters.base import DatabaseAdapter
from sqlsamples.core.dialect import Dialect
from sqlsamples.core.logging import get_logger
from sqlsamples.seed.data import SEED_ROWS, SeedTable

logger = get_logger(__name__)


def load_rows(adapter: DatabaseAdapter, tables: Sequence[SeedTable]) -> dict[str, int]:
    """Replace the contents of each table with its seed rows.

    Existing rows are deleted children-first, then the seed rows are
    inserted parents-first, all in one transaction.
    """
    counts: dict[str, int] = {}
    with adapter.transaction():
        for table in reversed(tables):
            adapter.execute(f"DELETE FROM {table.name}")
        for table in tables:
            counts[table.name] = adapter.insert_many(table.name, table.as_dicts())
    return counts


def seed_all(adapter: DatabaseAdapter) -> dict[str, int]:
    """Load every core table. Returns rows inserted per table."""
    counts = load_rows(adapter, SEED_ROWS)
    logger.info("seed.loaded", tables=len(counts), rows=sum(counts.values()))
    return counts


def row_counts(adapter: DatabaseAdapter, tables: Sequence[str] | None = None) -> dict[str, int]:
    """``COUNT(*)`` per table, defaulting to the seeded core tables."""
    names = list(tables) if tables is not None else [t.name for t in SEED_ROWS]
    return {name: int(adapter.scalar(f"SELECT COUNT(*) FROM {name}")) for name in names}


def sql_literal(value: Any) -> str:
    """Render a Python value as a SQL literal."""
    if value is None:
        return "NULL"
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, int | float):
        return repr(value)
    return "'" + str(value).replace("'", "''") + "'"


def insert_statements(table: SeedTable) -> list[str]:
    columns = ", ".join(table.columns)
    return [
        f"INSERT INTO {table.name} ({columns}) VALUES "
        f"({', '.join(sql_literal(v) for v in row)})"
        for row in table.rows
    ]


def render_seed_script(dialect: Dialect, tables: Sequence[SeedTable] = SEED_ROWS) -> str:
    """Literal INSERT script for the seed rows, ending with COMMIT."""
    parts = [
        "-- =====================================================\n"
        f"-- Sample data load ({dialect.name})\n"
        "-- =====================================================\n"
    ]
    for table in tables:
        parts.append(f"\n-- {table.name}\n")
        parts.extend(f"{stmt};\n" for stmt in insert_statements(table))
    parts.append("\nCOMMIT;\n")
    return "".join(parts)


__all__ = [
    "insert_statements",
    "load_rows",
    "render_seed_script",
    "row_counts",
    "seed_all",
    "sql_literal",
]
