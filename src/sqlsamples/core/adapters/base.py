"""Database adapter base class.

Manifesto:
    Every sample artifact runs through one adapter in one client session:
    setup, seed, examples, cleanup.  The base class owns statement
    execution and turns driver exceptions into :mod:`sqlsamples.core.errors`
    types, so callers never catch ``sqlite3.Error`` or ``ibm_db_dbi.Error``.

Features:
    - Abstract ``connect()``, ``disconnect()``, ``get_connection()``
    - ``execute`` / ``query`` / ``fetch`` / ``scalar`` / ``insert_many``
    - Driver errors mapped to ``QueryError`` / ``ObjectNotFoundError``
    - Context-manager protocol for connection lifecycle

Tags:
    database, abstract-base, adapter-pattern
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from sqlsamples.core.dialect import Dialect, get_dialect
from sqlsamples.core.errors import ErrorContext, ObjectNotFoundError, QueryError
from sqlsamples.core.logging import get_logger
from sqlsamples.core.protocols import Connection

from .types import DatabaseConfig, DatabaseType

logger = get_logger(__name__)


class DatabaseAdapter(ABC):
    """
    Abstract base class for database adapters.

    Subclasses open the driver connection; everything else is shared.
    """

    def __init__(self, config: DatabaseConfig):
        self._config = config
        self._connected = False
        self._dialect: Dialect = get_dialect(config.db_type.value)

    @property
    def dialect(self) -> Dialect:
        """SQL dialect for this adapter's database type."""
        return self._dialect

    @property
    def db_type(self) -> DatabaseType:
        return self._config.db_type

    @property
    def config(self) -> DatabaseConfig:
        return self._config

    @property
    def is_connected(self) -> bool:
        return self._connected

    @abstractmethod
    def connect(self) -> None:
        """Establish connection to database."""
        ...

    @abstractmethod
    def disconnect(self) -> None:
        """Close connection to database."""
        ...

    @abstractmethod
    def get_connection(self) -> Connection:
        """Get the session connection, connecting lazily."""
        ...

    # -- Transactions --------------------------------------------------------

    @contextmanager
    def transaction(self) -> Iterator[Connection]:
        """Commit on success, roll back on any exception."""
        conn = self.get_connection()
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise

    def commit(self) -> None:
        self.get_connection().commit()

    def rollback(self) -> None:
        self.get_connection().rollback()

    # -- Statement execution -------------------------------------------------

    def execute(self, sql: str, params: tuple = ()) -> Any:
        """Execute one statement and return the cursor."""
        cursor = self._cursor()
        try:
            if params:
                cursor.execute(sql, params)
            else:
                cursor.execute(sql)
        except Exception as exc:
            raise self._wrap_error(exc, sql) from exc
        return cursor

    def executemany(self, sql: str, params: list[tuple]) -> Any:
        """Execute SQL for multiple parameter sets."""
        cursor = self._cursor()
        try:
            cursor.executemany(sql, params)
        except Exception as exc:
            raise self._wrap_error(exc, sql) from exc
        return cursor

    def fetch(self, sql: str, params: tuple = ()) -> tuple[list[str], list[tuple]]:
        """Execute a query and return ``(columns, rows)`` in engine order."""
        cursor = self.execute(sql, params)
        if cursor.description is None:
            return [], []
        columns = [str(desc[0]).lower() for desc in cursor.description]
        rows = [tuple(row) for row in cursor.fetchall()]
        return columns, rows

    def query(self, sql: str, params: tuple = ()) -> list[dict[str, Any]]:
        """Execute query and return results as dicts."""
        columns, rows = self.fetch(sql, params)
        return [dict(zip(columns, row, strict=False)) for row in rows]

    def query_one(self, sql: str, params: tuple = ()) -> dict[str, Any] | None:
        results = self.query(sql, params)
        return results[0] if results else None

    def scalar(self, sql: str, params: tuple = ()) -> Any:
        """First column of the first row, or ``None``."""
        _, rows = self.fetch(sql, params)
        return rows[0][0] if rows else None

    def insert_many(self, table: str, rows: list[dict[str, Any]]) -> int:
        """Insert rows sharing the first row's column set."""
        if not rows:
            return 0

        columns = list(rows[0].keys())
        placeholders = self._dialect.placeholders(len(columns))
        sql = f"INSERT INTO {table} ({', '.join(columns)}) VALUES ({placeholders})"

        params = [tuple(row[col] for col in columns) for row in rows]
        self.executemany(sql, params)
        return len(rows)

    # -- Internals -----------------------------------------------------------

    def _cursor(self) -> Any:
        return self.get_connection().cursor()

    def _wrap_error(self, exc: Exception, sql: str) -> QueryError:
        context = ErrorContext(dialect=self._dialect.name, statement=_abbreviate(sql))
        if self._dialect.is_not_found(exc):
            return ObjectNotFoundError(str(exc), context=context, cause=exc)
        logger.debug("statement.failed", error=str(exc), statement=context.statement)
        return QueryError(str(exc), context=context, cause=exc)

    def __enter__(self) -> DatabaseAdapter:
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.disconnect()


def _abbreviate(sql: str, width: int = 160) -> str:
    flat = " ".join(sql.split())
    return flat if len(flat) <= width else flat[: width - 3] + "..."


__all__ = [
    "DatabaseAdapter",
]
