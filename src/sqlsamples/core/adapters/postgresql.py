"""PostgreSQL database adapter."""

from __future__ import annotations

from typing import Any

from sqlsamples.core.errors import ConfigError, DatabaseConnectionError
from sqlsamples.core.protocols import Connection

from .base import DatabaseAdapter
from .types import DatabaseConfig, DatabaseType


class PostgreSQLAdapter(DatabaseAdapter):
    """
    PostgreSQL database adapter.

    Uses psycopg2 with a single session connection; the sample scripts
    assume one client session from setup to cleanup.
    """

    def __init__(
        self,
        host: str = "localhost",
        port: int = 5432,
        database: str = "",
        username: str | None = None,
        password: str | None = None,
        *,
        schema: str | None = None,
        **kwargs: Any,
    ):
        config = DatabaseConfig(
            db_type=DatabaseType.POSTGRESQL,
            host=host,
            port=port,
            database=database,
            username=username,
            password=password,
            schema=schema,
            options=kwargs,
        )
        super().__init__(config)
        self._conn: Any = None

    def connect(self) -> None:
        """Connect to PostgreSQL database."""
        try:
            import psycopg2
        except ImportError:
            raise ConfigError(
                "psycopg2 is required for PostgreSQL. Install with: pip install sqlsamples[postgresql]"
            ) from None

        try:
            self._conn = psycopg2.connect(
                host=self._config.host,
                port=self._config.port,
                dbname=self._config.database,
                user=self._config.username,
                password=self._config.password,
                connect_timeout=self._config.connect_timeout,
            )
            schema = self._config.schema
            if schema:
                with self._conn.cursor() as cur:
                    cur.execute(f"CREATE SCHEMA IF NOT EXISTS {schema.lower()}")
                    cur.execute(f"SET search_path TO {schema.lower()}")
                self._conn.commit()
            self._connected = True
        except psycopg2.Error as e:
            raise DatabaseConnectionError(
                f"Failed to connect to PostgreSQL: {e}",
                cause=e,
            ) from e

    def disconnect(self) -> None:
        """Close PostgreSQL connection."""
        if self._conn:
            self._conn.close()
            self._conn = None
            self._connected = False

    def get_connection(self) -> Connection:
        if not self._conn:
            self.connect()
        return self._conn

    def execute(self, sql: str, params: tuple = ()) -> Any:
        # A failed statement aborts the whole PostgreSQL transaction; roll back
        # so continue-on-error callers can keep using the session.
        try:
            return super().execute(sql, params)
        except Exception:
            self._conn.rollback()
            raise


__all__ = [
    "PostgreSQLAdapter",
]
