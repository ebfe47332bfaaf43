"""IBM DB2 LUW adapter (``ibm_db`` / ``ibm_db_dbi``, qmark placeholders).

The sample objects live in their own schema, ``SAMPLES`` unless configured
otherwise; it is selected through the connection string so every statement
in the session resolves unqualified names there.  Autocommit is switched off
so a strict script run can roll back as one unit.

The driver is only imported in :meth:`DB2Adapter.connect`; install it with
``pip install sqlsamples[db2]``.
"""

from __future__ import annotations

from typing import Any

from sqlsamples.core.errors import ConfigError, DatabaseConnectionError, ErrorContext
from sqlsamples.core.protocols import Connection

from .base import DatabaseAdapter
from .types import DatabaseConfig, DatabaseType


class DB2Adapter(DatabaseAdapter):
    """One DB2 session for a setup, seed, examples and cleanup run."""

    def __init__(
        self,
        host: str = "localhost",
        port: int = 50000,
        database: str = "",
        username: str | None = None,
        password: str | None = None,
        *,
        schema: str | None = "SAMPLES",
        **kwargs: Any,
    ):
        config = DatabaseConfig(
            db_type=DatabaseType.DB2,
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
        try:
            import ibm_db
            import ibm_db_dbi
        except ImportError:
            raise ConfigError(
                "ibm-db is required for DB2. Install with: pip install sqlsamples[db2]"
            ) from None

        options = {ibm_db.SQL_ATTR_AUTOCOMMIT: ibm_db.SQL_AUTOCOMMIT_OFF}
        try:
            handle = ibm_db.connect(self._config.to_connection_string(), "", "", options)
        except Exception as e:
            raise DatabaseConnectionError(
                f"Failed to connect to DB2 database {self._config.database!r}: {e}",
                context=ErrorContext(dialect="db2", metadata={"host": self._config.host}),
                cause=e,
            ) from e
        self._conn = ibm_db_dbi.Connection(handle)
        self._connected = True

    def disconnect(self) -> None:
        if self._conn:
            self._conn.close()
            self._conn = None
            self._connected = False

    def get_connection(self) -> Connection:
        if not self._conn:
            self.connect()
        return self._conn


__all__ = [
    "DB2Adapter",
]
