"""Database adapters -- one interface for SQLite, PostgreSQL and DB2.

Each adapter is **import-guarded**: the database driver is only required at
``connect()`` time, not at import time.  Install the corresponding extra::

    pip install sqlsamples[postgresql]   # psycopg2-binary
    pip install sqlsamples[db2]          # ibm-db, ibm-db-sa

Architecture::

    DatabaseAdapter (base.py)        Abstract base with execute/fetch/query
        |-- SQLiteAdapter            stdlib sqlite3 (always available)
        |-- PostgreSQLAdapter        psycopg2 (optional)
        |-- DB2Adapter               ibm_db_dbi (optional)

    AdapterRegistry (registry.py)    DatabaseType -> adapter class
    DatabaseConfig (types.py)        Connection parameters
    DatabaseType (types.py)          Enum of supported backends

Guardrails:
    ❌ ``adapter.execute("SELECT * FROM t WHERE id=" + user_input)``
    ✅ ``adapter.execute(f"SELECT * FROM t WHERE id={d.placeholder(0)}", (user_input,))``
"""

from sqlsamples.core.dialect import Dialect, get_dialect
from sqlsamples.core.protocols import Connection

from .base import DatabaseAdapter
from .db2 import DB2Adapter
from .postgresql import PostgreSQLAdapter
from .registry import AdapterRegistry, adapter_registry, get_adapter
from .sqlite import SQLiteAdapter
from .types import DatabaseConfig, DatabaseType

__all__ = [
    # Types
    "DatabaseType",
    "DatabaseConfig",
    # Protocols / Abstractions
    "Connection",
    "Dialect",
    "get_dialect",
    # Base class
    "DatabaseAdapter",
    # Implementations
    "SQLiteAdapter",
    "PostgreSQLAdapter",
    "DB2Adapter",
    # Registry
    "AdapterRegistry",
    "adapter_registry",
    "get_adapter",
]
