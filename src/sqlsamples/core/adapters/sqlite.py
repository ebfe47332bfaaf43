"""SQLite database adapter.

SQLite is the reference engine: every example is exercised against it in
the test suite.  It has no SQL/XML support, so the adapter registers two
scalar functions on each connection, backed by :mod:`xml.etree.ElementTree`:

- ``xml_value(doc, path)``: text of the first element at an absolute path
- ``xml_exists(doc, path)``: 1 when the path (predicates allowed) matches
"""

from __future__ import annotations

import sqlite3
import xml.etree.ElementTree as ET
from typing import Any

from sqlsamples.core.errors import DatabaseConnectionError
from sqlsamples.core.protocols import Connection

from .base import DatabaseAdapter
from .types import DatabaseConfig, DatabaseType


def _xml_find(doc: str | None, path: str) -> ET.Element | None:
    if not doc or not path:
        return None
    try:
        root = ET.fromstring(doc.strip())
    except ET.ParseError:
        return None
    # Wrap so the first path step (the root tag) can carry a predicate
    holder = ET.Element("document")
    holder.append(root)
    try:
        return holder.find(path.lstrip("/"))
    except SyntaxError:
        return None


def xml_value(doc: str | None, path: str) -> str | None:
    element = _xml_find(doc, path)
    if element is None or element.text is None:
        return None
    return element.text.strip()


def xml_exists(doc: str | None, path: str) -> int:
    return 0 if _xml_find(doc, path) is None else 1


class SQLiteAdapter(DatabaseAdapter):
    """
    SQLite database adapter.

    Uses the built-in sqlite3 module. Suitable for:
    - Running the whole sample cycle without a server
    - Tests (``:memory:``)
    """

    def __init__(
        self,
        path: str = ":memory:",
        *,
        readonly: bool = False,
        timeout: float = 5.0,
        **kwargs: Any,
    ):
        config = DatabaseConfig(
            db_type=DatabaseType.SQLITE,
            path=path,
            readonly=readonly,
            options=kwargs,
        )
        super().__init__(config)
        self._timeout = timeout
        self._conn: sqlite3.Connection | None = None

    def connect(self) -> None:
        """Connect to SQLite database."""
        path = self._config.path or ":memory:"
        uri = path.startswith("file:")

        try:
            self._conn = sqlite3.connect(
                path,
                timeout=self._timeout,
                check_same_thread=False,
                uri=uri,
            )
            self._conn.row_factory = sqlite3.Row

            self._conn.execute("PRAGMA foreign_keys = ON")
            if self._config.readonly:
                self._conn.execute("PRAGMA query_only = ON")

            self._conn.create_function("xml_value", 2, xml_value, deterministic=True)
            self._conn.create_function("xml_exists", 2, xml_exists, deterministic=True)

            self._connected = True

        except sqlite3.Error as e:
            raise DatabaseConnectionError(
                f"Failed to connect to SQLite: {e}",
                cause=e,
            ) from e

    def disconnect(self) -> None:
        """Close SQLite connection."""
        if self._conn:
            self._conn.close()
            self._conn = None
            self._connected = False

    def get_connection(self) -> Connection:
        """Get the SQLite connection."""
        if not self._conn:
            self.connect()
        return self._conn


__all__ = [
    "SQLiteAdapter",
    "xml_exists",
    "xml_value",
]
