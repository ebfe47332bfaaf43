"""
Connection protocol shared by adapters, temporal helpers and checks.

Any DB-API 2.0 connection that exposes ``execute`` on the connection
object (sqlite3) or through a cursor wrapper satisfies it.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Connection(Protocol):
    """Minimal synchronous connection interface."""

    def execute(self, sql: str, params: tuple = ()) -> Any:
        """Execute SQL and return a cursor-like object."""
        ...

    def executemany(self, sql: str, params: list[tuple]) -> Any:
        """Execute SQL once per parameter tuple."""
        ...

    def commit(self) -> None:
        ...

    def rollback(self) -> None:
        ...


__all__ = ["Connection"]
