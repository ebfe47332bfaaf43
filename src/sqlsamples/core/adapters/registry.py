"""Adapter lookup by engine name.

Settings and the CLI only know a ``db_type`` string such as ``"db2"`` or
``"postgres"``; :func:`get_adapter` turns it into an unconnected adapter for
that engine.  Aliases resolve through :meth:`DatabaseType.parse`, so the
registry only holds one entry per engine plus anything registered later.
"""

from __future__ import annotations

from typing import Any

from sqlsamples.core.errors import ConfigError, ErrorContext

from .base import DatabaseAdapter
from .db2 import DB2Adapter
from .postgresql import PostgreSQLAdapter
from .sqlite import SQLiteAdapter
from .types import DatabaseType


class AdapterRegistry:
    """Engine name to adapter class."""

    def __init__(self):
        self._factories: dict[str, type[DatabaseAdapter]] = {
            DatabaseType.SQLITE.value: SQLiteAdapter,
            DatabaseType.POSTGRESQL.value: PostgreSQLAdapter,
            DatabaseType.DB2.value: DB2Adapter,
        }

    def register(self, name: str, adapter_class: type[DatabaseAdapter]) -> None:
        self._factories[name.lower()] = adapter_class

    def resolve(self, name: DatabaseType | str) -> str:
        """Registered key for ``name``; built-in engines accept their aliases."""
        if isinstance(name, DatabaseType):
            return name.value
        key = name.strip().lower()
        if key in self._factories:
            return key
        try:
            return DatabaseType.parse(key).value
        except ConfigError:
            raise ConfigError(
                f"Unknown database adapter: {key}. Available: {', '.join(self.list_adapters())}",
                context=ErrorContext(dialect=key),
            ) from None

    def create(self, name: DatabaseType | str, **kwargs: Any) -> DatabaseAdapter:
        """Unconnected adapter for ``name`` built from ``kwargs``."""
        return self._factories[self.resolve(name)](**kwargs)

    def list_adapters(self) -> list[str]:
        return sorted(self._factories)


adapter_registry = AdapterRegistry()


def get_adapter(db_type: DatabaseType | str, **kwargs: Any) -> DatabaseAdapter:
    """
    Adapter for ``db_type``, configured but not connected.

    Usage:
        adapter = get_adapter("sqlite", path="samples.db")
        adapter = get_adapter("db2", host="db2host", database="SAMPLE")  # schema SAMPLES
    """
    return adapter_registry.create(db_type, **kwargs)


__all__ = [
    "AdapterRegistry",
    "adapter_registry",
    "get_adapter",
]
