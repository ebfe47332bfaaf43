"""Engines the samples target and the settings needed to reach them."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from sqlsamples.core.errors import ConfigError, ErrorContext


class DatabaseType(str, Enum):
    """Engines with a dialect and an adapter."""

    SQLITE = "sqlite"
    POSTGRESQL = "postgresql"
    DB2 = "db2"

    @classmethod
    def parse(cls, value: DatabaseType | str) -> DatabaseType:
        """Accept a member, its value in any case, or the ``postgres`` alias."""
        if isinstance(value, cls):
            return value
        name = str(value).strip().lower()
        try:
            return cls(_ALIASES.get(name, name))
        except ValueError:
            raise ConfigError(
                f"Unsupported database type: {value!r}. "
                f"Expected one of: {', '.join(t.value for t in cls)}",
                context=ErrorContext(dialect=name),
            ) from None

    @property
    def default_port(self) -> int | None:
        return _DEFAULT_PORTS.get(self)


_ALIASES = {"postgres": "postgresql", "pg": "postgresql"}

_DEFAULT_PORTS = {DatabaseType.POSTGRESQL: 5432, DatabaseType.DB2: 50000}


@dataclass
class DatabaseConfig:
    """Where one sample session runs.

    SQLite reads ``path`` (``:memory:`` when unset).  PostgreSQL and DB2 use
    the server fields, and create the sample objects in ``schema``.
    """

    db_type: DatabaseType = DatabaseType.SQLITE

    # SQLite
    path: str | None = None

    # PostgreSQL / DB2
    host: str = "localhost"
    port: int | None = None
    database: str = ""
    username: str | None = None
    password: str | None = None
    schema: str | None = None

    connect_timeout: int = 10
    readonly: bool = False

    # Passed through to the driver
    options: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.db_type = DatabaseType.parse(self.db_type)

    @property
    def resolved_port(self) -> int | None:
        """``port``, or the engine's usual port when unset."""
        return self.port if self.port is not None else self.db_type.default_port

    def to_connection_string(self) -> str:
        """Connection string in the form the engine's driver expects."""
        match self.db_type:
            case DatabaseType.SQLITE:
                return self.path or ":memory:"
            case DatabaseType.POSTGRESQL:
                return (
                    f"postgresql://{self.username}:{self.password}"
                    f"@{self.host}:{self.resolved_port}/{self.database}"
                )
            case DatabaseType.DB2:
                # ibm_db CLI keywords; CURRENTSCHEMA replaces a SET SCHEMA after connect
                parts: dict[str, Any] = {
                    "DATABASE": self.database,
                    "HOSTNAME": self.host,
                    "PORT": self.resolved_port,
                    "PROTOCOL": "TCPIP",
                    "UID": self.username or "",
                    "PWD": self.password or "",
                }
                if self.schema:
                    parts["CURRENTSCHEMA"] = self.schema.upper()
                return "".join(f"{key}={value};" for key, value in parts.items())
        raise ConfigError(f"Connection string not supported for: {self.db_type}")


__all__ = [
    "DatabaseType",
    "DatabaseConfig",
]
