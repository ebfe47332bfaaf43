"""Environment-driven settings for sqlsamples.

Configuration is read from ``SAMPLES_*`` environment variables and an
optional ``.env`` file via pydantic-settings. CLI options override these
values per invocation.

Examples:
    >>> from sqlsamples.core.settings import SamplesSettings
    >>> s = SamplesSettings(db_type="sqlite", database=":memory:")
    >>> s.db_type
    'sqlite'

Tags:
    settings, configuration, pydantic, environment
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from sqlsamples.core.adapters.types import DatabaseType
from sqlsamples.core.errors import ConfigError

DEFAULT_DATABASE = str(Path.home() / ".sqlsamples" / "samples.db")


class SamplesSettings(BaseSettings):
    """Connection and runtime settings.

    Fields
    ──────
    db_type      : ``sqlite``, ``postgresql`` or ``db2``
    database     : SQLite path, or database name for server engines
    host / port  : Server address (PostgreSQL / DB2)
    username     : Server login
    password     : Server password
    schema_name  : Target schema (DB2 ``SET SCHEMA``)
    log_level    : Structlog log level
    json_logs    : Force JSON log lines (None = auto-detect)
    """

    model_config = SettingsConfigDict(
        env_prefix="SAMPLES_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Connection ───────────────────────────────────────────────
    db_type: str = "sqlite"
    database: str = DEFAULT_DATABASE
    host: str = "localhost"
    port: int | None = None
    username: str | None = None
    password: str | None = None
    schema_name: str = Field(default="SAMPLES", description="Target schema for server engines")

    # ── Observability ────────────────────────────────────────────
    log_level: str = "WARNING"
    json_logs: bool | None = None

    @field_validator("db_type")
    @classmethod
    def _normalise_db_type(cls, value: str) -> str:
        try:
            return DatabaseType.parse(value).value
        except ConfigError as exc:
            raise ValueError(exc.message) from None

    def adapter_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for :func:`sqlsamples.core.adapters.get_adapter`."""
        if self.db_type == "sqlite":
            return {"path": self.database}
        kwargs: dict[str, Any] = {
            "host": self.host,
            "database": self.database,
            "username": self.username,
            "password": self.password,
            "schema": self.schema_name,
        }
        if self.port is not None:
            kwargs["port"] = self.port
        return kwargs
