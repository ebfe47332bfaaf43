"""Tests for ``sqlsamples.core.adapters.registry`` and the server adapters."""

from __future__ import annotations

import builtins

import pytest

from sqlsamples.core.adapters import (
    AdapterRegistry,
    DatabaseType,
    DB2Adapter,
    PostgreSQLAdapter,
    SQLiteAdapter,
    get_adapter,
)
from sqlsamples.core.adapters.types import DatabaseConfig
from sqlsamples.core.errors import ConfigError


class TestAdapterRegistry:
    def test_defaults(self):
        registry = AdapterRegistry()
        assert registry.list_adapters() == ["db2", "postgresql", "sqlite"]

    def test_create_unknown(self):
        with pytest.raises(ConfigError, match="Unknown database adapter: oracle. Available: db2"):
            AdapterRegistry().create("oracle")

    def test_resolve_aliases(self):
        registry = AdapterRegistry()
        assert registry.resolve("Postgres") == "postgresql"
        assert registry.resolve(DatabaseType.DB2) == "db2"

    def test_register_custom(self):
        registry = AdapterRegistry()
        registry.register("Memory", SQLiteAdapter)
        assert isinstance(registry.create("memory"), SQLiteAdapter)


class TestGetAdapter:
    def test_by_string(self):
        adapter = get_adapter("sqlite", path=":memory:")
        assert isinstance(adapter, SQLiteAdapter)
        assert adapter.is_connected is False

    def test_by_enum(self):
        assert isinstance(get_adapter(DatabaseType.POSTGRESQL), PostgreSQLAdapter)

    def test_postgres_alias(self):
        assert isinstance(get_adapter("postgres"), PostgreSQLAdapter)

    def test_db2_defaults_to_samples_schema(self):
        adapter = get_adapter("db2", host="db2host", database="SAMPLE")
        assert isinstance(adapter, DB2Adapter)
        assert adapter.config.schema == "SAMPLES"
        assert adapter.config.port == 50000
        assert adapter.dialect.name == "db2"


class TestMissingDrivers:
    @pytest.fixture
    def no_drivers(self, monkeypatch):
        real_import = builtins.__import__

        def fake_import(name, *args, **kwargs):
            if name.startswith(("psycopg2", "ibm_db")):
                raise ImportError(name)
            return real_import(name, *args, **kwargs)

        monkeypatch.setattr(builtins, "__import__", fake_import)

    def test_postgresql_without_driver(self, no_drivers):
        with pytest.raises(ConfigError, match="psycopg2"):
            PostgreSQLAdapter(database="samples").connect()

    def test_db2_without_driver(self, no_drivers):
        with pytest.raises(ConfigError, match="ibm-db"):
            DB2Adapter(database="SAMPLE").connect()


class TestDatabaseConfig:
    def test_sqlite_connection_string(self):
        assert DatabaseConfig(path="x.db").to_connection_string() == "x.db"
        assert DatabaseConfig().to_connection_string() == ":memory:"

    def test_postgresql_connection_string(self):
        config = DatabaseConfig(
            db_type=DatabaseType.POSTGRESQL,
            host="pg",
            port=5433,
            database="samples",
            username="u",
            password="p",
        )
        assert config.to_connection_string() == "postgresql://u:p@pg:5433/samples"

    def test_db2_connection_string(self):
        config = DatabaseConfig(
            db_type=DatabaseType.DB2,
            host="db2host",
            port=50000,
            database="SAMPLE",
            username="db2inst1",
            password="secret",
        )
        text = config.to_connection_string()
        assert "DATABASE=SAMPLE;" in text
        assert "HOSTNAME=db2host;" in text
        assert "PORT=50000;" in text
        assert "CURRENTSCHEMA" not in text

    def test_db2_connection_string_selects_schema(self):
        config = DatabaseConfig(db_type="db2", database="SAMPLE", schema="samples")
        assert config.to_connection_string().endswith("PWD=;CURRENTSCHEMA=SAMPLES;")

    def test_default_ports(self):
        assert DatabaseConfig(db_type=DatabaseType.POSTGRESQL).resolved_port == 5432
        assert DatabaseConfig(db_type=DatabaseType.DB2, port=50001).resolved_port == 50001
        assert DatabaseConfig().resolved_port is None


class TestDatabaseType:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("sqlite", DatabaseType.SQLITE),
            ("DB2", DatabaseType.DB2),
            ("postgres", DatabaseType.POSTGRESQL),
            (DatabaseType.POSTGRESQL, DatabaseType.POSTGRESQL),
        ],
    )
    def test_parse(self, value, expected):
        assert DatabaseType.parse(value) is expected

    def test_parse_unknown(self):
        with pytest.raises(ConfigError, match="Expected one of: sqlite, postgresql, db2"):
            DatabaseType.parse("oracle")
