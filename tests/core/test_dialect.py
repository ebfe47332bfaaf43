"""Tests for ``sqlsamples.core.dialect``: fragments per engine."""

from __future__ import annotations

import pytest

from sqlsamples.core import dialect as dialect_module
from sqlsamples.core.dialect import (
    DB2Dialect,
    Dialect,
    PostgreSQLDialect,
    SQLiteDialect,
    get_dialect,
    list_dialects,
    register_dialect,
)
from sqlsamples.core.errors import UnsupportedDialectError
from sqlsamples.core.statements import split_statements

MAY_15 = "'2024-05-15'"
NEW_YEAR = "'2024-01-01'"
MARCH_1 = "'2024-03-01'"


class TestGetDialect:
    def test_known_names(self):
        assert isinstance(get_dialect("sqlite"), SQLiteDialect)
        assert isinstance(get_dialect("postgresql"), PostgreSQLDialect)
        assert isinstance(get_dialect("db2"), DB2Dialect)

    def test_postgres_alias_and_case(self):
        assert get_dialect("postgres").name == "postgresql"
        assert get_dialect("DB2").name == "db2"

    def test_unknown_raises(self):
        with pytest.raises(ValueError, match="Unknown dialect"):
            get_dialect("oracle")

    def test_list_hides_alias(self):
        assert list_dialects() == ["db2", "postgresql", "sqlite"]

    def test_implementations_satisfy_protocol(self):
        for name in list_dialects():
            assert isinstance(get_dialect(name), Dialect)

    def test_register_custom(self, monkeypatch):
        class Custom(SQLiteDialect):
            @property
            def name(self) -> str:
                return "custom"

        monkeypatch.setattr(dialect_module, "_DIALECTS", dict(dialect_module._DIALECTS))
        register_dialect("Custom", Custom())
        assert get_dialect("custom").name == "custom"


class TestQueryShape:
    def test_recursive_keyword(self):
        assert get_dialect("sqlite").with_recursive() == "WITH RECURSIVE"
        assert get_dialect("postgresql").with_recursive() == "WITH RECURSIVE"
        assert get_dialect("db2").with_recursive() == "WITH"

    def test_from_dual(self):
        assert get_dialect("sqlite").from_dual() == ""
        assert get_dialect("db2").from_dual() == " FROM SYSIBM.SYSDUMMY1"

    def test_limit(self):
        assert get_dialect("sqlite").limit(5) == "LIMIT 5"
        assert get_dialect("db2").limit(5) == "FETCH FIRST 5 ROWS ONLY"

    def test_page(self):
        assert get_dialect("postgresql").page(10, 20) == "LIMIT 10 OFFSET 20"
        assert get_dialect("db2").page(10, 20) == "OFFSET 20 ROWS FETCH FIRST 10 ROWS ONLY"

    def test_placeholders(self):
        assert get_dialect("sqlite").placeholders(3) == "?, ?, ?"
        assert get_dialect("postgresql").placeholders(2) == "%s, %s"

    def test_grouping_sets_support(self):
        assert get_dialect("sqlite").supports_grouping_sets is False
        assert get_dialect("postgresql").supports_grouping_sets is True
        assert get_dialect("db2").supports_grouping_sets is True

    def test_cast_decimal(self):
        assert get_dialect("sqlite").cast_decimal("x") == "CAST(x AS REAL)"
        assert get_dialect("db2").cast_decimal("x") == "CAST(x AS DECIMAL(15,2))"


class TestDates:
    def test_unknown_date_part(self):
        with pytest.raises(ValueError, match="Unknown date part"):
            get_dialect("sqlite").extract("fortnight", "d")

    def test_add_days(self, adapter):
        d = adapter.dialect
        expr = d.add_days(d.date_literal("2024-01-31"), 1)
        assert adapter.scalar(f"SELECT {expr}") == "2024-02-01"

    def test_extract(self, adapter):
        d = adapter.dialect
        assert adapter.scalar(f"SELECT {d.extract('quarter', MAY_15)}") == 2
        assert adapter.scalar(f"SELECT {d.extract('month', MAY_15)}") == 5

    def test_day_name(self, adapter):
        assert adapter.scalar(f"SELECT {adapter.dialect.day_name(NEW_YEAR)}") == "Monday"

    def test_days_between_leap_year(self, adapter):
        expr = adapter.dialect.days_between(NEW_YEAR, MARCH_1)
        assert adapter.scalar(f"SELECT {expr}") == 60


class TestStrings:
    def test_sqlite_repeat(self, adapter):
        expr = adapter.dialect.repeat("'ab'", "3")
        assert adapter.scalar(f"SELECT {expr}") == "ababab"

    def test_sqlite_lpad(self, adapter):
        assert adapter.scalar(f"SELECT {adapter.dialect.lpad('42', 5)}") == "00042"

    def test_sqlite_string_agg(self, adapter):
        agg = adapter.dialect.string_agg("v", ", ")
        sql = f"SELECT {agg} FROM (SELECT 'a' AS v UNION ALL SELECT 'b')"
        assert adapter.scalar(sql) == "a, b"

    def test_concat_is_ansi(self):
        assert get_dialect("db2").concat("a", "b") == "(a || b)"


class TestRandom:
    def test_random_int_in_range(self, adapter):
        expr = adapter.dialect.random_int(3, 7)
        values = [adapter.scalar(f"SELECT {expr}") for _ in range(50)]
        assert all(3 <= v <= 7 for v in values)

    def test_random_float_in_unit_interval(self, adapter):
        expr = adapter.dialect.random_float()
        assert 0.0 <= adapter.scalar(f"SELECT {expr}") < 1.0


class TestDocuments:
    def test_sqlite_json_value(self, adapter):
        doc = """'{"a": {"b": 7}}'"""
        assert adapter.scalar(f"SELECT {adapter.dialect.json_value(doc, '$.a.b')}") == 7

    def test_sqlite_json_object(self, adapter):
        expr = adapter.dialect.json_object([("k", "'v'")])
        assert adapter.scalar(f"SELECT {expr}") == '{"k":"v"}'

    def test_db2_xml_uses_xmlquery(self):
        fragment = get_dialect("db2").xml_value("doc", "/profile/name")
        assert "XMLQUERY('$d/profile/name'" in fragment

    def test_postgresql_xml_uses_xpath(self):
        fragment = get_dialect("postgresql").xml_exists("doc", "/profile")
        assert fragment == "xpath_exists('/profile', CAST(doc AS XML))"


class TestTuning:
    def test_db2_explain_unsupported(self):
        with pytest.raises(UnsupportedDialectError):
            get_dialect("db2").explain("SELECT 1")

    def test_sqlite_explain(self):
        assert get_dialect("sqlite").explain("SELECT 1") == "EXPLAIN QUERY PLAN SELECT 1"

    def test_postgresql_index_include(self):
        sql = get_dialect("postgresql").create_index("ix", "t", ["a"], include=["b"])
        assert sql == "CREATE INDEX ix ON t (a) INCLUDE (b)"

    def test_create_table_as(self):
        assert get_dialect("db2").create_table_as("t", "SELECT 1") == (
            "CREATE TABLE t AS (SELECT 1) WITH DATA"
        )


class TestCatalog:
    def test_not_found_detection(self, adapter):
        d = adapter.dialect
        assert d.is_not_found(Exception("no such table: missing"))
        assert not d.is_not_found(Exception("syntax error"))

    def test_postgresql_not_found_by_code(self):
        class Err(Exception):
            pgcode = "42P01"

        assert get_dialect("postgresql").is_not_found(Err("boom"))

    def test_postgresql_other_errors_are_not_missing_objects(self):
        class Err(Exception):
            pgcode = "42703"

        d = get_dialect("postgresql")
        assert not d.is_not_found(Err('column "x" does not exist'))
        assert not d.is_not_found(Exception('relation "t" does not exist'))

    def test_db2_not_found_by_sqlstate(self):
        assert get_dialect("db2").is_not_found(Exception("SQL0204N ... SQLSTATE=42704"))


class TestDrops:
    @pytest.mark.parametrize("name", ["sqlite", "postgresql", "db2"])
    def test_plain_and_guarded(self, name):
        d = get_dialect(name)
        assert d.drop_table("t") == "DROP TABLE t"
        assert d.drop_table("t", if_exists=True) == "DROP TABLE IF EXISTS t"
        assert d.drop_view("v", if_exists=True) == "DROP VIEW IF EXISTS v"
        assert d.drop_index("ix", "t") == "DROP INDEX ix"

    def test_guarded_index(self):
        assert get_dialect("sqlite").drop_index("ix", "t", if_exists=True) == "DROP INDEX IF EXISTS ix"
        assert get_dialect("postgresql").drop_index("ix", "t", if_exists=True) == "DROP INDEX IF EXISTS ix"

    def test_db2_guarded_index_uses_handler_block(self):
        sql = get_dialect("db2").drop_index("ix", "t", if_exists=True)
        assert sql.startswith("BEGIN")
        assert "DECLARE CONTINUE HANDLER FOR SQLSTATE '42704' BEGIN END;" in sql
        assert "DROP INDEX ix;" in sql
        assert sql.endswith("END")
        assert split_statements(f"{sql};\nSELECT 1;") == [sql, "SELECT 1"]
