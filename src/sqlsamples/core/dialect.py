"""SQL dialect abstraction for portable sample queries.

Provides a ``Dialect`` protocol and one implementation per supported
engine.  Example builders call ``Dialect`` methods to produce SQL
fragments (recursive CTE keyword, row limiting, date arithmetic, JSON and
XML access, catalog queries) so one example definition renders valid SQL
for SQLite, PostgreSQL and DB2.

Manifesto:
    The sample queries are the product.  Without a dialect layer each one
    would need a hand-maintained copy per engine; with it, only the
    fragments that actually differ are written three times.

    - **One interface:** Dialect protocol for all fragment generation
    - **Zero coupling:** Example code never imports database drivers
    - **Testable:** SQLiteDialect runs everything in-memory

Architecture::

    Example builder:
    ┌────────────────────────────────────────────────────────────────┐
    │  f"{d.with_recursive()} series (n) AS (SELECT 1{d.from_dual()} │
    │     UNION ALL SELECT n + 1 FROM series WHERE n < 100)"         │
    └────────────────────────────────────────────────────────────────┘
                              │
                              ▼
    ┌──────────────┐   ┌──────────────────┐   ┌────────────────────────┐
    │ SQLite       │   │ PostgreSQL       │   │ DB2                    │
    │ WITH RECURS. │   │ WITH RECURSIVE   │   │ WITH                   │
    │ LIMIT n      │   │ LIMIT n          │   │ FETCH FIRST n ROWS ONLY│
    │ json_extract │   │ jsonb_path_query │   │ JSON_VALUE             │
    └──────────────┘   └──────────────────┘   └────────────────────────┘

Examples:
    >>> from sqlsamples.core.dialect import get_dialect
    >>> d = get_dialect("db2")
    >>> d.limit(5)
    'FETCH FIRST 5 ROWS ONLY'
    >>> get_dialect("sqlite").placeholders(3)
    '?, ?, ?'

Guardrails:
    ❌ DON'T: Write ``LIMIT`` or ``SYSIBM.SYSDUMMY1`` directly in an example
    ✅ DO: Use ``d.limit()`` / ``d.from_dual()``

Tags:
    dialect, sql, abstraction, portability, sqlite, postgresql, db2
"""

from __future__ import annotations

import sqlite3
from typing import Any, Protocol, runtime_checkable

from sqlalchemy.engine import Dialect as SADialect

from sqlsamples.core.errors import ConfigError, UnsupportedDialectError

_DATE_PARTS = ("year", "quarter", "month", "week", "day", "hour")


@runtime_checkable
class Dialect(Protocol):
    """SQL dialect contract.

    Every method returns a **SQL fragment** (string) valid for the target
    engine, except the ``supports_*`` flags and :meth:`is_not_found`.
    """

    @property
    def name(self) -> str:
        """Dialect name (``'sqlite'``, ``'postgresql'``, ``'db2'``)."""
        ...

    @property
    def supports_full_outer_join(self) -> bool:
        ...

    @property
    def supports_grouping_sets(self) -> bool:
        ...

    # -- Placeholders ------------------------------------------------------

    def placeholder(self, index: int) -> str:
        ...

    def placeholders(self, count: int) -> str:
        ...

    # -- Query shape -------------------------------------------------------

    def with_recursive(self) -> str:
        """Keyword that opens a recursive CTE."""
        ...

    def from_dual(self) -> str:
        """``FROM`` clause for a constant ``SELECT`` (leading space included)."""
        ...

    def limit(self, count: int) -> str:
        ...

    def page(self, count: int, offset: int) -> str:
        ...

    def cast_text(self, expr: str, length: int = 1000) -> str:
        """String cast usable in both members of a recursive CTE."""
        ...

    def cast_decimal(self, expr: str) -> str:
        ...

    def materialized(self) -> str:
        """CTE hint that evaluates the CTE once (empty where unsupported)."""
        ...

    # -- Strings -----------------------------------------------------------

    def repeat(self, text: str, count: str) -> str:
        """Repeat the string expression ``text`` ``count`` times."""
        ...

    def position(self, needle: str, haystack: str) -> str:
        """1-based index of ``needle`` in ``haystack``, 0 when absent."""
        ...

    def concat(self, *parts: str) -> str:
        """String concatenation of the given expressions."""
        ...

    def string_agg(self, expr: str, separator: str) -> str:
        """Aggregate ``expr`` values of a group into one delimited string."""
        ...

    def lpad(self, expr: str, width: int, fill: str = "0") -> str:
        """``expr`` as text, left-padded with ``fill`` to ``width`` characters."""
        ...

    # -- Dates -------------------------------------------------------------

    def now(self) -> str:
        ...

    def date_literal(self, value: str) -> str:
        ...

    def timestamp_literal(self, value: str) -> str:
        ...

    def add_days(self, expr: str, days: int | str) -> str:
        ...

    def add_hours(self, expr: str, hours: int | str) -> str:
        ...

    def days_between(self, start: str, end: str) -> str:
        ...

    def extract(self, part: str, expr: str) -> str:
        """Integer date part: year, quarter, month, week, day or hour."""
        ...

    def day_of_week(self, expr: str) -> str:
        """1 = Sunday … 7 = Saturday."""
        ...

    def day_name(self, expr: str) -> str:
        ...

    # -- Random data -------------------------------------------------------

    def random_int(self, low: int, high: int) -> str:
        ...

    def random_float(self) -> str:
        """Uniform value in ``[0, 1)``."""
        ...

    # -- JSON --------------------------------------------------------------

    def json_value(self, column: str, path: str) -> str:
        ...

    def json_query(self, column: str, path: str) -> str:
        """Object or array at ``path`` rendered as JSON text."""
        ...

    def json_exists(self, column: str, path: str) -> str:
        ...

    def json_array_length(self, column: str, path: str) -> str:
        ...

    def json_object(self, pairs: list[tuple[str, str]]) -> str:
        ...

    # -- XML ---------------------------------------------------------------

    def xml_value(self, column: str, path: str) -> str:
        """Text of the element at absolute ``path`` (e.g. ``/profile/address/city``)."""
        ...

    def xml_exists(self, column: str, path: str) -> str:
        ...

    # -- Tuning ------------------------------------------------------------

    def explain(self, sql: str) -> str:
        ...

    def analyze(self, table: str) -> str:
        ...

    def create_index(
        self, index: str, table: str, columns: list[str], include: list[str] | None = None
    ) -> str:
        """Index on ``columns``; ``include`` columns are stored as payload where supported."""
        ...

    def create_table_as(self, table: str, select: str) -> str:
        ...

    # -- DDL / catalog -----------------------------------------------------

    def drop_table(self, table: str, if_exists: bool = False) -> str:
        """``DROP TABLE``; ``if_exists`` renders the form that ignores a missing table."""
        ...

    def drop_view(self, view: str, if_exists: bool = False) -> str:
        ...

    def drop_index(self, index: str, table: str, if_exists: bool = False) -> str:
        ...

    def list_tables_query(self) -> str:
        ...

    def list_views_query(self) -> str:
        ...

    def list_indexes_query(self) -> str:
        ...

    def is_not_found(self, exc: BaseException) -> bool:
        """True when ``exc`` means "object does not exist"."""
        ...

    def sa_dialect(self) -> SADialect:
        """SQLAlchemy dialect used to compile table DDL."""
        ...


# =========================================================================
# Concrete Dialect Implementations
# =========================================================================


class SQLiteDialect:
    """SQLite dialect: ``?`` placeholders, ``strftime`` date parts."""

    @property
    def name(self) -> str:
        return "sqlite"

    @property
    def supports_full_outer_join(self) -> bool:
        return sqlite3.sqlite_version_info >= (3, 39, 0)

    @property
    def supports_grouping_sets(self) -> bool:
        return False

    # -- Placeholders ------------------------------------------------------

    def placeholder(self, index: int) -> str:  # noqa: ARG002
        return "?"

    def placeholders(self, count: int) -> str:
        return ", ".join("?" for _ in range(count))

    # -- Query shape -------------------------------------------------------

    def with_recursive(self) -> str:
        return "WITH RECURSIVE"

    def from_dual(self) -> str:
        return ""

    def limit(self, count: int) -> str:
        return f"LIMIT {count}"

    def page(self, count: int, offset: int) -> str:
        return f"LIMIT {count} OFFSET {offset}"

    def cast_text(self, expr: str, length: int = 1000) -> str:  # noqa: ARG002
        return f"CAST({expr} AS TEXT)"

    def cast_decimal(self, expr: str) -> str:
        return f"CAST({expr} AS REAL)"

    def materialized(self) -> str:
        # random() in a CTE is otherwise re-evaluated per reference
        return "MATERIALIZED " if sqlite3.sqlite_version_info >= (3, 35, 0) else ""

    # -- Strings -----------------------------------------------------------

    def repeat(self, text: str, count: str) -> str:
        # hex(zeroblob(n)) is n copies of '00'
        return f"replace(hex(zeroblob({count})), '00', {text})"

    def position(self, needle: str, haystack: str) -> str:
        return f"instr({haystack}, {needle})"

    def concat(self, *parts: str) -> str:
        return _concat(parts)

    def string_agg(self, expr: str, separator: str) -> str:
        return f"group_concat({expr}, '{separator}')"

    def lpad(self, expr: str, width: int, fill: str = "0") -> str:
        return f"substr('{fill * width}' || ({expr}), -{width}, {width})"

    # -- Dates -------------------------------------------------------------

    def now(self) -> str:
        return "datetime('now')"

    def date_literal(self, value: str) -> str:
        return f"'{value}'"

    def timestamp_literal(self, value: str) -> str:
        return f"'{value}'"

    def add_days(self, expr: str, days: int | str) -> str:
        return f"date({expr}, ({days}) || ' days')"

    def add_hours(self, expr: str, hours: int | str) -> str:
        return f"datetime({expr}, ({hours}) || ' hours')"

    def days_between(self, start: str, end: str) -> str:
        return f"CAST(julianday({end}) - julianday({start}) AS INTEGER)"

    def extract(self, part: str, expr: str) -> str:
        part = _check_part(part)
        if part == "quarter":
            return f"((CAST(strftime('%m', {expr}) AS INTEGER) + 2) / 3)"
        fmt = {"year": "%Y", "month": "%m", "week": "%W", "day": "%d", "hour": "%H"}[part]
        return f"CAST(strftime('{fmt}', {expr}) AS INTEGER)"

    def day_of_week(self, expr: str) -> str:
        return f"(CAST(strftime('%w', {expr}) AS INTEGER) + 1)"

    def day_name(self, expr: str) -> str:
        names = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]
        whens = " ".join(f"WHEN '{i}' THEN '{n}'" for i, n in enumerate(names))
        return f"CASE strftime('%w', {expr}) {whens} END"

    # -- Random data -------------------------------------------------------

    def random_int(self, low: int, high: int) -> str:
        return f"(abs(random()) % ({high} - {low} + 1) + {low})"

    def random_float(self) -> str:
        return "((abs(random()) % 1000000) / 1000000.0)"

    # -- JSON --------------------------------------------------------------

    def json_value(self, column: str, path: str) -> str:
        return f"json_extract({column}, '{path}')"

    def json_query(self, column: str, path: str) -> str:
        return f"json_extract({column}, '{path}')"

    def json_exists(self, column: str, path: str) -> str:
        return f"json_type({column}, '{path}') IS NOT NULL"

    def json_array_length(self, column: str, path: str) -> str:
        return f"json_array_length({column}, '{path}')"

    def json_object(self, pairs: list[tuple[str, str]]) -> str:
        args = ", ".join(f"'{key}', {expr}" for key, expr in pairs)
        return f"json_object({args})"

    # -- XML ---------------------------------------------------------------

    # xml_value / xml_exists are registered on each connection by SQLiteAdapter

    def xml_value(self, column: str, path: str) -> str:
        return f"xml_value({column}, '{path}')"

    def xml_exists(self, column: str, path: str) -> str:
        return f"xml_exists({column}, '{path}') = 1"

    # -- Tuning ------------------------------------------------------------

    def explain(self, sql: str) -> str:
        return f"EXPLAIN QUERY PLAN {sql}"

    def analyze(self, table: str) -> str:
        return f"ANALYZE {table}"

    def create_index(
        self, index: str, table: str, columns: list[str], include: list[str] | None = None
    ) -> str:
        return f"CREATE INDEX {index} ON {table} ({', '.join([*columns, *(include or [])])})"

    def create_table_as(self, table: str, select: str) -> str:
        return f"CREATE TABLE {table} AS {select}"

    # -- DDL / catalog -----------------------------------------------------

    def drop_table(self, table: str, if_exists: bool = False) -> str:
        return f"DROP TABLE {'IF EXISTS ' if if_exists else ''}{table}"

    def drop_view(self, view: str, if_exists: bool = False) -> str:
        return f"DROP VIEW {'IF EXISTS ' if if_exists else ''}{view}"

    def drop_index(self, index: str, table: str, if_exists: bool = False) -> str:  # noqa: ARG002
        return f"DROP INDEX {'IF EXISTS ' if if_exists else ''}{index}"

    def list_tables_query(self) -> str:
        return (
            "SELECT name FROM sqlite_master WHERE type = 'table' "
            "AND name NOT LIKE 'sqlite_%' ORDER BY name"
        )

    def list_views_query(self) -> str:
        return "SELECT name FROM sqlite_master WHERE type = 'view' ORDER BY name"

    def list_indexes_query(self) -> str:
        return (
            "SELECT name FROM sqlite_master WHERE type = 'index' "
            "AND name NOT LIKE 'sqlite_autoindex%' ORDER BY name"
        )

    def is_not_found(self, exc: BaseException) -> bool:
        message = str(exc).lower()
        return any(f"no such {kind}" in message for kind in ("table", "view", "index"))

    def sa_dialect(self) -> SADialect:
        from sqlalchemy.dialects import sqlite

        return sqlite.dialect()


class PostgreSQLDialect:
    """PostgreSQL dialect: ``%s`` placeholders (psycopg2), ``jsonb`` paths."""

    @property
    def name(self) -> str:
        return "postgresql"

    @property
    def supports_full_outer_join(self) -> bool:
        return True

    @property
    def supports_grouping_sets(self) -> bool:
        return True

    def placeholder(self, index: int) -> str:  # noqa: ARG002
        return "%s"

    def placeholders(self, count: int) -> str:
        return ", ".join("%s" for _ in range(count))

    def with_recursive(self) -> str:
        return "WITH RECURSIVE"

    def from_dual(self) -> str:
        return ""

    def limit(self, count: int) -> str:
        return f"LIMIT {count}"

    def page(self, count: int, offset: int) -> str:
        return f"LIMIT {count} OFFSET {offset}"

    def cast_text(self, expr: str, length: int = 1000) -> str:  # noqa: ARG002
        # recursive members must agree on type; varchar(n) || text is text
        return f"CAST({expr} AS TEXT)"

    def cast_decimal(self, expr: str) -> str:
        return f"CAST({expr} AS NUMERIC)"

    def materialized(self) -> str:
        return "MATERIALIZED "

    def repeat(self, text: str, count: str) -> str:
        return f"repeat({text}, {count})"

    def position(self, needle: str, haystack: str) -> str:
        return f"strpos({haystack}, {needle})"

    def concat(self, *parts: str) -> str:
        return _concat(parts)

    def string_agg(self, expr: str, separator: str) -> str:
        return f"string_agg(CAST({expr} AS TEXT), '{separator}')"

    def lpad(self, expr: str, width: int, fill: str = "0") -> str:
        return f"lpad(CAST({expr} AS TEXT), {width}, '{fill}')"

    def now(self) -> str:
        return "NOW()"

    def date_literal(self, value: str) -> str:
        return f"DATE '{value}'"

    def timestamp_literal(self, value: str) -> str:
        return f"TIMESTAMP '{value}'"

    def add_days(self, expr: str, days: int | str) -> str:
        return f"CAST({expr} + ({days}) * INTERVAL '1 day' AS DATE)"

    def add_hours(self, expr: str, hours: int | str) -> str:
        return f"({expr} + ({hours}) * INTERVAL '1 hour')"

    def days_between(self, start: str, end: str) -> str:
        return f"(CAST({end} AS DATE) - CAST({start} AS DATE))"

    def extract(self, part: str, expr: str) -> str:
        part = _check_part(part)
        return f"CAST(EXTRACT({part.upper()} FROM {expr}) AS INTEGER)"

    def day_of_week(self, expr: str) -> str:
        return f"(CAST(EXTRACT(DOW FROM {expr}) AS INTEGER) + 1)"

    def day_name(self, expr: str) -> str:
        return f"TRIM(to_char({expr}, 'Day'))"

    def random_int(self, low: int, high: int) -> str:
        return f"CAST(floor(random() * ({high} - {low} + 1)) + {low} AS INTEGER)"

    def random_float(self) -> str:
        return "random()"

    def json_value(self, column: str, path: str) -> str:
        return f"(jsonb_path_query_first(CAST({column} AS JSONB), '{path}') #>> '{{}}')"

    def json_query(self, column: str, path: str) -> str:
        return f"CAST(jsonb_path_query_first(CAST({column} AS JSONB), '{path}') AS TEXT)"

    def json_exists(self, column: str, path: str) -> str:
        return f"jsonb_path_exists(CAST({column} AS JSONB), '{path}')"

    def json_array_length(self, column: str, path: str) -> str:
        return f"jsonb_array_length(jsonb_path_query_first(CAST({column} AS JSONB), '{path}'))"

    def json_object(self, pairs: list[tuple[str, str]]) -> str:
        args = ", ".join(f"'{key}', {expr}" for key, expr in pairs)
        return f"json_build_object({args})"

    def xml_value(self, column: str, path: str) -> str:
        return f"CAST((xpath('{path}/text()', CAST({column} AS XML)))[1] AS TEXT)"

    def xml_exists(self, column: str, path: str) -> str:
        return f"xpath_exists('{path}', CAST({column} AS XML))"

    def explain(self, sql: str) -> str:
        return f"EXPLAIN {sql}"

    def analyze(self, table: str) -> str:
        return f"ANALYZE {table}"

    def create_index(
        self, index: str, table: str, columns: list[str], include: list[str] | None = None
    ) -> str:
        sql = f"CREATE INDEX {index} ON {table} ({', '.join(columns)})"
        return f"{sql} INCLUDE ({', '.join(include)})" if include else sql

    def create_table_as(self, table: str, select: str) -> str:
        return f"CREATE TABLE {table} AS {select}"

    def drop_table(self, table: str, if_exists: bool = False) -> str:
        return f"DROP TABLE {'IF EXISTS ' if if_exists else ''}{table}"

    def drop_view(self, view: str, if_exists: bool = False) -> str:
        return f"DROP VIEW {'IF EXISTS ' if if_exists else ''}{view}"

    def drop_index(self, index: str, table: str, if_exists: bool = False) -> str:  # noqa: ARG002
        return f"DROP INDEX {'IF EXISTS ' if if_exists else ''}{index}"

    def list_tables_query(self) -> str:
        return (
            "SELECT tablename FROM pg_tables "
            "WHERE schemaname = current_schema() ORDER BY tablename"
        )

    def list_views_query(self) -> str:
        return (
            "SELECT viewname FROM pg_views "
            "WHERE schemaname = current_schema() ORDER BY viewname"
        )

    def list_indexes_query(self) -> str:
        return (
            "SELECT indexname FROM pg_indexes "
            "WHERE schemaname = current_schema() AND indexname NOT LIKE '%_pkey' "
            "ORDER BY indexname"
        )

    def is_not_found(self, exc: BaseException) -> bool:
        # undefined_table, undefined_object
        return getattr(exc, "pgcode", None) in {"42P01", "42704"}

    def sa_dialect(self) -> SADialect:
        from sqlalchemy.dialects import postgresql

        return postgresql.dialect()


class DB2Dialect:
    """DB2 LUW dialect: ``?`` placeholders, ``SYSIBM.SYSDUMMY1``, SQL/XML."""

    @property
    def name(self) -> str:
        return "db2"

    @property
    def supports_full_outer_join(self) -> bool:
        return True

    @property
    def supports_grouping_sets(self) -> bool:
        return True

    def placeholder(self, index: int) -> str:  # noqa: ARG002
        return "?"

    def placeholders(self, count: int) -> str:
        return ", ".join("?" for _ in range(count))

    def with_recursive(self) -> str:
        return "WITH"

    def from_dual(self) -> str:
        return " FROM SYSIBM.SYSDUMMY1"

    def limit(self, count: int) -> str:
        return f"FETCH FIRST {count} ROWS ONLY"

    def page(self, count: int, offset: int) -> str:
        return f"OFFSET {offset} ROWS FETCH FIRST {count} ROWS ONLY"

    def cast_text(self, expr: str, length: int = 1000) -> str:
        return f"CAST({expr} AS VARCHAR({length}))"

    def cast_decimal(self, expr: str) -> str:
        return f"CAST({expr} AS DECIMAL(15,2))"

    def materialized(self) -> str:
        return ""

    def repeat(self, text: str, count: str) -> str:
        return f"REPEAT({text}, {count})"

    def position(self, needle: str, haystack: str) -> str:
        return f"LOCATE({needle}, {haystack})"

    def concat(self, *parts: str) -> str:
        return _concat(parts)

    def string_agg(self, expr: str, separator: str) -> str:
        return f"LISTAGG(CAST({expr} AS VARCHAR(200)), '{separator}')"

    def lpad(self, expr: str, width: int, fill: str = "0") -> str:
        return f"LPAD(CAST({expr} AS VARCHAR(20)), {width}, '{fill}')"

    def now(self) -> str:
        return "CURRENT TIMESTAMP"

    def date_literal(self, value: str) -> str:
        return f"DATE('{value}')"

    def timestamp_literal(self, value: str) -> str:
        return f"TIMESTAMP('{value}')"

    def add_days(self, expr: str, days: int | str) -> str:
        return f"({expr} + ({days}) DAYS)"

    def add_hours(self, expr: str, hours: int | str) -> str:
        return f"({expr} + ({hours}) HOURS)"

    def days_between(self, start: str, end: str) -> str:
        return f"(DAYS({end}) - DAYS({start}))"

    def extract(self, part: str, expr: str) -> str:
        part = _check_part(part)
        return f"{part.upper()}({expr})"

    def day_of_week(self, expr: str) -> str:
        return f"DAYOFWEEK({expr})"

    def day_name(self, expr: str) -> str:
        return f"DAYNAME({expr})"

    def random_int(self, low: int, high: int) -> str:
        return f"(INT(RAND() * ({high} - {low} + 1)) + {low})"

    def random_float(self) -> str:
        return "RAND()"

    def json_value(self, column: str, path: str) -> str:
        return f"JSON_VALUE({column}, '{path}' RETURNING VARCHAR(200))"

    def json_query(self, column: str, path: str) -> str:
        return f"JSON_QUERY({column}, '{path}')"

    def json_exists(self, column: str, path: str) -> str:
        return f"JSON_EXISTS({column}, '{path}')"

    def json_array_length(self, column: str, path: str) -> str:
        # No native length function; counts separators of a flat array
        arr = f"JSON_QUERY({column}, '{path}')"
        return f"(LENGTH({arr}) - LENGTH(REPLACE({arr}, ',', '')) + 1)"

    def json_object(self, pairs: list[tuple[str, str]]) -> str:
        args = ", ".join(f"KEY '{key}' VALUE {expr}" for key, expr in pairs)
        return f"JSON_OBJECT({args})"

    def xml_value(self, column: str, path: str) -> str:
        return (
            f"XMLCAST(XMLQUERY('$d{path}' PASSING XMLPARSE(DOCUMENT {column}) AS \"d\") "
            f"AS VARCHAR(200))"
        )

    def xml_exists(self, column: str, path: str) -> str:
        return f"XMLEXISTS('$d{path}' PASSING XMLPARSE(DOCUMENT {column}) AS \"d\")"

    def explain(self, sql: str) -> str:
        raise UnsupportedDialectError(
            "DB2 writes plans to explain tables; run db2expln or EXPLAIN PLAN FOR manually"
        )

    def analyze(self, table: str) -> str:
        return (
            f"CALL SYSPROC.ADMIN_CMD('RUNSTATS ON TABLE {table} "
            f"WITH DISTRIBUTION AND INDEXES ALL')"
        )

    def create_index(
        self, index: str, table: str, columns: list[str], include: list[str] | None = None
    ) -> str:
        # INCLUDE is only accepted on unique indexes
        return f"CREATE INDEX {index} ON {table} ({', '.join([*columns, *(include or [])])})"

    def create_table_as(self, table: str, select: str) -> str:
        return f"CREATE TABLE {table} AS ({select}) WITH DATA"

    def drop_table(self, table: str, if_exists: bool = False) -> str:
        return f"DROP TABLE {'IF EXISTS ' if if_exists else ''}{table}"

    def drop_view(self, view: str, if_exists: bool = False) -> str:
        return f"DROP VIEW {'IF EXISTS ' if if_exists else ''}{view}"

    def drop_index(self, index: str, table: str, if_exists: bool = False) -> str:  # noqa: ARG002
        if not if_exists:
            return f"DROP INDEX {index}"
        # DROP INDEX has no IF EXISTS form; SQLSTATE 42704 is "undefined object"
        return (
            "BEGIN\n"
            "    DECLARE CONTINUE HANDLER FOR SQLSTATE '42704' BEGIN END;\n"
            f"    DROP INDEX {index};\n"
            "END"
        )

    def list_tables_query(self) -> str:
        return (
            "SELECT LOWER(TABNAME) FROM SYSCAT.TABLES "
            "WHERE TABSCHEMA = CURRENT SCHEMA AND TYPE = 'T' ORDER BY TABNAME"
        )

    def list_views_query(self) -> str:
        return (
            "SELECT LOWER(TABNAME) FROM SYSCAT.TABLES "
            "WHERE TABSCHEMA = CURRENT SCHEMA AND TYPE = 'V' ORDER BY TABNAME"
        )

    def list_indexes_query(self) -> str:
        return (
            "SELECT LOWER(INDNAME) FROM SYSCAT.INDEXES "
            "WHERE INDSCHEMA = CURRENT SCHEMA AND UNIQUERULE <> 'P' ORDER BY INDNAME"
        )

    def is_not_found(self, exc: BaseException) -> bool:
        text = str(exc)
        return "SQLSTATE=42704" in text or "SQL0204N" in text

    def sa_dialect(self) -> SADialect:
        from sqlalchemy.engine import URL
        from sqlalchemy.exc import NoSuchModuleError

        try:
            return URL.create("db2+ibm_db").get_dialect()()
        except NoSuchModuleError:
            raise ConfigError(
                "ibm-db-sa is required to compile DB2 DDL. Install with: pip install sqlsamples[db2]"
            ) from None


def _concat(parts: tuple[str, ...]) -> str:
    # || is ANSI and accepted by all three engines
    return "(" + " || ".join(parts) + ")"


def _check_part(part: str) -> str:
    part = part.lower()
    if part not in _DATE_PARTS:
        raise ValueError(f"Unknown date part '{part}'. Supported: {list(_DATE_PARTS)}")
    return part


# =========================================================================
# Registry
# =========================================================================

_DIALECTS: dict[str, Any] = {
    "sqlite": SQLiteDialect(),
    "postgresql": PostgreSQLDialect(),
    "postgres": PostgreSQLDialect(),
    "db2": DB2Dialect(),
}


def get_dialect(db_type: str) -> Dialect:
    """Get a dialect by database type name.

    Raises:
        ValueError: If ``db_type`` is not recognised.
    """
    key = db_type.lower() if isinstance(db_type, str) else db_type.value
    if key not in _DIALECTS:
        raise ValueError(
            f"Unknown dialect '{db_type}'. "
            f"Supported: {sorted(set(_DIALECTS) - {'postgres'})}"
        )
    return _DIALECTS[key]


def register_dialect(name: str, dialect: Dialect) -> None:
    """Register a custom dialect implementation."""
    _DIALECTS[name.lower()] = dialect


def list_dialects() -> list[str]:
    return sorted(set(_DIALECTS) - {"postgres"})


__all__ = [
    "Dialect",
    "SQLiteDialect",
    "PostgreSQLDialect",
    "DB2Dialect",
    "get_dialect",
    "register_dialect",
    "list_dialects",
]
