"""Sample schema: table metadata, views and DDL execution.

Architecture::

    tables.py   SQLAlchemy declarative tables, grouped (core / temporal / semistructured)
    views.py    Portable view definitions over the core tables
    ddl.py      create/drop statements, setup_schema, drop_all, catalog, script rendering
"""

from sqlsamples.schema.ddl import (
    Catalog,
    CleanupReport,
    catalog,
    cleanup_steps,
    create_statements,
    drop_all,
    drop_statements,
    render_cleanup_script,
    render_setup_script,
    setup_schema,
)
from sqlsamples.schema.tables import (
    ALL_GROUPS,
    END_OF_TIME,
    OrderStatus,
    SampleBase,
    TableGroup,
    table_names,
    tables_for,
)

__all__ = [
    "ALL_GROUPS",
    "END_OF_TIME",
    "Catalog",
    "CleanupReport",
    "OrderStatus",
    "SampleBase",
    "TableGroup",
    "catalog",
    "cleanup_steps",
    "create_statements",
    "drop_all",
    "drop_statements",
    "render_cleanup_script",
    "render_setup_script",
    "setup_schema",
    "table_names",
    "tables_for",
]
