"""Tests for ``sqlsamples.schema.ddl``: setup, catalog, cleanup, rendering."""

from __future__ import annotations

import pytest

from sqlsamples.core.dialect import get_dialect
from sqlsamples.schema.ddl import (
    catalog,
    cleanup_steps,
    create_statements,
    drop_all,
    drop_steps,
    render_cleanup_script,
    render_setup_script,
    setup_schema,
)
from sqlsamples.schema.tables import ALL_GROUPS, TableGroup, table_names
from sqlsamples.schema.views import view_names
from sqlsamples.seed.loader import row_counts, seed_all

CORE_TABLES = [
    "departments",
    "employees",
    "categories",
    "products",
    "customers",
    "orders",
    "order_items",
    "bill_of_materials",
    "graph_edges",
    "sales",
    "stock_prices",
    "transactions",
]


class TestTableGroups:
    def test_core_order_is_parents_first(self):
        assert table_names([TableGroup.CORE]) == CORE_TABLES

    def test_all_groups(self):
        names = table_names(ALL_GROUPS)
        assert names[: len(CORE_TABLES)] == CORE_TABLES
        assert "employee_history" in names
        assert "customer_profiles" in names


class TestCreateStatements:
    def test_core_includes_views(self):
        statements = create_statements(get_dialect("sqlite"))
        assert statements[0].startswith("CREATE TABLE departments")
        views = [s for s in statements if s.startswith("CREATE VIEW")]
        assert len(views) == len(view_names())

    def test_temporal_only_has_no_views(self):
        statements = create_statements(get_dialect("sqlite"), [TableGroup.TEMPORAL])
        assert not any(s.startswith("CREATE VIEW") for s in statements)
        assert any("employee_history" in s for s in statements)

    def test_no_trailing_semicolons(self):
        assert not any(s.endswith(";") for s in create_statements(get_dialect("postgresql")))

    def test_string_group_names(self):
        assert create_statements(get_dialect("sqlite"), ["semistructured"])

    def test_unknown_group(self):
        with pytest.raises(ValueError):
            create_statements(get_dialect("sqlite"), ["nonsense"])

    def test_generated_columns_compile(self):
        ddl = " ".join(create_statements(get_dialect("postgresql")))
        assert "GENERATED ALWAYS AS" in ddl


class TestDropSteps:
    def test_views_first_then_children(self):
        steps = drop_steps(get_dialect("sqlite"))
        kinds = [s.kind for s in steps]
        assert kinds[: len(view_names())] == ["view"] * len(view_names())
        tables = [s.name for s in steps if s.kind == "table"]
        assert tables == list(reversed(CORE_TABLES))

    def test_cleanup_covers_everything(self):
        names = {s.name for s in cleanup_steps(get_dialect("db2"))}
        assert set(table_names(ALL_GROUPS)) <= names
        assert "customer_order_summary" in names
        assert "idx_orders_customer_date" in names


class TestSetupSchema:
    def test_creates_core(self, adapter):
        created = setup_schema(adapter)
        assert created == CORE_TABLES
        present = catalog(adapter)
        assert present.tables == sorted(CORE_TABLES)
        assert present.views == sorted(view_names())

    def test_repeatable(self, adapter):
        setup_schema(adapter)
        first = catalog(adapter).to_dict()
        setup_schema(adapter)
        assert catalog(adapter).to_dict() == first

    def test_replaces_data(self, seeded):
        assert row_counts(seeded)["employees"] == 20
        setup_schema(seeded)
        assert row_counts(seeded)["employees"] == 0

    def test_other_groups_untouched(self, seeded):
        setup_schema(seeded, [TableGroup.TEMPORAL])
        assert "employee_history" in catalog(seeded).tables
        assert row_counts(seeded)["employees"] == 20

    def test_catalog_ignores_foreign_objects(self, adapter):
        adapter.execute("CREATE TABLE not_a_sample (x INTEGER)")
        assert catalog(adapter).is_empty


class TestDropAll:
    def test_cleanup_empties_catalog(self, seeded):
        setup_schema(seeded, ALL_GROUPS)
        report = drop_all(seeded)
        assert catalog(seeded).is_empty
        assert set(table_names(ALL_GROUPS)) <= set(report.dropped)
        assert "customer_order_summary" in report.missing

    def test_cleanup_on_empty_database(self, adapter):
        report = drop_all(adapter)
        assert report.dropped == []
        assert len(report.missing) == len(cleanup_steps(adapter.dialect))

    def test_cleanup_twice(self, seeded):
        drop_all(seeded)
        assert drop_all(seeded).dropped == []


class TestRenderScripts:
    def test_setup_script(self):
        text = render_setup_script(get_dialect("sqlite"))
        assert text.startswith("-- ===")
        assert "Sample schema setup (sqlite)" in text
        assert "CREATE TABLE product_catalog" in text
        assert text.rstrip().endswith(";")

    def test_setup_script_drops_first(self):
        text = render_setup_script(get_dialect("sqlite"))
        assert "DROP VIEW IF EXISTS customer_summary;" in text
        assert text.index("DROP TABLE IF EXISTS order_items;") < text.index(
            "DROP TABLE IF EXISTS departments;"
        )
        assert text.index("DROP TABLE IF EXISTS departments;") < text.index(
            "CREATE TABLE departments"
        )

    def test_cleanup_script(self):
        text = render_cleanup_script(get_dialect("postgresql"))
        assert "DROP VIEW IF EXISTS customer_summary;" in text
        assert "DROP TABLE IF EXISTS departments;" in text
        assert "DROP INDEX IF EXISTS idx_orders_customer_date;" in text

    def test_cleanup_steps_unguarded_by_default(self):
        steps = cleanup_steps(get_dialect("sqlite"))
        assert all("IF EXISTS" not in s.sql for s in steps)
        guarded = cleanup_steps(get_dialect("sqlite"), if_exists=True)
        assert [s.name for s in guarded] == [s.name for s in steps]
        assert all("IF EXISTS" in s.sql for s in guarded)
