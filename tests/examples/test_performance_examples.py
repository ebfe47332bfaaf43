"""Performance tuning examples, including the ones that create schema objects."""

from __future__ import annotations

import pytest

from sqlsamples.core.dialect import get_dialect
from sqlsamples.core.errors import UnsupportedDialectError
from sqlsamples.examples import get_registry
from sqlsamples.examples.performance import prepare
from sqlsamples.schema.ddl import catalog

TUNING_INDEXES = {"idx_orders_customer_date", "idx_orders_status_date", "idx_order_items_product"}


class TestSchemaChanges:
    def test_strategic_indexes(self, run, seeded):
        result = run("performance.strategic_indexes")
        assert TUNING_INDEXES <= set(result.column(result.columns[0]))
        assert TUNING_INDEXES <= set(catalog(seeded).indexes)

    def test_covering_index(self, run, seeded):
        result = run("performance.covering_index")
        assert result.row_count == 5
        assert {str(d)[:7] for d in result.column("sale_date")} == {"2024-01"}
        assert "idx_sales_date_product_customer" in catalog(seeded).indexes

    def test_summary_table(self, run):
        rows = run("performance.summary_table").as_dicts()
        assert [r["customer_name"] for r in rows] == [
            "Tech Solutions Inc",
            "MegaMart Retail",
            "Asia Pacific Trading",
        ]
        assert rows[0]["total_spent"] == pytest.approx(28945.50 + 39876.45)

    def test_prepare_allows_rerun(self, run, seeded):
        run("performance.strategic_indexes")
        run("performance.summary_table")
        prepare(seeded)
        assert not TUNING_INDEXES & set(catalog(seeded).indexes)
        assert "customer_order_summary" not in catalog(seeded).tables
        run("performance.strategic_indexes")
        assert run("performance.summary_table").row_count == 3

    def test_statistics_refresh(self, run):
        assert run("performance.statistics_refresh").column("orders_analyzed") == [12]


class TestRewrites:
    def test_subquery_rewrite(self, run):
        result = run("performance.subquery_rewrite")
        assert result.statements == 2
        assert result.row_count == 12
        assert result.as_dicts()[0]["item_count"] == 3

    def test_pagination_second_page(self, run):
        assert run("performance.pagination").column("product_id") == list(range(11, 21))

    def test_filter_then_join(self, run):
        assert run("performance.filter_then_join").row_count == 3

    def test_exists_vs_in(self, run):
        assert run("performance.exists_vs_in").row_count == 5

    def test_sargable_date_range(self, run):
        assert run("performance.sargable_date_range").column("order_id") == [10, 11, 12]

    def test_cte_rewrite(self, run):
        rows = run("performance.cte_rewrite").as_dicts()
        assert [r["order_id"] for r in rows] == list(range(6, 13))
        assert all(r["items"] == 0 for r in rows)


class TestExplainPlan:
    def test_sqlite_plan(self, run):
        assert run("performance.explain_plan").row_count > 0

    def test_not_available_on_db2(self):
        example = get_registry().get("performance.explain_plan")
        assert not example.supports(get_dialect("db2"))
        with pytest.raises(UnsupportedDialectError, match="not available for db2"):
            example.render(get_dialect("db2"))

    def test_postgres_uses_explain(self):
        sql = get_registry().get("performance.explain_plan").render(get_dialect("postgresql"))
        assert sql.startswith("EXPLAIN SELECT")
