"""Join pattern examples against the seeded SQLite database."""

from __future__ import annotations

import pytest

from sqlsamples.core.dialect import get_dialect
from sqlsamples.examples import get_registry


class TestSemiAndAntiJoins:
    def test_anti_join(self, run):
        assert run("joins.anti_join").column("product_id") == [2, 5, 8, 15, 16, 17, 18]

    def test_exists_vs_in_runs_every_form(self, run):
        result = run("joins.exists_vs_in")
        assert result.statements == 3
        assert result.row_count == 7
        assert "Acme Corporation" in result.column("customer_name")


class TestJoinShapes:
    def test_self_join(self, run):
        rows = run("joins.self_join").as_dicts()
        assert len(rows) == 20
        assert rows[0]["salary_comparison"] == "NO MANAGER"
        assert rows[0]["manager"] is None

    def test_cross_join(self, run):
        result = run("joins.cross_join")
        assert result.row_count == 50
        assert result.column("purchase_status").count("PURCHASED") == 7

    def test_range_join(self, run):
        rows = run("joins.range_join").as_dicts()
        assert len(rows) == 9
        assert all(0 <= r["days_apart"] <= 14 for r in rows)

    def test_inequality_pairs(self, run):
        for row in run("joins.inequality_pairs").as_dicts():
            assert row["salary1"] != row["salary2"]
            assert row["salary_gap"] > 0

    def test_top_n_per_customer(self, run):
        result = run("joins.top_n_per_customer")
        assert result.row_count == 12
        assert max(result.column("order_rank")) == 2

    def test_full_outer_comparison(self, run):
        rows = {r["product_id"]: r for r in run("joins.full_outer_comparison").as_dicts()}
        assert len(rows) == 9
        assert rows[6]["trend"] == "INCREASED"
        assert rows[1]["trend"] == "ONLY IN JAN"
        assert rows[9]["trend"] == "NEW IN FEB"
        assert rows[9]["jan_sales"] == 0


class TestAggregatingJoins:
    def test_multi_table_aggregation(self, run):
        result = run("joins.multi_table_aggregation")
        assert result.row_count == 10
        acme = next(r for r in result.as_dicts() if r["customer_name"] == "Acme Corporation")
        assert acme["total_orders"] == 2
        assert "UltraBook Pro 15" in acme["products_purchased"]

    def test_multi_category_customers(self, run):
        result = run("joins.multi_category_customers")
        assert result.column("customer_name") == ["Acme Corporation", "Global Traders Ltd"]
        assert result.column("categories_purchased") == [3, 3]

    def test_derived_table_join(self, run):
        result = run("joins.derived_table_join")
        assert result.row_count == 10
        assert set(result.column("customer_tier")) <= {"PREMIUM", "STANDARD", "BASIC"}

    def test_multi_level_aggregation(self, run):
        revenue = run("joins.multi_level_aggregation").column("total_revenue")
        assert revenue == sorted(revenue, reverse=True)

    def test_join_with_windows(self, run):
        rows = [r for r in run("joins.join_with_windows").as_dicts() if r["customer_name"] == "Acme Corporation"]
        assert [r["order_sequence"] for r in rows] == [1, 2]
        assert rows[-1]["running_total"] == pytest.approx(15679.85 + 21345.60)

    def test_conditional_join(self, run):
        rows = run("joins.conditional_join").as_dicts()
        assert len(rows) == 12
        assert rows[0]["match_type"] == "EXACT MATCH"


    def test_category_tree_products(self, run):
        rows = run("joins.category_tree_products").as_dicts()
        assert [(r["cat_name"], r["level"], r["product_count"]) for r in rows] == [
            ("Electronics", 1, 0),
            ("Computers", 2, 0),
            ("Laptops", 3, 3),
            ("Desktops", 3, 2),
            ("Mobile Devices", 2, 0),
            ("Smartphones", 3, 3),
            ("Tablets", 3, 2),
            ("Audio", 2, 0),
            ("Headphones", 3, 2),
            ("Speakers", 3, 2),
        ]
        laptops = next(r for r in rows if r["cat_name"] == "Laptops")
        assert set(laptops["products"].split(", ")) == {
            "UltraBook Pro 15",
            "Business Laptop X1",
            "Gaming Laptop Beast",
        }
        assert rows[0]["products"] is None


class TestGroupingRollup:
    def test_grand_total_row(self, run):
        rows = run("joins.grouping_rollup").as_dicts()
        grand = next(r for r in rows if r["cat_name"] is None)
        assert grand["total_quantity"] == 303
        assert grand["order_count"] == 5

    def test_uses_grouping_sets_where_supported(self):
        example = get_registry().get("joins.grouping_rollup")
        assert "GROUPING SETS" in example.render(get_dialect("postgresql"))
        assert "UNION ALL" in example.render(get_dialect("sqlite"))
