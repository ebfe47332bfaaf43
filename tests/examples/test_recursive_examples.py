"""Recursive CTE examples against the seeded SQLite database."""

from __future__ import annotations

import datetime


class TestHierarchies:
    def test_employee_hierarchy(self, run):
        result = run("recursive.employee_hierarchy")
        assert result.row_count == 20
        root = result.as_dicts()[0]
        assert root["level"] == 1
        assert root["path"] == "Sarah Johnson"
        assert max(result.column("level")) <= 10

    def test_indentation_follows_level(self, run):
        for row in run("recursive.employee_hierarchy").as_dicts():
            indent = len(row["hierarchy_view"]) - len(row["hierarchy_view"].lstrip(" "))
            assert indent == 2 * (row["level"] - 1)

    def test_org_metrics(self, run):
        rows = {r["emp_name"]: r for r in run("recursive.org_metrics").as_dicts()}
        assert len(rows) == 20
        ceo = rows["Sarah Johnson"]
        assert ceo["level"] == 1
        assert ceo["direct_reports"] == 4
        assert ceo["total_reports"] == 19

    def test_category_tree(self, run):
        result = run("recursive.category_tree")
        assert result.row_count == 19
        totals = {r["category_hierarchy"].strip(): r["total_products_in_tree"] for r in result.as_dicts()}
        assert totals["Electronics"] == 14

    def test_bom_explosion(self, run):
        result = run("recursive.bom_explosion")
        assert result.row_count == 8
        first = result.as_dicts()[0]
        assert first["component_part"] == "PART-H"
        assert first["total_needed"] == 12
        assert first["max_depth"] == 3
        needed = dict(zip(result.column("component_part"), result.column("total_needed"), strict=True))
        assert needed == {
            "PART-A": 2,
            "PART-B": 4,
            "PART-C": 1,
            "PART-D": 6,
            "PART-E": 4,
            "PART-F": 4,
            "PART-G": 5,
            "PART-H": 12,
        }


class TestGraphs:
    def test_path_finding(self, run):
        result = run("recursive.path_finding")
        assert result.row_count == 5
        assert result.rows[0][2:] == ("A -> C -> E -> Z", 3)
        assert all(path.startswith("A -> ") for path in result.column("path"))

    def test_paths_never_revisit_nodes(self, run):
        for path in run("recursive.path_finding").column("path"):
            nodes = path.split(" -> ")
            assert len(nodes) == len(set(nodes))

    def test_shortest_path(self, run):
        result = run("recursive.shortest_path")
        assert result.row_count == 1
        row = result.as_dicts()[0]
        assert row["path"] == "START -> A -> B -> END"
        assert float(row["min_cost"]) == 12

    def test_cascade_delete_preview(self, run):
        result = run("recursive.cascade_delete_preview")
        assert [tuple(r) for r in result.rows] == [("orders", 1, 1), ("order_items", 3, 2)]


class TestSeries:
    def test_number_series(self, run):
        assert run("recursive.number_series").column("number") == list(range(1, 101))

    def test_fibonacci(self, run):
        values = run("recursive.fibonacci").column("fibonacci_number")
        assert len(values) == 20
        assert values[:8] == [0, 1, 1, 2, 3, 5, 8, 13]
        assert values[-1] == 4181

    def test_date_series_is_leap_year(self, run):
        result = run("recursive.date_series")
        assert result.row_count == 366
        first = result.as_dicts()[0]
        assert str(first["calendar_date"]).startswith("2024-01-01")
        assert first["day_name"] == "Monday"
        assert first["quarter"] == 1

    def test_weekends(self, run):
        rows = run("recursive.date_series").as_dicts()
        weekends = [r for r in rows if r["day_type"] == "Weekend"]
        assert {r["day_name"] for r in weekends} == {"Saturday", "Sunday"}
        # 2024 starts on a Monday and has 52 full weeks plus Monday, Tuesday
        assert len(weekends) == 104
        last = datetime.date.fromisoformat(str(rows[-1]["calendar_date"])[:10])
        assert last == datetime.date(2024, 12, 31)
