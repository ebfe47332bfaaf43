"""Temporal examples: the topic's prepare step replays the fixed history first."""

from __future__ import annotations

import pytest


class TestSystemTime:
    def test_current_state(self, run):
        result = run("temporal.current_state")
        assert result.column("emp_id") == [1002, 1003]

    def test_as_of(self, run):
        rows = run("temporal.as_of").as_dicts()
        assert [(r["emp_id"], r["salary"]) for r in rows] == [(1001, 80000), (1002, 95000), (1003, 68000)]
        assert rows[1]["department"] == "Senior Engineering"

    def test_from_to(self, run):
        assert run("temporal.from_to").row_count == 6

    def test_all_versions(self, run):
        result = run("temporal.all_versions")
        assert result.row_count == 6
        assert result.column("record_status").count("CURRENT") == 2

    def test_audit_trail(self, run):
        first, last = run("temporal.audit_trail").as_dicts()
        assert first["old_salary"] == 82000
        assert first["new_salary"] == 95000
        assert first["salary_change"] == 13000
        assert last["new_salary"] is None

    def test_current_vs_past(self, run):
        rows = run("temporal.current_vs_past").as_dicts()
        assert {r["emp_id"]: r["status"] for r in rows} == {
            1001: "TERMINATED",
            1002: "NO CHANGE",
            1003: "CHANGED",
        }

    def test_record_lifecycle(self, run):
        rows = {r["emp_id"]: r for r in run("temporal.record_lifecycle").as_dicts()}
        john = rows[1001]
        assert john["current_status"] == "DELETED"
        assert john["deleted_date"] == "2024-09-01 09:00:00"
        assert john["number_of_changes"] == 1
        assert john["days_active"] == 244
        assert rows[1002]["current_status"] == "ACTIVE"

    def test_version_comparison(self, run):
        rows = run("temporal.version_comparison").as_dicts()
        assert [(r["emp_id"], r["change_type"]) for r in rows] == [
            (1001, "SALARY"),
            (1002, "SALARY & DEPT"),
            (1003, "SALARY"),
        ]

    def test_temporal_join(self, run):
        rows = run("temporal.temporal_join").as_dicts()
        assert {r["emp_id"]: r["manager_name"] for r in rows} == {
            1001: "Alice Grant",
            1002: "Erin Park",
            1003: "Dan Moss",
        }

    def test_tenure(self, run):
        departments = run("temporal.tenure").column("department")
        assert sorted(departments) == ["Engineering", "Marketing", "Sales", "Senior Engineering"]


class TestBusinessTime:
    def test_business_time_as_of(self, run):
        rows = run("temporal.business_time_as_of").as_dicts()
        assert [(r["product_id"], r["price"]) for r in rows] == [
            (2001, pytest.approx(109.99)),
            (2002, pytest.approx(134.99)),
        ]

    def test_bitemporal(self, run):
        rows = run("temporal.bitemporal").as_dicts()
        assert [(r["product_id"], r["price"]) for r in rows] == [(2002, pytest.approx(139.99))]


class TestPrepare:
    def test_prepare_is_repeatable(self, seeded, run):
        from sqlsamples.examples.temporal import prepare

        run("temporal.current_state")
        prepare(seeded)
        assert run("temporal.from_to").row_count == 6
