"""Tests for ``sqlsamples.temporal.versioning``."""

from __future__ import annotations

import datetime

import pytest

from sqlsamples.core.errors import IntegrityError
from sqlsamples.schema.ddl import setup_schema
from sqlsamples.schema.tables import END_OF_TIME, TableGroup
from sqlsamples.temporal.versioning import (
    BusinessTimeTable,
    SystemVersionedTable,
    format_date,
    format_timestamp,
)

JAN = "2024-01-01 09:00:00"
MAR = "2024-03-01 09:00:00"
MAY = "2024-05-01 09:00:00"


@pytest.fixture
def temporal(adapter):
    setup_schema(adapter, [TableGroup.TEMPORAL])
    return adapter


@pytest.fixture
def employees(temporal):
    table = SystemVersionedTable(
        temporal, "employee_history", ("emp_id",), ("emp_name", "salary", "department")
    )
    table.insert(
        [
            {"emp_id": 1, "emp_name": "Ann", "salary": 100.0, "department": "Sales"},
            {"emp_id": 2, "emp_name": "Ben", "salary": 200.0, "department": "IT"},
        ],
        at=JAN,
    )
    return table


@pytest.fixture
def pricing(temporal):
    return BusinessTimeTable(temporal, "product_pricing", ("product_id",), ("product_name", "price"))


class TestFormatting:
    def test_timestamp(self):
        assert format_timestamp(datetime.datetime(2024, 3, 1, 9, 30)) == "2024-03-01 09:30:00"
        assert format_timestamp(datetime.date(2024, 3, 1)) == "2024-03-01 00:00:00"
        assert format_timestamp(MAR) == MAR

    def test_date(self):
        assert format_date(datetime.datetime(2024, 3, 1, 9, 30)) == "2024-03-01"
        assert format_date(datetime.date(2024, 3, 1)) == "2024-03-01"


class TestInsert:
    def test_rows_are_current(self, employees):
        current = employees.current()
        assert [row["emp_id"] for row in current] == [1, 2]
        assert all(row["sys_end"] == END_OF_TIME for row in current)
        assert all(row["sys_start"] == JAN for row in current)

    def test_duplicate_current_row(self, employees):
        with pytest.raises(IntegrityError, match="already has a current version"):
            employees.insert([{"emp_id": 1, "emp_name": "Ann"}], at=MAR)


class TestUpdate:
    def test_update_keeps_history(self, employees):
        employees.update({"emp_id": 1}, {"salary": 150.0}, at=MAR)

        versions = employees.versions({"emp_id": 1})
        assert [v["salary"] for v in versions] == [100.0, 150.0]
        assert versions[0]["sys_end"] == MAR
        assert versions[1]["sys_start"] == MAR
        assert versions[1]["emp_name"] == "Ann"

    def test_as_of(self, employees):
        employees.update({"emp_id": 1}, {"salary": 150.0}, at=MAR)
        before = {r["emp_id"]: r["salary"] for r in employees.as_of("2024-02-01 00:00:00")}
        after = {r["emp_id"]: r["salary"] for r in employees.as_of(MAR)}
        assert before == {1: 100.0, 2: 200.0}
        assert after == {1: 150.0, 2: 200.0}

    def test_as_of_before_history(self, employees):
        assert employees.as_of("2023-12-31 00:00:00") == []

    def test_time_must_advance(self, employees):
        with pytest.raises(IntegrityError, match="must move forward"):
            employees.update({"emp_id": 1}, {"salary": 1.0}, at=JAN)

    def test_unknown_column(self, employees):
        with pytest.raises(IntegrityError, match="Cannot version"):
            employees.update({"emp_id": 1}, {"emp_id": 5}, at=MAR)

    def test_missing_row(self, employees):
        with pytest.raises(IntegrityError, match="No current version"):
            employees.update({"emp_id": 99}, {"salary": 1.0}, at=MAR)

    def test_key_missing_column(self, employees):
        with pytest.raises(IntegrityError, match="missing column"):
            employees.update({"id": 1}, {"salary": 1.0}, at=MAR)


class TestDelete:
    def test_delete_closes_interval(self, employees):
        employees.delete({"emp_id": 2}, at=MAR)
        assert [r["emp_id"] for r in employees.current()] == [1]
        assert len(employees.versions({"emp_id": 2})) == 1
        assert {r["emp_id"] for r in employees.as_of("2024-02-01 00:00:00")} == {1, 2}

    def test_between(self, employees):
        employees.update({"emp_id": 1}, {"salary": 150.0}, at=MAR)
        employees.delete({"emp_id": 2}, at=MAY)
        alive_in_april = employees.between("2024-04-01 00:00:00", "2024-04-30 00:00:00")
        assert [(r["emp_id"], r["salary"]) for r in alive_in_april] == [(1, 150.0), (2, 200.0)]
        assert len(employees.between(JAN, "2024-12-31 00:00:00")) == 3


class TestSuspended:
    def test_in_place_edit(self, employees):
        with employees.suspended() as table:
            assert table.versioning is False
            table.update({"emp_id": 1}, {"department": "Marketing"}, at=MAR)
        assert employees.versioning is True
        versions = employees.versions({"emp_id": 1})
        assert len(versions) == 1
        assert versions[0]["department"] == "Marketing"
        assert versions[0]["sys_start"] == JAN


class TestPurge:
    def test_purge_closed_versions(self, employees):
        employees.update({"emp_id": 1}, {"salary": 150.0}, at=MAR)
        employees.delete({"emp_id": 2}, at=MAY)
        assert employees.purge_history(before=MAR) == 1
        assert len(employees.versions()) == 2
        assert employees.purge_history(before="2024-12-31 00:00:00") == 1
        assert [r["emp_id"] for r in employees.versions()] == [1]


class TestBusinessTime:
    def test_periods(self, pricing):
        widget = {"product_id": 1, "product_name": "Widget"}
        pricing.insert_period({**widget, "price": 10.0, "valid_from": "2024-01-01", "valid_to": "2024-06-30"}, at=JAN)
        pricing.insert_period(
            {**widget, "price": 12.0, "valid_from": datetime.date(2024, 7, 1), "valid_to": "2024-12-31"},
            at=JAN,
        )
        assert [r["price"] for r in pricing.as_of_business("2024-03-15")] == [10.0]
        assert [r["price"] for r in pricing.as_of_business(datetime.date(2024, 8, 1))] == [12.0]
        assert pricing.as_of_business("2025-01-01") == []

    def test_overlap_rejected(self, pricing):
        widget = {"product_id": 1, "product_name": "Widget"}
        pricing.insert_period({**widget, "price": 10.0, "valid_from": "2024-01-01", "valid_to": "2024-06-30"}, at=JAN)
        with pytest.raises(IntegrityError, match="overlaps"):
            pricing.insert_period(
                {**widget, "price": 11.0, "valid_from": "2024-06-30", "valid_to": "2024-09-30"}, at=MAR
            )

    def test_inverted_period(self, pricing):
        with pytest.raises(IntegrityError, match="starts after it ends"):
            pricing.insert_period(
                {"product_id": 1, "product_name": "W", "price": 1.0, "valid_from": "2024-05-01", "valid_to": "2024-04-01"},
                at=JAN,
            )

    def test_correction_is_bitemporal(self, pricing):
        widget = {"product_id": 1, "product_name": "Widget"}
        pricing.insert_period({**widget, "price": 10.0, "valid_from": "2024-01-01", "valid_to": "2024-12-31"}, at=JAN)
        pricing.update({"product_id": 1, "valid_from": "2024-01-01"}, {"price": 9.5}, at=MAY)

        assert [r["price"] for r in pricing.as_of_business("2024-02-01")] == [9.5]
        known_in_march = pricing.as_of_business("2024-02-01", system_time=MAR)
        assert [r["price"] for r in known_in_march] == [10.0]

    def test_insert_rejects_overlap_with_current_period(self, pricing):
        widget = {"product_id": 1, "product_name": "Widget"}
        pricing.insert_period({**widget, "price": 10.0, "valid_from": "2024-01-01", "valid_to": "2024-12-31"}, at=JAN)
        with pytest.raises(IntegrityError, match="overlaps 2024-01-01..2024-12-31"):
            pricing.insert([{**widget, "price": 20.0, "valid_from": "2024-06-01", "valid_to": "2024-06-30"}], at=MAR)
        assert [r["price"] for r in pricing.as_of_business("2024-06-15")] == [10.0]

    def test_insert_rejects_overlap_within_batch(self, pricing):
        widget = {"product_id": 1, "product_name": "Widget"}
        with pytest.raises(IntegrityError, match="overlaps"):
            pricing.insert(
                [
                    {**widget, "price": 10.0, "valid_from": "2024-01-01", "valid_to": "2024-06-30"},
                    {**widget, "price": 11.0, "valid_from": "2024-03-01", "valid_to": "2024-09-30"},
                ],
                at=JAN,
            )
        assert pricing.versions() == []

    def test_insert_batch_of_adjacent_periods(self, pricing):
        rows = [
            {"product_id": 1, "product_name": "Widget", "price": 10.0, "valid_from": "2024-01-01", "valid_to": "2024-06-30"},
            {"product_id": 1, "product_name": "Widget", "price": 12.0, "valid_from": "2024-07-01", "valid_to": "2024-12-31"},
            {"product_id": 2, "product_name": "Gadget", "price": 5.0, "valid_from": "2024-03-01", "valid_to": "2024-09-30"},
        ]
        assert pricing.insert(rows, at=JAN) == 3
        assert [r["price"] for r in pricing.as_of_business("2024-08-01")] == [12.0, 5.0]
