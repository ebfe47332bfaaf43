"""The fixed change history behind the temporal examples.

Three employees are hired on 2024-01-01, two get raises on 2024-03-01, and
on 2024-09-01 one more raise lands and John Smith leaves.  Departments and
product prices follow a similar timeline, including a retroactive price
correction so that bi-temporal queries have something to show.

Every change carries an explicit timestamp, so the resulting history is the
same on every run and on every engine.
"""

from __future__ import annotations

import datetime

from sqlsamples.core.adapters.base import DatabaseAdapter
from sqlsamples.core.logging import get_logger
from sqlsamples.seed.data import SeedTable
from sqlsamples.temporal.versioning import BusinessTimeTable, SystemVersionedTable

logger = get_logger(__name__)

HIRED = datetime.datetime(2024, 1, 1, 9, 0)
FIRST_REVIEW = datetime.datetime(2024, 3, 1, 9, 0)
REORG = datetime.datetime(2024, 7, 1, 9, 0)
SECOND_REVIEW = datetime.datetime(2024, 9, 1, 9, 0)
PRICE_CORRECTION = datetime.datetime(2024, 10, 1, 9, 0)

TEMPORAL_TABLES = ("employee_history", "department_history", "product_pricing")


def employee_history(adapter: DatabaseAdapter) -> SystemVersionedTable:
    return SystemVersionedTable(
        adapter, "employee_history", ("emp_id",), ("emp_name", "salary", "department")
    )


def department_history(adapter: DatabaseAdapter) -> SystemVersionedTable:
    return SystemVersionedTable(
        adapter, "department_history", ("dept_id",), ("dept_name", "manager_name", "budget")
    )


def product_pricing(adapter: DatabaseAdapter) -> BusinessTimeTable:
    return BusinessTimeTable(adapter, "product_pricing", ("product_id",), ("product_name", "price"))


def load_temporal_scenario(adapter: DatabaseAdapter) -> dict[str, int]:
    """Replay the scenario into empty versioned tables.

    The tables must exist (``setup_schema(adapter, [TableGroup.TEMPORAL])``).
    Existing rows are removed first.  Returns the number of stored versions
    per table.
    """
    with adapter.transaction():
        for name in TEMPORAL_TABLES:
            adapter.execute(f"DELETE FROM {name}")

    employees = employee_history(adapter)
    employees.insert(
        [
            {"emp_id": 1001, "emp_name": "John Smith", "salary": 75000.00, "department": "Sales"},
            {"emp_id": 1002, "emp_name": "Jane Doe", "salary": 82000.00, "department": "Engineering"},
            {"emp_id": 1003, "emp_name": "Bob Wilson", "salary": 68000.00, "department": "Marketing"},
        ],
        at=HIRED,
    )
    employees.update({"emp_id": 1001}, {"salary": 80000.00}, at=FIRST_REVIEW)
    employees.update(
        {"emp_id": 1002},
        {"department": "Senior Engineering", "salary": 95000.00},
        at=FIRST_REVIEW,
    )
    employees.update({"emp_id": 1003}, {"salary": 72000.00}, at=SECOND_REVIEW)
    employees.delete({"emp_id": 1001}, at=SECOND_REVIEW)

    departments = department_history(adapter)
    departments.insert(
        [
            {"dept_id": 10, "dept_name": "Sales", "manager_name": "Alice Grant", "budget": 500000.00},
            {"dept_id": 20, "dept_name": "Engineering", "manager_name": "Carol Lee", "budget": 1200000.00},
            {"dept_id": 30, "dept_name": "Marketing", "manager_name": "Dan Moss", "budget": 400000.00},
        ],
        at=HIRED,
    )
    departments.insert(
        [
            {
                "dept_id": 40,
                "dept_name": "Senior Engineering",
                "manager_name": "Erin Park",
                "budget": 800000.00,
            }
        ],
        at=FIRST_REVIEW,
    )
    departments.update(
        {"dept_id": 20}, {"manager_name": "Erin Park", "budget": 1500000.00}, at=REORG
    )

    pricing = product_pricing(adapter)
    widget_a = {"product_id": 2001, "product_name": "Widget A"}
    widget_b = {"product_id": 2002, "product_name": "Widget B"}
    pricing.insert_period(
        {**widget_a, "price": 99.99, "valid_from": "2024-01-01", "valid_to": "2024-06-30"}, at=HIRED
    )
    pricing.insert_period(
        {**widget_b, "price": 149.99, "valid_from": "2024-01-01", "valid_to": "2024-03-31"}, at=HIRED
    )
    pricing.insert_period(
        {**widget_b, "price": 139.99, "valid_from": "2024-04-01", "valid_to": "2024-12-31"}, at=HIRED
    )
    pricing.insert_period(
        {**widget_a, "price": 109.99, "valid_from": "2024-07-01", "valid_to": "2024-12-31"}, at=REORG
    )
    pricing.update(
        {"product_id": 2002, "valid_from": "2024-04-01"}, {"price": 134.99}, at=PRICE_CORRECTION
    )

    counts = {
        name: int(adapter.scalar(f"SELECT COUNT(*) FROM {name}")) for name in TEMPORAL_TABLES
    }
    logger.info("temporal.scenario_loaded", **counts)
    return counts


def scenario_rows() -> tuple[SeedTable, ...]:
    """The stored versions after the scenario, as literal seed tables.

    The scenario is replayed on a scratch in-memory SQLite database; the
    result is used to render the temporal tables into exported scripts.
    """
    from sqlsamples.core.adapters.sqlite import SQLiteAdapter
    from sqlsamples.schema.ddl import setup_schema
    from sqlsamples.schema.tables import TableGroup

    with SQLiteAdapter(":memory:") as scratch:
        setup_schema(scratch, [TableGroup.TEMPORAL])
        load_temporal_scenario(scratch)
        tables = []
        versioned = (
            employee_history(scratch),
            department_history(scratch),
            product_pricing(scratch),
        )
        for table in versioned:
            columns, rows = scratch.fetch(
                f"SELECT {', '.join(table.columns)} FROM {table.name} "
                f"ORDER BY {', '.join(table.identity)}, sys_start"
            )
            tables.append(SeedTable(table.name, tuple(columns), tuple(rows)))
    return tuple(tables)


__all__ = [
    "TEMPORAL_TABLES",
    "department_history",
    "employee_history",
    "load_temporal_scenario",
    "product_pricing",
    "scenario_rows",
]
