"""Time-travel queries over versioned tables.

The versioned tables store each version with a ``[sys_start, sys_end)``
interval (see :mod:`sqlsamples.temporal`), so every ``FOR SYSTEM_TIME``
clause becomes an ordinary predicate:

=============================  ===========================================
``AS OF t``                    ``sys_start <= t AND sys_end > t``
``FROM a TO b``                ``sys_start < b AND sys_end > a``
current rows                   ``sys_end = END_OF_TIME``
``FOR BUSINESS_TIME AS OF d``  ``valid_from <= d AND valid_to >= d``
=============================  ===========================================

The topic's prepare step creates the versioned tables and replays the
fixed change history, so results are the same on every run.
"""

from __future__ import annotations

from sqlsamples.core.adapters.base import DatabaseAdapter
from sqlsamples.core.dialect import Dialect
from sqlsamples.examples.base import Topic, registry
from sqlsamples.schema.ddl import setup_schema
from sqlsamples.schema.tables import END_OF_TIME, TableGroup
from sqlsamples.temporal.scenario import load_temporal_scenario

MIDYEAR = "2024-06-01 12:00:00"


def prepare(adapter: DatabaseAdapter) -> None:
    setup_schema(adapter, [TableGroup.TEMPORAL])
    load_temporal_scenario(adapter)


TOPIC = registry.add_topic(Topic("temporal", "Temporal tables", order=3, prepare=prepare))

example = registry.example

_EMPLOYEE_COLUMNS = "emp_id, emp_name, salary, department, sys_start, sys_end"


def _current(d: Dialect, alias: str = "") -> str:
    prefix = f"{alias}." if alias else ""
    return f"{prefix}sys_end = {d.timestamp_literal(END_OF_TIME)}"


def _as_of(d: Dialect, ts: str, alias: str = "") -> str:
    prefix = f"{alias}." if alias else ""
    lit = d.timestamp_literal(ts)
    return f"{prefix}sys_start <= {lit} AND {prefix}sys_end > {lit}"


@example("temporal", "current_state", "Current rows of a versioned table")
def current_state(d: Dialect) -> str:
    return f"""
SELECT {_EMPLOYEE_COLUMNS}
FROM employee_history
WHERE {_current(d)}
ORDER BY emp_id
"""


@example("temporal", "as_of", "Rows as they were at 2024-06-01 12:00")
def as_of(d: Dialect) -> str:
    """Equivalent of ``FOR SYSTEM_TIME AS OF``."""
    return f"""
SELECT {_EMPLOYEE_COLUMNS}
FROM employee_history
WHERE {_as_of(d, MIDYEAR)}
ORDER BY emp_id
"""


@example("temporal", "from_to", "Every version alive during 2024")
def from_to(d: Dialect) -> str:
    """Equivalent of ``FOR SYSTEM_TIME FROM ... TO ...``: intervals that overlap the range."""
    return f"""
SELECT {_EMPLOYEE_COLUMNS}
FROM employee_history
WHERE sys_start < {d.timestamp_literal("2024-12-31 23:59:59")}
  AND sys_end > {d.timestamp_literal("2024-01-01 00:00:00")}
ORDER BY emp_id, sys_start
"""


@example("temporal", "all_versions", "Complete history with CURRENT / HISTORICAL flag")
def all_versions(d: Dialect) -> str:
    return f"""
SELECT
    {_EMPLOYEE_COLUMNS},
    CASE WHEN {_current(d)} THEN 'CURRENT' ELSE 'HISTORICAL' END AS record_status
FROM employee_history
ORDER BY emp_id, sys_start
"""


@example("temporal", "audit_trail", "Salary changes of employee 1002")
def audit_trail(d: Dialect) -> str:
    return """
SELECT
    emp_id,
    emp_name,
    salary AS old_salary,
    LEAD(salary) OVER (PARTITION BY emp_id ORDER BY sys_start) AS new_salary,
    LEAD(salary) OVER (PARTITION BY emp_id ORDER BY sys_start) - salary AS salary_change,
    sys_start AS change_date,
    sys_end AS valid_until
FROM employee_history
WHERE emp_id = 1002
ORDER BY sys_start
"""


@example("temporal", "current_vs_past", "Current state against 2024-06-01")
def current_vs_past(d: Dialect) -> str:
    """Classify each employee as TERMINATED, NEW HIRE, CHANGED or NO CHANGE."""
    if d.supports_full_outer_join:
        source = """FROM current_state c
FULL OUTER JOIN historical_state h ON c.emp_id = h.emp_id"""
    else:
        source = """FROM (SELECT emp_id FROM current_state
      UNION
      SELECT emp_id FROM historical_state) k
LEFT JOIN current_state c ON c.emp_id = k.emp_id
LEFT JOIN historical_state h ON h.emp_id = k.emp_id"""
    return f"""
WITH current_state AS (
    SELECT emp_id, emp_name, salary, department
    FROM employee_history
    WHERE {_current(d)}
),
historical_state AS (
    SELECT emp_id, emp_name, salary, department
    FROM employee_history
    WHERE {_as_of(d, MIDYEAR)}
)
SELECT
    COALESCE(c.emp_id, h.emp_id) AS emp_id,
    COALESCE(c.emp_name, h.emp_name) AS emp_name,
    h.salary AS past_salary,
    c.salary AS current_salary,
    c.salary - h.salary AS salary_change,
    h.department AS past_department,
    c.department AS current_department,
    CASE
        WHEN c.emp_id IS NULL THEN 'TERMINATED'
        WHEN h.emp_id IS NULL THEN 'NEW HIRE'
        WHEN c.salary <> h.salary OR c.department <> h.department THEN 'CHANGED'
        ELSE 'NO CHANGE'
    END AS status
{source}
ORDER BY 1
"""


@example("temporal", "business_time_as_of", "Prices valid on 2024-08-15")
def business_time_as_of(d: Dialect) -> str:
    """Equivalent of ``FOR BUSINESS_TIME AS OF``, using the current system version."""
    day = d.date_literal("2024-08-15")
    return f"""
SELECT product_id, product_name, price, valid_from, valid_to
FROM product_pricing
WHERE valid_from <= {day} AND valid_to >= {day}
  AND {_current(d)}
ORDER BY product_id
"""


@example("temporal", "bitemporal", "Prices for 2024-08-15 as recorded on 2024-06-01")
def bitemporal(d: Dialect) -> str:
    """What did the database say on 2024-06-01 about prices valid on 2024-08-15?"""
    day = d.date_literal("2024-08-15")
    return f"""
SELECT product_id, product_name, price, valid_from, valid_to, sys_start, sys_end
FROM product_pricing
WHERE valid_from <= {day} AND valid_to >= {day}
  AND {_as_of(d, MIDYEAR)}
ORDER BY product_id
"""


@example("temporal", "record_lifecycle", "Creation, changes and deletion per employee")
def record_lifecycle(d: Dialect) -> str:
    end = d.timestamp_literal(END_OF_TIME)
    return f"""
WITH record_lifecycle AS (
    SELECT
        emp_id,
        MIN(sys_start) AS first_seen,
        MAX(CASE WHEN sys_end <> {end} THEN sys_end END) AS last_seen,
        COUNT(*) AS total_versions,
        MAX(CASE WHEN sys_end = {end} THEN 1 ELSE 0 END) AS is_active
    FROM employee_history
    GROUP BY emp_id
)
SELECT
    emp_id,
    first_seen AS created_date,
    CASE WHEN is_active = 0 THEN last_seen END AS deleted_date,
    total_versions - 1 AS number_of_changes,
    CASE is_active WHEN 1 THEN 'ACTIVE' ELSE 'DELETED' END AS current_status,
    CASE
        WHEN is_active = 0 THEN {d.days_between("first_seen", "last_seen")}
        ELSE {d.days_between("first_seen", d.now())}
    END AS days_active
FROM record_lifecycle
ORDER BY emp_id
"""


@example("temporal", "version_comparison", "What changed between consecutive versions")
def version_comparison(d: Dialect) -> str:
    return """
WITH versioned_data AS (
    SELECT
        emp_id,
        emp_name,
        salary,
        department,
        sys_start,
        LAG(salary) OVER (PARTITION BY emp_id ORDER BY sys_start) AS prev_salary,
        LAG(department) OVER (PARTITION BY emp_id ORDER BY sys_start) AS prev_department,
        ROW_NUMBER() OVER (PARTITION BY emp_id ORDER BY sys_start) AS version_num
    FROM employee_history
)
SELECT
    emp_id,
    emp_name,
    version_num,
    sys_start AS change_date,
    CASE
        WHEN prev_salary IS NULL THEN 'INITIAL'
        WHEN salary <> prev_salary AND department <> prev_department THEN 'SALARY & DEPT'
        WHEN salary <> prev_salary THEN 'SALARY'
        WHEN department <> prev_department THEN 'DEPARTMENT'
        ELSE 'OTHER'
    END AS change_type,
    prev_salary,
    salary,
    salary - prev_salary AS salary_diff,
    prev_department,
    department
FROM versioned_data
WHERE version_num > 1
ORDER BY emp_id, sys_start
"""


@example("temporal", "temporal_join", "Employees and their department as of 2024-06-01")
def temporal_join(d: Dialect) -> str:
    """Both sides of the join are cut at the same point in system time."""
    return f"""
SELECT
    e.emp_id,
    e.emp_name,
    e.salary,
    dh.dept_name,
    dh.manager_name,
    dh.budget
FROM employee_history e
LEFT JOIN department_history dh
    ON e.department = dh.dept_name
   AND {_as_of(d, MIDYEAR, "dh")}
WHERE {_as_of(d, MIDYEAR, "e")}
ORDER BY e.emp_id
"""


@example("temporal", "tenure", "Days spent in each department")
def tenure(d: Dialect) -> str:
    """Open intervals are measured up to now."""
    end = d.timestamp_literal(END_OF_TIME)
    closed = f"COALESCE(NULLIF(sys_end, {end}), {d.now()})"
    return f"""
WITH state_durations AS (
    SELECT
        emp_id,
        department,
        {d.days_between("sys_start", closed)} AS days_in_state
    FROM employee_history
)
SELECT
    department,
    COUNT(DISTINCT emp_id) AS employee_count,
    AVG(days_in_state) AS avg_days_in_dept,
    MIN(days_in_state) AS min_days_in_dept,
    MAX(days_in_state) AS max_days_in_dept
FROM state_durations
WHERE department IS NOT NULL
GROUP BY department
ORDER BY avg_days_in_dept DESC, department
"""
