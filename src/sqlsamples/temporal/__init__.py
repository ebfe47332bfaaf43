"""Versioned tables emulated with ``[sys_start, sys_end)`` intervals.

Architecture::

    versioning.py   SystemVersionedTable, BusinessTimeTable
    scenario.py     load_temporal_scenario: the timestamped history the
                    temporal examples query
"""

from sqlsamples.temporal.scenario import (
    TEMPORAL_TABLES,
    load_temporal_scenario,
    scenario_rows,
)
from sqlsamples.temporal.versioning import (
    BusinessTimeTable,
    SystemVersionedTable,
    format_date,
    format_timestamp,
)

__all__ = [
    "BusinessTimeTable",
    "SystemVersionedTable",
    "TEMPORAL_TABLES",
    "format_date",
    "format_timestamp",
    "load_temporal_scenario",
    "scenario_rows",
]
