"""
Integrity checks over the sample data.

Each check is a named function from a connected adapter to an
``IntegrityResult``; ``IntegrityRunner`` runs a set of them and answers the
gate questions (``has_failures``, ``failures``).

Manifesto:
    The sample queries assume shapes the database cannot enforce on its
    own: a reporting tree with one root, acyclic category and part
    hierarchies.  A recursive CTE over a cycle only stops at its depth
    guard, so these invariants are checked explicitly after seeding
    instead of being discovered as strange query output.

Architecture::

    IntegrityRunner(adapter)
        .add(IntegrityCheck("foreign_keys", check_foreign_keys))
        .add(...)
        .run_all()  ──▶  {"foreign_keys": PASS, "employee_hierarchy": PASS, ...}

    data_checks()      foreign keys, employee tree, category tree, bill of materials
    cleanup_check()    catalog holds no sample objects (run after cleanup)

Guardrails:
    ❌ DON'T: Run ``data_checks`` before seeding; empty tables only WARN
    ✅ DO: Gate on ``has_failures()`` and report ``failures()``

Tags:
    integrity, validation, graph, cycle-detection
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeVar

from sqlsamples.core.adapters.base import DatabaseAdapter
from sqlsamples.core.logging import get_logger
from sqlsamples.schema.ddl import catalog
from sqlsamples.schema.tables import TableGroup, tables_for

logger = get_logger(__name__)

K = TypeVar("K", bound=Hashable)


class IntegrityStatus(str, Enum):
    PASS = "PASS"
    WARN = "WARN"
    FAIL = "FAIL"


@dataclass
class IntegrityResult:
    """Outcome of one check.

    Attributes:
        status: PASS, WARN or FAIL
        message: Human-readable explanation
        actual_value: What was found
        expected_value: What was expected
    """

    status: IntegrityStatus
    message: str
    actual_value: Any = None
    expected_value: Any = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "message": self.message,
            "actual": self.actual_value,
            "expected": self.expected_value,
        }


@dataclass
class IntegrityCheck:
    name: str
    check_fn: Callable[[DatabaseAdapter], IntegrityResult]


# =============================================================================
# Graph helper
# =============================================================================


def find_cycle(edges: Iterable[tuple[K, K]]) -> list[K] | None:
    """Find one directed cycle in ``edges``.

    Parameters
    ----------
    edges
        ``(from, to)`` pairs.

    Returns
    -------
    list or None
        The nodes of a cycle in traversal order, first node repeated at the
        end (``[a, b, a]``), or ``None`` when the graph is acyclic.

    Examples
    --------
    >>> find_cycle([(1, 2), (2, 3)]) is None
    True
    >>> find_cycle([(1, 2), (2, 3), (3, 1)])
    [1, 2, 3, 1]
    """
    graph: dict[K, list[K]] = {}
    for source, target in edges:
        graph.setdefault(source, []).append(target)
        graph.setdefault(target, [])

    done: set[K] = set()
    for start in graph:
        if start in done:
            continue
        # Iterative DFS; ``path`` holds the nodes on the current stack
        path: list[K] = [start]
        on_path: set[K] = {start}
        stack = [iter(graph[start])]
        while stack:
            node = next(stack[-1], None)
            if node is None:
                stack.pop()
                finished = path.pop()
                on_path.discard(finished)
                done.add(finished)
                continue
            if node in on_path:
                return [*path[path.index(node):], node]
            if node not in done:
                path.append(node)
                on_path.add(node)
                stack.append(iter(graph[node]))
    return None


# =============================================================================
# Checks
# =============================================================================


def check_foreign_keys(adapter: DatabaseAdapter) -> IntegrityResult:
    """Every non-null foreign key value of the core tables has a parent row."""
    present = set(catalog(adapter).tables)
    orphans: dict[str, int] = {}
    checked = 0
    for table in tables_for([TableGroup.CORE]):
        if table.name not in present:
            continue
        for fk in sorted(table.foreign_keys, key=lambda f: f.parent.name):
            child = fk.parent.name
            parent_table = fk.column.table.name
            parent_key = fk.column.name
            count = adapter.scalar(
                f"SELECT COUNT(*) FROM {table.name} c "
                f"WHERE c.{child} IS NOT NULL AND NOT EXISTS ("
                f"SELECT 1 FROM {parent_table} p WHERE p.{parent_key} = c.{child})"
            )
            checked += 1
            if count:
                orphans[f"{table.name}.{child}"] = int(count)

    if checked == 0:
        return IntegrityResult(IntegrityStatus.WARN, "No sample tables to check")
    if orphans:
        return IntegrityResult(
            IntegrityStatus.FAIL,
            f"{sum(orphans.values())} orphaned rows across {len(orphans)} foreign keys",
            actual_value=orphans,
            expected_value={},
        )
    return IntegrityResult(IntegrityStatus.PASS, f"{checked} foreign keys resolve", checked)


def _tree_result(label: str, edges: list[tuple[Any, Any]], roots: int | None = None) -> IntegrityResult:
    if not edges and roots in (None, 0):
        return IntegrityResult(IntegrityStatus.WARN, f"{label} is empty")
    cycle = find_cycle(edges)
    if cycle:
        return IntegrityResult(
            IntegrityStatus.FAIL,
            f"{label} contains a cycle: {' -> '.join(map(str, cycle))}",
            actual_value=cycle,
        )
    if roots is not None and roots != 1:
        return IntegrityResult(
            IntegrityStatus.FAIL,
            f"{label} has {roots} roots",
            actual_value=roots,
            expected_value=1,
        )
    return IntegrityResult(IntegrityStatus.PASS, f"{label} is acyclic", len(edges))


def check_employee_hierarchy(adapter: DatabaseAdapter) -> IntegrityResult:
    """Exactly one employee without a manager, and no reporting cycles."""
    rows = adapter.fetch("SELECT emp_id, manager_id FROM employees")[1]
    roots = sum(1 for _, manager in rows if manager is None)
    edges = [(manager, emp) for emp, manager in rows if manager is not None]
    if not rows:
        return IntegrityResult(IntegrityStatus.WARN, "Employee hierarchy is empty")
    return _tree_result("Employee hierarchy", edges, roots)


def check_category_tree(adapter: DatabaseAdapter) -> IntegrityResult:
    rows = adapter.fetch(
        "SELECT parent_cat_id, cat_id FROM categories WHERE parent_cat_id IS NOT NULL"
    )[1]
    return _tree_result("Category tree", rows)


def check_bill_of_materials(adapter: DatabaseAdapter) -> IntegrityResult:
    """A part must not contain itself, directly or through sub-assemblies."""
    rows = adapter.fetch("SELECT parent_part_id, component_part_id FROM bill_of_materials")[1]
    return _tree_result("Bill of materials", rows)


def check_catalog_empty(adapter: DatabaseAdapter) -> IntegrityResult:
    present = catalog(adapter)
    if present.is_empty:
        return IntegrityResult(IntegrityStatus.PASS, "No sample objects remain", 0, 0)
    return IntegrityResult(
        IntegrityStatus.FAIL,
        f"{present.total} sample objects remain",
        actual_value=present.to_dict(),
        expected_value=0,
    )


def data_checks() -> list[IntegrityCheck]:
    """Checks that hold after the core tables are seeded."""
    return [
        IntegrityCheck("foreign_keys", check_foreign_keys),
        IntegrityCheck("employee_hierarchy", check_employee_hierarchy),
        IntegrityCheck("category_tree", check_category_tree),
        IntegrityCheck("bill_of_materials", check_bill_of_materials),
    ]


def cleanup_check() -> IntegrityCheck:
    return IntegrityCheck("catalog_empty", check_catalog_empty)


# =============================================================================
# Runner
# =============================================================================


class IntegrityRunner:
    """Run integrity checks against one adapter and keep the results.

    Examples:
        >>> runner = IntegrityRunner(adapter)
        >>> for check in data_checks():
        ...     runner.add(check)
        >>> runner.run_all()
        {'foreign_keys': <IntegrityStatus.PASS: 'PASS'>, ...}
        >>> runner.has_failures()
        False
    """

    def __init__(self, adapter: DatabaseAdapter):
        self.adapter = adapter
        self.checks: list[IntegrityCheck] = []
        self._results: dict[str, IntegrityResult] = {}

    def add(self, check: IntegrityCheck) -> IntegrityRunner:
        """Add a check. Returns self for chaining."""
        self.checks.append(check)
        return self

    def run_all(self) -> dict[str, IntegrityStatus]:
        self._results.clear()
        for check in self.checks:
            result = check.check_fn(self.adapter)
            self._results[check.name] = result
            log = logger.warning if result.status == IntegrityStatus.FAIL else logger.debug
            log("integrity.check", check=check.name, status=result.status.value, message=result.message)

        logger.info(
            "integrity.done",
            checks=len(self._results),
            failures=len(self.failures()),
        )
        return {name: r.status for name, r in self._results.items()}

    @property
    def results(self) -> dict[str, IntegrityResult]:
        return dict(self._results)

    def has_failures(self) -> bool:
        return any(r.status == IntegrityStatus.FAIL for r in self._results.values())

    def failures(self) -> list[str]:
        return [name for name, r in self._results.items() if r.status == IntegrityStatus.FAIL]


__all__ = [
    "IntegrityCheck",
    "IntegrityResult",
    "IntegrityRunner",
    "IntegrityStatus",
    "check_bill_of_materials",
    "check_catalog_empty",
    "check_category_tree",
    "check_employee_hierarchy",
    "check_foreign_keys",
    "cleanup_check",
    "data_checks",
    "find_cycle",
]
