"""Recursive common table expressions.

Hierarchies (employees, categories, bill of materials), graph traversal
with cycle detection, and generated series.  Every recursive member carries
a termination predicate; string paths are cast on both sides of the
``UNION ALL`` so the anchor and recursive column types agree on every
engine.
"""

from __future__ import annotations

from sqlsamples.core.dialect import Dialect
from sqlsamples.examples.base import Topic, registry

TOPIC = registry.add_topic(Topic("recursive", "Recursive CTEs", order=1))

example = registry.example


@example("recursive", "employee_hierarchy", "Employee hierarchy with indented path")
def employee_hierarchy(d: Dialect) -> str:
    """Walk the reporting tree from the single root down, at most ten levels."""
    return f"""
{d.with_recursive()} emp_hierarchy (emp_id, emp_name, manager_id, level, path) AS (
    SELECT emp_id, emp_name, manager_id, 1, {d.cast_text("emp_name")}
    FROM employees
    WHERE manager_id IS NULL
    UNION ALL
    SELECT e.emp_id, e.emp_name, e.manager_id, eh.level + 1,
           {d.cast_text(d.concat("eh.path", "' > '", "e.emp_name"))}
    FROM employees e
    INNER JOIN emp_hierarchy eh ON e.manager_id = eh.emp_id
    WHERE eh.level < 10
)
SELECT
    emp_id,
    {d.concat(d.repeat("'  '", "level - 1"), "emp_name")} AS hierarchy_view,
    level,
    path
FROM emp_hierarchy
ORDER BY path
"""


@example("recursive", "bom_explosion", "Bill of materials explosion for PRODUCT-001")
def bom_explosion(d: Dialect) -> str:
    """Total quantity of every component needed to build one PRODUCT-001.

    Quantities multiply down the tree: two PART-A each needing three PART-D
    each needing two PART-H is twelve PART-H.
    """
    return f"""
{d.with_recursive()} bom_explosion (parent_part, component_part, quantity_needed, level, total_quantity) AS (
    SELECT parent_part_id, component_part_id, quantity, 1, quantity
    FROM bill_of_materials
    WHERE parent_part_id = 'PRODUCT-001'
    UNION ALL
    SELECT bom.parent_part_id, bom.component_part_id, bom.quantity,
           be.level + 1, be.total_quantity * bom.quantity
    FROM bill_of_materials bom
    INNER JOIN bom_explosion be ON bom.parent_part_id = be.component_part
    WHERE be.level < 20
)
SELECT
    component_part,
    SUM(total_quantity) AS total_needed,
    MAX(level) AS max_depth,
    COUNT(*) AS occurrences
FROM bom_explosion
GROUP BY component_part
ORDER BY total_needed DESC, component_part
"""


@example("recursive", "path_finding", "All paths from A to Z with cycle detection")
def path_finding(d: Dialect) -> str:
    """Every acyclic path from node A to node Z.

    ``visited`` holds the nodes seen so far as a comma list; an edge is only
    followed when its target is not already in that list.
    """
    return f"""
{d.with_recursive()} path_finder (start_node, end_node, path, path_length, visited) AS (
    SELECT from_node, to_node,
           {d.cast_text(d.concat("from_node", "' -> '", "to_node"), 4000)},
           1,
           {d.cast_text(d.concat("','", "from_node", "','", "to_node", "','"), 4000)}
    FROM graph_edges
    WHERE from_node = 'A'
    UNION ALL
    SELECT pf.start_node, ge.to_node,
           {d.cast_text(d.concat("pf.path", "' -> '", "ge.to_node"), 4000)},
           pf.path_length + 1,
           {d.cast_text(d.concat("pf.visited", "ge.to_node", "','"), 4000)}
    FROM graph_edges ge
    INNER JOIN path_finder pf ON ge.from_node = pf.end_node
    WHERE pf.path_length < 10
      AND {d.position(d.concat("','", "ge.to_node", "','"), "pf.visited")} = 0
)
SELECT start_node, end_node, path, path_length
FROM path_finder
WHERE end_node = 'Z'
ORDER BY path_length, path
"""


@example("recursive", "org_metrics", "Org chart with direct and total reports")
def org_metrics(d: Dialect) -> str:
    """Level, direct reports and all transitive reports for each employee."""
    return f"""
{d.with_recursive()} org (emp_id, emp_name, manager_id, level, id_path) AS (
    SELECT emp_id, emp_name, manager_id, 1, {d.cast_text(d.concat("'/'", d.cast_text("emp_id", 10)))}
    FROM employees
    WHERE manager_id IS NULL
    UNION ALL
    SELECT e.emp_id, e.emp_name, e.manager_id, o.level + 1,
           {d.cast_text(d.concat("o.id_path", "'/'", d.cast_text("e.emp_id", 10)))}
    FROM employees e
    INNER JOIN org o ON e.manager_id = o.emp_id
    WHERE o.level < 10
)
SELECT
    o1.emp_id,
    o1.emp_name,
    o1.level,
    (SELECT COUNT(*) FROM employees e WHERE e.manager_id = o1.emp_id) AS direct_reports,
    (SELECT COUNT(*) FROM org o2 WHERE o2.id_path LIKE {d.concat("o1.id_path", "'/%'")}) AS total_reports
FROM org o1
ORDER BY o1.level, o1.emp_name
"""


@example("recursive", "number_series", "Number series 1 to 100")
def number_series(d: Dialect) -> str:
    return f"""
{d.with_recursive()} number_series (n) AS (
    SELECT 1{d.from_dual()}
    UNION ALL
    SELECT n + 1 FROM number_series WHERE n < 100
)
SELECT n AS number FROM number_series
ORDER BY n
"""


@example("recursive", "date_series", "Calendar for 2024")
def date_series(d: Dialect) -> str:
    """One row per day of 2024 with day name, week, month, quarter and weekend flag."""
    return f"""
{d.with_recursive()} date_series (dt) AS (
    SELECT {d.date_literal("2024-01-01")}{d.from_dual()}
    UNION ALL
    SELECT {d.add_days("dt", 1)} FROM date_series WHERE dt < {d.date_literal("2024-12-31")}
)
SELECT
    dt AS calendar_date,
    {d.day_name("dt")} AS day_name,
    {d.day_of_week("dt")} AS day_of_week,
    {d.extract("week", "dt")} AS week_number,
    {d.extract("month", "dt")} AS month_number,
    {d.extract("quarter", "dt")} AS quarter,
    CASE WHEN {d.day_of_week("dt")} IN (1, 7) THEN 'Weekend' ELSE 'Weekday' END AS day_type
FROM date_series
ORDER BY dt
"""


@example("recursive", "fibonacci", "First 20 Fibonacci numbers")
def fibonacci(d: Dialect) -> str:
    return f"""
{d.with_recursive()} fibonacci (n, fib_current, fib_next) AS (
    SELECT 1, 0, 1{d.from_dual()}
    UNION ALL
    SELECT n + 1, fib_next, fib_current + fib_next
    FROM fibonacci
    WHERE n < 20
)
SELECT n AS position, fib_current AS fibonacci_number
FROM fibonacci
ORDER BY n
"""


@example("recursive", "category_tree", "Category tree with product roll-up")
def category_tree(d: Dialect) -> str:
    """Each category with its own product count and the count of its whole subtree."""
    return f"""
{d.with_recursive()} category_tree (cat_id, cat_name, level, path) AS (
    SELECT cat_id, cat_name, 1, {d.cast_text("cat_name")}
    FROM categories
    WHERE parent_cat_id IS NULL
    UNION ALL
    SELECT c.cat_id, c.cat_name, ct.level + 1,
           {d.cast_text(d.concat("ct.path", "' / '", "c.cat_name"))}
    FROM categories c
    INNER JOIN category_tree ct ON c.parent_cat_id = ct.cat_id
    WHERE ct.level < 10
),
counted (cat_id, cat_name, level, path, direct_products) AS (
    SELECT ct.cat_id, ct.cat_name, ct.level, ct.path,
           (SELECT COUNT(*) FROM products p WHERE p.category_id = ct.cat_id)
    FROM category_tree ct
)
SELECT
    c1.cat_id,
    {d.concat(d.repeat("'  '", "c1.level - 1"), "c1.cat_name")} AS category_hierarchy,
    c1.level,
    c1.direct_products,
    (SELECT SUM(c2.direct_products)
     FROM counted c2
     WHERE c2.path = c1.path OR c2.path LIKE {d.concat("c1.path", "' / %'")}) AS total_products_in_tree
FROM counted c1
ORDER BY c1.path
"""


@example("recursive", "shortest_path", "Cheapest weighted path from START to END")
def shortest_path(d: Dialect) -> str:
    """Enumerate acyclic weighted paths from START and keep the cheapest to END.

    Costs are accumulated as decimals on both sides of the recursion.  The
    node list is comma-delimited so that ``A`` is never mistaken for part
    of ``START``.
    """
    return f"""
{d.with_recursive()} shortest_path (node, total_cost, path, visited) AS (
    SELECT DISTINCT from_node, {d.cast_decimal("0")},
           {d.cast_text("from_node")},
           {d.cast_text(d.concat("','", "from_node", "','"))}
    FROM graph_edges
    WHERE from_node = 'START'
    UNION ALL
    SELECT ge.to_node, {d.cast_decimal("sp.total_cost + ge.weight")},
           {d.cast_text(d.concat("sp.path", "' -> '", "ge.to_node"))},
           {d.cast_text(d.concat("sp.visited", "ge.to_node", "','"))}
    FROM graph_edges ge
    INNER JOIN shortest_path sp ON ge.from_node = sp.node
    WHERE sp.total_cost + ge.weight < 1000
      AND {d.position(d.concat("','", "ge.to_node", "','"), "sp.visited")} = 0
)
SELECT node, total_cost AS min_cost, path
FROM shortest_path
WHERE node = 'END'
ORDER BY total_cost, path
{d.limit(1)}
"""


@example("recursive", "cascade_delete_preview", "Rows a cascading delete of order 1 would touch")
def cascade_delete_preview(d: Dialect) -> str:
    """Read-only preview: the order row plus its dependent order items, by level."""
    return f"""
{d.with_recursive()} cascade_delete (record_id, order_id, level, table_name) AS (
    SELECT order_id, order_id, 1, {d.cast_text("'orders'", 20)}
    FROM orders
    WHERE order_id = 1
    UNION ALL
    SELECT oi.item_id, oi.order_id, cd.level + 1, {d.cast_text("'order_items'", 20)}
    FROM order_items oi
    INNER JOIN cascade_delete cd ON oi.order_id = cd.order_id
    WHERE cd.table_name = 'orders'
)
SELECT table_name, COUNT(*) AS records_affected, level
FROM cascade_delete
GROUP BY table_name, level
ORDER BY level
"""
