"""Tuning: indexes, rewrites, pagination, plans, statistics, summary tables.

Several examples show a slow form followed by its rewrite; both statements
run and the rewrite's rows are the result.  Examples that create indexes
or the summary table change the schema, so the topic's prepare step drops
those objects first and the examples can be run again.

Guardrails:
    ❌ DON'T: Leave tuning indexes behind for other topics to trip over
    ✅ DO: Run through ``run_topic`` (or call ``prepare``) before re-running
"""

from __future__ import annotations

from sqlsamples.core.adapters.base import DatabaseAdapter
from sqlsamples.core.dialect import Dialect
from sqlsamples.examples.base import Topic, registry
from sqlsamples.schema.ddl import cleanup_steps, drop_all
from sqlsamples.schema.tables import SUMMARY_TABLES


def prepare(adapter: DatabaseAdapter) -> None:
    """Drop the tuning indexes and summary table left by an earlier run."""
    steps = [
        step
        for step in cleanup_steps(adapter.dialect)
        if step.kind == "index" or step.name in SUMMARY_TABLES
    ]
    drop_all(adapter, steps)


TOPIC = registry.add_topic(Topic("performance", "Performance tuning", order=7, prepare=prepare))

example = registry.example

_PLAN_QUERY = """SELECT
    c.customer_name,
    COUNT(o.order_id) AS order_count,
    SUM(o.total_amount) AS total_spent
FROM customers c
LEFT JOIN orders o ON c.customer_id = o.customer_id
WHERE c.country = 'USA'
GROUP BY c.customer_id, c.customer_name
HAVING SUM(o.total_amount) > 10000
ORDER BY total_spent DESC"""


@example("performance", "strategic_indexes", "Composite indexes on join and filter columns", mutates=True)
def strategic_indexes(d: Dialect) -> str:
    return f"""
{d.create_index("idx_orders_customer_date", "orders", ["customer_id", "order_date"])};
{d.create_index("idx_orders_status_date", "orders", ["order_status", "order_date"])};
{d.create_index("idx_order_items_product", "order_items", ["product_id", "order_id"])};
{d.list_indexes_query()}
"""


@example("performance", "covering_index", "Covering index for a daily sales report", mutates=True)
def covering_index(d: Dialect) -> str:
    """The report reads only indexed columns, so the table itself is never visited."""
    index = d.create_index(
        "idx_sales_date_product_customer",
        "sales",
        ["sale_date", "product_id", "customer_id"],
        include=["sale_amount", "quantity_sold"],
    )
    return f"""
{index};
SELECT sale_date, product_id, SUM(sale_amount) AS daily_total, SUM(quantity_sold) AS units
FROM sales
WHERE sale_date BETWEEN {d.date_literal("2024-01-01")} AND {d.date_literal("2024-01-31")}
GROUP BY sale_date, product_id
ORDER BY sale_date, product_id
"""


@example("performance", "subquery_rewrite", "Scalar subqueries rewritten as a join")
def subquery_rewrite(d: Dialect) -> str:
    return """
SELECT
    o.order_id,
    o.order_date,
    (SELECT customer_name FROM customers WHERE customer_id = o.customer_id) AS customer_name,
    (SELECT COUNT(*) FROM order_items WHERE order_id = o.order_id) AS item_count
FROM orders o
ORDER BY o.order_id;

SELECT
    o.order_id,
    o.order_date,
    c.customer_name,
    COUNT(oi.item_id) AS item_count
FROM orders o
JOIN customers c ON o.customer_id = c.customer_id
LEFT JOIN order_items oi ON o.order_id = oi.order_id
GROUP BY o.order_id, o.order_date, c.customer_name
ORDER BY o.order_id
"""


@example("performance", "pagination", "Top-N and OFFSET pagination")
def pagination(d: Dialect) -> str:
    """Ten most expensive products, then the second page of ten by id."""
    return f"""
SELECT product_id, product_name, unit_price
FROM products
ORDER BY unit_price DESC, product_id
{d.limit(10)};

SELECT product_id, product_name, unit_price
FROM products
ORDER BY product_id
{d.page(10, 10)}
"""


@example(
    "performance",
    "explain_plan",
    "Execution plan of an aggregate join",
    dialects={"sqlite", "postgresql"},
)
def explain_plan(d: Dialect) -> str:
    """DB2 writes plans into explain tables instead of returning them, so it is excluded."""
    return d.explain(_PLAN_QUERY)


@example("performance", "statistics_refresh", "Refresh optimizer statistics", mutates=True)
def statistics_refresh(d: Dialect) -> str:
    return f"""
{d.analyze("orders")};
{d.analyze("sales")};
SELECT COUNT(*) AS orders_analyzed FROM orders
"""


@example("performance", "filter_then_join", "Filter in derived tables before joining")
def filter_then_join(d: Dialect) -> str:
    return """
SELECT s.sale_date, p.product_name, c.customer_name, s.sale_amount
FROM sales s
JOIN customers c ON s.customer_id = c.customer_id
JOIN products p ON s.product_id = p.product_id
WHERE c.country = 'USA'
  AND p.category_id IN (14, 16)
ORDER BY s.sale_date;

SELECT s.sale_date, p.product_name, c.customer_name, s.sale_amount
FROM (
    SELECT customer_id, customer_name
    FROM customers
    WHERE country = 'USA'
) c
JOIN sales s ON c.customer_id = s.customer_id
JOIN (
    SELECT product_id, product_name
    FROM products
    WHERE category_id IN (14, 16)
) p ON s.product_id = p.product_id
ORDER BY s.sale_date
"""


@example("performance", "exists_vs_in", "Recent customers with IN and with EXISTS")
def exists_vs_in(d: Dialect) -> str:
    since = d.date_literal("2024-04-01")
    return f"""
SELECT customer_name
FROM customers
WHERE customer_id IN (
    SELECT DISTINCT customer_id
    FROM orders
    WHERE order_date >= {since}
)
ORDER BY customer_name;

SELECT customer_name
FROM customers c
WHERE EXISTS (
    SELECT 1
    FROM orders o
    WHERE o.customer_id = c.customer_id
      AND o.order_date >= {since}
)
ORDER BY customer_name
"""


@example("performance", "sargable_date_range", "Date range instead of functions on the column")
def sargable_date_range(d: Dialect) -> str:
    """``YEAR(col) = ...`` hides the column from an index; a half-open range does not."""
    return f"""
SELECT order_id, order_date, total_amount
FROM orders
WHERE {d.extract("year", "order_date")} = 2024
  AND {d.extract("month", "order_date")} = 5
ORDER BY order_id;

SELECT order_id, order_date, total_amount
FROM orders
WHERE order_date >= {d.date_literal("2024-05-01")}
  AND order_date < {d.date_literal("2024-06-01")}
ORDER BY order_id
"""


@example("performance", "summary_table", "Pre-aggregated customer order summary", mutates=True)
def summary_table(d: Dialect) -> str:
    """A plain table standing in for a materialized query table."""
    select = """SELECT
        c.customer_id,
        c.customer_name,
        c.country,
        COUNT(o.order_id) AS order_count,
        SUM(o.total_amount) AS total_spent,
        AVG(o.total_amount) AS avg_order_value,
        MAX(o.order_date) AS last_order_date
    FROM customers c
    LEFT JOIN orders o ON c.customer_id = o.customer_id
    GROUP BY c.customer_id, c.customer_name, c.country"""
    return f"""
{d.create_table_as("customer_order_summary", select)};
SELECT customer_name, total_spent
FROM customer_order_summary
WHERE total_spent > 50000
ORDER BY total_spent DESC
"""


@example("performance", "cte_rewrite", "Repeated subqueries folded into one CTE")
def cte_rewrite(d: Dialect) -> str:
    since = d.date_literal("2024-03-01")
    return f"""
SELECT
    o.order_id,
    (SELECT customer_name FROM customers WHERE customer_id = o.customer_id) AS customer,
    (SELECT COUNT(*) FROM order_items WHERE order_id = o.order_id) AS items,
    (SELECT SUM(line_total) FROM order_items WHERE order_id = o.order_id) AS total
FROM orders o
WHERE o.order_date >= {since}
ORDER BY o.order_id;

WITH order_summary AS (
    SELECT oi.order_id, COUNT(*) AS item_count, SUM(oi.line_total) AS order_total
    FROM order_items oi
    GROUP BY oi.order_id
)
SELECT
    o.order_id,
    c.customer_name AS customer,
    COALESCE(os.item_count, 0) AS items,
    COALESCE(os.order_total, 0) AS total
FROM orders o
JOIN customers c ON o.customer_id = c.customer_id
LEFT JOIN order_summary os ON o.order_id = os.order_id
WHERE o.order_date >= {since}
ORDER BY o.order_id
"""
