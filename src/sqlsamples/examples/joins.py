"""Join patterns: self, anti, cross, inequality, range, full outer, grouping.

``LATERAL`` is written as a ``ROW_NUMBER`` filter, and ``FULL OUTER JOIN``
and ``GROUPING SETS`` fall back to equivalent plain joins and ``UNION ALL``
on engines that lack them.
"""

from __future__ import annotations

from sqlsamples.core.dialect import Dialect
from sqlsamples.examples.base import Topic, registry

TOPIC = registry.add_topic(Topic("joins", "Advanced joins", order=4))

example = registry.example


@example("joins", "multi_table_aggregation", "Customer revenue across four joined tables")
def multi_table_aggregation(d: Dialect) -> str:
    return f"""
SELECT
    c.customer_name,
    c.country,
    COUNT(DISTINCT o.order_id) AS total_orders,
    COUNT(oi.item_id) AS total_items,
    SUM(oi.quantity) AS total_units,
    SUM(oi.line_total) AS total_revenue,
    AVG(o.total_amount) AS avg_order_value,
    pp.products_purchased
FROM customers c
LEFT JOIN orders o ON c.customer_id = o.customer_id
LEFT JOIN order_items oi ON o.order_id = oi.order_id
LEFT JOIN (
    SELECT cp.customer_id, {d.string_agg("cp.product_name", ", ")} AS products_purchased
    FROM (
        SELECT DISTINCT o2.customer_id, p.product_name
        FROM orders o2
        JOIN order_items oi2 ON o2.order_id = oi2.order_id
        JOIN products p ON oi2.product_id = p.product_id
    ) cp
    GROUP BY cp.customer_id
) pp ON c.customer_id = pp.customer_id
GROUP BY c.customer_id, c.customer_name, c.country, pp.products_purchased
HAVING COUNT(o.order_id) > 0
ORDER BY COALESCE(SUM(oi.line_total), 0) DESC, c.customer_name
"""


@example("joins", "self_join", "Employees next to their managers")
def self_join(d: Dialect) -> str:
    return """
SELECT
    e.emp_id,
    e.emp_name AS employee,
    e.salary AS emp_salary,
    m.emp_name AS manager,
    m.salary AS mgr_salary,
    e.salary - m.salary AS salary_difference,
    CASE
        WHEN m.emp_id IS NULL THEN 'NO MANAGER'
        WHEN e.salary > m.salary THEN 'HIGHER THAN MANAGER'
        WHEN e.salary = m.salary THEN 'EQUAL TO MANAGER'
        ELSE 'LOWER THAN MANAGER'
    END AS salary_comparison
FROM employees e
LEFT JOIN employees m ON e.manager_id = m.emp_id
ORDER BY e.emp_id
"""


@example("joins", "anti_join", "Products that were never ordered")
def anti_join(d: Dialect) -> str:
    """``NOT EXISTS`` anti join; ``LEFT JOIN ... IS NULL`` gives the same rows."""
    return f"""
SELECT
    p.product_id,
    p.product_name,
    p.unit_price,
    p.stock_quantity,
    {d.days_between("p.created_date", d.now())} AS days_listed
FROM products p
WHERE NOT EXISTS (
    SELECT 1
    FROM order_items oi
    WHERE oi.product_id = p.product_id
)
ORDER BY p.product_id
"""


@example("joins", "multi_category_customers", "Customers buying from three or more categories")
def multi_category_customers(d: Dialect) -> str:
    return f"""
WITH customer_categories AS (
    SELECT DISTINCT o.customer_id, p.category_id
    FROM orders o
    JOIN order_items oi ON o.order_id = oi.order_id
    JOIN products p ON oi.product_id = p.product_id
)
SELECT
    c.customer_name,
    COUNT(*) AS categories_purchased,
    {d.string_agg("cat.cat_name", ", ")} AS category_names
FROM customers c
JOIN customer_categories cc ON c.customer_id = cc.customer_id
JOIN categories cat ON cc.category_id = cat.cat_id
GROUP BY c.customer_id, c.customer_name
HAVING COUNT(*) >= 3
ORDER BY categories_purchased DESC, c.customer_name
"""


@example("joins", "cross_join", "Every customer-product pair with purchase status")
def cross_join(d: Dialect) -> str:
    return """
SELECT
    c.customer_id,
    c.customer_name,
    p.product_id,
    p.product_name,
    p.unit_price,
    CASE
        WHEN EXISTS (
            SELECT 1
            FROM orders o
            JOIN order_items oi ON o.order_id = oi.order_id
            WHERE o.customer_id = c.customer_id
              AND oi.product_id = p.product_id
        ) THEN 'PURCHASED'
        ELSE 'NOT PURCHASED'
    END AS purchase_status
FROM customers c
CROSS JOIN products p
WHERE c.customer_id <= 5
  AND p.product_id <= 10
ORDER BY c.customer_id, p.product_id
"""


@example("joins", "top_n_per_customer", "Top three orders per customer (LATERAL style)")
def top_n_per_customer(d: Dialect) -> str:
    return """
SELECT customer_id, customer_name, order_id, order_date, total_amount, order_rank
FROM (
    SELECT
        c.customer_id,
        c.customer_name,
        o.order_id,
        o.order_date,
        o.total_amount,
        ROW_NUMBER() OVER (
            PARTITION BY c.customer_id ORDER BY o.total_amount DESC, o.order_id
        ) AS order_rank
    FROM customers c
    JOIN orders o ON o.customer_id = c.customer_id
) ranked
WHERE order_rank <= 3
ORDER BY customer_id, order_rank
"""


@example("joins", "inequality_pairs", "Same-department employee pairs with different pay")
def inequality_pairs(d: Dialect) -> str:
    return """
SELECT
    e1.emp_name AS employee1,
    e1.salary AS salary1,
    e2.emp_name AS employee2,
    e2.salary AS salary2,
    dp.dept_name AS department,
    ABS(e1.salary - e2.salary) AS salary_gap
FROM employees e1
JOIN employees e2
    ON e1.dept_id = e2.dept_id
   AND e1.emp_id < e2.emp_id
   AND e1.salary <> e2.salary
JOIN departments dp ON e1.dept_id = dp.dept_id
ORDER BY dp.dept_name, salary_gap DESC, employee1, employee2
"""


@example("joins", "range_join", "Orders placed within 14 days of each other")
def range_join(d: Dialect) -> str:
    return f"""
SELECT
    o1.order_id AS order1,
    o1.order_date AS date1,
    o2.order_id AS order2,
    o2.order_date AS date2,
    {d.days_between("o1.order_date", "o2.order_date")} AS days_apart
FROM orders o1
JOIN orders o2
    ON o1.order_id < o2.order_id
   AND o2.order_date BETWEEN o1.order_date AND {d.add_days("o1.order_date", 14)}
ORDER BY o1.order_date, o2.order_date
"""


@example("joins", "derived_table_join", "Customers with average order size and tier")
def derived_table_join(d: Dialect) -> str:
    return """
SELECT
    c.customer_id,
    c.customer_name,
    ao.avg_order_amount,
    ao.order_count,
    CASE
        WHEN ao.avg_order_amount >= 50000 THEN 'PREMIUM'
        WHEN ao.avg_order_amount >= 20000 THEN 'STANDARD'
        ELSE 'BASIC'
    END AS customer_tier
FROM customers c
LEFT JOIN (
    SELECT
        customer_id,
        AVG(total_amount) AS avg_order_amount,
        COUNT(*) AS order_count
    FROM orders
    GROUP BY customer_id
) ao ON c.customer_id = ao.customer_id
ORDER BY ao.avg_order_amount DESC, c.customer_id
"""


@example("joins", "multi_level_aggregation", "Category performance with product list")
def multi_level_aggregation(d: Dialect) -> str:
    label = d.concat("product_name", "' ($'", d.cast_text("unit_price", 20), "')'")
    return f"""
SELECT
    cat.cat_name AS category,
    COUNT(DISTINCT p.product_id) AS product_count,
    COUNT(DISTINCT o.order_id) AS order_count,
    SUM(oi.quantity) AS total_units_sold,
    SUM(oi.line_total) AS total_revenue,
    AVG(oi.line_total) AS avg_line_value,
    MAX(oi.line_total) AS max_line_value,
    pl.products
FROM categories cat
LEFT JOIN products p ON cat.cat_id = p.category_id
LEFT JOIN order_items oi ON p.product_id = oi.product_id
LEFT JOIN orders o ON oi.order_id = o.order_id
LEFT JOIN (
    SELECT category_id, {d.string_agg(label, "; ")} AS products
    FROM products
    GROUP BY category_id
) pl ON cat.cat_id = pl.category_id
GROUP BY cat.cat_id, cat.cat_name, pl.products
HAVING SUM(oi.line_total) IS NOT NULL
ORDER BY total_revenue DESC
"""


@example("joins", "conditional_join", "Orders matched to sales by status-dependent rules")
def conditional_join(d: Dialect) -> str:
    return """
SELECT
    o.order_id,
    o.order_date,
    o.order_status,
    c.customer_name,
    COALESCE(s1.sale_amount, s2.sale_amount, 0) AS matched_sale_amount,
    CASE
        WHEN s1.sale_id IS NOT NULL THEN 'EXACT MATCH'
        WHEN s2.sale_id IS NOT NULL THEN 'DATE MATCH'
        ELSE 'NO MATCH'
    END AS match_type
FROM orders o
JOIN customers c ON o.customer_id = c.customer_id
LEFT JOIN sales s1
    ON o.customer_id = s1.customer_id
   AND o.order_date = s1.sale_date
   AND o.order_status = 'DELIVERED'
LEFT JOIN sales s2
    ON o.customer_id = s2.customer_id
   AND o.order_date = s2.sale_date
   AND o.order_status <> 'DELIVERED'
ORDER BY o.order_id
"""


@example("joins", "join_with_windows", "Running order total per customer")
def join_with_windows(d: Dialect) -> str:
    return """
SELECT
    c.customer_name,
    o.order_id,
    o.order_date,
    o.total_amount,
    SUM(o.total_amount) OVER (
        PARTITION BY c.customer_id
        ORDER BY o.order_date
        ROWS UNBOUNDED PRECEDING
    ) AS running_total,
    ROW_NUMBER() OVER (PARTITION BY c.customer_id ORDER BY o.order_date) AS order_sequence
FROM customers c
JOIN orders o ON c.customer_id = o.customer_id
ORDER BY c.customer_id, o.order_date
"""


@example("joins", "category_tree_products", "Products under every category in the Electronics tree")
def category_tree_products(d: Dialect) -> str:
    """A recursive CTE walks the category tree; the result joins back to products.

    Paths are built from zero-padded ids so sorting them lists each parent
    directly before its children.
    """
    return f"""
{d.with_recursive()} category_tree (cat_id, cat_name, level, path) AS (
    SELECT cat_id, cat_name, 1, {d.cast_text(d.lpad("cat_id", 4))}
    FROM categories
    WHERE cat_id = 1
    UNION ALL
    SELECT c.cat_id, c.cat_name, ct.level + 1,
           {d.cast_text(d.concat("ct.path", "'/'", d.lpad("c.cat_id", 4)))}
    FROM categories c
    INNER JOIN category_tree ct ON c.parent_cat_id = ct.cat_id
    WHERE ct.level < 10
)
SELECT
    ct.cat_name,
    ct.level,
    COUNT(p.product_id) AS product_count,
    {d.string_agg("p.product_name", ", ")} AS products
FROM category_tree ct
LEFT JOIN products p ON ct.cat_id = p.category_id
GROUP BY ct.cat_id, ct.cat_name, ct.level, ct.path
ORDER BY ct.path
"""


@example("joins", "full_outer_comparison", "January against February sales per product")
def full_outer_comparison(d: Dialect) -> str:
    """Products sold in only one of the months still appear, with 0 for the other."""
    month = d.extract("month", "sale_date")
    if d.supports_full_outer_join:
        source = """FROM jan_sales j
FULL OUTER JOIN feb_sales f ON j.product_id = f.product_id"""
    else:
        source = """FROM (SELECT product_id FROM jan_sales
      UNION
      SELECT product_id FROM feb_sales) k
LEFT JOIN jan_sales j ON j.product_id = k.product_id
LEFT JOIN feb_sales f ON f.product_id = k.product_id"""
    return f"""
WITH jan_sales AS (
    SELECT product_id, SUM(sale_amount) AS amount
    FROM sales
    WHERE {month} = 1
    GROUP BY product_id
),
feb_sales AS (
    SELECT product_id, SUM(sale_amount) AS amount
    FROM sales
    WHERE {month} = 2
    GROUP BY product_id
)
SELECT
    COALESCE(j.product_id, f.product_id) AS product_id,
    p.product_name,
    COALESCE(j.amount, 0) AS jan_sales,
    COALESCE(f.amount, 0) AS feb_sales,
    COALESCE(f.amount, 0) - COALESCE(j.amount, 0) AS difference,
    CASE
        WHEN j.amount IS NULL THEN 'NEW IN FEB'
        WHEN f.amount IS NULL THEN 'ONLY IN JAN'
        WHEN f.amount > j.amount THEN 'INCREASED'
        WHEN f.amount < j.amount THEN 'DECREASED'
        ELSE 'UNCHANGED'
    END AS trend
{source}
LEFT JOIN products p ON COALESCE(j.product_id, f.product_id) = p.product_id
ORDER BY difference DESC, product_id
"""


@example("joins", "exists_vs_in", "IN, EXISTS and JOIN forms of the same semi join")
def exists_vs_in(d: Dialect) -> str:
    """Three equivalent statements; the result is the last one."""
    return """
SELECT c.customer_name, c.email
FROM customers c
WHERE c.customer_id IN (
    SELECT DISTINCT customer_id
    FROM orders
    WHERE order_status = 'DELIVERED'
)
ORDER BY c.customer_name;

SELECT c.customer_name, c.email
FROM customers c
WHERE EXISTS (
    SELECT 1
    FROM orders o
    WHERE o.customer_id = c.customer_id
      AND o.order_status = 'DELIVERED'
)
ORDER BY c.customer_name;

SELECT DISTINCT c.customer_name, c.email
FROM customers c
INNER JOIN orders o ON c.customer_id = o.customer_id
WHERE o.order_status = 'DELIVERED'
ORDER BY c.customer_name
"""


@example("joins", "grouping_rollup", "Revenue by category, product and status with subtotals")
def grouping_rollup(d: Dialect) -> str:
    """Detail rows, per-product and per-category subtotals and a grand total.

    Written with ``GROUPING SETS`` where the engine has it, otherwise as a
    ``UNION ALL`` of the four grouping levels.
    """
    lines = """
WITH lines AS (
    SELECT
        cat.cat_name,
        p.product_name,
        o.order_status,
        o.order_id,
        oi.quantity,
        oi.line_total
    FROM categories cat
    JOIN products p ON cat.cat_id = p.category_id
    JOIN order_items oi ON p.product_id = oi.product_id
    JOIN orders o ON oi.order_id = o.order_id
)"""
    measures = (
        "COUNT(DISTINCT order_id) AS order_count, "
        "SUM(quantity) AS total_quantity, "
        "SUM(line_total) AS total_revenue"
    )
    if d.supports_grouping_sets:
        return f"""{lines}
SELECT cat_name, product_name, order_status, {measures}
FROM lines
GROUP BY GROUPING SETS (
    (cat_name, product_name, order_status),
    (cat_name, product_name),
    (cat_name),
    ()
)
ORDER BY cat_name, product_name, order_status
"""
    return f"""{lines}
SELECT cat_name, product_name, order_status, {measures}
FROM lines
GROUP BY cat_name, product_name, order_status
UNION ALL
SELECT cat_name, product_name, NULL, {measures}
FROM lines
GROUP BY cat_name, product_name
UNION ALL
SELECT cat_name, NULL, NULL, {measures}
FROM lines
GROUP BY cat_name
UNION ALL
SELECT NULL, NULL, NULL, {measures}
FROM lines
ORDER BY 1, 2, 3
"""
