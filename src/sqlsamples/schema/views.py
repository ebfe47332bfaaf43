"""Convenience views over the core tables.

The view bodies use only ANSI joins and aggregates, so the same text is
valid on every supported engine.
"""

from __future__ import annotations

VIEWS: dict[str, str] = {
    "customer_summary": """
SELECT
    c.customer_id,
    c.customer_name,
    c.customer_since,
    c.country,
    COUNT(o.order_id) AS total_orders,
    COALESCE(SUM(o.total_amount), 0) AS total_purchases,
    COALESCE(AVG(o.total_amount), 0) AS avg_order_value,
    MAX(o.order_date) AS last_order_date
FROM customers c
LEFT JOIN orders o ON c.customer_id = o.customer_id
GROUP BY c.customer_id, c.customer_name, c.customer_since, c.country""",
    "product_sales": """
SELECT
    p.product_id,
    p.product_name,
    c.cat_name AS category_name,
    COUNT(DISTINCT o.order_id) AS orders_count,
    SUM(oi.quantity) AS total_quantity_sold,
    SUM(oi.line_total) AS total_sales
FROM products p
LEFT JOIN order_items oi ON p.product_id = oi.product_id
LEFT JOIN orders o ON oi.order_id = o.order_id
LEFT JOIN categories c ON p.category_id = c.cat_id
GROUP BY p.product_id, p.product_name, c.cat_name""",
    "daily_sales": """
SELECT
    s.sale_date,
    s.product_id,
    p.product_name,
    SUM(s.quantity_sold) AS quantity_sold,
    SUM(s.sale_amount) AS sales_amount,
    SUM(s.profit_amount) AS profit_amount
FROM sales s
JOIN products p ON s.product_id = p.product_id
GROUP BY s.sale_date, s.product_id, p.product_name""",
    "product_revenue": """
SELECT
    p.product_name,
    SUM(oi.line_total) AS revenue,
    COUNT(DISTINCT o.order_id) AS num_orders,
    SUM(oi.quantity) AS units_sold
FROM products p
LEFT JOIN order_items oi ON p.product_id = oi.product_id
LEFT JOIN orders o ON oi.order_id = o.order_id
GROUP BY p.product_name""",
}


def create_view_sql(name: str) -> str:
    return f"CREATE VIEW {name} AS{VIEWS[name]}"


def view_names() -> list[str]:
    return list(VIEWS)


__all__ = ["VIEWS", "create_view_sql", "view_names"]
