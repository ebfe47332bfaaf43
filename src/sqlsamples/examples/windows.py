"""Window (OLAP) functions: ranking, running and moving aggregates, offsets.

Employee examples join ``departments`` for the department name.  The median
is computed from ``ROW_NUMBER`` and ``COUNT`` windows so it runs without
``PERCENTILE_CONT``.
"""

from __future__ import annotations

from sqlsamples.core.dialect import Dialect
from sqlsamples.examples.base import Topic, registry

TOPIC = registry.add_topic(Topic("windows", "Window functions", order=2))

example = registry.example

_EMPLOYEES = """
FROM employees e
JOIN departments dp ON e.dept_id = dp.dept_id"""


@example("windows", "ranking", "ROW_NUMBER, RANK, DENSE_RANK and PERCENT_RANK")
def ranking(d: Dialect) -> str:
    return f"""
SELECT
    e.emp_name,
    dp.dept_name AS department,
    e.salary,
    ROW_NUMBER() OVER (ORDER BY e.salary DESC, e.emp_id) AS row_num,
    RANK() OVER (ORDER BY e.salary DESC) AS salary_rank,
    DENSE_RANK() OVER (ORDER BY e.salary DESC) AS dense_salary_rank,
    PERCENT_RANK() OVER (ORDER BY e.salary DESC) AS pct_rank
{_EMPLOYEES}
ORDER BY e.salary DESC, e.emp_id
"""


@example("windows", "partitioned_ranking", "Salary rank within each department")
def partitioned_ranking(d: Dialect) -> str:
    return f"""
SELECT
    dp.dept_name AS department,
    e.emp_name,
    e.salary,
    RANK() OVER (PARTITION BY dp.dept_name ORDER BY e.salary DESC) AS dept_rank,
    DENSE_RANK() OVER (PARTITION BY dp.dept_name ORDER BY e.salary DESC) AS dept_dense_rank,
    ROW_NUMBER() OVER (PARTITION BY dp.dept_name ORDER BY e.salary DESC, e.emp_id) AS dept_row_num
{_EMPLOYEES}
ORDER BY department, e.salary DESC, e.emp_id
"""


@example("windows", "running_totals", "Running sales total overall and per product")
def running_totals(d: Dialect) -> str:
    return """
SELECT
    s.sale_date,
    p.product_name,
    s.sale_amount,
    SUM(s.sale_amount) OVER (
        ORDER BY s.sale_date, s.sale_id
        ROWS BETWEEN UNBOUNDED PRECEDING AND CURRENT ROW
    ) AS running_total,
    SUM(s.sale_amount) OVER (
        PARTITION BY p.product_name
        ORDER BY s.sale_date, s.sale_id
        ROWS BETWEEN UNBOUNDED PRECEDING AND CURRENT ROW
    ) AS product_running_total
FROM sales s
JOIN products p ON s.product_id = p.product_id
ORDER BY s.sale_date, s.sale_id
"""


@example("windows", "moving_averages", "7- and 30-row moving averages of closing price")
def moving_averages(d: Dialect) -> str:
    """Trailing averages over trading days, and today's distance from the 7-day average."""
    return """
SELECT
    trade_date,
    stock_symbol,
    close_price,
    AVG(close_price) OVER (
        PARTITION BY stock_symbol ORDER BY trade_date
        ROWS BETWEEN 6 PRECEDING AND CURRENT ROW
    ) AS moving_avg_7day,
    AVG(close_price) OVER (
        PARTITION BY stock_symbol ORDER BY trade_date
        ROWS BETWEEN 29 PRECEDING AND CURRENT ROW
    ) AS moving_avg_30day,
    close_price - AVG(close_price) OVER (
        PARTITION BY stock_symbol ORDER BY trade_date
        ROWS BETWEEN 6 PRECEDING AND CURRENT ROW
    ) AS deviation_from_avg
FROM stock_prices
ORDER BY stock_symbol, trade_date
"""


@example("windows", "lead_lag", "Previous and next day sales per product")
def lead_lag(d: Dialect) -> str:
    return """
SELECT
    sale_date,
    product_id,
    sales_amount,
    LAG(sales_amount, 1) OVER (PARTITION BY product_id ORDER BY sale_date) AS previous_sales,
    LEAD(sales_amount, 1) OVER (PARTITION BY product_id ORDER BY sale_date) AS next_sales,
    sales_amount - LAG(sales_amount, 1, 0) OVER (
        PARTITION BY product_id ORDER BY sale_date
    ) AS change_from_previous,
    CASE
        WHEN LAG(sales_amount) OVER (PARTITION BY product_id ORDER BY sale_date) > 0
        THEN (sales_amount - LAG(sales_amount) OVER (PARTITION BY product_id ORDER BY sale_date))
             / LAG(sales_amount) OVER (PARTITION BY product_id ORDER BY sale_date) * 100
    END AS pct_change
FROM daily_sales
ORDER BY product_id, sale_date
"""


@example("windows", "first_last_value", "First and last hire per department")
def first_last_value(d: Dialect) -> str:
    return f"""
SELECT
    e.emp_name,
    dp.dept_name AS department,
    e.hire_date,
    e.salary,
    FIRST_VALUE(e.emp_name) OVER (
        PARTITION BY dp.dept_name ORDER BY e.hire_date
        ROWS BETWEEN UNBOUNDED PRECEDING AND UNBOUNDED FOLLOWING
    ) AS first_hired_in_dept,
    LAST_VALUE(e.emp_name) OVER (
        PARTITION BY dp.dept_name ORDER BY e.hire_date
        ROWS BETWEEN UNBOUNDED PRECEDING AND UNBOUNDED FOLLOWING
    ) AS last_hired_in_dept,
    FIRST_VALUE(e.salary) OVER (
        PARTITION BY dp.dept_name ORDER BY e.salary DESC
        ROWS BETWEEN UNBOUNDED PRECEDING AND UNBOUNDED FOLLOWING
    ) AS highest_salary_in_dept
{_EMPLOYEES}
ORDER BY department, e.hire_date
"""


@example("windows", "ntile_segments", "Customer quartiles and deciles by purchases")
def ntile_segments(d: Dialect) -> str:
    return """
SELECT
    customer_id,
    customer_name,
    total_purchases,
    NTILE(4) OVER (ORDER BY total_purchases DESC, customer_id) AS quartile,
    NTILE(10) OVER (ORDER BY total_purchases DESC, customer_id) AS decile,
    CASE NTILE(4) OVER (ORDER BY total_purchases DESC, customer_id)
        WHEN 1 THEN 'Top 25%'
        WHEN 2 THEN 'Upper Middle'
        WHEN 3 THEN 'Lower Middle'
        ELSE 'Bottom 25%'
    END AS customer_segment
FROM customer_summary
ORDER BY total_purchases DESC, customer_id
"""


@example("windows", "month_over_month", "Monthly sales against the previous month")
def month_over_month(d: Dialect) -> str:
    """Window over a grouped result: LAG of ``SUM(sale_amount)`` by month."""
    year = d.extract("year", "sale_date")
    month = d.extract("month", "sale_date")
    return f"""
WITH monthly AS (
    SELECT {year} AS sale_year, {month} AS sale_month, SUM(sale_amount) AS monthly_sales
    FROM sales
    GROUP BY {year}, {month}
)
SELECT
    sale_year,
    sale_month,
    monthly_sales,
    LAG(monthly_sales) OVER (ORDER BY sale_year, sale_month) AS previous_month,
    monthly_sales - LAG(monthly_sales) OVER (ORDER BY sale_year, sale_month) AS change
FROM monthly
ORDER BY sale_year, sale_month
"""


@example("windows", "ratio_to_report", "Salary share of department and company")
def ratio_to_report(d: Dialect) -> str:
    return f"""
SELECT
    dp.dept_name AS department,
    e.emp_name,
    e.salary,
    SUM(e.salary) OVER (PARTITION BY dp.dept_name) AS dept_total_salary,
    ROUND(e.salary * 100.0 / SUM(e.salary) OVER (PARTITION BY dp.dept_name), 2) AS pct_of_dept,
    ROUND(e.salary * 100.0 / SUM(e.salary) OVER (), 2) AS pct_of_company
{_EMPLOYEES}
ORDER BY department, e.salary DESC
"""


@example("windows", "top_n_per_group", "Top three products per category by sales")
def top_n_per_group(d: Dialect) -> str:
    return """
WITH ranked_products AS (
    SELECT
        category_name,
        product_name,
        total_sales,
        ROW_NUMBER() OVER (
            PARTITION BY category_name ORDER BY total_sales DESC, product_name
        ) AS rank_in_category
    FROM product_sales
    WHERE total_sales IS NOT NULL
)
SELECT category_name, product_name, total_sales, rank_in_category
FROM ranked_products
WHERE rank_in_category <= 3
ORDER BY category_name, rank_in_category
"""


@example("windows", "running_percentage", "Cumulative share of total revenue")
def running_percentage(d: Dialect) -> str:
    return """
SELECT
    product_name,
    revenue,
    SUM(revenue) OVER (ORDER BY revenue DESC, product_name) AS cumulative_revenue,
    SUM(revenue) OVER () AS total_revenue,
    ROUND(
        SUM(revenue) OVER (ORDER BY revenue DESC, product_name) * 100.0 / SUM(revenue) OVER (),
        2
    ) AS cumulative_pct
FROM product_revenue
WHERE revenue IS NOT NULL
ORDER BY revenue DESC, product_name
"""


@example("windows", "frame_variants", "ROWS and RANGE frames side by side")
def frame_variants(d: Dialect) -> str:
    """Current row only, trailing three rows, a centered five-row average, and a
    RANGE frame that groups peers sharing the same order date."""
    return """
SELECT
    order_date,
    order_id,
    total_amount,
    SUM(total_amount) OVER (ORDER BY order_date, order_id ROWS CURRENT ROW) AS current_row_only,
    SUM(total_amount) OVER (
        ORDER BY order_date, order_id ROWS BETWEEN 2 PRECEDING AND CURRENT ROW
    ) AS last_3_rows,
    AVG(total_amount) OVER (
        ORDER BY order_date, order_id ROWS BETWEEN 2 PRECEDING AND 2 FOLLOWING
    ) AS centered_avg,
    COUNT(*) OVER (
        ORDER BY order_date RANGE BETWEEN UNBOUNDED PRECEDING AND CURRENT ROW
    ) AS orders_to_date
FROM orders
ORDER BY order_date, order_id
"""


@example("windows", "multiple_windows", "Daily, rolling, monthly and per-product totals in one pass")
def multiple_windows(d: Dialect) -> str:
    year = d.extract("year", "sale_date")
    month = d.extract("month", "sale_date")
    return f"""
SELECT
    sale_date,
    product_id,
    quantity_sold,
    SUM(quantity_sold) OVER (PARTITION BY sale_date) AS daily_total,
    SUM(quantity_sold) OVER (
        ORDER BY sale_date, product_id ROWS BETWEEN 6 PRECEDING AND CURRENT ROW
    ) AS weekly_rolling_sum,
    AVG(quantity_sold) OVER (
        ORDER BY sale_date, product_id ROWS BETWEEN 6 PRECEDING AND CURRENT ROW
    ) AS weekly_rolling_avg,
    SUM(quantity_sold) OVER (PARTITION BY {year}, {month}) AS monthly_total,
    SUM(quantity_sold) OVER (
        PARTITION BY product_id ORDER BY sale_date ROWS UNBOUNDED PRECEDING
    ) AS product_running_total
FROM sales
ORDER BY sale_date, product_id
"""


@example("windows", "median", "Median and spread of salary per department")
def median(d: Dialect) -> str:
    return f"""
WITH ranked AS (
    SELECT
        dp.dept_name AS department,
        e.salary,
        ROW_NUMBER() OVER (PARTITION BY dp.dept_name ORDER BY e.salary) AS rn,
        COUNT(*) OVER (PARTITION BY dp.dept_name) AS cnt
    {_EMPLOYEES.strip()}
)
SELECT
    department,
    AVG(CASE WHEN rn IN ((cnt + 1) / 2, (cnt + 2) / 2) THEN salary END) AS median_salary,
    MIN(salary) AS min_salary,
    MAX(salary) AS max_salary,
    AVG(salary) AS avg_salary,
    MAX(cnt) AS headcount
FROM ranked
GROUP BY department
ORDER BY median_salary DESC, department
"""


@example("windows", "gaps_and_islands", "Runs of consecutive sale days per product")
def gaps_and_islands(d: Dialect) -> str:
    """Consecutive dates minus their row number collapse to one group key."""
    return f"""
WITH numbered AS (
    SELECT
        sale_date,
        product_id,
        ROW_NUMBER() OVER (PARTITION BY product_id ORDER BY sale_date) AS rn
    FROM sales
),
grouped AS (
    SELECT sale_date, product_id, {d.add_days("sale_date", "-rn")} AS grp
    FROM numbered
)
SELECT
    product_id,
    MIN(sale_date) AS sequence_start,
    MAX(sale_date) AS sequence_end,
    COUNT(*) AS consecutive_days
FROM grouped
GROUP BY product_id, grp
ORDER BY product_id, sequence_start
"""


@example("windows", "conditional_window_aggregation", "Cumulative sales and refunds per employee")
def conditional_window_aggregation(d: Dialect) -> str:
    return """
SELECT
    employee_id,
    transaction_date,
    transaction_type,
    amount,
    SUM(CASE WHEN transaction_type = 'SALE' THEN amount ELSE 0 END) OVER (
        PARTITION BY employee_id ORDER BY transaction_date ROWS UNBOUNDED PRECEDING
    ) AS cumulative_sales,
    SUM(CASE WHEN transaction_type = 'REFUND' THEN amount ELSE 0 END) OVER (
        PARTITION BY employee_id ORDER BY transaction_date ROWS UNBOUNDED PRECEDING
    ) AS cumulative_refunds,
    COUNT(CASE WHEN transaction_type = 'SALE' THEN 1 END) OVER (
        PARTITION BY employee_id ORDER BY transaction_date ROWS UNBOUNDED PRECEDING
    ) AS sales_count
FROM transactions
ORDER BY employee_id, transaction_date
"""
