"""Synthetic data generation with recursive series and random functions.

Row counts are fixed; values are random on every run.  Random values that
feed more than one output column are drawn once in a materialized CTE.
"""

from __future__ import annotations

from sqlsamples.core.dialect import Dialect
from sqlsamples.examples.base import Topic, registry

TOPIC = registry.add_topic(Topic("generation", "Data generation", order=5))

example = registry.example


def _series(d: Dialect, count: int, name: str = "num_seq") -> str:
    """Recursive CTE body producing ``n`` = 1..count (without the WITH keyword)."""
    return (
        f"{name} (n) AS (\n"
        f"    SELECT 1{d.from_dual()}\n"
        f"    UNION ALL\n"
        f"    SELECT n + 1 FROM {name} WHERE n < {count}\n"
        f")"
    )


def _money(d: Dialect, expr: str) -> str:
    return f"ROUND({d.cast_decimal(expr)}, 2)"


@example("generation", "number_sequence", "Numbers 1 to 1000")
def number_sequence(d: Dialect) -> str:
    return f"""
{d.with_recursive()} {_series(d, 1000, "number_gen")}
SELECT n AS number
FROM number_gen
ORDER BY n
"""


@example("generation", "calendar", "Calendar dimension for 2024")
def calendar(d: Dialect) -> str:
    return f"""
{d.with_recursive()} date_gen (dt) AS (
    SELECT {d.date_literal("2024-01-01")}{d.from_dual()}
    UNION ALL
    SELECT {d.add_days("dt", 1)} FROM date_gen WHERE dt < {d.date_literal("2024-12-31")}
)
SELECT
    dt AS calendar_date,
    {d.day_name("dt")} AS day_name,
    {d.day_of_week("dt")} AS day_number,
    {d.extract("week", "dt")} AS week_number,
    {d.extract("month", "dt")} AS month_number,
    {d.extract("quarter", "dt")} AS quarter,
    {d.extract("year", "dt")} AS year,
    CASE WHEN {d.day_of_week("dt")} IN (1, 7) THEN 'Y' ELSE 'N' END AS is_weekend
FROM date_gen
ORDER BY dt
"""


@example("generation", "synthetic_customers", "100 synthetic customers")
def synthetic_customers(d: Dialect) -> str:
    cities = ["New York", "Los Angeles", "Chicago", "Houston", "Phoenix",
              "Philadelphia", "San Antonio", "San Diego", "Dallas", "San Jose"]
    countries = ["USA", "Canada", "UK", "Germany", "France"]
    city_case = " ".join(f"WHEN {i} THEN '{c}'" for i, c in enumerate(cities))
    country_case = " ".join(f"WHEN {i} THEN '{c}'" for i, c in enumerate(countries))
    return f"""
{d.with_recursive()} {_series(d, 100)}
SELECT
    n AS customer_id,
    {d.concat("'Customer_'", d.lpad("n", 5))} AS customer_name,
    {d.concat("'customer'", d.cast_text("n", 10), "'@email.com'")} AS email,
    {d.concat("'555-'", d.cast_text(d.random_int(1000, 9999), 4))} AS phone,
    CASE {d.random_int(0, 9)} {city_case} END AS city,
    CASE {d.random_int(0, 4)} {country_case} END AS country,
    {d.add_days(d.date_literal("2020-01-01"), d.random_int(0, 1499))} AS customer_since,
    {_money(d, f"10000 + {d.random_float()} * 90000")} AS credit_limit
FROM num_seq
ORDER BY n
"""


@example("generation", "random_transactions", "1000 random sales transactions")
def random_transactions(d: Dialect) -> str:
    """Quantity and unit price are drawn once so the total is their product."""
    return f"""
{d.with_recursive()} {_series(d, 1000)},
random_trans AS {d.materialized()}(
    SELECT
        n,
        {d.random_int(0, 299)} AS day_offset,
        {d.random_int(1, 20)} AS product_id,
        {d.random_int(1, 10)} AS customer_id,
        {d.random_int(1, 10)} AS quantity,
        {_money(d, f"50 + {d.random_float()} * 450")} AS unit_price
    FROM num_seq
)
SELECT
    10000 + n AS transaction_id,
    {d.add_days(d.date_literal("2024-01-01"), "day_offset")} AS transaction_date,
    product_id,
    customer_id,
    quantity,
    unit_price,
    quantity * unit_price AS total_amount
FROM random_trans
ORDER BY n
"""


@example("generation", "hourly_time_series", "Hourly sensor readings for January 2024")
def hourly_time_series(d: Dialect) -> str:
    return f"""
{d.with_recursive()} hour_gen (ts) AS (
    SELECT {d.timestamp_literal("2024-01-01 00:00:00")}{d.from_dual()}
    UNION ALL
    SELECT {d.add_hours("ts", 1)} FROM hour_gen
    WHERE ts < {d.timestamp_literal("2024-01-31 23:00:00")}
),
metrics AS {d.materialized()}(
    SELECT ts, {d.random_float()} AS rand1, {d.random_float()} AS rand2
    FROM hour_gen
)
SELECT
    ts AS reading_time,
    {d.extract("day", "ts")} AS day_of_month,
    {d.extract("hour", "ts")} AS hour,
    {_money(d, "18 + rand1 * 7")} AS temperature,
    {_money(d, "40 + rand2 * 40")} AS humidity,
    CAST(rand1 * 100 AS INTEGER) AS sensor_reading,
    CASE
        WHEN rand1 > 0.8 THEN 'HIGH'
        WHEN rand1 < 0.3 THEN 'LOW'
        ELSE 'NORMAL'
    END AS alert_level
FROM metrics
ORDER BY ts
"""


@example("generation", "product_catalog", "50 generated products")
def product_catalog(d: Dialect) -> str:
    kinds = ["Laptop", "Phone", "Tablet", "Monitor", "Accessory"]
    kind_case = " ".join(f"WHEN {i} THEN '{k}'" for i, k in enumerate(kinds))
    return f"""
{d.with_recursive()} {_series(d, 50)},
product_data AS {d.materialized()}(
    SELECT
        n,
        {d.random_int(0, 4)} AS kind,
        {d.random_float()} AS rand2,
        {d.random_float()} AS rand3
    FROM num_seq
)
SELECT
    5000 + n AS product_id,
    {d.concat(f"CASE kind {kind_case} END", "' Model '", d.lpad("n", 3))} AS product_name,
    1 + kind AS category_id,
    {_money(d, "99.99 + rand2 * 1900")} AS unit_price,
    CAST(rand3 * 500 AS INTEGER) AS stock_quantity,
    CASE WHEN rand2 > 0.95 THEN 'Y' ELSE 'N' END AS discontinued,
    {d.add_days(d.date_literal("2020-01-01"), "CAST(rand3 * 1500 AS INTEGER)")} AS created_date
FROM product_data
ORDER BY n
"""


@example("generation", "weighted_distribution", "Skewed customer value tiers")
def weighted_distribution(d: Dialect) -> str:
    """Squaring a uniform value skews it towards zero: few PLATINUM, many BRONZE."""
    return f"""
{d.with_recursive()} {_series(d, 1000)},
weighted_data AS {d.materialized()}(
    SELECT n, {d.random_float()} AS r
    FROM num_seq
)
SELECT
    n AS customer_id,
    CAST(r * r * 100 AS INTEGER) AS purchase_count,
    {_money(d, "r * r * 50000")} AS lifetime_value,
    CASE
        WHEN r * r > 0.95 THEN 'PLATINUM'
        WHEN r * r > 0.80 THEN 'GOLD'
        WHEN r * r > 0.50 THEN 'SILVER'
        ELSE 'BRONZE'
    END AS customer_tier
FROM weighted_data
ORDER BY purchase_count DESC, n
"""


@example("generation", "seasonal_sales", "Daily 2024 sales with seasonal and weekend lift")
def seasonal_sales(d: Dialect) -> str:
    month = d.extract("month", "sale_date")
    dow = d.day_of_week("sale_date")
    return f"""
{d.with_recursive()} sale_dates (sale_date) AS (
    SELECT {d.date_literal("2024-01-01")}{d.from_dual()}
    UNION ALL
    SELECT {d.add_days("sale_date", 1)} FROM sale_dates WHERE sale_date < {d.date_literal("2024-12-31")}
),
seasonal_data AS {d.materialized()}(
    SELECT
        sale_date,
        {d.random_float()} AS base_rand,
        CASE
            WHEN {month} IN (11, 12) THEN 1.5
            WHEN {month} IN (6, 7, 8) THEN 1.2
            ELSE 1.0
        END AS seasonal_factor,
        CASE WHEN {dow} IN (1, 7) THEN 1.3 ELSE 1.0 END AS weekend_factor
    FROM sale_dates
)
SELECT
    sale_date,
    {d.day_name("sale_date")} AS day_name,
    CAST(50 + base_rand * 200 * seasonal_factor * weekend_factor AS INTEGER) AS sales_count,
    {_money(d, "5000 + base_rand * 25000 * seasonal_factor * weekend_factor")} AS sales_amount,
    seasonal_factor,
    weekend_factor
FROM seasonal_data
ORDER BY sale_date
"""


@example("generation", "sparse_data", "Records with realistic NULL patterns")
def sparse_data(d: Dialect) -> str:
    return f"""
{d.with_recursive()} {_series(d, 100)},
draws AS {d.materialized()}(
    SELECT n, {d.random_float()} AS r1, {d.random_float()} AS r2, {d.random_float()} AS r3
    FROM num_seq
)
SELECT
    n AS record_id,
    {d.concat("'Record_'", d.cast_text("n", 10))} AS record_name,
    CASE WHEN r1 > 0.3 THEN {d.concat("'value_'", d.cast_text("n", 10))} END AS optional_field1,
    CASE WHEN r2 > 0.5 THEN CAST(r1 * 100 AS INTEGER) END AS optional_field2,
    CASE
        WHEN r3 > 0.7 THEN {d.add_days(d.date_literal("2024-01-01"), "CAST(r2 * 365 AS INTEGER)")}
    END AS optional_date
FROM draws
ORDER BY n
"""


@example("generation", "org_hierarchy", "626 employees in a five-level reporting tree")
def org_hierarchy(d: Dialect) -> str:
    """Managers are assigned arithmetically from the row number.

    One CEO, five VPs reporting to the CEO, then four directors per VP, five
    managers per director and five staff per manager.
    """
    return f"""
{d.with_recursive()} {_series(d, 626)},
emp_data AS {d.materialized()}(
    SELECT
        n,
        CASE
            WHEN n = 1 THEN 'CEO'
            WHEN n <= 6 THEN 'VP'
            WHEN n <= 26 THEN 'Director'
            WHEN n <= 126 THEN 'Manager'
            ELSE 'Staff'
        END AS job_level,
        {d.random_int(0, 3649)} AS tenure_days,
        {d.random_float()} AS r
    FROM num_seq
)
SELECT
    1000 + n AS emp_id,
    {d.concat("'Employee_'", d.lpad("n", 4))} AS emp_name,
    CASE
        WHEN n = 1 THEN NULL
        WHEN n <= 6 THEN 1001
        WHEN n <= 26 THEN 1002 + (n - 7) / 4
        WHEN n <= 126 THEN 1007 + (n - 27) / 5
        ELSE 1027 + (n - 127) / 5
    END AS manager_id,
    job_level,
    {d.add_days(d.date_literal("2015-01-01"), "tenure_days")} AS hire_date,
    {_money(d, '''CASE job_level
        WHEN 'CEO' THEN 300000
        WHEN 'VP' THEN 180000 + r * 40000
        WHEN 'Director' THEN 120000 + r * 30000
        WHEN 'Manager' THEN 80000 + r * 20000
        ELSE 40000 + r * 30000
    END''')} AS salary
FROM emp_data
ORDER BY n
"""


@example("generation", "order_headers", "200 random orders with status, payment and ship date")
def order_headers(d: Dialect) -> str:
    """Ships one to seven days after the order date."""
    order_date = d.add_days(d.date_literal("2024-01-01"), "day_offset")
    ship_date = d.add_days(d.date_literal("2024-01-01"), "day_offset + ship_days")
    return f"""
{d.with_recursive()} {_series(d, 200)},
order_draws AS {d.materialized()}(
    SELECT
        n,
        {d.random_int(1, 10)} AS customer_id,
        {d.random_int(0, 299)} AS day_offset,
        {d.random_int(1, 7)} AS ship_days,
        {d.random_int(0, 3)} AS status_pick,
        {d.random_int(0, 2)} AS payment_pick,
        {d.random_float()} AS r
    FROM num_seq
)
SELECT
    20000 + n AS order_id,
    customer_id,
    {order_date} AS order_date,
    {ship_date} AS ship_date,
    CASE status_pick
        WHEN 0 THEN 'PENDING'
        WHEN 1 THEN 'SHIPPED'
        WHEN 2 THEN 'DELIVERED'
        ELSE 'CANCELLED'
    END AS order_status,
    {_money(d, "100 + r * 4900")} AS total_amount,
    CASE payment_pick
        WHEN 0 THEN 'CREDIT'
        WHEN 1 THEN 'DEBIT'
        ELSE 'WIRE'
    END AS payment_method
FROM order_draws
ORDER BY n
"""


DESCRIPTIONS = (
    "High-quality product with excellent features and performance. Perfect for professional use.",
    "Budget-friendly option with great value. Ideal for everyday tasks and home use.",
    "Premium product with cutting-edge technology. Best-in-class performance and reliability.",
    "Compact and portable design. Easy to use with intuitive controls and setup.",
    "Versatile product suitable for various applications. Durable construction and long-lasting.",
)

TAG_SETS = (
    "electronics, gadget, technology",
    "home, office, productivity",
    "professional, business, enterprise",
    "consumer, personal, lifestyle",
)


@example("generation", "random_text", "Product descriptions and tags picked at random")
def random_text(d: Dialect) -> str:
    description_case = " ".join(f"WHEN {i} THEN '{text}'" for i, text in enumerate(DESCRIPTIONS))
    tag_case = " ".join(f"WHEN {i} THEN '{tags}'" for i, tags in enumerate(TAG_SETS))
    return f"""
{d.with_recursive()} {_series(d, 20)}
SELECT
    n AS product_id,
    {d.concat("'Product '", d.cast_text("n", 10))} AS product_name,
    CASE {d.random_int(0, 4)} {description_case} END AS description,
    CASE {d.random_int(0, 3)} {tag_case} END AS tags
FROM num_seq
ORDER BY n
"""


@example("generation", "insert_script", "INSERT statements for 50 test customers")
def insert_script(d: Dialect) -> str:
    """Each row is one runnable statement for a ``test_customers`` table.

    The signup date is rendered as a plain ``'YYYY-MM-DD'`` literal so the
    generated script loads on any of the engines.
    """
    signup = d.add_days(d.date_literal("2024-01-01"), d.random_int(0, 364))
    statement = d.concat(
        "'INSERT INTO test_customers VALUES ('",
        d.cast_text("n", 10),
        "', ''Customer_'",
        d.lpad("n", 5),
        "''', ''customer'",
        d.cast_text("n", 10),
        "'@test.com'', ''555-'",
        d.cast_text(d.random_int(1000, 9999), 4),
        "''', '''",
        d.cast_text(signup, 10),
        "''');'",
    )
    return f"""
{d.with_recursive()} {_series(d, 50)}
SELECT {statement} AS insert_statement
FROM num_seq
ORDER BY n
"""
