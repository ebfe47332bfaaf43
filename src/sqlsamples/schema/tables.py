"""SQLAlchemy 2.0 table definitions for the sample schema.

Manifesto:
    Every sample table is declared once, here, and compiled to DDL for the
    target engine by :mod:`sqlsamples.schema.ddl`.  The declarations are
    the single authoritative description of the sample data model: the
    foreign-key integrity check reads its relationships from this metadata.

Column types follow the portable subset the three engines share:

* identifiers -> ``Integer``
* names / codes -> ``String(n)`` (``VARCHAR``)
* money -> ``Numeric(p, 2)`` (``DECIMAL``)
* XML and JSON documents -> ``Text`` (parsed by the engine at query time)
* derived amounts -> ``Computed`` (``GENERATED ALWAYS AS``)

Tags:
    schema, orm, sqlalchemy, tables, sample-data

Usage::

    from sqlsamples.schema.tables import SampleBase, TableGroup, tables_for

    for table in tables_for([TableGroup.CORE]):
        print(table.name)
"""

from __future__ import annotations

import datetime
from collections.abc import Iterable
from decimal import Decimal
from enum import Enum

from sqlalchemy import (
    CHAR,
    BigInteger,
    Computed,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# Current rows of a system-versioned table carry this end timestamp
END_OF_TIME = "9999-12-30 00:00:00"


class SampleBase(DeclarativeBase):
    """Declarative base shared by every sample table."""

    type_annotation_map = {
        int: Integer,
        str: String(100),
        Decimal: Numeric(15, 2),
        datetime.date: Date,
        datetime.datetime: DateTime,
    }


class TableGroup(str, Enum):
    """Tables are created and dropped in groups.

    ``CORE`` is the base schema plus its views; the other groups are
    created by the topic that needs them.
    """

    CORE = "core"
    TEMPORAL = "temporal"
    SEMISTRUCTURED = "semistructured"


class OrderStatus(str, Enum):
    PENDING = "PENDING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


# =============================================================================
# Core tables (foreign-key order)
# =============================================================================


class DepartmentTable(SampleBase):
    __tablename__ = "departments"

    dept_id: Mapped[int] = mapped_column(primary_key=True, autoincrement=False)
    dept_name: Mapped[str] = mapped_column(String(100), nullable=False)
    location: Mapped[str | None] = mapped_column(String(100))
    budget: Mapped[Decimal | None] = mapped_column(Numeric(15, 2))


class EmployeeTable(SampleBase):
    __tablename__ = "employees"
    __table_args__ = (
        Index("idx_emp_manager", "manager_id"),
        Index("idx_emp_dept", "dept_id"),
    )

    emp_id: Mapped[int] = mapped_column(primary_key=True, autoincrement=False)
    emp_name: Mapped[str] = mapped_column(String(100), nullable=False)
    manager_id: Mapped[int | None] = mapped_column(ForeignKey("employees.emp_id"))
    dept_id: Mapped[int | None] = mapped_column(ForeignKey("departments.dept_id"))
    hire_date: Mapped[datetime.date | None]
    salary: Mapped[Decimal | None] = mapped_column(Numeric(10, 2))
    email: Mapped[str | None] = mapped_column(String(100))


class CategoryTable(SampleBase):
    __tablename__ = "categories"
    __table_args__ = (Index("idx_cat_parent", "parent_cat_id"),)

    cat_id: Mapped[int] = mapped_column(primary_key=True, autoincrement=False)
    cat_name: Mapped[str] = mapped_column(String(100), nullable=False)
    parent_cat_id: Mapped[int | None] = mapped_column(ForeignKey("categories.cat_id"))
    description: Mapped[str | None] = mapped_column(String(500))


class ProductTable(SampleBase):
    __tablename__ = "products"
    __table_args__ = (
        Index("idx_prod_category", "category_id"),
        Index("idx_prod_price", "unit_price"),
    )

    product_id: Mapped[int] = mapped_column(primary_key=True, autoincrement=False)
    product_name: Mapped[str] = mapped_column(String(200), nullable=False)
    category_id: Mapped[int | None] = mapped_column(ForeignKey("categories.cat_id"))
    unit_price: Mapped[Decimal | None] = mapped_column(Numeric(10, 2))
    stock_quantity: Mapped[int | None] = mapped_column(server_default="0")
    reorder_level: Mapped[int | None] = mapped_column(server_default="10")
    discontinued: Mapped[str | None] = mapped_column(CHAR(1), server_default="N")
    created_date: Mapped[datetime.date | None]


class CustomerTable(SampleBase):
    __tablename__ = "customers"
    __table_args__ = (
        Index("idx_cust_status", "customer_status"),
        Index("idx_cust_country", "country"),
    )

    customer_id: Mapped[int] = mapped_column(primary_key=True, autoincrement=False)
    customer_name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str | None] = mapped_column(String(100))
    phone: Mapped[str | None] = mapped_column(String(20))
    address: Mapped[str | None] = mapped_column(String(500))
    city: Mapped[str | None] = mapped_column(String(100))
    country: Mapped[str | None] = mapped_column(String(100))
    customer_since: Mapped[datetime.date | None]
    customer_status: Mapped[str | None] = mapped_column(String(20), server_default="ACTIVE")
    credit_limit: Mapped[Decimal | None] = mapped_column(Numeric(15, 2))


class OrderTable(SampleBase):
    __tablename__ = "orders"
    __table_args__ = (
        Index("idx_order_customer", "customer_id"),
        Index("idx_order_date", "order_date"),
        Index("idx_order_status", "order_status"),
    )

    order_id: Mapped[int] = mapped_column(primary_key=True, autoincrement=False)
    customer_id: Mapped[int] = mapped_column(
        ForeignKey("customers.customer_id"), nullable=False
    )
    order_date: Mapped[datetime.date] = mapped_column(nullable=False)
    ship_date: Mapped[datetime.date | None]
    order_status: Mapped[str | None] = mapped_column(
        String(20), server_default=OrderStatus.PENDING.value
    )
    total_amount: Mapped[Decimal | None] = mapped_column(Numeric(15, 2))
    payment_method: Mapped[str | None] = mapped_column(String(50))


class OrderItemTable(SampleBase):
    __tablename__ = "order_items"
    __table_args__ = (
        Index("idx_item_order", "order_id"),
        Index("idx_item_product", "product_id"),
    )

    item_id: Mapped[int] = mapped_column(primary_key=True, autoincrement=False)
    order_id: Mapped[int] = mapped_column(ForeignKey("orders.order_id"), nullable=False)
    product_id: Mapped[int] = mapped_column(
        ForeignKey("products.product_id"), nullable=False
    )
    quantity: Mapped[int] = mapped_column(nullable=False)
    unit_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    discount_pct: Mapped[Decimal | None] = mapped_column(Numeric(5, 2), server_default="0")
    # 100.0 keeps SQLite from integer-dividing integral discounts
    line_total: Mapped[Decimal | None] = mapped_column(
        Numeric(15, 2),
        Computed("quantity * unit_price * (1 - discount_pct / 100.0)"),
    )


class BillOfMaterialsTable(SampleBase):
    __tablename__ = "bill_of_materials"
    __table_args__ = (
        Index("idx_bom_parent", "parent_part_id"),
        Index("idx_bom_component", "component_part_id"),
    )

    bom_id: Mapped[int] = mapped_column(primary_key=True, autoincrement=False)
    parent_part_id: Mapped[str] = mapped_column(String(50), nullable=False)
    component_part_id: Mapped[str] = mapped_column(String(50), nullable=False)
    quantity: Mapped[int] = mapped_column(nullable=False)
    unit_of_measure: Mapped[str | None] = mapped_column(String(20))
    effective_date: Mapped[datetime.date | None]
    end_date: Mapped[datetime.date | None]


class GraphEdgeTable(SampleBase):
    __tablename__ = "graph_edges"
    __table_args__ = (
        Index("idx_graph_from", "from_node"),
        Index("idx_graph_to", "to_node"),
    )

    edge_id: Mapped[int] = mapped_column(primary_key=True, autoincrement=False)
    from_node: Mapped[str] = mapped_column(String(50), nullable=False)
    to_node: Mapped[str] = mapped_column(String(50), nullable=False)
    weight: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), server_default="1")
    edge_type: Mapped[str | None] = mapped_column(String(50))


class SaleTable(SampleBase):
    __tablename__ = "sales"
    __table_args__ = (
        Index("idx_sales_date", "sale_date"),
        Index("idx_sales_product", "product_id"),
        Index("idx_sales_customer", "customer_id"),
        Index("idx_sales_region", "region"),
    )

    sale_id: Mapped[int] = mapped_column(primary_key=True, autoincrement=False)
    sale_date: Mapped[datetime.date] = mapped_column(nullable=False)
    product_id: Mapped[int] = mapped_column(
        ForeignKey("products.product_id"), nullable=False
    )
    customer_id: Mapped[int] = mapped_column(
        ForeignKey("customers.customer_id"), nullable=False
    )
    quantity_sold: Mapped[int] = mapped_column(nullable=False)
    sale_amount: Mapped[Decimal] = mapped_column(Numeric(15, 2), nullable=False)
    cost_amount: Mapped[Decimal | None] = mapped_column(Numeric(15, 2))
    profit_amount: Mapped[Decimal | None] = mapped_column(
        Numeric(15, 2), Computed("sale_amount - cost_amount")
    )
    sales_rep_id: Mapped[int | None]
    region: Mapped[str | None] = mapped_column(String(50))


class StockPriceTable(SampleBase):
    __tablename__ = "stock_prices"
    __table_args__ = (
        UniqueConstraint("stock_symbol", "trade_date"),
        Index("idx_stock_symbol_date", "stock_symbol", "trade_date"),
    )

    price_id: Mapped[int] = mapped_column(primary_key=True, autoincrement=False)
    stock_symbol: Mapped[str] = mapped_column(String(10), nullable=False)
    trade_date: Mapped[datetime.date] = mapped_column(nullable=False)
    open_price: Mapped[Decimal | None] = mapped_column(Numeric(10, 2))
    high_price: Mapped[Decimal | None] = mapped_column(Numeric(10, 2))
    low_price: Mapped[Decimal | None] = mapped_column(Numeric(10, 2))
    close_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    volume: Mapped[int | None] = mapped_column(BigInteger)


class TransactionTable(SampleBase):
    __tablename__ = "transactions"
    __table_args__ = (
        Index("idx_trans_emp", "employee_id"),
        Index("idx_trans_date", "transaction_date"),
        Index("idx_trans_type", "transaction_type"),
    )

    transaction_id: Mapped[int] = mapped_column(primary_key=True, autoincrement=False)
    employee_id: Mapped[int] = mapped_column(ForeignKey("employees.emp_id"), nullable=False)
    transaction_date: Mapped[datetime.datetime] = mapped_column(nullable=False)
    transaction_type: Mapped[str] = mapped_column(String(50), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(15, 2), nullable=False)
    reference_number: Mapped[str | None] = mapped_column(String(50))
    notes: Mapped[str | None] = mapped_column(String(500))


# =============================================================================
# Versioned tables: system time as closed intervals [sys_start, sys_end)
# =============================================================================


class EmployeeHistoryTable(SampleBase):
    __tablename__ = "employee_history"

    emp_id: Mapped[int] = mapped_column(primary_key=True, autoincrement=False)
    emp_name: Mapped[str] = mapped_column(String(100), nullable=False)
    salary: Mapped[Decimal | None] = mapped_column(Numeric(10, 2))
    department: Mapped[str | None] = mapped_column(String(50))
    sys_start: Mapped[datetime.datetime] = mapped_column(primary_key=True)
    sys_end: Mapped[datetime.datetime] = mapped_column(nullable=False)


class DepartmentHistoryTable(SampleBase):
    __tablename__ = "department_history"

    dept_id: Mapped[int] = mapped_column(primary_key=True, autoincrement=False)
    dept_name: Mapped[str | None] = mapped_column(String(100))
    manager_name: Mapped[str | None] = mapped_column(String(100))
    budget: Mapped[Decimal | None] = mapped_column(Numeric(15, 2))
    sys_start: Mapped[datetime.datetime] = mapped_column(primary_key=True)
    sys_end: Mapped[datetime.datetime] = mapped_column(nullable=False)


class ProductPricingTable(SampleBase):
    __tablename__ = "product_pricing"

    product_id: Mapped[int] = mapped_column(primary_key=True, autoincrement=False)
    product_name: Mapped[str | None] = mapped_column(String(100))
    price: Mapped[Decimal | None] = mapped_column(Numeric(10, 2))
    valid_from: Mapped[datetime.date] = mapped_column(primary_key=True)
    valid_to: Mapped[datetime.date] = mapped_column(nullable=False)
    sys_start: Mapped[datetime.datetime] = mapped_column(primary_key=True)
    sys_end: Mapped[datetime.datetime] = mapped_column(nullable=False)


# =============================================================================
# Semi-structured tables
# =============================================================================


class CustomerProfileTable(SampleBase):
    __tablename__ = "customer_profiles"

    customer_id: Mapped[int] = mapped_column(primary_key=True, autoincrement=False)
    customer_name: Mapped[str | None] = mapped_column(String(100))
    profile_xml: Mapped[str | None] = mapped_column(Text)
    preferences_json: Mapped[str | None] = mapped_column(String(4000))


class ProductCatalogTable(SampleBase):
    __tablename__ = "product_catalog"

    product_id: Mapped[int] = mapped_column(primary_key=True, autoincrement=False)
    product_name: Mapped[str | None] = mapped_column(String(200))
    specifications_xml: Mapped[str | None] = mapped_column(Text)
    metadata_json: Mapped[str | None] = mapped_column(String(4000))


# =============================================================================
# Groups
# =============================================================================

_GROUPS: dict[TableGroup, tuple[type[SampleBase], ...]] = {
    TableGroup.CORE: (
        DepartmentTable,
        EmployeeTable,
        CategoryTable,
        ProductTable,
        CustomerTable,
        OrderTable,
        OrderItemTable,
        BillOfMaterialsTable,
        GraphEdgeTable,
        SaleTable,
        StockPriceTable,
        TransactionTable,
    ),
    TableGroup.TEMPORAL: (
        EmployeeHistoryTable,
        DepartmentHistoryTable,
        ProductPricingTable,
    ),
    TableGroup.SEMISTRUCTURED: (
        CustomerProfileTable,
        ProductCatalogTable,
    ),
}

ALL_GROUPS: tuple[TableGroup, ...] = tuple(TableGroup)

# Created by the performance examples rather than by setup
SUMMARY_TABLES: tuple[str, ...] = ("customer_order_summary",)
TUNING_INDEXES: tuple[tuple[str, str], ...] = (
    ("idx_orders_customer_date", "orders"),
    ("idx_orders_status_date", "orders"),
    ("idx_order_items_product", "order_items"),
    ("idx_sales_date_product_customer", "sales"),
)


def tables_for(groups: Iterable[TableGroup | str]) -> list[Table]:
    """Tables of the given groups, parents before children."""
    wanted = {TableGroup(g) for g in groups}
    return [
        model.__table__
        for group in TableGroup
        if group in wanted
        for model in _GROUPS[group]
    ]


def table_names(groups: Iterable[TableGroup | str] = ALL_GROUPS) -> list[str]:
    return [table.name for table in tables_for(groups)]


def index_names(groups: Iterable[TableGroup | str] = ALL_GROUPS) -> list[str]:
    return [
        index.name
        for table in tables_for(groups)
        for index in sorted(table.indexes, key=lambda i: i.name)
    ]


__all__ = [
    "END_OF_TIME",
    "SampleBase",
    "TableGroup",
    "OrderStatus",
    "ALL_GROUPS",
    "SUMMARY_TABLES",
    "TUNING_INDEXES",
    "tables_for",
    "table_names",
    "index_names",
]
