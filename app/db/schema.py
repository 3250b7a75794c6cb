"""
Table definitions for orders, products and order lines.

CHECK constraints mirror the domain invariants so the store rejects
rows the domain layer would never produce.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    MetaData,
    String,
    Table,
)

metadata = MetaData()

orders = Table(
    "orders",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("created_at", DateTime(timezone=True), nullable=False),
    # NULL while the order is open
    Column("shipped_at", DateTime(timezone=True), nullable=True),
)

products = Table(
    "products",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(100), nullable=False, default=""),
    Column("units_in_stock", Integer, nullable=False, default=0),
    Column("units_on_order", Integer, nullable=False, default=0),
    CheckConstraint("units_in_stock >= 0", name="ck_products_units_in_stock"),
    CheckConstraint("units_on_order >= 0", name="ck_products_units_on_order"),
)

order_lines = Table(
    "order_lines",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("order_id", Integer, ForeignKey("orders.id"), nullable=False, index=True),
    Column("product_id", Integer, ForeignKey("products.id"), nullable=False),
    Column("quantity", Integer, nullable=False),
    CheckConstraint("quantity > 0", name="ck_order_lines_quantity"),
)

__all__ = ["metadata", "orders", "products", "order_lines"]
