"""
Product domain model.

Holds the two inventory counters that order-line creation reads and updates.
"""

from dataclasses import dataclass
from typing import Any


@dataclass
class ProductDomain:
    """
    Domain model representing a product.

    Attributes:
        name: Product name
        units_in_stock: Units physically available
        units_on_order: Cumulative units on open order lines
        id: Product key (None for products not yet persisted)
    """

    name: str = ""
    units_in_stock: int = 0
    units_on_order: int = 0
    id: int | None = None

    def __post_init__(self) -> None:
        """Validate counters after initialization."""
        if self.units_in_stock < 0:
            raise ValueError(f"Units in stock cannot be negative: {self.units_in_stock}")
        if self.units_on_order < 0:
            raise ValueError(f"Units on order cannot be negative: {self.units_on_order}")

    def has_stock_for(self, quantity: int) -> bool:
        """Check if the stock covers the requested quantity."""
        return self.units_in_stock >= quantity

    def add_to_units_on_order(self, quantity: int) -> None:
        """
        Add ``quantity`` to the cumulative ordered quantity.

        Stock is left untouched; it is decremented when goods leave.
        """
        if quantity < 1:
            raise ValueError(f"Quantity must be positive: {quantity}")
        self.units_on_order += quantity

    def to_dict(self) -> dict[str, Any]:
        """Convert product to dictionary for persistence."""
        return {
            "id": self.id,
            "name": self.name,
            "units_in_stock": self.units_in_stock,
            "units_on_order": self.units_on_order,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ProductDomain":
        """Create product from a database row mapping."""
        return cls(
            id=data.get("id"),
            name=data.get("name") or "",
            units_in_stock=int(data.get("units_in_stock", 0)),
            units_on_order=int(data.get("units_on_order", 0)),
        )
