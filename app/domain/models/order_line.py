"""
Order line domain model.

An order line ties one product and a quantity to one order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .order import OrderDomain
    from .product import ProductDomain


@dataclass
class OrderLineDomain:
    """
    Domain model representing an order line.

    Attributes:
        order_id: Parent order key
        product_id: Ordered product key
        quantity: Ordered quantity (always >= 1)
        id: Line key (None until persisted)
        order: Resolved parent order, when available
        product: Resolved product, when available
    """

    order_id: int
    product_id: int
    quantity: int
    id: int | None = None
    order: OrderDomain | None = field(default=None, repr=False, compare=False)
    product: ProductDomain | None = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Validate line data after initialization."""
        if self.quantity < 1:
            raise ValueError(f"Quantity must be positive: {self.quantity}")

    @classmethod
    def for_order(cls, order: OrderDomain, product: ProductDomain, quantity: int) -> OrderLineDomain:
        """Build a new line referencing resolved order and product."""
        return cls(
            order_id=order.id,
            product_id=product.id,
            quantity=quantity,
            order=order,
            product=product,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert line to dictionary for persistence."""
        return {
            "id": self.id,
            "order_id": self.order_id,
            "product_id": self.product_id,
            "quantity": self.quantity,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> OrderLineDomain:
        """Create line from a database row mapping."""
        return cls(
            id=data.get("id"),
            order_id=data["order_id"],
            product_id=data["product_id"],
            quantity=int(data["quantity"]),
        )
