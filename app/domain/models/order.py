"""
Order domain model (Aggregate Root).

Represents an order and whether it is still open to new lines.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from .order_line import OrderLineDomain


@dataclass
class OrderDomain:
    """
    Domain model representing an order.

    An order accepts new lines until it is shipped. Once ``shipped_at`` is
    set the order is closed to modification.

    Attributes:
        id: Order key (None for orders not yet persisted)
        created_at: When the order was entered
        shipped_at: When the order was shipped (None while open)
        lines: Order lines known in memory (loaded separately)
    """

    id: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    shipped_at: datetime | None = None
    lines: list[OrderLineDomain] = field(default_factory=list, repr=False)

    @property
    def is_shipped(self) -> bool:
        """Check if the order has been shipped."""
        return self.shipped_at is not None

    @property
    def total_quantity(self) -> int:
        """Total quantity across the lines loaded in memory."""
        return sum(line.quantity for line in self.lines)

    def ship(self, shipped_at: datetime | None = None) -> None:
        """
        Mark the order as shipped.

        Raises:
            ValueError: If the order is already shipped
        """
        if self.is_shipped:
            raise ValueError(f"Order {self.id} is already shipped")
        self.shipped_at = shipped_at or datetime.now(UTC)

    def to_dict(self) -> dict[str, Any]:
        """Convert order to dictionary for persistence."""
        return {
            "id": self.id,
            "created_at": self.created_at,
            "shipped_at": self.shipped_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "OrderDomain":
        """Create order from a database row mapping."""
        return cls(
            id=data.get("id"),
            created_at=data.get("created_at") or datetime.now(UTC),
            shipped_at=data.get("shipped_at"),
        )
