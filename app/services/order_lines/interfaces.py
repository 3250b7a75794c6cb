"""
Protocols for the stores the order line service depends on.

Every method takes an optional ``session`` so the service can run all
store calls inside its own transaction.
"""

from typing import Any, Protocol

from app.domain.models import OrderDomain, OrderLineDomain, ProductDomain


class IOrderStore(Protocol):
    """Lookup of orders by key."""

    async def find_by_id(self, order_id: int, session: Any = None) -> OrderDomain | None:
        """Return the order, or None if it does not exist."""
        ...


class IProductStore(Protocol):
    """Lookup, save and counter updates of products."""

    async def find_by_id(self, product_id: int, session: Any = None) -> ProductDomain | None:
        """Return the product, or None if it does not exist."""
        ...

    async def save(self, product: ProductDomain, session: Any = None) -> ProductDomain:
        """Persist the product's name and counters."""
        ...

    async def add_units_on_order(self, product_id: int, quantity: int, session: Any = None) -> int:
        """Increment units on order in place and return the new value."""
        ...


class IOrderLineStore(Protocol):
    """Insertion of order lines."""

    async def save(self, line: OrderLineDomain, session: Any = None) -> OrderLineDomain:
        """Insert the line and return it with its key."""
        ...
