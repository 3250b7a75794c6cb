"""InventoryManager service - product counter updates."""

import logging
from typing import Any

from app.domain.models import ProductDomain
from app.services.order_lines.interfaces import IProductStore

logger = logging.getLogger(__name__)


class InventoryManager:
    """Applies order quantities to product counters."""

    def __init__(self, product_store: IProductStore):
        """
        Args:
            product_store: Store used to persist product counters
        """
        self.product_store = product_store

    async def reserve(self, product: ProductDomain, quantity: int, session: Any = None) -> ProductDomain:
        """
        Add ``quantity`` to the product's units on order.

        The store increments the stored counter; units in stock are neither
        decremented nor written back.

        Args:
            product: Product being ordered
            quantity: Validated quantity
            session: Transaction the update must join

        Returns:
            ProductDomain: The updated product
        """
        previous = product.units_on_order
        product.add_to_units_on_order(quantity)
        product.units_on_order = await self.product_store.add_units_on_order(
            product.id, quantity, session=session
        )

        logger.debug(f"Product {product.id} units on order: {previous} -> {product.units_on_order}")
        return product
