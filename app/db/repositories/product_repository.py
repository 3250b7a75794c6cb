"""
ProductRepository: product lookup and inventory counter persistence.
"""

import logging
from typing import Optional

from sqlalchemy import insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.repositories.base import BaseRepository, log_operation
from app.db.schema import products
from app.domain.models import ProductDomain

logger = logging.getLogger(__name__)


class ProductRepository(BaseRepository):
    """Repository for products and their stock counters."""

    table_names = ("products",)

    @log_operation()
    async def find_by_id(self, product_id: int, session: Optional[AsyncSession] = None) -> Optional[ProductDomain]:
        """Load a product by key, or None when it does not exist."""
        try:
            async with self.session_scope(session) as active:
                result = await active.execute(select(products).where(products.c.id == product_id))
                row = result.mappings().first()
                return ProductDomain.from_dict(dict(row)) if row else None
        except SQLAlchemyError as e:
            raise self._wrap_error("find_product", e) from e

    @log_operation()
    async def save(self, product: ProductDomain, session: Optional[AsyncSession] = None) -> ProductDomain:
        """
        Insert a new product or write back name and counters of an existing one.

        Args:
            product: Product to persist
            session: Optional shared session for atomic transactions

        Returns:
            ProductDomain: The same product, with ``id`` set after an insert
        """
        values = {
            "name": product.name,
            "units_in_stock": product.units_in_stock,
            "units_on_order": product.units_on_order,
        }
        try:
            async with self.session_scope(session) as active:
                if product.id is None:
                    result = await active.execute(insert(products).values(**values))
                    product.id = result.inserted_primary_key[0]
                    logger.info(f"Created product {product.id}")
                else:
                    await active.execute(update(products).where(products.c.id == product.id).values(**values))
                    logger.debug(
                        f"Updated product {product.id}: in stock={product.units_in_stock}, "
                        f"on order={product.units_on_order}"
                    )
                return product
        except SQLAlchemyError as e:
            raise self._wrap_error("save_product", e) from e

    @log_operation()
    async def add_units_on_order(
        self, product_id: int, quantity: int, session: Optional[AsyncSession] = None
    ) -> int:
        """
        Increment a product's units on order in the database.

        Only ``units_on_order`` is written, as ``units_on_order + quantity``,
        so concurrent changes to the other columns are kept.

        Args:
            product_id: Key of the product
            quantity: Units to add
            session: Optional shared session for atomic transactions

        Returns:
            int: Units on order after the increment
        """
        try:
            async with self.session_scope(session) as active:
                await active.execute(
                    update(products)
                    .where(products.c.id == product_id)
                    .values(units_on_order=products.c.units_on_order + quantity)
                )
                result = await active.execute(
                    select(products.c.units_on_order).where(products.c.id == product_id)
                )
                units_on_order = result.scalar_one()
                logger.debug(f"Product {product_id} units on order now {units_on_order}")
                return units_on_order
        except SQLAlchemyError as e:
            raise self._wrap_error("add_units_on_order", e) from e
