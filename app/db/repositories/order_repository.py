"""
OrderRepository: order lookup and persistence.
"""

import logging
from typing import Optional

from sqlalchemy import insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.repositories.base import BaseRepository, log_operation
from app.db.schema import orders
from app.domain.models import OrderDomain

logger = logging.getLogger(__name__)


class OrderRepository(BaseRepository):
    """Repository for orders."""

    table_names = ("orders",)

    @log_operation()
    async def find_by_id(self, order_id: int, session: Optional[AsyncSession] = None) -> Optional[OrderDomain]:
        """Load an order by key, or None when it does not exist."""
        try:
            async with self.session_scope(session) as active:
                result = await active.execute(select(orders).where(orders.c.id == order_id))
                row = result.mappings().first()
                return OrderDomain.from_dict(dict(row)) if row else None
        except SQLAlchemyError as e:
            raise self._wrap_error("find_order", e) from e

    @log_operation()
    async def save(self, order: OrderDomain, session: Optional[AsyncSession] = None) -> OrderDomain:
        """
        Insert a new order or update the shipped marker of an existing one.

        Args:
            order: Order to persist
            session: Optional shared session for atomic transactions

        Returns:
            OrderDomain: The same order, with ``id`` set after an insert
        """
        try:
            async with self.session_scope(session) as active:
                if order.id is None:
                    result = await active.execute(
                        insert(orders).values(created_at=order.created_at, shipped_at=order.shipped_at)
                    )
                    order.id = result.inserted_primary_key[0]
                    logger.info(f"Created order {order.id}")
                else:
                    await active.execute(
                        update(orders).where(orders.c.id == order.id).values(shipped_at=order.shipped_at)
                    )
                    logger.debug(f"Updated order {order.id}")
                return order
        except SQLAlchemyError as e:
            raise self._wrap_error("save_order", e) from e
