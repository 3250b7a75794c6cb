"""
OrderLineRepository: order line insertion and retrieval.

Lines are only ever inserted; they are never updated or deleted here.
"""

import logging
from typing import List, Optional

from sqlalchemy import func, insert, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.repositories.base import BaseRepository, log_operation
from app.db.schema import order_lines
from app.domain.models import OrderLineDomain

logger = logging.getLogger(__name__)


class OrderLineRepository(BaseRepository):
    """Repository for order lines."""

    table_names = ("order_lines",)

    @log_operation()
    async def save(self, line: OrderLineDomain, session: Optional[AsyncSession] = None) -> OrderLineDomain:
        """
        Insert a new order line.

        Args:
            line: Line to insert
            session: Optional shared session for atomic transactions

        Returns:
            OrderLineDomain: The same line with its new ``id``
        """
        try:
            async with self.session_scope(session) as active:
                result = await active.execute(
                    insert(order_lines).values(
                        order_id=line.order_id,
                        product_id=line.product_id,
                        quantity=line.quantity,
                    )
                )
                line.id = result.inserted_primary_key[0]
                logger.info(f"Created order line {line.id} (order {line.order_id}, product {line.product_id})")
                return line
        except SQLAlchemyError as e:
            raise self._wrap_error("save_order_line", e) from e

    @log_operation()
    async def find_by_id(self, line_id: int, session: Optional[AsyncSession] = None) -> Optional[OrderLineDomain]:
        """Load an order line by key, or None."""
        try:
            async with self.session_scope(session) as active:
                result = await active.execute(select(order_lines).where(order_lines.c.id == line_id))
                row = result.mappings().first()
                return OrderLineDomain.from_dict(dict(row)) if row else None
        except SQLAlchemyError as e:
            raise self._wrap_error("find_order_line", e) from e

    @log_operation()
    async def find_by_order(self, order_id: int, session: Optional[AsyncSession] = None) -> List[OrderLineDomain]:
        """All lines of an order, oldest first."""
        try:
            async with self.session_scope(session) as active:
                result = await active.execute(
                    select(order_lines).where(order_lines.c.order_id == order_id).order_by(order_lines.c.id)
                )
                return [OrderLineDomain.from_dict(dict(row)) for row in result.mappings().all()]
        except SQLAlchemyError as e:
            raise self._wrap_error("find_order_lines", e) from e

    @log_operation()
    async def count(self, session: Optional[AsyncSession] = None) -> int:
        """Total number of order lines."""
        try:
            async with self.session_scope(session) as active:
                result = await active.execute(select(func.count()).select_from(order_lines))
                return int(result.scalar_one())
        except SQLAlchemyError as e:
            raise self._wrap_error("count_order_lines", e) from e
