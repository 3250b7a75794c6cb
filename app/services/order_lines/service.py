"""
OrderLineService - adds a line to an existing order.

The whole operation runs in one transaction: lookups, rule checks, the
product counter update and the line insert commit together or not at all.
"""

import logging
from typing import Any, Callable, Mapping

from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.models import OrderLineDomain
from app.schemas import OrderLineCreate, OrderLineResponse
from app.services.order_lines.interfaces import IOrderLineStore, IOrderStore, IProductStore
from app.services.order_lines.managers import InventoryManager
from app.services.order_lines.validators import OrderLineValidator
from app.utils.error_handler import AppException, NotFoundException, log_error

logger = logging.getLogger(__name__)


class OrderLineService:
    """
    Creates order lines while enforcing order and stock rules.

    Collaborators are injected through the constructor.
    """

    def __init__(
        self,
        order_store: IOrderStore,
        product_store: IProductStore,
        order_line_store: IOrderLineStore,
        session_factory: Callable[[], AsyncSession],
        validator: OrderLineValidator | None = None,
        inventory_manager: InventoryManager | None = None,
    ):
        """
        Args:
            order_store: Order lookup
            product_store: Product lookup and save
            order_line_store: Order line insert
            session_factory: Opens the session that carries the transaction
            validator: Business rule checks (default OrderLineValidator)
            inventory_manager: Product counter updates (default built on product_store)
        """
        self.order_store = order_store
        self.product_store = product_store
        self.order_line_store = order_line_store
        self.session_factory = session_factory
        self.validator = validator or OrderLineValidator()
        self.inventory_manager = inventory_manager or InventoryManager(product_store)

    async def add_line(self, order_id: int, product_id: int, quantity: int) -> OrderLineDomain:
        """
        Add a line for ``quantity`` units of a product to an order.

        Steps:
        1. Resolve the product and the order
        2. Check the order is open, the quantity positive and the stock sufficient
        3. Add the quantity to the product's units on order
        4. Insert the new line

        Args:
            order_id: Key of the order
            product_id: Key of the product
            quantity: Ordered quantity

        Returns:
            OrderLineDomain: The persisted line, with its order and product attached

        Raises:
            NotFoundException: If the product or the order does not exist
            BusinessRuleException: If the order is shipped, the quantity is not
                positive or the stock is insufficient
        """
        logger.info(f"Adding order line: order {order_id}, product {product_id}, quantity {quantity}")

        try:
            async with self.session_factory() as session:
                async with session.begin():
                    product = await self.product_store.find_by_id(product_id, session=session)
                    if product is None:
                        raise NotFoundException(entity="product", key=product_id)

                    order = await self.order_store.find_by_id(order_id, session=session)
                    if order is None:
                        raise NotFoundException(entity="order", key=order_id)

                    self.validator.validate(order, product, quantity)

                    await self.inventory_manager.reserve(product, quantity, session=session)

                    line = OrderLineDomain.for_order(order, product, quantity)
                    line = await self.order_line_store.save(line, session=session)

        except AppException as e:
            log_error(
                e,
                context={"order_id": order_id, "product_id": product_id, "quantity": quantity},
                level=logging.WARNING,
            )
            raise

        order.lines.append(line)
        logger.info(f"Created order line {line.id} for order {order_id}")
        return line

    async def add_line_from_request(self, request: OrderLineCreate) -> OrderLineResponse:
        """
        Add a line from a validated request model.

        Args:
            request: Order line request

        Returns:
            OrderLineResponse: The created line
        """
        line = await self.add_line(request.order_id, request.product_id, request.quantity)
        return OrderLineResponse.model_validate(line)

    async def add_line_from_data(self, data: Mapping[str, Any]) -> OrderLineResponse:
        """
        Add a line from raw request fields.

        Args:
            data: Mapping with ``order_id``, ``product_id`` and ``quantity``

        Returns:
            OrderLineResponse: The created line

        Raises:
            ValidationException: If the fields are missing or malformed
        """
        try:
            request = OrderLineCreate.from_raw(data)
        except AppException as e:
            log_error(e, context={"request": dict(data)}, level=logging.WARNING)
            raise
        return await self.add_line_from_request(request)
