"""
OrderLineValidator: business rules checked before a line is added.
"""

import logging

from app.domain.models import OrderDomain, ProductDomain
from app.utils.error_handler import BusinessRuleException, ErrorCode

logger = logging.getLogger(__name__)


class OrderLineValidator:
    """
    Checks that a resolved order and product accept a new line.

    Rules, in order (first violation wins):
    - the order is not shipped yet
    - the quantity is at least 1
    - the product has enough units in stock
    """

    def validate(self, order: OrderDomain, product: ProductDomain, quantity: int) -> None:
        """
        Validate the request against the order and product state.

        Args:
            order: Resolved order
            product: Resolved product
            quantity: Requested quantity

        Raises:
            BusinessRuleException: On the first broken rule
        """
        self._validate_order_open(order)
        self._validate_quantity(quantity)
        self._validate_stock(product, quantity)

        logger.debug(f"Order line validation passed for order {order.id}, product {product.id}")

    def _validate_order_open(self, order: OrderDomain) -> None:
        if order.is_shipped:
            raise BusinessRuleException(
                message=f"Order {order.id} has already been shipped",
                reason=ErrorCode.ORDER_ALREADY_SHIPPED,
                details={"order_id": order.id, "shipped_at": order.shipped_at.isoformat()},
            )

    def _validate_quantity(self, quantity: int) -> None:
        # Callers may bypass the request model, so check again here
        if quantity < 1:
            raise BusinessRuleException(
                message=f"Quantity must be positive, got {quantity}",
                reason=ErrorCode.NON_POSITIVE_QUANTITY,
                details={"quantity": quantity},
            )

    def _validate_stock(self, product: ProductDomain, quantity: int) -> None:
        if not product.has_stock_for(quantity):
            raise BusinessRuleException(
                message=(
                    f"Insufficient stock for product {product.id}: "
                    f"requested {quantity}, in stock {product.units_in_stock}"
                ),
                reason=ErrorCode.INSUFFICIENT_STOCK,
                details={
                    "product_id": product.id,
                    "requested": quantity,
                    "units_in_stock": product.units_in_stock,
                },
            )
