"""
Order line services.

Adding a line to an order: validate the order and product state,
reserve the quantity on the product and insert the line, all in one
transaction.
"""

from .factories import create_order_line_service
from .service import OrderLineService

__all__ = ["OrderLineService", "create_order_line_service"]
