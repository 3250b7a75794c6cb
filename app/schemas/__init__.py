"""
Pydantic models for data entering and leaving the service.
"""

from .order_line_schemas import OrderLineCreate, OrderLineResponse

__all__ = ["OrderLineCreate", "OrderLineResponse"]
