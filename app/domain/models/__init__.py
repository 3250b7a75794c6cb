"""
Domain models for business entities.

These models represent core business concepts and contain
business logic and invariants.
"""

from .order import OrderDomain
from .order_line import OrderLineDomain
from .product import ProductDomain

__all__ = ["OrderDomain", "OrderLineDomain", "ProductDomain"]
