"""
Order database repository package.

Repository Structure:
- BaseRepository: Abstract base with connection and session handling
- OrderRepository: Order lookup and persistence
- ProductRepository: Product lookup and stock counters
- OrderLineRepository: Order line insertion and retrieval
"""

from .base import BaseRepository
from .order_line_repository import OrderLineRepository
from .order_repository import OrderRepository
from .product_repository import ProductRepository

__all__ = [
    "BaseRepository",
    "OrderRepository",
    "ProductRepository",
    "OrderLineRepository",
]
