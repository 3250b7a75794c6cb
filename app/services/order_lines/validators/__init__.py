"""
Validators for order line business rules.
"""

from .order_line_validator import OrderLineValidator

__all__ = ["OrderLineValidator"]
