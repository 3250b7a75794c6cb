"""Managers that apply the side effects of adding an order line."""

from .inventory_manager import InventoryManager

__all__ = ["InventoryManager"]
