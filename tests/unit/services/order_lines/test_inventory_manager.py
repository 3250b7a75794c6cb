"""Unit tests for InventoryManager."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from app.domain.models import ProductDomain
from app.services.order_lines.managers import InventoryManager


@pytest.fixture
def product_store():
    store = AsyncMock()
    store.add_units_on_order.side_effect = lambda product_id, quantity, session=None: 5 + quantity
    return store


class TestInventoryManagerReserve:
    """Tests for reserving quantities on a product."""

    @pytest.mark.asyncio
    async def test_reserve_adds_to_units_on_order(self, product_store):
        """Should add the quantity to units on order and keep stock as is."""
        manager = InventoryManager(product_store)
        product = ProductDomain(id=1, units_in_stock=10, units_on_order=5)

        result = await manager.reserve(product, 3)

        assert result is product
        assert product.units_on_order == 8
        assert product.units_in_stock == 10

    @pytest.mark.asyncio
    async def test_reserve_increments_counter_in_given_session(self, product_store):
        """Should increment the stored counter in the caller's session."""
        session = MagicMock()
        manager = InventoryManager(product_store)
        product = ProductDomain(id=1, units_in_stock=10, units_on_order=5)

        await manager.reserve(product, 2, session=session)

        product_store.add_units_on_order.assert_awaited_once_with(1, 2, session=session)

    @pytest.mark.asyncio
    async def test_reserve_never_writes_whole_product(self, product_store):
        """Should not write units in stock back to the store."""
        manager = InventoryManager(product_store)
        product = ProductDomain(id=1, units_in_stock=10, units_on_order=5)

        await manager.reserve(product, 2)

        product_store.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_reserve_takes_stored_counter(self):
        """Should use the counter value returned by the store."""
        product_store = AsyncMock()
        product_store.add_units_on_order.return_value = 42
        manager = InventoryManager(product_store)
        product = ProductDomain(id=1, units_in_stock=10, units_on_order=5)

        await manager.reserve(product, 3)

        assert product.units_on_order == 42

    @pytest.mark.asyncio
    async def test_reserve_rejects_non_positive_quantity(self, product_store):
        """Should refuse to reserve zero units and not touch the store."""
        manager = InventoryManager(product_store)
        product = ProductDomain(id=1, units_in_stock=10, units_on_order=5)

        with pytest.raises(ValueError):
            await manager.reserve(product, 0)

        assert product.units_on_order == 5
        product_store.add_units_on_order.assert_not_awaited()
