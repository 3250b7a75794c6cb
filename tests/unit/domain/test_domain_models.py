"""Unit tests for the order, product and order line domain models."""

from datetime import UTC, datetime

import pytest

from app.domain.models import OrderDomain, OrderLineDomain, ProductDomain


class TestOrderDomain:
    """Tests for OrderDomain."""

    def test_new_order_is_open(self):
        """Should not be shipped when shipped_at is unset."""
        order = OrderDomain(id=1)

        assert order.is_shipped is False

    def test_ship_sets_marker(self):
        """Should set shipped_at when shipping."""
        order = OrderDomain(id=1)
        when = datetime(2025, 2, 1, tzinfo=UTC)

        order.ship(when)

        assert order.is_shipped is True
        assert order.shipped_at == when

    def test_ship_twice_fails(self):
        """Should refuse to ship an already shipped order."""
        order = OrderDomain(id=1, shipped_at=datetime(2025, 2, 1, tzinfo=UTC))

        with pytest.raises(ValueError):
            order.ship()

    def test_total_quantity(self):
        """Should sum quantities of the loaded lines."""
        order = OrderDomain(id=1)
        order.lines.append(OrderLineDomain(order_id=1, product_id=2, quantity=3))
        order.lines.append(OrderLineDomain(order_id=1, product_id=4, quantity=2))

        assert order.total_quantity == 5

    def test_from_dict(self):
        """Should build an order from a row mapping."""
        created = datetime(2025, 1, 1, 8, 0)
        order = OrderDomain.from_dict({"id": 9, "created_at": created, "shipped_at": None})

        assert order.id == 9
        assert order.created_at == created
        assert order.is_shipped is False


class TestProductDomain:
    """Tests for ProductDomain."""

    def test_negative_stock_rejected(self):
        """Should reject negative units in stock."""
        with pytest.raises(ValueError):
            ProductDomain(units_in_stock=-1)

    def test_negative_units_on_order_rejected(self):
        """Should reject negative units on order."""
        with pytest.raises(ValueError):
            ProductDomain(units_on_order=-1)

    @pytest.mark.parametrize(
        "units_in_stock,quantity,expected",
        [(10, 3, True), (3, 3, True), (2, 3, False), (0, 1, False)],
    )
    def test_has_stock_for(self, units_in_stock, quantity, expected):
        """Should compare the quantity against units in stock."""
        product = ProductDomain(units_in_stock=units_in_stock)

        assert product.has_stock_for(quantity) is expected

    def test_add_to_units_on_order(self):
        """Should increase units on order without touching stock."""
        product = ProductDomain(units_in_stock=10, units_on_order=5)

        product.add_to_units_on_order(3)

        assert product.units_on_order == 8
        assert product.units_in_stock == 10

    def test_to_dict(self):
        """Should expose all persisted fields."""
        product = ProductDomain(id=2, name="Aniseed Syrup", units_in_stock=13, units_on_order=70)

        assert product.to_dict() == {
            "id": 2,
            "name": "Aniseed Syrup",
            "units_in_stock": 13,
            "units_on_order": 70,
        }


class TestOrderLineDomain:
    """Tests for OrderLineDomain."""

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_non_positive_quantity_rejected(self, quantity):
        """Should never hold a quantity below 1."""
        with pytest.raises(ValueError):
            OrderLineDomain(order_id=1, product_id=1, quantity=quantity)

    def test_for_order_keeps_references(self):
        """Should reference the resolved order and product."""
        order = OrderDomain(id=3)
        product = ProductDomain(id=8, units_in_stock=5)

        line = OrderLineDomain.for_order(order, product, 2)

        assert line.order_id == 3
        assert line.product_id == 8
        assert line.order is order
        assert line.product is product
        assert line.id is None

    def test_to_dict_excludes_references(self):
        """Should only serialize keys and quantity."""
        line = OrderLineDomain(order_id=3, product_id=8, quantity=2, id=50)

        assert line.to_dict() == {"id": 50, "order_id": 3, "product_id": 8, "quantity": 2}
