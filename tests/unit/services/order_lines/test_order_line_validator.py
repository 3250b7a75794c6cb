"""Unit tests for OrderLineValidator."""

from datetime import UTC, datetime

import pytest

from app.domain.models import OrderDomain, ProductDomain
from app.services.order_lines.validators import OrderLineValidator
from app.utils.error_handler import BusinessRuleException, ErrorCode


@pytest.fixture
def validator():
    return OrderLineValidator()


@pytest.fixture
def open_order():
    return OrderDomain(id=10)


@pytest.fixture
def shipped_order():
    return OrderDomain(id=11, shipped_at=datetime(2025, 3, 1, 9, 30, tzinfo=UTC))


@pytest.fixture
def product():
    return ProductDomain(id=3, name="Chang", units_in_stock=4, units_on_order=0)


class TestOrderLineValidator:
    """Tests for the business rules checked before adding a line."""

    def test_valid_request_passes(self, validator, open_order, product):
        """Should not raise for an open order, positive quantity and enough stock."""
        validator.validate(open_order, product, 4)

    def test_shipped_order_rejected(self, validator, shipped_order, product):
        """Should reject lines on shipped orders with the shipped reason."""
        with pytest.raises(BusinessRuleException) as exc_info:
            validator.validate(shipped_order, product, 1)

        exc = exc_info.value
        assert exc.reason == ErrorCode.ORDER_ALREADY_SHIPPED
        assert exc.status_code == 409
        assert exc.details["order_id"] == 11
        assert exc.details["shipped_at"].startswith("2025-03-01")

    @pytest.mark.parametrize("quantity", [0, -3])
    def test_non_positive_quantity_rejected(self, validator, open_order, product, quantity):
        """Should reject quantities below 1."""
        with pytest.raises(BusinessRuleException) as exc_info:
            validator.validate(open_order, product, quantity)

        assert exc_info.value.reason == ErrorCode.NON_POSITIVE_QUANTITY
        assert exc_info.value.status_code == 422
        assert exc_info.value.details["quantity"] == quantity

    def test_insufficient_stock_rejected(self, validator, open_order, product):
        """Should reject quantities above the units in stock."""
        with pytest.raises(BusinessRuleException) as exc_info:
            validator.validate(open_order, product, 5)

        exc = exc_info.value
        assert exc.reason == ErrorCode.INSUFFICIENT_STOCK
        assert exc.details == {
            "reason": "INSUFFICIENT_STOCK",
            "product_id": 3,
            "requested": 5,
            "units_in_stock": 4,
        }

    def test_units_on_order_do_not_reduce_available_stock(self, validator, open_order):
        """Should compare against units in stock only, ignoring units already on order."""
        product = ProductDomain(id=4, units_in_stock=5, units_on_order=100)

        validator.validate(open_order, product, 5)

    def test_rules_checked_in_order(self, validator, shipped_order):
        """Should report the shipped order before quantity and stock problems."""
        empty_product = ProductDomain(id=5, units_in_stock=0)

        with pytest.raises(BusinessRuleException) as exc_info:
            validator.validate(shipped_order, empty_product, -1)

        assert exc_info.value.reason == ErrorCode.ORDER_ALREADY_SHIPPED

    def test_quantity_checked_before_stock(self, validator, open_order):
        """Should report the non-positive quantity before the stock check."""
        empty_product = ProductDomain(id=5, units_in_stock=0)

        with pytest.raises(BusinessRuleException) as exc_info:
            validator.validate(open_order, empty_product, 0)

        assert exc_info.value.reason == ErrorCode.NON_POSITIVE_QUANTITY
