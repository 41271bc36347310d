"""Integration tests for the Purchase use case.

Uses in-memory fake repositories — no file I/O.
"""

from datetime import datetime, timezone

import pytest

from commerce.application.dto import OrderItemSpec
from commerce.application.purchase import PurchaseHandler
from commerce.domain.exceptions import (
    CurrencyMismatchError,
    EntityNotFoundError,
    InsufficientFundsError,
    InsufficientInventoryError,
    InvalidQuantityError,
    ResourceInactiveError,
    ValidationError,
)
from commerce.domain.model.merchant import Merchant
from commerce.domain.model.product import Product
from commerce.domain.model.user import User
from commerce.domain.model.value_objects import Money
from commerce.domain.service.order_number_generator import OrderNumberGenerator
from tests.fakes import (
    FakeMerchantRepository,
    FakeOrderRepository,
    FakeProductRepository,
    FakeUserRepository,
)


def _setup(balance: str = "1000.00", stock: int = 10):
    user = User.register("alice")
    user.recharge(Money.of(balance))
    users = FakeUserRepository([user])
    merchants = FakeMerchantRepository([Merchant.register("Acme"), Merchant.register("Other")])
    products = FakeProductRepository([
        Product.create("W-1", "Widget", Money.of("35.00"), merchant_id=1, initial_stock=stock),
        Product.create("G-1", "Gadget", Money.of("12.50"), merchant_id=1, initial_stock=stock),
        Product.create("X-1", "Foreign", Money.of("1.00"), merchant_id=2, initial_stock=stock),
    ])
    orders = FakeOrderRepository()
    numbers = OrderNumberGenerator(
        clock=lambda: datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)
    )
    handler = PurchaseHandler(users, merchants, products, orders, numbers)
    return handler, users, merchants, products, orders


class TestPurchaseHappyPath:

    def test_single_item_purchase(self):
        handler, users, merchants, products, orders = _setup()
        dto = handler.handle(1, [OrderItemSpec("W-1", 5)])

        assert dto.status == "COMPLETED"
        assert dto.total_amount == "175.00 CNY"
        assert dto.total_quantity == 5
        assert dto.order_number == "ORD202501010001"
        assert dto.completed_time is not None

        assert users.get_by_id(1).balance == Money.of("825.00")
        assert merchants.get_by_id(1).balance == Money.of("175.00")
        assert merchants.get_by_id(1).total_income == Money.of("175.00")
        assert products.get_by_sku("W-1").available_stock == 5
        assert orders.get_by_number(dto.order_number).is_completed()

    def test_multi_item_purchase(self):
        handler, users, _, products, _ = _setup()
        dto = handler.handle(1, [OrderItemSpec("W-1", 2), OrderItemSpec("G-1", 4)])
        assert dto.total_amount == "120.00 CNY"
        assert [i.sku for i in dto.items] == ["W-1", "G-1"]
        assert users.get_by_id(1).balance == Money.of("880.00")
        assert products.get_by_sku("G-1").available_stock == 6

    def test_exact_balance_is_enough(self):
        handler, users, _, _, _ = _setup(balance="35.00")
        handler.handle(1, [OrderItemSpec("W-1", 1)])
        assert users.get_by_id(1).balance.is_zero()

    def test_order_numbers_are_sequential(self):
        handler, _, _, _, _ = _setup()
        first = handler.handle(1, [OrderItemSpec("W-1", 1)])
        second = handler.handle(1, [OrderItemSpec("W-1", 1)])
        assert first.order_number == "ORD202501010001"
        assert second.order_number == "ORD202501010002"

    def test_price_snapshot_survives_price_change(self):
        handler, _, _, products, orders = _setup()
        dto = handler.handle(1, [OrderItemSpec("W-1", 1)])
        products.get_by_sku("W-1").update_price(Money.of("99.00"))
        assert orders.get_by_number(dto.order_number).total_amount == Money.of("35.00")


class TestPurchaseRejected:

    def _assert_untouched(self, users, merchants, products, orders):
        assert users.get_by_id(1).balance == Money.of("1000.00")
        assert merchants.get_by_id(1).balance.is_zero()
        assert products.get_by_sku("W-1").available_stock == 10
        assert products.get_by_sku("G-1").available_stock == 10
        assert orders.list_all() == []

    def test_no_items(self):
        handler, *_ = _setup()
        with pytest.raises(ValidationError, match="at least one item"):
            handler.handle(1, [])

    def test_unknown_user(self):
        handler, *_ = _setup()
        with pytest.raises(EntityNotFoundError, match="User #99"):
            handler.handle(99, [OrderItemSpec("W-1", 1)])

    def test_unknown_product(self):
        handler, *_ = _setup()
        with pytest.raises(EntityNotFoundError, match="NOPE"):
            handler.handle(1, [OrderItemSpec("NOPE", 1)])

    def test_insufficient_balance(self):
        handler, users, merchants, products, orders = _setup(balance="100.00")
        with pytest.raises(InsufficientFundsError, match="Insufficient balance"):
            handler.handle(1, [OrderItemSpec("W-1", 5)])
        assert users.get_by_id(1).balance == Money.of("100.00")
        assert products.get_by_sku("W-1").available_stock == 10
        assert orders.list_all() == []

    def test_insufficient_stock_leaves_everything_untouched(self):
        handler, users, merchants, products, orders = _setup()
        with pytest.raises(InsufficientInventoryError, match="Gadget"):
            handler.handle(1, [OrderItemSpec("W-1", 2), OrderItemSpec("G-1", 11)])
        self._assert_untouched(users, merchants, products, orders)

    def test_mixed_merchants(self):
        handler, users, merchants, products, orders = _setup()
        with pytest.raises(ValidationError, match="does not belong to merchant"):
            handler.handle(1, [OrderItemSpec("W-1", 1), OrderItemSpec("X-1", 1)])
        self._assert_untouched(users, merchants, products, orders)

    def test_zero_quantity(self):
        handler, users, merchants, products, orders = _setup()
        with pytest.raises(InvalidQuantityError):
            handler.handle(1, [OrderItemSpec("W-1", 0)])
        self._assert_untouched(users, merchants, products, orders)

    def test_inactive_user(self):
        handler, users, merchants, products, orders = _setup()
        users.get_by_id(1).deactivate()
        with pytest.raises(ResourceInactiveError, match="User alice"):
            handler.handle(1, [OrderItemSpec("W-1", 1)])
        assert products.get_by_sku("W-1").available_stock == 10

    def test_inactive_merchant(self):
        handler, users, merchants, products, orders = _setup()
        merchants.get_by_id(1).deactivate()
        with pytest.raises(ResourceInactiveError, match="Merchant Acme"):
            handler.handle(1, [OrderItemSpec("W-1", 1)])
        assert users.get_by_id(1).balance == Money.of("1000.00")

    def test_inactive_product(self):
        handler, users, merchants, products, orders = _setup()
        products.get_by_sku("G-1").deactivate()
        with pytest.raises(ResourceInactiveError, match="Product G-1"):
            handler.handle(1, [OrderItemSpec("W-1", 1), OrderItemSpec("G-1", 1)])
        assert products.get_by_sku("W-1").available_stock == 10

    def test_user_in_other_currency(self):
        handler, users, merchants, products, orders = _setup()
        users.save(User.register("bob", currency="USD"))
        with pytest.raises(CurrencyMismatchError, match="User account is in USD"):
            handler.handle(2, [OrderItemSpec("W-1", 1)])
        assert products.get_by_sku("W-1").available_stock == 10

    def test_rejected_purchases_do_not_use_order_numbers(self):
        handler, *_ = _setup(balance="100.00", stock=2)
        with pytest.raises(InsufficientFundsError):
            handler.handle(1, [OrderItemSpec("W-1", 5)])
        with pytest.raises(InsufficientInventoryError):
            handler.handle(1, [OrderItemSpec("G-1", 3)])
        with pytest.raises(InvalidQuantityError):
            handler.handle(1, [OrderItemSpec("W-1", 0)])

        dto = handler.handle(1, [OrderItemSpec("W-1", 1)])
        assert dto.order_number == "ORD202501010001"
