"""Integration tests for merchant settlement use cases."""

import logging
from datetime import timedelta

import pytest

from commerce.application.cancel_order import CancelOrderHandler
from commerce.application.dto import OrderItemSpec
from commerce.application.process_settlement import ProcessSettlementHandler
from commerce.application.purchase import PurchaseHandler
from commerce.application.run_daily_settlement import RunDailySettlementHandler
from commerce.application.settle_merchant import SettleMerchantHandler
from commerce.domain.exceptions import DuplicateEntityError, EntityNotFoundError
from commerce.domain.model.entity import utc_now
from commerce.domain.model.merchant import Merchant
from commerce.domain.model.order import Order
from commerce.domain.model.product import Product
from commerce.domain.model.settlement import Settlement, SettlementStatus
from commerce.domain.model.user import User
from commerce.domain.model.value_objects import Money
from commerce.domain.service.order_number_generator import OrderNumberGenerator
from commerce.domain.service.stock_allocation_service import StockAllocationService
from tests.fakes import (
    FakeMerchantRepository,
    FakeOrderRepository,
    FakeProductRepository,
    FakeSettlementRepository,
    FakeUserRepository,
)


class _World:
    """A user, two merchants and one product each, wired to fake repos."""

    def __init__(self) -> None:
        user = User.register("alice")
        user.recharge(Money.of("1000.00"))
        self.users = FakeUserRepository([user])
        self.merchants = FakeMerchantRepository(
            [Merchant.register("Acme"), Merchant.register("Globex")]
        )
        self.products = FakeProductRepository([
            Product.create("W-1", "Widget", Money.of("35.00"), merchant_id=1, initial_stock=100),
            Product.create("G-1", "Gadget", Money.of("20.00"), merchant_id=2, initial_stock=100),
        ])
        self.orders = FakeOrderRepository()
        self.settlements = FakeSettlementRepository()
        self.purchase = PurchaseHandler(
            self.users, self.merchants, self.products, self.orders, OrderNumberGenerator()
        )
        self.settle = SettleMerchantHandler(self.merchants, self.orders, self.settlements)

    @property
    def today(self):
        return utc_now().date()

    def buy(self, sku: str = "W-1", qty: int = 5) -> str:
        return self.purchase.handle(1, [OrderItemSpec(sku, qty)]).order_number

    def paid_order(self, number: str, qty: int) -> Order:
        """An order that has been paid for but not yet completed."""
        order = Order.create(number, user_id=1, merchant_id=1)
        order.add_order_item("W-1", "Widget", Money.of("35.00"), qty)
        StockAllocationService(self.products).allocate_for_order(order)
        order.confirm()
        self.users.get_by_id(1).deduct(order.total_amount)
        self.merchants.get_by_id(1).receive_income(order.total_amount)
        order.process_payment()
        self.orders.save(order)
        return order

    def previous_settlement(self, merchant_id: int, balance: str) -> Settlement:
        settlement = Settlement.reconcile(
            merchant_id,
            self.today - timedelta(days=1),
            Money.of(balance),
            Money.of(balance),
        )
        self.settlements.save(settlement)
        return settlement


class TestSettleMerchant:

    def test_matched_without_previous_settlement(self):
        world = _World()
        world.buy(qty=5)

        s = world.settle.handle(1)

        assert s.status == SettlementStatus.MATCHED
        assert s.expected_income == Money.of("175.00")
        assert s.actual_balance == Money.of("175.00")
        assert s.difference.is_zero()
        assert s.settlement_date == world.today
        assert s.id == 1

    def test_deficit_after_withdrawal(self):
        world = _World()
        world.buy(qty=5)
        world.merchants.get_by_id(1).withdraw_income(Money.of("50"))

        s = world.settle.handle(1)

        assert s.has_deficit()
        assert s.difference == Money.of("50.00")

    def test_surplus_from_untracked_income(self):
        world = _World()
        world.buy(qty=1)
        world.merchants.get_by_id(1).receive_income(Money.of("10"))

        s = world.settle.handle(1)

        assert s.has_surplus()
        assert s.difference == Money.of("10.00")

    def test_previous_balance_is_carried_forward(self):
        world = _World()
        world.merchants.get_by_id(1).receive_income(Money.of("100"))
        world.previous_settlement(1, "100.00")
        world.buy(qty=5)

        s = world.settle.handle(1)

        assert s.expected_income == Money.of("275.00")
        assert s.actual_balance == Money.of("275.00")
        assert s.is_matched()

    def test_orders_before_previous_settlement_are_not_counted_twice(self):
        world = _World()
        world.buy(qty=5)
        world.previous_settlement(1, "175.00")

        s = world.settle.handle(1)

        assert s.expected_income == Money.of("175.00")
        assert s.is_matched()

    def test_only_this_merchants_orders_count(self):
        world = _World()
        world.buy("W-1", 1)
        world.buy("G-1", 3)

        assert world.settle.handle(1).expected_income == Money.of("35.00")
        assert world.settle.handle(2).expected_income == Money.of("60.00")

    def test_cancelled_orders_do_not_count(self):
        world = _World()
        world.buy(qty=1)
        paid = world.paid_order("ORD-PAID", qty=5)
        CancelOrderHandler(
            world.orders, world.users, world.merchants, world.products
        ).handle(paid.order_number)

        s = world.settle.handle(1)

        assert s.expected_income == Money.of("35.00")
        assert s.actual_balance == Money.of("35.00")
        assert s.is_matched()

    def test_twice_on_same_day_rejected(self):
        world = _World()
        world.settle.handle(1)
        with pytest.raises(DuplicateEntityError, match="already settled"):
            world.settle.handle(1)

    def test_unknown_merchant(self):
        world = _World()
        with pytest.raises(EntityNotFoundError, match="Merchant #9"):
            world.settle.handle(9)

    def test_mismatch_is_logged_as_warning(self, caplog):
        world = _World()
        world.merchants.get_by_id(1).receive_income(Money.of("10"))
        with caplog.at_level(logging.WARNING, logger="commerce"):
            world.settle.handle(1)
        assert "Balance mismatch for merchant #1" in caplog.text


class TestRunDailySettlement:

    def test_settles_every_active_merchant(self):
        world = _World()
        world.buy("W-1", 1)
        world.merchants.save(Merchant.register("Dormant"))
        world.merchants.get_by_id(3).deactivate()

        settlements = RunDailySettlementHandler(world.merchants, world.settle).handle()

        assert sorted(s.merchant_id for s in settlements) == [1, 2]

    def test_one_failure_does_not_stop_the_run(self, caplog):
        world = _World()
        world.settle.handle(1)

        with caplog.at_level(logging.ERROR, logger="commerce"):
            settlements = RunDailySettlementHandler(world.merchants, world.settle).handle()

        assert [s.merchant_id for s in settlements] == [2]
        assert "Failed to settle merchant #1" in caplog.text


class TestProcessSettlement:

    def test_marks_processed_and_keeps_figures(self):
        world = _World()
        world.merchants.get_by_id(1).receive_income(Money.of("10"))
        s = world.settle.handle(1)

        dto = ProcessSettlementHandler(world.settlements).handle(s.id, "bonus confirmed")

        assert dto.status == "PROCESSED"
        assert dto.remarks == "bonus confirmed"
        assert dto.difference == "10.00 CNY"
        assert world.settlements.get_by_id(s.id).is_processed()

    def test_unknown_settlement(self):
        world = _World()
        with pytest.raises(EntityNotFoundError, match="Settlement #5"):
            ProcessSettlementHandler(world.settlements).handle(5, "x")
