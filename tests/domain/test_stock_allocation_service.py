"""Tests for the StockAllocationService domain service."""

import pytest

from commerce.domain.exceptions import (
    EntityNotFoundError,
    InsufficientInventoryError,
    ResourceInactiveError,
)
from commerce.domain.model.order import Order
from commerce.domain.model.product import Product
from commerce.domain.model.value_objects import Money
from commerce.domain.service.stock_allocation_service import StockAllocationService
from tests.fakes import FakeProductRepository


def _setup(widget_stock: int = 10, gadget_stock: int = 5):
    repo = FakeProductRepository([
        Product.create("W-1", "Widget", Money.of("10"), 1, widget_stock),
        Product.create("G-1", "Gadget", Money.of("20"), 1, gadget_stock),
    ])
    return repo, StockAllocationService(repo)


def _order(*lines: tuple[str, int]) -> Order:
    order = Order.create("ORD202501010001", 1, 1)
    for sku, qty in lines:
        order.add_order_item(sku, sku, Money.of("1"), qty)
    return order


class TestAllocate:

    def test_reduces_stock_for_each_item(self):
        repo, service = _setup()
        service.allocate_for_order(_order(("W-1", 3), ("G-1", 5)))
        assert repo.get_by_sku("W-1").available_stock == 7
        assert repo.get_by_sku("G-1").available_stock == 0

    def test_repeated_sku_is_summed(self):
        repo, service = _setup(widget_stock=5)
        with pytest.raises(InsufficientInventoryError, match="need 6, have 5"):
            service.allocate_for_order(_order(("W-1", 3), ("W-1", 3)))
        assert repo.get_by_sku("W-1").available_stock == 5

    def test_failure_leaves_every_product_untouched(self):
        repo, service = _setup(gadget_stock=1)
        with pytest.raises(InsufficientInventoryError, match="Gadget"):
            service.allocate_for_order(_order(("W-1", 3), ("G-1", 2)))
        assert repo.get_by_sku("W-1").available_stock == 10
        assert repo.get_by_sku("G-1").available_stock == 1

    def test_unknown_product(self):
        _, service = _setup()
        with pytest.raises(EntityNotFoundError, match="NOPE"):
            service.allocate_for_order(_order(("NOPE", 1)))

    def test_inactive_product(self):
        repo, service = _setup()
        repo.get_by_sku("G-1").deactivate()
        with pytest.raises(ResourceInactiveError):
            service.allocate_for_order(_order(("W-1", 1), ("G-1", 1)))
        assert repo.get_by_sku("W-1").available_stock == 10


class TestEnsureInStock:

    def test_returns_products_without_changing_stock(self):
        repo, service = _setup()
        products = service.ensure_in_stock({"W-1": 10, "G-1": 5})
        assert sorted(products) == ["G-1", "W-1"]
        assert repo.get_by_sku("W-1").available_stock == 10
        assert repo.get_by_sku("G-1").available_stock == 5

    def test_short_stock_rejected(self):
        _, service = _setup(gadget_stock=1)
        with pytest.raises(InsufficientInventoryError, match="need 2, have 1"):
            service.ensure_in_stock({"G-1": 2})


class TestRestore:

    def test_restore_puts_stock_back(self):
        repo, service = _setup()
        order = _order(("W-1", 4))
        service.allocate_for_order(order)
        service.restore_for_order(order)
        assert repo.get_by_sku("W-1").available_stock == 10

    def test_ensure_restorable_rejects_inactive(self):
        repo, service = _setup()
        repo.get_by_sku("W-1").deactivate()
        with pytest.raises(ResourceInactiveError):
            service.ensure_restorable(_order(("W-1", 1)))
