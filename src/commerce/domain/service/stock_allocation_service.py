"""Domain service: Stock Allocation.

This service coordinates the cross-aggregate operation of taking stock
out of products for an order, or putting it back when the order is
cancelled.  It lives in the domain layer because the logic is a core
business rule, not just orchestration.

The two-phase approach (validate-then-mutate) ensures we never leave
products in a partially-allocated state if one of them fails validation.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Mapping

from commerce.domain.exceptions import (
    EntityNotFoundError,
    InsufficientInventoryError,
)
from commerce.domain.model.entity import require_active
from commerce.domain.model.order import Order
from commerce.domain.model.product import Product
from commerce.domain.repository.product_repository import ProductRepository


class StockAllocationService:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def allocate_for_order(self, order: Order) -> None:
        """Reduce stock for every line item in the order.

        Phase 1 — load and validate: every product exists, is active and
                  has enough stock.  Fails fast before any mutation.
        Phase 2 — mutate and persist.
        """
        wanted = self._quantities_by_sku(order)
        products = self.ensure_in_stock(wanted)

        for sku, qty in wanted.items():
            products[sku].reduce_stock(qty)
            self._product_repo.save(products[sku])

    def ensure_in_stock(self, wanted: Mapping[str, int]) -> dict[str, Product]:
        """Load the products for ``wanted`` (SKU -> units) and check the stock.

        Returns the loaded products; nothing is changed.
        """
        products = self._load_active(wanted)
        for sku, qty in wanted.items():
            product = products[sku]
            if not product.has_enough_stock(qty):
                raise InsufficientInventoryError(
                    f"Insufficient inventory for {product.name} "
                    f"(need {qty}, have {product.available_stock} available)"
                )
        return products

    def ensure_restorable(self, order: Order) -> None:
        """Fail now if ``restore_for_order`` would fail for this order.

        Lets callers validate before other compensations are applied.
        """
        self._load_active(self._quantities_by_sku(order))

    def restore_for_order(self, order: Order) -> None:
        """Put back the stock taken for an order (used on cancellation)."""
        wanted = self._quantities_by_sku(order)
        products = self._load_active(wanted)

        for sku, qty in wanted.items():
            products[sku].add_stock(qty)
            self._product_repo.save(products[sku])

    # --- Internal helpers -----------------------------------------------------

    @staticmethod
    def _quantities_by_sku(order: Order) -> dict[str, int]:
        totals: Counter[str] = Counter()
        for item in order.items:
            totals[item.sku] += item.quantity
        return dict(totals)

    def _load_active(self, wanted: Mapping[str, int]) -> dict[str, Product]:
        products: dict[str, Product] = {}
        for sku in wanted:
            product = self._product_repo.get_by_sku(sku)
            if product is None:
                raise EntityNotFoundError(f"Product not found: '{sku}'")
            require_active(product.status, f"Product {sku}")
            products[sku] = product
        return products
