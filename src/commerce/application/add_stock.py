"""Application service: Add Stock use case."""

from __future__ import annotations

from commerce.domain.exceptions import EntityNotFoundError
from commerce.domain.repository.product_repository import ProductRepository


class AddStockHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, sku: str, quantity: int) -> int:
        """Add ``quantity`` units and return the new available stock."""
        product = self._product_repo.get_by_sku(sku)
        if product is None:
            raise EntityNotFoundError(f"Product not found: '{sku}'")

        product.add_stock(quantity)
        self._product_repo.save(product)
        return product.available_stock
