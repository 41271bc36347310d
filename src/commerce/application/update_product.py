"""Application service: Update Product Price use case."""

from __future__ import annotations

from commerce.domain.exceptions import EntityNotFoundError
from commerce.domain.model.value_objects import Money
from commerce.domain.repository.product_repository import ProductRepository


class UpdateProductPriceHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, sku: str, new_price: str) -> Money:
        """Update a product's price.

        This does NOT affect any existing orders; they captured a
        price snapshot at order time.
        """
        product = self._product_repo.get_by_sku(sku)
        if product is None:
            raise EntityNotFoundError(f"Product not found: '{sku}'")

        product.update_price(Money.of(new_price, product.price.currency))
        self._product_repo.save(product)
        return product.price
