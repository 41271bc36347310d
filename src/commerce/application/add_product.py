"""Application service: Add Product use case."""

from __future__ import annotations

import logging

from commerce.domain.exceptions import DuplicateEntityError, EntityNotFoundError
from commerce.domain.model.product import Product
from commerce.domain.model.value_objects import Money
from commerce.domain.repository.merchant_repository import MerchantRepository
from commerce.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class AddProductHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        merchant_repo: MerchantRepository,
    ) -> None:
        self._product_repo = product_repo
        self._merchant_repo = merchant_repo

    def handle(
        self,
        sku: str,
        name: str,
        price: str,
        merchant_id: int,
        initial_stock: int = 0,
        description: str = "",
    ) -> Product:
        """Add a new product to a merchant's catalog.

        The price is taken in the merchant's account currency.
        """
        merchant = self._merchant_repo.get_by_id(merchant_id)
        if merchant is None:
            raise EntityNotFoundError(f"Merchant #{merchant_id} not found")

        if self._product_repo.get_by_sku(sku.strip()) is not None:
            raise DuplicateEntityError(f"Product '{sku}' already exists")

        product = Product.create(
            sku=sku,
            name=name,
            price=Money.of(price, merchant.account.currency),
            merchant_id=merchant_id,
            initial_stock=initial_stock,
            description=description,
        )
        self._product_repo.save(product)
        logger.info("Added product %s '%s' at %s", product.sku, product.name, product.price)
        return product
