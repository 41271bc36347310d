"""Product aggregate.

Products live independently of orders. They have their own lifecycle:
prices change, stock goes up and down, products are taken off sale.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from commerce.domain.exceptions import InvalidAmountError, ValidationError
from commerce.domain.model.entity import (
    ActivationStatus,
    EntityMetadata,
    require_active,
)
from commerce.domain.model.inventory import Inventory
from commerce.domain.model.value_objects import Money, Quantity


@dataclass
class Product:
    """A product in a merchant's catalog.

    This is an aggregate root — it is the entry point for any
    operation involving a product, including its stock.  Orders
    capture a price snapshot, so ``update_price`` never affects them.
    """

    sku: str
    name: str
    description: str
    price: Money
    merchant_id: int
    inventory: Inventory
    status: ActivationStatus = ActivationStatus.ACTIVE
    meta: EntityMetadata = field(default_factory=EntityMetadata)

    @staticmethod
    def create(
        sku: str,
        name: str,
        price: Money,
        merchant_id: int,
        initial_stock: int = 0,
        description: str = "",
    ) -> Product:
        if not sku or not sku.strip():
            raise ValidationError("SKU is required")
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        _require_positive_price(price)
        return Product(
            sku=sku.strip(),
            name=name.strip(),
            description=description,
            price=price,
            merchant_id=merchant_id,
            inventory=Inventory(initial_stock),
        )

    @staticmethod
    def rehydrate(
        meta: EntityMetadata,
        sku: str,
        name: str,
        description: str,
        price: Money,
        merchant_id: int,
        inventory: Inventory,
        status: ActivationStatus,
    ) -> Product:
        return Product(
            sku=sku,
            name=name,
            description=description,
            price=price,
            merchant_id=merchant_id,
            inventory=inventory,
            status=status,
            meta=meta,
        )

    @property
    def id(self) -> int | None:
        return self.meta.id

    @property
    def available_stock(self) -> int:
        return self.inventory.available_stock

    # --- Stock ----------------------------------------------------------------

    def add_stock(self, quantity: int) -> None:
        require_active(self.status, f"Product {self.sku}")
        self.inventory = self.inventory.add(quantity)
        self.meta.touch()

    def reduce_stock(self, quantity: int) -> None:
        require_active(self.status, f"Product {self.sku}")
        self.inventory = self.inventory.reduce(quantity)
        self.meta.touch()

    def has_enough_stock(self, quantity: int) -> bool:
        return self.inventory.has_enough_stock(quantity)

    # --- Pricing --------------------------------------------------------------

    def calculate_total_price(self, quantity: int) -> Money:
        return self.price * Quantity(quantity).value

    def update_price(self, new_price: Money) -> None:
        require_active(self.status, f"Product {self.sku}")
        _require_positive_price(new_price)
        self.price = new_price
        self.meta.touch()

    # --- Activation -----------------------------------------------------------

    def activate(self) -> None:
        self.status = ActivationStatus.ACTIVE
        self.meta.touch()

    def deactivate(self) -> None:
        self.status = ActivationStatus.INACTIVE
        self.meta.touch()

    def is_active(self) -> bool:
        return self.status is ActivationStatus.ACTIVE

    def is_available(self) -> bool:
        """True if the product can currently be bought (active and in stock)."""
        return self.is_active() and self.inventory.has_stock()


def _require_positive_price(price: Money | None) -> None:
    if price is None or price.is_zero():
        raise InvalidAmountError("Product price must be greater than zero")
