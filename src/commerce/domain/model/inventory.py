"""Inventory value object — the stock counter owned by a Product."""

from __future__ import annotations

from dataclasses import dataclass

from commerce.domain.exceptions import InsufficientInventoryError, InvalidQuantityError


def _require_positive(quantity: int, label: str) -> None:
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise InvalidQuantityError(
            f"{label} quantity must be an integer, got {type(quantity).__name__}"
        )
    if quantity <= 0:
        raise InvalidQuantityError(f"{label} quantity must be positive")


@dataclass(frozen=True)
class Inventory:
    """Invariant: ``available_stock`` is always >= 0."""

    available_stock: int = 0

    def __post_init__(self) -> None:
        if self.available_stock < 0:
            raise InvalidQuantityError("Inventory quantity cannot be negative")

    def add(self, quantity: int) -> Inventory:
        _require_positive(quantity, "Additional")
        return Inventory(self.available_stock + quantity)

    def reduce(self, quantity: int) -> Inventory:
        """Return a new Inventory with ``quantity`` fewer units.

        Raises InsufficientInventoryError if that would go below zero.
        """
        _require_positive(quantity, "Reduce")
        if quantity > self.available_stock:
            raise InsufficientInventoryError(
                f"Insufficient inventory (need {quantity}, "
                f"have {self.available_stock} available)"
            )
        return Inventory(self.available_stock - quantity)

    def has_enough_stock(self, quantity: int) -> bool:
        return self.available_stock >= quantity

    def has_stock(self) -> bool:
        return self.available_stock > 0

    def is_empty(self) -> bool:
        return self.available_stock == 0
