"""Order aggregate — the core of the domain.

The Order is an aggregate root that owns its line items.
All business invariants are enforced here:

- ``total_amount`` always equals the sum of the item totals;
- items can only be added while the order is PENDING;
- status changes go through one transition table.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from commerce.domain.exceptions import InvalidStateError, ValidationError
from commerce.domain.model.entity import EntityMetadata, utc_now
from commerce.domain.model.order_status import OrderStatus
from commerce.domain.model.value_objects import DEFAULT_CURRENCY, Money, Quantity
from commerce.domain.service.compensation_policy import (
    Compensation,
    compensation_for,
)

__all__ = ["Order", "OrderItem", "OrderStatus", "OrderTransition"]


@dataclass(frozen=True)
class OrderItem:
    """Captures the price snapshot of a product at order time.

    Immutable: ``total_price`` is fixed when the item is built.
    """

    sku: str
    product_name: str
    unit_price: Money  # locked at order time
    quantity: int
    total_price: Money = field(init=False)

    def __post_init__(self) -> None:
        if not self.sku or not self.sku.strip():
            raise ValidationError("SKU cannot be null or empty")
        if not self.product_name or not self.product_name.strip():
            raise ValidationError("Product name cannot be null or empty")
        if self.unit_price is None or self.unit_price.is_zero():
            raise ValidationError("Unit price must be positive")
        Quantity(self.quantity)
        object.__setattr__(self, "total_price", self.unit_price * self.quantity)


class OrderTransition(Enum):
    ADD_ITEM = "add item to"
    CONFIRM = "confirm"
    PAY = "pay"
    COMPLETE = "complete"
    CANCEL = "cancel"


# transition -> (allowed source statuses, target status)
_TRANSITIONS: dict[OrderTransition, tuple[frozenset[OrderStatus], OrderStatus]] = {
    OrderTransition.ADD_ITEM: (frozenset({OrderStatus.PENDING}), OrderStatus.PENDING),
    OrderTransition.CONFIRM: (frozenset({OrderStatus.PENDING}), OrderStatus.CONFIRMED),
    OrderTransition.PAY: (frozenset({OrderStatus.CONFIRMED}), OrderStatus.PAID),
    OrderTransition.COMPLETE: (frozenset({OrderStatus.PAID}), OrderStatus.COMPLETED),
    OrderTransition.CANCEL: (
        frozenset({OrderStatus.PENDING, OrderStatus.CONFIRMED, OrderStatus.PAID}),
        OrderStatus.CANCELLED,
    ),
}


@dataclass
class Order:
    """Aggregate root for purchase orders.

    Use the ``Order.create()`` factory for new orders and
    ``Order.rehydrate()`` when a repository rebuilds a stored one.
    """

    order_number: str
    user_id: int
    merchant_id: int
    currency: str = DEFAULT_CURRENCY
    status: OrderStatus = OrderStatus.PENDING
    order_time: datetime = field(default_factory=utc_now)
    completed_time: datetime | None = None
    cancel_reason: str | None = None
    cancelled_from: OrderStatus | None = None
    meta: EntityMetadata = field(default_factory=EntityMetadata)
    _items: list[OrderItem] = field(default_factory=list, repr=False)
    total_amount: Money = field(init=False)

    def __post_init__(self) -> None:
        total = Money.zero(self.currency)
        for item in self._items:
            total = total + item.total_price
        self.currency = total.currency
        self.total_amount = total

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def create(
        order_number: str,
        user_id: int,
        merchant_id: int,
        currency: str = DEFAULT_CURRENCY,
    ) -> Order:
        """Start a new, empty PENDING order."""
        if not order_number or not order_number.strip():
            raise ValidationError("Order number is required")
        return Order(
            order_number=order_number.strip(),
            user_id=user_id,
            merchant_id=merchant_id,
            currency=currency,
        )

    @staticmethod
    def rehydrate(
        meta: EntityMetadata,
        order_number: str,
        user_id: int,
        merchant_id: int,
        currency: str,
        items: Iterable[OrderItem],
        status: OrderStatus,
        order_time: datetime,
        completed_time: datetime | None = None,
        cancel_reason: str | None = None,
        cancelled_from: OrderStatus | None = None,
    ) -> Order:
        """Rebuild a stored order without replaying its transitions.

        The total is recomputed from the items, never trusted from storage.
        """
        return Order(
            order_number=order_number,
            user_id=user_id,
            merchant_id=merchant_id,
            currency=currency,
            status=status,
            order_time=order_time,
            completed_time=completed_time,
            cancel_reason=cancel_reason,
            cancelled_from=cancelled_from,
            meta=meta,
            _items=list(items),
        )

    @property
    def id(self) -> int | None:
        return self.meta.id

    @property
    def items(self) -> list[OrderItem]:
        return list(self._items)

    # --- State transitions ----------------------------------------------------

    def add_order_item(
        self, sku: str, product_name: str, unit_price: Money, quantity: int
    ) -> OrderItem:
        item = OrderItem(
            sku=sku, product_name=product_name, unit_price=unit_price, quantity=quantity
        )

        def append() -> None:
            new_total = self.total_amount + item.total_price
            self._items.append(item)
            self.total_amount = new_total

        self._apply_transition(OrderTransition.ADD_ITEM, append)
        return item

    def confirm(self) -> None:
        """Transition PENDING -> CONFIRMED; the order must have items."""

        def require_items() -> None:
            if not self._items:
                raise InvalidStateError("Cannot confirm order without items")

        self._apply_transition(OrderTransition.CONFIRM, require_items)

    def process_payment(self) -> None:
        self._apply_transition(OrderTransition.PAY)

    def complete(self) -> None:
        self._apply_transition(OrderTransition.COMPLETE)
        self.completed_time = self.meta.updated_at

    def cancel(self, reason: str | None = None) -> Compensation:
        """Transition any non-terminal status -> CANCELLED.

        Records the status the order was cancelled from and returns the
        compensation owed for it.  Refunds and restocking are the caller's
        job and should happen *before* calling this.
        """
        previous = self._apply_transition(OrderTransition.CANCEL)
        self.cancelled_from = previous
        self.cancel_reason = reason
        return compensation_for(previous)

    def _apply_transition(
        self,
        transition: OrderTransition,
        effect: Callable[[], None] | None = None,
    ) -> OrderStatus:
        """Validate the source status, run ``effect``, then move to the target.

        If ``effect`` raises, the order is left exactly as it was.
        Returns the status the order had before the transition.
        """
        sources, target = _TRANSITIONS[transition]
        if self.status not in sources:
            raise InvalidStateError(
                f"Cannot {transition.value} order {self.order_number} "
                f"in status {self.status.value}"
            )
        if effect is not None:
            effect()
        previous = self.status
        self.status = target
        self.meta.touch()
        return previous

    # --- Compensation ---------------------------------------------------------

    def compensation(self) -> Compensation:
        """Compensation owed if the order is (or was just) cancelled.

        For a cancelled order this is judged from the pre-cancel status.
        """
        basis = self.status
        if self.status is OrderStatus.CANCELLED and self.cancelled_from is not None:
            basis = self.cancelled_from
        return compensation_for(basis)

    def needs_refund(self) -> bool:
        return self.compensation().refund

    def needs_inventory_restore(self) -> bool:
        return self.compensation().restore_inventory

    # --- Queries --------------------------------------------------------------

    def can_be_paid(self) -> bool:
        return self.status is OrderStatus.CONFIRMED

    def is_completed(self) -> bool:
        return self.status is OrderStatus.COMPLETED

    def is_cancelled(self) -> bool:
        return self.status is OrderStatus.CANCELLED

    def get_total_quantity(self) -> int:
        return sum(item.quantity for item in self._items)
