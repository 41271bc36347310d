"""Domain policy: what must be undone when an order is cancelled.

Pure functions of the order status *before* cancellation.  They only say
which compensations are owed; the application layer performs them.

- Stock leaves the product when the order is confirmed.
- Money leaves the user's account when the order is paid.
"""

from __future__ import annotations

from dataclasses import dataclass

from commerce.domain.model.order_status import OrderStatus

_STOCK_TAKEN = frozenset(
    {OrderStatus.CONFIRMED, OrderStatus.PAID, OrderStatus.COMPLETED}
)
_MONEY_TAKEN = frozenset({OrderStatus.PAID, OrderStatus.COMPLETED})


@dataclass(frozen=True)
class Compensation:
    refund: bool
    restore_inventory: bool

    @property
    def is_required(self) -> bool:
        return self.refund or self.restore_inventory


def requires_refund(status: OrderStatus) -> bool:
    return status in _MONEY_TAKEN


def requires_inventory_restore(status: OrderStatus) -> bool:
    return status in _STOCK_TAKEN


def compensation_for(status: OrderStatus) -> Compensation:
    return Compensation(
        refund=requires_refund(status),
        restore_inventory=requires_inventory_restore(status),
    )
