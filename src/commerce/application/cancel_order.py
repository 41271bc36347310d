"""Application service: Cancel Order use case.

Reads the compensation owed from the order *before* cancelling it:

- PAID orders are refunded: the merchant gives the money back first,
  and only then is the user's account credited;
- CONFIRMED and PAID orders get their stock put back;
- PENDING orders are cancelled with no side effects;
- COMPLETED and CANCELLED orders cannot be cancelled.

All checks run before any account or product is touched.
"""

from __future__ import annotations

import logging

from commerce.application.dto import OrderDTO
from commerce.domain.exceptions import (
    EntityNotFoundError,
    InsufficientFundsError,
    InvalidStateError,
)
from commerce.domain.model.entity import require_active
from commerce.domain.model.order import Order
from commerce.domain.repository.merchant_repository import MerchantRepository
from commerce.domain.repository.order_repository import OrderRepository
from commerce.domain.repository.product_repository import ProductRepository
from commerce.domain.repository.user_repository import UserRepository
from commerce.domain.service.stock_allocation_service import StockAllocationService

logger = logging.getLogger(__name__)


class CancelOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        user_repo: UserRepository,
        merchant_repo: MerchantRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._order_repo = order_repo
        self._user_repo = user_repo
        self._merchant_repo = merchant_repo
        self._product_repo = product_repo

    def handle(self, order_number: str, reason: str | None = None) -> OrderDTO:
        order = self._order_repo.get_by_number(order_number)
        if order is None:
            raise EntityNotFoundError(f"Order {order_number} not found")
        if order.status.is_terminal:
            raise InvalidStateError(
                f"Cannot cancel order {order_number} in status {order.status.value}"
            )

        owed = order.compensation()
        stock = StockAllocationService(self._product_repo)

        if owed.restore_inventory:
            stock.ensure_restorable(order)
        if owed.refund:
            self._refund(order)
        if owed.restore_inventory:
            stock.restore_for_order(order)

        order.cancel(reason)
        self._order_repo.save(order)

        logger.info(
            "Order %s cancelled (refund=%s, restock=%s): %s",
            order_number,
            owed.refund,
            owed.restore_inventory,
            reason or "no reason given",
        )
        return OrderDTO.from_order(order)

    def _refund(self, order: Order) -> None:
        user = self._user_repo.get_by_id(order.user_id)
        if user is None:
            raise EntityNotFoundError(f"User #{order.user_id} not found")
        merchant = self._merchant_repo.get_by_id(order.merchant_id)
        if merchant is None:
            raise EntityNotFoundError(f"Merchant #{order.merchant_id} not found")

        amount = order.total_amount
        require_active(user.status, f"User {user.username}")
        require_active(merchant.status, f"Merchant {merchant.merchant_name}")
        if not merchant.can_withdraw(amount):
            raise InsufficientFundsError(
                f"Merchant has insufficient funds for refund. "
                f"Required: {amount}, Available: {merchant.balance}"
            )

        merchant.withdraw_income(amount)
        user.recharge(amount)
        self._merchant_repo.save(merchant)
        self._user_repo.save(user)
