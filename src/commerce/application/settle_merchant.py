"""Application service: Settle Merchant use case.

Reconciles one merchant for one settlement date:

    expected = previous day's settled balance (if any)
             + income from COMPLETED orders since that settlement
    actual   = the merchant's balance right now

Without a previous-day settlement the window starts at the beginning of
the previous day and the expected figure is the order income alone.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date, datetime, time, timedelta, timezone

from commerce.domain.exceptions import DuplicateEntityError, EntityNotFoundError
from commerce.domain.model.entity import utc_now
from commerce.domain.model.order import Order
from commerce.domain.model.settlement import Settlement
from commerce.domain.model.value_objects import Money
from commerce.domain.repository.merchant_repository import MerchantRepository
from commerce.domain.repository.order_repository import OrderRepository
from commerce.domain.repository.settlement_repository import SettlementRepository

logger = logging.getLogger(__name__)


class SettleMerchantHandler:

    def __init__(
        self,
        merchant_repo: MerchantRepository,
        order_repo: OrderRepository,
        settlement_repo: SettlementRepository,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._merchant_repo = merchant_repo
        self._order_repo = order_repo
        self._settlement_repo = settlement_repo
        self._clock = clock

    def handle(self, merchant_id: int, settlement_date: date | None = None) -> Settlement:
        settled_at = self._clock()
        settlement_date = settlement_date or settled_at.date()

        merchant = self._merchant_repo.get_by_id(merchant_id)
        if merchant is None:
            raise EntityNotFoundError(f"Merchant #{merchant_id} not found")
        if self._settlement_repo.get_by_merchant_and_date(merchant_id, settlement_date):
            raise DuplicateEntityError(
                f"Merchant #{merchant_id} is already settled for {settlement_date.isoformat()}"
            )

        previous_date = settlement_date - timedelta(days=1)
        previous = self._settlement_repo.get_by_merchant_and_date(merchant_id, previous_date)
        if previous is not None:
            window_start = previous.meta.created_at
        else:
            window_start = datetime.combine(previous_date, time.min, tzinfo=timezone.utc)

        actual_balance = merchant.balance
        orders = self._order_repo.find_completed_by_merchant(
            merchant_id, window_start, settled_at
        )
        order_income = _sum_totals(orders, Money.zero(actual_balance.currency))

        if previous is not None:
            expected = previous.actual_balance + order_income
            basis = (
                f"Previous balance: {previous.actual_balance}, "
                f"orders since previous settlement: {order_income}"
            )
        else:
            expected = order_income
            basis = f"No previous settlement, recent orders income: {order_income}"

        settlement = Settlement.reconcile(
            merchant_id=merchant_id,
            settlement_date=settlement_date,
            expected_income=expected,
            actual_balance=actual_balance,
            remarks=(
                f"{basis}, expected: {expected}, current balance: {actual_balance}, "
                f"{len(orders)} completed orders from {window_start.isoformat()}"
            ),
        )
        self._settlement_repo.save(settlement)

        if settlement.is_matched():
            logger.info(
                "Merchant #%s settled for %s: %s matched",
                merchant_id,
                settlement_date,
                actual_balance,
            )
        else:
            logger.warning(
                "Balance mismatch for merchant #%s on %s: expected=%s, actual=%s (%s %s)",
                merchant_id,
                settlement_date,
                expected,
                actual_balance,
                settlement.status.value,
                settlement.difference,
            )
        return settlement


def _sum_totals(orders: list[Order], zero: Money) -> Money:
    total = zero
    for order in orders:
        total = total + order.total_amount
    return total
