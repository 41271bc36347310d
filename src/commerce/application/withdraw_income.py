"""Application service: Withdraw Income use case."""

from __future__ import annotations

import logging

from commerce.domain.exceptions import EntityNotFoundError
from commerce.domain.model.value_objects import Money
from commerce.domain.repository.merchant_repository import MerchantRepository

logger = logging.getLogger(__name__)


class WithdrawIncomeHandler:

    def __init__(self, merchant_repo: MerchantRepository) -> None:
        self._merchant_repo = merchant_repo

    def handle(self, merchant_id: int, amount: str) -> Money:
        """Withdraw from the merchant balance and return what is left.

        Total income is not affected by withdrawals.
        """
        merchant = self._merchant_repo.get_by_id(merchant_id)
        if merchant is None:
            raise EntityNotFoundError(f"Merchant #{merchant_id} not found")

        merchant.withdraw_income(Money.of(amount, merchant.account.currency))
        self._merchant_repo.save(merchant)

        logger.info(
            "Merchant #%s withdrew %s, balance now %s", merchant_id, amount, merchant.balance
        )
        return merchant.balance
