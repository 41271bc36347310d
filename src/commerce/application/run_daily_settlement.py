"""Application service: Run Daily Settlement use case.

Settles every active merchant.  A merchant that fails to settle is logged
and skipped so one bad account cannot block the rest of the run.
"""

from __future__ import annotations

import logging
from datetime import date

from commerce.application.settle_merchant import SettleMerchantHandler
from commerce.domain.exceptions import DomainException
from commerce.domain.model.settlement import Settlement
from commerce.domain.repository.merchant_repository import MerchantRepository

logger = logging.getLogger(__name__)


class RunDailySettlementHandler:

    def __init__(
        self,
        merchant_repo: MerchantRepository,
        settle_merchant: SettleMerchantHandler,
    ) -> None:
        self._merchant_repo = merchant_repo
        self._settle_merchant = settle_merchant

    def handle(self, settlement_date: date | None = None) -> list[Settlement]:
        merchants = self._merchant_repo.list_active()
        logger.info("Starting settlement of %d active merchants", len(merchants))

        settlements: list[Settlement] = []
        for merchant in merchants:
            try:
                settlements.append(
                    self._settle_merchant.handle(merchant.id, settlement_date)  # type: ignore[arg-type]
                )
            except DomainException:
                logger.exception(
                    "Failed to settle merchant #%s (%s)", merchant.id, merchant.merchant_name
                )

        logger.info(
            "Settlement finished: %d of %d merchants settled",
            len(settlements),
            len(merchants),
        )
        return settlements
