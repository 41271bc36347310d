"""Application service: Process Settlement use case.

Marks a settlement as resolved after someone has looked into it.
"""

from __future__ import annotations

import logging

from commerce.application.dto import SettlementDTO
from commerce.domain.exceptions import EntityNotFoundError
from commerce.domain.repository.settlement_repository import SettlementRepository

logger = logging.getLogger(__name__)


class ProcessSettlementHandler:

    def __init__(self, settlement_repo: SettlementRepository) -> None:
        self._settlement_repo = settlement_repo

    def handle(self, settlement_id: int, remarks: str) -> SettlementDTO:
        settlement = self._settlement_repo.get_by_id(settlement_id)
        if settlement is None:
            raise EntityNotFoundError(f"Settlement #{settlement_id} not found")

        previous_status = settlement.status
        settlement.mark_as_processed(remarks)
        self._settlement_repo.save(settlement)

        logger.info(
            "Settlement #%s processed (was %s): %s",
            settlement_id,
            previous_status.value,
            remarks,
        )
        return SettlementDTO.from_settlement(settlement)
