"""Abstract repository for Settlement aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date

from commerce.domain.model.settlement import Settlement


class SettlementRepository(ABC):

    @abstractmethod
    def get_by_id(self, settlement_id: int) -> Settlement | None:
        """Return a settlement by its ID, or None if not found."""

    @abstractmethod
    def get_by_merchant_and_date(
        self, merchant_id: int, settlement_date: date
    ) -> Settlement | None:
        """Return the settlement of a merchant for one day, or None."""

    @abstractmethod
    def save(self, settlement: Settlement) -> None:
        """Persist a new or updated settlement, assigning an ID if it has none."""
