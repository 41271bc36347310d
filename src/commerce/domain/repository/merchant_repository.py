"""Abstract repository for Merchant aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from commerce.domain.model.merchant import Merchant


class MerchantRepository(ABC):

    @abstractmethod
    def get_by_id(self, merchant_id: int) -> Merchant | None:
        """Return a merchant by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Merchant]:
        """Return every merchant."""

    @abstractmethod
    def save(self, merchant: Merchant) -> None:
        """Persist a new or updated merchant, assigning an ID if it has none."""

    def list_active(self) -> list[Merchant]:
        return [m for m in self.list_all() if m.is_active()]
