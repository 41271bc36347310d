"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from commerce.domain.model.order import Order


class OrderRepository(ABC):

    @abstractmethod
    def get_by_number(self, order_number: str) -> Order | None:
        """Return an order by its order number, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Order]:
        """Return every stored order."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist a new or updated order."""

    def find_completed_by_merchant(
        self, merchant_id: int, start: datetime, end: datetime
    ) -> list[Order]:
        """Completed orders of a merchant placed in ``[start, end)``."""
        return [
            order
            for order in self.list_all()
            if order.merchant_id == merchant_id
            and order.is_completed()
            and start <= order.order_time < end
        ]
