"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

from pathlib import Path

from commerce.domain.model.order import Order, OrderItem, OrderStatus
from commerce.domain.repository.order_repository import OrderRepository
from commerce.infrastructure.persistence.json_file import (
    JsonFile,
    meta_from_raw,
    meta_to_raw,
    money_from_raw,
    money_to_raw,
    time_from_raw,
    time_to_raw,
)


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- OrderRepository interface --------------------------------------------

    def get_by_number(self, order_number: str) -> Order | None:
        for raw in self._file.load():
            if raw["order_number"] == order_number:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Order]:
        return [self._to_domain(raw) for raw in self._file.load()]

    def save(self, order: Order) -> None:
        if order.meta.id is None:
            order.meta.id = self._file.next_id()
        self._file.upsert(self._to_raw(order), key="order_number")

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        # total_amount is derived from the items on load, so it is
        # stored for readers of the file only.
        return {
            **meta_to_raw(order.meta),
            "order_number": order.order_number,
            "user_id": order.user_id,
            "merchant_id": order.merchant_id,
            "currency": order.currency,
            "status": order.status.value,
            "order_time": time_to_raw(order.order_time),
            "completed_time": time_to_raw(order.completed_time),
            "cancel_reason": order.cancel_reason,
            "cancelled_from": order.cancelled_from.value if order.cancelled_from else None,
            "total_amount": money_to_raw(order.total_amount),
            "items": [
                {
                    "sku": item.sku,
                    "product_name": item.product_name,
                    "unit_price": money_to_raw(item.unit_price),
                    "quantity": item.quantity,
                }
                for item in order.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        items = [
            OrderItem(
                sku=i["sku"],
                product_name=i["product_name"],
                unit_price=money_from_raw(i["unit_price"]),
                quantity=i["quantity"],
            )
            for i in raw["items"]
        ]
        cancelled_from = raw.get("cancelled_from")
        return Order.rehydrate(
            meta=meta_from_raw(raw),
            order_number=raw["order_number"],
            user_id=raw["user_id"],
            merchant_id=raw["merchant_id"],
            currency=raw["currency"],
            items=items,
            status=OrderStatus(raw["status"]),
            order_time=time_from_raw(raw["order_time"]),
            completed_time=time_from_raw(raw.get("completed_time")),
            cancel_reason=raw.get("cancel_reason"),
            cancelled_from=OrderStatus(cancelled_from) if cancelled_from else None,
        )
