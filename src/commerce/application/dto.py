"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from commerce.domain.model.merchant import Merchant
from commerce.domain.model.order import Order
from commerce.domain.model.settlement import Settlement
from commerce.domain.model.user import User


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: what the customer asked for (SKU + quantity)."""

    sku: str
    quantity: int


@dataclass(frozen=True)
class OrderItemDTO:
    """Output: a single line item as displayed to the user."""

    sku: str
    product_name: str
    quantity: int
    unit_price: str  # formatted, e.g. "15.00 CNY"
    total_price: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    order_number: str
    user_id: int
    merchant_id: int
    status: str
    items: list[OrderItemDTO]
    total_amount: str
    total_quantity: int
    order_time: str
    completed_time: str | None
    cancel_reason: str | None

    @staticmethod
    def from_order(order: Order) -> OrderDTO:
        return OrderDTO(
            order_number=order.order_number,
            user_id=order.user_id,
            merchant_id=order.merchant_id,
            status=order.status.value,
            items=[
                OrderItemDTO(
                    sku=item.sku,
                    product_name=item.product_name,
                    quantity=item.quantity,
                    unit_price=str(item.unit_price),
                    total_price=str(item.total_price),
                )
                for item in order.items
            ],
            total_amount=str(order.total_amount),
            total_quantity=order.get_total_quantity(),
            order_time=_format_time(order.order_time),
            completed_time=(
                _format_time(order.completed_time) if order.completed_time else None
            ),
            cancel_reason=order.cancel_reason,
        )


@dataclass(frozen=True)
class AccountDTO:
    """Output: balances of a user or merchant."""

    owner_id: int
    name: str
    status: str
    balance: str
    total_income: str | None = None

    @staticmethod
    def from_user(user: User) -> AccountDTO:
        return AccountDTO(
            owner_id=user.id,  # type: ignore[arg-type]
            name=user.username,
            status=user.status.value,
            balance=str(user.balance),
        )

    @staticmethod
    def from_merchant(merchant: Merchant) -> AccountDTO:
        return AccountDTO(
            owner_id=merchant.id,  # type: ignore[arg-type]
            name=merchant.merchant_name,
            status=merchant.status.value,
            balance=str(merchant.balance),
            total_income=str(merchant.total_income),
        )


@dataclass(frozen=True)
class SettlementDTO:

    settlement_id: int
    merchant_id: int
    settlement_date: str
    expected_income: str
    actual_balance: str
    difference: str
    status: str
    remarks: str

    @staticmethod
    def from_settlement(settlement: Settlement) -> SettlementDTO:
        return SettlementDTO(
            settlement_id=settlement.id,  # type: ignore[arg-type]
            merchant_id=settlement.merchant_id,
            settlement_date=settlement.settlement_date.isoformat(),
            expected_income=str(settlement.expected_income),
            actual_balance=str(settlement.actual_balance),
            difference=str(settlement.difference),
            status=settlement.status.value,
            remarks=settlement.remarks,
        )


def _format_time(value) -> str:
    return value.strftime("%Y-%m-%d %H:%M UTC")
