"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from commerce.config import get_data_dir
from commerce.domain.service.order_number_generator import OrderNumberGenerator
from commerce.infrastructure.persistence.json_merchant_repository import (
    JsonMerchantRepository,
)
from commerce.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from commerce.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from commerce.infrastructure.persistence.json_settlement_repository import (
    JsonSettlementRepository,
)
from commerce.infrastructure.persistence.json_user_repository import (
    JsonUserRepository,
)


def user_repository() -> JsonUserRepository:
    return JsonUserRepository(get_data_dir() / "users.json")


def merchant_repository() -> JsonMerchantRepository:
    return JsonMerchantRepository(get_data_dir() / "merchants.json")


def product_repository() -> JsonProductRepository:
    return JsonProductRepository(get_data_dir() / "products.json")


def order_repository() -> JsonOrderRepository:
    return JsonOrderRepository(get_data_dir() / "orders.json")


def settlement_repository() -> JsonSettlementRepository:
    return JsonSettlementRepository(get_data_dir() / "settlements.json")


def order_number_generator(orders: JsonOrderRepository) -> OrderNumberGenerator:
    """Continue today's sequence after the orders already on disk."""
    return OrderNumberGenerator.resume_from(
        [order.order_number for order in orders.list_all()]
    )
