"""Application service: Purchase use case.

Runs the whole buying flow in one go:

    validate -> create order -> take stock -> confirm
             -> charge user -> credit merchant -> pay -> complete

Every check that can fail is made before the first mutation, so a
rejected purchase leaves users, merchants and products untouched and
does not use up an order number.
"""

from __future__ import annotations

import logging
from collections import Counter

from commerce.application.dto import OrderDTO, OrderItemSpec
from commerce.domain.exceptions import (
    CurrencyMismatchError,
    EntityNotFoundError,
    InsufficientFundsError,
    ValidationError,
)
from commerce.domain.model.entity import require_active
from commerce.domain.model.merchant import Merchant
from commerce.domain.model.order import Order
from commerce.domain.model.product import Product
from commerce.domain.model.user import User
from commerce.domain.model.value_objects import Money
from commerce.domain.repository.merchant_repository import MerchantRepository
from commerce.domain.repository.order_repository import OrderRepository
from commerce.domain.repository.product_repository import ProductRepository
from commerce.domain.repository.user_repository import UserRepository
from commerce.domain.service.order_number_generator import OrderNumberGenerator
from commerce.domain.service.stock_allocation_service import StockAllocationService

logger = logging.getLogger(__name__)


class PurchaseHandler:

    def __init__(
        self,
        user_repo: UserRepository,
        merchant_repo: MerchantRepository,
        product_repo: ProductRepository,
        order_repo: OrderRepository,
        order_numbers: OrderNumberGenerator,
    ) -> None:
        self._user_repo = user_repo
        self._merchant_repo = merchant_repo
        self._product_repo = product_repo
        self._order_repo = order_repo
        self._order_numbers = order_numbers

    def handle(self, user_id: int, item_specs: list[OrderItemSpec]) -> OrderDTO:
        """Buy one or more products from a single merchant.

        Steps:
        1. Load the user, the products and their merchant; all must be active.
        2. Price the items and check the user can pay and the stock is there.
        3. Number a PENDING order with a price snapshot of each product.
        4. Take stock, confirm, move the money, pay and complete.
        5. Persist and return a DTO.
        """
        if not item_specs:
            raise ValidationError("Order must contain at least one item")

        user = self._load_user(user_id)
        products = [self._load_product(spec.sku) for spec in item_specs]
        merchant = self._load_merchant(products)

        require_active(user.status, f"User {user.username}")
        require_active(merchant.status, f"Merchant {merchant.merchant_name}")
        for product in products:
            require_active(product.status, f"Product {product.sku}")

        total = Money.zero(products[0].price.currency)
        wanted: Counter[str] = Counter()
        for spec, product in zip(item_specs, products):
            total = total + product.calculate_total_price(spec.quantity)
            wanted[product.sku] += spec.quantity

        self._check_currency(user.account.currency, total.currency, "User account")
        self._check_currency(
            merchant.account.currency, total.currency, "Merchant account"
        )
        if not user.can_afford(total):
            raise InsufficientFundsError(
                f"Insufficient balance. Required: {total}, Available: {user.balance}"
            )
        stock = StockAllocationService(self._product_repo)
        stock.ensure_in_stock(wanted)

        # numbers are only handed out to purchases that passed every check
        order = Order.create(
            order_number=self._order_numbers.next(),
            user_id=user_id,
            merchant_id=merchant.id,  # type: ignore[arg-type]
            currency=total.currency,
        )
        for spec, product in zip(item_specs, products):
            order.add_order_item(
                sku=product.sku,
                product_name=product.name,
                unit_price=product.price,
                quantity=spec.quantity,
            )

        stock.allocate_for_order(order)
        order.confirm()

        user.deduct(total)
        merchant.receive_income(total)
        order.process_payment()
        order.complete()

        self._user_repo.save(user)
        self._merchant_repo.save(merchant)
        self._order_repo.save(order)

        logger.info(
            "Order %s completed: user=%s merchant=%s items=%d total=%s",
            order.order_number,
            user_id,
            merchant.id,
            order.get_total_quantity(),
            total,
        )
        return OrderDTO.from_order(order)

    # --- Loading --------------------------------------------------------------

    def _load_user(self, user_id: int) -> User:
        user = self._user_repo.get_by_id(user_id)
        if user is None:
            raise EntityNotFoundError(f"User #{user_id} not found")
        return user

    def _load_product(self, sku: str) -> Product:
        product = self._product_repo.get_by_sku(sku)
        if product is None:
            raise EntityNotFoundError(f"Product not found: '{sku}'")
        return product

    def _load_merchant(self, products: list[Product]) -> Merchant:
        merchant_id = products[0].merchant_id
        for product in products[1:]:
            if product.merchant_id != merchant_id:
                raise ValidationError(
                    f"Product '{product.sku}' does not belong to "
                    f"merchant #{merchant_id}; one order is one merchant"
                )
        merchant = self._merchant_repo.get_by_id(merchant_id)
        if merchant is None:
            raise EntityNotFoundError(f"Merchant #{merchant_id} not found")
        return merchant

    @staticmethod
    def _check_currency(account_currency: str, order_currency: str, label: str) -> None:
        if account_currency != order_currency:
            raise CurrencyMismatchError(
                f"{label} is in {account_currency}, order is in {order_currency}"
            )
