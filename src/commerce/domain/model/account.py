"""Account value objects for users and merchants.

Both are immutable: every operation returns a new account and leaves the
original untouched, so a failed operation can never leave a half-applied
balance behind.
"""

from __future__ import annotations

from dataclasses import dataclass

from commerce.domain.exceptions import (
    CurrencyMismatchError,
    InsufficientFundsError,
    InvalidAmountError,
)
from commerce.domain.model.value_objects import DEFAULT_CURRENCY, Money


def _require_positive(amount: Money | None, label: str) -> Money:
    if amount is None or amount.is_zero():
        raise InvalidAmountError(f"{label} amount must be positive")
    return amount


@dataclass(frozen=True)
class UserAccount:
    """Prepaid balance of a user."""

    balance: Money

    def __post_init__(self) -> None:
        if self.balance is None:
            raise InvalidAmountError("Balance cannot be null")

    @staticmethod
    def empty(currency: str = DEFAULT_CURRENCY) -> UserAccount:
        return UserAccount(Money.zero(currency))

    @property
    def currency(self) -> str:
        return self.balance.currency

    def add_balance(self, amount: Money | None) -> UserAccount:
        amount = _require_positive(amount, "Recharge")
        return UserAccount(self.balance + amount)

    def deduct(self, amount: Money | None) -> UserAccount:
        amount = _require_positive(amount, "Deduct")
        if not self.has_enough_balance(amount):
            raise InsufficientFundsError(
                f"Insufficient balance. Required: {amount}, Available: {self.balance}"
            )
        return UserAccount(self.balance - amount)

    def has_enough_balance(self, amount: Money) -> bool:
        return self.balance >= amount


@dataclass(frozen=True)
class MerchantAccount:
    """Merchant balance plus the cumulative income ever received.

    ``total_income`` only grows (via ``add_income``, which grows the balance
    by the same amount); withdrawals reduce the balance alone.
    """

    balance: Money
    total_income: Money

    def __post_init__(self) -> None:
        if self.balance is None:
            raise InvalidAmountError("Balance cannot be null")
        if self.total_income is None:
            raise InvalidAmountError("Total income cannot be null")
        if self.balance.currency != self.total_income.currency:
            raise CurrencyMismatchError(
                "Balance and total income must have the same currency"
            )

    @staticmethod
    def empty(currency: str = DEFAULT_CURRENCY) -> MerchantAccount:
        zero = Money.zero(currency)
        return MerchantAccount(balance=zero, total_income=zero)

    @property
    def currency(self) -> str:
        return self.balance.currency

    def add_income(self, amount: Money | None) -> MerchantAccount:
        amount = _require_positive(amount, "Income")
        return MerchantAccount(
            balance=self.balance + amount,
            total_income=self.total_income + amount,
        )

    def withdraw(self, amount: Money | None) -> MerchantAccount:
        amount = _require_positive(amount, "Withdraw")
        if not self.has_enough_balance(amount):
            raise InsufficientFundsError(
                f"Insufficient funds. Required: {amount}, Available: {self.balance}"
            )
        return MerchantAccount(
            balance=self.balance - amount,
            total_income=self.total_income,
        )

    def has_enough_balance(self, amount: Money) -> bool:
        return self.balance >= amount
