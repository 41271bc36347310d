"""Merchant aggregate — a seller and its income account."""

from __future__ import annotations

from dataclasses import dataclass, field

from commerce.domain.exceptions import ValidationError
from commerce.domain.model.account import MerchantAccount
from commerce.domain.model.entity import (
    ActivationStatus,
    EntityMetadata,
    require_active,
)
from commerce.domain.model.value_objects import DEFAULT_CURRENCY, Money


@dataclass
class Merchant:

    merchant_name: str
    business_license: str
    contact_email: str
    contact_phone: str
    account: MerchantAccount
    status: ActivationStatus = ActivationStatus.ACTIVE
    meta: EntityMetadata = field(default_factory=EntityMetadata)

    @staticmethod
    def register(
        merchant_name: str,
        business_license: str = "",
        contact_email: str = "",
        contact_phone: str = "",
        currency: str = DEFAULT_CURRENCY,
    ) -> Merchant:
        if not merchant_name or not merchant_name.strip():
            raise ValidationError("Merchant name is required")
        return Merchant(
            merchant_name=merchant_name.strip(),
            business_license=business_license.strip(),
            contact_email=contact_email.strip(),
            contact_phone=contact_phone.strip(),
            account=MerchantAccount.empty(currency),
        )

    @staticmethod
    def rehydrate(
        meta: EntityMetadata,
        merchant_name: str,
        business_license: str,
        contact_email: str,
        contact_phone: str,
        account: MerchantAccount,
        status: ActivationStatus,
    ) -> Merchant:
        return Merchant(
            merchant_name=merchant_name,
            business_license=business_license,
            contact_email=contact_email,
            contact_phone=contact_phone,
            account=account,
            status=status,
            meta=meta,
        )

    @property
    def id(self) -> int | None:
        return self.meta.id

    @property
    def balance(self) -> Money:
        return self.account.balance

    @property
    def total_income(self) -> Money:
        return self.account.total_income

    def receive_income(self, amount: Money) -> None:
        require_active(self.status, f"Merchant {self.merchant_name}")
        self.account = self.account.add_income(amount)
        self.meta.touch()

    def withdraw_income(self, amount: Money) -> None:
        """Take money out of the balance; total income is left as is."""
        require_active(self.status, f"Merchant {self.merchant_name}")
        self.account = self.account.withdraw(amount)
        self.meta.touch()

    def can_withdraw(self, amount: Money) -> bool:
        return self.account.has_enough_balance(amount)

    def activate(self) -> None:
        self.status = ActivationStatus.ACTIVE
        self.meta.touch()

    def deactivate(self) -> None:
        self.status = ActivationStatus.INACTIVE
        self.meta.touch()

    def is_active(self) -> bool:
        return self.status is ActivationStatus.ACTIVE
