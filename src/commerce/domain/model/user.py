"""User aggregate — a customer and the prepaid account they buy with."""

from __future__ import annotations

from dataclasses import dataclass, field

from commerce.domain.exceptions import ValidationError
from commerce.domain.model.account import UserAccount
from commerce.domain.model.entity import (
    ActivationStatus,
    EntityMetadata,
    require_active,
)
from commerce.domain.model.value_objects import DEFAULT_CURRENCY, Money


@dataclass
class User:
    """Aggregate root owning a ``UserAccount``.

    Use ``User.register()`` for new users; ``rehydrate()`` is reserved for
    repositories rebuilding a stored snapshot.
    """

    username: str
    email: str
    phone: str
    account: UserAccount
    status: ActivationStatus = ActivationStatus.ACTIVE
    meta: EntityMetadata = field(default_factory=EntityMetadata)

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def register(
        username: str,
        email: str = "",
        phone: str = "",
        currency: str = DEFAULT_CURRENCY,
    ) -> User:
        if not username or not username.strip():
            raise ValidationError("Username is required")
        return User(
            username=username.strip(),
            email=email.strip(),
            phone=phone.strip(),
            account=UserAccount.empty(currency),
        )

    @staticmethod
    def rehydrate(
        meta: EntityMetadata,
        username: str,
        email: str,
        phone: str,
        account: UserAccount,
        status: ActivationStatus,
    ) -> User:
        return User(
            username=username,
            email=email,
            phone=phone,
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

    # --- Account operations ---------------------------------------------------

    def recharge(self, amount: Money) -> None:
        require_active(self.status, f"User {self.username}")
        self.account = self.account.add_balance(amount)
        self.meta.touch()

    def deduct(self, amount: Money) -> None:
        require_active(self.status, f"User {self.username}")
        self.account = self.account.deduct(amount)
        self.meta.touch()

    def can_afford(self, amount: Money) -> bool:
        return self.account.has_enough_balance(amount)

    # --- Activation -----------------------------------------------------------

    def activate(self) -> None:
        self.status = ActivationStatus.ACTIVE
        self.meta.touch()

    def deactivate(self) -> None:
        self.status = ActivationStatus.INACTIVE
        self.meta.touch()

    def is_active(self) -> bool:
        return self.status is ActivationStatus.ACTIVE
