"""Application service: Recharge User use case (top up a prepaid balance)."""

from __future__ import annotations

import logging

from commerce.domain.exceptions import EntityNotFoundError
from commerce.domain.model.value_objects import Money
from commerce.domain.repository.user_repository import UserRepository

logger = logging.getLogger(__name__)


class RechargeUserHandler:

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    def handle(self, user_id: int, amount: str) -> Money:
        """Add ``amount`` (in the account's currency) and return the new balance."""
        user = self._user_repo.get_by_id(user_id)
        if user is None:
            raise EntityNotFoundError(f"User #{user_id} not found")

        user.recharge(Money.of(amount, user.account.currency))
        self._user_repo.save(user)

        logger.info("User #%s recharged %s, balance now %s", user_id, amount, user.balance)
        return user.balance
