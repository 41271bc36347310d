"""Application service: Show Account use case (query)."""

from __future__ import annotations

from commerce.application.dto import AccountDTO
from commerce.domain.exceptions import EntityNotFoundError
from commerce.domain.repository.merchant_repository import MerchantRepository
from commerce.domain.repository.user_repository import UserRepository


class ShowAccountHandler:

    def __init__(
        self,
        user_repo: UserRepository,
        merchant_repo: MerchantRepository,
    ) -> None:
        self._user_repo = user_repo
        self._merchant_repo = merchant_repo

    def user(self, user_id: int) -> AccountDTO:
        user = self._user_repo.get_by_id(user_id)
        if user is None:
            raise EntityNotFoundError(f"User #{user_id} not found")
        return AccountDTO.from_user(user)

    def merchant(self, merchant_id: int) -> AccountDTO:
        merchant = self._merchant_repo.get_by_id(merchant_id)
        if merchant is None:
            raise EntityNotFoundError(f"Merchant #{merchant_id} not found")
        return AccountDTO.from_merchant(merchant)
