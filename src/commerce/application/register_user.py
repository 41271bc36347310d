"""Application service: Register User use case."""

from __future__ import annotations

import logging

from commerce.domain.exceptions import DuplicateEntityError
from commerce.domain.model.user import User
from commerce.domain.repository.user_repository import UserRepository

logger = logging.getLogger(__name__)


class RegisterUserHandler:

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    def handle(
        self, username: str, email: str, phone: str, currency: str
    ) -> User:
        """Register a user with an empty prepaid account in ``currency``."""
        user = User.register(username, email=email, phone=phone, currency=currency)

        if self._user_repo.get_by_username(user.username) is not None:
            raise DuplicateEntityError(f"User '{user.username}' already exists")

        self._user_repo.save(user)
        logger.info("Registered user #%s '%s'", user.id, user.username)
        return user
